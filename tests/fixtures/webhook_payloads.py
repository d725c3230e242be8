"""Back in Stock webhook payloads"""

FULL_PAYLOAD = {
    "notification_id": 98765,
    "product": {
        "product_title": "Cappotto Wool Blend - Nero",
        "sku": "CWB2024-NERO-M",
        "variant_id": "12345",
        "variant_title": "M / Nero",
        "option1": "M",
        "option2": "Nero",
        "price": 289.00,
    },
    "customer": {
        "email": "anna@example.com",
        "first_name": "Anna",
        "last_name": "Bianchi",
    },
    "quantity_required": 2,
    "created_at": "2024-03-01T10:00:00Z",
}

MINIMAL_PAYLOAD = {
    "notification_id": 1,
    "product": {"product_title": "Sciarpa Rossa"},
}
