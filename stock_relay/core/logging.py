"""Logging setup

One named logger for the whole service. Messages carry a ``[TAG]`` prefix
(``[API]``, ``[WEBHOOK]``, ``[CATALOG]``, ``[MATCHER]``, ``[FEED]``,
``[HTTP_CLIENT]``) so a component can be grepped out of the stream.
"""
import logging
import sys
import os
import re
from stock_relay.core.config import settings

LOGGER_NAME = "stock_relay"
HANDLER_NAME = "stock_relay.console"

IS_PRODUCTION = os.getenv("ENVIRONMENT", "development") == "production"

# production: compact single line for the log collector
PRODUCTION_FORMAT = "%(asctime)s %(levelname)s stock-relay %(message)s"
DEVELOPMENT_FORMAT = "%(asctime)s %(levelname)-7s %(module)s:%(lineno)d %(message)s"


def resolve_level(name: str, production: bool = IS_PRODUCTION) -> int:
    """Map a level name to a logging level; DEBUG is capped to INFO in production"""
    level = logging.getLevelName(name.upper())
    if not isinstance(level, int):
        level = logging.INFO
    if production and level < logging.INFO:
        level = logging.INFO
    return level


def setup_logging(level_name: str = settings.log_level, production: bool = IS_PRODUCTION) -> logging.Logger:
    """Attach the console handler to the service logger (idempotent)"""
    service_logger = logging.getLogger(LOGGER_NAME)
    level = resolve_level(level_name, production)
    service_logger.setLevel(level)

    handler = next((h for h in service_logger.handlers if h.get_name() == HANDLER_NAME), None)
    if handler is None:
        handler = logging.StreamHandler(sys.stdout)
        handler.set_name(HANDLER_NAME)
        service_logger.addHandler(handler)

    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(
        fmt=PRODUCTION_FORMAT if production else DEVELOPMENT_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    return service_logger


logger = setup_logging()


_SECRET_PARAM = re.compile(r"(?i)\b(password|token|api_key|secret|access_token)=([^&\s]+)")


def sanitize_for_log(value: str, max_length: int = 100) -> str:
    """Return a log-safe version of a string

    Args:
        value: string to log (URLs with credentials in the query included)
        max_length: maximum length kept

    Returns:
        masked / truncated string
    """
    if not value:
        return "[empty]"

    result = _SECRET_PARAM.sub(r"\1=***", value)

    if len(result) > max_length:
        result = result[:max_length] + "..."

    return result
