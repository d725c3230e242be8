"""Core infrastructure: settings, logging, exceptions, security."""
