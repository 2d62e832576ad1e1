"""
Logger factory for the Freeproduct service.
"""
import logging
import atexit

from freeproduct.logging.config import LoggingConfig
from freeproduct.logging.handlers import get_app_handler
from freeproduct.logging.filters import RequestContextFilter, CartContextFilter


def get_app_logger(name: str = 'freeproduct'):
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    handler = get_app_handler(name.replace('.', '_'))
    # the Firehose handler is shared between loggers
    if not handler.filters:
        handler.addFilter(RequestContextFilter())
        handler.addFilter(CartContextFilter())
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False
    return logger


def initialize_logging():
    is_valid, message = LoggingConfig.is_valid_config()
    if not is_valid:
        print(f"Warning: {message}")
    atexit.register(logging.shutdown)
    print("Logging system initialized (freeproduct)")
