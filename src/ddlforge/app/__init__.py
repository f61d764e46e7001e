"""
App Module
==========

FastAPI application configuration and error mapping.
"""

from .config import VERSION, APP_NAME, DEFAULT_DIALECT, LOG_LEVEL
from .exceptions import EXCEPTION_MAP, get_http_exception, global_exception_handler

__all__ = [
    "VERSION",
    "APP_NAME",
    "DEFAULT_DIALECT",
    "LOG_LEVEL",
    "EXCEPTION_MAP",
    "get_http_exception",
    "global_exception_handler",
]
