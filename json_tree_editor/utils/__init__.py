"""Utility functions for the JSON Tree Editor."""

from .error_handler import ErrorHandler
from .logging_config import JSONFormatter, setup_logging

__all__ = [
    "ErrorHandler",
    "JSONFormatter",
    "setup_logging",
]
