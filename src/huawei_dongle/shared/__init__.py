"""
Huawei Dongle Client - Shared Utilities

This package contains constants and error utilities used across the client and CLI.
"""

from . import constants
from .error_sanitizer import ErrorMessageSanitizer, log_error_safely

__all__ = [
    "ErrorMessageSanitizer",
    "constants",
    "log_error_safely",
]
