"""
Huawei Dongle Client

An asynchronous client for the web API of Huawei LTE/5G USB dongles and mobile
routers (HiLink), handling CSRF tokens, session cookies, login and retries.
"""

__version__ = "1.0.0"

from .client import DongleClient
from .core.config_loader import ConfigLoader
from .core.exceptions import (
    AccountLockedError,
    ApiError,
    ConfigurationError,
    DongleError,
    ErrorKind,
    LoginRequiredError,
    SessionError,
    TransportError,
)
from .core.models import DongleConfig

__all__ = [
    # Exceptions
    "ErrorKind",
    "DongleError",
    "TransportError",
    "LoginRequiredError",
    "AccountLockedError",
    "ApiError",
    "SessionError",
    "ConfigurationError",
    # Core classes
    "DongleConfig",
    "DongleClient",
    "ConfigLoader",
]
