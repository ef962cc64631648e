"""
Huawei Dongle Client - Password Encoding

The login endpoint expects the password encoded according to the
``password_type`` reported by ``/api/user/state-login``.
"""

import base64
import hashlib
from enum import Enum


class PasswordEncoding(str, Enum):
    """Password encodings understood by the device."""

    BASE64 = "base64"
    SHA256 = "sha256"

    @classmethod
    def from_password_type(cls, password_type: str) -> "PasswordEncoding":
        """Map the device's ``password_type`` code; unknown codes use SHA-256."""
        if password_type.strip() in ("0", "3"):
            return cls.BASE64
        return cls.SHA256


def encode_password(password: str, password_type: str) -> str:
    """Encode ``password`` the way the device asks for it.

    Args:
        password: Plain text password
        password_type: ``password_type`` from the login state ("0", "3" or "4")

    Returns:
        Base64 text for types "0"/"3", lowercase SHA-256 hex digest otherwise
    """
    if PasswordEncoding.from_password_type(password_type) is PasswordEncoding.BASE64:
        return base64.b64encode(password.encode()).decode()
    return hashlib.sha256(password.encode()).hexdigest()
