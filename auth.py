import hashlib
import hmac
import logging
import secrets
from dataclasses import dataclass
from typing import Optional

import config

logger = logging.getLogger(__name__)

# Simple PBKDF2 password hashing (bcrypt-equivalent strength)
PBKDF_ITERATIONS = 200_000

INVALID_CREDENTIALS = "Invalid email or password"


def hash_password(password: str, salt: Optional[bytes] = None) -> str:
    if salt is None:
        salt = secrets.token_bytes(16)
    dk = hashlib.pbkdf2_hmac('sha256', password.encode('utf-8'), salt, PBKDF_ITERATIONS)
    return salt.hex() + ":" + dk.hex()


def verify_password(password: str, stored: str) -> bool:
    try:
        salt_hex, dk_hex = stored.split(":")
        salt = bytes.fromhex(salt_hex)
        expected = bytes.fromhex(dk_hex)
    except ValueError:
        logger.warning("Stored admin password hash is malformed")
        return False
    test = hashlib.pbkdf2_hmac('sha256', password.encode('utf-8'), salt, PBKDF_ITERATIONS)
    return hmac.compare_digest(expected, test)


@dataclass(frozen=True)
class AdminCredentials:
    """The single admin account allowed into the content panel."""

    email: str
    password_hash: str
    name: str = config.ADMIN_NAME

    @classmethod
    def from_plain(cls, email: str, password: str, name: str = config.ADMIN_NAME) -> "AdminCredentials":
        return cls(email=email, password_hash=hash_password(password), name=name)

    def check(self, email: str, password: str) -> bool:
        # Same answer for unknown email and wrong password
        if not hmac.compare_digest(email.encode('utf-8'), self.email.encode('utf-8')):
            return False
        return verify_password(password, self.password_hash)


def default_credentials() -> AdminCredentials:
    return AdminCredentials.from_plain(config.ADMIN_EMAIL, config.ADMIN_PASSWORD)
