"""Password hashing."""

import base64
import secrets

from cryptography.exceptions import InvalidKey
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from storefront.core.config import settings

HASH_SCHEME = "pbkdf2_sha256"
SALT_BYTES = 16
KEY_LENGTH = 32


def _kdf(salt: bytes, iterations: int) -> PBKDF2HMAC:
    return PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=KEY_LENGTH,
        salt=salt,
        iterations=iterations,
    )


def _b64encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).decode()


def hash_password(password: str) -> str:
    """Hash a password with a random salt.

    Returns ``pbkdf2_sha256$<iterations>$<salt>$<key>``; the iteration count is
    stored so the setting can be raised without invalidating existing hashes.
    """
    salt = secrets.token_bytes(SALT_BYTES)
    iterations = settings.password_hash_iterations
    key = _kdf(salt, iterations).derive(password.encode())
    return f"{HASH_SCHEME}${iterations}${_b64encode(salt)}${_b64encode(key)}"


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a hash produced by ``hash_password``."""
    try:
        scheme, iterations, salt, key = password_hash.split("$")
    except ValueError:
        return False
    if scheme != HASH_SCHEME:
        return False

    try:
        kdf = _kdf(base64.urlsafe_b64decode(salt), int(iterations))
        expected = base64.urlsafe_b64decode(key)
    except ValueError:
        return False

    try:
        kdf.verify(password.encode(), expected)
    except InvalidKey:
        return False
    return True
