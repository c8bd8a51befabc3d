"""
Password hashing.

Salted PBKDF2-HMAC-SHA256 from the standard library. Stored format:
``pbkdf2_sha256$<iterations>$<salt hex>$<hash hex>``.
"""

import hashlib
import secrets

ALGORITHM = "pbkdf2_sha256"
ITERATIONS = 260_000
SALT_BYTES = 16


def hash_password(password: str, iterations: int = ITERATIONS) -> str:
    """Return a salted hash of a password in the stored format."""
    salt = secrets.token_bytes(SALT_BYTES)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return f"{ALGORITHM}${iterations}${salt.hex()}${digest.hex()}"
