"""
Password hashing for stored user credentials.

Hashing and verification go through passlib's ``CryptContext``.  Hashes use
the modular crypt format ``$pbkdf2-sha256$<rounds>$<salt>$<checksum>``, so
the round count can be raised later without invalidating existing rows.
"""
from passlib.context import CryptContext
from passlib.hash import pbkdf2_sha256

from blogful.config import settings

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str, iterations: int | None = None) -> str:
    """Return a salted PBKDF2-SHA256 hash string for *password*."""
    rounds = iterations or settings.PASSWORD_HASH_ITERATIONS
    return pbkdf2_sha256.using(rounds=rounds).hash(password)


def verify_password(password: str, encoded: str | None) -> bool:
    """Check *password* against a hash produced by :func:`hash_password`."""
    if not encoded or pwd_context.identify(encoded) is None:
        return False
    try:
        return pwd_context.verify(password, encoded)
    except ValueError:
        return False
