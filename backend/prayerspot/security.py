"""
PrayerSpot Backend — Password Hashing
======================================

What:  Salted one-way password hashes and constant-time verification.
How:   PBKDF2-HMAC-SHA256 with a fresh 16-byte random salt per password.

Stored format:
    pbkdf2_sha256$<iterations>$<salt hex>$<digest hex>

The iteration count travels with the hash, so raising
PASSWORD_HASH_ITERATIONS later does not invalidate existing accounts.
"""

import hashlib
import hmac
import os
from typing import Optional

from prayerspot.config import settings

ALGORITHM = "pbkdf2_sha256"
SALT_BYTES = 16


def hash_password(password: str, iterations: Optional[int] = None) -> str:
    """Hash a plain password for storage."""
    iterations = iterations or settings.password_hash_iterations
    salt = os.urandom(SALT_BYTES)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return f"{ALGORITHM}${iterations}${salt.hex()}${digest.hex()}"


def verify_password(plain_password: str, stored_hash: str) -> bool:
    """
    Check a plain password against a stored hash.

    Returns False for a wrong password and for a stored value that is not in
    the expected format; the digest comparison is constant-time.
    """
    try:
        algorithm, iterations, salt_hex, digest_hex = stored_hash.split("$", 3)
        if algorithm != ALGORITHM:
            return False
        salt = bytes.fromhex(salt_hex)
        expected = bytes.fromhex(digest_hex)
        rounds = int(iterations)
    except ValueError:
        return False
    if rounds < 1:
        return False

    candidate = hashlib.pbkdf2_hmac("sha256", plain_password.encode("utf-8"), salt, rounds)
    return hmac.compare_digest(candidate, expected)
