import hmac
import secrets

import bcrypt

# bcrypt truncates at 72 *bytes* and recent builds raise past it.
_BCRYPT_MAX_BYTES = 72
BCRYPT_ROUNDS = 10


def hash_password(password: str) -> str:
    """
    Hash a password with bcrypt.

    The 72-byte limit is enforced explicitly so long passphrases fail loudly
    instead of being silently truncated.
    """
    if not password:
        raise ValueError("Password is required")

    pw_bytes = password.encode("utf-8")
    if len(pw_bytes) > _BCRYPT_MAX_BYTES:
        raise ValueError("Password must be 72 bytes or less")

    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    if not password or not hashed:
        return False
    pw_bytes = password.encode("utf-8")
    if len(pw_bytes) > _BCRYPT_MAX_BYTES:
        return False
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except ValueError:
        # Malformed hash in the DB
        return False


def generate_verification_code() -> str:
    """Six-digit numeric one-time code (100000-999999)."""
    return str(100000 + secrets.randbelow(900000))


def codes_match(submitted: str, stored: str) -> bool:
    # Exact string comparison, no trimming or normalisation.
    return hmac.compare_digest(submitted.encode("utf-8"), stored.encode("utf-8"))
