"""Password hashing using bcrypt."""

import bcrypt

from taskhub.config import settings
from taskhub.errors import ValidationFailed

# bcrypt only looks at the first 72 bytes
MAX_PASSWORD_BYTES = 72

def hash_password(password: str) -> str:
    """Return a salted bcrypt hash of ``password``.

    Raises:
        ValidationFailed: if the password is empty or longer than bcrypt accepts.
    """
    raw = password.encode("utf-8")
    if not raw:
        raise ValidationFailed("Password is required")
    if len(raw) > MAX_PASSWORD_BYTES:
        raise ValidationFailed(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")

    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(raw, salt).decode("utf-8")

def verify_password(password: str, password_hash: str) -> bool:
    """Check ``password`` against a stored hash. Never raises on bad input."""
    if not password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # malformed stored hash or over-long password
        return False
