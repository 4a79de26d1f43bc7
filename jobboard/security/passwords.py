# jobboard/security/passwords.py

import bcrypt

from jobboard.core.exceptions import ValidationError

# bcrypt only looks at the first 72 bytes of its input.
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    """Hashes a password with a fresh bcrypt salt."""
    encoded = password.encode('utf-8')
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes long")
    return bcrypt.hashpw(encoded, bcrypt.gensalt()).decode('utf-8')


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    """Checks a password against a stored hash. Any malformed hash counts as a mismatch."""
    if not hashed_password:
        return False
    try:
        return bcrypt.checkpw(plain_password.encode('utf-8'), hashed_password.encode('utf-8'))
    except (ValueError, TypeError):
        return False
