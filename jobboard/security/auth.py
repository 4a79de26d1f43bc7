# jobboard/security/auth.py

import enum
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from jose import jwt, JWTError
from jose.exceptions import ExpiredSignatureError

from jobboard.core.config import settings

logger = logging.getLogger(__name__)


class TokenErrorReason(str, enum.Enum):
    INVALID = "invalid"
    EXPIRED = "expired"
    MISSING_KEY = "missing_key"


class TokenError(Exception):
    """Raised when a token cannot be issued or does not verify."""

    def __init__(self, reason: TokenErrorReason):
        self.reason = reason
        super().__init__(f"Token error: {reason.value}")


def _signing_key() -> str:
    # Read on every call so the key stays a single process-wide setting.
    key = settings.SECRET_KEY_FOR_AUTH
    if not key:
        logger.error("AUTH: SECRET_KEY_FOR_AUTH is not configured.")
        raise TokenError(TokenErrorReason.MISSING_KEY)
    return key


def ensure_signing_key() -> None:
    """Fails with MISSING_KEY before any work that must end in a token."""
    _signing_key()


def issue_token(
    user_id: int,
    role: str,
    email: str,
    expires_delta: timedelta | None = None,
) -> str:
    """Creates a signed JWT asserting the user's id and role."""
    key = _signing_key()
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    expire = datetime.now(timezone.utc) + expires_delta

    # 'sub' must be a string for python-jose to accept it on decode
    to_encode = {
        "sub": str(user_id),
        "role": role,
        "email": email,
        "exp": expire,
    }
    return jwt.encode(to_encode, key, algorithm=settings.ALGORITHM)


def verify_token(token: str) -> Dict[str, Any]:
    """
    Verifies a JWT and returns its payload.

    Raises:
        TokenError: with reason EXPIRED, INVALID or MISSING_KEY.
    """
    key = _signing_key()
    try:
        payload = jwt.decode(token, key, algorithms=[settings.ALGORITHM])
    except ExpiredSignatureError:
        raise TokenError(TokenErrorReason.EXPIRED)
    except JWTError:
        raise TokenError(TokenErrorReason.INVALID)

    if not payload.get("sub"):
        raise TokenError(TokenErrorReason.INVALID)
    return payload
