# jobboard/security/dependencies.py

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session, joinedload

from jobboard.core.exceptions import AuthError
from jobboard.db.database import get_db
from jobboard.db.models import User
from jobboard.security.auth import verify_token, TokenError, TokenErrorReason
from jobboard.security.policy import Actor

logger = logging.getLogger(__name__)

# auto_error=False: public endpoints accept requests without a token and the
# policy decides whether anonymity is enough.
bearer_scheme = HTTPBearer(auto_error=False)


class AuthContext:
    """
    Request-scoped session: holds the bearer credential of one request and
    resolves it to an Actor on first use.
    """

    def __init__(self, db: Session, credential: Optional[str] = None):
        self._db = db
        self._credential = credential
        self._actor: Optional[Actor] = None

    def set_credential(self, token: str) -> None:
        self._credential = token
        self._actor = None

    def clear_credential(self) -> None:
        self._credential = None
        self._actor = None

    def get_actor(self) -> Actor:
        """Returns the current actor; anonymous when no credential is held."""
        if self._actor is None:
            self._actor = self._resolve()
        return self._actor

    def _resolve(self) -> Actor:
        if not self._credential:
            return Actor.anonymous()

        try:
            payload = verify_token(self._credential)
        except TokenError as e:
            if e.reason is TokenErrorReason.EXPIRED:
                raise AuthError("Token expired")
            raise AuthError("Invalid token")

        try:
            user_id = int(payload["sub"])
        except (KeyError, TypeError, ValueError):
            raise AuthError("Invalid token")

        # Role and company come from the stored user, not from the token claims.
        user = (
            self._db.query(User)
            .options(joinedload(User.company))
            .filter(User.id == user_id)
            .first()
        )
        if user is None:
            logger.warning(f"AUTH: Token for missing user {user_id} rejected.")
            raise AuthError("Invalid token")

        return Actor(
            user_id=user.id,
            role=user.role,
            company_id=user.company.id if user.company is not None else None,
            email=user.email,
        )


def get_auth_context(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> AuthContext:
    context = AuthContext(db)
    if credentials is not None:
        context.set_credential(credentials.credentials)
    return context


def get_current_actor(context: AuthContext = Depends(get_auth_context)) -> Actor:
    """Resolves the request's actor. Raises AuthError only for a bad token."""
    return context.get_actor()
