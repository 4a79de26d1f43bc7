# jobboard/services/users.py

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from jobboard.core.exceptions import AuthError, DuplicateEmailError, NotFoundError, ValidationError
from jobboard.db.database import commit_or_rollback
from jobboard.db.models import Company, User, UserRole
from jobboard.schemas.user import UserCreate
from jobboard.security.auth import ensure_signing_key
from jobboard.security.passwords import hash_password, verify_password

logger = logging.getLogger(__name__)

SELF_REGISTERABLE_ROLES = {UserRole.APPLICANT, UserRole.COMPANY}


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return (
        db.query(User)
        .options(joinedload(User.company))
        .filter(User.email == email)
        .first()
    )


def get_user_with_company(db: Session, user_id: int) -> User:
    user = (
        db.query(User)
        .options(joinedload(User.company))
        .filter(User.id == user_id)
        .first()
    )
    if user is None:
        raise NotFoundError("User not found")
    return user


def register_user(db: Session, data: UserCreate) -> User:
    """
    Creates a user and, for COMPANY accounts that supply a company name, the
    company profile in the same transaction.
    """
    if data.role not in SELF_REGISTERABLE_ROLES:
        raise ValidationError("Invalid account type")
    # A token is issued right after the commit; fail before writing if it cannot be.
    ensure_signing_key()

    # Fast path; the unique index on users.email settles concurrent signups.
    if get_user_by_email(db, data.email) is not None:
        raise DuplicateEmailError()

    user = User(
        name=data.name,
        email=data.email,
        password_hash=hash_password(data.password),
        role=data.role,
    )
    db.add(user)

    if data.role is UserRole.COMPANY and data.company_name:
        user.company = Company(
            name=data.company_name,
            description=data.company_description or "",
            website=data.website or None,
        )

    try:
        commit_or_rollback(db, "registering a user")
    except IntegrityError:
        logger.info("AUTH: Concurrent registration for an existing email rejected.")
        raise DuplicateEmailError()

    db.refresh(user)
    logger.info(f"AUTH: Registered user {user.id} with role {user.role.value}.")
    return user


def authenticate_user(db: Session, email: str, password: str, role: Optional[UserRole] = None) -> User:
    """
    Returns the user for a correct email/password (and role, when given).
    Every failure raises the same AuthError.
    """
    user = get_user_by_email(db, email)
    password_ok = verify_password(password, user.password_hash if user else None)
    if user is None or not password_ok or (role is not None and user.role is not role):
        logger.warning("AUTH: Failed login attempt.")
        raise AuthError("Invalid credentials")
    return user
