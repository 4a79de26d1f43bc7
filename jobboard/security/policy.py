"""
Authorization policy.

`authorize` is a pure function of (actor, action, resource). It never touches
the database: callers load the resource and pass it in, so the same check can
run again on a freshly locked row right before a write.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional

from jobboard.core.exceptions import AuthError, ForbiddenError, NotFoundError
from jobboard.db.models import Application, Company, Job, UserRole

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Actor:
    """Who is making the request. Anonymous actors have no user_id."""
    user_id: Optional[int] = None
    role: Optional[UserRole] = None
    company_id: Optional[int] = None
    email: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    @classmethod
    def anonymous(cls) -> "Actor":
        return cls()


class Action(str, enum.Enum):
    VIEW_SELF = "view_self"
    CREATE_JOB = "create_job"
    UPDATE_JOB = "update_job"
    DELETE_JOB = "delete_job"
    UPDATE_COMPANY_PROFILE = "update_company_profile"
    VIEW_COMPANY_STATS = "view_company_stats"
    APPLY = "apply"
    LIST_OWN_APPLICATIONS = "list_own_applications"
    LIST_COMPANY_APPLICATIONS = "list_company_applications"
    SET_APPLICATION_STATUS = "set_application_status"
    VIEW_RESUME = "view_resume"


class DenyReason(str, enum.Enum):
    UNAUTHENTICATED = "unauthenticated"
    WRONG_ROLE = "wrong_role"
    NOT_OWNER = "not_owner"


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: Optional[DenyReason] = None

    def __bool__(self) -> bool:
        return self.allowed


ALLOWED = Decision(True)

_ANY_ROLE = frozenset(UserRole)
_COMPANY = frozenset({UserRole.COMPANY})
_APPLICANT = frozenset({UserRole.APPLICANT})

REQUIRED_ROLES: Dict[Action, FrozenSet[UserRole]] = {
    Action.VIEW_SELF: _ANY_ROLE,
    Action.CREATE_JOB: _COMPANY,
    Action.UPDATE_JOB: _COMPANY,
    Action.DELETE_JOB: _COMPANY,
    Action.UPDATE_COMPANY_PROFILE: _COMPANY,
    Action.VIEW_COMPANY_STATS: _COMPANY,
    Action.APPLY: _APPLICANT,
    Action.LIST_OWN_APPLICATIONS: _APPLICANT,
    Action.LIST_COMPANY_APPLICATIONS: _COMPANY,
    Action.SET_APPLICATION_STATUS: _COMPANY,
    Action.VIEW_RESUME: frozenset({UserRole.APPLICANT, UserRole.COMPANY}),
}


def owning_company_id(resource) -> Optional[int]:
    """Returns the id of the company that owns a Job, Company or Application."""
    if isinstance(resource, Company):
        return resource.id
    if isinstance(resource, Job):
        return resource.company_id
    if isinstance(resource, Application):
        return resource.job.company_id if resource.job is not None else None
    raise TypeError(f"No ownership rule for {type(resource).__name__}")


def _owns(actor: Actor, action: Action, resource) -> bool:
    if action is Action.VIEW_RESUME:
        # The applicant who filed it, or the company that posted the job.
        if actor.role is UserRole.APPLICANT:
            return resource.applicant_id == actor.user_id
        return actor.company_id is not None and owning_company_id(resource) == actor.company_id
    return actor.company_id is not None and owning_company_id(resource) == actor.company_id


def authorize(actor: Actor, action: Action, resource=None) -> Decision:
    """
    Decides whether `actor` may perform `action` on `resource`.

    Checks run in order: authentication, role, then ownership when a
    resource is given.
    """
    if not actor.is_authenticated:
        return Decision(False, DenyReason.UNAUTHENTICATED)
    if actor.role not in REQUIRED_ROLES[action]:
        return Decision(False, DenyReason.WRONG_ROLE)
    if resource is not None and not _owns(actor, action, resource):
        return Decision(False, DenyReason.NOT_OWNER)
    return ALLOWED


def enforce(
    decision: Decision,
    actor: Actor | None = None,
    action: Action | None = None,
    not_found_message: str = "Not found",
) -> None:
    """Raises the error matching a denied decision. Not-owned resources look missing."""
    if decision.allowed:
        return
    action_name = action.value if action is not None else "?"
    who = "anonymous"
    if actor is not None and actor.is_authenticated:
        who = f"user {actor.user_id} ({actor.email})"
    logger.warning(f"POLICY: Denied '{action_name}' for {who}: {decision.reason.value}")
    if decision.reason is DenyReason.UNAUTHENTICATED:
        raise AuthError("Authentication required")
    if decision.reason is DenyReason.WRONG_ROLE:
        raise ForbiddenError("Insufficient permissions")
    raise NotFoundError(not_found_message)


def require(actor: Actor, action: Action, resource=None, not_found_message: str = "Not found") -> None:
    """authorize() followed by enforce()."""
    enforce(authorize(actor, action, resource), actor, action, not_found_message)
