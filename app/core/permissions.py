"""Capability predicates for per-request authorization (admin role, resource ownership)."""

from collections.abc import Callable

from app.core.errors import AuthorizationError
from app.core.security import ROLE_ADMIN
from app.schemas.auth import CurrentUser

# A capability decides whether the caller may act on the target user id.
Capability = Callable[[CurrentUser, str | None], bool]


def is_admin(user: CurrentUser, target_id: str | None = None) -> bool:
    return user.role == ROLE_ADMIN


def is_owner(user: CurrentUser, target_id: str | None = None) -> bool:
    return target_id is not None and user.id == target_id


def authorize(user: CurrentUser, target_id: str | None, *capabilities: Capability) -> None:
    """Raise AuthorizationError unless at least one capability holds for this request."""
    if not any(check(user, target_id) for check in capabilities):
        raise AuthorizationError("You do not have permission to perform this action.")
