"""Capability checks against an explicit user context."""

from canteiro.core.entities.user import UserContext
from canteiro.core.exceptions import PermissionDeniedError


def can_access(user: UserContext | None, capability: str) -> bool:
    """Admins reach everything; other users need the capability flag set to True."""
    if user is None:
        return False
    if user.is_admin:
        return True
    return user.permissions.get(capability) is True


def require_capability(user: UserContext | None, capability: str) -> UserContext:
    """Return the user if allowed, otherwise raise PermissionDeniedError."""
    if not can_access(user, capability):
        raise PermissionDeniedError(user.user_id if user else None, capability)
    return user  # type: ignore[return-value]
