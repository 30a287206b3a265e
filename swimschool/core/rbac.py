# swimschool/core/rbac.py
from fastapi import Depends

from swimschool.api.deps import get_current_user
from swimschool.core.errors import PermissionDenied
from swimschool.models.user import UserRole, UserProfile

ROLE_ADMIN = UserRole.ADMIN.value
ROLE_INSTRUCTOR = UserRole.INSTRUCTOR.value
ROLE_STUDENT = UserRole.STUDENT.value

def require_roles(*roles: str):
    allowed = set(roles)
    def dep(user: UserProfile = Depends(get_current_user)) -> UserProfile:
        if user.role not in allowed:
            raise PermissionDenied(
                "Your role is not allowed to perform this action.",
                {"role": user.role, "allowed": sorted(allowed)},
            )
        return user
    return dep

def ensure_role(user: UserProfile, *roles: str) -> None:
    """Mesma checagem de require_roles, para uso dentro dos serviços."""
    if user.role not in roles:
        raise PermissionDenied(
            "Your role is not allowed to perform this action.",
            {"role": user.role, "allowed": sorted(roles)},
        )
