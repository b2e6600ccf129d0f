# core/roles.py

from enum import Enum
from typing import Any, Optional, Union


# ============================================
# ROLES
# ============================================
class Role(str, Enum):
    DEVELOPER = "developer"
    ADMIN = "admin"
    COMPANY_ADMIN = "company_admin"
    MANAGER = "manager"
    DRIVER = "driver"
    CLIENT = "client"


# ============================================
# CENTRALIZED ROLE → RANK MAP
# Higher rank = more privilege. Ranks are unique.
# ============================================
ROLE_HIERARCHY = {

    # =====================================================
    # PLATFORM: app developers and app admins
    # =====================================================
    Role.DEVELOPER.value: 100,
    Role.ADMIN.value: 90,

    # =====================================================
    # COMPANY: owner / company admin of a waste company
    # =====================================================
    Role.COMPANY_ADMIN.value: 80,

    # =====================================================
    # STAFF
    # =====================================================
    Role.MANAGER.value: 70,
    Role.DRIVER.value: 60,

    # =====================================================
    # CLIENT: requests pickups
    # =====================================================
    Role.CLIENT.value: 50,
}

UNKNOWN_RANK = 0

PLATFORM_ADMIN_ROLES = frozenset({Role.DEVELOPER.value, Role.ADMIN.value})

# Roles a user can pick on the registration form
SELF_REGISTRATION_ROLES = frozenset({
    Role.CLIENT.value,
    Role.DRIVER.value,
    Role.MANAGER.value,
    Role.COMPANY_ADMIN.value,
})


def _role_value(role: Union[Role, str, None]) -> Optional[str]:
    if isinstance(role, Role):
        return role.value
    return role


def rank_of(role: Union[Role, str, None]) -> int:
    """Rank of a role. Unknown or missing roles rank 0."""
    return ROLE_HIERARCHY.get(_role_value(role), UNKNOWN_RANK)


def is_platform_admin(role: Union[Role, str, None]) -> bool:
    """developer or admin."""
    return _role_value(role) in PLATFORM_ADMIN_ROLES


def has_company_admin_authority(user: Any) -> bool:
    """
    True for company admins and for company owners.
    An owner may not hold the company_admin role itself, so both are checked.
    """
    role = _role_value(getattr(user, "role", None))
    return role == Role.COMPANY_ADMIN.value or getattr(user, "is_owner", False) is True
