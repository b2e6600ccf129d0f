# core/permissions.py

"""
Who may reset whose password.

Rules, first match wins:

    1. developer / admin     → anyone except another developer / admin
                               (any company)
    2. company_admin / owner → users of their own company ranked below
                               company_admin
    3. everyone else         → nobody
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from core.roles import Role, rank_of, is_platform_admin, has_company_admin_authority
from models.user import UserRecord


class DenyReason(str, Enum):
    PEER_ADMIN = "peer_admin"
    CROSS_TENANT = "cross_tenant"
    INSUFFICIENT_PRIVILEGE = "insufficient_privilege"
    NOT_PERMITTED = "not_permitted"


@dataclass(frozen=True)
class AuthorizationDecision:
    allowed: bool
    reason: Optional[DenyReason] = None

    @classmethod
    def allow(cls) -> "AuthorizationDecision":
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: DenyReason) -> "AuthorizationDecision":
        return cls(allowed=False, reason=reason)


# Ceiling for company-scoped resets. Fixed at the company_admin tier,
# not the actor's rank, so owners and company admins share one ceiling.
COMPANY_RESET_CEILING = rank_of(Role.COMPANY_ADMIN)


def decide_password_reset(actor: UserRecord, target: UserRecord) -> AuthorizationDecision:
    # 1. Platform admins
    if is_platform_admin(actor.role):
        if is_platform_admin(target.role):
            return AuthorizationDecision.deny(DenyReason.PEER_ADMIN)
        return AuthorizationDecision.allow()

    # 2. Company admins and owners
    if has_company_admin_authority(actor):
        if target.company_code != actor.company_code:
            return AuthorizationDecision.deny(DenyReason.CROSS_TENANT)
        if rank_of(target.role) >= COMPANY_RESET_CEILING:
            return AuthorizationDecision.deny(DenyReason.INSUFFICIENT_PRIVILEGE)
        return AuthorizationDecision.allow()

    # 3. Everyone else
    return AuthorizationDecision.deny(DenyReason.NOT_PERMITTED)
