# core/errors.py

from enum import Enum
from typing import Optional


# =================================================================
#  ERROR KINDS
# =================================================================
# Every failure a service can report. Each kind (and each deny
# reason of core.permissions) has its own message in core.messages.
# =================================================================

class ErrorKind(str, Enum):
    # Authentication
    UNAUTHENTICATED = "unauthenticated"
    INVALID_TOKEN = "invalid_token"
    ACTOR_NOT_FOUND = "actor_not_found"

    # Password reset
    INVALID_INPUT = "invalid_input"
    WEAK_PASSWORD = "weak_password"
    TARGET_NOT_FOUND = "target_not_found"
    FORBIDDEN = "forbidden"
    TARGET_NOT_PROVISIONED = "target_not_provisioned"
    CREDENTIAL_STORE_ERROR = "credential_store_error"

    # Registration
    MISSING_FIELDS = "missing_fields"
    INVALID_ROLE = "invalid_role"
    PHONE_TAKEN = "phone_taken"
    CLIENT_COMPANY_CODE_REQUIRED = "client_company_code_required"
    DRIVER_COMPANY_CODE_REQUIRED = "driver_company_code_required"
    COMPANY_CODE_REQUIRED = "company_code_required"
    MASTER_CODE_REQUIRED = "master_code_required"
    INVALID_COMPANY_CODE = "invalid_company_code"
    INVALID_MASTER_CODE = "invalid_master_code"
    COMPANY_CREATE_FAILED = "company_create_failed"
    ACCOUNT_CREATE_FAILED = "account_create_failed"
    PROFILE_CREATE_FAILED = "profile_create_failed"

    # Migration
    MIGRATION_FAILED = "migration_failed"

    # Generic
    RATE_LIMITED = "rate_limited"
    INTERNAL = "internal"


class ServiceError(Exception):
    """
    Domain failure raised by the services.

    Attributes:
        kind:   ErrorKind, selects the user-facing message
        detail: short diagnostic from a collaborator (optional)
        reason: policy deny reason for ErrorKind.FORBIDDEN
        params: extra values interpolated into the message
    """

    def __init__(
        self,
        kind: ErrorKind,
        detail: Optional[str] = None,
        reason: Optional[Enum] = None,
        **params,
    ):
        self.kind = kind
        self.detail = detail
        self.reason = reason
        self.params = params
        super().__init__(f"{kind.value}: {detail}" if detail else kind.value)


class CredentialStoreFailure(Exception):
    """The external credential store rejected a write."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)


# =================================================================
#  SUPABASE ERROR DETAILS
# =================================================================

def extract_supabase_error(error: Exception) -> str:
    """
    Safely extract readable details from Supabase Python client errors.
    Handles:
      • PostgREST errors
      • GoTrue (Auth) errors
      • Generic Python exceptions
    """

    # Case 1: Supabase Auth / GoTrue errors
    if hasattr(error, "message"):
        try:
            return str(error.message)
        except Exception:
            pass

    # Case 2: Supabase errors with args (common)
    if hasattr(error, "args") and error.args:
        try:
            return str(error.args[0])
        except Exception:
            pass

    # Case 3: Plain string fallback
    try:
        return str(error)
    except Exception:
        return "Unknown Supabase error"


def short_detail(detail: Optional[str], limit: int = 120) -> str:
    """Collapse a collaborator detail to one short line."""
    if not detail:
        return ""
    line = " ".join(str(detail).split())
    if len(line) > limit:
        return line[: limit - 3].rstrip() + "..."
    return line
