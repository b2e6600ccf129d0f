# -------------------------
# User Models
# -------------------------
from .user import UserRecord, UserSummary

# -------------------------
# Company Models
# -------------------------
from .company import Company, MasterCode

# -------------------------
# Request / Response Models
# -------------------------
from .password_reset import ResetPasswordRequest, ResetPasswordResponse
from .registration import RegisterRequest, RegisterResponse

# -------------------------
# Enums
# -------------------------
from .enums import MasterCodeStatus, Language

__all__ = [
    "UserRecord",
    "UserSummary",
    "Company",
    "MasterCode",
    "ResetPasswordRequest",
    "ResetPasswordResponse",
    "RegisterRequest",
    "RegisterResponse",
    "MasterCodeStatus",
    "Language",
]
