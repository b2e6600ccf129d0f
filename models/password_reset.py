# models/password_reset.py

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


# -----------------------------------------------------
# REQUEST BODY: web console / mobile admin screens
# -----------------------------------------------------
class ResetPasswordRequest(BaseModel):
    """
    Both fields are optional at the schema level: a missing value is
    reported as a structured failure, not a 422.
    """
    model_config = ConfigDict(populate_by_name=True)

    target_user_id: Optional[str] = Field(None, alias="targetUserId")
    new_password: Optional[str] = Field(None, alias="newPassword")


# -----------------------------------------------------
# RESPONSE BODY
# -----------------------------------------------------
class ResetPasswordResponse(BaseModel):
    success: bool
    message: Optional[str] = None
    error: Optional[str] = None
