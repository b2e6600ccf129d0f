# models/user.py

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, field_validator


# ===============================================================
# PUBLIC.USERS PROFILE ROW
# ===============================================================

class UserRecord(BaseModel):
    """
    A row of public.users, linked to Supabase Auth through auth_id.

    auth_id is None until the user is provisioned into Supabase Auth
    (shadow clients, accounts created before the auth migration).
    """
    id: str
    auth_id: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    role: Optional[str] = None
    company_code: Optional[str] = None
    is_owner: bool = False
    deleted_at: Optional[datetime] = None

    # The column is nullable; NULL means not an owner
    @field_validator("is_owner", mode="before")
    @classmethod
    def null_is_not_owner(cls, value):
        return False if value is None else value

    @property
    def display_name(self) -> str:
        return self.name or self.phone or self.id


class UserSummary(BaseModel):
    """
    Returned to API consumers after registration.
    """
    id: str
    name: Optional[str] = None
    phone: Optional[str] = None
    role: Optional[str] = None
