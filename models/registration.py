# models/registration.py

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from models.user import UserSummary


# --------------------------------------------------------------------
# PUBLIC REQUEST BODY: What the registration screen sends
# --------------------------------------------------------------------
class RegisterRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    phone: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None

    address: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    # ECO company code (client / driver / manager) or Master Code (company_admin)
    company_code: Optional[str] = Field(None, alias="companyCode")


# --------------------------------------------------------------------
# RESPONSE BODY
# --------------------------------------------------------------------
class RegisterResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    message: Optional[str] = None
    error: Optional[str] = None
    user: Optional[UserSummary] = None
    company_code: Optional[str] = Field(None, serialization_alias="companyCode")
    company_name: Optional[str] = Field(None, serialization_alias="companyName")
