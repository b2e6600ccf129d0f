# models/company.py

from typing import Optional
from pydantic import BaseModel

from models.enums import MasterCodeStatus


class Company(BaseModel):
    """A waste collection company; users join it through its ECO code."""
    id: str
    code: str
    name: Optional[str] = None
    manager_id: Optional[str] = None
    master_code_id: Optional[str] = None


class MasterCode(BaseModel):
    """One-time code that lets a company admin create a new company."""
    id: str
    code: str
    status: MasterCodeStatus = MasterCodeStatus.available
    used_by_company: Optional[str] = None
