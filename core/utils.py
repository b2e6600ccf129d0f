# core/utils.py

import re
import secrets
from typing import Optional

from core.config import settings


COMPANY_CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"  # no 0/O, 1/I


def clean_str(value: Optional[str]) -> Optional[str]:
    """Strip whitespace; empty strings → None."""
    if value is None:
        return None
    stripped = str(value).strip()
    return stripped or None


def phone_digits(phone: str) -> str:
    """'+381 64/123-456' → '38164123456'"""
    return re.sub(r"[^0-9]", "", phone or "")


def phone_to_auth_email(phone: str) -> str:
    """
    Users log in with their phone number; Supabase Auth needs an email,
    so the account email is <digits>@<AUTH_EMAIL_DOMAIN>.
    """
    return f"{phone_digits(phone)}@{settings.AUTH_EMAIL_DOMAIN}"


def normalize_code(code: Optional[str]) -> Optional[str]:
    """Company and master codes are stored upper-case."""
    cleaned = clean_str(code)
    return cleaned.upper() if cleaned else None


def generate_company_code() -> str:
    suffix = "".join(
        secrets.choice(COMPANY_CODE_ALPHABET)
        for _ in range(settings.COMPANY_CODE_LENGTH)
    )
    return f"{settings.COMPANY_CODE_PREFIX}{suffix}"
