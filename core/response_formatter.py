# core/response_formatter.py

"""
Uniform JSON results for the backend functions:

    success → {"success": True,  "message": "..."}
    failure → {"success": False, "error":   "..."}
"""

from typing import Any, Optional

from core.config import settings
from core.errors import ErrorKind, ServiceError, short_detail
from core.messages import translate


def format_success(message: str, **extra: Any) -> dict:
    return {"success": True, "message": message, **extra}


def error_message(error: ServiceError, language: Optional[str] = None) -> str:
    """Localized message for a ServiceError. Never raises."""
    if error.kind == ErrorKind.FORBIDDEN and error.reason is not None:
        return translate(error.reason.value, language)

    params = {
        "min_length": settings.MIN_PASSWORD_LENGTH,
        **error.params,
        "detail": short_detail(error.detail),
    }
    return translate(error.kind.value, language, **params)


def format_error(error: ServiceError, language: Optional[str] = None) -> dict:
    return {"success": False, "error": error_message(error, language)}


def format_unexpected(language: Optional[str] = None) -> dict:
    return {"success": False, "error": translate(ErrorKind.INTERNAL.value, language)}
