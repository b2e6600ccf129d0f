# core/config_validator.py

from typing import List
from core.config import settings
from core.logging_config import logger
from models.enums import Language


SUPPORTED_LANGUAGES = tuple(Language.list())


def validate_required_config() -> List[str]:
    """
    Validate that all required environment variables are set.
    Returns list of missing required variables.
    """
    missing = []

    # Every endpoint talks to Supabase with the service role
    if not settings.SUPABASE_URL:
        missing.append("SUPABASE_URL")
    if not settings.SUPABASE_SERVICE_ROLE_KEY:
        missing.append("SUPABASE_SERVICE_ROLE_KEY")

    return missing


def validate_optional_config() -> List[str]:
    """
    Validate optional but recommended configuration.
    Returns list of warnings.
    """
    warnings = []

    if not settings.SUPABASE_ANON_KEY:
        warnings.append("SUPABASE_ANON_KEY (optional but recommended)")

    if settings.DEFAULT_LANGUAGE not in SUPPORTED_LANGUAGES:
        warnings.append(
            f"DEFAULT_LANGUAGE={settings.DEFAULT_LANGUAGE!r} is not one of {SUPPORTED_LANGUAGES}; "
            "messages will fall back to 'sr'"
        )

    if settings.MIN_PASSWORD_LENGTH < 6:
        warnings.append(
            f"MIN_PASSWORD_LENGTH={settings.MIN_PASSWORD_LENGTH} is below the Supabase Auth minimum of 6"
        )

    return warnings


def validate_config_on_startup():
    """
    Validate configuration on application startup.
    Raises RuntimeError in production if critical config is missing.
    Logs warnings for optional config.
    """
    missing_required = validate_required_config()
    missing_optional = validate_optional_config()

    for warning in missing_optional:
        logger.warning(f"Config: {warning}")

    if missing_required:
        message = f"Missing required configuration: {', '.join(missing_required)}"
        if settings.ENV == "production":
            raise RuntimeError(message)
        logger.warning(f"{message} (continuing in {settings.ENV})")
        return False

    logger.info("Configuration validated")
    return True
