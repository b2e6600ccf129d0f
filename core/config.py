from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    # -------------------------------------------------
    # General
    # -------------------------------------------------
    PROJECT_NAME: str = "EcoPlanina API"
    ENV: str = "development"

    # -------------------------------------------------
    # Frontend Domains (web console + mobile web build)
    # -------------------------------------------------
    FRONTEND_DOMAINS: List[str] = [
        "https://ecoplanina.com",
        "https://www.ecoplanina.com",
        "https://admin.ecoplanina.com",
    ]

    # -------------------------------------------------
    # CORS (auto-built below)
    # -------------------------------------------------
    BACKEND_CORS_ORIGINS: List[str] = []

    # -------------------------------------------------
    # Supabase (Primary DB & Auth)
    # -------------------------------------------------
    SUPABASE_URL: Optional[str] = Field(None, env="SUPABASE_URL")
    SUPABASE_ANON_KEY: Optional[str] = Field(None, env="SUPABASE_ANON_KEY")
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = Field(None, env="SUPABASE_SERVICE_ROLE_KEY")

    # -------------------------------------------------
    # Localization
    # -------------------------------------------------
    DEFAULT_LANGUAGE: str = Field("sr", description="Language of user-facing messages (sr | en)")

    # -------------------------------------------------
    # Accounts
    # -------------------------------------------------
    MIN_PASSWORD_LENGTH: int = Field(6, description="Minimum password length for registration and resets")
    AUTH_EMAIL_DOMAIN: str = Field("eco.local", description="Domain of the phone-derived Supabase Auth email")

    # Company codes handed out to new companies (ECO-XXXX)
    COMPANY_CODE_PREFIX: str = "ECO-"
    COMPANY_CODE_LENGTH: int = 4
    COMPANY_CODE_MAX_ATTEMPTS: int = Field(20, description="Attempts at finding an unused company code")

    # -------------------------------------------------
    # Rate Limits (per client, per window)
    # -------------------------------------------------
    RESET_RATE_LIMIT: int = 10
    REGISTER_RATE_LIMIT: int = 5
    RATE_LIMIT_WINDOW_SECONDS: int = 60

    # -------------------------------------------------
    # Model Config
    # -------------------------------------------------
    class Config:
        case_sensitive = True


# Instantiate settings
settings = Settings()

# -------------------------------------------------
# Build CORS list dynamically after loading settings
# -------------------------------------------------
cors_origins = [d.rstrip("/") for d in settings.FRONTEND_DOMAINS]

if settings.ENV == "development":
    cors_origins.extend(["http://localhost:5173", "http://localhost:8081"])

settings.BACKEND_CORS_ORIGINS = sorted(list(set(cors_origins)))
