# dependencies/services.py

"""
FastAPI providers for the Supabase collaborators and the services
built on them. Tests replace these through app.dependency_overrides.
"""

from fastapi import Depends, HTTPException
from supabase import Client

from core.supabase_client import get_supabase_client
from core.supabase_helpers import (
    SupabaseCompanyRepository,
    SupabaseCredentialStore,
    SupabaseIdentityVerifier,
    SupabaseUserDirectory,
)
from services.password_reset import PasswordResetService
from services.registration import RegistrationService
from services.user_migration import UserMigrationService


def get_client() -> Client:
    client = get_supabase_client()
    if not client:
        raise HTTPException(500, "Supabase client not configured")
    return client


# ============================================================
# Collaborators
# ============================================================
def get_identity_verifier(client: Client = Depends(get_client)) -> SupabaseIdentityVerifier:
    return SupabaseIdentityVerifier(client)


def get_user_directory(client: Client = Depends(get_client)) -> SupabaseUserDirectory:
    return SupabaseUserDirectory(client)


def get_credential_store(client: Client = Depends(get_client)) -> SupabaseCredentialStore:
    return SupabaseCredentialStore(client)


def get_company_repository(client: Client = Depends(get_client)) -> SupabaseCompanyRepository:
    return SupabaseCompanyRepository(client)


# ============================================================
# Services
# ============================================================
def get_password_reset_service(
    identity=Depends(get_identity_verifier),
    directory=Depends(get_user_directory),
    credentials=Depends(get_credential_store),
) -> PasswordResetService:
    return PasswordResetService(identity, directory, credentials)


def get_registration_service(
    directory=Depends(get_user_directory),
    credentials=Depends(get_credential_store),
    companies=Depends(get_company_repository),
) -> RegistrationService:
    return RegistrationService(directory, credentials, companies)


def get_user_migration_service(
    directory=Depends(get_user_directory),
    credentials=Depends(get_credential_store),
) -> UserMigrationService:
    return UserMigrationService(directory, credentials)
