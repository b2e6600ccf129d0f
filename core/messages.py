# core/messages.py

"""
User-facing messages in Serbian (default) and English.

Keys are ErrorKind / DenyReason values plus a few success keys.
Clients match on these strings, so keep them stable.
"""

from typing import Optional

from core.config import settings


MESSAGES = {

    # =====================================================
    # SERBIAN (latin)
    # =====================================================
    "sr": {
        # Auth
        "unauthenticated": "Niste autorizovani",
        "invalid_token": "Nevazeci token",
        "actor_not_found": "Korisnik nije pronadjen",

        # Password reset
        "invalid_input": "ID korisnika i nova lozinka su obavezni",
        "weak_password": "Lozinka mora imati najmanje {min_length} karaktera",
        "target_not_found": "Ciljni korisnik nije pronadjen",
        "target_not_provisioned": "Korisnik nema povezan auth nalog",
        "credential_store_error": "Greska pri resetovanju lozinke: {detail}",
        "password_reset_success": "Lozinka za {name} je uspesno resetovana",

        # Policy denials
        "peer_admin": "Ne mozete resetovati lozinku drugom administratoru",
        "cross_tenant": "Ne mozete resetovati lozinku korisnika iz druge firme",
        "insufficient_privilege": "Mozete resetovati lozinku samo menadzerima, vozacima i klijentima",
        "not_permitted": "Nemate dozvolu za ovu akciju",

        # Registration
        "missing_fields": "Sva polja su obavezna",
        "invalid_role": "Nevažeća uloga",
        "phone_taken": "Korisnik sa ovim brojem telefona već postoji",
        "client_company_code_required": "Kod firme je obavezan za klijenta",
        "driver_company_code_required": "Kod firme je obavezan za vozača",
        "company_code_required": "Kod firme je obavezan",
        "master_code_required": "Master kod je obavezan",
        "invalid_company_code": "Nevažeći kod firme",
        "invalid_master_code": "Nevažeći ili već iskorišćeni Master Code",
        "company_create_failed": "Greška pri kreiranju firme",
        "account_create_failed": "Greška pri kreiranju naloga: {detail}",
        "profile_create_failed": "Greška pri kreiranju profila",
        "registration_success": "Registracija uspešna",
        "company_name_suffix": "Firma",

        # Migration
        "migration_failed": "Migracija nije uspela: {detail}",

        # Generic
        "rate_limited": "Previse zahteva, pokusajte ponovo kasnije",
        "internal": "Doslo je do greske",
    },

    # =====================================================
    # ENGLISH
    # =====================================================
    "en": {
        "unauthenticated": "You are not authorized",
        "invalid_token": "Invalid token",
        "actor_not_found": "User not found",

        "invalid_input": "User ID and new password are required",
        "weak_password": "Password must be at least {min_length} characters long",
        "target_not_found": "Target user not found",
        "target_not_provisioned": "User has no linked auth account",
        "credential_store_error": "Error resetting password: {detail}",
        "password_reset_success": "Password for {name} was reset successfully",

        "peer_admin": "You cannot reset the password of another administrator",
        "cross_tenant": "You cannot reset the password of a user from another company",
        "insufficient_privilege": "You can only reset passwords of managers, drivers and clients",
        "not_permitted": "You do not have permission for this action",

        "missing_fields": "All fields are required",
        "invalid_role": "Invalid role",
        "phone_taken": "A user with this phone number already exists",
        "client_company_code_required": "Company code is required for clients",
        "driver_company_code_required": "Company code is required for drivers",
        "company_code_required": "Company code is required",
        "master_code_required": "Master code is required",
        "invalid_company_code": "Invalid company code",
        "invalid_master_code": "Invalid or already used Master Code",
        "company_create_failed": "Error creating company",
        "account_create_failed": "Error creating account: {detail}",
        "profile_create_failed": "Error creating profile",
        "registration_success": "Registration successful",
        "company_name_suffix": "Company",

        "migration_failed": "Migration failed: {detail}",

        "rate_limited": "Too many requests, please try again later",
        "internal": "An error occurred",
    },
}

FALLBACK_LANGUAGE = "sr"


def resolve_language(language: Optional[str]) -> str:
    """Pick a supported language, falling back to the configured default."""
    if language:
        code = language.strip().lower()[:2]
        if code in MESSAGES:
            return code
    if settings.DEFAULT_LANGUAGE in MESSAGES:
        return settings.DEFAULT_LANGUAGE
    return FALLBACK_LANGUAGE


def translate(key: str, language: Optional[str] = None, **params) -> str:
    lang = resolve_language(language)
    template = MESSAGES[lang].get(key) or MESSAGES[FALLBACK_LANGUAGE].get(key) or key
    try:
        return template.format(**params)
    except (KeyError, IndexError):
        # Missing parameter: return the template without interpolation
        return template
