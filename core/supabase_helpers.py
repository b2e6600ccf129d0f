# core/supabase_helpers.py

"""
Thin wrappers around the Supabase client used by the services.

    SupabaseIdentityVerifier   access token → auth user id
    SupabaseUserDirectory      public.users (active rows only)
    SupabaseCredentialStore    Supabase Auth admin API
    SupabaseCompanyRepository  companies / master_codes

The services only see these interfaces, so tests swap them for mocks.
Query errors are not caught here; callers decide how to report them.
"""

from typing import List, Optional

from supabase import Client

from core.errors import CredentialStoreFailure, extract_supabase_error
from core.logging_config import logger
from models.company import Company, MasterCode
from models.enums import MasterCodeStatus
from models.user import UserRecord


USER_COLUMNS = "id, auth_id, name, phone, role, company_code, is_owner"

# Supabase Auth admin pages hold at most 1000 users
LIST_USERS_PAGE_SIZE = 1000


def _first(result) -> Optional[dict]:
    rows = getattr(result, "data", None) or []
    return rows[0] if rows else None


# =================================================================
#  IDENTITY
# =================================================================

class SupabaseIdentityVerifier:
    def __init__(self, client: Client):
        self.client = client

    def verify(self, token: str) -> Optional[str]:
        """Auth user id for a valid access token, None otherwise."""
        try:
            resp = self.client.auth.get_user(token)
        except Exception as e:
            logger.info(f"Token rejected by Supabase Auth: {type(e).__name__}")
            return None

        if not resp or not resp.user:
            return None
        return resp.user.id


# =================================================================
#  USER DIRECTORY: public.users
# =================================================================
# Soft-deleted rows (deleted_at set) are never returned by the
# find_* methods.
# =================================================================

class SupabaseUserDirectory:
    def __init__(self, client: Client):
        self.client = client

    def _active_users(self, columns: str = USER_COLUMNS):
        return self.client.table("users").select(columns).is_("deleted_at", "null")

    def find_active_by_auth_id(self, auth_id: str) -> Optional[UserRecord]:
        row = _first(self._active_users().eq("auth_id", auth_id).limit(1).execute())
        return UserRecord(**row) if row else None

    def find_active_by_id(self, user_id: str) -> Optional[UserRecord]:
        row = _first(self._active_users().eq("id", user_id).limit(1).execute())
        return UserRecord(**row) if row else None

    def find_active_by_phone(self, phone: str) -> Optional[UserRecord]:
        row = _first(self._active_users().eq("phone", phone).limit(1).execute())
        return UserRecord(**row) if row else None

    def list_active_without_auth(self) -> List[dict]:
        """
        Users not yet linked to Supabase Auth.
        Rows include the legacy plain password column.
        """
        result = (
            self._active_users("id, name, phone, password, role")
            .is_("auth_id", "null")
            .execute()
        )
        return result.data or []

    def insert_profile(self, profile: dict) -> UserRecord:
        result = self.client.table("users").insert(profile).execute()
        row = _first(result)
        if not row:
            raise RuntimeError("Profile insert returned no row")
        return UserRecord(**row)

    def link_auth_id(self, user_id: str, auth_id: str) -> None:
        self.client.table("users").update({"auth_id": auth_id}).eq("id", user_id).execute()


# =================================================================
#  CREDENTIAL STORE: Supabase Auth admin
# =================================================================

class SupabaseCredentialStore:
    def __init__(self, client: Client):
        self.client = client

    def set_password(self, auth_id: str, password: str) -> None:
        try:
            self.client.auth.admin.update_user_by_id(auth_id, {"password": password})
        except Exception as e:
            raise CredentialStoreFailure(extract_supabase_error(e)) from e

    def create_account(self, email: str, password: str, metadata: dict) -> str:
        """Create a confirmed auth account, return its id."""
        try:
            result = self.client.auth.admin.create_user(
                {
                    "email": email,
                    "password": password,
                    "email_confirm": True,  # phone-derived emails cannot be confirmed
                    "user_metadata": metadata,
                }
            )
        except Exception as e:
            raise CredentialStoreFailure(extract_supabase_error(e)) from e

        if not result or not result.user:
            raise CredentialStoreFailure("No user returned")
        return result.user.id

    def delete_account(self, auth_id: str) -> None:
        try:
            self.client.auth.admin.delete_user(auth_id)
        except Exception as e:
            raise CredentialStoreFailure(extract_supabase_error(e)) from e

    def find_account_id_by_email(self, email: str) -> Optional[str]:
        page = 1
        while True:
            result = self.client.auth.admin.list_users(page=page, per_page=LIST_USERS_PAGE_SIZE)
            # Older clients wrap the list in an object with .users
            users = result if isinstance(result, list) else getattr(result, "users", None) or []

            for user in users:
                if getattr(user, "email", None) == email:
                    return user.id

            if len(users) < LIST_USERS_PAGE_SIZE:
                return None
            page += 1


# =================================================================
#  COMPANIES / MASTER CODES
# =================================================================

class SupabaseCompanyRepository:
    def __init__(self, client: Client):
        self.client = client

    def find_active_company(self, code: str) -> Optional[Company]:
        row = _first(
            self.client.table("companies")
            .select("*")
            .eq("code", code)
            .is_("deleted_at", "null")
            .limit(1)
            .execute()
        )
        return Company(**row) if row else None

    def company_code_exists(self, code: str) -> bool:
        # Includes soft-deleted companies: codes are never reused
        row = _first(
            self.client.table("companies").select("id").eq("code", code).limit(1).execute()
        )
        return row is not None

    def find_available_master_code(self, code: str) -> Optional[MasterCode]:
        row = _first(
            self.client.table("master_codes")
            .select("*")
            .eq("code", code)
            .eq("status", MasterCodeStatus.available.value)
            .limit(1)
            .execute()
        )
        return MasterCode(**row) if row else None

    def create_company(self, code: str, name: str, master_code_id: str) -> Company:
        row = _first(
            self.client.table("companies")
            .insert({"code": code, "name": name, "master_code_id": master_code_id})
            .execute()
        )
        if not row:
            raise RuntimeError("Company insert returned no row")
        return Company(**row)

    def mark_master_code_used(self, master_code_id: str, company_id: str) -> None:
        (
            self.client.table("master_codes")
            .update({
                "status": MasterCodeStatus.used.value,
                "used_by_company": company_id,
            })
            .eq("id", master_code_id)
            .execute()
        )

    def set_company_manager(self, code: str, user_id: str) -> None:
        self.client.table("companies").update({"manager_id": user_id}).eq("code", code).execute()
