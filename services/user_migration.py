# services/user_migration.py

"""
One-off migration of legacy users (plain password column, no auth_id)
to Supabase Auth.

Each user is linked to an existing auth account with the same
phone-derived email, or gets a new one created with their current
password. A failing user is recorded and the run continues.
"""

from datetime import datetime, timezone
from typing import List

from pydantic import BaseModel, Field

from core.errors import CredentialStoreFailure
from core.logging_config import logger, audit
from core.utils import phone_digits, phone_to_auth_email


class MigrationResults(BaseModel):
    total: int = 0
    migrated: int = 0
    failed: int = 0
    errors: List[str] = Field(default_factory=list)


class UserMigrationService:
    def __init__(self, directory, credentials):
        self.directory = directory
        self.credentials = credentials

    def migrate(self) -> MigrationResults:
        users = self.directory.list_active_without_auth()
        results = MigrationResults(total=len(users))

        for user in users:
            phone = user.get("phone") or ""
            try:
                self._migrate_one(user)
            except Exception as e:
                detail = e.detail if isinstance(e, CredentialStoreFailure) else str(e)
                results.failed += 1
                results.errors.append(f"User {phone}: {detail}")
                logger.error(f"Failed to migrate user {phone}: {detail}")
                continue

            results.migrated += 1
            logger.info(f"Migrated user: {phone} ({user.get('name')})")

        audit(
            "user_migration.complete",
            total=results.total,
            migrated=results.migrated,
            failed=results.failed,
        )
        return results

    def _migrate_one(self, user: dict) -> None:
        if not phone_digits(user.get("phone") or ""):
            raise ValueError("No phone number")

        email = phone_to_auth_email(user["phone"])

        auth_id = self.credentials.find_account_id_by_email(email)
        if auth_id is None:
            if not user.get("password"):
                raise ValueError("No password to migrate")

            auth_id = self.credentials.create_account(
                email=email,
                password=user["password"],
                metadata={
                    "name": user.get("name"),
                    "phone": user.get("phone"),
                    "role": user.get("role"),
                    "migrated": True,
                    "migrated_at": datetime.now(timezone.utc).isoformat(),
                },
            )

        self.directory.link_auth_id(user["id"], auth_id)
