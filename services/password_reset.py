# services/password_reset.py

"""
Admin password reset.

A developer, admin, company admin or company owner sets a new password
for another user. The caller's identity comes from the Supabase access
token; whether the reset is allowed is decided by
core.permissions.decide_password_reset; the password itself is written
through the Supabase Auth admin API.

The service keeps no state between calls. Two admins resetting the same
user at the same time both reach Supabase Auth and the later write wins.
"""

from typing import Optional

from core.config import settings
from core.errors import CredentialStoreFailure, ErrorKind, ServiceError
from core.logging_config import logger, audit
from core.messages import translate
from core.permissions import decide_password_reset
from core.response_formatter import format_error, format_success, format_unexpected
from models.user import UserRecord


class PasswordResetService:
    def __init__(self, identity, directory, credentials):
        self.identity = identity
        self.directory = directory
        self.credentials = credentials

    # -----------------------------------------------------
    # Core flow: raises ServiceError on the first failure
    # -----------------------------------------------------
    def reset_password(
        self,
        token: Optional[str],
        target_user_id: Optional[str],
        new_password: Optional[str],
    ) -> UserRecord:
        # 1. Who is asking
        if not token:
            raise ServiceError(ErrorKind.UNAUTHENTICATED)

        auth_id = self.identity.verify(token)
        if not auth_id:
            raise ServiceError(ErrorKind.INVALID_TOKEN)

        # 2. Their profile
        actor = self.directory.find_active_by_auth_id(auth_id)
        if actor is None:
            raise ServiceError(ErrorKind.ACTOR_NOT_FOUND)

        # 3-4. Input
        if not target_user_id or not new_password:
            raise ServiceError(ErrorKind.INVALID_INPUT)

        if len(new_password) < settings.MIN_PASSWORD_LENGTH:
            raise ServiceError(ErrorKind.WEAK_PASSWORD, min_length=settings.MIN_PASSWORD_LENGTH)

        # 5. Whose password
        target = self.directory.find_active_by_id(target_user_id)
        if target is None:
            raise ServiceError(ErrorKind.TARGET_NOT_FOUND)

        # 6. Policy
        decision = decide_password_reset(actor, target)
        if not decision.allowed:
            audit(
                "password_reset.denied",
                actor=actor.id,
                target=target.id,
                reason=decision.reason.value,
            )
            raise ServiceError(ErrorKind.FORBIDDEN, reason=decision.reason)

        # 7. Shadow users have nothing to reset
        if not target.auth_id:
            raise ServiceError(ErrorKind.TARGET_NOT_PROVISIONED)

        # 8. Write
        try:
            self.credentials.set_password(target.auth_id, new_password)
        except CredentialStoreFailure as e:
            logger.error(f"Password reset error for user {target.id}: {e.detail}")
            raise ServiceError(ErrorKind.CREDENTIAL_STORE_ERROR, detail=e.detail) from e

        audit("password_reset.success", actor=actor.id, target=target.id)
        return target

    # -----------------------------------------------------
    # Request handler: always returns a structured result
    # -----------------------------------------------------
    def handle(
        self,
        token: Optional[str],
        target_user_id: Optional[str],
        new_password: Optional[str],
        language: Optional[str] = None,
    ) -> dict:
        try:
            target = self.reset_password(token, target_user_id, new_password)
        except ServiceError as e:
            # Denials were already audited with the actor
            if e.kind != ErrorKind.FORBIDDEN:
                audit("password_reset.failed", target=target_user_id, outcome=e.kind.value)
            logger.warning(f"Reset password error: {e}")
            return format_error(e, language)
        except Exception:
            logger.error("Reset password failed unexpectedly", exc_info=True)
            return format_unexpected(language)

        return format_success(
            translate("password_reset_success", language, name=target.display_name)
        )
