# services/registration.py

"""
Self-service registration from the mobile app.

Clients, drivers and managers join an existing company with its ECO
code. A company admin brings a one-time Master Code instead and gets a
brand new company (ECO-XXXX) that they own.

Users sign in with their phone number; the Supabase Auth account uses
a phone-derived email (see core.utils.phone_to_auth_email).
"""

from typing import Optional, Tuple

from core.config import settings
from core.errors import CredentialStoreFailure, ErrorKind, ServiceError
from core.logging_config import logger, audit
from core.messages import translate
from core.response_formatter import error_message, format_unexpected
from core.roles import Role, SELF_REGISTRATION_ROLES
from core.utils import clean_str, generate_company_code, normalize_code, phone_to_auth_email
from models.registration import RegisterRequest, RegisterResponse
from models.user import UserRecord, UserSummary


# Role → error when the company code is missing
COMPANY_CODE_REQUIRED = {
    Role.CLIENT.value: ErrorKind.CLIENT_COMPANY_CODE_REQUIRED,
    Role.DRIVER.value: ErrorKind.DRIVER_COMPANY_CODE_REQUIRED,
    Role.MANAGER.value: ErrorKind.COMPANY_CODE_REQUIRED,
}


class RegistrationService:
    def __init__(self, directory, credentials, companies):
        self.directory = directory
        self.credentials = credentials
        self.companies = companies

    # -----------------------------------------------------
    # Core flow
    # -----------------------------------------------------
    def register(self, payload: RegisterRequest, language: Optional[str] = None) -> RegisterResponse:
        name = clean_str(payload.name)
        phone = clean_str(payload.phone)
        password = payload.password
        role = clean_str(payload.role)

        if not name or not phone or not password or not role:
            raise ServiceError(ErrorKind.MISSING_FIELDS)

        if role not in SELF_REGISTRATION_ROLES:
            raise ServiceError(ErrorKind.INVALID_ROLE)

        if len(password) < settings.MIN_PASSWORD_LENGTH:
            raise ServiceError(ErrorKind.WEAK_PASSWORD, min_length=settings.MIN_PASSWORD_LENGTH)

        if self.directory.find_active_by_phone(phone) is not None:
            raise ServiceError(ErrorKind.PHONE_TAKEN)

        code = normalize_code(payload.company_code)

        if role == Role.COMPANY_ADMIN.value:
            company_code, company_name = self._create_company(name, code, language)
            is_owner = True
        else:
            company_code, company_name = self._join_company(role, code)
            is_owner = False

        user = self._create_user(payload, name, phone, password, role, company_code, is_owner)

        if is_owner:
            self.companies.set_company_manager(company_code, user.id)

        audit("registration.success", user=user.id, role=role, company=company_code)

        return RegisterResponse(
            success=True,
            message=translate("registration_success", language),
            user=UserSummary(id=user.id, name=user.name, phone=user.phone, role=user.role),
            company_code=company_code,
            company_name=company_name,
        )

    def handle(self, payload: RegisterRequest, language: Optional[str] = None) -> dict:
        try:
            response = self.register(payload, language)
        except ServiceError as e:
            logger.warning(f"Registration error: {e}")
            response = RegisterResponse(success=False, error=error_message(e, language))
        except Exception:
            logger.error("Registration failed unexpectedly", exc_info=True)
            return format_unexpected(language)

        return response.model_dump(by_alias=True, exclude_none=True)

    # -----------------------------------------------------
    # Company handling
    # -----------------------------------------------------
    def _join_company(self, role: str, code: Optional[str]) -> Tuple[str, Optional[str]]:
        if not code:
            raise ServiceError(COMPANY_CODE_REQUIRED[role])

        company = self.companies.find_active_company(code)
        if company is None:
            raise ServiceError(ErrorKind.INVALID_COMPANY_CODE)

        return company.code, company.name

    def _create_company(
        self, owner_name: str, master_code: Optional[str], language: Optional[str]
    ) -> Tuple[str, Optional[str]]:
        if not master_code:
            raise ServiceError(ErrorKind.MASTER_CODE_REQUIRED)

        master = self.companies.find_available_master_code(master_code)
        if master is None:
            raise ServiceError(ErrorKind.INVALID_MASTER_CODE)

        new_code = self._unused_company_code()
        company = self.companies.create_company(
            code=new_code,
            name=f"{owner_name} {translate('company_name_suffix', language)}",
            master_code_id=master.id,
        )
        self.companies.mark_master_code_used(master.id, company.id)

        logger.info(f"Company {company.code} created with master code {master.code}")
        return company.code, company.name

    def _unused_company_code(self) -> str:
        for _ in range(settings.COMPANY_CODE_MAX_ATTEMPTS):
            code = generate_company_code()
            if not self.companies.company_code_exists(code):
                return code

        raise ServiceError(ErrorKind.COMPANY_CREATE_FAILED, detail="No unused company code found")

    # -----------------------------------------------------
    # Auth account + profile
    # -----------------------------------------------------
    def _create_user(
        self,
        payload: RegisterRequest,
        name: str,
        phone: str,
        password: str,
        role: str,
        company_code: Optional[str],
        is_owner: bool,
    ) -> UserRecord:
        try:
            auth_id = self.credentials.create_account(
                email=phone_to_auth_email(phone),
                password=password,
                metadata={"name": name, "phone": phone, "role": role},
            )
        except CredentialStoreFailure as e:
            logger.error(f"Auth error: {e.detail}")
            raise ServiceError(ErrorKind.ACCOUNT_CREATE_FAILED, detail=e.detail) from e

        profile = {
            "auth_id": auth_id,
            "name": name,
            "phone": phone,
            "address": clean_str(payload.address),
            "latitude": payload.latitude,
            "longitude": payload.longitude,
            "role": role,
            "company_code": company_code,
            "is_owner": is_owner,
        }

        try:
            return self.directory.insert_profile(profile)
        except Exception as e:
            logger.error(f"User profile error: {e}")
            # Roll back the auth account so the phone can register again
            try:
                self.credentials.delete_account(auth_id)
            except CredentialStoreFailure as rollback_error:
                logger.error(f"Rollback of auth user {auth_id} failed: {rollback_error.detail}")
            raise ServiceError(ErrorKind.PROFILE_CREATE_FAILED) from e
