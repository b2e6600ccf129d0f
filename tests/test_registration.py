# tests/test_registration.py

"""
Tests for self-service registration.
"""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import patch

from core.errors import CredentialStoreFailure, ErrorKind, ServiceError
from dependencies.services import get_registration_service
from models.company import Company, MasterCode
from models.registration import RegisterRequest
from services.registration import RegistrationService
from tests.conftest import make_user


@pytest.fixture
def service(mock_directory, mock_credentials, mock_companies):
    mock_directory.insert_profile.side_effect = lambda profile: make_user(
        id="new-user",
        auth_id=profile["auth_id"],
        name=profile["name"],
        phone=profile["phone"],
        role=profile["role"],
        company_code=profile["company_code"],
        is_owner=profile["is_owner"],
    )
    return RegistrationService(mock_directory, mock_credentials, mock_companies)


def payload(**overrides):
    data = {
        "name": "Petar",
        "phone": "+381 64 123 456",
        "password": "tajna123",
        "role": "client",
        "companyCode": "eco-ab12",
    }
    data.update(overrides)
    return RegisterRequest(**data)


def expect_error(service, request, kind):
    with pytest.raises(ServiceError) as exc:
        service.register(request)
    assert exc.value.kind == kind
    return exc.value


# ------------------------------------------------------------------
# Joining an existing company
# ------------------------------------------------------------------
def test_client_joins_company(service, mock_companies, mock_credentials, mock_directory):
    mock_companies.find_active_company.return_value = Company(id="c1", code="ECO-AB12", name="Čistoća")

    response = service.register(payload())

    assert response.success
    assert response.company_code == "ECO-AB12"
    assert response.company_name == "Čistoća"
    assert response.user.role == "client"
    mock_companies.find_active_company.assert_called_once_with("ECO-AB12")
    mock_credentials.create_account.assert_called_once_with(
        email="38164123456@eco.local",
        password="tajna123",
        metadata={"name": "Petar", "phone": "+381 64 123 456", "role": "client"},
    )
    profile = mock_directory.insert_profile.call_args.args[0]
    assert profile["auth_id"] == "new-auth-id"
    assert profile["company_code"] == "ECO-AB12"
    assert profile["is_owner"] is False
    mock_companies.set_company_manager.assert_not_called()


@pytest.mark.parametrize(
    "role,kind",
    [
        ("client", ErrorKind.CLIENT_COMPANY_CODE_REQUIRED),
        ("driver", ErrorKind.DRIVER_COMPANY_CODE_REQUIRED),
        ("manager", ErrorKind.COMPANY_CODE_REQUIRED),
        ("company_admin", ErrorKind.MASTER_CODE_REQUIRED),
    ],
)
def test_company_code_required_per_role(service, role, kind):
    expect_error(service, payload(role=role, companyCode="  "), kind)


def test_unknown_company_code(service, mock_credentials):
    expect_error(service, payload(role="driver"), ErrorKind.INVALID_COMPANY_CODE)
    mock_credentials.create_account.assert_not_called()


# ------------------------------------------------------------------
# Company admin with master code
# ------------------------------------------------------------------
def test_company_admin_creates_company(service, mock_companies, mock_directory):
    mock_companies.find_available_master_code.return_value = MasterCode(id="mc-1", code="MASTER-1")
    mock_companies.create_company.side_effect = lambda code, name, master_code_id: Company(
        id="co-1", code=code, name=name, master_code_id=master_code_id
    )

    response = service.register(payload(role="company_admin", companyCode="master-1"), language="sr")

    assert response.success
    assert response.company_code.startswith("ECO-")
    assert len(response.company_code) == 8
    assert response.company_name == "Petar Firma"
    mock_companies.find_available_master_code.assert_called_once_with("MASTER-1")
    mock_companies.mark_master_code_used.assert_called_once_with("mc-1", "co-1")
    mock_companies.set_company_manager.assert_called_once_with(response.company_code, "new-user")
    profile = mock_directory.insert_profile.call_args.args[0]
    assert profile["is_owner"] is True
    assert profile["role"] == "company_admin"


def test_generated_company_code_skips_taken_codes(service, mock_companies):
    mock_companies.find_available_master_code.return_value = MasterCode(id="mc-1", code="MASTER-1")
    mock_companies.company_code_exists.side_effect = [True, True, False]
    mock_companies.create_company.side_effect = lambda code, name, master_code_id: Company(id="co-1", code=code, name=name)

    service.register(payload(role="company_admin", companyCode="MASTER-1"))

    assert mock_companies.company_code_exists.call_count == 3


def test_company_code_attempts_are_bounded(service, mock_companies, mock_credentials):
    mock_companies.find_available_master_code.return_value = MasterCode(id="mc-1", code="MASTER-1")
    mock_companies.company_code_exists.return_value = True

    expect_error(service, payload(role="company_admin", companyCode="MASTER-1"), ErrorKind.COMPANY_CREATE_FAILED)
    mock_companies.create_company.assert_not_called()
    mock_credentials.create_account.assert_not_called()


def test_used_master_code(service, mock_companies):
    expect_error(service, payload(role="company_admin", companyCode="USED"), ErrorKind.INVALID_MASTER_CODE)
    mock_companies.create_company.assert_not_called()


# ------------------------------------------------------------------
# Validation
# ------------------------------------------------------------------
@pytest.mark.parametrize("field", ["name", "phone", "password", "role"])
def test_required_fields(service, field):
    expect_error(service, payload(**{field: None}), ErrorKind.MISSING_FIELDS)


@pytest.mark.parametrize("role", ["admin", "developer", "owner"])
def test_privileged_roles_cannot_self_register(service, role):
    expect_error(service, payload(role=role), ErrorKind.INVALID_ROLE)


def test_short_password(service):
    expect_error(service, payload(password="12345"), ErrorKind.WEAK_PASSWORD)


def test_phone_already_registered(service, mock_directory, mock_credentials):
    mock_directory.find_active_by_phone.return_value = make_user()

    expect_error(service, payload(), ErrorKind.PHONE_TAKEN)
    mock_credentials.create_account.assert_not_called()


# ------------------------------------------------------------------
# Account creation and rollback
# ------------------------------------------------------------------
def test_auth_account_failure(service, mock_companies, mock_credentials, mock_directory):
    mock_companies.find_active_company.return_value = Company(id="c1", code="ECO-AB12")
    mock_credentials.create_account.side_effect = CredentialStoreFailure("User already registered")

    error = expect_error(service, payload(), ErrorKind.ACCOUNT_CREATE_FAILED)
    assert error.detail == "User already registered"
    mock_directory.insert_profile.assert_not_called()


def test_profile_failure_rolls_back_auth_account(service, mock_companies, mock_credentials, mock_directory):
    mock_companies.find_active_company.return_value = Company(id="c1", code="ECO-AB12")
    mock_directory.insert_profile.side_effect = RuntimeError("duplicate key")

    expect_error(service, payload(), ErrorKind.PROFILE_CREATE_FAILED)
    mock_credentials.delete_account.assert_called_once_with("new-auth-id")


def test_failed_rollback_still_reports_profile_error(service, mock_companies, mock_credentials, mock_directory):
    mock_companies.find_active_company.return_value = Company(id="c1", code="ECO-AB12")
    mock_directory.insert_profile.side_effect = RuntimeError("duplicate key")
    mock_credentials.delete_account.side_effect = CredentialStoreFailure("network")

    expect_error(service, payload(), ErrorKind.PROFILE_CREATE_FAILED)


# ------------------------------------------------------------------
# Endpoint
# ------------------------------------------------------------------
@pytest.fixture
def register_client(app, service):
    app.dependency_overrides[get_registration_service] = lambda: service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides = {}


def test_register_endpoint_success(register_client, mock_companies):
    mock_companies.find_active_company.return_value = Company(id="c1", code="ECO-AB12", name="Čistoća")

    response = register_client.post(
        "/auth-register",
        json={"name": "Petar", "phone": "0641234567", "password": "tajna123", "role": "driver", "companyCode": "eco-ab12"},
    )

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": "Registracija uspešna",
        "user": {"id": "new-user", "name": "Petar", "phone": "0641234567", "role": "driver"},
        "companyCode": "ECO-AB12",
        "companyName": "Čistoća",
    }


def test_register_endpoint_failure(register_client):
    response = register_client.post(
        "/auth-register",
        json={"name": "Petar", "phone": "0641234567", "password": "tajna123", "role": "driver"},
    )

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Kod firme je obavezan za vozača"}


def test_register_endpoint_rate_limited(register_client):
    with patch("routers.register.settings") as mock_settings:
        mock_settings.REGISTER_RATE_LIMIT = 1
        mock_settings.RATE_LIMIT_WINDOW_SECONDS = 60

        register_client.post("/auth-register", json={})
        response = register_client.post("/auth-register", json={}, headers={"Accept-Language": "en"})

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Too many requests, please try again later"}


def test_register_endpoint_malformed_body(register_client, mock_credentials):
    response = register_client.post(
        "/auth-register",
        json={"name": "Petar", "phone": 641234567, "password": "tajna123", "role": "driver", "latitude": "north"},
    )

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Sva polja su obavezna"}
    mock_credentials.create_account.assert_not_called()


def test_register_endpoint_body_that_is_not_json(register_client):
    response = register_client.post(
        "/auth-register",
        content=b"{name: Petar",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Sva polja su obavezna"}
