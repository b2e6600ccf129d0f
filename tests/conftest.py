# tests/conftest.py

"""
Pytest configuration and shared fixtures for testing.
"""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import Mock
from typing import Generator

from main import create_app
from models.user import UserRecord


# ------------------------------------------------------------------
# Users
# ------------------------------------------------------------------
def make_user(
    id="user-1",
    role="client",
    company_code="ECO-AAAA",
    is_owner=False,
    auth_id="auth-user-1",
    name="Test User",
    phone="+38164111222",
) -> UserRecord:
    return UserRecord(
        id=id,
        auth_id=auth_id,
        name=name,
        phone=phone,
        role=role,
        company_code=company_code,
        is_owner=is_owner,
    )


@pytest.fixture
def user_factory():
    return make_user


# ------------------------------------------------------------------
# Collaborators
# ------------------------------------------------------------------
@pytest.fixture
def mock_identity():
    """Identity verifier accepting 'valid-token' as auth-admin-1."""
    identity = Mock()
    identity.verify.side_effect = lambda token: "auth-admin-1" if token == "valid-token" else None
    return identity


@pytest.fixture
def mock_directory():
    directory = Mock()
    directory.find_active_by_auth_id.return_value = None
    directory.find_active_by_id.return_value = None
    directory.find_active_by_phone.return_value = None
    return directory


@pytest.fixture
def mock_credentials():
    credentials = Mock()
    credentials.set_password.return_value = None
    credentials.create_account.return_value = "new-auth-id"
    credentials.find_account_id_by_email.return_value = None
    return credentials


@pytest.fixture
def mock_companies():
    companies = Mock()
    companies.find_active_company.return_value = None
    companies.find_available_master_code.return_value = None
    companies.company_code_exists.return_value = False
    return companies


@pytest.fixture
def mock_supabase_client():
    """Create a mock Supabase client."""
    mock_client = Mock()
    mock_table = Mock()
    mock_client.table.return_value = mock_table
    return mock_client


# ------------------------------------------------------------------
# App
# ------------------------------------------------------------------
@pytest.fixture(scope="function")
def app():
    """Create a test FastAPI application instance."""
    return create_app()


@pytest.fixture(scope="function")
def client(app) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Reset rate limiter before each test."""
    from core.rate_limiter import reset_rate_limits as clear
    clear()
    yield
    clear()
