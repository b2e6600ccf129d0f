# tests/test_roles.py

"""
Tests for the role hierarchy.
"""

import pytest

from core.roles import (
    ROLE_HIERARCHY,
    Role,
    has_company_admin_authority,
    is_platform_admin,
    rank_of,
)
from tests.conftest import make_user


def test_canonical_ranks():
    assert rank_of("developer") == 100
    assert rank_of("admin") == 90
    assert rank_of("company_admin") == 80
    assert rank_of("manager") == 70
    assert rank_of("driver") == 60
    assert rank_of("client") == 50


def test_ranks_are_unique_and_ordered():
    ranks = [rank_of(role) for role in Role]
    assert len(set(ranks)) == len(ranks)
    assert ranks == sorted(ranks, reverse=True)


def test_rank_of_accepts_enum_and_string():
    for role in Role:
        assert rank_of(role) == rank_of(role.value)


@pytest.mark.parametrize("role", ["owner", "superuser", "", None, "Developer"])
def test_unknown_roles_rank_zero(role):
    assert rank_of(role) == 0


def test_rank_of_is_stable():
    first = {role: rank_of(role) for role in ROLE_HIERARCHY}
    second = {role: rank_of(role) for role in ROLE_HIERARCHY}
    assert first == second


def test_is_platform_admin():
    assert is_platform_admin("developer")
    assert is_platform_admin(Role.ADMIN)
    assert not is_platform_admin("company_admin")
    assert not is_platform_admin(None)


def test_company_admin_authority_from_role_or_owner_flag():
    assert has_company_admin_authority(make_user(role="company_admin"))
    assert has_company_admin_authority(make_user(role="manager", is_owner=True))
    assert not has_company_admin_authority(make_user(role="manager"))
