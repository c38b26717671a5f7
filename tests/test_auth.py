"""Tests for the admin claim check."""
import pytest

from churchdash.domain.auth import is_admin


@pytest.mark.parametrize("claims", [
    {"app_metadata": {"roles": ["member", "admin"]}},
    {"app_metadata": {"role": "admin"}},
    {"user_metadata": {"role": "admin"}},
    {"app_metadata": {"roles": ["member"]}, "user_metadata": {"role": "admin"}},
])
def test_admin_claims(claims):
    assert is_admin(claims) is True


@pytest.mark.parametrize("claims", [
    None,
    {},
    {"app_metadata": {"roles": ["member"]}},
    {"app_metadata": {"role": ["admin"]}},
    {"app_metadata": None, "user_metadata": {"role": "Admin"}},
])
def test_non_admin_claims(claims):
    assert is_admin(claims) is False
