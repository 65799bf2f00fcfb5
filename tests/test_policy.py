"""
Tests for privilege policy names.
"""

import pytest

from privileged.auth import (
    PrivilegePolicyProvider,
    PrivilegeRequirement,
    format_policy_name,
    parse_policy_name,
)


def test_format_with_qualifier():
    assert format_policy_name("write", "Post", "title") == "Privilege:write:Post:title"


def test_format_without_qualifier():
    assert format_policy_name("read", "User") == "Privilege:read:User"
    assert format_policy_name("read", "User", None) == "Privilege:read:User"
    assert format_policy_name("read", "User", "") == "Privilege:read:User"


def test_format_keeps_whitespace_qualifier():
    assert format_policy_name("read", "User", " ") == "Privilege:read:User: "


def test_format_rejects_blank_action_or_subject():
    with pytest.raises(ValueError):
        format_policy_name("", "Post")

    with pytest.raises(ValueError):
        format_policy_name("read", "  ")


def test_round_trip():
    """Test formatting then parsing yields the same triple."""
    assert parse_policy_name(format_policy_name("write", "Post", "title")) == (
        PrivilegeRequirement("write", "Post", "title")
    )
    assert parse_policy_name(format_policy_name("read", "User")) == (
        PrivilegeRequirement("read", "User", None)
    )


def test_parse_empty_qualifier_segment():
    assert parse_policy_name("Privilege:read:User:") == PrivilegeRequirement("read", "User")


def test_parse_whitespace_qualifier_kept():
    assert parse_policy_name("Privilege:read:User: ").qualifier == " "


def test_parse_prefix_ignores_case():
    assert parse_policy_name("privilege:read:Post") == PrivilegeRequirement("read", "Post")


@pytest.mark.parametrize(
    "name",
    [
        None,
        "",
        "Admin",
        "Privilege:",
        "Privilege:read",
        "Privilege::Post",
        "Privilege:read:",
        "Privilege: :Post",
        "Privilege:read:Post:title:extra",
        "Role:read:Post",
        "Privileges:read:Post",
    ],
)
def test_parse_rejects_malformed(name):
    """Test malformed names yield None instead of raising."""
    assert parse_policy_name(name) is None


def test_requirement_validates():
    with pytest.raises(ValueError):
        PrivilegeRequirement("", "Post")

    with pytest.raises(ValueError):
        PrivilegeRequirement("read", " ")


def test_requirement_policy_name():
    assert PrivilegeRequirement("update", "Post", "title").policy_name == "Privilege:update:Post:title"


def test_policy_provider_caches_results():
    provider = PrivilegePolicyProvider()

    first = provider.get_requirement("Privilege:read:Post")
    second = provider.get_requirement("Privilege:read:Post")

    assert first == PrivilegeRequirement("read", "Post")
    assert first is second


def test_policy_provider_unknown_policy():
    provider = PrivilegePolicyProvider()

    assert provider.get_requirement("Admin") is None
    assert provider.get_requirement("Admin") is None
    assert provider.get_requirement(None) is None


def test_policy_provider_clear_cache():
    provider = PrivilegePolicyProvider()
    first = provider.get_requirement("Privilege:read:Post")

    provider.clear_cache()

    assert provider.get_requirement("Privilege:read:Post") is not first
