"""Unit tests for access capabilities."""

import pytest

from crudmeta.domain.entities import Permission, Role, User
from crudmeta.domain.services.access import (
    AccessCapability,
    AccessPolicy,
    FieldAccess,
    TypeAccess,
)


@pytest.fixture
def clerk() -> User:
    role = Role(name="Clerk")
    role.add_permission(Permission(target_type="Account", view_allowed=True, edit_allowed=True))
    role.add_permission(
        Permission(target_type="Account", field="name", view_allowed=True, edit_allowed=True)
    )
    role.add_permission(Permission(target_type="Account", field="owner", view_allowed=True))
    role.add_permission(Permission(target_type="Contact", view_allowed=True))
    return User(login_name="clerk", roles=[role])


def test_capabilities_satisfy_protocol(clerk):
    policy = AccessPolicy(clerk)
    assert isinstance(policy.for_type("Account"), AccessCapability)
    assert isinstance(policy.for_field("Account", "name"), AccessCapability)


def test_type_access(clerk):
    access = AccessPolicy(clerk).for_type("Account")

    assert access == TypeAccess(
        target_type="Account",
        is_viewable=True,
        is_editable=True,
        is_creatable=False,
        is_deletable=False,
    )


def test_field_access(clerk):
    policy = AccessPolicy(clerk)

    name = policy.for_field("Account", "name")
    owner = policy.for_field("Account", "owner")
    notes = policy.for_field("Account", "notes")

    assert (name.is_viewable, name.is_editable) == (True, True)
    assert (owner.is_viewable, owner.is_editable) == (True, False)
    assert (notes.is_viewable, notes.is_editable) == (False, False)


def test_field_access_not_editable_when_hidden():
    access = FieldAccess(target_type="Account", field="name", is_viewable=False, is_editable=True)
    assert access.is_editable is False


def test_viewable_properties_keeps_order_and_checks_first_segment(clerk):
    properties = ["owner.name", "notes", "name", "owner"]

    assert AccessPolicy(clerk).viewable_properties("Account", properties) == [
        "owner.name",
        "name",
        "owner",
    ]


def test_editable_properties(clerk):
    assert AccessPolicy(clerk).editable_properties("Account", ["owner", "name", "notes"]) == [
        "name"
    ]


def test_is_all_viewable(clerk):
    policy = AccessPolicy(clerk)

    assert policy.is_all_viewable(["Account", "Contact"]) is True
    assert policy.is_all_viewable(["Account", "Invoice"]) is False
    assert policy.is_all_viewable([]) is True


def test_system_user_sees_everything():
    policy = AccessPolicy(User.system_user())

    assert policy.for_type("Invoice").is_deletable is True
    assert policy.viewable_properties("Invoice", ["total", "lines"]) == ["total", "lines"]
