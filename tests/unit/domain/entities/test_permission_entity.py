"""Unit tests for the Permission entity."""

import pytest

from crudmeta.core.exceptions import ConfigurationError
from crudmeta.domain.entities import Permission, PermissionAction


class TestPermissionValidation:
    """Test construction-time validation."""

    def test_type_level_permission(self):
        permission = Permission(target_type="Account", create_allowed=True, delete_allowed=True)

        assert permission.field is None
        assert permission.name == "Account"
        assert permission.key == ("Account", None)

    def test_field_level_permission(self):
        permission = Permission(target_type="Account", field="name", view_allowed=True)

        assert permission.name == "Account.name"
        assert permission.key == ("Account", "name")

    @pytest.mark.parametrize(
        "flags",
        [{"create_allowed": True}, {"delete_allowed": True}],
    )
    def test_field_level_create_or_delete_rejected(self, flags):
        with pytest.raises(ConfigurationError, match="only be granted on a type"):
            Permission(target_type="Account", field="name", **flags)

    @pytest.mark.parametrize("target_type", ["", "   "])
    def test_blank_target_type_rejected(self, target_type):
        with pytest.raises(ConfigurationError):
            Permission(target_type=target_type)

    def test_target_type_length_limit(self):
        Permission(target_type="A" * Permission.MAX_TARGET_TYPE_LENGTH)
        with pytest.raises(ConfigurationError):
            Permission(target_type="A" * (Permission.MAX_TARGET_TYPE_LENGTH + 1))

    def test_blank_field_rejected(self):
        with pytest.raises(ConfigurationError):
            Permission(target_type="Account", field=" ")


class TestPermissionDecisions:
    """Test per-action decisions of a single record."""

    def test_is_allowed(self):
        permission = Permission(target_type="Account", view_allowed=True, delete_allowed=True)

        assert permission.is_allowed(PermissionAction.VIEW) is True
        assert permission.is_allowed(PermissionAction.CREATE) is False
        assert permission.is_allowed(PermissionAction.EDIT) is False
        assert permission.is_allowed(PermissionAction.DELETE) is True

    def test_granted_actions_display_order(self):
        permission = Permission(
            target_type="Account",
            view_allowed=True,
            create_allowed=True,
            edit_allowed=True,
            delete_allowed=True,
        )
        assert permission.granted_actions == [
            PermissionAction.CREATE,
            PermissionAction.VIEW,
            PermissionAction.EDIT,
            PermissionAction.DELETE,
        ]

    def test_type_only_actions(self):
        assert PermissionAction.CREATE.is_type_only is True
        assert PermissionAction.DELETE.is_type_only is True
        assert PermissionAction.VIEW.is_type_only is False
        assert PermissionAction.EDIT.is_type_only is False


class TestPermissionRevalidation:
    """Test validate() on records changed after construction."""

    def test_valid_record_passes(self):
        permission = Permission(target_type="Account", field="name", view_allowed=True)
        permission.edit_allowed = True
        permission.validate()

    @pytest.mark.parametrize("flag", ["create_allowed", "delete_allowed"])
    def test_changed_field_record_rejected(self, flag):
        permission = Permission(target_type="Account", field="name")
        setattr(permission, flag, True)

        with pytest.raises(ConfigurationError, match="only be granted on a type"):
            permission.validate()

    def test_changed_target_type_rejected(self):
        permission = Permission(target_type="Account")
        permission.target_type = ""

        with pytest.raises(ConfigurationError):
            permission.validate()
