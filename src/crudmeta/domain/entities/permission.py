"""Permission entity for role-based access control.

A permission grants or denies view, create, edit or delete actions against a
type, or against one field of a type. View and edit apply to both types and
fields; create and delete only apply to types (``field is None``).
"""

from dataclasses import dataclass
from enum import Enum

from crudmeta.core.exceptions import ConfigurationError


class PermissionAction(str, Enum):
    """Actions guarded by permissions."""

    VIEW = "view"
    CREATE = "create"
    EDIT = "edit"
    DELETE = "delete"

    @property
    def is_type_only(self) -> bool:
        """Whether the action only applies to whole types, never to fields."""
        return self in (PermissionAction.CREATE, PermissionAction.DELETE)


# Display order of granted actions
ACTION_DISPLAY_ORDER = (
    PermissionAction.CREATE,
    PermissionAction.VIEW,
    PermissionAction.EDIT,
    PermissionAction.DELETE,
)


@dataclass
class Permission:
    """Explicit grant/deny record for a (target type, field) pair.

    Owned by a role. Explicit permissions override the role's default policy
    for exactly this (target type, field) pair.

    Attributes:
        target_type: Name of the type this permission applies to.
        field: Field name, None if the permission applies to the type itself.
        view_allowed: Grants view access.
        create_allowed: Grants create access (type-level only).
        edit_allowed: Grants edit access.
        delete_allowed: Grants delete access (type-level only).
        role_id: Owning role, set when the permission is added to a role.
        id: Unique identifier (auto-generated).
    """

    target_type: str
    field: str | None = None
    view_allowed: bool = False
    create_allowed: bool = False
    edit_allowed: bool = False
    delete_allowed: bool = False
    role_id: int | None = None
    id: int | None = None

    MAX_TARGET_TYPE_LENGTH = 64

    def __post_init__(self) -> None:
        """Validate permission after initialization."""
        self.validate()

    def validate(self) -> None:
        """Check the record is well-formed.

        Called on construction and again before the record is persisted, since
        the flags may have been changed in between.

        Raises:
            ConfigurationError: If the target type is blank or too long, the
                field is blank, or create/delete is granted on a field.
        """
        if not self.target_type or not self.target_type.strip():
            raise ConfigurationError("Permission target type is required")
        if len(self.target_type) > self.MAX_TARGET_TYPE_LENGTH:
            raise ConfigurationError(
                f"Permission target type must be at most {self.MAX_TARGET_TYPE_LENGTH} characters"
            )
        if self.field is not None and not self.field.strip():
            raise ConfigurationError("Permission field must be None or a field name")
        if self.field is not None and (self.create_allowed or self.delete_allowed):
            raise ConfigurationError(
                f"Permission {self.name}: create and delete can only be granted on a type, not on a field"
            )

    @property
    def name(self) -> str:
        """Display name: ``target_type`` or ``target_type.field``."""
        if self.field is None:
            return self.target_type
        return f"{self.target_type}.{self.field}"

    @property
    def key(self) -> tuple[str, str | None]:
        """Uniqueness key of this permission."""
        return (self.target_type, self.field)

    def is_allowed(self, action: PermissionAction) -> bool:
        """Get the explicit decision of this record for an action."""
        if action == PermissionAction.VIEW:
            return self.view_allowed
        if action == PermissionAction.CREATE:
            return self.create_allowed
        if action == PermissionAction.EDIT:
            return self.edit_allowed
        return self.delete_allowed

    @property
    def granted_actions(self) -> list[PermissionAction]:
        """Granted actions in display order: create, view, edit, delete."""
        return [action for action in ACTION_DISPLAY_ORDER if self.is_allowed(action)]
