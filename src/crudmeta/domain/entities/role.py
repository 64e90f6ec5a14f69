"""Role entity for authorization.

A role is a named set of explicit permissions plus a default policy that
decides every action no explicit permission covers.
"""

from dataclasses import dataclass, field

from crudmeta.core.exceptions import ConfigurationError
from crudmeta.domain.entities.permission import Permission, PermissionAction


@dataclass
class Role:
    """Role entity for user authorization.

    Attributes:
        name: Unique role name.
        allow_or_deny_by_default: True to allow, False to deny actions on
            types and fields without an explicit permission.
        description: Optional description of the role's purpose.
        id: Unique identifier (auto-generated).
        permissions: Explicit permissions owned by this role.
    """

    name: str
    allow_or_deny_by_default: bool = False
    description: str | None = None
    id: int | None = None
    permissions: list[Permission] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate role data after initialization."""
        if not self.name:
            raise ConfigurationError("Role name is required")
        seen: set[tuple[str, str | None]] = set()
        for permission in self.permissions:
            if permission.key in seen:
                raise ConfigurationError(f"Duplicate permission for {permission.name}")
            seen.add(permission.key)

    def add_permission(self, permission: Permission) -> Permission:
        """Add an explicit permission to this role.

        Raises:
            ConfigurationError: If the role already has a permission for the
                same (target type, field) pair.
        """
        if self.find_permission(permission.target_type, permission.field) is not None:
            raise ConfigurationError(
                f"Role {self.name} already has a permission for {permission.name}"
            )
        permission.role_id = self.id
        self.permissions.append(permission)
        return permission

    def remove_permission(self, target_type: str, field: str | None = None) -> bool:
        """Remove the explicit permission for a (target type, field) pair.

        Returns:
            True if a permission was removed, False if none existed.
        """
        permission = self.find_permission(target_type, field)
        if permission is None:
            return False
        self.permissions.remove(permission)
        return True

    def find_permission(self, target_type: str, field: str | None = None) -> Permission | None:
        """Find the explicit permission for exactly this (target type, field) pair."""
        for permission in self.permissions:
            if permission.target_type == target_type and permission.field == field:
                return permission
        return None

    def is_allowed(
        self, action: PermissionAction, target_type: str, field: str | None = None
    ) -> bool:
        """Decide an action for this role alone.

        An explicit permission for the exact (target type, field) pair wins;
        otherwise the role's default policy applies.
        """
        permission = self.find_permission(target_type, field)
        if permission is not None:
            return permission.is_allowed(action)
        return self.allow_or_deny_by_default
