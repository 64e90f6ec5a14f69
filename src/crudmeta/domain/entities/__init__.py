"""Domain entities for crudmeta.

Entities are pure Python dataclasses that represent core business concepts.
They have no dependencies on infrastructure or external frameworks.
"""

from crudmeta.domain.entities.permission import Permission, PermissionAction
from crudmeta.domain.entities.role import Role
from crudmeta.domain.entities.user import User

__all__ = [
    "Permission",
    "PermissionAction",
    "Role",
    "User",
]
