"""SQLAlchemy models for users, roles and permissions.

All models inherit from the Base class defined in database.py.
"""

from crudmeta.infrastructure.persistence.models.permission import PermissionModel
from crudmeta.infrastructure.persistence.models.role import RoleModel
from crudmeta.infrastructure.persistence.models.user import UserModel
from crudmeta.infrastructure.persistence.models.user_role import UserRoleModel

__all__ = [
    "PermissionModel",
    "RoleModel",
    "UserModel",
    "UserRoleModel",
]
