"""Persistence repositories for database operations."""

from crudmeta.infrastructure.persistence.repositories.role_repository import (
    RoleRepository,
    permission_to_entity,
    role_to_entity,
)
from crudmeta.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
    user_to_entity,
)

__all__ = [
    "RoleRepository",
    "UserRepository",
    "permission_to_entity",
    "role_to_entity",
    "user_to_entity",
]
