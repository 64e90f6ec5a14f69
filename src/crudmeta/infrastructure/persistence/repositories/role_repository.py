"""Role repository for database operations."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from crudmeta.core.exceptions import ConfigurationError
from crudmeta.core.logging import get_logger
from crudmeta.domain.entities import Permission, Role
from crudmeta.infrastructure.persistence.models import PermissionModel, RoleModel

logger = get_logger(__name__)


def permission_to_entity(model: PermissionModel) -> Permission:
    """Map a permission row to the domain entity.

    Raises:
        ConfigurationError: If the stored row is malformed, e.g. a field-level
            row granting create or delete.
    """
    return Permission(
        target_type=model.target_type,
        field=model.field,
        view_allowed=model.view_allowed,
        create_allowed=model.create_allowed,
        edit_allowed=model.edit_allowed,
        delete_allowed=model.delete_allowed,
        role_id=model.role_id,
        id=model.id,
    )


def role_to_entity(model: RoleModel) -> Role:
    """Map a role row, with its loaded permissions, to the domain entity."""
    return Role(
        name=model.name,
        allow_or_deny_by_default=model.allow_or_deny_by_default,
        description=model.description,
        id=model.id,
        permissions=[permission_to_entity(p) for p in model.permissions],
    )


class RoleRepository:
    """Repository for role and permission database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, role: RoleModel) -> RoleModel:
        """Create a new role.

        Args:
            role: Role model to create.

        Returns:
            Created role model.
        """
        self.session.add(role)
        await self.session.flush()
        logger.info("Role created", role_id=role.id, role_name=role.name)
        return role

    async def get_by_id(self, role_id: int) -> RoleModel | None:
        """Get a role by ID, with its permissions loaded."""
        result = await self.session.execute(
            select(RoleModel)
            .where(RoleModel.id == role_id)
            .options(selectinload(RoleModel.permissions))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_by_name(self, name: str) -> RoleModel | None:
        """Get a role by name, with its permissions loaded.

        Args:
            name: Role name.

        Returns:
            Role model if found, None otherwise.
        """
        result = await self.session.execute(
            select(RoleModel)
            .where(RoleModel.name == name)
            .options(selectinload(RoleModel.permissions))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> list[RoleModel]:
        """List all roles ordered by name, with their permissions loaded."""
        result = await self.session.execute(
            select(RoleModel)
            .options(selectinload(RoleModel.permissions))
            .order_by(RoleModel.name)
        )
        return list(result.scalars().all())

    async def permission_exists(self, target_type: str, field: str | None) -> bool:
        """Check if any role already has a permission for (target type, field).

        NULL fields are compared explicitly because the unique constraint
        treats NULLs as distinct.
        """
        field_clause = (
            PermissionModel.field.is_(None) if field is None else PermissionModel.field == field
        )
        result = await self.session.execute(
            select(PermissionModel.id).where(
                PermissionModel.target_type == target_type,
                field_clause,
            )
        )
        return result.first() is not None

    async def add_permission(self, role_id: int, permission: Permission) -> PermissionModel:
        """Persist an explicit permission for a role.

        Args:
            role_id: Owning role ID.
            permission: Permission entity, validated again before insert.

        Returns:
            Created permission model.

        Raises:
            ConfigurationError: If the permission is malformed, e.g. grants
                create or delete on a field, or a permission for the same
                (target type, field) pair already exists.
        """
        permission.validate()
        if await self.permission_exists(permission.target_type, permission.field):
            raise ConfigurationError(f"Permission for {permission.name} already exists")

        model = PermissionModel(
            role_id=role_id,
            target_type=permission.target_type,
            field=permission.field,
            view_allowed=permission.view_allowed,
            create_allowed=permission.create_allowed,
            edit_allowed=permission.edit_allowed,
            delete_allowed=permission.delete_allowed,
        )
        self.session.add(model)
        await self.session.flush()
        permission.id = model.id
        permission.role_id = role_id
        logger.info(
            "Permission added",
            role_id=role_id,
            permission=permission.name,
            granted=[a.value for a in permission.granted_actions],
        )
        return model

    async def remove_permission(self, permission_id: int) -> bool:
        """Delete a permission by ID.

        Returns:
            True if deleted, False if not found.
        """
        permission = await self.session.get(PermissionModel, permission_id)
        if permission is None:
            return False
        await self.session.delete(permission)
        await self.session.flush()
        return True

    async def delete(self, role_id: int) -> bool:
        """Delete a role together with its permissions and user assignments.

        Returns:
            True if deleted, False if not found.
        """
        result = await self.session.execute(
            select(RoleModel)
            .where(RoleModel.id == role_id)
            .options(selectinload(RoleModel.permissions), selectinload(RoleModel.users))
        )
        role = result.scalar_one_or_none()
        if role is None:
            return False
        await self.session.delete(role)
        await self.session.flush()
        logger.info("Role deleted", role_id=role_id)
        return True

    async def get_entity(self, name: str) -> Role | None:
        """Get a role as a domain entity."""
        model = await self.get_by_name(name)
        if model is None:
            return None
        return role_to_entity(model)
