"""User repository for database operations."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from crudmeta.domain.entities import User
from crudmeta.infrastructure.persistence.models import RoleModel, UserModel
from crudmeta.infrastructure.persistence.repositories.role_repository import role_to_entity


def user_to_entity(model: UserModel) -> User:
    """Map a user row, with roles and permissions loaded, to the domain entity."""
    return User(
        login_name=model.login_name,
        login_password_hash=model.login_password_hash,
        id=model.id,
        roles=[role_to_entity(role) for role in model.roles],
        enabled=model.enabled,
        account_expired=model.account_expired,
        account_locked=model.account_locked,
        credentials_expired=model.credentials_expired,
    )


class UserRepository:
    """Repository for user database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, user: UserModel, role_names: list[str] | None = None) -> UserModel:
        """Create a new user holding the given roles.

        Args:
            user: User model to create.
            role_names: Names of existing roles to assign.

        Returns:
            Created user model.

        Raises:
            ValueError: If a role name does not exist.
        """
        roles: list[RoleModel] = []
        for name in role_names or []:
            result = await self.session.execute(select(RoleModel).where(RoleModel.name == name))
            role = result.scalar_one_or_none()
            if role is None:
                raise ValueError(f"Role not found: {name}")
            roles.append(role)

        user.roles = roles
        self.session.add(user)
        await self.session.flush()
        return user

    async def get_by_login_name(self, login_name: str) -> UserModel | None:
        """Get a user by login name with roles and permissions eagerly loaded.

        Args:
            login_name: Login name.

        Returns:
            User model if found, None otherwise.
        """
        result = await self.session.execute(
            select(UserModel)
            .where(UserModel.login_name == login_name)
            .options(selectinload(UserModel.roles).selectinload(RoleModel.permissions))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_principal(self, login_name: str) -> User | None:
        """Load a fully materialised principal for authorization checks.

        Returns:
            User entity with roles and permissions, None if not found.
        """
        model = await self.get_by_login_name(login_name)
        if model is None:
            return None
        return user_to_entity(model)

    async def assign_role(self, login_name: str, role_name: str) -> bool:
        """Give an existing user an existing role.

        Returns:
            True if assigned, False if the user or role does not exist.
        """
        user = await self.get_by_login_name(login_name)
        result = await self.session.execute(select(RoleModel).where(RoleModel.name == role_name))
        role = result.scalar_one_or_none()
        if user is None or role is None:
            return False
        if role not in user.roles:
            user.roles.append(role)
            await self.session.flush()
        return True
