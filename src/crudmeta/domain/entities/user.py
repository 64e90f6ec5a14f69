"""User entity: the principal whose roles drive authorization.

Users aggregate zero or more roles. The authorization queries exposed here
are pure in-memory checks against the roles and permissions loaded with the
user; they never touch the database.
"""

from dataclasses import dataclass, field

from crudmeta.core.exceptions import ConfigurationError
from crudmeta.domain.entities.permission import PermissionAction
from crudmeta.domain.entities.role import Role


@dataclass
class User:
    """User entity representing an authenticated principal.

    Attributes:
        login_name: Unique login name.
        login_password_hash: Argon2 hash of the login password.
        id: Unique identifier (auto-generated).
        roles: Roles held by the user.
        enabled: Whether the user can log in.
        account_expired: Whether the account has expired.
        account_locked: Whether the account is locked.
        credentials_expired: Whether the password has expired.
    """

    login_name: str
    login_password_hash: str | None = None
    id: int | None = None
    roles: list[Role] = field(default_factory=list)
    enabled: bool = True
    account_expired: bool = False
    account_locked: bool = False
    credentials_expired: bool = False
    _unrestricted: bool = field(default=False, init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate user data after initialization."""
        if not self.login_name or not self.login_name.strip():
            raise ConfigurationError("Login name is required")

    @classmethod
    def system_user(cls, login_name: str = "system") -> "User":
        """Create the unrestricted system principal.

        The system user holds no roles and is granted every action. It is
        meant for unit tests and non-interactive processes that run without
        a login.
        """
        user = cls(login_name=login_name)
        user._unrestricted = True
        return user

    @property
    def is_unrestricted(self) -> bool:
        """Whether this is the unrestricted system principal."""
        return self._unrestricted

    @property
    def role_names(self) -> list[str]:
        return [role.name for role in self.roles]

    def has_role(self, name: str) -> bool:
        """Ask if the user holds a role with the given name."""
        return any(role.name == name for role in self.roles)

    def add_role(self, role: Role) -> None:
        if not self.has_role(role.name):
            self.roles.append(role)

    def is_allowed(
        self, action: PermissionAction, target_type: str, field: str | None = None
    ) -> bool:
        """Ask if the user may perform an action on a type or field."""
        from crudmeta.domain.services.authorization import authorization_engine

        return authorization_engine.is_allowed(self, action, target_type, field)

    def is_view_allowed(self, target_type: str, field: str | None = None) -> bool:
        """Ask if the user may view a type, or a field of a type."""
        return self.is_allowed(PermissionAction.VIEW, target_type, field)

    def is_create_allowed(self, target_type: str, field: str | None = None) -> bool:
        """Ask if the user may create instances of a type.

        Create is type-scoped: passing a field always yields False.
        """
        return self.is_allowed(PermissionAction.CREATE, target_type, field)

    def is_edit_allowed(self, target_type: str, field: str | None = None) -> bool:
        """Ask if the user may edit a type, or a field of a type."""
        return self.is_allowed(PermissionAction.EDIT, target_type, field)

    def is_delete_allowed(self, target_type: str, field: str | None = None) -> bool:
        """Ask if the user may delete instances of a type.

        Delete is type-scoped: passing a field always yields False.
        """
        return self.is_allowed(PermissionAction.DELETE, target_type, field)
