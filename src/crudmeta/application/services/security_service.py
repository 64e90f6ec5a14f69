"""Security service for logging in and out and tracking the current user.

One instance lives per UI session. The current user is loaded once at login
together with its roles and permissions, so that every authorization query
afterwards is answered from memory.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from crudmeta.core.config import Settings, get_settings
from crudmeta.core.context import clear_current_login_name, set_current_login_name
from crudmeta.core.exceptions import (
    AccountDisabledError,
    AccountExpiredError,
    AccountLockedError,
    CredentialsExpiredError,
    IncorrectCredentialsError,
    LoginNameNotFoundError,
)
from crudmeta.core.logging import get_logger
from crudmeta.domain.entities import User
from crudmeta.domain.services.access import AccessPolicy
from crudmeta.infrastructure.auth import verify_password
from crudmeta.infrastructure.persistence.repositories import UserRepository

logger = get_logger(__name__)


class SecurityService:
    """Session-scoped login state.

    Example:
        async with db.session() as session:
            security = SecurityService(session)
            await security.login("jdoe", "secret")
            security.current_user.is_edit_allowed("Account", "name")
    """

    def __init__(self, session: AsyncSession, settings: Settings | None = None) -> None:
        """Initialize the service.

        Args:
            session: Database session used to load users at login.
            settings: Optional settings, loaded from the environment if omitted.
        """
        self.session = session
        self.settings = settings or get_settings()
        self.user_repo = UserRepository(session)
        self._current_user: User | None = None

    @property
    def current_user(self) -> User | None:
        """User entity of the logged-in user, with roles and permissions."""
        return self._current_user

    def set_current_user(self, user: User | None) -> None:
        """Set the current user programmatically, e.g. in tests."""
        self._current_user = user

    @property
    def access(self) -> AccessPolicy:
        """Access capabilities of the current user.

        Raises:
            RuntimeError: If nobody is logged in.
        """
        if self._current_user is None:
            raise RuntimeError("No user is logged in")
        return AccessPolicy(self._current_user)

    async def login(self, login_name: str | None, login_password: str | None) -> User:
        """Log in and cache the current user in the session.

        Args:
            login_name: Login name; surrounding whitespace is ignored.
            login_password: Plaintext password.

        Returns:
            The logged-in user.

        Raises:
            LoginNameNotFoundError: If no user has this login name.
            IncorrectCredentialsError: If the password does not match.
            AccountExpiredError, AccountLockedError, CredentialsExpiredError,
            AccountDisabledError: If the account may not log in.
        """
        self.logout()

        login_name = (login_name or "").strip()
        login_password = login_password or ""

        user = await self.user_repo.get_principal(login_name)
        if user is None:
            logger.warning("Login rejected - unknown login name", login_name=login_name)
            raise LoginNameNotFoundError(login_name)

        if not user.login_password_hash or not verify_password(
            login_password, user.login_password_hash
        ):
            logger.warning("Login rejected - incorrect credentials", login_name=login_name)
            raise IncorrectCredentialsError(login_name)

        self.assert_login_allowed(user)

        self._current_user = user
        set_current_login_name(login_name)
        logger.info("User logged in", login_name=login_name, roles=user.role_names)
        return user

    @staticmethod
    def assert_login_allowed(user: User) -> None:
        """Assert that the given user is allowed to log in.

        Raises:
            AuthenticationError: Subclass describing why login is refused.
        """
        if user.account_expired:
            raise AccountExpiredError(user.login_name)
        if user.account_locked:
            raise AccountLockedError(user.login_name)
        if user.credentials_expired:
            raise CredentialsExpiredError(user.login_name)
        if not user.enabled:
            raise AccountDisabledError(user.login_name)

    def login_as_system_user(self) -> User:
        """Log in as the unrestricted system user.

        For tests and processes that run without authentication; the system
        user has full rights without restrictions.
        """
        user = User.system_user(self.settings.system_user_name)
        self._current_user = user
        set_current_login_name(user.login_name)
        logger.info("System user logged in", login_name=user.login_name)
        return user

    def logout(self) -> None:
        """Clear the current user and the bound login name."""
        if self._current_user is not None:
            logger.info("User logged out", login_name=self._current_user.login_name)
        self._current_user = None
        clear_current_login_name()
