"""Current login name tracking using ContextVars.

Stores the login name of the user driving the current request or task so
that code far from the session (auditing, logging) can read it without
explicit parameter passing.
"""

from contextvars import ContextVar
from typing import Optional

from crudmeta.core.config import get_settings

_current_login_name: ContextVar[Optional[str]] = ContextVar(
    "current_login_name", default=None
)


def get_current_login_name() -> str:
    """Get the login name of the current user.

    Returns:
        The bound login name, or the configured system user name when
        nobody is logged in (unit tests, batch processes).
    """
    login_name = _current_login_name.get()
    if login_name is None:
        return get_settings().system_user_name
    return login_name


def set_current_login_name(login_name: str) -> None:
    """Bind the login name of the current user.

    Args:
        login_name: The login name to bind.
    """
    _current_login_name.set(login_name)


def clear_current_login_name() -> None:
    """Clear the bound login name."""
    _current_login_name.set(None)
