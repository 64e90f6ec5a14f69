"""Exceptions raised by the crudmeta core.

Authorization denial is not an exception: permission checks return booleans
and callers hide or disable the affected UI affordance.
"""


class CrudMetaError(Exception):
    """Base class for all crudmeta errors."""
    pass


class ConfigurationError(CrudMetaError):
    """Raised for programmer or administrator mistakes.

    Examples are a property path that does not exist, a collection property
    whose element type cannot be determined, or a malformed permission record.
    """
    pass


class AuthenticationError(CrudMetaError):
    """Base class for login failures."""
    pass


class LoginNameNotFoundError(AuthenticationError):
    """No user exists with the given login name."""
    pass


class IncorrectCredentialsError(AuthenticationError):
    """The password does not match."""
    pass


class AccountExpiredError(AuthenticationError):
    """The user's account has expired."""
    pass


class AccountLockedError(AuthenticationError):
    """The user's account is locked."""
    pass


class CredentialsExpiredError(AuthenticationError):
    """The user's password has expired."""
    pass


class AccountDisabledError(AuthenticationError):
    """The user's account is disabled."""
    pass
