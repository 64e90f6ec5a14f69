"""Authentication infrastructure."""

from crudmeta.infrastructure.auth.password_hasher import (
    hash_password,
    needs_rehash,
    verify_password,
)

__all__ = ["hash_password", "needs_rehash", "verify_password"]
