"""Application services."""

from crudmeta.application.services.security_service import SecurityService

__all__ = ["SecurityService"]
