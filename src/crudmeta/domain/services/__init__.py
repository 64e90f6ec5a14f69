"""Domain services for crudmeta.

Services contain business logic that doesn't naturally fit within a single entity.
They have no dependencies on infrastructure or external frameworks.
"""

from crudmeta.domain.services.access import (
    AccessCapability,
    AccessPolicy,
    FieldAccess,
    TypeAccess,
)
from crudmeta.domain.services.authorization import (
    AuthorizationEngine,
    authorization_engine,
)
from crudmeta.domain.services.property_path_cache import (
    PropertyPathCache,
    get_property_path_cache,
)
from crudmeta.domain.services.property_path_resolver import (
    BusinessType,
    PropertyPathNode,
    PropertyPathResolver,
)

__all__ = [
    "AccessCapability",
    "AccessPolicy",
    "AuthorizationEngine",
    "BusinessType",
    "FieldAccess",
    "PropertyPathCache",
    "PropertyPathNode",
    "PropertyPathResolver",
    "TypeAccess",
    "authorization_engine",
    "get_property_path_cache",
]
