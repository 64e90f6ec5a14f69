"""Cache of resolved property paths.

Resolved property paths are static metadata: the set of keys is bounded by
the declared entity properties, so entries are kept for the lifetime of the
process without TTL or eviction. Thread-safe for concurrent sessions.
"""

import threading
from typing import TYPE_CHECKING, Callable

from crudmeta.core.logging import get_logger

if TYPE_CHECKING:
    from crudmeta.domain.services.property_path_resolver import PropertyPathNode

logger = get_logger(__name__)


class PropertyPathCache:
    """Thread-safe map of (root type, property path) to resolved node.

    Writes are idempotent: when two sessions resolve the same path at the
    same time, the first stored node is kept and returned to both.
    """

    def __init__(self) -> None:
        self._cache: dict[tuple[type, str], "PropertyPathNode"] = {}
        self._lock = threading.RLock()

    def _make_key(self, root_type: type, property_path: str) -> tuple[type, str]:
        return (root_type, property_path)

    def get(self, root_type: type, property_path: str) -> "PropertyPathNode | None":
        """Get a resolved node.

        Args:
            root_type: Root class of the property path.
            property_path: Dot-delimited property path.

        Returns:
            The cached node, or None if the path was not resolved yet.
        """
        key = self._make_key(root_type, property_path)
        with self._lock:
            return self._cache.get(key)

    def set(
        self, root_type: type, property_path: str, node: "PropertyPathNode"
    ) -> "PropertyPathNode":
        """Store a resolved node unless one is already cached.

        Returns:
            The node held by the cache after the call.
        """
        key = self._make_key(root_type, property_path)
        with self._lock:
            return self._cache.setdefault(key, node)

    def get_or_create(
        self,
        root_type: type,
        property_path: str,
        factory: Callable[[], "PropertyPathNode"],
    ) -> "PropertyPathNode":
        """Read-through lookup.

        The factory runs outside the lock, so a slow resolution never blocks
        readers of other paths.

        Args:
            root_type: Root class of the property path.
            property_path: Dot-delimited property path.
            factory: Called on a miss to resolve the node.

        Returns:
            The cached node.
        """
        node = self.get(root_type, property_path)
        if node is not None:
            return node

        node = factory()
        logger.debug(
            "Caching resolved property path",
            root_type=root_type.__name__,
            property_path=property_path,
        )
        return self.set(root_type, property_path, node)

    def contains(self, root_type: type, property_path: str) -> bool:
        """Check whether a path has been resolved."""
        key = self._make_key(root_type, property_path)
        with self._lock:
            return key in self._cache

    def clear(self) -> None:
        """Drop all entries. Intended for tests and application restarts."""
        with self._lock:
            self._cache.clear()

    def size(self) -> int:
        """Get current cache size.

        Returns:
            Number of entries in cache.
        """
        with self._lock:
            return len(self._cache)


# Process-wide cache instance
_property_path_cache: PropertyPathCache | None = None
_instance_lock = threading.Lock()


def get_property_path_cache() -> PropertyPathCache:
    """Get the process-wide property path cache.

    Returns:
        PropertyPathCache: Shared cache instance, created on first use.
    """
    global _property_path_cache
    if _property_path_cache is None:
        with _instance_lock:
            if _property_path_cache is None:
                _property_path_cache = PropertyPathCache()
                logger.info("Property path cache initialized")
    return _property_path_cache
