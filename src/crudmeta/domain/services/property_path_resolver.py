"""Property path resolution service.

Resolves dot-delimited property paths such as ``"contacts.address.city"``
against a root entity class. Each path segment becomes a
:class:`PropertyPathNode` carrying the declared type, the element type of
collection properties, aggregated constraint markers and a simplified
business type. UI components use the nodes to pick field widgets, column
widths and validation behaviour.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, TypeVar

from crudmeta.core.exceptions import ConfigurationError
from crudmeta.core.introspection import (
    DecimalMax,
    DecimalMin,
    Digits,
    Max,
    Min,
    Size,
    Temporal,
    TemporalType,
    Valid,
    find_collection_element_type,
    find_field_metadata,
    find_getter_metadata,
    find_property_type,
    is_collection_type,
    is_number_type,
    is_unusable_type,
    qualified_name,
)
from crudmeta.core.logging import get_logger
from crudmeta.domain.services.property_path_cache import (
    PropertyPathCache,
    get_property_path_cache,
)

logger = get_logger(__name__)

M = TypeVar("M")


class BusinessType(str, Enum):
    """Simplified type of a property from an end-user perspective."""

    NUMBER = "number"  # any integral or floating point number
    DATE = "date"  # date without time
    DATE_TIME = "date_time"
    MONEY = "money"  # Decimal, commonly used for money
    TEXT = "text"


def _lower_bound(marker: Any) -> int | None:
    if isinstance(marker, Size):
        return marker.min
    if isinstance(marker, Min):
        return len(str(marker.value))
    if isinstance(marker, Digits):
        return marker.integer + marker.fraction + 1
    if isinstance(marker, (DecimalMin, DecimalMax)):
        return len(str(marker.value))
    return None


def _upper_bound(marker: Any) -> int | None:
    if isinstance(marker, Size):
        return marker.max
    if isinstance(marker, Max):
        return len(str(marker.value))
    if isinstance(marker, Digits):
        return marker.integer + marker.fraction + 1
    if isinstance(marker, (DecimalMin, DecimalMax)):
        return len(str(marker.value))
    return None


def _min_ignore_none(*values: int | None) -> int | None:
    present = [v for v in values if v is not None]
    return min(present) if present else None


def _max_ignore_none(*values: int | None) -> int | None:
    present = [v for v in values if v is not None]
    return max(present) if present else None


@dataclass(frozen=True, eq=False)
class PropertyPathNode:
    """One segment of a resolved property path.

    Nodes form a tree rooted at the first segment of a path; nodes of the
    same root type share parents. Nodes are immutable.

    Attributes:
        id: Full dotted path from the root type, e.g. ``"address.city"``.
        leaf_name: Segment after the last period, e.g. ``"city"``.
        declared_type: Declared type of the property (``list`` for ``list[Item]``).
        containing_type: Class the segment was resolved against.
        collection_element_type: Element type if the property is a collection.
        annotations: Markers from the getter followed by markers from the field.
        parent: Node of the previous segment, None for the first segment.
        business_type: Derived business type, None for structural properties.
    """

    id: str
    leaf_name: str
    declared_type: type
    containing_type: type
    collection_element_type: type | None = None
    annotations: tuple[Any, ...] = ()
    parent: "PropertyPathNode | None" = field(default=None, repr=False)
    business_type: BusinessType | None = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "business_type", self._create_business_type())

    def _create_business_type(self) -> BusinessType | None:
        if issubclass(self.declared_type, datetime):
            temporal = self.get_annotation(Temporal)
            if temporal is not None and temporal.value == TemporalType.DATE:
                return BusinessType.DATE
            return BusinessType.DATE_TIME
        if issubclass(self.declared_type, date):
            return BusinessType.DATE
        if issubclass(self.declared_type, Decimal):
            return BusinessType.MONEY
        if is_number_type(self.declared_type):
            return BusinessType.NUMBER
        if issubclass(self.declared_type, str):
            return BusinessType.TEXT
        return None

    @property
    def path_type(self) -> type:
        """Type that the next path segment is resolved against."""
        if self.collection_element_type is not None:
            return self.collection_element_type
        return self.declared_type

    @property
    def is_collection_type(self) -> bool:
        """Whether this property holds a collection."""
        return self.collection_element_type is not None

    def has_annotation(self, marker_type: type) -> bool:
        """Ask if the property carries a marker of the given type."""
        return any(isinstance(a, marker_type) for a in self.annotations)

    def get_annotation(self, marker_type: type[M]) -> M | None:
        """Get the first marker of the given type, or None."""
        for annotation in self.annotations:
            if isinstance(annotation, marker_type):
                return annotation
        return None

    def get_annotations(self, marker_type: type[M]) -> list[M]:
        """Get all markers of the given type, duplicates included."""
        return [a for a in self.annotations if isinstance(a, marker_type)]

    def _lower_length(self) -> int | None:
        return _min_ignore_none(*(_lower_bound(a) for a in self.annotations))

    def _upper_length(self) -> int | None:
        return _max_ignore_none(*(_upper_bound(a) for a in self.annotations))

    @property
    def minimum_length(self) -> int | None:
        """Minimum length derived from size, range and digit constraints.

        None when the property carries no such constraint.
        """
        return _min_ignore_none(self._lower_length(), self._upper_length())

    @property
    def maximum_length(self) -> int | None:
        """Maximum length derived from size, range and digit constraints.

        None when the property carries no such constraint.
        """
        return _max_ignore_none(self._lower_length(), self._upper_length())

    @property
    def ancestors(self) -> list["PropertyPathNode"]:
        """Nodes from the root down to and including this node."""
        chain = []
        current: PropertyPathNode | None = self
        while current is not None:
            chain.append(current)
            current = current.parent
        chain.reverse()
        return chain

    @property
    def root(self) -> "PropertyPathNode":
        """Node of the first path segment."""
        current = self
        while current.parent is not None:
            current = current.parent
        return current

    def is_validatable(self) -> bool:
        """Ask if this property is reached through cascading validation.

        True only if every ancestor carries a ``Valid`` marker on its getter
        or backing field. First-segment properties are always validatable.
        """
        ancestor = self.parent
        while ancestor is not None:
            if not ancestor.has_annotation(Valid):
                return False
            ancestor = ancestor.parent
        return True


class PropertyPathResolver:
    """Resolves property paths against root types, reading through a cache.

    Each (root type, path) pair is resolved at most once per cache. Parent
    segments are resolved through the cache too, so ``"a.b"`` and
    ``"a.b.c"`` share the node for ``"a"`` and ``"a.b"``.
    """

    def __init__(self, cache: PropertyPathCache | None = None):
        """Initialize the resolver.

        Args:
            cache: Cache to read through. Defaults to the process-wide cache.
        """
        self.cache = cache if cache is not None else get_property_path_cache()

    def resolve(self, root_type: type, property_path: str) -> PropertyPathNode:
        """Resolve a property path.

        Args:
            root_type: Class the path starts from.
            property_path: Dot-delimited property names.

        Returns:
            Node of the last path segment.

        Raises:
            ConfigurationError: If a segment is not a readable property or
                its type cannot be introspected.
        """
        return self.cache.get_or_create(
            root_type,
            property_path,
            lambda: self._resolve(root_type, property_path),
        )

    def preload(
        self, root_type: type, property_paths: Iterable[str]
    ) -> list[PropertyPathNode]:
        """Resolve several paths eagerly, e.g. at application startup.

        Surfaces configuration errors before the first request.
        """
        return [self.resolve(root_type, path) for path in property_paths]

    def _resolve(self, root_type: type, property_path: str) -> PropertyPathNode:
        full_path = f"{qualified_name(root_type)}.{property_path}"
        if not property_path:
            raise ConfigurationError(f"Invalid property path: {full_path}")

        parent_path, _, leaf_name = property_path.rpartition(".")
        if not leaf_name:
            raise ConfigurationError(f"Invalid property path: {full_path}")

        parent: PropertyPathNode | None = None
        containing_type = root_type
        if parent_path:
            parent = self.resolve(root_type, parent_path)
            containing_type = parent.path_type

        declared_type = find_property_type(containing_type, leaf_name)
        if declared_type is None or is_unusable_type(declared_type):
            raise ConfigurationError(f"Invalid property path: {full_path}")

        element_type = None
        if is_collection_type(declared_type):
            element_type = find_collection_element_type(containing_type, leaf_name)
            if element_type is None:
                raise ConfigurationError(
                    f"Cannot determine element type of collection property: {full_path}"
                )

        annotations = find_getter_metadata(containing_type, leaf_name) + find_field_metadata(
            containing_type, leaf_name
        )

        node = PropertyPathNode(
            id=property_path,
            leaf_name=leaf_name,
            declared_type=declared_type,
            containing_type=containing_type,
            collection_element_type=element_type,
            annotations=annotations,
            parent=parent,
        )
        logger.debug(
            "Resolved property path",
            property_path=full_path,
            declared_type=declared_type.__name__,
            business_type=node.business_type.value if node.business_type else None,
        )
        return node
