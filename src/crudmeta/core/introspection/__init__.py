"""Reflection primitives over annotated entity classes."""

from crudmeta.core.introspection.constraints import (
    DecimalMax,
    DecimalMin,
    Digits,
    Max,
    Min,
    NotBlank,
    NotNull,
    Size,
    Temporal,
    TemporalType,
    Valid,
    constrained,
)
from crudmeta.core.introspection.reflection import (
    find_collection_element_type,
    find_declaring_class,
    find_field_metadata,
    find_getter,
    find_getter_metadata,
    find_property_annotation,
    find_property_type,
    is_collection_type,
    is_number_type,
    is_unusable_type,
    qualified_name,
    unwrap_annotation,
)

__all__ = [
    "DecimalMax",
    "DecimalMin",
    "Digits",
    "Max",
    "Min",
    "NotBlank",
    "NotNull",
    "Size",
    "Temporal",
    "TemporalType",
    "Valid",
    "constrained",
    "find_collection_element_type",
    "find_declaring_class",
    "find_field_metadata",
    "find_getter",
    "find_getter_metadata",
    "find_property_annotation",
    "find_property_type",
    "is_collection_type",
    "is_number_type",
    "is_unusable_type",
    "qualified_name",
    "unwrap_annotation",
]
