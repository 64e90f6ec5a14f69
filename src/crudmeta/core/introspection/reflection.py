"""Reflection helpers for entity classes.

A readable property of a class is either a ``property`` with a getter, or an
annotated attribute (dataclass field or plain class annotation) declared
somewhere in the class hierarchy. Lookups return ``None`` or an empty tuple
when nothing is found; they never raise for a missing property.
"""

import inspect
import numbers
import types
from collections.abc import Collection, Mapping
from decimal import Decimal
from typing import Annotated, Any, Callable, ClassVar, TypeVar, Union, get_args, get_origin, get_type_hints

from crudmeta.core.exceptions import ConfigurationError
from crudmeta.core.introspection.constraints import GETTER_CONSTRAINTS_ATTR


def qualified_name(tp: Any) -> str:
    """Return ``module.QualName`` for a class."""
    return f"{tp.__module__}.{tp.__qualname__}"


def unwrap_annotation(annotation: Any) -> tuple[Any, tuple[Any, ...]]:
    """Strip ``Annotated`` and ``Optional`` wrappers from a type annotation.

    Args:
        annotation: A resolved type annotation.

    Returns:
        Tuple of (bare type, metadata found in ``Annotated`` layers).
    """
    metadata: list[Any] = []
    while True:
        origin = get_origin(annotation)
        if origin is Annotated:
            args = get_args(annotation)
            annotation = args[0]
            metadata.extend(args[1:])
            continue
        if origin is Union or origin is types.UnionType:
            non_null = [arg for arg in get_args(annotation) if arg is not type(None)]
            if len(non_null) == 1:
                annotation = non_null[0]
                continue
        return annotation, tuple(metadata)


def _type_hints(obj: Any) -> dict[str, Any]:
    try:
        return get_type_hints(obj, include_extras=True)
    except (NameError, TypeError) as e:
        raise ConfigurationError(f"Cannot introspect annotations of {obj!r}: {e}") from e


def find_getter(cls: type, name: str) -> Callable[..., Any] | None:
    """Find the getter of a ``property`` named ``name`` in the class hierarchy.

    A plain class attribute (e.g. a dataclass default) shadows properties
    further up the hierarchy.
    """
    for klass in cls.__mro__:
        if name not in klass.__dict__:
            continue
        attr = klass.__dict__[name]
        if isinstance(attr, property):
            return attr.fget
        return None
    return None


def find_declaring_class(cls: type, name: str) -> type | None:
    """Find the first class in the hierarchy that physically declares ``name``.

    Only annotated attributes count as declarations; ``ClassVar`` annotations
    are ignored.

    Args:
        cls: Class to start the search from.
        name: Attribute name.

    Returns:
        The declaring class, or None if no class in ``cls.__mro__`` declares it.
    """
    for klass in cls.__mro__:
        if name in inspect.get_annotations(klass):
            annotation = _type_hints(klass).get(name)
            if get_origin(annotation) is ClassVar or annotation is ClassVar:
                return None
            return klass
    return None


def find_property_annotation(cls: Any, name: str) -> Any | None:
    """Get the declared annotation of a readable property, generics preserved.

    The getter's return annotation takes precedence over a declared attribute.

    Returns:
        The unwrapped annotation (e.g. ``list[Item]``), or None if ``cls`` has
        no readable property ``name``.
    """
    if not isinstance(cls, type):
        return None

    getter = find_getter(cls, name)
    if getter is not None:
        returned = _type_hints(getter).get("return")
        if returned is not None:
            return unwrap_annotation(returned)[0]

    declaring = find_declaring_class(cls, name)
    if declaring is None:
        return None
    return unwrap_annotation(_type_hints(declaring)[name])[0]


def find_property_type(cls: Any, name: str) -> Any | None:
    """Get the declared raw type of a readable property.

    ``list[Item]`` is reported as ``list``, ``Optional[str]`` as ``str``.

    Returns:
        The declared type, or None if the property does not exist.
    """
    annotation = find_property_annotation(cls, name)
    if annotation is None:
        return None
    return get_origin(annotation) or annotation


def find_getter_metadata(cls: type, name: str) -> tuple[Any, ...]:
    """Collect markers attached to the getter of property ``name``.

    Includes ``Annotated`` metadata from the return annotation and markers
    added with ``@constrained``.
    """
    getter = find_getter(cls, name)
    if getter is None:
        return ()

    metadata: tuple[Any, ...] = ()
    returned = _type_hints(getter).get("return")
    if returned is not None:
        metadata += unwrap_annotation(returned)[1]
    metadata += tuple(getattr(getter, GETTER_CONSTRAINTS_ATTR, ()))
    return metadata


def find_field_metadata(cls: type, name: str) -> tuple[Any, ...]:
    """Collect markers attached to the declared attribute ``name``.

    Walks up the hierarchy and stops at the first class that declares the
    attribute; markers of re-declarations further up are not included.
    """
    declaring = find_declaring_class(cls, name)
    if declaring is None:
        return ()
    return unwrap_annotation(_type_hints(declaring)[name])[1]


def is_collection_type(tp: Any) -> bool:
    """Check whether a type is a collection of elements.

    Text, bytes and mappings are not collections.
    """
    origin = get_origin(tp) or tp
    if not isinstance(origin, type):
        return False
    if issubclass(origin, (str, bytes, bytearray, Mapping)):
        return False
    return issubclass(origin, Collection)


def find_collection_element_type(cls: type, name: str) -> type | None:
    """Get the element type declared for a collection property.

    ``list[Item]``, ``set[Item]`` and ``tuple[Item, ...]`` yield ``Item``.

    Returns:
        The element type, or None when the property is not a collection or
        its element type is not declared (bare ``list``, ``list[Any]``).
    """
    annotation = find_property_annotation(cls, name)
    if annotation is None or not is_collection_type(annotation):
        return None

    args = get_args(annotation)
    if not args:
        return None
    if get_origin(annotation) is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            element = args[0]
        elif all(arg == args[0] for arg in args):
            element = args[0]
        else:
            return None
    else:
        element = args[0]

    element = unwrap_annotation(element)[0]
    element = get_origin(element) or element
    if is_unusable_type(element):
        return None
    return element


def is_unusable_type(tp: Any) -> bool:
    """Check whether a declared type is too generic to describe a property."""
    if tp is Any or tp is object or isinstance(tp, TypeVar):
        return True
    return not isinstance(tp, type)


def is_number_type(tp: Any) -> bool:
    """Check whether a type is numeric (excluding bool and Decimal)."""
    if not isinstance(tp, type):
        return False
    if issubclass(tp, (bool, Decimal)):
        return False
    return issubclass(tp, numbers.Number)
