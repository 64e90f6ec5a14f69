"""Constraint and marker metadata for entity properties.

Markers are attached to properties with ``typing.Annotated``, either on a
declared attribute or on a property getter's return annotation::

    @dataclass
    class Account:
        name: Annotated[str, NotBlank(), Size(min=1, max=64)]
        balance: Annotated[Decimal, Digits(integer=10, fraction=2)]

        @property
        def primary_contact(self) -> Annotated[Contact, Valid()]:
            ...

Getters may also be decorated with :func:`constrained`.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, TypeVar

F = TypeVar("F", bound=Callable[..., Any])

GETTER_CONSTRAINTS_ATTR = "__crudmeta_constraints__"


class TemporalType(str, Enum):
    """Precision of a temporal property."""

    DATE = "date"
    TIME = "time"
    TIMESTAMP = "timestamp"


@dataclass(frozen=True)
class Size:
    """Length bounds of a text or collection property.

    Attributes:
        min: Minimum length (inclusive).
        max: Maximum length (inclusive), None for unbounded.
    """

    min: int = 0
    max: int | None = None

    def __post_init__(self) -> None:
        if self.min < 0:
            raise ValueError("Size.min must not be negative")
        if self.max is not None and self.max < self.min:
            raise ValueError("Size.max must not be smaller than Size.min")


@dataclass(frozen=True)
class Min:
    """Smallest allowed integral value."""

    value: int


@dataclass(frozen=True)
class Max:
    """Largest allowed integral value."""

    value: int


@dataclass(frozen=True)
class DecimalMin:
    """Smallest allowed decimal value, kept in its string form."""

    value: str | Decimal


@dataclass(frozen=True)
class DecimalMax:
    """Largest allowed decimal value, kept in its string form."""

    value: str | Decimal


@dataclass(frozen=True)
class Digits:
    """Maximum number of integral and fractional digits."""

    integer: int
    fraction: int = 0


@dataclass(frozen=True)
class NotNull:
    """Property must have a value."""


@dataclass(frozen=True)
class NotBlank:
    """Text property must contain at least one non-whitespace character."""


@dataclass(frozen=True)
class Valid:
    """Cascade validation into the referenced object."""


@dataclass(frozen=True)
class Temporal:
    """Declares the precision of a date/time property."""

    value: TemporalType = TemporalType.TIMESTAMP


def constrained(*markers: Any) -> Callable[[F], F]:
    """Attach markers to a property getter.

    Apply below ``@property``::

        @property
        @constrained(Valid())
        def address(self) -> Address:
            return self._address

    Args:
        *markers: Marker instances to attach.

    Returns:
        Decorator that records the markers on the getter function.
    """

    def decorator(func: F) -> F:
        existing = getattr(func, GETTER_CONSTRAINTS_ATTR, ())
        setattr(func, GETTER_CONSTRAINTS_ATTR, tuple(existing) + tuple(markers))
        return func

    return decorator
