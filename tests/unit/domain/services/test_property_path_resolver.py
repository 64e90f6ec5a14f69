"""Unit tests for PropertyPathResolver and PropertyPathNode."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, Any

import pytest

from crudmeta.core.exceptions import ConfigurationError
from crudmeta.core.introspection import (
    DecimalMax,
    DecimalMin,
    Digits,
    Max,
    Min,
    NotBlank,
    Size,
    Temporal,
    TemporalType,
    Valid,
    constrained,
)
from crudmeta.domain.services.property_path_cache import (
    PropertyPathCache,
    get_property_path_cache,
)
from crudmeta.domain.services.property_path_resolver import (
    BusinessType,
    PropertyPathResolver,
)


@dataclass
class Country:
    code: Annotated[str, Size(min=2, max=2)]
    name: str


@dataclass
class Address:
    street: Annotated[str, Size(max=80)]
    city: str
    country: Country
    postage: Decimal


@dataclass
class LineItem:
    quantity: Annotated[int, Min(1), Max(9999)]
    price: Annotated[Decimal, Digits(integer=8, fraction=2)]


@dataclass
class Customer:
    name: Annotated[str, NotBlank(), Size(min=1, max=64)]
    born_on: date
    created: datetime
    birthday: Annotated[datetime, Temporal(TemporalType.DATE)]
    credit_limit: Annotated[Decimal, DecimalMin("0.00"), DecimalMax("99999.99")]
    age: int
    rating: float
    active: bool
    address: Annotated[Address, Valid()]
    billing_address: Address
    items: Annotated[list[LineItem], Valid()]
    notes: list = field(default_factory=list)
    extra: Any = None
    nickname: str | None = None

    @property
    @constrained(Valid())
    def primary_item(self) -> LineItem:
        return self.items[0]


class Coded:
    code: Annotated[str, Size(max=10)]


class CodedView(Coded):
    @property
    def code(self) -> Annotated[str, Size(max=10), NotBlank()]:
        return "x"


@pytest.fixture
def resolver() -> PropertyPathResolver:
    return PropertyPathResolver(cache=PropertyPathCache())


class TestBusinessType:
    """Test business type derivation from declared types."""

    @pytest.mark.parametrize(
        "path,expected",
        [
            ("name", BusinessType.TEXT),
            ("nickname", BusinessType.TEXT),
            ("born_on", BusinessType.DATE),
            ("created", BusinessType.DATE_TIME),
            ("birthday", BusinessType.DATE),
            ("credit_limit", BusinessType.MONEY),
            ("age", BusinessType.NUMBER),
            ("rating", BusinessType.NUMBER),
            ("address.city", BusinessType.TEXT),
            ("items.quantity", BusinessType.NUMBER),
        ],
    )
    def test_business_types(self, resolver, path, expected):
        assert resolver.resolve(Customer, path).business_type == expected

    @pytest.mark.parametrize("path", ["active", "address", "items", "primary_item"])
    def test_structural_properties_have_no_business_type(self, resolver, path):
        assert resolver.resolve(Customer, path).business_type is None

    def test_money_does_not_depend_on_validation_chain(self, resolver):
        """Decimal stays MONEY whether or not the path cascades validation."""
        cascaded = resolver.resolve(Customer, "address.postage")
        plain = resolver.resolve(Customer, "billing_address.postage")

        assert cascaded.is_validatable() is True
        assert plain.is_validatable() is False
        assert cascaded.business_type == BusinessType.MONEY
        assert plain.business_type == BusinessType.MONEY


class TestNodeStructure:
    """Test node attributes and the parent chain."""

    def test_first_segment(self, resolver):
        node = resolver.resolve(Customer, "address")

        assert node.id == "address"
        assert node.leaf_name == "address"
        assert node.declared_type is Address
        assert node.containing_type is Customer
        assert node.parent is None
        assert node.root is node
        assert node.is_collection_type is False
        assert node.path_type is Address

    def test_nested_segment(self, resolver):
        node = resolver.resolve(Customer, "address.country.code")

        assert node.id == "address.country.code"
        assert node.leaf_name == "code"
        assert node.containing_type is Country
        assert node.parent.id == "address.country"
        assert node.root.id == "address"
        assert [n.id for n in node.ancestors] == [
            "address",
            "address.country",
            "address.country.code",
        ]

    def test_collection_property(self, resolver):
        node = resolver.resolve(Customer, "items")

        assert node.is_collection_type is True
        assert node.declared_type is list
        assert node.collection_element_type is LineItem
        assert node.path_type is LineItem

    def test_path_through_collection(self, resolver):
        node = resolver.resolve(Customer, "items.price")

        assert node.containing_type is LineItem
        assert node.declared_type is Decimal

    def test_nodes_are_immutable(self, resolver):
        node = resolver.resolve(Customer, "name")
        with pytest.raises(AttributeError):
            node.leaf_name = "other"


class TestValidatable:
    """Test the cascading validation chain."""

    def test_first_segment_is_validatable(self, resolver):
        assert resolver.resolve(Customer, "billing_address").is_validatable() is True

    def test_valid_on_field(self, resolver):
        assert resolver.resolve(Customer, "address.street").is_validatable() is True

    def test_valid_on_collection(self, resolver):
        assert resolver.resolve(Customer, "items.price").is_validatable() is True

    def test_valid_on_getter(self, resolver):
        assert resolver.resolve(Customer, "primary_item.price").is_validatable() is True

    def test_missing_valid_on_parent(self, resolver):
        assert resolver.resolve(Customer, "billing_address.street").is_validatable() is False

    def test_missing_valid_further_up(self, resolver):
        """Every ancestor needs the marker, not just the root."""
        assert resolver.resolve(Customer, "address.country").is_validatable() is True
        assert resolver.resolve(Customer, "address.country.code").is_validatable() is False


class TestAnnotations:
    """Test marker aggregation from getters and fields."""

    def test_has_and_get_annotation(self, resolver):
        node = resolver.resolve(Customer, "name")

        assert node.has_annotation(NotBlank) is True
        assert node.has_annotation(Valid) is False
        assert node.get_annotation(Size) == Size(min=1, max=64)
        assert node.get_annotation(Valid) is None

    def test_getter_markers_come_first_and_duplicates_are_kept(self, resolver):
        node = resolver.resolve(CodedView, "code")

        assert node.annotations == (Size(max=10), NotBlank(), Size(max=10))
        assert node.get_annotations(Size) == [Size(max=10), Size(max=10)]


class TestLengths:
    """Test minimum and maximum length derivation."""

    def test_size(self, resolver):
        node = resolver.resolve(Customer, "name")
        assert node.minimum_length == 1
        assert node.maximum_length == 64

    def test_size_without_min(self, resolver):
        node = resolver.resolve(Customer, "address.street")
        assert node.minimum_length == 0
        assert node.maximum_length == 80

    def test_fixed_size(self, resolver):
        node = resolver.resolve(Customer, "address.country.code")
        assert node.minimum_length == 2
        assert node.maximum_length == 2

    def test_min_and_max(self, resolver):
        node = resolver.resolve(Customer, "items.quantity")
        assert node.minimum_length == 1
        assert node.maximum_length == 4

    def test_digits(self, resolver):
        """Integer digits, fraction digits and the decimal separator."""
        node = resolver.resolve(Customer, "items.price")
        assert node.minimum_length == 11
        assert node.maximum_length == 11

    def test_decimal_range(self, resolver):
        node = resolver.resolve(Customer, "credit_limit")
        assert node.minimum_length == 4
        assert node.maximum_length == 8

    def test_unconstrained(self, resolver):
        node = resolver.resolve(Customer, "address.city")
        assert node.minimum_length is None
        assert node.maximum_length is None


class TestErrors:
    """Test configuration errors for bad paths."""

    @pytest.mark.parametrize(
        "path",
        ["missing", "address.missing", "name.length", "", "address.", "extra"],
    )
    def test_invalid_paths(self, resolver, path):
        with pytest.raises(ConfigurationError, match="Invalid property path"):
            resolver.resolve(Customer, path)

    def test_error_names_root_type_and_path(self, resolver):
        with pytest.raises(ConfigurationError) as exc_info:
            resolver.resolve(Customer, "address.missing")
        assert f"{__name__}.Customer.address.missing" in str(exc_info.value)

    def test_collection_without_element_type(self, resolver):
        with pytest.raises(ConfigurationError, match="Cannot determine element type"):
            resolver.resolve(Customer, "notes")

    def test_failed_resolution_is_not_cached(self, resolver):
        with pytest.raises(ConfigurationError):
            resolver.resolve(Customer, "missing")
        assert resolver.cache.contains(Customer, "missing") is False


class TestCaching:
    """Test read-through caching of resolved nodes."""

    def test_resolution_is_idempotent(self, resolver):
        assert resolver.resolve(Customer, "address.street") is resolver.resolve(
            Customer, "address.street"
        )

    def test_parents_are_shared(self, resolver):
        street = resolver.resolve(Customer, "address.street")
        city = resolver.resolve(Customer, "address.city")

        assert street.parent is city.parent
        assert street.parent is resolver.resolve(Customer, "address")
        assert resolver.cache.contains(Customer, "address") is True

    def test_same_path_on_different_roots(self, resolver):
        assert resolver.resolve(Address, "city") is not resolver.resolve(Country, "name")
        assert resolver.cache.size() == 2

    def test_default_cache_is_process_wide(self):
        first = PropertyPathResolver()
        second = PropertyPathResolver()

        assert first.cache is get_property_path_cache()
        assert first.resolve(Customer, "name") is second.resolve(Customer, "name")

    def test_preload(self, resolver):
        nodes = resolver.preload(Customer, ["name", "items.price"])

        assert [n.id for n in nodes] == ["name", "items.price"]
        assert resolver.cache.contains(Customer, "items") is True

    def test_preload_surfaces_errors(self, resolver):
        with pytest.raises(ConfigurationError):
            resolver.preload(Customer, ["name", "missing"])
