"""Access capabilities consumed by view components.

Forms, result tables, menus and to-many tabs ask a capability object whether
something is viewable or editable instead of querying permissions
themselves.
"""

from dataclasses import dataclass
from typing import Iterable, Protocol, runtime_checkable

from crudmeta.domain.entities.user import User


@runtime_checkable
class AccessCapability(Protocol):
    """What a view component needs to know before rendering an affordance."""

    @property
    def is_viewable(self) -> bool: ...

    @property
    def is_editable(self) -> bool: ...


@dataclass(frozen=True)
class TypeAccess:
    """Access of a principal to a whole type."""

    target_type: str
    is_viewable: bool
    is_editable: bool
    is_creatable: bool
    is_deletable: bool


@dataclass(frozen=True)
class FieldAccess:
    """Access of a principal to one field of a type.

    A field that is not viewable is never editable.
    """

    target_type: str
    field: str
    is_viewable: bool
    is_editable: bool

    def __post_init__(self) -> None:
        if self.is_editable and not self.is_viewable:
            object.__setattr__(self, "is_editable", False)


class AccessPolicy:
    """Builds access capabilities for one principal.

    Example:
        policy = AccessPolicy(security_service.current_user)
        columns = policy.viewable_properties("Account", ["name", "owner.name"])
    """

    def __init__(self, user: User) -> None:
        self.user = user

    def for_type(self, target_type: str) -> TypeAccess:
        return TypeAccess(
            target_type=target_type,
            is_viewable=self.user.is_view_allowed(target_type),
            is_editable=self.user.is_edit_allowed(target_type),
            is_creatable=self.user.is_create_allowed(target_type),
            is_deletable=self.user.is_delete_allowed(target_type),
        )

    def for_field(self, target_type: str, field: str) -> FieldAccess:
        return FieldAccess(
            target_type=target_type,
            field=field,
            is_viewable=self.user.is_view_allowed(target_type, field),
            is_editable=self.user.is_edit_allowed(target_type, field),
        )

    def viewable_properties(self, target_type: str, property_ids: Iterable[str]) -> list[str]:
        """Filter property paths down to those the principal may view.

        Order is preserved. Nested paths are checked by their first segment,
        the field declared on ``target_type``.
        """
        return [
            property_id
            for property_id in property_ids
            if self.for_field(target_type, property_id.split(".", 1)[0]).is_viewable
        ]

    def editable_properties(self, target_type: str, property_ids: Iterable[str]) -> list[str]:
        """Filter property paths down to those the principal may edit."""
        return [
            property_id
            for property_id in property_ids
            if self.for_field(target_type, property_id.split(".", 1)[0]).is_editable
        ]

    def is_all_viewable(self, target_types: Iterable[str]) -> bool:
        """Ask if every type is viewable.

        Used for menu entries and to-many tabs, where both the page type and
        the entity type it shows must be viewable.
        """
        return all(self.user.is_view_allowed(target_type) for target_type in target_types)
