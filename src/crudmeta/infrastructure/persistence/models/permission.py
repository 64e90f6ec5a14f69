"""SQLAlchemy model for the permissions table.

Each permission grants or denies view/create/edit/delete on a type, or on a
single field of a type, for the owning role.
"""

from datetime import datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from crudmeta.infrastructure.persistence.database import Base


class PermissionModel(Base):
    """SQLAlchemy model for the permissions table.

    Attributes:
        id: Auto-incrementing primary key.
        role_id: Foreign key to roles table.
        target_type: Name of the type this permission applies to.
        field: Field name, NULL for type-level permissions.
        view_allowed: Grants view access.
        create_allowed: Grants create access (type-level only).
        edit_allowed: Grants edit access.
        delete_allowed: Grants delete access (type-level only).
        created_at: Timestamp when the permission was created.
        updated_at: Timestamp when the permission was last updated.
    """

    __tablename__ = "permissions"
    __table_args__ = (
        UniqueConstraint("target_type", "field", name="uq_permissions_target_type_field"),
        CheckConstraint(
            "field IS NULL OR (NOT create_allowed AND NOT delete_allowed)",
            name="ck_permissions_field_type_only_actions",
        ),
    )

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    role_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("roles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Foreign key to roles table",
    )
    target_type: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        index=True,
        comment="Name of the target type",
    )
    field: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        comment="Field name, NULL for the type itself",
    )
    view_allowed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    create_allowed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    edit_allowed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    delete_allowed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    # Relationships
    role: Mapped["RoleModel"] = relationship(  # noqa: F821
        "RoleModel",
        back_populates="permissions",
    )

    def __repr__(self) -> str:
        return (
            f"<Permission(id={self.id}, role_id={self.role_id}, "
            f"target_type={self.target_type}, field={self.field})>"
        )
