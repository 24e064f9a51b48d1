from __future__ import annotations
from typing import TYPE_CHECKING
from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from core.database import Base

if TYPE_CHECKING:
    from application.models import Application

class Role(Base):
    __tablename__ = "roles"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)

    # relationships
    permissions: Mapped[list["RoleApplicationPermission"]] = relationship(
        back_populates="role", cascade="all, delete-orphan"
    )


class RoleApplicationPermission(Base):
    __tablename__ = "role_application_permissions"

    id: Mapped[int] = mapped_column(primary_key=True)
    role_id: Mapped[int] = mapped_column(ForeignKey("roles.id", ondelete="CASCADE"), index=True)
    application_id: Mapped[int] = mapped_column(ForeignKey("applications.id", ondelete="CASCADE"), index=True)

    __table_args__ = (
        UniqueConstraint("role_id", "application_id", name="uq_permission_role_application"),
    )

    role: Mapped[Role] = relationship(back_populates="permissions")
    application: Mapped["Application"] = relationship("Application")


class UserRoleMapping(Base):
    __tablename__ = "user_role_mappings"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    role_id: Mapped[int] = mapped_column(ForeignKey("roles.id", ondelete="CASCADE"), index=True)

    __table_args__ = (
        UniqueConstraint("user_id", "role_id", name="uq_user_role"),
    )

    role: Mapped[Role] = relationship("Role", lazy="joined")
    user = relationship("User", back_populates="role_mappings")
