from __future__ import annotations
from sqlalchemy import Boolean, ForeignKey, String, text
from sqlalchemy.orm import Mapped, mapped_column
from core.database import Base

class Application(Base):
    """A navigation menu node. ``parent_id`` NULL means top level."""
    __tablename__ = "applications"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    parent_id: Mapped[int | None] = mapped_column(
        ForeignKey("applications.id", ondelete="CASCADE"), index=True, nullable=True
    )
    is_group: Mapped[bool] = mapped_column(Boolean, server_default=text("false"), nullable=False)
    url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    icon_image_url: Mapped[str | None] = mapped_column(String(255), nullable=True)
    icon_class: Mapped[str | None] = mapped_column(String(100), nullable=True)
    area_name: Mapped[str] = mapped_column(String(100), nullable=False)
