from __future__ import annotations
from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func


class AuditMixin:
    """created/updated stamps plus a single soft-delete state.

    A row is active while ``deleted_at`` is NULL. ``deleted_by`` is only
    meaningful once ``deleted_at`` is set. Queries filter on
    ``Model.deleted_at.is_(None)``.
    """

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    created_by: Mapped[int | None] = mapped_column(Integer, nullable=True)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), onupdate=func.now(), nullable=True)
    updated_by: Mapped[int | None] = mapped_column(Integer, nullable=True)
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True, index=True)
    deleted_by: Mapped[int | None] = mapped_column(Integer, nullable=True)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def soft_delete(self, by: int | None = None) -> None:
        self.deleted_at = datetime.now(timezone.utc)
        self.deleted_by = by
