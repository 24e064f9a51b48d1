from __future__ import annotations
from sqlalchemy import Boolean, String, text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from core.database import Base
from core.mixins import AuditMixin

class CompanyDetails(AuditMixin, Base):
    __tablename__ = "company_details"

    id: Mapped[int] = mapped_column(primary_key=True)
    company_name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    state: Mapped[str | None] = mapped_column(String(100), nullable=True)
    pin_code: Mapped[str | None] = mapped_column(String(20), nullable=True)
    country: Mapped[str | None] = mapped_column(String(100), nullable=True)
    phone_number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    website: Mapped[str | None] = mapped_column(String(500), nullable=True)
    gst_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    pan_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, server_default=text("true"), nullable=False)

    # relationships
    locations = relationship("Location", back_populates="company")
    equipment = relationship("Equipment", back_populates="company")


class LetterHead(AuditMixin, Base):
    """Header/footer artwork printed on generated documents.

    Image columns hold a stored path or URL; the upload itself happens elsewhere.
    """
    __tablename__ = "letter_heads"

    id: Mapped[int] = mapped_column(primary_key=True)
    letter_head_name: Mapped[str] = mapped_column(String(255), nullable=False)
    letter_head_image: Mapped[str | None] = mapped_column(String(500), nullable=True)
    letter_head_image_height: Mapped[str | None] = mapped_column(String(50), nullable=True)
    letter_head_image_width: Mapped[str | None] = mapped_column(String(50), nullable=True)
    letter_head_align: Mapped[str] = mapped_column(String(20), server_default=text("'center'"), nullable=False)
    letter_head_footer_image: Mapped[str | None] = mapped_column(String(500), nullable=True)
    letter_head_footer_image_height: Mapped[str | None] = mapped_column(String(50), nullable=True)
    letter_head_footer_image_width: Mapped[str | None] = mapped_column(String(50), nullable=True)
    letter_head_footer_align: Mapped[str] = mapped_column(String(20), server_default=text("'center'"), nullable=False)
