from decimal import Decimal

from sqlalchemy import Boolean, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.ids import LISTING_ID_PREFIX, gen_id

from app.models.base import Base, AuditMixin
from app.models.listing_photo import ListingPhoto


class Listing(AuditMixin, Base):
    __tablename__ = "listings"
    # created_at/updated_at come back with the INSERT so detached rows stay readable
    __mapper_args__ = {"eager_defaults": True}

    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: gen_id(LISTING_ID_PREFIX))

    # verified by the auth gateway, never re-checked here
    owner_id: Mapped[str] = mapped_column(String(120), nullable=False, index=True)

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    original_price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    age_range: Mapped[str] = mapped_column(String(50), nullable=False)
    condition: Mapped[str] = mapped_column(String(50), nullable=False)
    brand: Mapped[str | None] = mapped_column(String(100), nullable=True)
    model: Mapped[str | None] = mapped_column(String(100), nullable=True)
    is_smoke_free: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    is_pet_free: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    location_zip: Mapped[str] = mapped_column(String(5), nullable=False, index=True)

    # recall gate results
    safety_checked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    has_recall: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    recall_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    recall_id: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # "active" | "sold" | "archived"
    status: Mapped[str] = mapped_column(String(30), nullable=False, default="active")
    views: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    photos: Mapped[list[ListingPhoto]] = relationship(
        back_populates="listing",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by=ListingPhoto.display_order,
        lazy="selectin",
    )
