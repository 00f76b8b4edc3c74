from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.ids import PHOTO_ID_PREFIX, gen_id
from app.models.base import Base

if TYPE_CHECKING:
    from app.models.listing import Listing


class ListingPhoto(Base):
    __tablename__ = "listing_photos"
    __table_args__ = (
        UniqueConstraint("listing_id", "display_order", name="uq_listing_photo_order"),
    )

    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: gen_id(PHOTO_ID_PREFIX))
    listing_id: Mapped[str] = mapped_column(String, ForeignKey("listings.id", ondelete="CASCADE"), nullable=False, index=True)

    # stable URL handed over by the photo storage service
    url: Mapped[str] = mapped_column(Text, nullable=False)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False)

    listing: Mapped["Listing"] = relationship(back_populates="photos")
