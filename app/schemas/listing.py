from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator


PhotoUrl = Annotated[str, Field(min_length=1, max_length=2048)]


class ListingDraft(BaseModel):
    """
    Seller submission. Photos are already-stored image URLs, in display order.
    """
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True, extra="ignore")

    title: str = Field(min_length=1, max_length=255)
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    category: str = Field(min_length=1, max_length=100)
    age_range: str = Field(alias="ageRange", min_length=1, max_length=50)
    condition: str = Field(min_length=1, max_length=50)
    location_zip: str = Field(alias="locationZip", pattern=r"^\d{5}$")

    description: str | None = None
    original_price: Decimal | None = Field(default=None, alias="originalPrice", ge=0, max_digits=10, decimal_places=2)
    brand: str | None = Field(default=None, max_length=100)
    model: str | None = Field(default=None, max_length=100)
    is_smoke_free: bool | None = Field(default=None, alias="isSmokeFree")
    is_pet_free: bool | None = Field(default=None, alias="isPetFree")

    photos: list[PhotoUrl] = Field(min_length=2, max_length=6)

    @field_validator("description", "brand", "model", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class PhotoOut(BaseModel):
    url: str
    display_order: int


class ListingOut(BaseModel):
    id: str
    owner_id: str
    title: str
    description: str | None
    price: Decimal
    original_price: Decimal | None
    category: str
    age_range: str
    condition: str
    brand: str | None
    model: str | None
    is_smoke_free: bool | None
    is_pet_free: bool | None
    location_zip: str

    safety_checked: bool
    has_recall: bool
    recall_notes: str | None
    recall_id: str | None

    status: str
    views: int
    photos: list[PhotoOut]
    created_at: datetime | None = None
