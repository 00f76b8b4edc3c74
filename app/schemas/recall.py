from datetime import date

from pydantic import BaseModel, Field


class RecallCheckIn(BaseModel):
    brand: str | None = Field(default=None, max_length=100)
    model: str | None = Field(default=None, max_length=100)
    category: str | None = Field(default=None, max_length=100)


class RecallOut(BaseModel):
    recall_id: str
    product_name: str
    brand: str
    model: str | None
    hazard: str
    remedy: str
    recall_date: date


class VerdictOut(BaseModel):
    status: str
    notes: str
    verified: bool
    recall: RecallOut | None = None


class RecallIn(BaseModel):
    recall_id: str = Field(min_length=1, max_length=255)
    product_name: str | None = Field(default=None, max_length=500)
    brand: str = Field(min_length=1, max_length=255)
    model: str | None = Field(default=None, max_length=255)
    hazard: str | None = None
    remedy: str | None = None
    recall_date: date | None = None


class RecallImportIn(BaseModel):
    items: list[RecallIn] = Field(min_length=1, max_length=5000)


class RecallImportOut(BaseModel):
    inserted: int
    skipped: int
