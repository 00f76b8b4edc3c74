from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any

from app.models.recall import SafetyRecall


DEFAULT_HAZARD = "Unknown hazard"
DEFAULT_REMEDY = "Contact manufacturer"


@dataclass(frozen=True)
class RecallRecord:
    recall_id: str
    product_name: str
    brand: str
    model: str | None
    hazard: str
    remedy: str
    recall_date: date

    @classmethod
    def from_row(cls, row: SafetyRecall) -> "RecallRecord":
        return cls(
            recall_id=row.recall_id,
            product_name=row.product_name,
            brand=row.brand,
            model=row.model,
            hazard=row.hazard,
            remedy=row.remedy,
            recall_date=row.recall_date,
        )

    def summary(self) -> str:
        return f"Recall: {self.hazard}. Remedy: {self.remedy}"

    def as_dict(self) -> dict[str, Any]:
        return {
            "recall_id": self.recall_id,
            "product_name": self.product_name,
            "brand": self.brand,
            "model": self.model,
            "hazard": self.hazard,
            "remedy": self.remedy,
            "recall_date": self.recall_date.isoformat(),
        }


@dataclass(frozen=True)
class RawRecall:
    """One entry of a registry response, before defaults are applied."""
    recall_id: str
    product_name: str | None = None
    hazard: str | None = None
    remedy: str | None = None
    recall_date: date | None = None

    def to_record(self, *, brand: str, model: str | None) -> RecallRecord:
        fallback_name = f"{brand} {model}" if model else brand
        return RecallRecord(
            recall_id=self.recall_id,
            product_name=self.product_name or fallback_name,
            brand=brand,
            model=model,
            hazard=self.hazard or DEFAULT_HAZARD,
            remedy=self.remedy or DEFAULT_REMEDY,
            recall_date=self.recall_date or date.today(),
        )


class VerdictStatus(str, Enum):
    SAFE = "safe"
    RECALLED = "recalled"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class RecallVerdict:
    status: VerdictStatus
    notes: str
    recall: RecallRecord | None = None
    # False when the registry could not be consulted or no brand was given
    verified: bool = True

    @property
    def is_recalled(self) -> bool:
        return self.status is VerdictStatus.RECALLED
