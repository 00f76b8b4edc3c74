from datetime import date, datetime

from sqlalchemy import Date, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func
from sqlalchemy.types import DateTime

from app.models.base import Base


class SafetyRecall(Base):
    """
    Cached recall notice from the external registry.
    Rows are append-only: the registry stays the source of truth.
    """
    __tablename__ = "safety_recalls"
    __table_args__ = (
        UniqueConstraint("recall_id", name="uq_safety_recalls_recall_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # registry identity (e.g. CPSC RecallNumber)
    recall_id: Mapped[str] = mapped_column(String(255), nullable=False)

    product_name: Mapped[str] = mapped_column(Text, nullable=False)
    brand: Mapped[str] = mapped_column(String(255), nullable=False)
    model: Mapped[str | None] = mapped_column(String(255), nullable=True)
    hazard: Mapped[str] = mapped_column(Text, nullable=False)
    remedy: Mapped[str] = mapped_column(Text, nullable=False)
    recall_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)

    # normalized match keys (see services.recall_matching.normalize_key)
    brand_key: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    model_key: Mapped[str | None] = mapped_column(String(255), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
