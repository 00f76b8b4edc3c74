from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base


class SafetyRecallAlias(Base):
    """
    Normalized brand/model a recall was discovered under.
    One registry recall often covers several models; each discovery adds an alias.
    """
    __tablename__ = "safety_recall_aliases"
    __table_args__ = (
        UniqueConstraint("brand_key", "model_key", "recall_id", name="uq_safety_recall_alias"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    brand_key: Mapped[str] = mapped_column(String(255), nullable=False)
    # "" when the recall was found by brand alone (NULLs would not collide in the unique constraint)
    model_key: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    recall_id: Mapped[str] = mapped_column(
        String(255), ForeignKey("safety_recalls.recall_id", ondelete="CASCADE"), nullable=False, index=True
    )
