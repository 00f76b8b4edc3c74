from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.models.recall import SafetyRecall
from app.models.recall_alias import SafetyRecallAlias
from app.services.recall_matching import matches, most_recent, normalize_key
from app.services.recall_types import RecallRecord


log = logging.getLogger(__name__)


class RecallStore:
    """
    Durable cache of recall notices.

    - lookup is read-only and applies the matching heuristic in Python.
    - insert is idempotent on recall_id (ON CONFLICT DO NOTHING); the unique
      constraint is the only concurrency control needed.
    - every insert also records the brand/model as an alias of the recall, so a
      recall covering several models is found again under each of them.
    """

    def __init__(self, sessions: async_sessionmaker[AsyncSession]):
        self._sessions = sessions

    async def lookup(self, brand: str | None, model: str | None) -> RecallRecord | None:
        brand_key = normalize_key(brand)
        if brand_key is None:
            return None

        async with self._sessions() as db:
            stmt = select(SafetyRecall).where(SafetyRecall.brand_key == brand_key)
            candidates = (await db.execute(stmt)).scalars().all()

            # brand/model pairs this recall was already discovered under
            alias_stmt = (
                select(SafetyRecall)
                .join(SafetyRecallAlias, SafetyRecallAlias.recall_id == SafetyRecall.recall_id)
                .where(
                    SafetyRecallAlias.brand_key == brand_key,
                    SafetyRecallAlias.model_key == (normalize_key(model) or ""),
                )
            )
            aliased = (await db.execute(alias_stmt)).scalars().all()

        hits = [r for r in candidates if matches(brand, model, r)] + list(aliased)
        row = most_recent(hits)
        return RecallRecord.from_row(row) if row else None

    async def insert(self, record: RecallRecord) -> bool:
        """
        Returns True when a new recall row was written, False when recall_id already existed.
        Either way the record's brand/model is kept as an alias of the recall.
        """
        brand_key = normalize_key(record.brand) or ""
        model_key = normalize_key(record.model)
        values = {
            "recall_id": record.recall_id,
            "product_name": record.product_name,
            "brand": record.brand,
            "model": record.model,
            "hazard": record.hazard,
            "remedy": record.remedy,
            "recall_date": record.recall_date,
            "brand_key": brand_key,
            "model_key": model_key,
        }

        async with self._sessions.begin() as db:
            insert = _dialect_insert(db)
            result = await db.execute(
                insert(SafetyRecall)
                .values(**values)
                .on_conflict_do_nothing(index_elements=["recall_id"])
            )
            await db.execute(
                insert(SafetyRecallAlias)
                .values(brand_key=brand_key, model_key=model_key or "", recall_id=record.recall_id)
                .on_conflict_do_nothing(index_elements=["brand_key", "model_key", "recall_id"])
            )

        inserted = bool(result.rowcount)
        if inserted:
            log.info("recall cached: recall_id=%s brand=%s model=%s", record.recall_id, record.brand, record.model)
        else:
            log.debug("recall already cached, alias kept: recall_id=%s brand=%s model=%s",
                      record.recall_id, record.brand, record.model)
        return inserted

    async def count(self) -> int:
        async with self._sessions() as db:
            return (await db.execute(select(func.count()).select_from(SafetyRecall))).scalar_one()


def _dialect_insert(db: AsyncSession):
    # both dialects compile ON CONFLICT (...) DO NOTHING
    if db.bind.dialect.name == "sqlite":
        return sqlite.insert
    return postgresql.insert
