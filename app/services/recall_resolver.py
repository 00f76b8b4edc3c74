from __future__ import annotations

import logging
from typing import Protocol

from opentelemetry import trace

from app.services.recall_registry import RegistryUnavailable, map_category_to_product_type
from app.services.recall_types import RawRecall, RecallRecord, RecallVerdict, VerdictStatus


log = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

NOTES_NOT_CHECKED = "Not checked: no brand provided"
NOTES_UNVERIFIED = "Unable to verify recall status"
NOTES_NO_RECALLS = "No recalls found"


class RecallCache(Protocol):
    async def lookup(self, brand: str | None, model: str | None) -> RecallRecord | None:
        ...

    async def insert(self, record: RecallRecord) -> bool:
        ...


class RecallRegistry(Protocol):
    async def query(self, brand: str, model: str | None, product_type: str) -> list[RawRecall]:
        ...


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


class RecallResolver:
    """
    Cache-first recall check.

    store hit -> recalled (no registry call)
    store miss -> registry; first hit is written through to the store
    registry outage -> safe, but marked unverified
    """

    def __init__(self, *, store: RecallCache, registry: RecallRegistry):
        self._store = store
        self._registry = registry

    async def resolve(self, brand: str | None, model: str | None, category: str | None) -> RecallVerdict:
        brand = _clean(brand)
        model = _clean(model)

        with tracer.start_as_current_span("recall.resolve") as span:
            span.set_attribute("recall.brand", brand or "")
            span.set_attribute("recall.model", model or "")
            verdict = await self._resolve(brand, model, category)
            span.set_attribute("recall.status", verdict.status.value)
            span.set_attribute("recall.verified", verdict.verified)
            return verdict

    async def _resolve(self, brand: str | None, model: str | None, category: str | None) -> RecallVerdict:
        if brand is None:
            return RecallVerdict(status=VerdictStatus.UNKNOWN, notes=NOTES_NOT_CHECKED, verified=False)

        cached = await self._store.lookup(brand, model)
        if cached is not None:
            log.info("recall cache hit: brand=%s model=%s recall_id=%s", brand, model, cached.recall_id)
            return RecallVerdict(status=VerdictStatus.RECALLED, notes=cached.summary(), recall=cached)

        product_type = map_category_to_product_type(category)
        try:
            found = await self._registry.query(brand, model, product_type)
        except RegistryUnavailable as e:
            log.warning(
                "recall registry unavailable (%s, status=%s, retryable=%s): brand=%s model=%s: %s",
                e.reason, e.status_code, e.retryable, brand, model, e,
            )
            return RecallVerdict(status=VerdictStatus.SAFE, notes=NOTES_UNVERIFIED, verified=False)

        if not found:
            return RecallVerdict(status=VerdictStatus.SAFE, notes=NOTES_NO_RECALLS)

        record = found[0].to_record(brand=brand, model=model)
        await self._store.insert(record)
        log.info("recall discovered: brand=%s model=%s recall_id=%s", brand, model, record.recall_id)
        return RecallVerdict(status=VerdictStatus.RECALLED, notes=record.summary(), recall=record)
