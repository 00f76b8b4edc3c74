"""
Brand/model matching heuristic for cached recalls.

Sellers type model names inconsistently ("SnugRide 35", "SnugRide35 Elite"),
so comparisons run on a compact key and a model may also hit a recall through
the recalled product name. False positives are acceptable here; false
negatives are not.
"""
from __future__ import annotations

import re
from datetime import date, datetime
from typing import Iterable, Protocol, TypeVar


_NON_ALNUM = re.compile(r"[\W_]+", re.UNICODE)


class RecallLike(Protocol):
    recall_id: str
    brand: str
    model: str | None
    product_name: str
    recall_date: date


R = TypeVar("R", bound=RecallLike)


def normalize_key(value: str | None) -> str | None:
    """
    Casefold and drop everything that is not a letter or digit.
    Blank input normalizes to None.
    """
    if value is None:
        return None
    key = _NON_ALNUM.sub("", value.casefold())
    return key or None


def matches(brand: str | None, model: str | None, record: RecallLike) -> bool:
    brand_key = normalize_key(brand)
    if brand_key is None or brand_key != normalize_key(record.brand):
        return False

    model_key = normalize_key(model)
    record_model_key = normalize_key(record.model)

    if model_key is None:
        # brand-only query: only brand-only recalls qualify
        return record_model_key is None

    if model_key == record_model_key:
        return True

    product_key = normalize_key(record.product_name) or ""
    return model_key in product_key


def _recency(record: RecallLike) -> tuple:
    created = getattr(record, "created_at", None)
    created_ts = created.timestamp() if isinstance(created, datetime) else 0.0
    return (record.recall_date, created_ts, record.recall_id)


def most_recent(records: Iterable[R]) -> R | None:
    """Most recent recall_date wins."""
    return max(records, key=_recency, default=None)


def best_match(brand: str | None, model: str | None, records: Iterable[R]) -> R | None:
    return most_recent(r for r in records if matches(brand, model, r))
