from __future__ import annotations

import asyncio
import logging
from datetime import date, datetime
from typing import Any

from app.services.http_client import JsonHttpClient
from app.services.recall_types import RawRecall


log = logging.getLogger(__name__)

GENERIC_PRODUCT_TYPE = "Children's Products"

# marketplace category -> CPSC product type
_CATEGORY_PRODUCT_TYPES: dict[str, str] = {
    "Strollers": "Strollers",
    "Car Seats": "Child Safety Seats",
    "Cribs & Bassinets": "Cribs",
    "Toys": "Toys",
    "Clothing": GENERIC_PRODUCT_TYPE,
    "Feeding": GENERIC_PRODUCT_TYPE,
    "Books": GENERIC_PRODUCT_TYPE,
    "Other": GENERIC_PRODUCT_TYPE,
}


def map_category_to_product_type(category: str | None) -> str:
    if not category:
        return GENERIC_PRODUCT_TYPE
    return _CATEGORY_PRODUCT_TYPES.get(category.strip(), GENERIC_PRODUCT_TYPE)


class RegistryUnavailable(Exception):
    """
    The registry could not give a trustworthy answer: timeout, network
    failure, rate limiting, or a response we could not parse.
    """

    def __init__(
        self,
        reason: str,
        message: str | None = None,
        *,
        status_code: int | None = None,
        retryable: bool = True,
    ):
        super().__init__(message or reason)
        self.reason = reason
        self.status_code = status_code
        # False when asking again will not help (e.g. 4xx other than 408/429)
        self.retryable = retryable


def _first_name(entry: dict[str, Any], key: str) -> str | None:
    items = entry.get(key)
    if not isinstance(items, list) or not items:
        return None
    first = items[0]
    if not isinstance(first, dict):
        return None
    name = first.get("Name")
    if not isinstance(name, str) or not name.strip():
        return None
    return name.strip()


def _parse_date(value: Any) -> date | None:
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        # CPSC sends "2023-05-11T00:00:00"
        return datetime.fromisoformat(value.strip()).date()
    except ValueError:
        return None


def parse_recall_entry(entry: Any) -> RawRecall:
    if not isinstance(entry, dict):
        raise RegistryUnavailable("malformed_response", "recall entry is not an object")

    recall_id = entry.get("RecallNumber") or entry.get("RecallID")
    if recall_id is None or not str(recall_id).strip():
        raise RegistryUnavailable("malformed_response", "recall entry has no RecallNumber")

    return RawRecall(
        recall_id=str(recall_id).strip(),
        product_name=_first_name(entry, "Products"),
        hazard=_first_name(entry, "Hazards"),
        remedy=_first_name(entry, "Remedies"),
        recall_date=_parse_date(entry.get("RecallDate")),
    )


class RecallRegistryClient:
    """
    Read-only client for the external recall authority.

    Every failure surfaces as RegistryUnavailable; a successful call returns
    the registry's entries in its own order (best match first), possibly empty.
    """

    def __init__(
        self,
        *,
        base_url: str,
        timeout_seconds: float = 5.0,
        http: JsonHttpClient | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds
        self._http = http or JsonHttpClient(timeout_seconds=timeout_seconds)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def query(self, brand: str, model: str | None, product_type: str) -> list[RawRecall]:
        title = f"{brand} {model}" if model else brand
        params = {
            "format": "json",
            "ProductType": product_type,
            "RecallTitle": title,
        }

        try:
            res = await asyncio.wait_for(
                self._http.get_json(url=f"{self._base_url}/Recall", params=params),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError:
            raise RegistryUnavailable("timeout", f"registry did not answer within {self._timeout_seconds}s")

        if not res.ok:
            raise RegistryUnavailable(
                (res.error_code or "error").lower(),
                res.error_message or "registry request failed",
                status_code=res.status_code,
                retryable=res.retryable,
            )

        if not res.is_json:
            raise RegistryUnavailable("malformed_response", "registry did not return JSON", status_code=res.status_code)

        entries = res.detail.get("data")
        if not isinstance(entries, list):
            raise RegistryUnavailable(
                "malformed_response", "expected a JSON list of recalls", status_code=res.status_code
            )

        recalls = [parse_recall_entry(e) for e in entries]
        log.debug("registry answered: title=%r product_type=%r hits=%d elapsed_ms=%s",
                  title, product_type, len(recalls), res.elapsed_ms)
        return recalls
