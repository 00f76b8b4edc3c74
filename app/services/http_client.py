from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

import httpx


@dataclass(frozen=True)
class HttpResult:
    ok: bool
    status_code: int | None
    # parsed JSON body (lists are kept under "data"), or {"raw": ...} for non-JSON bodies
    detail: dict[str, Any]

    error_code: str | None = None
    error_message: str | None = None
    retryable: bool = False

    elapsed_ms: int | None = None
    is_json: bool = False


def _is_json_response(resp: httpx.Response) -> bool:
    ct = (resp.headers.get("content-type") or "").lower()
    return "application/json" in ct or ct.endswith("+json")


def _cap_text(s: str, *, max_chars: int) -> str:
    if len(s) <= max_chars:
        return s
    return s[:max_chars] + f"...(truncated, {len(s)} chars)"


class JsonHttpClient:
    """
    Shared GET/JSON client for outbound registry lookups.

    - Uses one AsyncClient instance (connection pooling).
    - Never raises on transport problems; returns a structured result instead.
    - Retries are left to the caller.
    """

    def __init__(
        self,
        *,
        timeout_seconds: float = 5.0,
        max_response_body_chars: int = 20_000,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._max_body = max_response_body_chars
        self._client = httpx.AsyncClient(timeout=httpx.Timeout(timeout_seconds), transport=transport)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get_json(self, *, url: str, params: Mapping[str, str] | None = None) -> HttpResult:
        try:
            resp = await self._client.get(url, params=dict(params or {}))
        except httpx.TimeoutException as e:
            return HttpResult(
                ok=False,
                status_code=None,
                detail={"error": "timeout"},
                error_code="TIMEOUT",
                error_message=str(e),
                retryable=True,
            )
        except httpx.RequestError as e:
            # DNS errors, connection refused, TLS, etc.
            return HttpResult(
                ok=False,
                status_code=None,
                detail={"error": "request_error"},
                error_code="REQUEST_ERROR",
                error_message=str(e),
                retryable=True,
            )

        detail: dict[str, Any]
        is_json = False
        if _is_json_response(resp):
            try:
                parsed = resp.json()
                detail = parsed if isinstance(parsed, dict) else {"data": parsed}
                is_json = True
            except ValueError:
                detail = {"raw": _cap_text(resp.text, max_chars=self._max_body)}
        else:
            detail = {
                "raw": _cap_text(resp.text, max_chars=self._max_body),
                "content_type": resp.headers.get("content-type"),
            }

        try:
            elapsed_ms = int(resp.elapsed.total_seconds() * 1000)
        except RuntimeError:
            # elapsed is only set once the response has been closed
            elapsed_ms = None

        if 200 <= resp.status_code < 300:
            return HttpResult(
                ok=True,
                status_code=resp.status_code,
                detail=detail,
                elapsed_ms=elapsed_ms,
                is_json=is_json,
            )

        return HttpResult(
            ok=False,
            status_code=resp.status_code,
            detail=detail,
            error_code="RATE_LIMITED" if resp.status_code == 429 else f"HTTP_{resp.status_code}",
            error_message=f"HTTP {resp.status_code}",
            retryable=resp.status_code in (408, 429, 500, 502, 503, 504),
            elapsed_ms=elapsed_ms,
            is_json=is_json,
        )
