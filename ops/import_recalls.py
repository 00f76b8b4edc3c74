from __future__ import annotations

import argparse
import json
import os
import sys
from typing import Any

import httpx


DEFAULT_BASE_URL = os.getenv("GEAR_BASE_URL", "http://localhost:8000")
DEFAULT_ADMIN_KEY = os.getenv("INTERNAL_ADMIN_KEY", "")

DEFAULT_TIMEOUT_SECONDS = 30
BATCH_SIZE = 500


def http_post(url: str, payload: dict[str, Any], admin_key: str) -> dict[str, Any]:
    try:
        resp = httpx.post(
            url,
            json=payload,
            headers={"X-Internal-Admin-Key": admin_key},
            timeout=DEFAULT_TIMEOUT_SECONDS,
        )
    except httpx.RequestError as e:
        print(f"Network error for {url}: {e}", file=sys.stderr)
        return {"error": {"reason": str(e)}}

    if resp.is_error:
        print(f"HTTP {resp.status_code} for {url}", file=sys.stderr)
        if resp.text:
            print(resp.text, file=sys.stderr)
        return {"error": {"status": resp.status_code, "body": resp.text}}
    return resp.json() if resp.content else {}


def _load_items(path: str) -> list[dict[str, Any]]:
    with open(path, "r", encoding="utf-8") as f:
        body = json.load(f)
    # accept either {"items": [...]} or a bare list
    items = body.get("items") if isinstance(body, dict) else body
    if not isinstance(items, list):
        raise ValueError("expected a JSON list or an object with an 'items' list")
    return items


def main() -> int:
    p = argparse.ArgumentParser(description="Seed the recall cache from a JSON file of known recalls.")
    p.add_argument("--file", required=True, help="path to json file")
    p.add_argument("--base-url", default=DEFAULT_BASE_URL)
    p.add_argument("--admin-key", default=DEFAULT_ADMIN_KEY)
    args = p.parse_args()

    if not args.admin_key:
        print("Missing INTERNAL_ADMIN_KEY (env) or --admin-key", file=sys.stderr)
        return 2

    try:
        items = _load_items(args.file)
    except (OSError, ValueError) as e:
        print(f"Failed to read recall file: {e}", file=sys.stderr)
        return 2

    if not items:
        print("Nothing to import.", file=sys.stderr)
        return 0

    endpoint = f"{args.base_url.rstrip('/')}/v1/admin/recalls"
    totals = {"inserted": 0, "skipped": 0}
    for start in range(0, len(items), BATCH_SIZE):
        resp = http_post(endpoint, {"items": items[start:start + BATCH_SIZE]}, args.admin_key)
        if "error" in resp:
            print(json.dumps(totals, indent=2), file=sys.stderr)
            return 1
        totals["inserted"] += resp.get("inserted", 0)
        totals["skipped"] += resp.get("skipped", 0)

    print(json.dumps(totals, indent=2))
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
