from fastapi import Header, HTTPException


async def get_owner_id(x_owner_id: str | None = Header(default=None)) -> str:
    """
    The auth gateway verifies the session and forwards the user id.
    We trust it as-is.
    """
    if not x_owner_id or not x_owner_id.strip():
        raise HTTPException(status_code=401, detail="Missing X-Owner-Id")
    if len(x_owner_id) > 120:
        raise HTTPException(status_code=400, detail="X-Owner-Id too long")
    return x_owner_id.strip()
