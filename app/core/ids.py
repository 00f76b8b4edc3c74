import uuid

LISTING_ID_PREFIX = "lst"
PHOTO_ID_PREFIX = "pho"


def gen_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex}"
