from app.models.base import Base  # noqa: F401

from app.models.recall import SafetyRecall  # noqa: F401
from app.models.recall_alias import SafetyRecallAlias  # noqa: F401
from app.models.listing_photo import ListingPhoto  # noqa: F401
from app.models.listing import Listing  # noqa: F401
