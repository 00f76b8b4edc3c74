import asyncio
from datetime import date

from app.services.recall_types import RawRecall, RecallRecord


class FakeRegistry:
    """Records calls; returns canned recalls or raises a canned error."""

    def __init__(self, results: list[RawRecall] | None = None, error: Exception | None = None):
        self.results = list(results or [])
        self.error = error
        self.calls: list[tuple] = []

    async def query(self, brand, model, product_type):
        self.calls.append((brand, model, product_type))
        if self.error is not None:
            raise self.error
        return list(self.results)

    async def aclose(self) -> None:
        return None


class FailOnCallRegistry(FakeRegistry):
    async def query(self, brand, model, product_type):
        raise AssertionError(f"registry must not be called (brand={brand!r}, model={model!r})")


class BarrierRegistry(FakeRegistry):
    """Holds every caller until `parties` queries are in flight."""

    def __init__(self, parties: int, results: list[RawRecall]):
        super().__init__(results=results)
        self._parties = parties
        self._all_in = asyncio.Event()

    async def query(self, brand, model, product_type):
        self.calls.append((brand, model, product_type))
        if len(self.calls) >= self._parties:
            self._all_in.set()
        await asyncio.wait_for(self._all_in.wait(), timeout=5)
        return list(self.results)


def snugride_record(**overrides) -> RecallRecord:
    data = dict(
        recall_id="19-123",
        product_name="Graco SnugRide 35 Elite",
        brand="Graco",
        model="SnugRide 35",
        hazard="Harness webbing can detach",
        remedy="Stop using and contact Graco for a free repair kit",
        recall_date=date(2019, 6, 1),
    )
    data.update(overrides)
    return RecallRecord(**data)


def registry_hit(recall_id="24-077", **overrides) -> RawRecall:
    data = dict(
        recall_id=recall_id,
        product_name="Acme FoldLite Stroller",
        hazard="Fold hinge can pinch fingers",
        remedy="Contact Acme for a free hinge cover",
        recall_date=date(2024, 4, 2),
    )
    data.update(overrides)
    return RawRecall(**data)


def draft_payload(**overrides) -> dict:
    data = {
        "title": "Infant car seat",
        "description": "Barely used, always kept indoors",
        "price": 45,
        "originalPrice": 180,
        "category": "Car Seats",
        "ageRange": "0-12 months",
        "condition": "Like New",
        "locationZip": "94110",
        "isSmokeFree": True,
        "isPetFree": False,
        "photos": ["https://cdn.test/p1.jpg", "https://cdn.test/p2.jpg"],
    }
    data.update(overrides)
    return data
