import pytest

from app.services.recall_registry import RegistryUnavailable
from app.services.recall_resolver import (
    NOTES_NO_RECALLS,
    NOTES_NOT_CHECKED,
    NOTES_UNVERIFIED,
    RecallResolver,
)
from app.services.recall_types import VerdictStatus
from tests.helpers import FailOnCallRegistry, FakeRegistry, registry_hit, snugride_record


@pytest.mark.asyncio
async def test_cached_recall_never_calls_registry(store):
    await store.insert(snugride_record())
    resolver = RecallResolver(store=store, registry=FailOnCallRegistry())

    for brand, model in [("Graco", "SnugRide 35"), ("graco", "snugride35"), ("GRACO", "Elite")]:
        verdict = await resolver.resolve(brand, model, "Car Seats")
        assert verdict.status is VerdictStatus.RECALLED
        assert verdict.recall.recall_id == "19-123"
        assert verdict.notes == (
            "Recall: Harness webbing can detach. Remedy: Stop using and contact Graco for a free repair kit"
        )
        assert verdict.verified is True


@pytest.mark.asyncio
async def test_registry_hit_is_written_through(store):
    registry = FakeRegistry(results=[registry_hit(), registry_hit(recall_id="ignored")])
    resolver = RecallResolver(store=store, registry=registry)

    first = await resolver.resolve("Acme", "FoldLite", "Strollers")
    assert first.status is VerdictStatus.RECALLED
    assert first.recall.recall_id == "24-077"
    assert "Fold hinge can pinch fingers" in first.notes
    assert registry.calls == [("Acme", "FoldLite", "Strollers")]

    # second lookup is served from the cache alone
    cached_only = RecallResolver(store=store, registry=FailOnCallRegistry())
    second = await cached_only.resolve("Acme", "FoldLite", "Strollers")
    assert second.status is VerdictStatus.RECALLED
    assert second.recall.recall_id == "24-077"

    assert await store.count() == 1


@pytest.mark.asyncio
async def test_registry_outage_is_unverified_safe(store):
    registry = FakeRegistry(error=RegistryUnavailable("timeout"))
    resolver = RecallResolver(store=store, registry=registry)

    verdict = await resolver.resolve("Acme", "FoldLite", "Strollers")

    assert verdict.status is VerdictStatus.SAFE
    assert verdict.notes == NOTES_UNVERIFIED
    assert verdict.verified is False
    assert verdict.recall is None
    assert await store.count() == 0


@pytest.mark.asyncio
async def test_empty_registry_answer_is_verified_safe_and_not_cached(store):
    registry = FakeRegistry(results=[])
    resolver = RecallResolver(store=store, registry=registry)

    verdict = await resolver.resolve("Acme", "FoldLite", "Toys")

    assert verdict.status is VerdictStatus.SAFE
    assert verdict.notes == NOTES_NO_RECALLS
    assert verdict.verified is True
    assert await store.count() == 0

    # negatives are not cached: the registry is asked again
    await resolver.resolve("Acme", "FoldLite", "Toys")
    assert len(registry.calls) == 2


@pytest.mark.asyncio
@pytest.mark.parametrize("brand", [None, "", "   "])
async def test_missing_brand_is_unknown_without_io(store, brand):
    resolver = RecallResolver(store=store, registry=FailOnCallRegistry())

    verdict = await resolver.resolve(brand, "SnugRide 35", "Car Seats")

    assert verdict.status is VerdictStatus.UNKNOWN
    assert verdict.notes == NOTES_NOT_CHECKED
    assert verdict.verified is False


@pytest.mark.asyncio
async def test_category_is_mapped_for_registry(store):
    registry = FakeRegistry(results=[])
    resolver = RecallResolver(store=store, registry=registry)

    await resolver.resolve("Graco", "Pack n Play", "Cribs & Bassinets")
    await resolver.resolve("Graco", "Pack n Play", "Bath")

    assert [c[2] for c in registry.calls] == ["Cribs", "Children's Products"]


@pytest.mark.asyncio
async def test_recall_covering_several_models_is_cached_under_each(store):
    registry = FakeRegistry(results=[registry_hit()])
    resolver = RecallResolver(store=store, registry=registry)

    first = await resolver.resolve("Acme", "FoldLite", "Strollers")
    second = await resolver.resolve("Acme", "FL-2", "Strollers")
    assert first.recall.recall_id == second.recall.recall_id == "24-077"
    assert len(registry.calls) == 2

    # registry down: the second model must still be served from the cache
    offline = RecallResolver(store=store, registry=FakeRegistry(error=RegistryUnavailable("timeout")))
    verdict = await offline.resolve("Acme", "FL-2", "Strollers")

    assert verdict.status is VerdictStatus.RECALLED
    assert verdict.recall.recall_id == "24-077"
    assert verdict.verified is True
    assert await store.count() == 1
