from __future__ import annotations

from dataclasses import dataclass

from fastapi import HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.config import Settings
from app.services.listing_ingestion import ListingIngestionCoordinator
from app.services.recall_registry import RecallRegistryClient
from app.services.recall_resolver import RecallResolver
from app.services.recall_store import RecallStore


@dataclass
class Services:
    registry: RecallRegistryClient
    store: RecallStore
    resolver: RecallResolver
    coordinator: ListingIngestionCoordinator

    async def aclose(self) -> None:
        await self.registry.aclose()


def build_services(*, settings: Settings, sessions: async_sessionmaker[AsyncSession]) -> Services:
    """
    Wire the recall pipeline once at startup. The registry client is passed
    down explicitly; nothing below reaches for a module-level client.
    """
    registry = RecallRegistryClient(
        base_url=settings.recall_registry_url,
        timeout_seconds=settings.recall_registry_timeout_seconds,
    )
    store = RecallStore(sessions)
    resolver = RecallResolver(store=store, registry=registry)
    coordinator = ListingIngestionCoordinator(
        sessions=sessions,
        resolver=resolver,
        on_recall=settings.on_recall,
    )
    return Services(registry=registry, store=store, resolver=resolver, coordinator=coordinator)


def get_services(request: Request) -> Services:
    services = getattr(request.app.state, "services", None)
    if services is None:
        raise HTTPException(status_code=503, detail="Service not ready")
    return services
