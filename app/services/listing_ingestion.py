from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Literal, Union

from pydantic import ValidationError
from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.models.listing import Listing
from app.models.listing_photo import ListingPhoto
from app.schemas.listing import ListingDraft
from app.services.recall_resolver import RecallResolver
from app.services.recall_types import RecallRecord, RecallVerdict


log = logging.getLogger(__name__)

RecallPolicy = Literal["block", "flag_only"]


class IngestionError(Exception):
    def __init__(self, message: str, *, retryable: bool = False):
        super().__init__(message)
        self.retryable = retryable


class ListingPersistenceError(IngestionError):
    """The listing transaction could not commit; nothing was written."""

    def __init__(self, message: str = "listing could not be saved"):
        super().__init__(message, retryable=True)


@dataclass(frozen=True)
class ListingCreated:
    listing: Listing
    verdict: RecallVerdict | None


@dataclass(frozen=True)
class ListingBlocked:
    notes: str
    recall: RecallRecord | None
    # handed back unchanged so the seller can correct and resubmit
    draft: ListingDraft


@dataclass(frozen=True)
class ListingInvalid:
    errors: list[dict[str, Any]] = field(default_factory=list)

    @property
    def reason(self) -> str:
        parts = []
        for err in self.errors:
            loc = ".".join(str(p) for p in err.get("loc", ()))
            parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
        return "; ".join(parts)


SubmitOutcome = Union[ListingCreated, ListingBlocked, ListingInvalid]


def validate_draft(payload: ListingDraft | dict[str, Any]) -> ListingDraft | ListingInvalid:
    if isinstance(payload, ListingDraft):
        payload = payload.model_dump(by_alias=False)
    try:
        return ListingDraft.model_validate(payload)
    except ValidationError as e:
        return ListingInvalid(errors=e.errors(include_url=False, include_context=False, include_input=False))


class ListingIngestionCoordinator:
    """
    validate -> recall check -> policy -> atomic persist.

    Submissions share no state here; each one opens its own sessions.
    """

    def __init__(
        self,
        *,
        sessions: async_sessionmaker[AsyncSession],
        resolver: RecallResolver,
        on_recall: RecallPolicy = "block",
    ):
        self._sessions = sessions
        self._resolver = resolver
        self._on_recall = on_recall

    @property
    def on_recall(self) -> RecallPolicy:
        return self._on_recall

    async def submit(self, owner_id: str, payload: ListingDraft | dict[str, Any]) -> SubmitOutcome:
        draft = validate_draft(payload)
        if isinstance(draft, ListingInvalid):
            log.info("listing rejected: owner_id=%s reason=%s", owner_id, draft.reason)
            return draft

        verdict: RecallVerdict | None = None
        if draft.brand:
            try:
                verdict = await self._resolver.resolve(draft.brand, draft.model, draft.category)
            except SQLAlchemyError as e:
                log.exception("recall cache failure: owner_id=%s brand=%s", owner_id, draft.brand)
                raise ListingPersistenceError("recall cache unavailable") from e

        if verdict is not None and verdict.is_recalled and self._on_recall == "block":
            log.info(
                "listing blocked: owner_id=%s brand=%s model=%s recall_id=%s",
                owner_id, draft.brand, draft.model, verdict.recall.recall_id if verdict.recall else None,
            )
            return ListingBlocked(notes=verdict.notes, recall=verdict.recall, draft=draft)

        listing = await self._persist(owner_id, draft, verdict)
        log.info("listing created: id=%s owner_id=%s photos=%d has_recall=%s",
                 listing.id, owner_id, len(listing.photos), listing.has_recall)
        return ListingCreated(listing=listing, verdict=verdict)

    async def get_listing(self, listing_id: str, *, count_view: bool = False) -> Listing | None:
        async with self._sessions.begin() as db:
            listing = await db.get(Listing, listing_id)
            if listing is None or not count_view:
                return listing

            # a view is not an edit: keep updated_at as it was
            await db.execute(
                update(Listing)
                .where(Listing.id == listing_id)
                .values(views=Listing.views + 1, updated_at=Listing.updated_at)
                .execution_options(synchronize_session=False)
            )
            await db.refresh(listing, attribute_names=["views"])
            return listing

    def _listing_row(self, owner_id: str, draft: ListingDraft, verdict: RecallVerdict | None) -> Listing:
        has_recall = verdict is not None and verdict.is_recalled
        return Listing(
            owner_id=owner_id,
            title=draft.title,
            description=draft.description,
            price=draft.price,
            original_price=draft.original_price,
            category=draft.category,
            age_range=draft.age_range,
            condition=draft.condition,
            brand=draft.brand,
            model=draft.model,
            is_smoke_free=draft.is_smoke_free,
            is_pet_free=draft.is_pet_free,
            location_zip=draft.location_zip,
            safety_checked=verdict is not None,
            has_recall=has_recall,
            recall_notes=verdict.notes if verdict is not None else None,
            recall_id=verdict.recall.recall_id if has_recall and verdict.recall else None,
            status="active",
            views=0,
            created_by=owner_id,
            updated_by=owner_id,
            photos=[],
        )

    def _photo_rows(self, photos: list[str]) -> list[ListingPhoto]:
        return [ListingPhoto(url=url, display_order=i) for i, url in enumerate(photos)]

    async def _persist(self, owner_id: str, draft: ListingDraft, verdict: RecallVerdict | None) -> Listing:
        listing = self._listing_row(owner_id, draft, verdict)
        try:
            # commit only on clean exit; any exception rolls back listing and photos together
            async with self._sessions.begin() as db:
                db.add(listing)
                await db.flush()

                listing.photos.extend(self._photo_rows(draft.photos))
                await db.flush()
        except SQLAlchemyError as e:
            log.exception("listing persistence failed: owner_id=%s", owner_id)
            raise ListingPersistenceError() from e
        return listing
