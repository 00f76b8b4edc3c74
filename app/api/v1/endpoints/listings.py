from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException
from fastapi.responses import JSONResponse

from app.models.listing import Listing
from app.schemas.common import ErrorResponse
from app.schemas.listing import ListingOut, PhotoOut
from app.services.auth import get_owner_id
from app.services.container import Services, get_services
from app.services.listing_ingestion import (
    ListingBlocked,
    ListingInvalid,
    ListingPersistenceError,
)

router = APIRouter()


def _to_out(listing: Listing) -> ListingOut:
    return ListingOut(
        id=listing.id,
        owner_id=listing.owner_id,
        title=listing.title,
        description=listing.description,
        price=listing.price,
        original_price=listing.original_price,
        category=listing.category,
        age_range=listing.age_range,
        condition=listing.condition,
        brand=listing.brand,
        model=listing.model,
        is_smoke_free=listing.is_smoke_free,
        is_pet_free=listing.is_pet_free,
        location_zip=listing.location_zip,
        safety_checked=listing.safety_checked,
        has_recall=listing.has_recall,
        recall_notes=listing.recall_notes,
        recall_id=listing.recall_id,
        status=listing.status,
        views=listing.views,
        photos=[PhotoOut(url=p.url, display_order=p.display_order) for p in listing.photos],
        created_at=listing.created_at,
    )


def _error(status_code: int, err: ErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=err.model_dump(mode="json"))


@router.post(
    "/listings",
    status_code=201,
    response_model=ListingOut,
    responses={409: {"model": ErrorResponse}, 422: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
)
async def create_listing(
    payload: dict[str, Any] = Body(...),
    owner_id: str = Depends(get_owner_id),
    services: Services = Depends(get_services),
):
    # body is validated by the coordinator so that every rejection takes the same path
    try:
        outcome = await services.coordinator.submit(owner_id, payload)
    except ListingPersistenceError as e:
        return _error(503, ErrorResponse(code="persistence_failure", message=str(e), retryable=e.retryable))

    if isinstance(outcome, ListingInvalid):
        return _error(422, ErrorResponse(code="validation_error", message=outcome.reason, details=outcome.errors))

    if isinstance(outcome, ListingBlocked):
        details = [outcome.recall.as_dict()] if outcome.recall else []
        return _error(409, ErrorResponse(code="listing_blocked", message=outcome.notes, details=details))

    return _to_out(outcome.listing)


@router.get("/listings/{listing_id}", response_model=ListingOut)
async def get_listing(
    listing_id: str,
    services: Services = Depends(get_services),
) -> ListingOut:
    listing = await services.coordinator.get_listing(listing_id, count_view=True)
    if listing is None:
        raise HTTPException(status_code=404, detail="Listing not found")
    return _to_out(listing)
