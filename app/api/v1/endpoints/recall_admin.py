import logging

from fastapi import APIRouter, Depends

from app.schemas.recall import RecallImportIn, RecallImportOut
from app.services.container import Services, get_services
from app.services.internal_admin import require_internal_admin
from app.services.recall_types import RawRecall


log = logging.getLogger(__name__)
router = APIRouter()


@router.post(
    "/admin/recalls",
    response_model=RecallImportOut,
    dependencies=[Depends(require_internal_admin)],
)
async def import_recalls(
    payload: RecallImportIn,
    services: Services = Depends(get_services),
) -> RecallImportOut:
    """
    Seed the recall cache from a known list (e.g. a CPSC export).
    Existing recall ids are skipped.
    """
    inserted = 0
    for item in payload.items:
        record = RawRecall(
            recall_id=item.recall_id,
            product_name=item.product_name,
            hazard=item.hazard,
            remedy=item.remedy,
            recall_date=item.recall_date,
        ).to_record(brand=item.brand, model=item.model)
        if await services.store.insert(record):
            inserted += 1

    skipped = len(payload.items) - inserted
    log.info("recall import: inserted=%d skipped=%d", inserted, skipped)
    return RecallImportOut(inserted=inserted, skipped=skipped)
