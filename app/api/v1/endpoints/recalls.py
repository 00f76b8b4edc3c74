import logging
from dataclasses import asdict

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.schemas.common import ErrorResponse
from app.schemas.recall import RecallCheckIn, RecallOut, VerdictOut
from app.services.container import Services, get_services


log = logging.getLogger(__name__)
router = APIRouter()


@router.post(
    "/recalls/check",
    response_model=VerdictOut,
    responses={503: {"model": ErrorResponse}},
)
async def check_recall(
    payload: RecallCheckIn,
    services: Services = Depends(get_services),
):
    try:
        verdict = await services.resolver.resolve(payload.brand, payload.model, payload.category)
    except SQLAlchemyError:
        log.exception("recall check failed: brand=%s model=%s", payload.brand, payload.model)
        err = ErrorResponse(code="persistence_failure", message="recall cache unavailable", retryable=True)
        return JSONResponse(status_code=503, content=err.model_dump(mode="json"))

    return VerdictOut(
        status=verdict.status.value,
        notes=verdict.notes,
        verified=verdict.verified,
        recall=RecallOut(**asdict(verdict.recall)) if verdict.recall else None,
    )
