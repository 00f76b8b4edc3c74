from fastapi import APIRouter

from app.api.v1.endpoints.health import router as health_router
from app.api.v1.endpoints.listings import router as listings_router
from app.api.v1.endpoints.recalls import router as recalls_router
from app.api.v1.endpoints.recall_admin import router as recall_admin_router


router = APIRouter(prefix="/v1")
router.include_router(health_router, tags=["health"])
router.include_router(listings_router, tags=["listings"])
router.include_router(recalls_router, tags=["recalls"])
router.include_router(recall_admin_router, tags=["admin"])
