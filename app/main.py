import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.v1.router import router as v1_router
from app.core.config import settings
from app.core.db import SessionLocal
from app.core.telemetry import setup_telemetry
from app.services.container import build_services


logging.basicConfig(level=settings.log_level)
log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.services = build_services(settings=settings, sessions=SessionLocal)
    log.info("recall pipeline ready: on_recall=%s registry=%s", settings.on_recall, settings.recall_registry_url)
    try:
        yield
    finally:
        await app.state.services.aclose()


app = FastAPI(title="Gear Marketplace API", version="0.1.0", lifespan=lifespan)

setup_telemetry(app)
app.include_router(v1_router)
