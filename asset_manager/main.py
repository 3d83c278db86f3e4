# asset_manager/main.py

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI

from asset_manager.config import get_settings
from asset_manager.database import init_db
from asset_manager.logging_config import configure_logging
from asset_manager.routers import store_router
from asset_manager.services.factory import get_storage_service
from asset_manager.services.storage_service import StorageService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    configure_logging(json_format=settings.LOG_JSON, level=settings.LOG_LEVEL)
    init_db()
    # Fail fast on bad storage/queue configuration
    service = get_storage_service()
    logger.info(f"Asset manager started ({settings.ENVIRONMENT}, backend={service.identity()})")
    yield


app = FastAPI(title="Asset Manager", lifespan=lifespan)

app.include_router(store_router)


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------

@app.get("/health")
def health(service: StorageService = Depends(get_storage_service)) -> dict:
    return {"status": "ok", "service": "asset-manager", "storage": service.identity()}


@app.get("/")
def root() -> dict:
    return {
        "service": "Asset Manager",
        "endpoints": ["/health", "/store", "/store/upload", "/store/view/{key}"],
    }
