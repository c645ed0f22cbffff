import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from staggerline.api.deps import verify_api_key
from staggerline.config import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    settings = get_settings()
    logger.info(
        "Stagger analyzer ready: purify ability=%d, tolerance=%dms, strict=%s",
        settings.stagger.purify_ability_id,
        settings.stagger.purify_match_tolerance_ms,
        settings.stagger.strict_stream,
    )
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="Staggerline Stagger Analyzer",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:5173", "http://localhost:8000"],
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["X-API-Key", "Content-Type"],
    )

    from staggerline.api.routes.health import router as health_router
    from staggerline.api.routes.stagger import router as stagger_router

    # Health router has no auth
    app.include_router(health_router)
    app.include_router(stagger_router, dependencies=[Depends(verify_api_key)])

    return app
