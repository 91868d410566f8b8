# catalog_service/main.py
import logging
import time
from datetime import datetime, timezone
from typing import Callable, Optional

from fastapi import FastAPI, Response

from .caching import OutputCache, OutputCacheMiddleware
from .config import HEALTH_PATH, PRODUCT_LIST_PATH, ServiceSettings
from .cors import StrictCORSMiddleware
from .database import CatalogStore
from .logic import build_envelope, health_status
from .models import CatalogEnvelope, HealthStatus

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def create_app(
    settings: Optional[ServiceSettings] = None,
    store: Optional[CatalogStore] = None,
    clock: Callable[[], datetime] = utc_now,
    monotonic: Callable[[], float] = time.monotonic,
) -> FastAPI:
    if settings is None:
        settings = ServiceSettings()
    if store is None:
        store = CatalogStore()
    cache = OutputCache(settings.output_cache_seconds, clock=monotonic)

    app = FastAPI(title="catalog-service (in-memory demo)")
    app.state.settings = settings
    app.state.store = store
    app.state.output_cache = cache

    # Starlette wraps in reverse order: CORS runs first, then the cache.
    app.add_middleware(OutputCacheMiddleware, cache=cache, paths=settings.cached_paths)
    app.add_middleware(
        StrictCORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ---------------------------
    # Catalog endpoints
    # ---------------------------
    @app.get(
        PRODUCT_LIST_PATH,
        response_model=CatalogEnvelope,
        name="GetProducts",
        operation_id="GetProducts",
        tags=["catalog"],
        summary="List all products",
    )
    async def get_product_list():
        envelope = build_envelope(store, clock())
        logger.debug("built catalog envelope with %d products", envelope.total_count)
        return envelope

    # ---------------------------
    # Health
    # ---------------------------
    @app.get(HEALTH_PATH, response_model=HealthStatus, tags=["health"])
    async def get_health(response: Response):
        response.headers["Cache-Control"] = "no-store"
        return health_status(clock())

    return app


app = create_app()


def run(settings: Optional[ServiceSettings] = None) -> None:
    import uvicorn
    from rich.logging import RichHandler

    if settings is None:
        settings = ServiceSettings()
    logging.basicConfig(level=settings.log_level.upper(), format="%(message)s", handlers=[RichHandler()])
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_level=settings.log_level)


if __name__ == "__main__":
    run()
