from typing import Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from .config import settings
from .logging import setup_logging, RequestIdMiddleware
from .auth.router import router as auth_router
from .routes.inventory import router as inventory_router
from .routes.areas import router as areas_router
from .routes.dashboard import router as dashboard_router
from .routes.logs import router as logs_router
from .routes.account import router as account_router
from .services.password_reset import ResetCodeStore
from .storage import DocumentStore, StoreError, SqlDocumentStore, build_store
from .storage.gateway import PersistenceGateway


async def store_error_handler(request: Request, exc: StoreError):
    structlog.get_logger().error("store_unavailable", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=503, content={"detail": "Connection error"})


def create_app(store: Optional[DocumentStore] = None) -> FastAPI:
    setup_logging(settings.app_name)
    app = FastAPI(title=settings.app_name)

    # Middlewares
    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit])
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    app.add_exception_handler(StoreError, store_error_handler)

    # Shared state
    app.state.store = store or build_store(settings)
    app.state.gateway = PersistenceGateway(app.state.store, settings)
    app.state.reset_codes = ResetCodeStore(settings.reset_code_ttl_seconds)

    # Routers
    app.include_router(auth_router)
    app.include_router(inventory_router)
    app.include_router(areas_router)
    app.include_router(dashboard_router)
    app.include_router(logs_router)
    app.include_router(account_router)

    # Metrics
    Instrumentator().instrument(app).expose(app)

    @app.get("/health")
    def healthcheck():
        return {"status": "ok"}

    @app.on_event("startup")
    def _startup():
        log = structlog.get_logger()
        log.info("startup", store=type(app.state.store).__name__)
        if settings.auto_create_db and isinstance(app.state.store, SqlDocumentStore):
            app.state.store.create_schema()
        try:
            app.state.gateway.init()
        except StoreError as e:
            # Seeding is retried on the next start; requests surface the outage as 503
            log.error("seed_failed", error=str(e))

    return app


app = create_app()
