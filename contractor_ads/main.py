from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from contractor_ads.api.endpoints import ads, health, leads, seed, webhooks
from contractor_ads.core.config import Settings, settings as default_settings
from contractor_ads.core.exceptions import ServiceError
from contractor_ads.core.logger import get_logger
from contractor_ads.core.middleware import InternalKeyMiddleware, RequestLoggingMiddleware
from contractor_ads.services.storage import Storage

logger = get_logger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_content()))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": "Invalid request",
                # Offending input values are left out so the body always renders
                "details": [
                    {"loc": error["loc"], "msg": error["msg"], "type": error["type"]}
                    for error in exc.errors()
                ],
            },
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {str(exc)}", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": str(exc)},
        )


def create_application(
    settings: Optional[Settings] = None,
    storage: Optional[Storage] = None,
) -> FastAPI:
    settings = settings or default_settings

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
    )

    if storage is None:
        storage = Storage.from_url(settings.DATABASE_URL)
    storage.create_schema()
    app.state.storage = storage
    app.state.settings = settings

    # Last added runs first: CORS wraps everything so 401s carry CORS headers
    app.add_middleware(InternalKeyMiddleware, internal_key=settings.INTERNAL_WEBHOOK_KEY)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_methods=["GET", "POST", "PATCH", "OPTIONS"],
        allow_headers=["Content-Type", "x-internal-key", "internal_webhook_key"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(health.router, tags=["health"])
    app.include_router(webhooks.router, prefix="/api/webhook", tags=["webhooks"])
    app.include_router(ads.router, prefix="/api/ads", tags=["ads"])
    app.include_router(leads.router, prefix="/api/leads", tags=["leads"])
    if settings.ENABLE_SEED_ENDPOINT:
        app.include_router(seed.router, prefix="/api", tags=["seed"])

    logger.info(f"{settings.PROJECT_NAME} {settings.VERSION} ready")
    return app

app = create_application()
