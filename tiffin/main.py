"""
FastAPI Application Entry Point

Tiffin Ordering API - in-memory food-ordering backend.

Endpoints:
    - /api/auth/*: OTP, password login and signup
    - /api/menu/*: Dish catalogue
    - /api/orders/*: Order placement, listing and status changes
    - /api/admin/*: Dashboard statistics and account management
    - /api/delivery/*: Delivery-partner login, orders, stats, profile
    - /api/payments/*: Mock payment orders and verification
    - /api/notifications: In-app notifications
    - GET /health: System health check

Run:
    uvicorn tiffin.main:app --port 8080

Version: 1.0.0
"""

import logging
import time
from datetime import datetime
from typing import Any
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tiffin.core.config import get_settings, setup_logging
from tiffin.core.errors import InputValidationError, TiffinError
from tiffin.routes import admin, auth, delivery, menu, notifications, orders, payments
from tiffin.schemas import ErrorResponse, HealthResponse
from tiffin.seed import seed_demo_data
from tiffin.services.notifications import get_notification_service
from tiffin.services.payment import get_payment_gateway
from tiffin.store import get_store

# Initialize configuration and logging
settings = get_settings()
setup_logging()
logger = logging.getLogger(__name__)

STARTED_AT = time.monotonic()


# =============================================================================
# APPLICATION LIFECYCLE
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application startup and shutdown events.
    """
    # Startup
    logger.info("=" * 60)
    logger.info(f"🍛 Starting {settings.app_name}")
    logger.info(f"   Version: {settings.app_version}")
    logger.info(f"   Environment: {settings.env_mode.value}")
    logger.info(f"   Debug: {settings.debug}")
    logger.info("=" * 60)

    store = get_store()
    if settings.seed_demo_data and not store.users.list():
        seed_demo_data(store)
        logger.info("🔐 Demo credentials (password: 'password'):")
        logger.info("   - Customer: user@test.com")
        logger.info("   - Admin: admin@tiffin.com")
        logger.info("   - Delivery: john@delivery.com")

    logger.info(f"✅ Payment Gateway: {get_payment_gateway().provider_name}")
    logger.info(f"✅ Notification Service: {get_notification_service().provider_name}")

    if settings.use_real_services:
        insecure = settings.validate_production_config()
        if insecure:
            logger.warning(f"⚠️ Insecure production config: {insecure}")

    logger.info("=" * 60)
    logger.info("✅ Application ready!")
    logger.info("=" * 60)

    yield  # Application runs

    # Shutdown
    logger.info("🛑 Server shutting down gracefully...")


# =============================================================================
# APPLICATION INSTANCE
# =============================================================================

app = FastAPI(
    title=settings.app_name,
    description=(
        "Food-ordering backend: customer ordering, menu browsing, "
        "delivery-partner workflow, admin oversight and mock payments."
    ),
    version=settings.app_version,
    lifespan=lifespan,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every request's method and path."""
    logger.info(f"🌐 {request.method} {request.url.path}")
    return await call_next(request)


app.include_router(auth.router)
app.include_router(menu.router)
app.include_router(orders.router)
app.include_router(admin.router)
app.include_router(delivery.router)
app.include_router(payments.router)
app.include_router(notifications.router)


# =============================================================================
# ROOT & HEALTH ENDPOINTS
# =============================================================================

@app.get("/", tags=["Root"])
async def root() -> dict[str, str]:
    """API root with navigation links."""
    return {
        "message": f"🍛 Welcome to {settings.app_name}",
        "version": settings.app_version,
        "environment": settings.env_mode.value,
        "documentation": "/docs",
        "health": "/health",
    }


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="System Health Check",
)
async def health_check() -> HealthResponse:
    """Verify the external collaborators are operational."""
    services = {
        "payment": await get_payment_gateway().health_check(),
        "notifications": await get_notification_service().health_check(),
    }

    return HealthResponse(
        status="OK" if all(services.values()) else "DEGRADED",
        timestamp=datetime.now(),
        uptime=round(time.monotonic() - STARTED_AT, 3),
        environment=settings.env_mode.value,
        services={name: "healthy" if ok else "unhealthy" for name, ok in services.items()},
    )


# =============================================================================
# ERROR HANDLERS
# =============================================================================

@app.exception_handler(TiffinError)
async def tiffin_error_handler(request: Request, exc: TiffinError) -> JSONResponse:
    """Expected failures raised by the services."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code} {exc.error}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Missing or malformed request fields."""
    errors: list[dict[str, Any]] = exc.errors()
    fields = [".".join(str(p) for p in e.get("loc", ()) if p != "body") for e in errors]
    message = f"Invalid or missing fields: {', '.join(f for f in fields if f)}" if any(fields) else "Invalid request"

    error = InputValidationError(message)
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all exception handler."""
    logger.exception(f"Unhandled exception: {exc}")

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "InternalFault",
            "message": str(exc) if settings.debug else "An unexpected error occurred",
        },
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("tiffin.main:app", host=settings.api_host, port=settings.api_port)
