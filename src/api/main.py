"""
FastAPI application for the event location resolver.

Exposes location resolution to callers that compose emails, calendar
invites and UI outside of Python:
- Location resolution endpoint
- Video provider policy listing
- Health endpoint
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends, HTTPException
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.api.middleware import RequestLoggingMiddleware, get_request_id
from src.api.models import (
    CalendarEventPayload,
    ErrorResponse,
    HealthResponse,
    ProviderPolicyResponse,
    ResolvedLocationResponse,
)
from src.config import Settings, get_settings
from src.integrations.exceptions import MissingVideoCallDataError
from src.services.event_parser import (
    get_cancel_link,
    get_reschedule_link,
    get_uid,
    resolve_event_location,
)
from src.services.video_providers import get_policy, registered_provider_types

logger = logging.getLogger(__name__)

API_VERSION = "0.1.0"


# =============================================================================
# Application Lifecycle
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    settings = get_settings()
    logging.getLogger().setLevel(settings.log_level)
    settings.validate_production_config()
    logger.info(f"Starting location resolver API (links under {settings.webapp_url})")

    yield

    # Shutdown
    logger.info("Shutting down location resolver API")


# =============================================================================
# FastAPI Application
# =============================================================================


app = FastAPI(
    title="Event Location Resolver API",
    description="""
# Event Location Resolver API

Single source of truth for what location text, join link and password to
show attendees of a booking.

## Resolution Rules
- Video-call data, when present, is the location
- The built-in video provider (`daily_video`) is shared through the app's
  public `/video/<uid>` link and never exposes a password
- Other providers' join links and passwords pass through unchanged
- `integrations:<Name>` locations resolve to `<Name>`
- Anything else is returned verbatim
    """,
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# Add middleware
app.add_middleware(RequestLoggingMiddleware)


# =============================================================================
# Exception Handlers
# =============================================================================


@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc: HTTPException):
    """Handle HTTP exceptions with consistent format."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error_type": "http_error",
            "message": exc.detail,
            "retryable": exc.status_code >= 500,
        },
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc: RequestValidationError):
    """Report request validation failures in the common error format."""
    return JSONResponse(
        status_code=422,
        content={
            "error_type": "validation_error",
            "message": "Request validation failed",
            "details": {"errors": jsonable_encoder(exc.errors())},
            "retryable": False,
        },
    )


@app.exception_handler(MissingVideoCallDataError)
async def missing_video_call_data_handler(request, exc: MissingVideoCallDataError):
    """Video lookups on events without conferencing data are caller bugs."""
    logger.error(f"Video call data missing: {exc.message}")
    return JSONResponse(
        status_code=422,
        content={
            "error_type": "missing_video_call_data",
            "message": exc.message,
            "details": {"event_uid": exc.event_uid, "operation": exc.operation},
            "retryable": exc.retryable,
        },
    )


@app.exception_handler(Exception)
async def general_exception_handler(request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "error_type": "internal_error",
            "message": "An unexpected error occurred",
            "retryable": True,
        },
    )


# =============================================================================
# Health & Status Endpoints
# =============================================================================


@app.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    tags=["System"],
)
async def health_check(settings: Settings = Depends(get_settings)):
    """Check API health status."""
    return HealthResponse(
        status="healthy",
        version=API_VERSION,
        webapp_url=settings.webapp_url,
    )


# =============================================================================
# Location Endpoints
# =============================================================================


@app.post(
    "/events/location",
    response_model=ResolvedLocationResponse,
    summary="Resolve where an event happens",
    responses={
        200: {"description": "Location resolved"},
        422: {"description": "Validation error", "model": ErrorResponse},
    },
    tags=["Events"],
)
async def resolve_location(
    request: CalendarEventPayload,
    settings: Settings = Depends(get_settings),
) -> ResolvedLocationResponse:
    """
    Resolve location text, join link and password for an event.

    Video fields are null for events without conferencing data.
    """
    event = request.to_calendar_event()
    base_url = settings.webapp_url

    resolved = resolve_event_location(event, base_url)
    uid = get_uid(event)

    logger.info(
        f"Resolved location for event {uid}",
        extra={
            "request_id": get_request_id(),
            "event_uid": uid,
            "provider": event.video_call_data.type if event.video_call_data else None,
        },
    )

    return ResolvedLocationResponse(
        uid=uid,
        location=resolved.location,
        provider_name=resolved.provider_name,
        video_call_url=resolved.video_call_url,
        video_call_password=resolved.video_call_password,
        cancel_link=get_cancel_link(event, base_url),
        reschedule_link=get_reschedule_link(event, base_url),
    )


@app.get(
    "/providers",
    response_model=list[ProviderPolicyResponse],
    summary="List video providers with special handling",
    tags=["Providers"],
)
async def list_providers() -> list[ProviderPolicyResponse]:
    """List registered video provider policies. Unlisted providers pass data through."""
    providers = []
    for provider_type in registered_provider_types():
        policy = get_policy(provider_type)
        providers.append(
            ProviderPolicyResponse(
                type=provider_type,
                label=policy.label,
                use_public_url=policy.use_public_url,
                expose_password=policy.expose_password,
            )
        )
    return providers


# =============================================================================
# Run with Uvicorn
# =============================================================================


def run_server(host: str = "0.0.0.0", port: int = 8000, reload: bool = False):
    """Run the API server with Uvicorn."""
    import uvicorn

    uvicorn.run(
        "src.api.main:app",
        host=host,
        port=port,
        reload=reload,
    )


if __name__ == "__main__":
    settings = get_settings()
    run_server(host=settings.api_host, port=settings.api_port, reload=settings.api_reload)
