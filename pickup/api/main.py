"""
FastAPI application for Pickup events.

This is the main entry point for the HTTP API, providing:
- Event endpoints (list, create, join, leave, delete)
- User profile and friend endpoints (see user_routes / friend_routes)
- Health endpoint
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.responses import JSONResponse

from pickup import __version__
from pickup.api.dependencies import (
    get_current_user_id,
    get_event_service,
    get_user_directory,
    require_user_id,
)
from pickup.api.friend_routes import router as friends_router
from pickup.api.middleware import RequestLoggingMiddleware, get_request_id
from pickup.api.models import (
    CreateEventRequest,
    DeleteEventResponse,
    ErrorResponse,
    EventListResponse,
    EventResponse,
    HealthResponse,
)
from pickup.api.user_routes import router as users_router
from pickup.config import configure_logging, get_settings
from pickup.database import check_connection, init_db
from pickup.exceptions import PickupError
from pickup.services import EventService, UserDirectory

logger = logging.getLogger(__name__)


# =============================================================================
# Application Lifecycle
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    settings = get_settings()
    configure_logging(settings)
    settings.validate_production_config()

    logger.info("Starting Pickup API")
    if settings.create_tables_on_startup:
        init_db()
    logger.info("Pickup API started")

    yield

    logger.info("Shutting down Pickup API")


# =============================================================================
# FastAPI Application
# =============================================================================


app = FastAPI(
    title="Pickup API",
    description="""
# Pickup API

Short-lived campus activity listings: pickup games, club meetups, study
sessions. Create one, see who is around, join in.

## Identity

The caller is identified by the `X-User-ID` header. Without it the caller is a
signed-out viewer: public events can be browsed, nothing can be changed.

## Private events

A private event is only listed for its creator, its participants, invited
users and friends of the creator. Hidden events answer 404.

## Error Handling

Errors return `{error_type, message, retryable}`:

- **400** - Leaving an event you never joined, friend request to yourself
- **401** - Signed-in user required
- **403** - Only the creator may delete an event
- **404** - Event, user or request not found (or not visible)
- **409** - Already joined, event full, already friends, request pending
- **422** - Validation error
- **503** - Database unavailable (retryable)
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
    responses={
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)

app.add_middleware(RequestLoggingMiddleware)

app.include_router(users_router)
app.include_router(friends_router)


# =============================================================================
# Exception Handlers
# =============================================================================


@app.exception_handler(PickupError)
async def pickup_exception_handler(request, exc: PickupError):
    """Render service errors with their status code."""
    if exc.status_code >= 500:
        logger.error(
            f"[{get_request_id()}] {exc.error_type}: {exc.message}",
            exc_info=exc.original_error,
        )
    else:
        logger.info(f"[{get_request_id()}] {exc.error_type} ({exc.status_code}): {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error_type": exc.error_type,
            "message": exc.message,
            "retryable": exc.retryable,
        },
    )


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
def health_check() -> HealthResponse:
    """Check API health status, including the database connection."""
    database_connected = check_connection()
    return HealthResponse(
        status="healthy" if database_connected else "unhealthy",
        version=__version__,
        database_connected=database_connected,
    )


# =============================================================================
# Event Endpoints
# =============================================================================


@app.get(
    "/events",
    response_model=EventListResponse,
    summary="List active events",
    description="Events that have not expired and are visible to the caller, soonest-ending first.",
    tags=["Events"],
)
def list_events(
    activity: Optional[str] = Query(
        None,
        description="Filter by activity category or subtype (e.g. Sports, Basketball)",
    ),
    viewer: Optional[str] = Depends(get_current_user_id),
    service: EventService = Depends(get_event_service),
) -> EventListResponse:
    now = service.now()
    events = service.list_visible(viewer, now=now, activity=activity)
    return EventListResponse(
        events=[EventResponse.from_event(e, now) for e in events],
        total=len(events),
    )


@app.get(
    "/events/past",
    response_model=EventListResponse,
    summary="List expired events",
    tags=["Events"],
)
def list_past_events(
    viewer: Optional[str] = Depends(get_current_user_id),
    service: EventService = Depends(get_event_service),
) -> EventListResponse:
    now = service.now()
    events = service.list_past(viewer, now=now)
    return EventListResponse(
        events=[EventResponse.from_event(e, now) for e in events],
        total=len(events),
    )


@app.get(
    "/events/{event_id}",
    response_model=EventResponse,
    summary="Get event details",
    tags=["Events"],
)
def get_event(
    event_id: str,
    viewer: Optional[str] = Depends(get_current_user_id),
    service: EventService = Depends(get_event_service),
) -> EventResponse:
    event = service.get_visible(viewer, event_id)
    return EventResponse.from_event(event, service.now())


@app.post(
    "/events",
    response_model=EventResponse,
    status_code=201,
    summary="Create event",
    description="Create a pickup event. The caller becomes its first participant.",
    tags=["Events"],
)
def create_event(
    request: CreateEventRequest,
    user_id: str = Depends(require_user_id),
    service: EventService = Depends(get_event_service),
    directory: UserDirectory = Depends(get_user_directory),
) -> EventResponse:
    profile = directory.get(user_id)
    creator_name = profile.display_name if profile else user_id

    event = service.create(user_id, creator_name, request.to_draft())
    return EventResponse.from_event(event, service.now())


@app.post(
    "/events/{event_id}/join",
    response_model=EventResponse,
    summary="Join event",
    tags=["Events"],
)
def join_event(
    event_id: str,
    user_id: str = Depends(require_user_id),
    service: EventService = Depends(get_event_service),
) -> EventResponse:
    event = service.join(event_id, user_id)
    return EventResponse.from_event(event, service.now())


@app.post(
    "/events/{event_id}/leave",
    response_model=EventResponse,
    summary="Leave event",
    tags=["Events"],
)
def leave_event(
    event_id: str,
    user_id: str = Depends(require_user_id),
    service: EventService = Depends(get_event_service),
) -> EventResponse:
    event = service.leave(event_id, user_id)
    return EventResponse.from_event(event, service.now())


@app.delete(
    "/events/{event_id}",
    response_model=DeleteEventResponse,
    summary="Delete event",
    description="Delete an event. Only its creator may do this.",
    tags=["Events"],
)
def delete_event(
    event_id: str,
    user_id: str = Depends(require_user_id),
    service: EventService = Depends(get_event_service),
) -> DeleteEventResponse:
    deleted_id = service.delete(event_id, user_id)
    return DeleteEventResponse(
        success=True,
        event_id=deleted_id,
        message="Event deleted successfully",
    )


# =============================================================================
# Run with Uvicorn
# =============================================================================


def run_server(host: Optional[str] = None, port: Optional[int] = None, reload: Optional[bool] = None):
    """Run the API server with Uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "pickup.api.main:app",
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=settings.api_reload if reload is None else reload,
    )


if __name__ == "__main__":
    run_server()
