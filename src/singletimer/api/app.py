"""Timer API — FastAPI application factory and routes"""

import logging
import time
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import singletimer
from singletimer.api.schemas import ErrorResponse, TimerStateResponse
from singletimer.config import Settings
from singletimer.core.errors import ErrorCode, TimerError
from singletimer.core.repository import InMemoryTimerRepository, TimerRepository
from singletimer.core.service import TimerService
from singletimer.core.timer import Clock, TimerId

logger = logging.getLogger(__name__)

SERVICE_NAME = "singletimer"


def get_timer_service(request: Request) -> TimerService:
    """Dependency returning the application-scoped TimerService"""
    return request.app.state.timer_service


router = APIRouter(prefix="/api/timer", tags=["timer"])
health_router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("", response_model=TimerStateResponse)
def get_timer_state(service: TimerService = Depends(get_timer_service)):
    """
    Get the current timer state.

    A running timer whose time has elapsed is reset before the state is
    returned, so a finished timer is reported as stopped.
    """
    return TimerStateResponse.from_snapshot(service.current_state())


@router.post("/start", response_model=TimerStateResponse)
def start_timer(
    duration_seconds: int = Query(..., alias="durationSeconds", description="Duration in seconds (1-86400)"),
    service: TimerService = Depends(get_timer_service)
):
    """
    Start the timer.

    Raises:
        400: Duration is not between 1 second and 24 hours
        409: The timer is already running
    """
    return TimerStateResponse.from_snapshot(service.start(duration_seconds))


@router.post("/pause", response_model=TimerStateResponse)
def pause_timer(service: TimerService = Depends(get_timer_service)):
    """Pause the running timer (409 if it is not running)"""
    return TimerStateResponse.from_snapshot(service.pause())


@router.post("/resume", response_model=TimerStateResponse)
def resume_timer(service: TimerService = Depends(get_timer_service)):
    """Resume a paused timer (409 if not paused or no time is left)"""
    return TimerStateResponse.from_snapshot(service.resume())


@router.post("/reset", response_model=TimerStateResponse)
def reset_timer(service: TimerService = Depends(get_timer_service)):
    """Reset the timer to stopped. Always succeeds."""
    return TimerStateResponse.from_snapshot(service.reset())


@health_router.get("")
def health_check():
    """Basic health check endpoint"""
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
    }


def _error_response(request: Request, error_code: ErrorCode, details: Optional[str]) -> JSONResponse:
    body = ErrorResponse(
        code=error_code.code,
        message=error_code.message,
        details=details,
        path=request.url.path,
    )
    return JSONResponse(status_code=error_code.http_status, content=jsonable_encoder(body))


async def handle_timer_error(request: Request, exc: TimerError) -> JSONResponse:
    if exc.code.http_status >= 500:
        logger.error(f"Timer error: {exc} at {request.url.path}")
    else:
        logger.warning(f"Timer request rejected: {exc} at {request.url.path}")
    return _error_response(request, exc.code, str(exc))


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg')}"
        for error in exc.errors()
    )
    logger.warning(f"Validation error: {details} at {request.url.path}")
    return _error_response(request, ErrorCode.INVALID_PARAMETER, details)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unexpected exception at {request.url.path}")
    return _error_response(request, ErrorCode.INTERNAL_SERVER_ERROR, "An unexpected error occurred")


def _client_ip(request: Request) -> str:
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for and forwarded_for.lower() != "unknown":
        return forwarded_for.split(",")[0].strip()
    real_ip = request.headers.get("x-real-ip")
    if real_ip and real_ip.lower() != "unknown":
        return real_ip
    return request.client.host if request.client else "unknown"


async def log_api_requests(request: Request, call_next):
    """Log each /api/ request and its response status and timing"""
    path = request.url.path
    if not path.startswith("/api/"):
        return await call_next(request)

    query = f"?{request.url.query}" if request.url.query else ""
    user_agent = request.headers.get("user-agent", "unknown")
    logger.info(
        f"[API REQUEST] {request.method} {path}{query} | Client: IP: {_client_ip(request)}, UserAgent: {user_agent}"
    )

    started = time.perf_counter()
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    finally:
        elapsed_ms = int((time.perf_counter() - started) * 1000)
        message = f"[API RESPONSE] {request.method} {path} | Status: {status_code} | Time: {elapsed_ms}ms"
        if status_code >= 400:
            logger.error(message)
        else:
            logger.info(message)


def create_app(
    settings: Optional[Settings] = None,
    repository: Optional[TimerRepository] = None,
    clock: Optional[Clock] = None,
) -> FastAPI:
    """
    Build the API application.

    One TimerService is created per application and shared by every
    request; the timer it manages is identified by ``settings.timer_id``.
    """
    settings = settings if settings is not None else Settings()
    repository = repository if repository is not None else InMemoryTimerRepository()

    app = FastAPI(
        title="Single Timer API",
        description="Start, pause, resume and reset a single countdown timer",
        version=singletimer.__version__
    )
    app.state.timer_service = TimerService(repository, TimerId(settings.timer_id), clock=clock)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(log_api_requests)

    app.add_exception_handler(TimerError, handle_timer_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    app.include_router(router)
    app.include_router(health_router)

    @app.get("/")
    def read_root():
        return {
            "message": "Single Timer API",
            "docs": "/docs",
            "version": singletimer.__version__
        }

    return app
