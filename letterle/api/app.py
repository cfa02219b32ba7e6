"""
FastAPI Application - REST API over the local session.

Endpoints:
    GET    /api/v1/health           Service health
    GET    /api/v1/session          Current window snapshot
    POST   /api/v1/session/refresh  Reload, as a new page load would
    POST   /api/v1/guess            Guess a letter
    POST   /api/v1/theme            Set or toggle the theme
    GET    /api/v1/stats            Statistics over completed windows
    GET    /api/v1/share            Share text (complete windows only)

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Optional, Union

from .. import __version__
from ..config import Settings


def create_app(service=None, settings: Optional[Settings] = None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)
        settings: Optional Settings (read from the environment if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI, Request
        from fastapi.encoders import jsonable_encoder
        from fastapi.exceptions import RequestValidationError
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from ..errors import WindowNotComplete
    from .service import APIService
    from .schemas import (
        # Request models
        GuessRequest,
        ThemeRequest,
        # Response models
        SessionResponse,
        GuessResponse,
        StatisticsResponse,
        ShareResponse,
        HealthResponse,
        ErrorResponse,
        # Enums
        ErrorCode,
    )

    settings = settings or Settings.from_env()

    app = FastAPI(
        title="Letterle API",
        description="""
Daily letter guessing game - one hidden letter per day.

## Flow

1. `GET /session` loads (or resumes) today's window
2. `POST /guess` until the answer is found
3. `GET /stats` and `GET /share` once the window is complete

Invalid, repeated or late guesses are ignored (`accepted=false`), never errors.

## Error Codes

| Code | Description |
|------|-------------|
| `WINDOW_NOT_COMPLETE` | Results requested before today's letter was found |
| `VALIDATION_ERROR` | Request body failed validation |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService()

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return make_error_response(
            ErrorCode.VALIDATION_ERROR,
            "Request validation failed",
            status_code=422,
            details={"errors": jsonable_encoder(exc.errors())},
        )

    # =========================================================================
    # Health
    # =========================================================================

    @app.get(
        "/api/v1/health",
        response_model=HealthResponse,
        tags=["Health"],
        summary="Service health",
    )
    def health() -> HealthResponse:
        return HealthResponse(version=__version__, env=settings.env)

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.get(
        "/api/v1/session",
        response_model=SessionResponse,
        tags=["Session"],
        summary="Get the current window",
    )
    def get_session() -> SessionResponse:
        """
        Get today's window.

        The first call reconciles the stored record: it resumes today's
        window, starts a new one after midnight, or starts fresh.
        """
        return api_service.get_session()

    @app.post(
        "/api/v1/session/refresh",
        response_model=SessionResponse,
        tags=["Session"],
        summary="Reload the session",
    )
    def refresh_session() -> SessionResponse:
        """Reload from storage, picking up a new day if one has started."""
        return api_service.refresh()

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/guess",
        response_model=GuessResponse,
        tags=["Game"],
        summary="Guess a letter",
    )
    def guess(body: GuessRequest) -> GuessResponse:
        """
        Guess a letter.

        **Request Body:**
        ```json
        {"value": "m"}
        ```
        """
        return api_service.guess(body.value)

    @app.post(
        "/api/v1/theme",
        response_model=SessionResponse,
        tags=["Game"],
        summary="Set or toggle the theme",
    )
    def set_theme(body: Optional[ThemeRequest] = None) -> SessionResponse:
        """Set the theme. An empty body toggles between light and dark."""
        return api_service.set_theme(body.theme if body else None)

    @app.get(
        "/api/v1/stats",
        response_model=StatisticsResponse,
        tags=["Results"],
        summary="Statistics over completed windows",
    )
    def get_statistics() -> StatisticsResponse:
        return api_service.get_statistics()

    @app.get(
        "/api/v1/share",
        response_model=ShareResponse,
        responses={409: {"model": ErrorResponse, "description": "Window not complete"}},
        tags=["Results"],
        summary="Share text for today",
    )
    def get_share() -> Union[ShareResponse, JSONResponse]:
        try:
            return api_service.get_share()
        except WindowNotComplete as e:
            return make_error_response(ErrorCode.WINDOW_NOT_COMPLETE, str(e), status_code=409)

    return app


# For running directly: uvicorn letterle.api.app:app
app = None
try:
    app = create_app()
except ImportError:
    # FastAPI not installed
    pass
