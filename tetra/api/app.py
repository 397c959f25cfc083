"""
FastAPI Application - REST API for game clients.

Endpoints:
    GET    /api/v1/health                        Liveness and version
    POST   /api/v1/sessions                      Create game session
    GET    /api/v1/sessions                      List active sessions
    GET    /api/v1/sessions/{id}                 Get session status
    DELETE /api/v1/sessions/{id}                 End session
    GET    /api/v1/sessions/{id}/state           Get full game state
    GET    /api/v1/sessions/{id}/dice/{die_id}   Get one die
    POST   /api/v1/sessions/{id}/actions         Apply an action

Walk Flow:
    1. POST tentative_move actions; each response carries the ghost
       position and speculative faces of the die
    2. undo_move steps back, reset_move abandons the walk
    3. commit_move once the move counter reaches zero

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Annotated, Optional, Union

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import Settings, configure_logging, load_settings
from ..engine_core.errors import TetraError
from ..session import SessionManager
from .schemas import (
    # Requests
    ActionRequest,
    CreateSessionRequest,
    # Responses
    ActionResponse,
    DieInfo,
    EndSessionResponse,
    ErrorResponse,
    GameStateResponse,
    HealthResponse,
    SessionListResponse,
    SessionResponse,
    # Enums
    ErrorCode,
)
from .service import APIService


def create_app(service: Optional[APIService] = None, settings: Optional[Settings] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)
        settings: Optional settings (read from the environment if not provided)

    Returns:
        FastAPI application instance
    """
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Tetra Engine API",
        description="""
Tetrahedral dice on a triangular board.

## Error Codes

| Code | Description |
|------|-------------|
| `MOVES_EXHAUSTED` | The die has no moves left in this walk |
| `NO_SUCH_NEIGHBOR` | No cell in that direction |
| `INVALID_DIRECTION` | Off the board, or an illegal vertical tip |
| `MOVES_REMAINING` | Commit attempted before the counter reached zero |
| `CELL_OCCUPIED` | Destination holds another die |
| `DIE_DOES_NOT_FIT` | Die and cell point different ways |
| `SESSION_NOT_FOUND` | Session does not exist |
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

    api_service = service or APIService(session_manager=SessionManager(settings=settings))

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
            ).model_dump(mode="json"),
        )

    def error_status(error: ErrorResponse) -> int:
        if error.error_code in (ErrorCode.SESSION_NOT_FOUND, ErrorCode.DIE_NOT_FOUND):
            return 404
        return 400

    # =========================================================================
    # Health
    # =========================================================================

    @app.get("/api/v1/health", response_model=HealthResponse, tags=["Health"])
    async def health() -> HealthResponse:
        return HealthResponse(version=__version__, env=settings.env)

    # =========================================================================
    # Sessions
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=SessionResponse,
        responses={400: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Create a new game session",
    )
    async def create_session(body: CreateSessionRequest) -> Union[SessionResponse, JSONResponse]:
        """
        Create a session on the band layout, or on a custom `layout`.

        Every die starts tumbled; place them during setup with `place_die`.
        """
        try:
            return api_service.create_session(body)
        except TetraError as e:
            return make_error_response(ErrorCode(e.error_code), e.message)
        except ValueError as e:
            return make_error_response(ErrorCode.VALIDATION_ERROR, str(e))

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List active sessions",
    )
    async def list_sessions() -> SessionListResponse:
        sessions = api_service.list_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=SessionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Get session status",
    )
    async def get_session(session_id: str) -> Union[SessionResponse, JSONResponse]:
        response = api_service.get_session(session_id)
        if isinstance(response, ErrorResponse):
            return make_error_response(response.error_code, response.error, status_code=404)
        return response

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="End a game session",
    )
    async def end_session(
        session_id: str,
        reason: Annotated[str, Query(description="Reason for ending")] = "user_ended",
    ) -> EndSessionResponse:
        success = api_service.end_session(session_id, reason)
        return EndSessionResponse(success=success, session_id=session_id)

    # =========================================================================
    # State
    # =========================================================================

    @app.get(
        "/api/v1/sessions/{session_id}/state",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["State"],
        summary="Get the full game state",
    )
    async def get_state(session_id: str) -> Union[GameStateResponse, JSONResponse]:
        response = api_service.get_game_state(session_id)
        if isinstance(response, ErrorResponse):
            return make_error_response(response.error_code, response.error, status_code=404)
        return response

    @app.get(
        "/api/v1/sessions/{session_id}/dice/{die_id}",
        response_model=DieInfo,
        responses={404: {"model": ErrorResponse}},
        tags=["State"],
        summary="Get one die with its walk in progress",
    )
    async def get_die(session_id: str, die_id: str) -> Union[DieInfo, JSONResponse]:
        response = api_service.get_die(session_id, die_id)
        if isinstance(response, ErrorResponse):
            return make_error_response(
                response.error_code, response.error, status_code=error_status(response)
            )
        return response

    # =========================================================================
    # Actions
    # =========================================================================

    @app.post(
        "/api/v1/sessions/{session_id}/actions",
        response_model=ActionResponse,
        responses={
            400: {"model": ActionResponse, "description": "Rule violation"},
            404: {"model": ErrorResponse, "description": "Session not found"},
        },
        tags=["Game Loop"],
        summary="Apply an action",
    )
    async def apply_action(session_id: str, body: ActionRequest) -> Union[ActionResponse, JSONResponse]:
        """
        Apply an action to the session.

        Rule violations return 400 with `success=false` and an `error_code`;
        the game state is unchanged.
        """
        response = api_service.apply_action(session_id, body)
        if isinstance(response, ErrorResponse):
            return make_error_response(response.error_code, response.error, status_code=404)
        if not response.success:
            return JSONResponse(status_code=400, content=response.model_dump(mode="json"))
        return response

    return app


# For running directly: uvicorn tetra.api.app:app
app = create_app()
