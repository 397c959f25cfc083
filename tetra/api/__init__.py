"""
API Module - Client interface.

Exposes the engine via REST API. A client:
1. Creates a game session
2. Places dice during setup
3. Plans walks with tentative moves, undo and reset
4. Commits walks and ends turns

All state is session-scoped and in memory.
"""

from .schemas import (
    # Requests
    CreateSessionRequest,
    ActionRequest,
    # Responses
    SessionResponse,
    GameStateResponse,
    ActionResponse,
    ErrorResponse,
    # Shared
    FacesInfo,
    DieInfo,
    SimplifiedDieInfo,
    CellInfo,
    CellLayout,
    PlayerInfo,
)
from .service import APIService

__all__ = [
    # Requests
    "CreateSessionRequest",
    "ActionRequest",
    # Responses
    "SessionResponse",
    "GameStateResponse",
    "ActionResponse",
    "ErrorResponse",
    # Shared
    "FacesInfo",
    "DieInfo",
    "SimplifiedDieInfo",
    "CellInfo",
    "CellLayout",
    "PlayerInfo",
    # Service
    "APIService",
]
