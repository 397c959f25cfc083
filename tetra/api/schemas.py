"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between a client UI and the engine.
A client renders dice from `DieInfo` and cells from `CellInfo`, and
drives play by posting `ActionRequest`s.

Error Codes (besides the rule violation codes from the engine):
- SESSION_NOT_FOUND: Session does not exist or has ended
- VALIDATION_ERROR: Request could not be turned into an engine call
- INVALID_ACTION: Action not allowed in the current phase
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    CREATED = "created"
    ACTIVE = "active"
    GAME_OVER = "game_over"
    ABANDONED = "abandoned"


class DirectionName(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


class PointingName(str, Enum):
    UP = "up"
    DOWN = "down"


class ActionKind(str, Enum):
    """Action types accepted by POST /actions."""
    PLACE_DIE = "place_die"
    ROLL_DIE = "roll_die"
    START_GAME = "start_game"
    TENTATIVE_MOVE = "tentative_move"
    UNDO_MOVE = "undo_move"
    COMMIT_MOVE = "commit_move"
    RESET_MOVE = "reset_move"
    SPIN_DIE = "spin_die"
    REMOVE_DIE = "remove_die"
    END_TURN = "end_turn"
    END_GAME = "end_game"


class ErrorCode(str, Enum):
    """Structured error codes."""
    # Engine rule violations
    MOVES_EXHAUSTED = "MOVES_EXHAUSTED"
    NO_SUCH_NEIGHBOR = "NO_SUCH_NEIGHBOR"
    INVALID_DIRECTION = "INVALID_DIRECTION"
    NO_MOVES_TO_UNDO = "NO_MOVES_TO_UNDO"
    MOVES_REMAINING = "MOVES_REMAINING"
    DIE_NOT_PLACED = "DIE_NOT_PLACED"
    CELL_OCCUPIED = "CELL_OCCUPIED"
    DIE_DOES_NOT_FIT = "DIE_DOES_NOT_FIT"
    CELL_EMPTY = "CELL_EMPTY"
    UNKNOWN_CELL = "UNKNOWN_CELL"
    NEIGHBOR_ALREADY_SET = "NEIGHBOR_ALREADY_SET"
    INVALID_NEIGHBOR = "INVALID_NEIGHBOR"
    # Turn validation
    INVALID_ACTION = "INVALID_ACTION"
    PLAYER_NOT_FOUND = "PLAYER_NOT_FOUND"
    NOT_YOUR_TURN = "NOT_YOUR_TURN"
    DIE_NOT_FOUND = "DIE_NOT_FOUND"
    NOT_OWNER = "NOT_OWNER"
    WALK_IN_PROGRESS = "WALK_IN_PROGRESS"
    # API
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class FacesInfo(BaseModel):
    """The five face slots of a die and where it points."""
    left: int
    top: int
    right: int
    up: int = Field(description="Null zone slot; 0 when empty")
    down: int = Field(description="Null zone slot; 0 when empty")
    pointing_direction: PointingName


class SimplifiedDieInfo(BaseModel):
    """Read-only snapshot of a die for rendering."""
    die_id: str
    owner_id: int
    left: int
    top: int
    right: int
    up: int
    down: int


class DieInfo(BaseModel):
    """Full view of one die, including its walk in progress."""
    die_id: str
    owner_id: int
    faces: FacesInfo
    cell_id: Optional[int] = None
    move_count: int
    moves_taken: int = Field(0, description="Tentative steps in the walk in progress")
    is_walking: bool = False
    speculative_position: Optional[int] = None
    speculative_faces: FacesInfo
    is_lost: bool = False


class CellInfo(BaseModel):
    """A board cell and its occupant."""
    cell_id: int
    pointing_direction: PointingName
    neighbors: dict[str, Optional[int]] = Field(default_factory=dict)
    die: Optional[SimplifiedDieInfo] = None


class PlayerInfo(BaseModel):
    player_id: int
    name: str
    is_current_turn: bool = False
    dice: list[str] = Field(default_factory=list)
    dice_on_board: list[str] = Field(default_factory=list)
    lost_dice: list[str] = Field(default_factory=list)


class CellLayout(BaseModel):
    """Declaration of one cell for a custom board."""
    cell_id: int
    pointing_direction: PointingName
    neighbors: dict[DirectionName, int] = Field(
        default_factory=dict,
        description="Declared neighbor ids; ids missing from the layout become boundaries",
    )


# =============================================================================
# Requests
# =============================================================================

class CreateSessionRequest(BaseModel):
    num_players: int = Field(2, ge=2, le=4)
    dice_per_player: Optional[int] = Field(None, ge=1, le=10)
    random_seed: Optional[int] = None
    player_names: list[str] = Field(default_factory=list)
    layout: Optional[list[CellLayout]] = Field(
        None, description="Custom board; the band layout when omitted"
    )


class ActionRequest(BaseModel):
    """An action on a session. Fields needed depend on `action_type`."""
    action_type: ActionKind
    player_id: Optional[int] = None
    die_id: Optional[str] = None
    cell_id: Optional[int] = None
    direction: Optional[str] = Field(None, description="up/down/left/right; left/right for spins")
    steps: Optional[int] = Field(None, ge=1, description="Tumble steps for roll_die")


# =============================================================================
# Responses
# =============================================================================

class SessionResponse(BaseModel):
    session_id: str
    status: SessionStatus
    phase: str
    created_at: float
    turn_number: int = 0
    players: list[PlayerInfo] = Field(default_factory=list)


class GameStateResponse(BaseModel):
    """Complete state for rendering."""
    session_id: str
    phase: str
    turn_number: int
    current_player_id: Optional[int] = None
    walking_die_id: Optional[str] = None
    players: list[PlayerInfo] = Field(default_factory=list)
    dice: list[DieInfo] = Field(default_factory=list)
    cells: list[CellInfo] = Field(default_factory=list)


class ActionResponse(BaseModel):
    success: bool
    session_id: str
    action_type: ActionKind
    changes: list[str] = Field(default_factory=list)
    position: Optional[int] = Field(None, description="Cell the die or its walk now stands on")
    die: Optional[DieInfo] = None
    error: Optional[str] = None
    error_code: Optional[str] = None


class ErrorResponse(BaseModel):
    error: str
    error_code: ErrorCode


class SessionListResponse(BaseModel):
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    success: bool
    session_id: str


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
    env: str
