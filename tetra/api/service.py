"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to engine calls
2. Manages sessions
3. Formats engine state for clients

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .schemas import (
    # Requests
    ActionRequest,
    CreateSessionRequest,
    # Responses
    ActionResponse,
    ErrorResponse,
    GameStateResponse,
    SessionResponse,
    # Shared
    CellInfo,
    DieInfo,
    FacesInfo,
    PlayerInfo,
    SimplifiedDieInfo,
    # Enums
    ErrorCode,
    PointingName,
    SessionStatus,
)
from ..board import Board, CellSpec
from ..engine_core.action import Action, ActionPayload, ActionType
from ..engine_core.die import Die
from ..engine_core.faces import DieFaces
from ..engine_core.state import GamePhase, GameState
from ..session import Session, SessionManager


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        session = service.create_session(CreateSessionRequest())
        response = service.apply_action(session.session_id, ActionRequest(...))
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    # -------------------------------------------------------------------------
    # Sessions
    # -------------------------------------------------------------------------

    def create_session(self, request: CreateSessionRequest) -> SessionResponse:
        """
        Create a new game session.

        Raises:
            ValueError, TetraError: the custom layout cannot be built
        """
        layout = None
        if request.layout is not None:
            layout = [
                CellSpec(
                    cell_id=cell.cell_id,
                    pointing_direction=cell.pointing_direction.value,
                    neighbors={d.value: n for d, n in cell.neighbors.items()},
                )
                for cell in request.layout
            ]

        session = self.session_manager.create_session(
            num_players=request.num_players,
            dice_per_player=request.dice_per_player,
            layout=layout,
            random_seed=request.random_seed,
            player_names=request.player_names,
        )
        return self._session_response(session)

    def get_session(self, session_id: str) -> SessionResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        return self._session_response(session)

    def end_session(self, session_id: str, reason: str = "user_ended") -> bool:
        return self.session_manager.end_session(session_id, reason)

    def list_sessions(self) -> list[str]:
        return self.session_manager.list_active_sessions()

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    def get_game_state(self, session_id: str) -> GameStateResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)

        state = session.game_state
        return GameStateResponse(
            session_id=session_id,
            phase=state.phase.value,
            turn_number=state.turn_number,
            current_player_id=state.current_player.player_id if state.players else None,
            walking_die_id=state.walking_die_id,
            players=self._player_infos(state),
            dice=[self._die_info(state, die) for die in state.all_dice()],
            cells=[self._cell_info(state, cell_id) for cell_id in state.board.cell_ids],
        )

    def get_die(self, session_id: str, die_id: str) -> DieInfo | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)

        die = session.game_state.get_die(die_id)
        if die is None:
            return ErrorResponse(
                error=f"Die {die_id} not found",
                error_code=ErrorCode.DIE_NOT_FOUND,
            )
        return self._die_info(session.game_state, die)

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    def apply_action(self, session_id: str, request: ActionRequest) -> ActionResponse | ErrorResponse:
        """Apply one action; rule violations come back as unsuccessful responses."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)

        action = Action(
            action_type=ActionType(request.action_type.value),
            payload=ActionPayload(
                player_id=request.player_id,
                die_id=request.die_id,
                cell_id=request.cell_id,
                direction=request.direction,
                params={"steps": request.steps},
            ),
        )
        result = session.apply(action)

        die = session.game_state.get_die(request.die_id) if request.die_id else None
        return ActionResponse(
            success=result.success,
            session_id=session_id,
            action_type=request.action_type,
            changes=result.state_changes,
            position=result.position,
            die=self._die_info(session.game_state, die) if die else None,
            error=result.error,
            error_code=result.error_code,
        )

    # -------------------------------------------------------------------------
    # Conversion helpers
    # -------------------------------------------------------------------------

    def _not_found(self, session_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Session {session_id} not found",
            error_code=ErrorCode.SESSION_NOT_FOUND,
        )

    def _session_response(self, session: Session) -> SessionResponse:
        state = session.game_state
        return SessionResponse(
            session_id=session.session_id,
            status=SessionStatus(session.state.value),
            phase=state.phase.value,
            created_at=session.created_at,
            turn_number=state.turn_number,
            players=self._player_infos(state),
        )

    def _player_infos(self, state: GameState) -> list[PlayerInfo]:
        current = state.current_player.player_id if state.players else None
        return [
            PlayerInfo(
                player_id=p.player_id,
                name=p.name,
                is_current_turn=state.phase == GamePhase.PLAYING and p.player_id == current,
                dice=sorted(p.dice),
                dice_on_board=sorted(p.dice_on_board),
                lost_dice=sorted(p.lost_dice),
            )
            for p in state.players
        ]

    def _faces_info(self, faces: DieFaces) -> FacesInfo:
        return FacesInfo(
            left=faces.left,
            top=faces.top,
            right=faces.right,
            up=faces.up,
            down=faces.down,
            pointing_direction=PointingName(faces.pointing_direction.value),
        )

    def _die_info(self, state: GameState, die: Die) -> DieInfo:
        board: Board = state.board
        owner = state.get_player(die.owner_id)
        return DieInfo(
            die_id=die.die_id,
            owner_id=die.owner_id,
            faces=self._faces_info(die.planner.committed),
            cell_id=board.location_of(die.die_id),
            move_count=die.move_count,
            moves_taken=die.planner.moves_taken,
            is_walking=die.is_walking,
            speculative_position=die.planner.position(board),
            speculative_faces=self._faces_info(die.planner.speculative),
            is_lost=owner is not None and die.die_id in owner.lost_dice,
        )

    def _cell_info(self, state: GameState, cell_id: int) -> CellInfo:
        board = state.board
        die_id = board.occupant(cell_id)
        snapshot = None
        if die_id is not None:
            simplified = state.get_die(die_id).simplified()
            snapshot = SimplifiedDieInfo(
                die_id=die_id,
                owner_id=simplified.owner_id,
                left=simplified.left,
                top=simplified.top,
                right=simplified.right,
                up=simplified.up,
                down=simplified.down,
            )

        return CellInfo(
            cell_id=cell_id,
            pointing_direction=PointingName(board.cell_pointing_direction(cell_id).value),
            neighbors=board.neighbor_ids(cell_id),
            die=snapshot,
        )
