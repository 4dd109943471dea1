"""Pydantic models for state snapshots and the command message protocol."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictInt, ValidationError

from reversi.game import Move, Position, Score
from reversi.settings import Settings

if TYPE_CHECKING:
    from reversi.state import GameState


class HistoryEntry(BaseModel):
    """One ply. `position` is None and `flipped` is empty for a pass."""

    model_config = ConfigDict(frozen=True)

    player: str
    position: Position | None
    flipped: tuple[Position, ...] = ()
    is_pass: bool = False
    score_after: Score


class GameSnapshot(BaseModel):
    """Immutable copy of the controller's state handed to readers and listeners."""

    model_config = ConfigDict(frozen=True)

    board: tuple[tuple[str | None, ...], ...]
    current_player: str
    legal_moves: tuple[Move, ...]
    score: Score
    history: tuple[HistoryEntry, ...]
    settings: Settings
    consecutive_passes: int
    is_game_over: bool

    @classmethod
    def from_state(cls, state: GameState) -> GameSnapshot:
        return cls(
            board=tuple(tuple(row) for row in state.board),
            current_player=state.current_player,
            legal_moves=tuple(state.legal_moves),
            score=state.score,
            history=tuple(state.history),
            settings=state.settings,
            consecutive_passes=state.consecutive_passes,
            is_game_over=state.is_game_over,
        )

    @property
    def board_size(self) -> int:
        return len(self.board)

    @property
    def legal_positions(self) -> list[Position]:
        return [move.position for move in self.legal_moves]

    @property
    def winner(self) -> str | None:
        """Leader once the game is over; None while playing or on a draw."""
        if not self.is_game_over:
            return None
        return self.score.leader


# ---------------------------------------------------------------------------
# Client → Controller
# ---------------------------------------------------------------------------

class PlayMoveMsg(BaseModel):
    type: Literal["play"] = "play"
    row: StrictInt
    col: StrictInt


class UndoMsg(BaseModel):
    type: Literal["undo"] = "undo"


class ToggleHighlightMsg(BaseModel):
    type: Literal["toggle_highlight"] = "toggle_highlight"


class SetFirstPlayerMsg(BaseModel):
    type: Literal["set_first_player"] = "set_first_player"
    player: str


class SetBoardSizeMsg(BaseModel):
    type: Literal["set_board_size"] = "set_board_size"
    size: StrictInt


class ResetMsg(BaseModel):
    type: Literal["reset"] = "reset"
    settings: dict[str, Any] = Field(default_factory=dict)


class GetStateMsg(BaseModel):
    type: Literal["get_state"] = "get_state"


class GetBoardSizesMsg(BaseModel):
    type: Literal["get_board_sizes"] = "get_board_sizes"


ClientMessage = (
    PlayMoveMsg
    | UndoMsg
    | ToggleHighlightMsg
    | SetFirstPlayerMsg
    | SetBoardSizeMsg
    | ResetMsg
    | GetStateMsg
    | GetBoardSizesMsg
)


# ---------------------------------------------------------------------------
# Controller → Client
# ---------------------------------------------------------------------------

class CommandResultMsg(BaseModel):
    type: Literal["result"] = "result"
    command: str
    accepted: bool
    value: Any = None


class StateSyncMsg(BaseModel):
    type: Literal["state_sync"] = "state_sync"
    state: GameSnapshot


class BoardSizesMsg(BaseModel):
    type: Literal["board_sizes"] = "board_sizes"
    sizes: list[int]


class ErrorMsg(BaseModel):
    type: Literal["error"] = "error"
    message: str


def parse_client_message(data: dict) -> ClientMessage | None:
    """Parse a raw dict into a typed client message, or None if invalid."""
    msg_type = data.get("type")
    mapping: dict[str, type[BaseModel]] = {
        "play": PlayMoveMsg,
        "undo": UndoMsg,
        "toggle_highlight": ToggleHighlightMsg,
        "set_first_player": SetFirstPlayerMsg,
        "set_board_size": SetBoardSizeMsg,
        "reset": ResetMsg,
        "get_state": GetStateMsg,
        "get_board_sizes": GetBoardSizesMsg,
    }
    model = mapping.get(msg_type)  # type: ignore[arg-type]
    if model is None:
        return None
    try:
        return model.model_validate(data)  # type: ignore[return-value]
    except ValidationError:
        return None
