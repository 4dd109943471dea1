"""Game controller: turn sequencing, passes, history, undo, and state listeners."""

from __future__ import annotations

import copy
import itertools
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from reversi.exceptions import InvalidBoardError, UnknownPlayerError
from reversi.game import (
    PLAYERS,
    Board,
    Move,
    Score,
    apply_move,
    clone_board,
    count_discs,
    create_initial_board,
    find_legal_moves,
    get_opponent,
    is_board_full,
    validate_board,
)
from reversi.models import GameSnapshot, HistoryEntry
from reversi.settings import (
    SUPPORTED_BOARD_SIZES,
    Settings,
    is_supported_board_size,
    normalize_settings,
)

logger = logging.getLogger(__name__)

# One pass per player in a row means nobody can move
PASSES_TO_END = len(PLAYERS)

Listener = Callable[[GameSnapshot], None]


@dataclass
class GameState:
    board: Board
    current_player: str
    legal_moves: list[Move]
    score: Score
    settings: Settings
    history: list[HistoryEntry] = field(default_factory=list)
    consecutive_passes: int = 0
    is_game_over: bool = False

    def find_legal_move(self, row: int, col: int) -> Move | None:
        for move in self.legal_moves:
            if move.position == (row, col):
                return move
        return None


def new_game(settings: Settings | Mapping[str, Any] | None = None) -> GameState:
    settings = normalize_settings(settings)
    board = create_initial_board(settings.board_size)
    return GameState(
        board=board,
        current_player=settings.first_player,
        legal_moves=find_legal_moves(board, settings.first_player),
        score=count_discs(board),
        settings=settings,
    )


def _is_index(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class GameController:
    """Owns one game and publishes a fresh snapshot after every change.

    Commands run to completion before listeners are notified, so a listener
    never sees a move applied without the turn having advanced. Calling a
    command from inside a listener is allowed but the caller must expect the
    remaining listeners to receive the later state.
    """

    def __init__(self, settings: Settings | Mapping[str, Any] | None = None):
        self._state = new_game(settings)
        self._undo_snapshot: GameState | None = None
        self._listeners: dict[int, Listener] = {}
        self._listener_ids = itertools.count()

    @classmethod
    def from_position(
        cls,
        board: Board,
        current_player: str,
        settings: Settings | Mapping[str, Any] | None = None,
    ) -> GameController:
        """Start from a set-up position with `current_player` to move.

        The board size comes from `board`. If the side to move has no legal
        move, its pass is recorded straight away.
        """
        get_opponent(current_player)
        validate_board(board)
        if not is_supported_board_size(len(board)):
            raise InvalidBoardError(f"Unsupported board size: {len(board)}")

        controller = cls(settings)
        board = clone_board(board)
        state = controller._state
        state.settings = state.settings.model_copy(update={"board_size": len(board)})
        state.board = board
        state.current_player = current_player
        state.legal_moves = find_legal_moves(board, current_player)
        state.score = count_discs(board)
        if not state.legal_moves:
            controller._advance_turn(get_opponent(current_player))
        return controller

    # -- Reads ---------------------------------------------------------------

    def get_state(self) -> GameSnapshot:
        return GameSnapshot.from_state(self._state)

    def supported_board_sizes(self) -> list[int]:
        return list(SUPPORTED_BOARD_SIZES)

    # -- Commands ------------------------------------------------------------

    def play(self, row: int, col: int) -> bool:
        """Play at (row, col) for the current player. Returns False if rejected."""
        state = self._state
        if state.is_game_over:
            return False
        if not _is_index(row) or not _is_index(col):
            return False

        move = state.find_legal_move(row, col)
        if move is None:
            return False

        self._undo_snapshot = copy.deepcopy(state)

        player = state.current_player
        state.board = apply_move(state.board, move.position, player)
        state.score = count_discs(state.board)
        state.history.append(
            HistoryEntry(
                player=player,
                position=move.position,
                flipped=move.flipped,
                is_pass=False,
                score_after=state.score,
            )
        )
        state.consecutive_passes = 0
        logger.debug("%s played (%d, %d), flipping %d", player, row, col, len(move.flipped))

        self._advance_turn(player)
        self._emit()
        return True

    def undo(self) -> bool:
        if self._undo_snapshot is None:
            return False

        self._state = self._undo_snapshot
        self._undo_snapshot = None
        logger.info("Move undone, %s to play", self._state.current_player)
        self._emit()
        return True

    def toggle_highlight(self) -> bool:
        value = not self._state.settings.highlight_legal_moves
        self._state.settings = self._state.settings.model_copy(
            update={"highlight_legal_moves": value}
        )
        # Undo should not bring back the old display preference
        if self._undo_snapshot is not None:
            self._undo_snapshot.settings = self._undo_snapshot.settings.model_copy(
                update={"highlight_legal_moves": value}
            )
        self._emit()
        return value

    def reset(self, settings: Settings | Mapping[str, Any] | None = None) -> None:
        if isinstance(settings, Settings):
            settings = settings.model_dump()
        merged = {**self._state.settings.model_dump(), **(settings or {})}
        self._state = new_game(merged)
        self._undo_snapshot = None
        logger.info(
            "New game: %dx%d, %s first",
            self._state.settings.board_size,
            self._state.settings.board_size,
            self._state.settings.first_player,
        )
        self._emit()

    def set_first_player(self, player: str) -> bool:
        if player not in PLAYERS:
            raise UnknownPlayerError(f"First player must be one of {PLAYERS}, got {player!r}")
        if self._state.settings.first_player == player:
            return False
        self.reset({"first_player": player})
        return True

    def set_board_size(self, size: int) -> bool:
        if not is_supported_board_size(size):
            return False
        if self._state.settings.board_size == size:
            return False
        self.reset({"board_size": size})
        return True

    # -- Listeners -----------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register `listener`, send it the current state, and return an unsubscribe function."""
        if not callable(listener):
            raise TypeError("Listener must be callable")

        listener_id = next(self._listener_ids)
        self._listeners[listener_id] = listener
        self._deliver(listener, self.get_state())

        def unsubscribe() -> None:
            self._listeners.pop(listener_id, None)

        return unsubscribe

    def _emit(self):
        snapshot = self.get_state()
        for listener in list(self._listeners.values()):
            self._deliver(listener, snapshot)

    def _deliver(self, listener: Listener, snapshot: GameSnapshot):
        try:
            listener(snapshot)
        except Exception:
            logger.exception("State listener %r failed", listener)

    # -- Turn sequencing -----------------------------------------------------

    def _advance_turn(self, after_player: str):
        state = self._state
        if state.is_game_over:
            state.legal_moves = []
            return

        candidate = get_opponent(after_player)
        for _ in range(PASSES_TO_END):
            legal_moves = find_legal_moves(state.board, candidate)
            if legal_moves:
                state.current_player = candidate
                state.legal_moves = legal_moves
                state.is_game_over = False
                return

            state.consecutive_passes += 1
            state.history.append(
                HistoryEntry(
                    player=candidate,
                    position=None,
                    flipped=(),
                    is_pass=True,
                    score_after=state.score,
                )
            )
            logger.info("%s has no legal move and passes", candidate)

            if state.consecutive_passes >= PASSES_TO_END or is_board_full(state.board):
                break
            candidate = get_opponent(candidate)

        state.current_player = candidate
        state.legal_moves = []
        state.is_game_over = True
        logger.info(
            "Game over: black %d, white %d, winner %s",
            state.score.black,
            state.score.white,
            state.score.leader or "none (draw)",
        )
