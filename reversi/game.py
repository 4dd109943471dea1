"""Board engine: legal moves, disc flipping, scoring, and terminal detection.

Boards are plain nested lists and every function here treats them as
immutable. Anything that changes the position returns a new board.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

from reversi.exceptions import InvalidBoardError, UnknownPlayerError

BLACK = "black"
WHITE = "white"
EMPTY = None

PLAYERS = (BLACK, WHITE)

DEFAULT_BOARD_SIZE = 8
MIN_BOARD_SIZE = 4

# Eight compass directions as (row, col) steps
DIRECTIONS = [
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
]

Cell = str | None
Board = list[list[Cell]]


class Position(NamedTuple):
    row: int
    col: int


@dataclass(frozen=True)
class Move:
    """A legal placement and the discs it flips, for one (board, player) pair."""

    position: Position
    flipped: tuple[Position, ...]


@dataclass(frozen=True)
class Score:
    black: int
    white: int
    empty: int

    def for_player(self, player: str) -> int:
        if player == BLACK:
            return self.black
        if player == WHITE:
            return self.white
        raise UnknownPlayerError(f"Unknown player token: {player!r}")

    @property
    def leader(self) -> str | None:
        """Player with more discs, or None on a tie."""
        if self.black > self.white:
            return BLACK
        if self.white > self.black:
            return WHITE
        return None


def get_opponent(player: str) -> str:
    if player == BLACK:
        return WHITE
    if player == WHITE:
        return BLACK
    raise UnknownPlayerError(f"Unknown player token: {player!r}")


def is_valid_board_size(size: object) -> bool:
    return (
        isinstance(size, int)
        and not isinstance(size, bool)
        and size >= MIN_BOARD_SIZE
        and size % 2 == 0
    )


def is_on_board(board: Board, row: int, col: int) -> bool:
    size = len(board)
    return 0 <= row < size and 0 <= col < size


def clone_board(board: Board) -> Board:
    return [list(row) for row in board]


def create_initial_board(size: int = DEFAULT_BOARD_SIZE) -> Board:
    """Empty board with the four centre discs in the standard crossed layout."""
    if not is_valid_board_size(size):
        raise InvalidBoardError(
            f"Board size must be an even integer of at least {MIN_BOARD_SIZE}, got {size!r}"
        )
    board: Board = [[EMPTY] * size for _ in range(size)]
    mid = size // 2
    board[mid - 1][mid - 1] = WHITE
    board[mid][mid] = WHITE
    board[mid - 1][mid] = BLACK
    board[mid][mid - 1] = BLACK
    return board


def validate_board(board: Board) -> None:
    """Raise InvalidBoardError unless the board is a square grid of known cells."""
    size = len(board)
    if not is_valid_board_size(size):
        raise InvalidBoardError(f"Unsupported board size: {size}")
    for row in board:
        if len(row) != size:
            raise InvalidBoardError("Board must be square")
        for cell in row:
            if cell is not EMPTY and cell not in PLAYERS:
                raise InvalidBoardError(f"Unknown cell value: {cell!r}")


def collect_flipped_discs(board: Board, position: Position, player: str) -> list[Position]:
    """Return the discs that flip if `player` places at `position`, or [] if none do."""
    opponent = get_opponent(player)
    row, col = position
    if not is_on_board(board, row, col) or board[row][col] is not EMPTY:
        return []

    flipped: list[Position] = []
    for dr, dc in DIRECTIONS:
        run: list[Position] = []
        r, c = row + dr, col + dc
        while is_on_board(board, r, c) and board[r][c] == opponent:
            run.append(Position(r, c))
            r += dr
            c += dc

        # The run only counts when it is closed off by one of our own discs
        if run and is_on_board(board, r, c) and board[r][c] == player:
            flipped.extend(run)

    return flipped


def find_legal_moves(board: Board, player: str) -> list[Move]:
    """All legal moves for `player`, in row-major order."""
    moves: list[Move] = []
    for row, cells in enumerate(board):
        for col, cell in enumerate(cells):
            if cell is not EMPTY:
                continue
            flipped = collect_flipped_discs(board, Position(row, col), player)
            if flipped:
                moves.append(Move(Position(row, col), tuple(flipped)))
    return moves


def has_legal_move(board: Board, player: str) -> bool:
    for row, cells in enumerate(board):
        for col, cell in enumerate(cells):
            if cell is EMPTY and collect_flipped_discs(board, Position(row, col), player):
                return True
    return False


def apply_move(board: Board, position: Position, player: str) -> Board:
    """Return a new board with the move played.

    An illegal move yields an unmodified copy, so callers should check the
    target against find_legal_moves first.
    """
    next_board = clone_board(board)
    flipped = collect_flipped_discs(board, position, player)
    if not flipped:
        return next_board

    row, col = position
    next_board[row][col] = player
    for r, c in flipped:
        next_board[r][c] = player
    return next_board


def count_discs(board: Board) -> Score:
    black = white = empty = 0
    for row in board:
        for cell in row:
            if cell == BLACK:
                black += 1
            elif cell == WHITE:
                white += 1
            else:
                empty += 1
    return Score(black=black, white=white, empty=empty)


def is_board_full(board: Board) -> bool:
    return all(cell is not EMPTY for row in board for cell in row)


def is_terminal(board: Board) -> bool:
    """True when the board is full or neither player can move."""
    if is_board_full(board):
        return True
    return not has_legal_move(board, BLACK) and not has_legal_move(board, WHITE)
