"""Unit tests for the board engine: flipping, legal moves, scoring, terminal detection."""

import pytest

from reversi.exceptions import InvalidBoardError, UnknownPlayerError
from reversi.game import (
    BLACK,
    EMPTY,
    WHITE,
    Position,
    apply_move,
    clone_board,
    collect_flipped_discs,
    count_discs,
    create_initial_board,
    find_legal_moves,
    get_opponent,
    has_legal_move,
    is_terminal,
    validate_board,
)


def filled_board(color, size=8):
    return [[color] * size for _ in range(size)]


def black_blocked_board():
    """All white except one corner: black cannot move, white can play (7, 7)."""
    board = filled_board(WHITE)
    board[7][7] = EMPTY
    board[7][6] = BLACK
    board[7][5] = WHITE
    board[6][7] = WHITE
    board[5][7] = WHITE
    return board


def corner_board():
    """Black at (0, 0) brackets two whites along the top edge and two down the left edge."""
    board = filled_board(WHITE)
    board[0][0] = EMPTY
    board[0][3] = BLACK
    board[3][0] = BLACK
    return board


class TestInitialBoard:
    def test_center_layout(self):
        board = create_initial_board()
        assert len(board) == 8
        assert board[3][3] == WHITE
        assert board[4][4] == WHITE
        assert board[3][4] == BLACK
        assert board[4][3] == BLACK

    def test_everything_else_empty(self):
        score = count_discs(create_initial_board())
        assert score.black == 2
        assert score.white == 2
        assert score.empty == 60

    def test_ten_by_ten(self):
        board = create_initial_board(10)
        assert len(board) == 10
        assert all(len(row) == 10 for row in board)
        assert board[4][4] == WHITE
        assert board[5][5] == WHITE
        assert board[4][5] == BLACK
        assert board[5][4] == BLACK

    @pytest.mark.parametrize("size", [7, 2, 0, -8, 8.0, "8", True])
    def test_invalid_sizes_rejected(self, size):
        with pytest.raises(InvalidBoardError):
            create_initial_board(size)


class TestOpponent:
    def test_opponents(self):
        assert get_opponent(BLACK) == WHITE
        assert get_opponent(WHITE) == BLACK

    def test_unknown_player(self):
        with pytest.raises(UnknownPlayerError):
            get_opponent("red")

    def test_unknown_player_is_value_error(self):
        with pytest.raises(ValueError):
            get_opponent(None)


class TestCollectFlippedDiscs:
    def test_single_flip(self):
        board = create_initial_board()
        assert collect_flipped_discs(board, Position(2, 3), BLACK) == [Position(3, 3)]

    def test_occupied_cell(self):
        board = create_initial_board()
        assert collect_flipped_discs(board, Position(3, 3), BLACK) == []
        assert collect_flipped_discs(board, Position(3, 4), WHITE) == []

    @pytest.mark.parametrize("position", [(-1, 0), (0, -1), (8, 0), (0, 8), (20, 20)])
    def test_off_board(self, position):
        board = create_initial_board()
        assert collect_flipped_discs(board, Position(*position), BLACK) == []

    def test_no_bracket(self):
        board = create_initial_board()
        assert collect_flipped_discs(board, Position(0, 0), BLACK) == []

    def test_run_ending_in_empty_does_not_flip(self):
        board = [[EMPTY] * 8 for _ in range(8)]
        board[0][1] = WHITE
        board[0][2] = WHITE
        assert collect_flipped_discs(board, Position(0, 0), BLACK) == []

    def test_run_ending_off_board_does_not_flip(self):
        board = [[EMPTY] * 8 for _ in range(8)]
        for col in range(1, 8):
            board[0][col] = WHITE
        assert collect_flipped_discs(board, Position(0, 0), BLACK) == []

    def test_multiple_directions(self):
        flipped = collect_flipped_discs(corner_board(), Position(0, 0), BLACK)
        assert len(flipped) == 4
        assert set(flipped) == {
            Position(0, 1),
            Position(0, 2),
            Position(1, 0),
            Position(2, 0),
        }

    def test_does_not_mutate_board(self):
        board = corner_board()
        before = clone_board(board)
        collect_flipped_discs(board, Position(0, 0), BLACK)
        assert board == before

    def test_unknown_player(self):
        with pytest.raises(UnknownPlayerError):
            collect_flipped_discs(create_initial_board(), Position(2, 3), "red")


class TestLegalMoves:
    def test_initial_black_moves(self):
        moves = find_legal_moves(create_initial_board(), BLACK)
        assert {m.position for m in moves} == {(2, 3), (3, 2), (4, 5), (5, 4)}

    def test_initial_white_moves(self):
        moves = find_legal_moves(create_initial_board(), WHITE)
        assert {m.position for m in moves} == {(2, 4), (3, 5), (4, 2), (5, 3)}

    def test_row_major_order(self):
        moves = find_legal_moves(create_initial_board(), BLACK)
        positions = [m.position for m in moves]
        assert positions == sorted(positions)

    def test_moves_carry_flips(self):
        moves = find_legal_moves(create_initial_board(), BLACK)
        for move in moves:
            assert len(move.flipped) == 1

    @pytest.mark.parametrize("color", [BLACK, WHITE])
    def test_full_board_has_no_moves(self, color):
        assert find_legal_moves(filled_board(BLACK), color) == []
        assert find_legal_moves(filled_board(WHITE), color) == []

    def test_blocked_player(self):
        board = black_blocked_board()
        assert find_legal_moves(board, BLACK) == []
        white_moves = find_legal_moves(board, WHITE)
        assert [m.position for m in white_moves] == [(7, 7)]
        assert white_moves[0].flipped == (Position(7, 6),)
        assert has_legal_move(board, WHITE) is True
        assert has_legal_move(board, BLACK) is False


class TestApplyMove:
    def test_opening_move_flips(self):
        board = create_initial_board()
        after = apply_move(board, Position(2, 3), BLACK)
        assert after[2][3] == BLACK
        assert after[3][3] == BLACK
        # untouched discs
        assert after[4][4] == WHITE
        assert after[3][4] == BLACK
        assert after[4][3] == BLACK

    def test_original_board_unchanged(self):
        board = create_initial_board()
        before = clone_board(board)
        after = apply_move(board, Position(2, 3), BLACK)
        assert board == before
        assert board[3][3] == WHITE
        assert after is not board

    def test_corner_move(self):
        board = corner_board()
        after = apply_move(board, Position(0, 0), BLACK)
        assert after[0][1] == BLACK
        assert after[1][0] == BLACK
        assert board[0][1] == WHITE
        assert board[1][0] == WHITE

    def test_illegal_move_returns_copy(self):
        board = create_initial_board()
        after = apply_move(board, Position(0, 0), BLACK)
        assert after == board
        assert after is not board
        assert all(a is not b for a, b in zip(after, board))

    @pytest.mark.parametrize("player", [BLACK, WHITE])
    def test_disc_counts_change_by_flip_count(self, player):
        board = create_initial_board()
        opponent = get_opponent(player)
        before = count_discs(board)
        for move in find_legal_moves(board, player):
            after = count_discs(apply_move(board, move.position, player))
            flips = len(move.flipped)
            assert after.for_player(player) == before.for_player(player) + 1 + flips
            assert after.for_player(opponent) == before.for_player(opponent) - flips
            assert after.empty == before.empty - 1


class TestScoreAndTerminal:
    def test_full_black_board(self):
        board = filled_board(BLACK)
        score = count_discs(board)
        assert (score.black, score.white, score.empty) == (64, 0, 0)
        assert is_terminal(board) is True
        assert score.leader == BLACK

    def test_initial_board_not_terminal(self):
        assert is_terminal(create_initial_board()) is False

    def test_one_side_blocked_is_not_terminal(self):
        assert is_terminal(black_blocked_board()) is False

    def test_both_blocked_with_empty_cells_is_terminal(self):
        board = [[EMPTY] * 8 for _ in range(8)]
        board[0][0] = BLACK
        board[7][7] = WHITE
        assert count_discs(board).empty == 62
        assert is_terminal(board) is True

    def test_score_sums_to_cell_count(self):
        score = count_discs(black_blocked_board())
        assert score.black + score.white + score.empty == 64

    def test_tie_has_no_leader(self):
        assert count_discs(create_initial_board()).leader is None


class TestValidateBoard:
    def test_initial_board_valid(self):
        validate_board(create_initial_board())

    def test_not_square(self):
        board = create_initial_board()
        board[2] = board[2][:-1]
        with pytest.raises(InvalidBoardError):
            validate_board(board)

    def test_unknown_cell(self):
        board = create_initial_board()
        board[0][0] = "red"
        with pytest.raises(InvalidBoardError):
            validate_board(board)

    def test_odd_size(self):
        with pytest.raises(InvalidBoardError):
            validate_board(filled_board(BLACK, size=5))
