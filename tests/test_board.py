import numpy as np
import pytest

from pente.core import BOARD_SIZE, TOTAL_INTERSECTIONS, Board, Status, Stone, format_position, parse_position


def place_all(board: Board, color: Stone, positions) -> None:
    for position in positions:
        assert board.place_stone(color, position) == Status.SUCCESS, position


def full_board_without_five() -> np.ndarray:
    # Runs never exceed two stones along any axis.
    grid = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int8)
    for row in range(BOARD_SIZE):
        for col in range(BOARD_SIZE):
            grid[row, col] = Stone.WHITE if (col // 2 + row) % 2 == 0 else Stone.BLACK
    return grid


def test_new_board_is_empty_and_unrestricted() -> None:
    board = Board()
    assert board.intersections_left == TOTAL_INTERSECTIONS
    assert board.history_depth == 0
    assert board.last_position == ""
    assert (board.inner_bound, board.outer_bound) == (0, BOARD_SIZE)
    assert not board.grid.any()


def test_place_then_undo_restores_everything() -> None:
    board = Board()
    place_all(board, Stone.BLACK, ["C3", "D4"])
    before = board.grid
    left = board.intersections_left

    assert board.place_stone(Stone.WHITE, "j10") == Status.SUCCESS
    assert board.stone_at(9, 9) == Stone.WHITE
    assert board.last_position == "J10"
    assert board.intersections_left == left - 1
    assert board.history_depth == 3

    assert board.undo_move() == Status.SUCCESS
    assert np.array_equal(board.grid, before)
    assert board.intersections_left == left
    assert board.history_depth == 2
    assert board.last_position == "D4"


def test_undo_without_history() -> None:
    board = Board()
    assert board.undo_move() == Status.NO_HISTORY


@pytest.mark.parametrize(
    "position, expected",
    [
        ("", Status.PARSE_ERROR),
        ("JJ", Status.PARSE_ERROR),
        ("10J", Status.PARSE_ERROR),
        ("A0", Status.OUT_OF_BOUNDS),
        ("T1", Status.OUT_OF_BOUNDS),
        ("A20", Status.OUT_OF_BOUNDS),
    ],
)
def test_rejected_placements_leave_board_untouched(position: str, expected: Status) -> None:
    board = Board()
    assert board.place_stone(Stone.WHITE, position) == expected
    assert board.intersections_left == TOTAL_INTERSECTIONS
    assert board.history_depth == 0


def test_occupied_intersection() -> None:
    board = Board()
    board.place_stone(Stone.WHITE, "J10")
    assert board.place_stone(Stone.BLACK, "J10") == Status.OCCUPIED
    assert board.stone_at(9, 9) == Stone.WHITE


def test_placing_an_empty_stone_is_rejected() -> None:
    board = Board()
    assert board.place_stone(Stone.EMPTY, "J10") == Status.PARSE_ERROR
    assert board.history_depth == 0
    assert board.intersections_left == TOTAL_INTERSECTIONS
    assert not board.grid.any()


def test_center_only_bounds() -> None:
    board = Board()
    assert board.set_bounds(0, 0) == Status.SUCCESS
    assert board.place_stone(Stone.WHITE, "K10") == Status.RESTRICTED_ZONE
    assert board.place_stone(Stone.WHITE, "A1") == Status.RESTRICTED_ZONE
    assert board.place_stone(Stone.WHITE, "J10") == Status.SUCCESS


def test_ring_bounds_keep_stones_away_from_center() -> None:
    board = Board()
    board.set_bounds(3, BOARD_SIZE)
    assert board.place_stone(Stone.WHITE, "J11") == Status.RESTRICTED_ZONE
    assert board.place_stone(Stone.WHITE, "L12") == Status.RESTRICTED_ZONE
    assert board.place_stone(Stone.WHITE, "J13") == Status.SUCCESS
    assert board.place_stone(Stone.WHITE, "A1") == Status.SUCCESS


def test_invalid_bounds_are_rejected() -> None:
    board = Board()
    assert board.set_bounds(-1, 5) == Status.INVALID_BOUNDS
    assert board.set_bounds(0, 20) == Status.INVALID_BOUNDS
    assert (board.inner_bound, board.outer_bound) == (0, BOARD_SIZE)


def test_undo_restores_bounds_of_the_move() -> None:
    board = Board()
    board.set_bounds(0, 0)
    board.place_stone(Stone.WHITE, "J10")
    board.set_bounds(0, BOARD_SIZE)
    board.undo_move()
    assert (board.inner_bound, board.outer_bound) == (0, 0)


def test_five_in_a_row_counts_one_line() -> None:
    board = Board()
    place_all(board, Stone.WHITE, ["F10", "G10", "H10", "I10"])
    assert board.win_lines == 0

    assert board.place_stone(Stone.WHITE, "J10") == Status.SUCCESS
    assert board.win_lines == 1
    assert board.has_winner
    assert board.place_stone(Stone.BLACK, "A1") == Status.GAME_ALREADY_WON


def test_stone_completing_two_fives_counts_two_lines() -> None:
    board = Board()
    place_all(board, Stone.WHITE, ["F10", "G10", "H10", "I10", "J6", "J7", "J8", "J9"])
    assert board.place_stone(Stone.WHITE, "J10") == Status.SUCCESS
    assert board.win_lines == 2


def test_undo_clears_win() -> None:
    board = Board()
    place_all(board, Stone.WHITE, ["F10", "G10", "H10", "I10", "J10"])
    board.undo_move()
    assert board.win_lines == 0
    assert board.place_stone(Stone.BLACK, "J10") == Status.SUCCESS


def test_pair_capture_removes_stones_and_frees_intersections() -> None:
    board = Board()
    board.place_stone(Stone.WHITE, "J10")
    place_all(board, Stone.BLACK, ["K10", "L10"])
    left = board.intersections_left
    before = board.grid

    assert board.place_stone(Stone.WHITE, "M10") == Status.SUCCESS
    assert board.captured_pairs == 1
    assert board.stone_at(*parse_position("K10")) == Stone.EMPTY
    assert board.stone_at(*parse_position("L10")) == Stone.EMPTY
    # One intersection taken by the new stone, two freed by the capture.
    assert board.intersections_left == left - 1 + 2

    board.undo_move()
    assert np.array_equal(board.grid, before)
    assert board.intersections_left == left
    assert board.captured_pairs == 0


def test_captures_along_several_directions_at_once() -> None:
    board = Board()
    place_all(board, Stone.WHITE, ["M10", "M13"])
    place_all(board, Stone.BLACK, ["K10", "L10", "K11", "L12"])
    left = board.intersections_left

    assert board.place_stone(Stone.WHITE, "J10") == Status.SUCCESS
    assert board.captured_pairs == 2
    assert board.intersections_left == left - 1 + 4
    for position in ("K10", "L10", "K11", "L12"):
        assert board.stone_at(*parse_position(position)) == Stone.EMPTY


def test_undo_after_captures_in_several_directions() -> None:
    board = Board()
    place_all(board, Stone.WHITE, ["M10", "M13"])
    place_all(board, Stone.BLACK, ["K10", "L10", "K11", "L12"])
    board.set_bounds(0, 5)
    before = board.grid
    left = board.intersections_left

    assert board.place_stone(Stone.WHITE, "J10") == Status.SUCCESS
    assert board.captured_pairs == 2
    board.set_bounds(0, BOARD_SIZE)

    assert board.undo_move() == Status.SUCCESS
    assert np.array_equal(board.grid, before)
    assert board.intersections_left == left
    assert board.history_depth == 6
    assert (board.inner_bound, board.outer_bound) == (0, 5)


def test_no_capture_of_three_stones_or_without_flank() -> None:
    board = Board()
    board.place_stone(Stone.WHITE, "J10")
    place_all(board, Stone.BLACK, ["K10", "L10", "M10"])
    board.place_stone(Stone.WHITE, "N10")
    assert board.captured_pairs == 0

    board = Board()
    place_all(board, Stone.BLACK, ["K10", "L10"])
    board.place_stone(Stone.WHITE, "M10")
    assert board.captured_pairs == 0
    assert board.stone_at(*parse_position("K10")) == Stone.BLACK


def test_potential_captures_detects_exposed_pair() -> None:
    board = Board()
    board.place_stone(Stone.WHITE, "K10")
    board.place_stone(Stone.BLACK, "L10")
    row, col = parse_position("J10")
    # I10 empty, J10 and K10 white, L10 black.
    assert board.potential_captures(Stone.WHITE, row, col) == 1

    board.place_stone(Stone.BLACK, "I10")
    assert board.potential_captures(Stone.WHITE, row, col) == 0


def test_potential_captures_needs_an_opponent_flank() -> None:
    board = Board()
    board.place_stone(Stone.WHITE, "K10")
    row, col = parse_position("J10")
    assert board.potential_captures(Stone.WHITE, row, col) == 0


def test_uninterrupted_stones_counts_exact_runs() -> None:
    board = Board()
    place_all(board, Stone.WHITE, ["A1", "B1", "C1", "D1"])
    assert board.uninterrupted_stones(4, Stone.WHITE) == 1
    assert board.uninterrupted_stones(4, Stone.BLACK) == 0

    board.place_stone(Stone.WHITE, "E1")
    assert board.uninterrupted_stones(4, Stone.WHITE) == 0


def test_set_board_rejects_bad_shapes_without_mutation() -> None:
    board = Board()
    board.place_stone(Stone.WHITE, "J10")
    before = board.grid

    assert board.set_board([[0] * BOARD_SIZE] * (BOARD_SIZE - 1)) == Status.INVALID_BOARD_SHAPE
    assert board.set_board([[0] * (BOARD_SIZE + 1)] * BOARD_SIZE) == Status.INVALID_BOARD_SHAPE
    bad_values = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int64)
    bad_values[0, 0] = 3
    assert board.set_board(bad_values) == Status.INVALID_BOARD_SHAPE

    assert np.array_equal(board.grid, before)
    assert board.history_depth == 1


def test_set_board_rejects_fractional_values() -> None:
    board = Board()
    board.place_stone(Stone.WHITE, "J10")
    before = board.grid

    grid = np.zeros((BOARD_SIZE, BOARD_SIZE))
    grid[0, 0] = 1.7
    assert board.set_board(grid) == Status.INVALID_BOARD_SHAPE
    grid[0, 0] = 0.5
    assert board.set_board(grid.tolist()) == Status.INVALID_BOARD_SHAPE

    assert np.array_equal(board.grid, before)
    assert board.history_depth == 1


def test_set_board_rejects_won_and_full_positions() -> None:
    board = Board()
    won = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int8)
    won[0, :5] = Stone.BLACK
    assert board.set_board(won) == Status.GAME_ALREADY_WON
    assert not board.grid.any()

    assert board.set_board(full_board_without_five()) == Status.BOARD_FULL
    assert not board.grid.any()
    assert board.intersections_left == TOTAL_INTERSECTIONS


def test_set_board_replaces_position_and_history() -> None:
    board = Board()
    board.place_stone(Stone.WHITE, "A1")
    grid = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int8)
    grid[9, 9] = Stone.WHITE
    grid[9, 10] = Stone.BLACK

    assert board.set_board(grid.tolist()) == Status.SUCCESS
    assert np.array_equal(board.grid, grid)
    assert board.intersections_left == TOTAL_INTERSECTIONS - 2
    assert board.history_depth == 0
    assert board.last_position == ""
    assert board.undo_move() == Status.NO_HISTORY


def test_full_board_rejects_placements() -> None:
    board = Board()
    grid = full_board_without_five()
    grid[0, 0] = Stone.EMPTY
    assert board.set_board(grid) == Status.SUCCESS
    assert board.intersections_left == 1
    assert board.place_stone(Stone.BLACK, "A1") == Status.SUCCESS
    assert board.is_full
    assert board.place_stone(Stone.BLACK, "A1") == Status.OCCUPIED


def test_copy_is_independent() -> None:
    board = Board()
    board.place_stone(Stone.WHITE, "J10")
    clone = board.copy()
    clone.place_stone(Stone.BLACK, "K10")
    clone.undo_move()
    clone.undo_move()

    assert board.stone_at(9, 9) == Stone.WHITE
    assert board.history_depth == 1
    assert clone.history_depth == 0


def test_trying_every_intersection_on_a_copy_leaves_it_unchanged() -> None:
    board = Board()
    place_all(board, Stone.WHITE, ["J10"])
    place_all(board, Stone.BLACK, ["K11"])
    clone = board.copy()
    start = clone.grid
    left = clone.intersections_left

    for row in range(BOARD_SIZE):
        for col in range(BOARD_SIZE):
            if clone.place_stone(Stone.BLACK, format_position(row, col)) == Status.SUCCESS:
                assert clone.undo_move() == Status.SUCCESS
            assert clone.history_depth == 2
            assert clone.intersections_left == left
            assert np.array_equal(clone.grid, start)

    assert np.array_equal(board.grid, start)


def test_render_prints_row_nineteen_first() -> None:
    board = Board()
    board.place_stone(Stone.WHITE, "A19")
    lines = board.render().splitlines()
    assert lines[0].strip() == "ABCDEFGHIJKLMNOPQRS"
    assert lines[1] == "19 W" + "O" * (BOARD_SIZE - 1)
    assert lines[-1].startswith(" 1 ")
