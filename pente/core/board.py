from __future__ import annotations

from typing import List, Sequence

import numpy as np

from .position import (
    AXES,
    BOARD_SIZE,
    NUM_DIRECTIONS,
    TOTAL_INTERSECTIONS,
    PositionParseError,
    distance_from_center,
    format_position,
    is_valid_index,
    offset,
    parse_position,
)
from .state import BoardArray, MoveRecord, Sequences, Status, Stone

WIN_LENGTH = 5
CAPTURE_SIZE = 2
# Placed stone, the captured pair and the flanking stone.
CAPTURE_WINDOW = CAPTURE_SIZE + 2
MIN_ROW_LENGTH = 2

_STONE_VALUES = [int(stone) for stone in Stone]


class Board:
    """19x19 Pente board with placement rules, captures and one-step undo history.

    Every public mutator returns a :class:`Status` instead of raising; a
    rejected call leaves the board exactly as it was.
    """

    def __init__(self) -> None:
        self._grid: BoardArray = np.full((BOARD_SIZE, BOARD_SIZE), int(Stone.EMPTY), dtype=np.int8)
        self._history: List[MoveRecord] = []
        self._inner_bound = 0
        self._outer_bound = BOARD_SIZE
        self._last_position = ""
        self._win_lines = 0
        self._captured_pairs = 0
        self._intersections_left = TOTAL_INTERSECTIONS

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def grid(self) -> BoardArray:
        return self._grid.copy()

    @property
    def inner_bound(self) -> int:
        return self._inner_bound

    @property
    def outer_bound(self) -> int:
        return self._outer_bound

    @property
    def last_position(self) -> str:
        return self._last_position

    @property
    def win_lines(self) -> int:
        """Number of five-in-a-row lines completed by the last move."""
        return self._win_lines

    @property
    def captured_pairs(self) -> int:
        """Number of pairs captured by the last move."""
        return self._captured_pairs

    @property
    def intersections_left(self) -> int:
        return self._intersections_left

    @property
    def history_depth(self) -> int:
        return len(self._history)

    @property
    def is_full(self) -> bool:
        return self._intersections_left <= 0

    @property
    def has_winner(self) -> bool:
        return self._win_lines > 0

    @property
    def is_game_over(self) -> bool:
        return self.is_full or self.has_winner

    def stone_at(self, row: int, col: int) -> Stone:
        return Stone(int(self._grid[row, col]))

    def stones_placed(self) -> int:
        return int(np.count_nonzero(self._grid != Stone.EMPTY))

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------
    def place_stone(self, color: Stone, position: str) -> Status:
        # Only a white or black stone can be placed.
        if color not in (Stone.WHITE, Stone.BLACK):
            return Status.PARSE_ERROR
        color = Stone(color)

        try:
            row, col = parse_position(position)
        except PositionParseError:
            return Status.PARSE_ERROR
        if not is_valid_index(row, col):
            return Status.OUT_OF_BOUNDS
        distance = distance_from_center(row, col)
        if distance < self._inner_bound or distance > self._outer_bound:
            return Status.RESTRICTED_ZONE
        if self._grid[row, col] != Stone.EMPTY:
            return Status.OCCUPIED
        if self._win_lines > 0:
            return Status.GAME_ALREADY_WON
        if self.is_full:
            return Status.BOARD_FULL

        self._grid[row, col] = color
        # Snapshot before captures so undo can put captured stones back.
        sequences = self._color_sequences(WIN_LENGTH, row, col)
        self._intersections_left -= 1
        self._last_position = format_position(row, col)

        self._win_lines = self.num_in_a_row(WIN_LENGTH, row, col)
        self._captured_pairs = self._capture_pairs(color, row, col)

        self._history.append(
            MoveRecord(
                position=self._last_position,
                inner_bound=self._inner_bound,
                outer_bound=self._outer_bound,
                captured_pairs=self._captured_pairs,
                win_lines=self._win_lines,
                intersections_left=self._intersections_left,
                sequences=sequences,
            )
        )
        return Status.SUCCESS

    def undo_move(self) -> Status:
        if not self._history:
            return Status.NO_HISTORY

        record = self._history.pop()
        row, col = parse_position(record.position)
        self._write_sequences(record.sequences, row, col)
        self._grid[row, col] = Stone.EMPTY

        self._inner_bound = record.inner_bound
        self._outer_bound = record.outer_bound
        self._intersections_left = record.intersections_before
        self._win_lines = 0
        self._captured_pairs = 0
        self._last_position = self._history[-1].position if self._history else ""
        return Status.SUCCESS

    def set_board(self, grid: Sequence[Sequence[int]]) -> Status:
        """Replace the whole grid with a position of unknown history.

        The position must be 19x19, must not already contain a five in a row
        and must have at least one empty intersection.
        """
        if len(grid) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in grid):
            return Status.INVALID_BOARD_SHAPE
        try:
            candidate = np.asarray(grid)
        except (TypeError, ValueError):
            return Status.INVALID_BOARD_SHAPE
        # Integer stone values only, a float grid is not a position.
        if not np.issubdtype(candidate.dtype, np.integer):
            return Status.INVALID_BOARD_SHAPE
        if candidate.shape != (BOARD_SIZE, BOARD_SIZE) or not np.isin(candidate, _STONE_VALUES).all():
            return Status.INVALID_BOARD_SHAPE

        previous = self._grid
        self._grid = candidate.astype(np.int8)

        intersections_left = 0
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                if self._grid[row, col] == Stone.EMPTY:
                    intersections_left += 1
                    continue
                if self.num_in_a_row(WIN_LENGTH, row, col) > 0:
                    self._grid = previous
                    return Status.GAME_ALREADY_WON
        if intersections_left == 0:
            self._grid = previous
            return Status.BOARD_FULL

        self._intersections_left = intersections_left
        self._last_position = ""
        self._win_lines = 0
        self._captured_pairs = 0
        self._history = []
        return Status.SUCCESS

    def set_bounds(self, inner: int, outer: int) -> Status:
        """Restrict future placements to Chebyshev distance ``[inner, outer]`` from centre."""
        if not (0 <= inner <= BOARD_SIZE and 0 <= outer <= BOARD_SIZE):
            return Status.INVALID_BOUNDS
        self._inner_bound = inner
        self._outer_bound = outer
        return Status.SUCCESS

    def copy(self) -> "Board":
        clone = Board()
        clone._grid = self._grid.copy()
        # Records are immutable, a new list is enough.
        clone._history = list(self._history)
        clone._inner_bound = self._inner_bound
        clone._outer_bound = self._outer_bound
        clone._last_position = self._last_position
        clone._win_lines = self._win_lines
        clone._captured_pairs = self._captured_pairs
        clone._intersections_left = self._intersections_left
        return clone

    # ------------------------------------------------------------------
    # Line and capture analysis
    # ------------------------------------------------------------------
    def num_in_a_row(self, n: int, row: int, col: int) -> int:
        """Count the runs of ``n`` same-coloured stones passing through ``(row, col)``.

        Each axis count shares the queried stone between both halves. A count
        of exactly ``2 * n`` means two full runs meet at the stone, anything
        else loses the shared stone before the integer division.
        """
        if n < MIN_ROW_LENGTH:
            return 0
        total = 0
        for count in self._cardinal_counts(n, row, col):
            if count > 0 and (count // 2) % n != 0:
                count -= 1
            total += count // n
        return total

    def uninterrupted_stones(self, n: int, color: Stone) -> int:
        """Count runs of exactly ``n`` stones of ``color`` anywhere on the board."""
        if n < 1 or n > BOARD_SIZE - 1:
            return 0
        total = 0
        for row, col in np.argwhere(self._grid == int(color)):
            for count in self._cardinal_counts(n + 1, int(row), int(col)):
                # The queried stone is counted by both halves of the axis.
                if count - 1 == n:
                    total += 1
        # Every stone of a run reports the run once.
        return total // n

    def potential_captures(self, color: Stone, row: int, col: int) -> int:
        """Count axes where a ``color`` stone at ``(row, col)`` forms a capturable pair.

        The shape is an empty point, two ``color`` stones (one of them the
        stone at ``(row, col)``) and an opposing stone, in either order.
        """
        color = Stone(color)
        window = CAPTURE_SIZE + 1
        sequences = self._color_sequences(window, row, col)
        count = 0
        for direction in range(AXES):
            forward = sequences[direction][1:]
            backward = tuple(reversed(sequences[direction + AXES][1:]))
            line = backward + (int(color),) + forward
            if _has_capturable_pair(line, color):
                count += 1
        return count

    # ------------------------------------------------------------------
    # Presentation
    # ------------------------------------------------------------------
    def render(self) -> str:
        letters = "".join(chr(ord("A") + col) for col in range(BOARD_SIZE))
        rows = [f"   {letters}"]
        for row in range(BOARD_SIZE - 1, -1, -1):
            cells = "".join(Stone(int(value)).symbol for value in self._grid[row])
            rows.append(f"{row + 1:>2} {cells}")
        return "\n".join(rows)

    def __repr__(self) -> str:
        return (
            f"Board(last={self._last_position or None}, left={self._intersections_left}, "
            f"bounds=({self._inner_bound}, {self._outer_bound}), depth={len(self._history)})"
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _capture_pairs(self, color: Stone, row: int, col: int) -> int:
        pairs = 0
        for direction, sequence in enumerate(self._color_sequences(CAPTURE_WINDOW, row, col)):
            # Windows cut short by the edge cannot capture.
            if len(sequence) != CAPTURE_WINDOW:
                continue
            if sequence[0] != sequence[-1]:
                continue
            inner = sequence[1:-1]
            if _count_same(inner) != CAPTURE_SIZE or inner[0] == color:
                continue
            pairs += 1
            for step in range(1, CAPTURE_SIZE + 1):
                r, c = offset(row, col, direction, step)
                self._grid[r, c] = Stone.EMPTY
            self._intersections_left += CAPTURE_SIZE
        return pairs

    def _cardinal_counts(self, n: int, row: int, col: int) -> List[int]:
        sequences = self._color_sequences(n, row, col)
        return [
            _count_same(sequences[direction]) + _count_same(sequences[direction + AXES])
            for direction in range(AXES)
        ]

    def _color_sequences(self, n: int, row: int, col: int) -> Sequences:
        sequences = []
        for direction in range(NUM_DIRECTIONS):
            stones = []
            for step in range(n):
                r, c = offset(row, col, direction, step)
                if not is_valid_index(r, c):
                    break
                stones.append(int(self._grid[r, c]))
            sequences.append(tuple(stones))
        return tuple(sequences)

    def _write_sequences(self, sequences: Sequences, row: int, col: int) -> None:
        for direction, stones in enumerate(sequences):
            for step, stone in enumerate(stones):
                r, c = offset(row, col, direction, step)
                self._grid[r, c] = stone


def _count_same(sequence: Sequence[int]) -> int:
    """Length of the leading run of identical non-empty stones."""
    count = 0
    for stone in sequence:
        if stone != sequence[0] or stone == Stone.EMPTY:
            break
        count += 1
    return count


def _has_capturable_pair(line: Sequence[int], color: Stone) -> bool:
    pair = (int(color),) * CAPTURE_SIZE
    span = CAPTURE_SIZE + 2
    for start in range(len(line) - span + 1):
        window = line[start : start + span]
        if tuple(window[1:-1]) != pair:
            continue
        ends = (window[0], window[-1])
        for empty_end, other_end in (ends, ends[::-1]):
            if empty_end == Stone.EMPTY and other_end not in (Stone.EMPTY, color):
                return True
    return False
