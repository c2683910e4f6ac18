from __future__ import annotations

import re
from typing import Optional, Tuple

BOARD_SIZE = 19
CENTER_INDEX = BOARD_SIZE // 2
CENTER_POSITION = "J10"
TOTAL_INTERSECTIONS = BOARD_SIZE * BOARD_SIZE

# up, up-right, right, down-right, down, down-left, left, up-left.
# Direction d and d + AXES form one axis.
ROW_DELTA: Tuple[int, ...] = (1, 1, 0, -1, -1, -1, 0, 1)
COL_DELTA: Tuple[int, ...] = (0, 1, 1, 1, 0, -1, -1, -1)
NUM_DIRECTIONS = len(ROW_DELTA)
AXES = NUM_DIRECTIONS // 2

RING_DISTANCE = 3
RING_POSITIONS: Tuple[str, ...] = ("J7", "M10", "J13", "G10")

COLUMN_OFFSET = ord("A")
ROW_OFFSET = 1

_POSITION_PATTERN = re.compile(r"([A-Za-z])([0-9]{1,2})")

Position = Tuple[int, int]


class PositionParseError(ValueError):
    pass


def parse_position(text: str) -> Position:
    """Convert text such as ``"J10"`` into ``(row, col)`` indices.

    The letter is case-insensitive and the row must be one or two digits.
    No bounds check happens here, so ``"A0"`` parses to ``(-1, 0)``.
    """
    match = _POSITION_PATTERN.fullmatch(text or "")
    if match is None:
        raise PositionParseError(f"Could not parse position {text!r}.")
    letter, digits = match.groups()
    row = int(digits) - ROW_OFFSET
    col = ord(letter.upper()) - COLUMN_OFFSET
    return row, col


def try_parse_position(text: str) -> Optional[Position]:
    try:
        return parse_position(text)
    except PositionParseError:
        return None


def format_position(row: int, col: int) -> str:
    return f"{chr(col + COLUMN_OFFSET)}{row + ROW_OFFSET}"


def is_valid_index(row: int, col: int) -> bool:
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def distance_from_center(row: int, col: int) -> int:
    return max(abs(row - CENTER_INDEX), abs(col - CENTER_INDEX))


def offset(row: int, col: int, direction: int, step: int) -> Position:
    return row + ROW_DELTA[direction] * step, col + COL_DELTA[direction] * step


def cell_index(row: int, col: int) -> int:
    return row * BOARD_SIZE + col


def index_to_cell(index: int) -> Position:
    if not 0 <= index < TOTAL_INTERSECTIONS:
        raise ValueError("Cell index out of range.")
    return index // BOARD_SIZE, index % BOARD_SIZE
