"""Core game logic for Pente."""

from .state import MoveRecord, Status, Stone
from .position import (
    BOARD_SIZE,
    CENTER_INDEX,
    CENTER_POSITION,
    RING_DISTANCE,
    RING_POSITIONS,
    TOTAL_INTERSECTIONS,
    Position,
    PositionParseError,
    cell_index,
    distance_from_center,
    format_position,
    index_to_cell,
    is_valid_index,
    parse_position,
    try_parse_position,
)
from .board import CAPTURE_SIZE, WIN_LENGTH, Board

__all__ = [
    "Board",
    "MoveRecord",
    "Status",
    "Stone",
    "BOARD_SIZE",
    "CAPTURE_SIZE",
    "CENTER_INDEX",
    "CENTER_POSITION",
    "RING_DISTANCE",
    "RING_POSITIONS",
    "TOTAL_INTERSECTIONS",
    "WIN_LENGTH",
    "Position",
    "PositionParseError",
    "cell_index",
    "distance_from_center",
    "format_position",
    "index_to_cell",
    "is_valid_index",
    "parse_position",
    "try_parse_position",
]
