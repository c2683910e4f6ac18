from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Tuple

import numpy as np
from numpy.typing import NDArray

BoardArray = NDArray[np.int8]


class Stone(IntEnum):
    EMPTY = 0
    WHITE = 1
    BLACK = 2

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    def opponent(self) -> "Stone":
        if self == Stone.EMPTY:
            raise ValueError("Empty intersections have no opponent.")
        return Stone.BLACK if self == Stone.WHITE else Stone.WHITE

    @staticmethod
    def from_symbol(symbol: str) -> "Stone":
        for stone, marker in _SYMBOLS.items():
            if marker == symbol.upper():
                return stone
        raise ValueError(f"Unknown stone marker {symbol!r}.")

    @staticmethod
    def from_display_name(name: str) -> "Stone":
        for stone, display in _DISPLAY_NAMES.items():
            if stone != Stone.EMPTY and display.lower() == name.strip().lower():
                return stone
        raise ValueError(f"Unknown stone colour {name!r}.")


_SYMBOLS = {Stone.EMPTY: "O", Stone.WHITE: "W", Stone.BLACK: "B"}
_DISPLAY_NAMES = {Stone.EMPTY: "Empty", Stone.WHITE: "White", Stone.BLACK: "Black"}


class Status(Enum):
    SUCCESS = "success"
    PARSE_ERROR = "parse_error"
    OUT_OF_BOUNDS = "out_of_bounds"
    RESTRICTED_ZONE = "restricted_zone"
    OCCUPIED = "occupied"
    GAME_ALREADY_WON = "game_already_won"
    BOARD_FULL = "board_full"
    NO_HISTORY = "no_history"
    INVALID_BOUNDS = "invalid_bounds"
    INVALID_BOARD_SHAPE = "invalid_board_shape"

    @property
    def ok(self) -> bool:
        return self == Status.SUCCESS

    @property
    def message(self) -> str:
        return _STATUS_MESSAGES[self]


_STATUS_MESSAGES = {
    Status.SUCCESS: "",
    Status.PARSE_ERROR: "Could not parse input: format should be <letter><number> (e.g. 'A1', 'J10').",
    Status.OUT_OF_BOUNDS: "Invalid move: the position is off the board.",
    Status.RESTRICTED_ZONE: "Invalid move: the position is outside the area currently open for play.",
    Status.OCCUPIED: "Space occupied: cannot place a stone on an occupied intersection.",
    Status.GAME_ALREADY_WON: "Already won: cannot play on a board with a completed five in a row.",
    Status.BOARD_FULL: "Full board: no intersections are left.",
    Status.NO_HISTORY: "No previous moves: nothing to undo.",
    Status.INVALID_BOUNDS: "Invalid bounds: bounds must be between 0 and the board size.",
    Status.INVALID_BOARD_SHAPE: "Invalid board: the board must be 19 by 19 and hold only stones or empty points.",
}


# Stone sequences read outward from a placed intersection, one per direction.
Sequences = Tuple[Tuple[int, ...], ...]


@dataclass(frozen=True)
class MoveRecord:
    position: str
    inner_bound: int
    outer_bound: int
    captured_pairs: int
    win_lines: int
    intersections_left: int
    sequences: Sequences

    @property
    def intersections_before(self) -> int:
        # One intersection consumed by the stone, two freed per captured pair.
        return self.intersections_left + 1 - 2 * self.captured_pairs
