from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from pente.ai import EvaluatedMove, HeuristicConfig, MoveEvaluator
from pente.core import Board, Status, Stone


@dataclass
class MoveOutcome:
    status: Status
    position: str = ""
    move: Optional[EvaluatedMove] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status.ok


class Player:
    """A seat at the table: produces one placement per turn."""

    default_name = "Player"
    requires_input = False

    def __init__(self, name: Optional[str] = None, color: Optional[Stone] = None) -> None:
        self.name = name or self.default_name
        self.color = color
        self.captured_pairs = 0
        self.tournament_score = 0

    @property
    def name_and_color(self) -> str:
        color = self.color.display_name if self.color is not None else "No colour"
        return f"{self.name} - {color}"

    def make_move(self, board: Board, next_player: "Player") -> MoveOutcome:
        raise NotImplementedError

    def set_input(self, position: Optional[str]) -> None:
        """Players that choose their own moves ignore external input."""

    def add_captured_pairs(self, pairs: int) -> None:
        if pairs < 0:
            raise ValueError("Captured pairs cannot be negative.")
        self.captured_pairs += pairs

    def add_tournament_score(self, points: int) -> None:
        if points < 0:
            raise ValueError("Tournament score increments cannot be negative.")
        self.tournament_score += points

    def reset_for_round(self) -> None:
        self.captured_pairs = 0
        self.color = None

    def _require_color(self) -> Stone:
        if self.color is None:
            raise ValueError(f"{self.name} has no colour assigned.")
        return self.color

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self.name!r}, color={self.color}, "
            f"captured={self.captured_pairs}, score={self.tournament_score})"
        )


class HumanPlayer(Player):
    """Places whatever position was last supplied through :meth:`set_input`."""

    default_name = "Human"
    requires_input = True

    def __init__(self, name: Optional[str] = None, color: Optional[Stone] = None) -> None:
        super().__init__(name, color)
        self._position: Optional[str] = None

    def set_input(self, position: Optional[str]) -> None:
        self._position = position

    def make_move(self, board: Board, next_player: Player) -> MoveOutcome:
        position = (self._position or "").strip()
        self._position = None
        status = board.place_stone(self._require_color(), position)
        message = status.message if not status.ok else ""
        return MoveOutcome(status=status, position=board.last_position if status.ok else position, message=message)


class ComputerPlayer(Player):
    """Plays the heuristic evaluator's choice."""

    default_name = "Computer"

    def __init__(
        self,
        name: Optional[str] = None,
        color: Optional[Stone] = None,
        *,
        evaluator: Optional[MoveEvaluator] = None,
        config: Optional[HeuristicConfig] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        super().__init__(name, color)
        self.evaluator = evaluator or MoveEvaluator(config, rng=rng)

    def make_move(self, board: Board, next_player: Player) -> MoveOutcome:
        color = self._require_color()
        move = self.evaluator.best_move(board, color, next_player._require_color())
        status = board.place_stone(color, move.position)
        if not status.ok:
            return MoveOutcome(status=status, position=move.position, move=move, message=status.message)
        return MoveOutcome(
            status=status,
            position=board.last_position,
            move=move,
            message=f"I'm placing a stone at {board.last_position} {move.rationale}",
        )
