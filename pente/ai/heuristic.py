from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Optional

import numpy as np

from pente.core import (
    BOARD_SIZE,
    RING_DISTANCE,
    RING_POSITIONS,
    WIN_LENGTH,
    Board,
    Stone,
    format_position,
    parse_position,
)

NO_SCORE = -(2**31)


class MoveReason(Enum):
    UNKNOWN = "unknown"
    WIN = "win"
    CAPTURE = "capture"
    BUILD = "build"
    BOARD_RESTRICTION = "board_restriction"


@dataclass
class HeuristicConfig:
    win_weight: int = 10000
    capture_weight: int = 2000
    build_weight: int = 5
    win_length: int = WIN_LENGTH


@dataclass
class EvaluatedMove:
    position: str
    color: Stone
    score: int = NO_SCORE
    reason: MoveReason = MoveReason.UNKNOWN
    rationale: str = ""

    def blocks(self, mover: Stone) -> bool:
        return self.color != mover


class MoveEvaluator:
    """One-ply heuristic search over every intersection for both colours.

    Each empty intersection is tried for the acting colour and for the
    opponent on a private copy of the board. The best attacking and the best
    blocking placement are compared, exact ties are broken with ``rng``.
    """

    def __init__(
        self,
        config: Optional[HeuristicConfig] = None,
        *,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        self.config = config or HeuristicConfig()
        self.rng = rng or np.random.default_rng()

    def best_move(self, board: Board, acting: Stone, opponent: Stone) -> EvaluatedMove:
        simulation = board.copy()
        our_best: Optional[EvaluatedMove] = None
        their_best: Optional[EvaluatedMove] = None
        top_moves: List[EvaluatedMove] = []

        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                position = format_position(row, col)
                if not simulation.place_stone(acting, position).ok:
                    continue
                ours = self.evaluate_placement(simulation, acting, acting)
                simulation.undo_move()

                if not simulation.place_stone(opponent, position).ok:
                    continue
                theirs = self.evaluate_placement(simulation, opponent, acting)
                simulation.undo_move()

                if our_best is None or ours.score >= our_best.score:
                    our_best = ours
                    top_moves.append(ours)
                if their_best is None or theirs.score >= their_best.score:
                    their_best = theirs
                    top_moves.append(theirs)

        if our_best is None or their_best is None:
            # Nothing is playable: full board, finished game or closed bounds.
            return EvaluatedMove(position="", color=acting)

        chosen = self._select(simulation, our_best, their_best, top_moves)
        chosen.rationale = self.reason_message(chosen, acting)
        return chosen

    def get_help(self, board: Board, acting: Stone, opponent: Stone) -> EvaluatedMove:
        """Suggest a placement for ``acting`` without touching ``board``."""
        suggestion = self.best_move(board, acting, opponent)
        if suggestion.position:
            suggestion.rationale = (
                f"The computer recommends you play at {suggestion.position} {suggestion.rationale}"
            )
        return suggestion

    def evaluate_placement(self, board: Board, evaluated: Stone, mover: Stone) -> EvaluatedMove:
        """Score the stone just placed on ``board`` from ``evaluated``'s point of view."""
        cfg = self.config
        position = board.last_position
        row, col = parse_position(position)
        wins = board.win_lines

        score = cfg.win_weight * wins
        # block_count carries over between run lengths, so shorter runs also
        # raise the weight of the longer ones. Move choice depends on this.
        block_count = 0
        for n in range(cfg.win_length - 1, 1, -1):
            block_count += board.num_in_a_row(n, row, col) - wins
            score += cfg.build_weight * block_count * n * n

        if block_count > 0 and evaluated == mover:
            score += cfg.build_weight
        if score < cfg.win_weight and evaluated == mover:
            score -= cfg.capture_weight * board.potential_captures(evaluated, row, col)
        score += cfg.capture_weight * board.captured_pairs

        return EvaluatedMove(
            position=position,
            color=Stone(evaluated),
            score=score,
            reason=self.classify(score),
        )

    def classify(self, score: int) -> MoveReason:
        if score >= self.config.win_weight:
            return MoveReason.WIN
        if score >= self.config.capture_weight:
            return MoveReason.CAPTURE
        if score > 0:
            return MoveReason.BUILD
        return MoveReason.UNKNOWN

    @staticmethod
    def reason_message(move: EvaluatedMove, mover: Stone) -> str:
        if move.reason == MoveReason.BOARD_RESTRICTION:
            return "because of a board restriction, no other moves available!"
        if move.reason == MoveReason.UNKNOWN:
            return "as no placement stands out!"
        prefix = "to prevent a" if move.blocks(mover) else "to"
        return f"{prefix} {move.reason.value}!"

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _select(
        self,
        board: Board,
        our_best: EvaluatedMove,
        their_best: EvaluatedMove,
        top_moves: List[EvaluatedMove],
    ) -> EvaluatedMove:
        if our_best.reason == MoveReason.WIN:
            return replace(our_best)

        # Equal scores go to the blocking move.
        chosen = our_best if our_best.score > their_best.score else their_best
        tied = [move for move in top_moves if move.score == chosen.score]
        if len(tied) > 1:
            chosen = tied[int(self.rng.integers(len(tied)))]
        chosen = replace(chosen)

        if board.outer_bound == 0:
            chosen.reason = MoveReason.BOARD_RESTRICTION
        if board.inner_bound == RING_DISTANCE:
            chosen.reason = MoveReason.BOARD_RESTRICTION
            chosen.position = self._draw_ring_position(board)
        return chosen

    def _draw_ring_position(self, board: Board) -> str:
        """Draw uniformly among the four ring points, drawing again while the point is taken."""
        free = [position for position in RING_POSITIONS if board.stone_at(*parse_position(position)) == Stone.EMPTY]
        while True:
            position = RING_POSITIONS[int(self.rng.integers(len(RING_POSITIONS)))]
            # With every ring point taken the draw stands and the placement fails.
            if position in free or not free:
                return position
