from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from pente.ai import EvaluatedMove, MoveEvaluator
from pente.core import (
    BOARD_SIZE,
    CENTER_POSITION,
    RING_DISTANCE,
    TOTAL_INTERSECTIONS,
    WIN_LENGTH,
    Board,
    Stone,
)
from pente.players import ComputerPlayer, HumanPlayer, MoveOutcome, Player

HEADS = "HEADS"
TAILS = "TAILS"
# White always opens.
COLOR_PRECEDENCE: Tuple[Stone, Stone] = (Stone.WHITE, Stone.BLACK)
NUM_PLAYERS = len(COLOR_PRECEDENCE)
SECTION_RULE = "=" * 35


def opening_bounds(ply: int) -> Tuple[int, int]:
    """Placement window for a given ply: centre first, then a ring for White's second stone."""
    if ply == 0:
        return 0, 0
    if ply == 2:
        return RING_DISTANCE, BOARD_SIZE
    return 0, BOARD_SIZE


@dataclass
class RoundConfig:
    points_per_five: int = WIN_LENGTH
    capture_goal: int = 5
    straight_stones: int = 4


@dataclass
class PlyResult:
    player: Player
    outcome: MoveOutcome
    round_over: bool = False
    winner: Optional[Player] = None

    @property
    def ok(self) -> bool:
        return self.outcome.ok


class Round:
    """Turn order, opening restrictions and scoring for one round of Pente.

    Tournament scores live on the players and accumulate across rounds.
    Every operation appends human-readable lines to :attr:`log`.
    """

    def __init__(
        self,
        players: Optional[Sequence[Player]] = None,
        *,
        config: Optional[RoundConfig] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        self.rng = rng or np.random.default_rng()
        if players is None:
            players = [HumanPlayer(), ComputerPlayer(rng=self.rng)]
        self._validate_players(players)
        self.players: List[Player] = list(players)
        self._assign_colors()
        self.config = config or RoundConfig()
        self.helper = MoveEvaluator(rng=self.rng)
        self.log: List[str] = []
        self.board = Board()
        self.ply_count = 0
        self.current_index = 0
        self.winner: Optional[Player] = None
        self.win_lines = 0
        self.round_over = False
        self.coin_toss_result: Optional[str] = None
        self.loaded_from_save = False

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def current_player(self) -> Player:
        return self.players[self.current_index]

    @property
    def next_player(self) -> Player:
        return self.players[(self.current_index + 1) % NUM_PLAYERS]

    @property
    def human(self) -> Optional[Player]:
        return self._find(HumanPlayer)

    @property
    def computer(self) -> Optional[Player]:
        return self._find(ComputerPlayer)

    def highest_scoring_player(self) -> Optional[Player]:
        """The tournament leader, or ``None`` when scores are tied."""
        ranked = sorted(self.players, key=lambda player: player.tournament_score, reverse=True)
        if ranked[0].tournament_score == ranked[1].tournament_score:
            return None
        return ranked[0]

    # ------------------------------------------------------------------
    # Round lifecycle
    # ------------------------------------------------------------------
    def start(self) -> None:
        self._apply_restrictions()

    def perform_coin_toss(self, call: str) -> bool:
        """Seat the players from a coin toss called by the human (or first) player.

        The winner of the toss plays White and moves first. Returns whether
        the caller won.
        """
        caller = self.human or self.players[0]
        other = next(player for player in self.players if player is not caller)
        self.coin_toss_result = HEADS if int(self.rng.integers(2)) == 0 else TAILS
        self._log(f"The coin landed on {self.coin_toss_result}!")

        won = self.coin_toss_result == call.strip().upper()
        self.players = [caller, other] if won else [other, caller]
        self._assign_colors()
        if won:
            self._log(f"{caller.name} won the coin toss and plays White.")
        else:
            self._log(f"{caller.name} lost the coin toss, {other.name} plays White.")
        return won

    def seat_by_score(self) -> None:
        """Seat the tournament leader first; ties keep the current order."""
        self.players.sort(key=lambda player: player.tournament_score, reverse=True)
        self._assign_colors()
        leader = self.players[0]
        self._log(
            f"{leader.name} goes first with the highest tournament score of {leader.tournament_score} point(s)."
        )

    def start_another_round(self) -> None:
        self.reset()
        self.seat_by_score()
        self.start()

    def reset(self) -> None:
        for player in self.players:
            player.reset_for_round()
        self.board = Board()
        self.ply_count = 0
        self.current_index = 0
        self.winner = None
        self.win_lines = 0
        self.round_over = False
        self.coin_toss_result = None
        self.loaded_from_save = False

    def load_state(self, board: Board, players: Sequence[Player]) -> None:
        """Resume a saved position; ``players[0]`` is the one to move."""
        self._validate_players(players)
        if any(player.color is None for player in players) or players[0].color == players[1].color:
            raise ValueError("Loaded players need two different colours.")
        self.board = board
        self.players = list(players)
        self.current_index = 0
        self.winner = None
        self.win_lines = 0
        self.round_over = False
        self.loaded_from_save = True
        self.ply_count = self._estimate_ply()
        self._apply_restrictions()

    # ------------------------------------------------------------------
    # Turns
    # ------------------------------------------------------------------
    def play_ply(self, position: Optional[str] = None) -> PlyResult:
        """Ask the current player for a stone; ``position`` feeds players that need input."""
        if self.round_over:
            raise ValueError("Cannot play on a finished round.")

        player = self.current_player
        player.set_input(position)
        self._log(f"{player.name_and_color}'s turn:")
        outcome = player.make_move(self.board, self.next_player)
        if not outcome.ok:
            self._log(outcome.message)
            return PlyResult(player=player, outcome=outcome)

        if outcome.move is not None:
            self._log(outcome.message)
        self._log(f"{player.name_and_color} placed a stone at {outcome.position}.")

        pairs = self.board.captured_pairs
        player.add_captured_pairs(pairs)
        if pairs > 0:
            self._log(f"{player.name_and_color} captured {pairs} pair(s)!")

        if self._check_round_end(player):
            self.round_over = True
            self._tally_scores()
            return PlyResult(player=player, outcome=outcome, round_over=True, winner=self.winner)

        self.ply_count += 1
        self._apply_restrictions()
        self.current_index = (self.current_index + 1) % NUM_PLAYERS
        self._record_scores()
        return PlyResult(player=player, outcome=outcome)

    def help_for_current_player(self) -> EvaluatedMove:
        player = self.current_player
        suggestion = self.helper.get_help(self.board, player._require_color(), self.next_player._require_color())
        self._log(suggestion.rationale)
        return suggestion

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _check_round_end(self, player: Player) -> bool:
        ended = False
        message = ""
        if self.board.win_lines > 0:
            self.win_lines = self.board.win_lines
            self.winner = player
            message = f"{player.name_and_color} won the round with {WIN_LENGTH} stones in a row!"
            ended = True
        if player.captured_pairs >= self.config.capture_goal:
            self.winner = player
            message = f"{player.name_and_color} won the round by capturing {player.captured_pairs} pairs!"
            ended = True
        if self.board.is_full:
            self.winner = None
            message = "The board is full! The round ends in a tie!"
            ended = True
        if ended:
            self._log(message)
        return ended

    def _tally_scores(self) -> None:
        self._log(SECTION_RULE)
        self._log("Score details:")
        if self.win_lines > 0 and self.winner is not None:
            points = self.win_lines * self.config.points_per_five
            self.winner.add_tournament_score(points)
            self._log(
                f"  - {self.winner.name_and_color} gets {points} point(s) for {self.win_lines} "
                f"line(s) of {WIN_LENGTH} stones."
            )

        for player in self.players:
            pairs = player.captured_pairs
            player.add_tournament_score(pairs)
            if pairs > 0:
                self._log(f"  - {player.name_and_color} gets {pairs} point(s) for captured pairs.")

            fours = self.board.uninterrupted_stones(self.config.straight_stones, player._require_color())
            player.add_tournament_score(fours)
            if fours > 0:
                self._log(
                    f"  - {player.name_and_color} gets {fours} point(s) for sets of "
                    f"{self.config.straight_stones} uninterrupted stones."
                )
        self._log("End scores:")
        self._record_scores()

    def _record_scores(self) -> None:
        self._log("Captured pairs:")
        for player in self.players:
            self._log(f"  {player.name_and_color}: {player.captured_pairs}")
        self._log("Tournament scores:")
        for player in self.players:
            self._log(f"  {player.name_and_color}: {player.tournament_score}")

    def _apply_restrictions(self) -> None:
        inner, outer = opening_bounds(self.ply_count)
        self.board.set_bounds(inner, outer)
        if self.ply_count == 0:
            self._log(f"The first White stone must be placed on the centre at {CENTER_POSITION}.")
        elif self.ply_count == 2:
            self._log(
                f"The second White stone must be at least {RING_DISTANCE} intersections away from {CENTER_POSITION}."
            )

    def _estimate_ply(self) -> int:
        # Only the first three plies carry restrictions, an exact count is not needed.
        if any(player.captured_pairs > 0 for player in self.players):
            return 3
        return TOTAL_INTERSECTIONS - self.board.intersections_left

    def _assign_colors(self) -> None:
        for player, color in zip(self.players, COLOR_PRECEDENCE):
            player.color = color

    def _find(self, kind: type) -> Optional[Player]:
        for player in self.players:
            if isinstance(player, kind):
                return player
        return None

    def _log(self, message: str) -> None:
        self.log.append(message)

    @staticmethod
    def _validate_players(players: Sequence[Player]) -> None:
        if len(players) != NUM_PLAYERS:
            raise ValueError(f"A round needs exactly {NUM_PLAYERS} players.")
        if players[0] is players[1]:
            raise ValueError("A player cannot play against themselves.")
