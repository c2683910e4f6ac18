from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from pente.core import TOTAL_INTERSECTIONS, Stone
from pente.orchestration import Round, RoundConfig
from pente.players import Player


@dataclass
class MatchConfig:
    episodes: int = 10
    max_plies: int = TOTAL_INTERSECTIONS
    seed: Optional[int] = None


@dataclass
class MatchResult:
    games_played: int
    white_wins: int
    black_wins: int
    draws: int
    average_length: float

    def winrate_white(self) -> float:
        return self.white_wins / max(1, self.games_played)

    def winrate_black(self) -> float:
        return self.black_wins / max(1, self.games_played)


def play_round(
    player_white: Player,
    player_black: Player,
    *,
    max_plies: int = TOTAL_INTERSECTIONS,
    config: Optional[RoundConfig] = None,
    rng: Optional[np.random.Generator] = None,
) -> Round:
    """Play one round between two players that need no input; White moves first."""
    for player in (player_white, player_black):
        if player.requires_input:
            raise ValueError(f"{player.name} needs input and cannot play unattended.")
        player.reset_for_round()

    round_ = Round([player_white, player_black], config=config, rng=rng)
    round_.start()
    plies = 0
    while not round_.round_over and plies < max_plies:
        result = round_.play_ply()
        if not result.ok:
            # No legal placement left for the mover.
            break
        plies += 1
    return round_


def evaluate_players(
    player_white: Player,
    player_black: Player,
    *,
    episodes: int,
    max_plies: int = TOTAL_INTERSECTIONS,
    config: Optional[RoundConfig] = None,
    rng: Optional[np.random.Generator] = None,
) -> MatchResult:
    white_wins = 0
    black_wins = 0
    draws = 0
    total_ply = 0

    for _ in range(episodes):
        round_ = play_round(player_white, player_black, max_plies=max_plies, config=config, rng=rng)
        total_ply += round_.board.history_depth

        winner = round_.winner
        if winner is None:
            draws += 1
        elif winner.color == Stone.WHITE:
            white_wins += 1
        else:
            black_wins += 1

    average_length = total_ply / max(1, episodes)
    return MatchResult(
        games_played=episodes,
        white_wins=white_wins,
        black_wins=black_wins,
        draws=draws,
        average_length=average_length,
    )
