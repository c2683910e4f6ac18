#!/usr/bin/env python3
"""Play computer-versus-computer Pente rounds and report the results."""

import argparse
import json
from pathlib import Path
from typing import Dict, Optional

import numpy as np
import yaml
from tqdm.auto import trange

from pente import ComputerPlayer, HeuristicConfig, RoundConfig
from pente.evaluation import MatchConfig, MatchResult, evaluate_players


def load_config(path: Optional[str]) -> Dict:
    if not path:
        return {}
    cfg_path = Path(path)
    if not cfg_path.exists():
        return {}
    return yaml.safe_load(cfg_path.read_text()) or {}


def build_match_config(cfg: Dict, args: argparse.Namespace) -> MatchConfig:
    match_cfg = dict(cfg.get("match", {}))
    if args.episodes is not None:
        match_cfg["episodes"] = args.episodes
    if args.max_plies is not None:
        match_cfg["max_plies"] = args.max_plies
    if args.seed is not None:
        match_cfg["seed"] = args.seed
    return MatchConfig(**match_cfg)


def run_match(
    match: MatchConfig,
    *,
    white_heuristic: Optional[HeuristicConfig] = None,
    black_heuristic: Optional[HeuristicConfig] = None,
    round_config: Optional[RoundConfig] = None,
    progress: bool = True,
) -> MatchResult:
    """Play ``match.episodes`` rounds one at a time so progress can be shown."""
    rng = np.random.default_rng(match.seed)
    white = ComputerPlayer("White computer", config=white_heuristic, rng=rng)
    black = ComputerPlayer("Black computer", config=black_heuristic, rng=rng)

    white_wins = black_wins = draws = 0
    total_length = 0.0
    iterator = trange(match.episodes, desc="Rounds", disable=not progress)
    for _ in iterator:
        result = evaluate_players(
            white,
            black,
            episodes=1,
            max_plies=match.max_plies,
            config=round_config,
            rng=rng,
        )
        white_wins += result.white_wins
        black_wins += result.black_wins
        draws += result.draws
        total_length += result.average_length

    return MatchResult(
        games_played=match.episodes,
        white_wins=white_wins,
        black_wins=black_wins,
        draws=draws,
        average_length=total_length / max(1, match.episodes),
    )


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", type=str, default="configs/pente.yaml")
    parser.add_argument("--episodes", type=int)
    parser.add_argument("--max-plies", type=int)
    parser.add_argument("--seed", type=int)
    parser.add_argument("--black-build-weight", type=int, help="Give Black a different build weight")
    parser.add_argument("--quiet", action="store_true")
    args = parser.parse_args()

    cfg = load_config(args.config)
    match = build_match_config(cfg, args)
    white_heuristic = HeuristicConfig(**cfg.get("heuristic", {}))
    black_heuristic = HeuristicConfig(**cfg.get("heuristic", {}))
    if args.black_build_weight is not None:
        black_heuristic.build_weight = args.black_build_weight
    round_config = RoundConfig(**cfg.get("round", {}))

    result = run_match(
        match,
        white_heuristic=white_heuristic,
        black_heuristic=black_heuristic,
        round_config=round_config,
        progress=not args.quiet,
    )
    print(
        json.dumps(
            {
                "games_played": result.games_played,
                "white_wins": result.white_wins,
                "black_wins": result.black_wins,
                "draws": result.draws,
                "average_length": result.average_length,
                "winrate_white": result.winrate_white(),
                "winrate_black": result.winrate_black(),
            },
            indent=2,
        )
    )


if __name__ == "__main__":
    main()
