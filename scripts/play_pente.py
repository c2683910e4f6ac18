#!/usr/bin/env python3
"""Play Pente against the computer via the console, with saved games, logging & replay."""

import argparse
from pathlib import Path
from typing import Callable, Dict, List, Optional

import numpy as np
import yaml

from pente import ComputerPlayer, HeuristicConfig, HumanPlayer, Round, RoundConfig
from pente.orchestration import HEADS, TAILS
from pente.serialization import (
    SaveFormatError,
    build_move_entry,
    list_saves,
    read_save,
    replay_game_log,
    round_log_path,
    save_game_log,
    write_save,
)

QUIT_COMMANDS = {"q", "quit", "exit"}
HELP_COMMAND = "help"
SAVE_COMMAND = "save"
SAVES_COMMAND = "saves"
COIN_CALLS = {HEADS, TAILS}


def load_config(path: Optional[str]) -> Dict:
    if not path:
        return {}
    cfg_path = Path(path)
    if not cfg_path.exists():
        return {}
    return yaml.safe_load(cfg_path.read_text()) or {}


def build_round(cfg: Dict, *, name: Optional[str] = None, seed: Optional[int] = None) -> Round:
    rng = np.random.default_rng(seed)
    heuristic = HeuristicConfig(**cfg.get("heuristic", {}))
    round_config = RoundConfig(**cfg.get("round", {}))
    human = HumanPlayer(name)
    computer = ComputerPlayer(config=heuristic, rng=rng)
    return Round([human, computer], config=round_config, rng=rng)


class ConsoleSession:
    """Drives a tournament of rounds from console input.

    ``prompt`` and ``emit`` default to :func:`input` and :func:`print`; tests
    pass scripted replacements.
    """

    def __init__(
        self,
        round_: Round,
        *,
        save_dir: Path,
        log_file: Optional[Path] = None,
        prompt: Callable[[str], str] = input,
        emit: Callable[[str], None] = print,
    ) -> None:
        self.round_ = round_
        self.save_dir = Path(save_dir)
        self.log_file = log_file
        self.prompt = prompt
        self.emit = emit
        self.round_number = 1
        self.moves: List[Dict] = []
        self.initial_board: Optional[List[List[int]]] = None
        self.initial_captures: Optional[Dict[str, int]] = None
        self._log_cursor = 0

    def run(self, load: Optional[Path] = None) -> None:
        if load is not None:
            self.resume(load)
        else:
            self.begin()

        while True:
            if not self.play_round():
                self.emit("Goodbye!")
                return
            answer = self.prompt("Play another round? (y/n): ").strip().lower()
            if answer != "y":
                break
            self.round_number += 1
            self.round_.start_another_round()
            self.flush_log()
            self._start_move_log()

        leader = self.round_.highest_scoring_player()
        if leader is None:
            self.emit("The tournament ends in a tie!")
        else:
            self.emit(f"{leader.name} wins the tournament with {leader.tournament_score} point(s)!")

    def begin(self) -> None:
        while True:
            call = self.prompt("Call the coin toss (heads/tails): ").strip().upper()
            if call in COIN_CALLS:
                break
            self.emit("Please answer heads or tails.")
        self.round_.perform_coin_toss(call)
        self.round_.start()
        self.flush_log()
        self._start_move_log()

    def resume(self, path: Path) -> None:
        state = read_save(path)
        state.apply(self.round_)
        self.emit(f"Loaded {path}.")
        self.flush_log()
        self._start_move_log()

    def play_round(self) -> bool:
        """Play until the round ends; ``False`` when the user quits or saves."""
        round_ = self.round_
        while not round_.round_over:
            self.emit(round_.board.render())
            player = round_.current_player
            if player.requires_input:
                raw = self.prompt(f"{player.name_and_color}, enter a position, 'help', 'save', 'saves' or 'q': ").strip()
                command = raw.lower()
                if command in QUIT_COMMANDS:
                    return False
                if command == HELP_COMMAND:
                    round_.help_for_current_player()
                    self.flush_log()
                    continue
                if command == SAVES_COMMAND:
                    self.show_saves()
                    continue
                if command == SAVE_COMMAND:
                    if self.save_game():
                        return False
                    continue
                result = round_.play_ply(raw)
            else:
                result = round_.play_ply()
            self.flush_log()

            if not result.ok:
                if not player.requires_input:
                    self.emit(f"{player.name} could not find a legal placement.")
                    return False
                continue
            self.moves.append(build_move_entry(len(self.moves), result, round_.board.captured_pairs))

        self.emit(round_.board.render())
        self.write_log()
        return True

    def show_saves(self) -> List[str]:
        names = list_saves(self.save_dir)
        if not names:
            self.emit(f"No saved games in {self.save_dir}.")
        for name in names:
            self.emit(name)
        return names

    def save_game(self) -> bool:
        name = self.prompt("Save file name: ").strip()
        if not name:
            self.emit("No file name given.")
            return False
        target = self.save_dir / name
        try:
            path = write_save(target, self.round_)
        except FileExistsError:
            answer = self.prompt(f"{name} already exists, overwrite it? (y/n): ").strip().lower()
            if answer != "y":
                return False
            path = write_save(target, self.round_, overwrite=True)
        self.emit(f"Game saved to {path}.")
        return True

    def write_log(self) -> Optional[Path]:
        if not self.log_file:
            return None
        winner = self.round_.winner
        log_data = {
            "metadata": {
                "round": self.round_number,
                "players": [player.name_and_color for player in self.round_.players],
                "winner": winner.name if winner is not None else None,
                "tournament_scores": {player.name: player.tournament_score for player in self.round_.players},
            },
            "moves": self.moves,
        }
        if self.initial_board is not None:
            log_data["initial_board"] = self.initial_board
            log_data["initial_captures"] = self.initial_captures
        path = save_game_log(log_data, round_log_path(self.log_file, self.round_number))
        self.emit(f"Saved the move log to {path}.")
        return path

    def flush_log(self) -> None:
        lines = self.round_.log[self._log_cursor :]
        self._log_cursor = len(self.round_.log)
        for line in lines:
            self.emit(line)

    def _start_move_log(self) -> None:
        self.moves = []
        board = self.round_.board
        if board.stones_placed() == 0:
            self.initial_board = None
            self.initial_captures = None
            return
        self.initial_board = board.grid.tolist()
        self.initial_captures = {
            player.color.display_name: player.captured_pairs
            for player in self.round_.players
            if player.color is not None
        }


def main() -> None:
    parser = argparse.ArgumentParser(description="Play Pente in the console against the computer.")
    parser.add_argument("--config", type=str, default="configs/pente.yaml")
    parser.add_argument("--name", type=str, help="Name shown for the human player")
    parser.add_argument("--seed", type=int)
    parser.add_argument("--load", type=str, help="Resume a saved game")
    parser.add_argument("--save-dir", type=str)
    parser.add_argument("--list-saves", action="store_true", help="List saved games and exit")
    parser.add_argument("--log-file", type=str)
    parser.add_argument("--replay-log", type=str, help="Replay a logged game and exit")
    parser.add_argument("--replay-quiet", action="store_true")
    args = parser.parse_args()

    cfg = load_config(args.config)
    if args.replay_log:
        capture_goal = cfg.get("round", {}).get("capture_goal", RoundConfig.capture_goal)
        replay_game_log(Path(args.replay_log), verbose=not args.replay_quiet, capture_goal=capture_goal)
        return

    save_dir = Path(args.save_dir if args.save_dir is not None else cfg.get("save_dir", "saves"))
    round_ = build_round(cfg, name=args.name, seed=args.seed)
    session = ConsoleSession(
        round_,
        save_dir=save_dir,
        log_file=Path(args.log_file) if args.log_file else None,
    )
    if args.list_saves:
        session.show_saves()
        return
    load = Path(args.load) if args.load else None
    try:
        session.run(load=load)
    except SaveFormatError as exc:
        parser.exit(1, f"Could not load {load}: {exc}\n")


if __name__ == "__main__":
    main()
