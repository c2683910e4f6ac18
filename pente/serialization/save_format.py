from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Union

import numpy as np

from pente.core import BOARD_SIZE, Board, Stone
from pente.orchestration import Round
from pente.players import HumanPlayer, Player

BOARD_SECTION = "Board:"
HUMAN_SECTION = "Human:"
COMPUTER_SECTION = "Computer:"
CAPTURED = "Captured pairs:"
SCORE = "Score:"
NEXT_PLAYER = "Next Player:"
SAVE_SUFFIX = ".txt"

_CAPTURED_PATTERN = re.compile(re.escape(CAPTURED) + r"\s*(\d+)")
_SCORE_PATTERN = re.compile(re.escape(SCORE) + r"\s*(\d+)")
_NEXT_PLAYER_PATTERN = re.compile(re.escape(NEXT_PLAYER) + r"\s*(Human|Computer)\s*-\s*(White|Black)")

PathLike = Union[str, Path]


class SaveFormatError(ValueError):
    pass


@dataclass
class PlayerRecord:
    captured_pairs: int = 0
    tournament_score: int = 0


@dataclass
class SaveState:
    grid: np.ndarray  # (19, 19) int8, row 0 is printed row 1
    human: PlayerRecord
    computer: PlayerRecord
    next_player: str  # "Human" or "Computer"
    next_color: Stone

    def apply(self, round_: Round) -> None:
        """Load this position into ``round_``; raises :class:`SaveFormatError` for unplayable boards."""
        human = round_.human
        computer = round_.computer
        if human is None or computer is None:
            raise SaveFormatError("Saved games need a human and a computer player.")

        board = Board()
        status = board.set_board(self.grid)
        if not status.ok:
            raise SaveFormatError(status.message)

        for player, record in ((human, self.human), (computer, self.computer)):
            player.captured_pairs = record.captured_pairs
            player.tournament_score = record.tournament_score

        first, second = (human, computer) if self.next_player == "Human" else (computer, human)
        first.color = self.next_color
        second.color = self.next_color.opponent()
        round_.load_state(board, [first, second])


def format_save(round_: Round) -> str:
    human = round_.human
    computer = round_.computer
    if human is None or computer is None:
        raise SaveFormatError("Only human versus computer rounds can be saved.")
    return (
        _format_board(round_.board)
        + "\n"
        + _format_player(HUMAN_SECTION, human)
        + "\n"
        + _format_player(COMPUTER_SECTION, computer)
        + "\n"
        + _format_next_player(round_.current_player)
    )


def parse_save(text: str) -> SaveState:
    sections = _split_sections(text)
    for required in (BOARD_SECTION, HUMAN_SECTION, COMPUTER_SECTION, NEXT_PLAYER):
        if required not in sections:
            raise SaveFormatError(f"Missing section {required!r}.")

    grid = _parse_board(sections[BOARD_SECTION])
    human = _parse_player(sections[HUMAN_SECTION])
    computer = _parse_player(sections[COMPUTER_SECTION])

    match = _NEXT_PLAYER_PATTERN.search(sections[NEXT_PLAYER][0])
    if match is None:
        raise SaveFormatError("Could not parse the next player.")
    name, color = match.groups()
    return SaveState(
        grid=grid,
        human=human,
        computer=computer,
        next_player=name,
        next_color=Stone.from_display_name(color),
    )


def write_save(path: PathLike, round_: Round, *, overwrite: bool = False) -> Path:
    target = Path(path)
    if target.suffix != SAVE_SUFFIX:
        target = target.with_name(target.name + SAVE_SUFFIX)
    if target.exists() and not overwrite:
        raise FileExistsError(f"{target} already exists.")
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(format_save(round_))
    return target


def read_save(path: PathLike) -> SaveState:
    return parse_save(Path(path).read_text())


def list_saves(directory: PathLike) -> List[str]:
    folder = Path(directory)
    if not folder.is_dir():
        return []
    return sorted(entry.name for entry in folder.iterdir() if entry.suffix == SAVE_SUFFIX)


# ----------------------------------------------------------------------
# Helpers
# ----------------------------------------------------------------------
def _format_board(board: Board) -> str:
    lines = [BOARD_SECTION]
    grid = board.grid
    # Row 19 is written first.
    for row in range(BOARD_SIZE - 1, -1, -1):
        lines.append("".join(Stone(int(value)).symbol for value in grid[row]))
    return "\n".join(lines) + "\n"


def _format_player(section: str, player: Player) -> str:
    return f"{section}\n{CAPTURED} {player.captured_pairs}\n{SCORE} {player.tournament_score}\n"


def _format_next_player(player: Player) -> str:
    kind = "Human" if isinstance(player, HumanPlayer) else "Computer"
    color = player.color.display_name if player.color is not None else ""
    return f"{NEXT_PLAYER} {kind} - {color}"


def _split_sections(text: str) -> Dict[str, List[str]]:
    sections: Dict[str, List[str]] = {}
    current = None
    for raw in text.splitlines():
        line = raw.rstrip()
        if not line:
            current = None
            continue
        if line.startswith(NEXT_PLAYER):
            sections[NEXT_PLAYER] = [line]
            current = None
            continue
        if current is None:
            if line not in (BOARD_SECTION, HUMAN_SECTION, COMPUTER_SECTION):
                raise SaveFormatError(f"Unexpected section header {line!r}.")
            current = line
            sections[current] = []
            continue
        sections[current].append(line)
    return sections


def _parse_board(lines: List[str]) -> np.ndarray:
    if len(lines) != BOARD_SIZE:
        raise SaveFormatError(f"The board needs {BOARD_SIZE} rows, found {len(lines)}.")
    grid = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int8)
    for index, line in enumerate(lines):
        if len(line) != BOARD_SIZE:
            raise SaveFormatError(f"Board row {BOARD_SIZE - index} must have {BOARD_SIZE} stones.")
        try:
            stones = [int(Stone.from_symbol(symbol)) for symbol in line]
        except ValueError as exc:
            raise SaveFormatError(f"Board row {BOARD_SIZE - index}: {exc}") from exc
        grid[BOARD_SIZE - 1 - index] = stones
    return grid


def _parse_player(lines: List[str]) -> PlayerRecord:
    record = PlayerRecord()
    found = set()
    for line in lines:
        captured = _CAPTURED_PATTERN.search(line)
        score = _SCORE_PATTERN.search(line)
        if captured:
            record.captured_pairs = int(captured.group(1))
            found.add(CAPTURED)
        elif score:
            record.tournament_score = int(score.group(1))
            found.add(SCORE)
        else:
            raise SaveFormatError(f"Could not parse player line {line!r}.")
    if found != {CAPTURED, SCORE}:
        raise SaveFormatError("Player sections need captured pairs and a score.")
    return record
