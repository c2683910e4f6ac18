from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List, Optional

from pente.core import Board, Stone
from pente.orchestration import PlyResult, RoundConfig

from .save_format import PathLike, SaveFormatError


def build_move_entry(move_index: int, ply: PlyResult, captured_pairs: int) -> Dict[str, object]:
    move = ply.outcome.move
    return {
        "move_index": move_index,
        "actor": ply.player.name,
        "color": ply.player.color.display_name if ply.player.color is not None else None,
        "position": ply.outcome.position,
        "captured_pairs": captured_pairs,
        "reason": move.reason.value if move is not None else None,
        "score": move.score if move is not None else None,
    }


def round_log_path(path: PathLike, round_number: int) -> Path:
    """``game.json`` for the first round, ``game-round2.json`` for the second and so on."""
    target = Path(path)
    if round_number <= 1:
        return target
    return target.with_name(f"{target.stem}-round{round_number}{target.suffix}")


def save_game_log(log: Dict, path: PathLike) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(log, ensure_ascii=False, indent=2))
    return target


def replay_game_log(
    path: PathLike,
    *,
    verbose: bool = True,
    capture_goal: int = RoundConfig.capture_goal,
) -> Dict[str, object]:
    """Replay a JSON game log and summarise the result.

    Logs of resumed games carry ``initial_board`` and ``initial_captures``;
    otherwise play starts from an empty board. Placements are replayed without
    opening restrictions. An illegal placement raises :class:`SaveFormatError`.
    """
    data = json.loads(Path(path).read_text())
    moves: List[Dict] = data.get("moves", [])
    board = Board()
    initial = data.get("initial_board")
    if initial is not None:
        status = board.set_board(initial)
        if not status.ok:
            raise SaveFormatError(f"Initial board: {status.message}")

    captured = {Stone.WHITE: 0, Stone.BLACK: 0}
    for name, pairs in data.get("initial_captures", {}).items():
        captured[Stone.from_display_name(name)] = int(pairs)

    if verbose:
        print("Replaying logged game.")
        print(board.render())

    winner: Optional[Stone] = None
    for entry in moves:
        if winner is not None:
            raise SaveFormatError(f"Move {entry.get('move_index')} was played after the round ended.")
        color = Stone.from_display_name(str(entry.get("color")))
        position = str(entry.get("position", ""))
        status = board.place_stone(color, position)
        if not status.ok:
            raise SaveFormatError(f"Move {entry.get('move_index')} at {position!r}: {status.message}")
        captured[color] += board.captured_pairs
        if board.has_winner or captured[color] >= capture_goal:
            winner = color
        if verbose:
            print(f"{entry.get('actor', 'unknown')} ({color.display_name}) plays {board.last_position}")
            print(board.render())

    summary = {
        "moves": len(moves),
        "winner": winner.display_name if winner is not None else None,
        "captured_pairs": {stone.display_name: pairs for stone, pairs in captured.items()},
        "intersections_left": board.intersections_left,
        "board": board.grid.tolist(),
    }
    if verbose:
        print("Replay finished.")
        print(f"Winner: {summary['winner'] or 'none'}")
    return summary
