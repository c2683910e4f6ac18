import json
from pathlib import Path

import numpy as np
import pytest

from pente.core import BOARD_SIZE, Stone
from pente.orchestration import Round
from pente.players import HumanPlayer
from pente.serialization import (
    SaveFormatError,
    build_move_entry,
    replay_game_log,
    round_log_path,
    save_game_log,
)


def move(index: int, color: str, position: str, actor: str = "human") -> dict:
    return {"move_index": index, "actor": actor, "color": color, "position": position}


def write_log(path: Path, moves, **extra) -> None:
    path.write_text(json.dumps({"metadata": {}, "moves": moves, **extra}))


def test_replay_logged_game(tmp_path) -> None:
    log_path = tmp_path / "game.json"
    write_log(log_path, [move(0, "White", "J10"), move(1, "Black", "K10", "computer")])

    summary = replay_game_log(log_path, verbose=False)

    assert summary["moves"] == 2
    assert summary["winner"] is None
    board = summary["board"]
    assert board[9][9] == Stone.WHITE
    assert board[9][10] == Stone.BLACK
    assert summary["intersections_left"] == BOARD_SIZE * BOARD_SIZE - 2


def test_replay_reports_captures_and_winner(tmp_path) -> None:
    log_path = tmp_path / "capture.json"
    write_log(
        log_path,
        [move(0, "White", "J10"), move(1, "Black", "K10"), move(2, "White", "A1"), move(3, "Black", "L10"), move(4, "White", "M10")],
        initial_captures={"White": 4},
    )

    summary = replay_game_log(log_path, verbose=False)

    assert summary["captured_pairs"] == {"White": 5, "Black": 0}
    assert summary["winner"] == "White"
    assert summary["board"][9][10] == Stone.EMPTY


def test_replay_from_initial_board(tmp_path) -> None:
    grid = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int8)
    grid[9, 9] = Stone.WHITE
    log_path = tmp_path / "resumed.json"
    write_log(log_path, [move(0, "Black", "K10")], initial_board=grid.tolist())

    summary = replay_game_log(log_path, verbose=False)

    assert summary["board"][9][9] == Stone.WHITE
    assert summary["board"][9][10] == Stone.BLACK


def test_replay_rejects_illegal_moves(tmp_path) -> None:
    log_path = tmp_path / "bad.json"
    write_log(log_path, [move(0, "White", "J10"), move(1, "Black", "J10")])
    with pytest.raises(SaveFormatError):
        replay_game_log(log_path, verbose=False)


def test_replay_prints_when_verbose(tmp_path, capsys) -> None:
    log_path = tmp_path / "game.json"
    write_log(log_path, [move(0, "White", "J10")])
    replay_game_log(log_path)
    out = capsys.readouterr().out
    assert "human (White) plays J10" in out
    assert "Replay finished." in out


def test_move_entries_round_trip_through_replay(tmp_path) -> None:
    round_ = Round([HumanPlayer("Ada"), HumanPlayer("Bo")], rng=np.random.default_rng(0))
    round_.start()
    entries = []
    for position in ["J10", "K11", "J13"]:
        result = round_.play_ply(position)
        entries.append(build_move_entry(len(entries), result, round_.board.captured_pairs))

    assert entries[1] == {
        "move_index": 1,
        "actor": "Bo",
        "color": "Black",
        "position": "K11",
        "captured_pairs": 0,
        "reason": None,
        "score": None,
    }
    path = save_game_log({"metadata": {}, "moves": entries}, tmp_path / "logs" / "game.json")
    summary = replay_game_log(path, verbose=False)
    assert np.array_equal(np.array(summary["board"]), round_.board.grid)


def test_round_log_path_numbers_later_rounds(tmp_path) -> None:
    assert round_log_path(tmp_path / "game.json", 1) == tmp_path / "game.json"
    assert round_log_path(tmp_path / "game.json", 3) == tmp_path / "game-round3.json"
