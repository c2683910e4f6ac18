"""Saved games and JSON game logs."""

from .save_format import (
    PlayerRecord,
    SaveFormatError,
    SaveState,
    format_save,
    list_saves,
    parse_save,
    read_save,
    write_save,
)
from .game_log import build_move_entry, replay_game_log, round_log_path, save_game_log

__all__ = [
    "PlayerRecord",
    "SaveFormatError",
    "SaveState",
    "format_save",
    "list_saves",
    "parse_save",
    "read_save",
    "write_save",
    "build_move_entry",
    "replay_game_log",
    "round_log_path",
    "save_game_log",
]
