"""Pente rules engine and one-ply heuristic player."""

from . import core, ai, players, orchestration, serialization, env, evaluation
from .core import Board, MoveRecord, Status, Stone
from .ai import EvaluatedMove, HeuristicConfig, MoveEvaluator, MoveReason
from .players import ComputerPlayer, HumanPlayer, MoveOutcome, Player
from .orchestration import PlyResult, Round, RoundConfig
from .serialization import SaveFormatError, SaveState, read_save, write_save
from .env import PenteEnv
from .evaluation import MatchConfig, MatchResult, evaluate_players

__all__ = [
    "core",
    "ai",
    "players",
    "orchestration",
    "serialization",
    "env",
    "evaluation",
    "Board",
    "MoveRecord",
    "Status",
    "Stone",
    "EvaluatedMove",
    "HeuristicConfig",
    "MoveEvaluator",
    "MoveReason",
    "ComputerPlayer",
    "HumanPlayer",
    "MoveOutcome",
    "Player",
    "PlyResult",
    "Round",
    "RoundConfig",
    "SaveFormatError",
    "SaveState",
    "read_save",
    "write_save",
    "PenteEnv",
    "MatchConfig",
    "MatchResult",
    "evaluate_players",
]
