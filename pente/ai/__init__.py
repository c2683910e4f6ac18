"""Heuristic move selection for Pente."""

from .heuristic import EvaluatedMove, HeuristicConfig, MoveEvaluator, MoveReason

__all__ = ["EvaluatedMove", "HeuristicConfig", "MoveEvaluator", "MoveReason"]
