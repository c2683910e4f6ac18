"""Round orchestration: seating, turns, opening restrictions and scoring."""

from .round import HEADS, TAILS, PlyResult, Round, RoundConfig, opening_bounds

__all__ = ["HEADS", "TAILS", "PlyResult", "Round", "RoundConfig", "opening_bounds"]
