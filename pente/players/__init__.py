"""Human and computer player roles."""

from .players import ComputerPlayer, HumanPlayer, MoveOutcome, Player

__all__ = ["ComputerPlayer", "HumanPlayer", "MoveOutcome", "Player"]
