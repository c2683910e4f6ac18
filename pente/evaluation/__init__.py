from .match import MatchConfig, MatchResult, evaluate_players, play_round

__all__ = ["MatchConfig", "MatchResult", "evaluate_players", "play_round"]
