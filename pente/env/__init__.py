from .gym_env import BOARD_CHANNELS, PenteEnv

__all__ = ["BOARD_CHANNELS", "PenteEnv"]
