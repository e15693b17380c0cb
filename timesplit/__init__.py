"""Gameplay session recording and leaderboard API."""

APP_NAME = "timesplit-api"
__version__ = "1.0.0"

__all__ = ["APP_NAME", "__version__"]
