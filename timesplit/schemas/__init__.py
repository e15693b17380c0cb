"""Request payload schemas."""

from .session import GameMode, MAX_EPOCH_MS, MAX_INT32, MAX_SPLITS, SessionPayload, SplitIn

__all__ = ["GameMode", "MAX_EPOCH_MS", "MAX_INT32", "MAX_SPLITS", "SessionPayload", "SplitIn"]
