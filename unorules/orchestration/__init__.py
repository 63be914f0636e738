"""Game orchestration."""

from unorules.orchestration.game_runner import GameResult, GameRunner

__all__ = ["GameResult", "GameRunner"]
