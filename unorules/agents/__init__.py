"""Seats that can sit at an UNO table."""

from unorules.agents.human_agent import HumanAgent

__all__ = ["HumanAgent"]
