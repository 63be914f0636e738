"""Agent protocol - interface that a seat at the table implements."""

from typing import Protocol

from unorules.engine import Action, PlayerView


class AgentProtocol(Protocol):
    """Interface for UNO-playing seats."""

    @property
    def name(self) -> str:
        """Display name for the agent."""
        ...

    def get_action(
        self,
        player_view: PlayerView,
        legal_actions: list[Action],
        player_id: int,
    ) -> Action | None:
        """Choose an action given the player view and legal actions.

        Args:
            player_view: Filtered view with only this player's hand and public info.
            legal_actions: List of valid actions to choose from.
            player_id: This agent's seat index.

        Returns:
            One of the legal actions, or None to pass on an optional action
            (a challenge or late call). The active seat must not pass.
        """
        ...
