"""Round and game scores."""

from dataclasses import dataclass
from typing import List, Optional

GOAL_SCORE = 500


@dataclass(frozen=True)
class ScoreLine:
    """One player's row on the scoreboard.

    previous: cumulative score before this round
    contributed: points this player's hand gave to the round winner
    gained: points this player won this round
    total: cumulative score including this round
    """

    player: int
    previous: int
    contributed: int
    gained: int
    total: int


class Scoreboard:
    """Cumulative scores for a game, with a per-round breakdown."""

    def __init__(self, num_players: int, goal: int = GOAL_SCORE) -> None:
        if num_players <= 0:
            raise ValueError("Scoreboard needs at least one player")
        self.num_players = num_players
        self.goal = goal
        self.reset()

    def reset(self) -> None:
        """Zero every score."""
        self._previous = [0] * self.num_players
        self._contributed = [0] * self.num_players
        self._gained = [0] * self.num_players
        self._total = [0] * self.num_players
        self._goal_reached = False

    def add_score(self, winner: int, loser: int, points: int) -> None:
        """Move loser's hand value onto winner's score."""
        self._contributed[loser] += points
        self._gained[winner] += points
        self._total[winner] += points
        if self._total[winner] >= self.goal:
            self._goal_reached = True

    def new_round(self) -> None:
        """Carry totals over and clear the per-round columns."""
        self._previous = list(self._total)
        self._contributed = [0] * self.num_players
        self._gained = [0] * self.num_players

    @property
    def goal_reached(self) -> bool:
        return self._goal_reached

    @property
    def totals(self) -> List[int]:
        return list(self._total)

    def lines(self) -> List[ScoreLine]:
        return [
            ScoreLine(
                player=i,
                previous=self._previous[i],
                contributed=self._contributed[i],
                gained=self._gained[i],
                total=self._total[i],
            )
            for i in range(self.num_players)
        ]

    @property
    def leader(self) -> Optional[int]:
        """Player with the highest total, or None before anyone scores."""
        best = max(self._total)
        if best == 0:
            return None
        return self._total.index(best)
