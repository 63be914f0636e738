"""Active player and direction of play."""

from enum import Enum


class Direction(str, Enum):
    CW = "clockwise"
    CCW = "counter-clockwise"

    def opposite(self) -> "Direction":
        return Direction.CCW if self is Direction.CW else Direction.CW

    @property
    def step(self) -> int:
        return 1 if self is Direction.CW else -1


class PlayerCounter:
    """Tracks whose turn it is around a table of num_players seats."""

    def __init__(self, num_players: int) -> None:
        self.num_players = num_players
        self.active = 0
        self.direction = Direction.CW

    def reset(self, player: int) -> None:
        """Make player active and restore clockwise play."""
        self.active = player % self.num_players
        self.direction = Direction.CW

    def next_player(self, n: int = 1) -> int:
        """Return the nth next player in the direction of play."""
        return (self.active + n * self.direction.step) % self.num_players

    def advance(self, n: int = 1) -> int:
        self.active = self.next_player(n)
        return self.active

    def reverse(self) -> None:
        self.direction = self.direction.opposite()
