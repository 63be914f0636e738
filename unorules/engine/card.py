"""Card, Color and Rank types for UNO."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple


class Color(str, Enum):
    """Card colors. WILD marks the uncolored wild cards."""

    BLUE = "blue"
    GREEN = "green"
    RED = "red"
    YELLOW = "yellow"
    WILD = "wild"

    @property
    def is_wild(self) -> bool:
        return self is Color.WILD


PLAYABLE_COLORS = (Color.BLUE, Color.GREEN, Color.RED, Color.YELLOW)


class Rank(str, Enum):
    """Card ranks."""

    ZERO = "0"
    ONE = "1"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    SKIP = "skip"
    REVERSE = "reverse"
    DRAW_TWO = "draw_two"
    WILD = "wild"
    WILD_DRAW_FOUR = "wild_draw_four"

    @property
    def is_wild(self) -> bool:
        return self in (Rank.WILD, Rank.WILD_DRAW_FOUR)

    @property
    def is_numeral(self) -> bool:
        return self.value.isdigit()

    @property
    def points(self) -> int:
        """Points scored against the holder at the end of a round."""
        if self.is_numeral:
            return int(self.value)
        if self.is_wild:
            return 50
        return 20


NUMERAL_RANKS = tuple(r for r in Rank if r.is_numeral)
ACTION_RANKS = (Rank.SKIP, Rank.REVERSE, Rank.DRAW_TWO)
WILD_RANKS = (Rank.WILD, Rank.WILD_DRAW_FOUR)


@dataclass(frozen=True, order=True)
class Card:
    """A UNO card.

    For number/action cards: color is one of the four playable colors.
    For wild cards: color is Color.WILD, rank is WILD or WILD_DRAW_FOUR.
    uid tells apart the copies of the same color and rank in one deck, so
    cards compare and hash on their full identity.
    """

    color: Color
    rank: Rank
    uid: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.color, Color):
            raise ValueError(f"Invalid card color: {self.color!r}")
        if not isinstance(self.rank, Rank):
            raise ValueError(f"Invalid card rank: {self.rank!r}")
        if self.rank.is_wild and not self.color.is_wild:
            raise ValueError("Wild cards must have color=Color.WILD")
        if not self.rank.is_wild and self.color.is_wild:
            raise ValueError("Non-wild cards must have a playable color")
        if self.uid < 0:
            raise ValueError(f"Invalid card uid: {self.uid}")

    @property
    def is_wild(self) -> bool:
        return self.rank.is_wild

    @property
    def points(self) -> int:
        return self.rank.points

    def __str__(self) -> str:
        if self.is_wild:
            return self.rank.value
        return f"{self.color.value}_{self.rank.value}"


def is_playable(candidate: Card, top: Card, active_color: Optional[Color]) -> bool:
    """Check if candidate may be played on top.

    active_color only matters when top is a wild card: it is the color the
    wild's player nominated.
    """
    if candidate.is_wild:
        return True
    if top.is_wild:
        return candidate.color == active_color
    return candidate.color == top.color or candidate.rank == top.rank


def _frequency(rank: Rank) -> int:
    if rank is Rank.ZERO:
        return 1
    if rank.is_wild:
        return 4
    return 2


DECK_FREQUENCIES: Dict[Tuple[Color, Rank], int] = {}
for _color in PLAYABLE_COLORS:
    for _rank in NUMERAL_RANKS + ACTION_RANKS:
        DECK_FREQUENCIES[(_color, _rank)] = _frequency(_rank)
for _rank in WILD_RANKS:
    DECK_FREQUENCIES[(Color.WILD, _rank)] = _frequency(_rank)
del _color, _rank

DECK_SIZE = sum(DECK_FREQUENCIES.values())


def create_deck() -> List[Card]:
    """Create a standard 108-card UNO deck, in catalog order.

    - 4 colors x (one 0, two each of 1-9, Skip, Reverse, Draw Two): 100 cards
    - 4 Wild, 4 Wild Draw Four: 8 cards
    - Total: 108 cards
    """
    return [
        Card(color=color, rank=rank, uid=uid)
        for (color, rank), freq in DECK_FREQUENCIES.items()
        for uid in range(freq)
    ]
