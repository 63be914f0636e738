"""Shared fixtures: a rigged stock so hands and starters are known in advance."""

import random
from collections import Counter
from typing import Callable, List, Sequence

import pytest

from unorules.engine import DECK_FREQUENCIES, Card, Color, GameEngine, Rank


class RiggedRandom(random.Random):
    """Random generator whose first shuffle stacks chosen cards on top.

    top_cards are given in draw order: with INITIAL_HAND_SIZE 7, the first
    seven go to player 0, the next seven to player 1, and so on, then the
    starter, then whatever is drawn next. Later shuffles move the top card
    to the bottom.
    """

    def __init__(self, top_cards: Sequence[Card], seed: int = 0) -> None:
        super().__init__(seed)
        self._top_cards = list(top_cards)
        self.shuffles = 0

    def shuffle(self, x) -> None:  # type: ignore[override]
        self.shuffles += 1
        if self.shuffles == 1:
            rest = [c for c in x if c not in self._top_cards]
            x[:] = rest + list(reversed(self._top_cards))
        elif x:
            x.insert(0, x.pop())


def cards(color: Color, *ranks: str, uid: int = 0) -> List[Card]:
    return [Card(color=color, rank=Rank(r), uid=uid) for r in ranks]


def conserved(engine: GameEngine) -> bool:
    """True if every card of the deck is in exactly one place."""
    everything = engine.stock_cards() + engine.discard_cards()
    for hand in engine.hands:
        everything.extend(hand)
    counts = Counter((c.color, c.rank) for c in everything)
    return len(set(everything)) == len(everything) == 108 and counts == Counter(DECK_FREQUENCIES)


GREEN_HAND = cards(Color.GREEN, "1", "2", "3", "4", "6", "7", "8")
YELLOW_HAND = cards(Color.YELLOW, "1", "2", "3", "4", "6", "7", "8")
BLUE_FIVE = Card(Color.BLUE, Rank.FIVE)

# Five skips that chain on a blue starter; with two players the same seat
# keeps the turn after each one.
SKIPS = [
    Card(Color.BLUE, Rank.SKIP, 0),
    Card(Color.BLUE, Rank.SKIP, 1),
    Card(Color.RED, Rank.SKIP, 0),
    Card(Color.RED, Rank.SKIP, 1),
    Card(Color.GREEN, Rank.SKIP, 0),
]


def _make_engine(
    hands: Sequence[Sequence[Card]],
    starter: Card,
    extra: Sequence[Card] = (),
    first_player: int = 0,
) -> GameEngine:
    for hand in hands:
        assert len(hand) == 7
    order = [c for hand in hands for c in hand] + [starter] + list(extra)
    engine = GameEngine(
        len(hands),
        rng=RiggedRandom(order),
        first_player=lambda n: first_player,
    )
    assert engine.start_round()
    return engine


@pytest.fixture
def make_engine() -> Callable[..., GameEngine]:
    """Factory for an engine whose hands, starter and next draws are fixed."""
    return _make_engine
