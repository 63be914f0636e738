"""Draw pile (stock) handling."""

import random
from typing import Iterable, List, Optional

from unorules.engine.card import Card


class DrawPile:
    """Face-down stock of cards.

    Order is only meaningful after shuffle(); cards are drawn from the top.
    All randomness goes through the injected generator.
    """

    def __init__(self, rng: random.Random, cards: Iterable[Card] = ()) -> None:
        self._rng = rng
        self._cards: List[Card] = list(cards)

    def __len__(self) -> int:
        return len(self._cards)

    def is_empty(self) -> bool:
        return not self._cards

    def shuffle(self) -> None:
        self._rng.shuffle(self._cards)

    def draw(self) -> Optional[Card]:
        """Draw the top card, or None if the pile is empty."""
        if not self._cards:
            return None
        return self._cards.pop()

    def add_card(self, card: Card) -> None:
        self._cards.append(card)

    def add_cards(self, cards: Iterable[Card]) -> None:
        self._cards.extend(cards)

    def cards(self) -> List[Card]:
        """Snapshot of the remaining cards (top last)."""
        return list(self._cards)
