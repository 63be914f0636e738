"""A player's hand."""

from typing import Iterator, List, Set, Tuple

from unorules.engine.card import Card, Color


class Hand:
    """Set of cards held by one player, iterated in sorted order."""

    def __init__(self) -> None:
        self._cards: Set[Card] = set()

    def __len__(self) -> int:
        return len(self._cards)

    def __contains__(self, card: object) -> bool:
        return card in self._cards

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    @property
    def cards(self) -> Tuple[Card, ...]:
        return tuple(sorted(self._cards))

    def add(self, card: Card) -> None:
        self._cards.add(card)

    def remove(self, card: Card) -> bool:
        """Remove card if present; return whether it was there."""
        if card not in self._cards:
            return False
        self._cards.remove(card)
        return True

    def clear(self) -> List[Card]:
        old_cards = list(self._cards)
        self._cards.clear()
        return old_cards

    def contains_color(self, color: Color) -> bool:
        return any(card.color == color for card in self._cards)

    @property
    def value(self) -> int:
        """Total point value of the cards in hand."""
        return sum(card.points for card in self._cards)

    def __str__(self) -> str:
        return " ".join(str(c) for c in self.cards)
