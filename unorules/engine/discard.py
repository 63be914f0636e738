"""Discard pile: played cards and the color in effect."""

from typing import List, Optional

from unorules.engine.card import PLAYABLE_COLORS, Card, Color, is_playable


class DiscardPile:
    """Face-up stack of played cards; top is the most recent play.

    Two colors are tracked besides the cards themselves:
    - the nominated color, which only applies while the top card is wild;
    - the color in effect just before the most recent wild was pushed,
      used to settle Wild Draw Four challenges.
    """

    def __init__(self) -> None:
        self._cards: List[Card] = []
        self._wild_color: Optional[Color] = None
        self._pre_wild_color: Optional[Color] = None

    def __len__(self) -> int:
        return len(self._cards)

    def is_empty(self) -> bool:
        return not self._cards

    @property
    def top(self) -> Optional[Card]:
        """Return the top card on the discard pile."""
        return self._cards[-1] if self._cards else None

    @property
    def active_color(self) -> Optional[Color]:
        """Color that must be matched (nominated color for a wild top)."""
        top = self.top
        if top is None:
            return None
        if top.is_wild:
            return self._wild_color
        return top.color

    @property
    def pre_wild_color(self) -> Optional[Color]:
        return self._pre_wild_color

    def push(self, card: Card) -> None:
        if card.is_wild:
            self._pre_wild_color = self.active_color
            self._wild_color = None
        self._cards.append(card)

    def set_active_color(self, color: Color) -> bool:
        """Nominate the color for a wild top card."""
        top = self.top
        if top is None or not top.is_wild or color not in PLAYABLE_COLORS:
            return False
        self._wild_color = Color(color)
        return True

    def is_playable(self, card: Card) -> bool:
        top = self.top
        if top is None:
            return False
        return is_playable(card, top, self.active_color)

    def clear(self) -> List[Card]:
        """Remove every card; return the removed cards."""
        old_cards = self._cards
        self._cards = []
        self._wild_color = None
        self._pre_wild_color = None
        return old_cards

    def clear_except_top(self) -> List[Card]:
        """Remove every card but the top; return the removed cards.

        The nominated color survives, since the top card stays in play.
        """
        if not self._cards:
            return []
        old_cards = self._cards[:-1]
        self._cards = self._cards[-1:]
        return old_cards

    def cards(self) -> List[Card]:
        return list(self._cards)
