"""Rules engine for UNO."""

from unorules.engine.card import (
    DECK_FREQUENCIES,
    PLAYABLE_COLORS,
    Card,
    Color,
    Rank,
    create_deck,
    is_playable,
)
from unorules.engine.counter import Direction, PlayerCounter
from unorules.engine.deck import DrawPile
from unorules.engine.discard import DiscardPile
from unorules.engine.game_state import GameMove, GameState, PlayerView
from unorules.engine.hand import Hand
from unorules.engine.rules import (
    Action,
    CallLastCard,
    CallLateLastCard,
    ChallengeLastCard,
    ChooseColor,
    DrawCard,
    GameEngine,
    PlayCard,
    PlayDrawnCard,
    ResolveDrawFour,
)
from unorules.engine.scoreboard import GOAL_SCORE, Scoreboard, ScoreLine

__all__ = [
    "DECK_FREQUENCIES",
    "PLAYABLE_COLORS",
    "Card",
    "Color",
    "Rank",
    "create_deck",
    "is_playable",
    "Direction",
    "PlayerCounter",
    "DrawPile",
    "DiscardPile",
    "GameMove",
    "GameState",
    "PlayerView",
    "Hand",
    "Action",
    "CallLastCard",
    "CallLateLastCard",
    "ChallengeLastCard",
    "ChooseColor",
    "DrawCard",
    "GameEngine",
    "PlayCard",
    "PlayDrawnCard",
    "ResolveDrawFour",
    "GOAL_SCORE",
    "Scoreboard",
    "ScoreLine",
]
