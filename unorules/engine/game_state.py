"""Game states, move tags and the per-player view of a game."""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Dict, List, Optional

from unorules.engine.card import Card, Color
from unorules.engine.counter import Direction
from unorules.engine.scoreboard import ScoreLine

if TYPE_CHECKING:
    from unorules.engine.rules import GameEngine


class GameState(str, Enum):
    """States of the engine's state machine."""

    ROUND_START = "round_start"
    PLAY_CARD = "play_card"
    PLAY_DRAWN_CARD = "play_drawn_card"
    CHANGE_COLOR = "change_color"
    CHALLENGE_DRAW_FOUR = "challenge_draw_four"
    ROUND_OVER = "round_over"


class GameMove(str, Enum):
    """What happened on the last accepted command, for reporting."""

    NONE = "none"
    PLAY_CARD = "play_card"
    DRAW_CARD = "draw_card"
    KEEP_CARD = "keep_card"
    CALL_LAST_CARD = "call_last_card"
    LATE_CALL = "late_call"
    CHALLENGE = "challenge"
    SKIP = "skip"
    REVERSE = "reverse"
    DRAW_TWO = "draw_two"
    DRAW_FOUR = "draw_four"
    CHANGE_COLOR = "change_color"
    DRAW_FOUR_CHALLENGE_SUCCESS = "draw_four_challenge_success"
    DRAW_FOUR_CHALLENGE_FAIL = "draw_four_challenge_fail"


@dataclass
class PlayerView:
    """Snapshot of the game visible to a single player.

    Contains only that player's hand and public info.
    """

    player: int
    my_hand: List[Card]
    state: GameState
    active_player: int
    direction: Direction
    top_discard: Optional[Card]
    active_color: Optional[Color]
    last_move: GameMove
    last_played: Optional[int]
    last_attacked: Optional[int]
    last_drawn_cards: List[Card]  # only filled in for the player who drew them
    num_cards_per_player: Dict[int, int]
    can_call_last_card: bool
    can_challenge_last_card: bool
    scores: List[ScoreLine]
    game_over: bool

    @classmethod
    def from_engine(cls, engine: "GameEngine", player: int) -> "PlayerView":
        """Create a player view from the engine, hiding other players' hands."""
        drawer = engine.last_drawer
        return cls(
            player=player,
            my_hand=list(engine.hand(player)),
            state=engine.state,
            active_player=engine.active_player,
            direction=engine.direction,
            top_discard=engine.top_card,
            active_color=engine.active_color,
            last_move=engine.last_move,
            last_played=engine.last_played,
            last_attacked=engine.last_attacked,
            last_drawn_cards=list(engine.last_drawn_cards) if drawer == player else [],
            num_cards_per_player={
                pid: len(engine.hand(pid)) for pid in range(engine.num_players)
            },
            can_call_last_card=engine.can_call_last_card and engine.active_player == player,
            can_challenge_last_card=(
                engine.can_challenge_last_card and engine.last_card_offender != player
            ),
            scores=engine.scoreboard.lines(),
            game_over=engine.is_game_over,
        )
