"""UNO rules: the game engine state machine and its action vocabulary."""

import logging
import random
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple, Union

from unorules.engine.card import PLAYABLE_COLORS, Card, Color, Rank, create_deck
from unorules.engine.counter import Direction, PlayerCounter
from unorules.engine.deck import DrawPile
from unorules.engine.discard import DiscardPile
from unorules.engine.game_state import GameMove, GameState, PlayerView
from unorules.engine.hand import Hand
from unorules.engine.scoreboard import Scoreboard, ScoreLine

logger = logging.getLogger(__name__)

INITIAL_HAND_SIZE = 7
MIN_PLAYERS = 2
MAX_PLAYERS = 10
LAST_CARD_PENALTY = 2
DRAW_FOUR_CHALLENGE_PENALTY = 2


@dataclass(frozen=True)
class PlayCard:
    """Action: play a card from hand."""

    card: Card


@dataclass(frozen=True)
class DrawCard:
    """Action: draw a card from the stock."""

    pass


@dataclass(frozen=True)
class PlayDrawnCard:
    """Action: play (True) or keep (False) the card just drawn."""

    play: bool = True


@dataclass(frozen=True)
class CallLastCard:
    """Action: declare "UNO" before playing down to one card."""

    pass


@dataclass(frozen=True)
class CallLateLastCard:
    """Action: declare "UNO" after the fact, before anyone challenges."""

    pass


@dataclass(frozen=True)
class ChallengeLastCard:
    """Action: catch a player who went down to one card without calling."""

    pass


@dataclass(frozen=True)
class ChooseColor:
    """Action: nominate the color after a wild card."""

    color: Color


@dataclass(frozen=True)
class ResolveDrawFour:
    """Action: accept (False) or challenge (True) a Wild Draw Four."""

    challenge: bool = False


Action = Union[
    PlayCard,
    DrawCard,
    PlayDrawnCard,
    CallLastCard,
    CallLateLastCard,
    ChallengeLastCard,
    ChooseColor,
    ResolveDrawFour,
]


class GameEngine:
    """UNO rules engine.

    The engine owns the stock, the discard pile, every hand, the turn
    counter and the scoreboard, and is the only thing that mutates them.
    Callers drive it one command at a time. Every command returns True if
    it was applied and False, with no state change, if it is not legal
    right now.

    Args:
        num_players: number of seats, MIN_PLAYERS to MAX_PLAYERS.
        seed: seed for the default random generator.
        rng: random generator used for every stock shuffle; overrides seed.
        first_player: chooser for the starting player of each round, called
            with the number of players. Defaults to a uniform pick from rng.
    """

    def __init__(
        self,
        num_players: int,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        first_player: Optional[Callable[[int], int]] = None,
    ) -> None:
        if not MIN_PLAYERS <= num_players <= MAX_PLAYERS:
            raise ValueError(
                f"Invalid number of players: {num_players} "
                f"(expected {MIN_PLAYERS}-{MAX_PLAYERS})"
            )
        self.num_players = num_players
        self._rng = rng if rng is not None else random.Random(seed)
        self._choose_first_player = first_player or self._rng.randrange
        self._draw_pile = DrawPile(self._rng, create_deck())
        self._discard = DiscardPile()
        self._hands = [Hand() for _ in range(num_players)]
        self._counter = PlayerCounter(num_players)
        self.scoreboard = Scoreboard(num_players)
        self._state = GameState.ROUND_START
        self._clear_round_flags()

    def _clear_round_flags(self) -> None:
        self._opening = False
        self._pending_draw_four = False
        self._draw_four_player: Optional[int] = None
        self._called_last_card = False
        self._offender: Optional[int] = None
        self._drawn_card: Optional[Card] = None
        self._last_move = GameMove.NONE
        self._last_played: Optional[int] = None
        self._last_attacked: Optional[int] = None
        self._last_drawn: List[Card] = []
        self._last_drawer: Optional[int] = None
        self._round_winner: Optional[int] = None

    # ------------------------------------------------------------------
    # Queries

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def active_player(self) -> int:
        return self._counter.active

    @property
    def direction(self) -> Direction:
        return self._counter.direction

    @property
    def top_card(self) -> Optional[Card]:
        return self._discard.top

    @property
    def active_color(self) -> Optional[Color]:
        return self._discard.active_color

    def hand(self, player: int) -> Tuple[Card, ...]:
        return self._hands[player].cards

    @property
    def hands(self) -> List[Tuple[Card, ...]]:
        return [hand.cards for hand in self._hands]

    @property
    def drawn_card(self) -> Optional[Card]:
        """The card waiting to be played or kept in PLAY_DRAWN_CARD."""
        return self._drawn_card

    def playable_cards(self) -> List[Card]:
        """Cards the active player may play right now."""
        if self._state is GameState.PLAY_DRAWN_CARD and self._drawn_card is not None:
            return [self._drawn_card]
        if self._state is not GameState.PLAY_CARD:
            return []
        return [c for c in self._hands[self.active_player] if self._discard.is_playable(c)]

    @property
    def last_move(self) -> GameMove:
        return self._last_move

    @property
    def last_played(self) -> Optional[int]:
        """Player who made the last move."""
        return self._last_played

    @property
    def last_attacked(self) -> Optional[int]:
        """Player on the receiving end of the last move, if any."""
        return self._last_attacked

    @property
    def last_drawn_cards(self) -> List[Card]:
        return list(self._last_drawn)

    @property
    def last_drawer(self) -> Optional[int]:
        """Player who received last_drawn_cards."""
        return self._last_drawer

    @property
    def can_call_last_card(self) -> bool:
        if self._state not in (GameState.PLAY_CARD, GameState.PLAY_DRAWN_CARD):
            return False
        if self._called_last_card or len(self._hands[self.active_player]) != 2:
            return False
        return bool(self.playable_cards())

    @property
    def can_challenge_last_card(self) -> bool:
        return (
            self._state is GameState.PLAY_CARD
            and self._offender is not None
            and len(self._hands[self._offender]) == 1
        )

    @property
    def last_card_offender(self) -> Optional[int]:
        """Player open to a last-card challenge, if any."""
        return self._offender if self.can_challenge_last_card else None

    @property
    def scores(self) -> List[ScoreLine]:
        return self.scoreboard.lines()

    @property
    def is_game_over(self) -> bool:
        return self.scoreboard.goal_reached

    @property
    def round_winner(self) -> Optional[int]:
        return self._round_winner

    @property
    def draw_pile_size(self) -> int:
        return len(self._draw_pile)

    @property
    def discard_pile_size(self) -> int:
        return len(self._discard)

    def stock_cards(self) -> List[Card]:
        return self._draw_pile.cards()

    def discard_cards(self) -> List[Card]:
        """Discard pile contents, bottom first."""
        return self._discard.cards()

    def view(self, player: int) -> PlayerView:
        return PlayerView.from_engine(self, player)

    def legal_actions(self, player: int) -> List[Action]:
        """Return every action player may take right now."""
        if not 0 <= player < self.num_players:
            return []
        actions: List[Action] = []
        if self.can_challenge_last_card:
            if player == self._offender:
                actions.append(CallLateLastCard())
            else:
                actions.append(ChallengeLastCard())
        if player != self.active_player:
            return actions

        if self._state is GameState.PLAY_CARD:
            actions.extend(PlayCard(card=c) for c in self.playable_cards())
            actions.append(DrawCard())
        elif self._state is GameState.PLAY_DRAWN_CARD:
            actions.append(PlayDrawnCard(play=True))
            actions.append(PlayDrawnCard(play=False))
        elif self._state is GameState.CHANGE_COLOR:
            actions.extend(ChooseColor(color=c) for c in PLAYABLE_COLORS)
        elif self._state is GameState.CHALLENGE_DRAW_FOUR:
            actions.append(ResolveDrawFour(challenge=False))
            actions.append(ResolveDrawFour(challenge=True))
        if self.can_call_last_card:
            actions.append(CallLastCard())
        return actions

    # ------------------------------------------------------------------
    # Commands

    def apply(self, action: Action, player: int) -> bool:
        """Apply an action on behalf of player."""
        if isinstance(action, ChallengeLastCard):
            return self.challenge_last_card(player)
        if isinstance(action, CallLateLastCard):
            if player != self._offender:
                return self._reject("late call", f"player {player} is not open to a challenge")
            return self.call_late_last_card()
        if player != self.active_player:
            return self._reject(type(action).__name__, f"player {player} is not active")

        if isinstance(action, PlayCard):
            return self.play_card(action.card)
        if isinstance(action, DrawCard):
            return self.draw_card()
        if isinstance(action, PlayDrawnCard):
            return self.play_drawn_card(action.play)
        if isinstance(action, CallLastCard):
            return self.call_last_card()
        if isinstance(action, ChooseColor):
            return self.change_color(action.color)
        if isinstance(action, ResolveDrawFour):
            return self.challenge_draw_four(action.challenge)
        return self._reject("apply", f"unknown action {action!r}")

    def start_round(self) -> bool:
        """Deal, flip the starting card and apply its effect."""
        if self._state is not GameState.ROUND_START:
            return self._reject("start round", f"state is {self._state.value}")
        self._clear_round_flags()
        self._draw_pile.shuffle()
        for player in range(self.num_players):
            self._draw_cards(player, INITIAL_HAND_SIZE)

        starter = self._draw_pile.draw()
        # A Wild Draw Four cannot open a round: nobody could challenge it.
        while starter is not None and starter.rank is Rank.WILD_DRAW_FOUR:
            self._draw_pile.add_card(starter)
            self._draw_pile.shuffle()
            starter = self._draw_pile.draw()
        if starter is None:
            # Unreachable with a full deck and at most MAX_PLAYERS hands.
            raise RuntimeError("Stock exhausted while dealing")
        self._discard.push(starter)

        first = self._choose_first_player(self.num_players) % self.num_players
        self._counter.reset(first)
        self._opening = True
        logger.info(
            "Round started: %d players, starter %s, player %d first",
            self.num_players,
            starter,
            first,
        )
        self._apply_top_card()
        return True

    def play_card(self, card: Card) -> bool:
        """Play card from the active player's hand."""
        if self._state is not GameState.PLAY_CARD:
            return self._reject("play card", f"state is {self._state.value}")
        player = self.active_player
        if not isinstance(card, Card) or card not in self._hands[player]:
            return self._reject("play card", f"{card} is not in player {player}'s hand")
        if not self._discard.is_playable(card):
            return self._reject("play card", f"{card} does not match {self.top_card}")
        self._close_challenge_window(player)
        self._play(player, card)
        return True

    def draw_card(self) -> bool:
        """Draw one card for the active player."""
        if self._state is not GameState.PLAY_CARD:
            return self._reject("draw card", f"state is {self._state.value}")
        player = self.active_player
        self._close_challenge_window(player)
        self._start_move(player, GameMove.DRAW_CARD)
        drawn = self._draw_cards(player, 1)
        self._record_draw(player, drawn)
        logger.debug("Player %d drew %s", player, drawn)
        if drawn and self._discard.is_playable(drawn[0]):
            self._drawn_card = drawn[0]
            self._state = GameState.PLAY_DRAWN_CARD
        else:
            self._counter.advance()
            self._begin_turn()
        return True

    def play_drawn_card(self, play: bool) -> bool:
        """Play or keep the card just drawn."""
        if self._state is not GameState.PLAY_DRAWN_CARD or self._drawn_card is None:
            return self._reject("play drawn card", f"state is {self._state.value}")
        player = self.active_player
        card = self._drawn_card
        self._drawn_card = None
        self._close_challenge_window(player)
        if play:
            self._play(player, card)
        else:
            self._last_move = GameMove.KEEP_CARD
            self._last_played = player
            self._last_attacked = None
            logger.debug("Player %d kept %s", player, card)
            self._counter.advance()
            self._begin_turn()
        return True

    def call_last_card(self) -> bool:
        """Declare "UNO" for the active player."""
        if not self.can_call_last_card:
            return self._reject("call last card", "not eligible")
        player = self.active_player
        self._called_last_card = True
        self._start_move(player, GameMove.CALL_LAST_CARD)
        logger.debug("Player %d called last card", player)
        return True

    def call_late_last_card(self) -> bool:
        """Let the offender declare late, closing the challenge window."""
        if not self.can_challenge_last_card:
            return self._reject("late call", "no challenge window is open")
        offender = self._offender
        self._offender = None
        self._start_move(offender, GameMove.LATE_CALL)
        logger.debug("Player %d called last card late", offender)
        return True

    def challenge_last_card(self, challenger: int) -> bool:
        """Penalize the player who went down to one card without calling."""
        if not self.can_challenge_last_card:
            return self._reject("challenge", "no challenge window is open")
        offender = self._offender
        if (
            not isinstance(challenger, int)
            or not 0 <= challenger < self.num_players
            or challenger == offender
        ):
            return self._reject("challenge", f"player {challenger} cannot challenge")
        self._offender = None
        self._start_move(challenger, GameMove.CHALLENGE)
        self._last_attacked = offender
        self._record_draw(offender, self._draw_cards(offender, LAST_CARD_PENALTY))
        logger.debug("Player %d caught player %d", challenger, offender)
        return True

    def change_color(self, color: Color) -> bool:
        """Nominate the color for the wild card on top of the discard pile."""
        if self._state is not GameState.CHANGE_COLOR:
            return self._reject("change color", f"state is {self._state.value}")
        if not self._discard.set_active_color(color):
            return self._reject("change color", f"{color!r} is not a playable color")
        player = self.active_player
        self._close_challenge_window(player)
        self._start_move(player, GameMove.CHANGE_COLOR)
        logger.debug("Player %d chose %s", player, self.active_color.value)
        if self._pending_draw_four:
            self._draw_four_player = player
            self._counter.advance()
            self._state = GameState.CHALLENGE_DRAW_FOUR
        elif self._opening:
            # A wild starter: the starting player names the color and plays.
            self._begin_turn()
        else:
            self._counter.advance()
            self._begin_turn()
        return True

    def challenge_draw_four(self, challenge: bool) -> bool:
        """Accept or challenge the Wild Draw Four played on the active player.

        The challenge succeeds if the player of the Wild Draw Four held a
        card of the color in effect before it was played.
        """
        if self._state is not GameState.CHALLENGE_DRAW_FOUR:
            return self._reject("challenge draw four", f"state is {self._state.value}")
        victim = self.active_player
        accused = self._draw_four_player
        self._close_challenge_window(victim)
        self._pending_draw_four = False
        self._draw_four_player = None
        self._last_played = accused
        self._last_attacked = victim
        self._last_drawn = []

        if not challenge:
            self._last_move = GameMove.DRAW_FOUR
            self._record_draw(victim, self._draw_cards(victim, 4))
            self._counter.advance()
        elif self._hands[accused].contains_color(self._discard.pre_wild_color):
            self._last_move = GameMove.DRAW_FOUR_CHALLENGE_SUCCESS
            self._record_draw(accused, self._draw_cards(accused, 4))
        else:
            self._last_move = GameMove.DRAW_FOUR_CHALLENGE_FAIL
            self._record_draw(
                victim, self._draw_cards(victim, 4 + DRAW_FOUR_CHALLENGE_PENALTY)
            )
            self._counter.advance()
        logger.debug("Draw four by player %d on player %d: %s", accused, victim, self._last_move.value)
        self._begin_turn()
        return True

    def reset_round(self) -> bool:
        """Collect every card back into the stock, keeping the scores."""
        if self._state is not GameState.ROUND_OVER:
            return self._reject("reset round", f"state is {self._state.value}")
        self._collect_cards()
        self.scoreboard.new_round()
        self._state = GameState.ROUND_START
        self._clear_round_flags()
        return True

    def reset_game(self) -> bool:
        """Collect every card and zero all scores."""
        if self._state not in (GameState.ROUND_OVER, GameState.ROUND_START):
            return self._reject("reset game", f"state is {self._state.value}")
        self._collect_cards()
        self.scoreboard.reset()
        self._state = GameState.ROUND_START
        self._clear_round_flags()
        logger.info("Game reset")
        return True

    # ------------------------------------------------------------------
    # Internals

    def _reject(self, command: str, reason: str) -> bool:
        logger.debug("Rejected %s: %s", command, reason)
        return False

    def _start_move(self, player: Optional[int], move: GameMove) -> None:
        self._last_move = move
        self._last_played = player
        self._last_attacked = None
        self._last_drawn = []
        self._last_drawer = None

    def _record_draw(self, player: int, drawn: List[Card]) -> None:
        self._last_drawn = drawn
        self._last_drawer = player

    def _begin_turn(self) -> None:
        self._state = GameState.PLAY_CARD
        self._opening = False
        self._pending_draw_four = False
        self._called_last_card = False

    def _close_challenge_window(self, actor: int) -> None:
        if self._offender is not None and actor != self._offender:
            logger.debug("Challenge window on player %d closed", self._offender)
            self._offender = None

    def _play(self, player: int, card: Card) -> None:
        hand = self._hands[player]
        hand.remove(card)
        self._discard.push(card)
        self._start_move(player, GameMove.PLAY_CARD)
        logger.debug("Player %d played %s", player, card)

        if not hand:
            self._end_round(player)
            return
        if len(hand) == 1 and not self._called_last_card:
            self._offender = player
            logger.debug("Player %d is down to one card without calling", player)
        self._apply_top_card()

    def _apply_top_card(self) -> None:
        """Apply the effect of the top discard and hand the turn on.

        The card counts as played by the active player. On the opening card
        a numeral leaves the starting player active.
        """
        top = self._discard.top
        rank = top.rank
        if rank.is_wild:
            self._pending_draw_four = rank is Rank.WILD_DRAW_FOUR
            self._state = GameState.CHANGE_COLOR
            return

        if rank is Rank.SKIP:
            self._last_move = GameMove.SKIP
            self._last_attacked = self._counter.next_player()
            self._counter.advance(2)
        elif rank is Rank.REVERSE:
            self._last_move = GameMove.REVERSE
            self._counter.reverse()
            if self.num_players == 2:
                self._last_attacked = self._counter.next_player()
                self._counter.advance(2)
            else:
                self._counter.advance()
        elif rank is Rank.DRAW_TWO:
            victim = self._counter.next_player()
            self._last_move = GameMove.DRAW_TWO
            self._last_attacked = victim
            self._record_draw(victim, self._draw_cards(victim, 2))
            self._counter.advance(2)
        elif not self._opening:
            self._counter.advance()
        self._begin_turn()

    def _draw_cards(self, player: int, count: int) -> List[Card]:
        """Move up to count cards from the stock into player's hand."""
        drawn: List[Card] = []
        for _ in range(count):
            if self._draw_pile.is_empty() and not self._replenish_draw_pile():
                logger.warning(
                    "Stock exhausted: player %d drew %d of %d cards",
                    player,
                    len(drawn),
                    count,
                )
                break
            card = self._draw_pile.draw()
            self._hands[player].add(card)
            drawn.append(card)
        return drawn

    def _replenish_draw_pile(self) -> bool:
        old_cards = self._discard.clear_except_top()
        if not old_cards:
            return False
        self._draw_pile.add_cards(old_cards)
        self._draw_pile.shuffle()
        logger.debug("Recycled %d discards into the stock", len(old_cards))
        return True

    def _end_round(self, winner: int) -> None:
        self._state = GameState.ROUND_OVER
        self._round_winner = winner
        self._offender = None
        for player, hand in enumerate(self._hands):
            if player != winner:
                self.scoreboard.add_score(winner, player, hand.value)
        gained = self.scoreboard.lines()[winner].gained
        logger.info("Round over: player %d won %d points", winner, gained)
        if self.scoreboard.goal_reached:
            logger.info("Game over: player %d leads with %d", winner, self.scoreboard.totals[winner])

    def _collect_cards(self) -> None:
        for hand in self._hands:
            self._draw_pile.add_cards(hand.clear())
        self._draw_pile.add_cards(self._discard.clear())
