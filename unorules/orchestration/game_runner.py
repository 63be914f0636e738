"""Game runner: feeds one seat's intent at a time into the engine."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Sequence

from unorules.engine import (
    Action,
    CallLastCard,
    CallLateLastCard,
    ChallengeLastCard,
    DrawCard,
    GameEngine,
    GameState,
)

if TYPE_CHECKING:
    from unorules.agent.protocol import AgentProtocol

logger = logging.getLogger(__name__)

OPTIONAL_ACTIONS = (CallLastCard, CallLateLastCard, ChallengeLastCard)


@dataclass
class GameResult:
    """Result of a completed (or capped) game."""

    winner: Optional[int]
    scores: List[int]
    num_rounds: int
    num_turns: int
    finished: bool = True
    round_winners: List[int] = field(default_factory=list)


class GameRunner:
    """Runs UNO rounds until a player reaches the goal score.

    Seats are asked for an action one at a time, in turn order. When a
    player goes down to one card without calling, every other seat may
    challenge and then the offender is offered a late call, before the
    active seat moves on.
    """

    def __init__(
        self,
        agents: Sequence["AgentProtocol"],
        seed: Optional[int] = None,
        max_turns: int = 20000,
        engine: Optional[GameEngine] = None,
    ):
        self._agents = list(agents)
        self._engine = engine if engine is not None else GameEngine(len(self._agents), seed=seed)
        if self._engine.num_players != len(self._agents):
            raise ValueError("Engine seats and agents do not match")
        self._max_turns = max_turns
        self._num_turns = 0

    @property
    def engine(self) -> GameEngine:
        return self._engine

    def run(self) -> GameResult:
        """Run the game and return the result."""
        engine = self._engine
        num_rounds = 0
        round_winners: List[int] = []

        while not engine.is_game_over and self._num_turns < self._max_turns:
            if engine.state is GameState.ROUND_OVER:
                engine.reset_round()
            engine.start_round()
            num_rounds += 1
            while engine.state is not GameState.ROUND_OVER and self._num_turns < self._max_turns:
                self.step()
            if engine.round_winner is not None:
                round_winners.append(engine.round_winner)

        finished = engine.is_game_over
        if not finished:
            logger.warning("Game stopped after %d turns without a winner", self._num_turns)
        return GameResult(
            winner=engine.scoreboard.leader if finished else None,
            scores=engine.scoreboard.totals,
            num_rounds=num_rounds,
            num_turns=self._num_turns,
            finished=finished,
            round_winners=round_winners,
        )

    def step(self) -> None:
        """Resolve any open last-card challenge, then apply one active-seat action."""
        engine = self._engine
        self._offer_challenge_window()
        if engine.state is GameState.ROUND_OVER:
            return

        pid = engine.active_player
        legal = engine.legal_actions(pid)
        if not legal:
            return
        action = self._agents[pid].get_action(engine.view(pid), legal, pid)
        if action is None or not engine.apply(action, pid):
            if action is not None:
                logger.info("Seat %d chose an illegal action %r", pid, action)
            engine.apply(self._fallback(legal), pid)
        self._num_turns += 1

    def _offer_challenge_window(self) -> None:
        engine = self._engine
        offender = engine.last_card_offender
        if offender is None:
            return
        # Other seats get their chance to catch the offender before any late call.
        seats = [(offender + i) % engine.num_players for i in range(1, engine.num_players + 1)]
        for pid in seats:
            legal = [
                a
                for a in engine.legal_actions(pid)
                if isinstance(a, (CallLateLastCard, ChallengeLastCard))
            ]
            if not legal:
                continue
            action = self._agents[pid].get_action(engine.view(pid), legal, pid)
            if action is not None and engine.apply(action, pid):
                return

    @staticmethod
    def _fallback(legal: List[Action]) -> Action:
        """Pick a safe turn action when a seat passes or errs."""
        for action in legal:
            if isinstance(action, DrawCard):
                return action
        return next(a for a in legal if not isinstance(a, OPTIONAL_ACTIONS))
