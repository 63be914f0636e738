"""Full-game tests through the runner with scripted seats."""

from conftest import BLUE_FIVE, SKIPS, cards, conserved
from unorules.engine import (
    CallLastCard,
    CallLateLastCard,
    Card,
    ChallengeLastCard,
    ChooseColor,
    Color,
    DrawCard,
    GameEngine,
    GameState,
    PlayCard,
    PlayDrawnCard,
    Rank,
    ResolveDrawFour,
)
from unorules.orchestration import GameRunner


class ScriptedAgent:
    """Plays the first legal card; optionally forgets to call UNO."""

    def __init__(self, name: str, calls_uno: bool = True, challenges_draw_four: bool = False):
        self.name = name
        self._calls_uno = calls_uno
        self._challenges_draw_four = challenges_draw_four

    def get_action(self, player_view, legal_actions, player_id):
        preference = [ChallengeLastCard, CallLateLastCard]
        if self._calls_uno:
            preference.append(CallLastCard)
        preference.extend([PlayCard, PlayDrawnCard, ChooseColor])
        for kind in preference:
            for action in legal_actions:
                if isinstance(action, kind):
                    return action
        for action in legal_actions:
            if isinstance(action, ResolveDrawFour) and action.challenge == self._challenges_draw_four:
                return action
        for action in legal_actions:
            if isinstance(action, DrawCard):
                return action
        return None


class PassingAgent:
    """Always passes, leaving the runner to pick a safe action."""

    name = "passer"

    def get_action(self, player_view, legal_actions, player_id):
        return None


def _agents(n: int):
    return [
        ScriptedAgent(f"seat_{i}", calls_uno=i % 2 == 0, challenges_draw_four=i % 3 == 0)
        for i in range(n)
    ]


def test_run_game_to_goal() -> None:
    runner = GameRunner(_agents(4), seed=11)
    result = runner.run()
    assert result.finished
    assert result.winner is not None
    assert max(result.scores) >= 500
    assert result.scores[result.winner] == max(result.scores)
    assert result.num_rounds == len(result.round_winners)
    assert runner.engine.is_game_over
    assert runner.engine.state is GameState.ROUND_OVER


def test_deck_conserved_and_only_legal_plays_accepted() -> None:
    engine = GameEngine(3, seed=5)
    runner = GameRunner(_agents(3), engine=engine)
    for _ in range(3):
        if engine.state is GameState.ROUND_OVER:
            assert engine.reset_round()
        assert engine.start_round()
        steps = 0
        while engine.state is not GameState.ROUND_OVER and steps < 2000:
            if engine.state is GameState.PLAY_CARD:
                playable = engine.playable_cards()
                for card in engine.hand(engine.active_player):
                    if card not in playable:
                        assert not engine.play_card(card)
            runner.step()
            steps += 1
            assert conserved(engine)
        assert engine.state is GameState.ROUND_OVER
        assert conserved(engine)


def test_passing_seats_still_progress() -> None:
    runner = GameRunner([PassingAgent(), PassingAgent()], seed=2, max_turns=200)
    result = runner.run()
    assert result.num_turns <= 200
    assert conserved(runner.engine)


def test_round_scores_add_up() -> None:
    engine = GameEngine(4, seed=9)
    runner = GameRunner(_agents(4), engine=engine)
    engine.start_round()
    while engine.state is not GameState.ROUND_OVER:
        runner.step()
    winner = engine.round_winner
    lines = engine.scores
    losers_value = sum(
        sum(c.points for c in engine.hand(p)) for p in range(4) if p != winner
    )
    assert len(engine.hand(winner)) == 0
    assert lines[winner].gained == losers_value
    assert sum(line.contributed for line in lines) == losers_value
    assert engine.is_game_over == (lines[winner].total >= 500)


def test_other_seats_challenge_before_late_call(make_engine) -> None:
    last_skip = Card(Color.GREEN, Rank.SKIP, 1)
    green_three = Card(Color.GREEN, Rank.THREE)
    penalty = [Card(Color.RED, Rank.NINE), Card(Color.RED, Rank.EIGHT)]
    p1 = cards(Color.YELLOW, "1", "2", "5", "6", "7", "8", "9")
    engine = make_engine([SKIPS + [last_skip, green_three], p1], BLUE_FIVE, extra=penalty)
    for card in SKIPS + [last_skip]:
        assert engine.play_card(card)
    # Player 0 is both the offender and the seat to move.
    assert engine.active_player == 0
    assert engine.last_card_offender == 0

    runner = GameRunner([ScriptedAgent("a"), ScriptedAgent("b")], engine=engine)
    runner.step()
    assert engine.state is GameState.PLAY_CARD
    assert set(engine.hand(0)) == set(penalty)
    assert engine.top_card == green_three
    assert engine.active_player == 1
