"""Tests for the CLI and the terminal seat."""

from typer.testing import CliRunner

from conftest import BLUE_FIVE, GREEN_HAND, YELLOW_HAND
from unorules.agents.human_agent import HumanAgent, describe_action, describe_last_move
from unorules.cli import app
from unorules.engine import (
    CallLateLastCard,
    Card,
    ChallengeLastCard,
    ChooseColor,
    Color,
    DrawCard,
    PlayCard,
    PlayDrawnCard,
    Rank,
    ResolveDrawFour,
)

runner = CliRunner()


def test_rules_command() -> None:
    result = runner.invoke(app, ["rules"])
    assert result.exit_code == 0
    assert "500" in result.output
    assert "wild_draw_four" in result.output


def test_play_rejects_bad_player_count() -> None:
    result = runner.invoke(app, ["play", "--players", "1"])
    assert result.exit_code != 0


def test_play_reads_player_count_from_env() -> None:
    result = runner.invoke(app, ["play"], env={"UNO_PLAYERS": "11"})
    assert result.exit_code != 0


def test_play_rejects_unknown_log_level() -> None:
    result = runner.invoke(app, ["play", "--log-level", "chatty"])
    assert result.exit_code != 0


def test_describe_action() -> None:
    assert describe_action(PlayCard(card=BLUE_FIVE)) == "PLAY blue_5"
    assert describe_action(DrawCard()) == "DRAW"
    assert describe_action(PlayDrawnCard(play=False)) == "KEEP drawn card"
    assert describe_action(ChooseColor(color=Color.RED)) == "COLOR red"
    assert describe_action(ResolveDrawFour(challenge=True)) == "CHALLENGE draw four"


def test_human_agent_picks_numbered_action(make_engine, monkeypatch, capsys) -> None:
    engine = make_engine([GREEN_HAND, YELLOW_HAND], BLUE_FIVE)
    answers = iter(["x", "5", "0"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))
    agent = HumanAgent(name="alice")
    legal = engine.legal_actions(0)
    assert agent.get_action(engine.view(0), legal, 0) == DrawCard()
    out = capsys.readouterr().out
    assert "Round start: blue_5 turned up." in out
    assert out.count("Invalid. Try again.") == 2


def test_human_agent_may_pass_optional_action(make_engine, monkeypatch) -> None:
    engine = make_engine([GREEN_HAND, YELLOW_HAND], BLUE_FIVE)
    monkeypatch.setattr("builtins.input", lambda prompt="": "")
    agent = HumanAgent()
    assert agent.get_action(engine.view(1), [ChallengeLastCard()], 1) is None
    # The active seat may pass on a late call too.
    assert agent.get_action(engine.view(0), [CallLateLastCard()], 0) is None


def test_describe_last_move_after_skip(make_engine) -> None:
    engine = make_engine([GREEN_HAND, YELLOW_HAND], Card(Color.RED, Rank.SKIP))
    assert describe_last_move(engine.view(0)) == "red_skip: player 1 was skipped."
