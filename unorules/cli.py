"""CLI entry point."""

from __future__ import annotations

import logging
from typing import Optional

import typer
from dotenv import load_dotenv

from unorules.engine.rules import MAX_PLAYERS, MIN_PLAYERS

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(help="UNO rules engine with a hot-seat table")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _configure_logging(level: str) -> None:
    level = level.upper()
    if level not in LOG_LEVELS:
        raise typer.BadParameter(
            f"Unknown log level: {level}. Use one of {', '.join(LOG_LEVELS)}."
        )
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def play(
    players: int = typer.Option(
        4,
        "--players",
        "-n",
        envvar="UNO_PLAYERS",
        help=f"Number of seats ({MIN_PLAYERS}-{MAX_PLAYERS})",
    ),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", envvar="UNO_SEED", help="Random seed"),
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        "-l",
        envvar="UNO_LOG_LEVEL",
        help="Logging level: DEBUG, INFO, WARNING or ERROR",
    ),
) -> None:
    """Play a hot-seat UNO game to 500 points."""
    from unorules.agents.human_agent import HumanAgent
    from unorules.orchestration.game_runner import GameRunner

    _configure_logging(log_level)
    if not MIN_PLAYERS <= players <= MAX_PLAYERS:
        raise typer.BadParameter(f"Players must be between {MIN_PLAYERS} and {MAX_PLAYERS}.")

    agents = [HumanAgent(name=f"Human_{i}") for i in range(players)]
    runner = GameRunner(agents, seed=seed)
    result = runner.run()
    typer.echo("Final scores:")
    for pid, score in enumerate(result.scores):
        typer.echo(f"  player {pid}: {score}")
    if result.winner is None:
        typer.echo("Winner: None (game stopped)")
    else:
        typer.echo(f"Winner: player {result.winner}")
    typer.echo(f"Rounds: {result.num_rounds}  Turns: {result.num_turns}")


@app.command()
def rules() -> None:
    """Print the card point values and the winning score."""
    from unorules.engine import GOAL_SCORE, Rank

    typer.echo(f"First player to {GOAL_SCORE} points wins.")
    for rank in Rank:
        typer.echo(f"  {rank.value:>15}: {rank.points}")


if __name__ == "__main__":
    app()
