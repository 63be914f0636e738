"""Human agent - reads actions from terminal."""

from unorules.engine import (
    Action,
    CallLastCard,
    CallLateLastCard,
    ChallengeLastCard,
    ChooseColor,
    DrawCard,
    GameMove,
    PlayCard,
    PlayDrawnCard,
    PlayerView,
    ResolveDrawFour,
)


def describe_action(action: Action) -> str:
    """One-line label for an action."""
    if isinstance(action, PlayCard):
        return f"PLAY {action.card}"
    if isinstance(action, DrawCard):
        return "DRAW"
    if isinstance(action, PlayDrawnCard):
        return "PLAY drawn card" if action.play else "KEEP drawn card"
    if isinstance(action, CallLastCard):
        return "CALL UNO"
    if isinstance(action, CallLateLastCard):
        return "CALL UNO (late)"
    if isinstance(action, ChallengeLastCard):
        return "CHALLENGE missing UNO call"
    if isinstance(action, ChooseColor):
        return f"COLOR {action.color.value}"
    if isinstance(action, ResolveDrawFour):
        return "CHALLENGE draw four" if action.challenge else "ACCEPT draw four"
    return repr(action)


def describe_last_move(pv: PlayerView) -> str:
    """Summarize the last move the way a table announcer would."""
    move = pv.last_move
    actor = f"Player {pv.last_played}"
    target = f"player {pv.last_attacked}"
    if move is GameMove.NONE:
        return f"Round start: {pv.top_discard} turned up."
    if move is GameMove.PLAY_CARD:
        return f"{actor} played {pv.top_discard}."
    if move is GameMove.DRAW_CARD:
        return f"{actor} drew a card."
    if move is GameMove.KEEP_CARD:
        return f"{actor} kept the drawn card."
    if move is GameMove.CALL_LAST_CARD:
        return f"{actor} called UNO."
    if move is GameMove.LATE_CALL:
        return f"{actor} called UNO late."
    if move is GameMove.CHALLENGE:
        return f"{actor} caught {target}!"
    if move is GameMove.SKIP:
        return f"{pv.top_discard}: {target} was skipped."
    if move is GameMove.REVERSE:
        return f"{pv.top_discard}: play is now {pv.direction.value}."
    if move is GameMove.DRAW_TWO:
        return f"{pv.top_discard}: {target} draws two."
    if move is GameMove.CHANGE_COLOR:
        return f"{actor} changed the color to {pv.active_color.value}."
    if move is GameMove.DRAW_FOUR:
        return f"{target.capitalize()} drew four."
    if move is GameMove.DRAW_FOUR_CHALLENGE_SUCCESS:
        return f"{target.capitalize()} challenged. Challenge successful!"
    if move is GameMove.DRAW_FOUR_CHALLENGE_FAIL:
        return f"{target.capitalize()} challenged. Challenge failed!"
    return move.value


class HumanAgent:
    """Agent that prompts the human for input via terminal."""

    def __init__(self, name: str = "human"):
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def get_action(
        self,
        player_view: PlayerView,
        legal_actions: list[Action],
        player_id: int,
    ) -> Action | None:
        if not legal_actions:
            return None
        optional = all(isinstance(a, (CallLateLastCard, ChallengeLastCard)) for a in legal_actions)

        print(f"\n--- {self._name} (player {player_id}) ---")
        print(describe_last_move(player_view))
        if player_view.last_drawn_cards:
            print("You drew:", " ".join(str(c) for c in player_view.last_drawn_cards))
        print("Your hand:", " ".join(str(c) for c in player_view.my_hand))
        top = player_view.top_discard
        if top is not None and top.is_wild and player_view.active_color is not None:
            print(f"Top discard: {top} ({player_view.active_color.value})")
        else:
            print("Top discard:", top)
        counts = ", ".join(
            f"{pid}: {n}" for pid, n in player_view.num_cards_per_player.items() if pid != player_id
        )
        print(f"Other players: {counts}")
        print("\nLegal actions:")
        for i, a in enumerate(legal_actions):
            print(f"  {i}: {describe_action(a)}")
        if optional:
            print("  (press enter to pass)")

        while True:
            try:
                raw = input("Enter number: ").strip()
                if optional and not raw:
                    return None
                idx = int(raw)
                if 0 <= idx < len(legal_actions):
                    return legal_actions[idx]
            except ValueError:
                pass
            except EOFError:
                return None
            print("Invalid. Try again.")
