from __future__ import annotations

from dataclasses import replace
from typing import List, Optional, Sequence, Tuple

from .board import is_safe_cell
from .types import CapturedToken, Player, Position, Token


def can_capture(opponent_token: Token, landing_position: Optional[Position]) -> bool:
    """True if a token landing on ``landing_position`` sends ``opponent_token`` home."""
    if landing_position is None or opponent_token.position is None:
        return False
    if not opponent_token.is_out or opponent_token.is_completed or opponent_token.is_safe:
        return False
    if is_safe_cell(landing_position):
        return False
    return opponent_token.position == landing_position


def send_to_base(token: Token) -> Token:
    return replace(token, position=None, is_out=False, is_safe=False, is_completed=False)


def resolve_captures(
    players: Sequence[Player],
    moving_player_id: str,
    landing_position: Optional[Position],
) -> Tuple[Tuple[Player, ...], Tuple[CapturedToken, ...]]:
    """Send every capturable opponent token on ``landing_position`` back to base.

    All stacked opponents are resolved in the same pass. Players that lose
    nothing are returned as the same objects.
    """
    captured: List[CapturedToken] = []
    updated: List[Player] = []
    for player in players:
        if player.id == moving_player_id:
            updated.append(player)
            continue

        hit = False
        tokens: List[Token] = []
        for token in player.tokens:
            if can_capture(token, landing_position):
                hit = True
                captured.append(
                    CapturedToken(
                        player_id=player.id,
                        token_id=token.id,
                        position=landing_position,
                    )
                )
                tokens.append(send_to_base(token))
            else:
                tokens.append(token)
        updated.append(replace(player, tokens=tuple(tokens)) if hit else player)

    return tuple(updated), tuple(captured)
