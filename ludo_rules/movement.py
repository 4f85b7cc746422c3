"""
Movement engine: legality and effect of advancing a token by N steps.

All functions are pure. A move that would overshoot the center has no legal
destination; ``compute_next_position`` reports it by returning the current
position unchanged and ``get_valid_moves`` drops it.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Optional, Tuple

from loguru import logger

from .board import CENTER, RING, home_path_index, is_center, is_safe_cell, ring_index
from .config import config
from .types import MoveKind, MoveOption, Player, Position, Token


def can_exit_base(token: Token, dice_value: int) -> bool:
    return not token.is_out and dice_value == config.ENTRY_ROLL


def is_token_completed(position: Optional[Position]) -> bool:
    return is_center(position)


def _steps_to_entry(current_index: int, entry_index: int) -> int:
    # The entry is always ahead in traversal order, even when its index is
    # numerically smaller than the current one. A token already on its own
    # entry cell gets 0 here and turns into its lane rather than lapping the ring.
    return (entry_index - current_index) % config.RING_SIZE


def compute_next_position(
    current_position: Optional[Position], steps: int, player: Player
) -> Optional[Position]:
    """Map (current cell, step count) to the landing cell for ``player``.

    Returns ``current_position`` unchanged when the move has no legal
    destination (overshoot past the center, unknown cell, no steps).
    """
    if current_position is None or steps <= 0:
        return current_position

    lane = player.home_path
    lane_length = len(lane)

    current_index = ring_index(current_position)
    if current_index is not None:
        entry_index = ring_index(player.home_entry_tile)
        if entry_index is None:
            logger.debug(f"Home entry {player.home_entry_tile} of {player.id} is off the ring")
            return current_position

        to_entry = _steps_to_entry(current_index, entry_index)
        if steps < to_entry:
            return RING[(current_index + steps) % config.RING_SIZE]

        remaining = steps - to_entry
        if remaining == 0:
            return player.home_entry_tile
        if remaining <= lane_length:
            return lane[remaining - 1]
        if remaining == lane_length + 1:
            return CENTER
        return current_position

    lane_index = home_path_index(current_position, player)
    if lane_index is None:
        logger.debug(f"Position {current_position} not on any path of {player.id}")
        return current_position

    new_index = lane_index + steps
    if new_index < lane_length:
        return lane[new_index]
    if new_index == lane_length:
        return CENTER
    return current_position


def move_token(token: Token, dice_value: int, player: Player) -> Token:
    """Return a new token advanced by ``dice_value``; the input is untouched."""
    if token.is_completed:
        return token

    if not token.is_out:
        if not can_exit_base(token, dice_value):
            return token
        start = player.start_tile
        return replace(
            token,
            position=start,
            is_out=True,
            is_safe=is_safe_cell(start),
            is_completed=False,
        )

    new_position = compute_next_position(token.position, dice_value, player)
    completed = is_token_completed(new_position)
    return replace(
        token,
        position=new_position,
        is_safe=completed or is_safe_cell(new_position),
        is_completed=completed,
    )


def get_valid_moves(
    token: Token, dice_value: int, player: Player
) -> Tuple[MoveOption, ...]:
    if token.is_completed:
        return ()

    if can_exit_base(token, dice_value):
        return (
            MoveOption(
                kind=MoveKind.EXIT_BASE,
                token_id=token.id,
                origin=None,
                destination=player.start_tile,
            ),
        )

    if not token.is_out:
        return ()

    destination = compute_next_position(token.position, dice_value, player)
    if destination is None or destination == token.position:
        return ()
    return (
        MoveOption(
            kind=MoveKind.ADVANCE,
            token_id=token.id,
            origin=token.position,
            destination=destination,
        ),
    )


def has_valid_moves(player: Player, dice_value: int) -> bool:
    return any(get_valid_moves(t, dice_value, player) for t in player.tokens)


def distance_to_complete(token: Token, player: Player) -> int:
    """Steps left before ``token`` reaches the center; -1 when not on a path."""
    if not token.is_out or token.is_completed or token.position is None:
        return -1

    lane_length = len(player.home_path)
    current_index = ring_index(token.position)
    if current_index is not None:
        entry_index = ring_index(player.home_entry_tile)
        if entry_index is None:
            return -1
        return _steps_to_entry(current_index, entry_index) + lane_length + 1

    lane_index = home_path_index(token.position, player)
    if lane_index is not None:
        return lane_length - lane_index
    return -1
