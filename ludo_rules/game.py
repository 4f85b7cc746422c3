from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from loguru import logger

from .capture import resolve_captures
from .dice import classify, grants_extra_turn, is_valid_dice_value
from .movement import get_valid_moves, move_token
from .state import (
    check_and_update_game_end,
    current_player,
    replace_current_player,
    replace_players,
)
from .types import (
    CapturedToken,
    CaptureEvent,
    GameState,
    MoveKind,
    Position,
    Token,
)


@dataclass(frozen=True, slots=True)
class MoveOutcome:
    """Result of applying one move. ``token`` is None when nothing moved."""

    game_state: GameState
    token: Optional[Token] = None
    captured: Tuple[CapturedToken, ...] = ()
    extra_turn: bool = False

    @property
    def completed(self) -> bool:
        return self.token is not None and self.token.is_completed


@dataclass(frozen=True, slots=True)
class MoveDetail:
    token_id: str
    current_position: Optional[Position]
    new_position: Optional[Position]
    move_type: MoveKind
    would_capture: bool
    would_complete: bool
    grants_extra_turn: bool


@dataclass(frozen=True, slots=True)
class MovePreview:
    token_id: str
    from_position: Optional[Position]
    to_position: Optional[Position]
    would_complete: bool
    captured_tokens: Tuple[CapturedToken, ...]
    grants_extra_turn: bool


def extra_turn_granted(dice_value: int, captured: bool, completed: bool) -> bool:
    """Six, capture or completion; any one suffices."""
    return grants_extra_turn(dice_value) or captured or completed


def handle_dice_roll(game_state: GameState, dice_value: int) -> GameState:
    """Record a roll for the active player. Turn hand-off is left to the turn machine."""
    if not is_valid_dice_value(dice_value):
        logger.debug(f"Ignoring invalid dice value {dice_value!r}")
        return game_state
    player = current_player(game_state)
    if player is None:
        return game_state
    return replace(
        game_state,
        last_dice_roll=classify(dice_value),
        last_roll_player_id=player.id,
    )


def possible_moves(game_state: GameState, dice_value: int) -> Tuple[Token, ...]:
    """Tokens of the active player that have a legal move for ``dice_value``."""
    if not is_valid_dice_value(dice_value):
        return ()
    player = current_player(game_state)
    if player is None:
        return ()
    return tuple(t for t in player.tokens if get_valid_moves(t, dice_value, player))


def is_valid_move(game_state: GameState, token_id: str, dice_value: int) -> bool:
    return any(t.id == token_id for t in possible_moves(game_state, dice_value))


def _captures_at(game_state: GameState, landing: Optional[Position]) -> Tuple[CapturedToken, ...]:
    player = current_player(game_state)
    return resolve_captures(game_state.players, player.id, landing)[1]


def handle_move(game_state: GameState, token_id: str, dice_value: int) -> MoveOutcome:
    """Move ``token_id`` of the active player, resolve captures and win state.

    Illegal requests give back the input state with ``token`` set to None.
    """
    if not is_valid_move(game_state, token_id, dice_value):
        logger.debug(f"Rejected move of {token_id!r} with dice {dice_value!r}")
        return MoveOutcome(game_state=game_state)

    player = current_player(game_state)
    token = player.token_by_id(token_id)
    moved = move_token(token, dice_value, player)
    tokens = tuple(moved if t.id == token_id else t for t in player.tokens)
    mover = replace(player, tokens=tokens)
    state = replace_current_player(game_state, mover)

    captured: Tuple[CapturedToken, ...] = ()
    if moved.is_out and not moved.is_completed:
        players, captured = resolve_captures(state.players, mover.id, moved.position)
        state = replace_players(state, players)

    if captured:
        state = replace(
            state,
            last_capture=CaptureEvent(
                capturing_player_id=mover.id,
                capture_position=moved.position,
                captured=captured,
            ),
        )
        logger.info(f"{mover.id} captured {len(captured)} token(s) at {moved.position}")
        for item in captured:
            logger.debug(f"{item.token_id} of {item.player_id} sent back to base")
    else:
        state = replace(state, last_capture=None)

    if moved.is_completed:
        logger.info(f"{token_id} reached the center")

    extra = extra_turn_granted(dice_value, bool(captured), moved.is_completed)
    state = check_and_update_game_end(state)
    return MoveOutcome(game_state=state, token=moved, captured=captured, extra_turn=extra)


def detailed_move_options(game_state: GameState, dice_value: int) -> Tuple[MoveDetail, ...]:
    """Every legal move of the active player with its predicted effects."""
    player = current_player(game_state)
    if player is None or not is_valid_dice_value(dice_value):
        return ()

    details: List[MoveDetail] = []
    for token in player.tokens:
        for option in get_valid_moves(token, dice_value, player):
            moved = move_token(token, dice_value, player)
            would_capture = False
            if moved.is_out and not moved.is_completed:
                would_capture = bool(_captures_at(game_state, moved.position))
            details.append(
                MoveDetail(
                    token_id=token.id,
                    current_position=token.position,
                    new_position=moved.position,
                    move_type=option.kind,
                    would_capture=would_capture,
                    would_complete=moved.is_completed,
                    grants_extra_turn=extra_turn_granted(
                        dice_value, would_capture, moved.is_completed
                    ),
                )
            )
    return tuple(details)


def preview_move(
    game_state: GameState, token_id: str, dice_value: int
) -> Optional[MovePreview]:
    if not is_valid_move(game_state, token_id, dice_value):
        return None
    player = current_player(game_state)
    token = player.token_by_id(token_id)
    moved = move_token(token, dice_value, player)

    captured: Tuple[CapturedToken, ...] = ()
    if moved.is_out and not moved.is_completed:
        captured = _captures_at(game_state, moved.position)

    return MovePreview(
        token_id=token_id,
        from_position=token.position,
        to_position=moved.position,
        would_complete=moved.is_completed,
        captured_tokens=captured,
        grants_extra_turn=extra_turn_granted(dice_value, bool(captured), moved.is_completed),
    )
