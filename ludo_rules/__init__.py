"""
Ludo rules engine.
Deterministic, immutable turn and movement rules for four-player Ludo.
"""

from .board import CENTER, RING, SAFE_CELLS, color_grid, is_safe_cell, occupancy_grid
from .capture import can_capture, resolve_captures
from .config import config
from .dice import Dice, classify, roll_stats
from .game import MoveOutcome, extra_turn_granted, handle_dice_roll, handle_move
from .movement import (
    can_exit_base,
    compute_next_position,
    distance_to_complete,
    get_valid_moves,
    has_valid_moves,
    move_token,
)
from .simulator import FirstMoveChooser, RandomMoveChooser, Simulator
from .state import advance_turn, check_and_update_game_end, initialize_game
from .turn import (
    Action,
    TurnState,
    TurnSummary,
    initial_turn_state,
    is_action_allowed,
    process_turn_action,
    turn_summary,
)
from .types import (
    ActionType,
    DiceResult,
    GameState,
    MoveKind,
    MoveOption,
    Player,
    PlayerColor,
    Position,
    Token,
    TurnPhase,
)

__all__ = [
    "config",
    "Position",
    "Token",
    "Player",
    "PlayerColor",
    "GameState",
    "DiceResult",
    "MoveKind",
    "MoveOption",
    "TurnPhase",
    "ActionType",
    "RING",
    "CENTER",
    "SAFE_CELLS",
    "is_safe_cell",
    "occupancy_grid",
    "color_grid",
    "Dice",
    "classify",
    "roll_stats",
    "can_exit_base",
    "compute_next_position",
    "move_token",
    "get_valid_moves",
    "has_valid_moves",
    "distance_to_complete",
    "can_capture",
    "resolve_captures",
    "initialize_game",
    "advance_turn",
    "check_and_update_game_end",
    "MoveOutcome",
    "extra_turn_granted",
    "handle_dice_roll",
    "handle_move",
    "Action",
    "TurnState",
    "TurnSummary",
    "initial_turn_state",
    "process_turn_action",
    "is_action_allowed",
    "turn_summary",
    "Simulator",
    "FirstMoveChooser",
    "RandomMoveChooser",
]
