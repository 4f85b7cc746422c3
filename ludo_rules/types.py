from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class PlayerColor(Enum):
    """Available player colors, in turn order."""

    RED = "red"
    GREEN = "green"
    BLUE = "blue"
    YELLOW = "yellow"


class TurnPhase(str, Enum):
    WAITING_FOR_ROLL = "WAITING_FOR_ROLL"
    WAITING_FOR_MOVE = "WAITING_FOR_MOVE"
    TURN_END = "TURN_END"


class ActionType(str, Enum):
    ROLL_DICE = "ROLL_DICE"
    MAKE_MOVE = "MAKE_MOVE"
    END_TURN = "END_TURN"


class MoveKind(str, Enum):
    EXIT_BASE = "exit_base"
    ADVANCE = "move"


@dataclass(frozen=True, slots=True)
class Position:
    row: int
    col: int

    def to_dict(self) -> dict:
        return {"row": self.row, "col": self.col}


@dataclass(frozen=True, slots=True)
class Token:
    """A single token. Holds state only.

    ``position`` is ``None`` while the token sits in its base. Rule logic
    (destinations, completion, captures) lives in the movement and capture
    modules.
    """

    id: str
    position: Optional[Position] = None
    is_out: bool = False
    is_safe: bool = False
    is_completed: bool = False

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "position": self.position.to_dict() if self.position else None,
            "is_out": self.is_out,
            "is_safe": self.is_safe,
            "is_completed": self.is_completed,
        }


@dataclass(frozen=True, slots=True)
class Player:
    id: str
    color: PlayerColor
    tokens: Tuple[Token, ...]
    start_tile: Position
    home_entry_tile: Position
    home_path: Tuple[Position, ...]

    def token_by_id(self, token_id: str) -> Optional[Token]:
        for token in self.tokens:
            if token.id == token_id:
                return token
        return None

    def has_won(self) -> bool:
        return bool(self.tokens) and all(t.is_completed for t in self.tokens)


@dataclass(frozen=True, slots=True)
class DiceResult:
    value: int
    is_six: bool
    allows_base_exit: bool
    grants_extra_turn_candidate: bool
    is_valid: bool


@dataclass(frozen=True, slots=True)
class MoveOption:
    kind: MoveKind
    token_id: str
    origin: Optional[Position]
    destination: Position


@dataclass(frozen=True, slots=True)
class CapturedToken:
    player_id: str
    token_id: str
    position: Position


@dataclass(frozen=True, slots=True)
class CaptureEvent:
    capturing_player_id: str
    capture_position: Position
    captured: Tuple[CapturedToken, ...] = ()


@dataclass(frozen=True, slots=True)
class GameState:
    players: Tuple[Player, ...]
    current_player_index: int = 0
    turn_count: int = 0
    winners: Optional[Tuple[str, ...]] = None
    is_game_over: bool = False
    last_dice_roll: Optional[DiceResult] = None
    last_roll_player_id: Optional[str] = None
    last_capture: Optional[CaptureEvent] = None
