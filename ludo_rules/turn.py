"""
Turn state machine.

    WAITING_FOR_ROLL --ROLL_DICE--> WAITING_FOR_MOVE --MAKE_MOVE--> TURN_END
           ^   \--ROLL_DICE, no legal move------------------------>/   |
           |<---------------- MAKE_MOVE with extra turn                |
           \<---------------- any action (hand-off) -------------------/

``process_turn_action`` takes a ``TurnState`` and an action and returns the
next ``TurnState``. Anything malformed or illegal for the current phase
returns the input object unchanged. The machine has no terminal phase;
callers check ``turn_state.game_state.is_game_over`` after each transition.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Optional, Tuple

from loguru import logger

from .dice import Dice, is_valid_dice_value
from .game import handle_dice_roll, handle_move, possible_moves
from .state import advance_turn, current_player
from .types import ActionType, GameState, PlayerColor, Position, Token, TurnPhase


@dataclass(frozen=True, slots=True)
class Action:
    type: ActionType
    value: Optional[int] = None
    token_id: Optional[str] = None

    @classmethod
    def roll(cls, value: Optional[int] = None) -> "Action":
        return cls(ActionType.ROLL_DICE, value=value)

    @classmethod
    def move(cls, token_id: str) -> "Action":
        return cls(ActionType.MAKE_MOVE, token_id=token_id)

    @classmethod
    def end_turn(cls) -> "Action":
        return cls(ActionType.END_TURN)

    @classmethod
    def parse(cls, raw: Any) -> Optional["Action"]:
        """Build an action from an ``Action`` or a mapping; None if malformed.

        Mappings use ``{"type": "ROLL_DICE", "value": 6}`` /
        ``{"type": "MAKE_MOVE", "token_id": "red_token_1"}`` (``tokenId`` is
        accepted too).
        """
        if isinstance(raw, Action):
            raw_type, value, token_id = raw.type, raw.value, raw.token_id
        elif isinstance(raw, Mapping):
            raw_type, value = raw.get("type"), raw.get("value")
            token_id = raw.get("token_id", raw.get("tokenId"))
        else:
            return None

        try:
            action_type = ActionType(raw_type)
        except (ValueError, TypeError):
            return None
        action = cls(action_type, value=value, token_id=token_id)
        if action.type is ActionType.ROLL_DICE:
            if action.value is not None and not is_valid_dice_value(action.value):
                return None
        elif action.type is ActionType.MAKE_MOVE:
            if not isinstance(action.token_id, str) or not action.token_id:
                return None
        return action


@dataclass(frozen=True, slots=True)
class TurnState:
    game_state: GameState
    phase: TurnPhase = TurnPhase.WAITING_FOR_ROLL
    current_dice_value: Optional[int] = None
    possible_moves: Tuple[Token, ...] = ()
    action_history: Tuple[Action, ...] = ()
    extra_turn_granted: bool = False


_default_dice: Optional[Dice] = None


def default_dice() -> Dice:
    """Process-wide dice used when a caller does not inject one."""
    global _default_dice
    if _default_dice is None:
        _default_dice = Dice.from_config()
    return _default_dice


def initial_turn_state(game_state: GameState) -> TurnState:
    return TurnState(game_state=game_state)


# --- Phase handlers ---


def _on_waiting_for_roll(turn_state: TurnState, action: Action, dice: Optional[Dice]) -> TurnState:
    if action.type is not ActionType.ROLL_DICE:
        return turn_state

    value = action.value if action.value is not None else (dice or default_dice()).roll()
    game_state = handle_dice_roll(turn_state.game_state, value)
    moves = possible_moves(game_state, value)
    phase = TurnPhase.WAITING_FOR_MOVE if moves else TurnPhase.TURN_END

    logger.debug(f"{game_state.last_roll_player_id} rolled {value}: {len(moves)} token(s) can move")

    return TurnState(
        game_state=game_state,
        phase=phase,
        current_dice_value=value,
        possible_moves=moves,
        action_history=turn_state.action_history + (replace(action, value=value),),
        extra_turn_granted=False,
    )


def _on_waiting_for_move(turn_state: TurnState, action: Action, dice: Optional[Dice]) -> TurnState:
    if action.type is not ActionType.MAKE_MOVE:
        return turn_state
    if not any(t.id == action.token_id for t in turn_state.possible_moves):
        logger.debug(f"Token {action.token_id!r} is not a possible move")
        return turn_state

    outcome = handle_move(turn_state.game_state, action.token_id, turn_state.current_dice_value)
    if outcome.token is None:
        return turn_state

    extra = outcome.extra_turn
    if extra:
        logger.debug(f"Extra turn for {outcome.game_state.last_roll_player_id}")
    return TurnState(
        game_state=outcome.game_state,
        phase=TurnPhase.WAITING_FOR_ROLL if extra else TurnPhase.TURN_END,
        current_dice_value=None if extra else turn_state.current_dice_value,
        possible_moves=(),
        action_history=turn_state.action_history + (action,),
        extra_turn_granted=extra,
    )


def _on_turn_end(turn_state: TurnState, action: Action, dice: Optional[Dice]) -> TurnState:
    if turn_state.extra_turn_granted:
        return TurnState(
            game_state=turn_state.game_state,
            action_history=turn_state.action_history,
        )

    game_state = replace(
        advance_turn(turn_state.game_state),
        last_dice_roll=None,
        last_roll_player_id=None,
        last_capture=None,
    )
    logger.debug(f"Turn {game_state.turn_count}: player {game_state.current_player_index} to play")
    return TurnState(game_state=game_state)


_TRANSITIONS: Dict[TurnPhase, Callable[[TurnState, Action, Optional[Dice]], TurnState]] = {
    TurnPhase.WAITING_FOR_ROLL: _on_waiting_for_roll,
    TurnPhase.WAITING_FOR_MOVE: _on_waiting_for_move,
    TurnPhase.TURN_END: _on_turn_end,
}


def process_turn_action(
    turn_state: TurnState, action: Any, dice: Optional[Dice] = None
) -> TurnState:
    """Apply one action to the turn.

    :param turn_state: current turn
    :param action: an ``Action`` or an equivalent mapping
    :param dice: random source for ``ROLL_DICE`` without a value; defaults to
        ``default_dice()``
    :return: the next turn state, or ``turn_state`` itself when the action is
        malformed or not legal in the current phase
    """
    if not isinstance(turn_state, TurnState):
        logger.debug(f"Ignoring action on non-turn state {turn_state!r}")
        return turn_state
    parsed = Action.parse(action)
    if parsed is None:
        logger.debug(f"Ignoring malformed action {action!r}")
        return turn_state
    handler = _TRANSITIONS.get(turn_state.phase)
    if handler is None:
        return turn_state
    return handler(turn_state, parsed, dice)


def is_action_allowed(turn_state: TurnState, action: Any) -> bool:
    parsed = Action.parse(action)
    if parsed is None or not isinstance(turn_state, TurnState):
        return False
    if turn_state.phase is TurnPhase.WAITING_FOR_ROLL:
        return parsed.type is ActionType.ROLL_DICE
    if turn_state.phase is TurnPhase.WAITING_FOR_MOVE:
        return parsed.type is ActionType.MAKE_MOVE and any(
            t.id == parsed.token_id for t in turn_state.possible_moves
        )
    if turn_state.phase is TurnPhase.TURN_END:
        # any action advances, END_TURN is the one meant for it
        return parsed.type is ActionType.END_TURN
    return False


def current_phase(turn_state: Optional[TurnState]) -> Optional[TurnPhase]:
    return turn_state.phase if turn_state is not None else None


# --- Query surface ---


@dataclass(frozen=True, slots=True)
class PlayerRef:
    id: str
    color: PlayerColor


@dataclass(frozen=True, slots=True)
class MoveSummary:
    token_id: str
    current_position: Optional[Position]


@dataclass(frozen=True, slots=True)
class TurnSummary:
    phase: TurnPhase
    current_player: Optional[PlayerRef]
    dice_value: Optional[int]
    possible_moves: Tuple[MoveSummary, ...]
    can_roll_dice: bool
    can_make_move: bool
    extra_turn_granted: bool
    game_over: bool
    winners: Optional[Tuple[str, ...]]

    def to_dict(self) -> dict:
        return {
            "phase": self.phase.value,
            "current_player": (
                {"id": self.current_player.id, "color": self.current_player.color.value}
                if self.current_player
                else None
            ),
            "dice_value": self.dice_value,
            "possible_moves": [
                {
                    "token_id": m.token_id,
                    "current_position": (
                        m.current_position.to_dict() if m.current_position else None
                    ),
                }
                for m in self.possible_moves
            ],
            "can_roll_dice": self.can_roll_dice,
            "can_make_move": self.can_make_move,
            "extra_turn_granted": self.extra_turn_granted,
            "game_over": self.game_over,
            "winners": list(self.winners) if self.winners is not None else None,
        }


def turn_summary(turn_state: TurnState) -> Optional[TurnSummary]:
    if not isinstance(turn_state, TurnState):
        return None
    player = current_player(turn_state.game_state)
    return TurnSummary(
        phase=turn_state.phase,
        current_player=PlayerRef(id=player.id, color=player.color) if player else None,
        dice_value=turn_state.current_dice_value,
        possible_moves=tuple(
            MoveSummary(token_id=t.id, current_position=t.position)
            for t in turn_state.possible_moves
        ),
        can_roll_dice=turn_state.phase is TurnPhase.WAITING_FOR_ROLL,
        can_make_move=(
            turn_state.phase is TurnPhase.WAITING_FOR_MOVE
            and len(turn_state.possible_moves) > 0
        ),
        extra_turn_granted=turn_state.extra_turn_granted,
        game_over=turn_state.game_state.is_game_over,
        winners=turn_state.game_state.winners,
    )
