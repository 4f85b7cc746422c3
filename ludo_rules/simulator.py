from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Tuple

from loguru import logger

from .config import config
from .dice import Dice
from .state import initialize_game
from .turn import (
    Action,
    TurnState,
    TurnSummary,
    initial_turn_state,
    process_turn_action,
    turn_summary,
)
from .types import TurnPhase


class MoveChooser(Protocol):
    def select_move(self, turn_state: TurnState) -> Optional[str]:
        ...


@dataclass(slots=True)
class FirstMoveChooser:
    """Always plays the first token offered."""

    def select_move(self, turn_state: TurnState) -> Optional[str]:
        if not turn_state.possible_moves:
            return None
        return turn_state.possible_moves[0].id


@dataclass(slots=True)
class RandomMoveChooser:
    rng_seed: int | None = None
    _rng: random.Random = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._rng = random.Random(self.rng_seed)

    def select_move(self, turn_state: TurnState) -> Optional[str]:
        if not turn_state.possible_moves:
            return None
        return self._rng.choice(list(turn_state.possible_moves)).id


@dataclass(slots=True)
class SimulationResult:
    turn_state: TurnState
    turns_played: int
    rolls: List[int]

    @property
    def finished(self) -> bool:
        return self.turn_state.game_state.is_game_over


@dataclass(slots=True)
class Simulator:
    """Drives whole games through the turn machine.

    Rolls come from ``dice``; ``chooser`` picks among the legal tokens.
    """

    dice: Dice = field(default_factory=Dice.from_config)
    chooser: MoveChooser = field(default_factory=FirstMoveChooser)
    rolls: List[int] = field(default_factory=list, init=False, repr=False)

    def step(self, turn_state: TurnState) -> TurnState:
        """Dispatch the one action the current phase is waiting for."""
        if turn_state.phase is TurnPhase.WAITING_FOR_ROLL:
            value = self.dice.roll()
            self.rolls.append(value)
            return process_turn_action(turn_state, Action.roll(value))

        if turn_state.phase is TurnPhase.WAITING_FOR_MOVE:
            token_id = self.chooser.select_move(turn_state)
            nxt = process_turn_action(turn_state, Action.move(token_id) if token_id else {})
            if nxt is turn_state:
                raise RuntimeError(
                    f"Move chooser returned {token_id!r}, not one of the possible moves"
                )
            return nxt

        return process_turn_action(turn_state, Action.end_turn())

    def play_turn(self, turn_state: TurnState) -> TurnState:
        """Step until the turn passes to the next player or the game ends."""
        start = turn_state.game_state.turn_count
        while (
            turn_state.game_state.turn_count == start
            and not turn_state.game_state.is_game_over
        ):
            turn_state = self.step(turn_state)
        return turn_state

    def run(
        self, turn_state: TurnState | None = None, max_turns: int | None = None
    ) -> SimulationResult:
        self.rolls = []
        turn_state = turn_state or initial_turn_state(initialize_game())
        limit = max_turns if max_turns is not None else config.MAX_TURNS
        played = 0
        while played < limit and not turn_state.game_state.is_game_over:
            turn_state = self.play_turn(turn_state)
            played += 1
        if turn_state.game_state.is_game_over:
            logger.info(
                f"Finished in {turn_state.game_state.turn_count} turns; "
                f"winners: {', '.join(turn_state.game_state.winners)}"
            )
        else:
            logger.info(f"Stopped after {played} turns without a winner")
        return SimulationResult(turn_state=turn_state, turns_played=played, rolls=list(self.rolls))


def run_walkthrough() -> List[Tuple[str, TurnSummary]]:
    """Scripted opening: RED leaves base on a 6, advances 2, GREEN cannot move.

    Returns a labelled turn summary after every transition.
    """
    script: List[Tuple[str, Action]] = [
        ("RED rolls 6", Action.roll(6)),
        ("RED brings a token out", Action.move("red_token_1")),
        ("RED rolls 2 (extra turn)", Action.roll(2)),
        ("RED advances 2", Action.move("red_token_1")),
        ("Turn passes", Action.end_turn()),
        ("GREEN rolls 3", Action.roll(3)),
        ("Turn passes", Action.end_turn()),
    ]
    turn_state = initial_turn_state(initialize_game())
    snapshots = [("New game", turn_summary(turn_state))]
    for label, action in script:
        turn_state = process_turn_action(turn_state, action)
        snapshots.append((label, turn_summary(turn_state)))
    return snapshots
