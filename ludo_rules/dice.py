"""
Dice mechanics.

The random source is injected so whole-turn sequences can be replayed:
``Dice.seeded(42)`` for a reproducible generator, ``Dice.from_sequence``
for a literal script of faces.
"""

from __future__ import annotations

import itertools
import random
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Sequence

import numpy as np
from loguru import logger

from .config import config
from .types import DiceResult

_UNICODE_FACES = {1: "⚀", 2: "⚁", 3: "⚂", 4: "⚃", 5: "⚄", 6: "⚅"}


def is_valid_dice_value(value) -> bool:
    # bool is an int subclass but never a dice face
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and config.DICE_MIN <= value <= config.DICE_MAX
    )


def is_six(value: int) -> bool:
    return value == 6


def allows_base_exit(value: int) -> bool:
    return value == config.ENTRY_ROLL


def grants_extra_turn(value: int) -> bool:
    return value == config.EXTRA_TURN_ROLL


def classify(value: int) -> DiceResult:
    """Classify a face. Base exit and the six bonus are separate fields even
    though both are currently tied to 6."""
    return DiceResult(
        value=value,
        is_six=is_six(value),
        allows_base_exit=allows_base_exit(value),
        grants_extra_turn_candidate=grants_extra_turn(value),
        is_valid=is_valid_dice_value(value),
    )


def dice_display(value) -> str:
    return str(value) if is_valid_dice_value(value) else "?"


def dice_unicode(value) -> str:
    return _UNICODE_FACES.get(value, "?") if is_valid_dice_value(value) else "?"


@dataclass(slots=True)
class Dice:
    """Six-sided die backed by a replaceable source."""

    rng: random.Random = field(default_factory=random.Random)
    _source: Callable[[], int] | None = field(default=None, repr=False)

    @classmethod
    def seeded(cls, seed: int | None) -> "Dice":
        return cls(rng=random.Random(seed))

    @classmethod
    def from_config(cls) -> "Dice":
        return cls.seeded(config.DICE_SEED)

    @classmethod
    def from_sequence(cls, values: Iterable[int]) -> "Dice":
        """Replay ``values`` in order, starting over once exhausted."""
        faces = list(values)
        bad = [v for v in faces if not is_valid_dice_value(v)]
        if not faces or bad:
            raise ValueError(f"dice sequence needs faces in [1, 6], got {faces!r}")
        cycle = itertools.cycle(faces)
        return cls(_source=lambda: next(cycle))

    def roll(self) -> int:
        if self._source is not None:
            value = self._source()
        else:
            value = self.rng.randint(config.DICE_MIN, config.DICE_MAX)
        logger.debug(f"Rolled {value}")
        return value


def simulate_rolls(count: int, dice: Dice | None = None) -> List[int]:
    if count <= 0:
        return []
    dice = dice or Dice()
    return [dice.roll() for _ in range(count)]


def roll_stats(rolls: Sequence[int]) -> Dict[str, object]:
    """Counts and percentages per face for a series of rolls.

    Values outside the dice range are ignored in the counts but still count
    towards ``total``.
    """
    faces = range(config.DICE_MIN, config.DICE_MAX + 1)
    total = len(rolls)
    valid = np.asarray([r for r in rolls if is_valid_dice_value(r)], dtype=np.int64)
    bins = np.bincount(valid, minlength=config.DICE_MAX + 1)
    counts = {face: int(bins[face]) for face in faces}
    if total:
        percentages = {face: counts[face] / total * 100.0 for face in faces}
    else:
        percentages = {face: 0.0 for face in faces}
    return {
        "total": total,
        "counts": counts,
        "percentages": percentages,
        "six_count": counts[6],
        "six_percentage": percentages[6],
    }
