import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()


def _optional_int(raw: str | None) -> int | None:
    if raw is None or raw.strip() == "":
        return None
    return int(raw)


@dataclass(slots=True)
class Config:
    # --- Board ---
    BOARD_SIZE: int = 15  # 15x15 grid, rows/cols 0..14
    RING_SIZE: int = 52
    HOME_PATH_LENGTH: int = 6
    NUM_PLAYERS: int = 4
    TOKENS_PER_PLAYER: int = 4

    # --- Dice ---
    DICE_MIN: int = 1
    DICE_MAX: int = 6
    ENTRY_ROLL: int = 6  # roll needed to leave base
    EXTRA_TURN_ROLL: int = 6  # roll that grants another turn

    # Ring indices of the four star cells (safe for everyone)
    STAR_INDICES: list[int] = field(default_factory=lambda: [8, 21, 34, 47])

    # --- Runtime ---
    DICE_SEED: int | None = field(
        default_factory=lambda: _optional_int(os.getenv("LUDO_DICE_SEED"))
    )
    MAX_TURNS: int = int(os.getenv("LUDO_MAX_TURNS", 1000))
    LOG_LEVEL: str = os.getenv("LUDO_LOG_LEVEL", "INFO")

    # Derived (populated in __post_init__ due to slots)
    STEPS_TO_CENTER: int = 0

    def __post_init__(self):
        # start cell -> entry cell is RING_SIZE - 2 steps, then lane + center
        self.STEPS_TO_CENTER = self.RING_SIZE - 2 + self.HOME_PATH_LENGTH + 1

        if self.NUM_PLAYERS != 4:
            raise ValueError("NUM_PLAYERS must be 4")
        if self.RING_SIZE % self.NUM_PLAYERS != 0:
            raise ValueError("RING_SIZE must split evenly between players")
        if not 1 <= self.DICE_MIN < self.DICE_MAX:
            raise ValueError("DICE_MIN must be >= 1 and below DICE_MAX")
        for name in ("ENTRY_ROLL", "EXTRA_TURN_ROLL"):
            value = getattr(self, name)
            if not self.DICE_MIN <= value <= self.DICE_MAX:
                raise ValueError(f"{name} must be a face of the dice")
        if any(not 0 <= idx < self.RING_SIZE for idx in self.STAR_INDICES):
            raise ValueError("STAR_INDICES must be ring indices")
        if self.MAX_TURNS <= 0:
            raise ValueError("MAX_TURNS must be positive")


config = Config()
