"""
Board geometry for the 15x15 Ludo grid.

Static data only: the shared 52-cell ring in traversal order, each color's
start / home-entry cells, private home lanes, base slots, the center cell
and the safe cells. Everything here is read-only.
"""

from __future__ import annotations

from typing import Dict, FrozenSet, Optional, Tuple

import numpy as np

from .config import config
from .types import GameState, Player, PlayerColor, Position

P = Position

# Clockwise from RED's start cell.
RING: Tuple[Position, ...] = (
    # left arm, top row -> up the top arm
    P(6, 1), P(6, 2), P(6, 3), P(6, 4), P(6, 5),
    P(5, 6), P(4, 6), P(3, 6), P(2, 6), P(1, 6), P(0, 6),
    P(0, 7), P(0, 8),
    # down the top arm -> right arm
    P(1, 8), P(2, 8), P(3, 8), P(4, 8), P(5, 8),
    P(6, 9), P(6, 10), P(6, 11), P(6, 12), P(6, 13), P(6, 14),
    P(7, 14), P(8, 14),
    # right arm, bottom row -> down the bottom arm
    P(8, 13), P(8, 12), P(8, 11), P(8, 10), P(8, 9),
    P(9, 8), P(10, 8), P(11, 8), P(12, 8), P(13, 8), P(14, 8),
    P(14, 7), P(14, 6),
    # up the bottom arm -> left arm
    P(13, 6), P(12, 6), P(11, 6), P(10, 6), P(9, 6),
    P(8, 5), P(8, 4), P(8, 3), P(8, 2), P(8, 1), P(8, 0),
    P(7, 0), P(6, 0),
)

CENTER: Position = P(7, 7)

START_INDEX: Dict[PlayerColor, int] = {
    PlayerColor.RED: 0,
    PlayerColor.GREEN: 13,
    PlayerColor.BLUE: 26,
    PlayerColor.YELLOW: 39,
}

# Last ring cell before the color turns into its home lane
HOME_ENTRY_INDEX: Dict[PlayerColor, int] = {
    PlayerColor.RED: 50,
    PlayerColor.GREEN: 11,
    PlayerColor.BLUE: 24,
    PlayerColor.YELLOW: 37,
}

HOME_PATHS: Dict[PlayerColor, Tuple[Position, ...]] = {
    PlayerColor.RED: tuple(P(7, c) for c in range(1, 7)),
    PlayerColor.GREEN: tuple(P(r, 7) for r in range(1, 7)),
    PlayerColor.BLUE: tuple(P(7, c) for c in range(13, 7, -1)),
    PlayerColor.YELLOW: tuple(P(r, 7) for r in range(13, 7, -1)),
}

BASE_SLOTS: Dict[PlayerColor, Tuple[Position, ...]] = {
    PlayerColor.RED: (P(1, 1), P(1, 2), P(2, 1), P(2, 2)),
    PlayerColor.GREEN: (P(1, 12), P(1, 13), P(2, 12), P(2, 13)),
    PlayerColor.BLUE: (P(12, 12), P(12, 13), P(13, 12), P(13, 13)),
    PlayerColor.YELLOW: (P(12, 1), P(12, 2), P(13, 1), P(13, 2)),
}

PLAYER_ORDER: Tuple[PlayerColor, ...] = (
    PlayerColor.RED,
    PlayerColor.GREEN,
    PlayerColor.BLUE,
    PlayerColor.YELLOW,
)

_RING_LOOKUP: Dict[Position, int] = {pos: idx for idx, pos in enumerate(RING)}


def _compute_safe_cells() -> FrozenSet[Position]:
    # de-duplicated union of starts, entries and stars
    cells = {RING[idx] for idx in START_INDEX.values()}
    cells.update(RING[idx] for idx in HOME_ENTRY_INDEX.values())
    cells.update(RING[idx] for idx in config.STAR_INDICES)
    return frozenset(cells)


SAFE_CELLS: FrozenSet[Position] = _compute_safe_cells()


def _check_geometry() -> None:
    if len(RING) != config.RING_SIZE or len(_RING_LOOKUP) != config.RING_SIZE:
        raise ValueError("ring must hold RING_SIZE distinct cells")
    lane_cells: set[Position] = set()
    for color, lane in HOME_PATHS.items():
        if len(lane) != config.HOME_PATH_LENGTH:
            raise ValueError(f"home path for {color.value} has wrong length")
        if lane_cells.intersection(lane) or any(c in _RING_LOOKUP for c in lane):
            raise ValueError(f"home path for {color.value} overlaps another path")
        lane_cells.update(lane)
    if CENTER in lane_cells or CENTER in _RING_LOOKUP:
        raise ValueError("center cell must be off every path")


_check_geometry()


def ring_index(position: Optional[Position]) -> Optional[int]:
    """Index of ``position`` on the shared ring, or None when not on it."""
    if position is None:
        return None
    return _RING_LOOKUP.get(position)


def home_path_index(position: Optional[Position], player: Player) -> Optional[int]:
    """Index of ``position`` on ``player``'s home lane, or None."""
    if position is None:
        return None
    for idx, cell in enumerate(player.home_path):
        if cell == position:
            return idx
    return None


def is_safe_cell(position: Optional[Position]) -> bool:
    return position is not None and position in SAFE_CELLS


def is_center(position: Optional[Position]) -> bool:
    return position == CENTER


def start_tile_for(color: PlayerColor) -> Position:
    return RING[START_INDEX[color]]


def home_entry_for(color: PlayerColor) -> Position:
    return RING[HOME_ENTRY_INDEX[color]]


def home_path_for(color: PlayerColor) -> Tuple[Position, ...]:
    return HOME_PATHS[color]


def base_slot(color: PlayerColor, token_index: int) -> Optional[Position]:
    """Drawing slot inside the color's base for its n-th token (0-based)."""
    slots = BASE_SLOTS[color]
    if not 0 <= token_index < len(slots):
        return None
    return slots[token_index]


# --- Snapshots for the presentation layer ---


def occupancy_grid(game_state: GameState) -> np.ndarray:
    """Return a (BOARD_SIZE, BOARD_SIZE) count of tokens on each cell.

    Tokens still in base are not placed; completed tokens stack on the center.
    """
    size = config.BOARD_SIZE
    grid = np.zeros((size, size), dtype=np.int8)
    for player in game_state.players:
        for token in player.tokens:
            pos = token.position
            if pos is None:
                continue
            grid[pos.row, pos.col] += 1
    return grid


def color_grid(game_state: GameState) -> np.ndarray:
    """Return a (BOARD_SIZE, BOARD_SIZE) owner map.

    0 marks an empty cell, 1..4 the owning player in turn order, -1 a cell
    shared by more than one color.
    """
    size = config.BOARD_SIZE
    grid = np.zeros((size, size), dtype=np.int8)
    for idx, player in enumerate(game_state.players):
        code = idx + 1
        for token in player.tokens:
            pos = token.position
            if pos is None:
                continue
            current = grid[pos.row, pos.col]
            if current == 0:
                grid[pos.row, pos.col] = code
            elif current != code:
                grid[pos.row, pos.col] = -1
    return grid
