"""
Game state store: the authoritative immutable snapshot and pure transitions.

No function here mutates its input; each returns a new ``GameState`` (or the
input itself when nothing changes).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Tuple

from loguru import logger

from .board import PLAYER_ORDER, home_entry_for, home_path_for, start_tile_for
from .config import config
from .types import GameState, Player, PlayerColor, Token


def create_player(color: PlayerColor) -> Player:
    player_id = color.value
    tokens = tuple(
        Token(id=f"{player_id}_token_{n}")
        for n in range(1, config.TOKENS_PER_PLAYER + 1)
    )
    return Player(
        id=player_id,
        color=color,
        tokens=tokens,
        start_tile=start_tile_for(color),
        home_entry_tile=home_entry_for(color),
        home_path=home_path_for(color),
    )


def initialize_game() -> GameState:
    """Fresh four-player game, RED to move, every token in base."""
    players = tuple(create_player(color) for color in PLAYER_ORDER)
    return GameState(players=players)


def reset_game() -> GameState:
    return initialize_game()


def current_player(game_state: GameState) -> Optional[Player]:
    idx = game_state.current_player_index
    if not 0 <= idx < len(game_state.players):
        return None
    return game_state.players[idx]


def other_players(game_state: GameState) -> Tuple[Player, ...]:
    return tuple(
        p
        for idx, p in enumerate(game_state.players)
        if idx != game_state.current_player_index
    )


def player_by_id(game_state: GameState, player_id: str) -> Optional[Player]:
    for player in game_state.players:
        if player.id == player_id:
            return player
    return None


def replace_player(game_state: GameState, updated: Player) -> GameState:
    """Swap in ``updated`` for the player with the same id."""
    if player_by_id(game_state, updated.id) is None:
        logger.debug(f"No player with id {updated.id!r} to replace")
        return game_state
    players = tuple(updated if p.id == updated.id else p for p in game_state.players)
    return replace(game_state, players=players)


def replace_current_player(game_state: GameState, updated: Player) -> GameState:
    if current_player(game_state) is None:
        return game_state
    players = list(game_state.players)
    players[game_state.current_player_index] = updated
    return replace(game_state, players=tuple(players))


def replace_players(game_state: GameState, players: Sequence[Player]) -> GameState:
    if len(players) != len(game_state.players):
        logger.debug("Refusing to replace players with a list of a different size")
        return game_state
    return replace(game_state, players=tuple(players))


def replace_tokens(
    game_state: GameState, player_id: str, tokens: Sequence[Token]
) -> GameState:
    player = player_by_id(game_state, player_id)
    if player is None:
        return game_state
    return replace_player(game_state, replace(player, tokens=tuple(tokens)))


def advance_turn(game_state: GameState) -> GameState:
    """Hand the turn to the next player and count the finished turn."""
    next_index = (game_state.current_player_index + 1) % len(game_state.players)
    return replace(
        game_state,
        current_player_index=next_index,
        turn_count=game_state.turn_count + 1,
    )


def get_winners(game_state: GameState) -> Tuple[str, ...]:
    return tuple(p.id for p in game_state.players if p.has_won())


def is_game_over(game_state: GameState) -> bool:
    return any(p.has_won() for p in game_state.players)


def check_and_update_game_end(game_state: GameState) -> GameState:
    winners = get_winners(game_state)
    if winners and not game_state.is_game_over:
        logger.info(f"Game over after {game_state.turn_count} turns, winners: {', '.join(winners)}")
    return replace(
        game_state,
        winners=winners or None,
        is_game_over=bool(winners),
    )


@dataclass(frozen=True, slots=True)
class PlayerStats:
    player_id: str
    color: PlayerColor
    completed_tokens: int
    tokens_in_play: int
    tokens_in_base: int
    progress: float


@dataclass(frozen=True, slots=True)
class GameStats:
    total_turns: int
    player_stats: Tuple[PlayerStats, ...]
    is_complete: bool
    winners: Tuple[str, ...]


def game_stats(game_state: GameState) -> GameStats:
    stats: List[PlayerStats] = []
    for player in game_state.players:
        completed = sum(1 for t in player.tokens if t.is_completed)
        in_play = sum(1 for t in player.tokens if t.is_out and not t.is_completed)
        in_base = sum(1 for t in player.tokens if not t.is_out)
        stats.append(
            PlayerStats(
                player_id=player.id,
                color=player.color,
                completed_tokens=completed,
                tokens_in_play=in_play,
                tokens_in_base=in_base,
                progress=completed / config.TOKENS_PER_PLAYER * 100.0,
            )
        )
    return GameStats(
        total_turns=game_state.turn_count,
        player_stats=tuple(stats),
        is_complete=game_state.is_game_over,
        winners=game_state.winners or (),
    )


def _token_is_consistent(token: Token) -> bool:
    if (token.position is None) == token.is_out:
        return False
    if token.is_completed and not (token.is_out and token.is_safe):
        return False
    return True


def is_valid_game_state(game_state) -> bool:
    """Structural and invariant check of a snapshot."""
    if not isinstance(game_state, GameState):
        return False
    players = game_state.players
    if len(players) != config.NUM_PLAYERS:
        return False
    if not 0 <= game_state.current_player_index < len(players):
        return False
    if game_state.is_game_over != (game_state.winners is not None):
        return False
    if game_state.winners is not None and set(game_state.winners) != set(
        get_winners(game_state)
    ):
        return False
    for player in players:
        if len(player.tokens) != config.TOKENS_PER_PLAYER:
            return False
        if len({t.id for t in player.tokens}) != len(player.tokens):
            return False
        if not all(_token_is_consistent(t) for t in player.tokens):
            return False
    return True
