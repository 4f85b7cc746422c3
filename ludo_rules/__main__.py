import argparse
import sys
import time

from loguru import logger

from .config import config
from .dice import Dice, roll_stats
from .simulator import FirstMoveChooser, RandomMoveChooser, Simulator, run_walkthrough
from .state import game_stats


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play Ludo games with the rules engine")
    parser.add_argument(
        "--seed",
        type=int,
        default=config.DICE_SEED,
        help="Dice seed (defaults to LUDO_DICE_SEED)",
    )
    parser.add_argument("--max-turns", type=int, default=config.MAX_TURNS)
    parser.add_argument(
        "--chooser",
        choices=["first", "random"],
        default="first",
        help="How tokens are picked when several can move",
    )
    parser.add_argument(
        "--walkthrough",
        action="store_true",
        help="Print the scripted opening instead of simulating a game",
    )
    parser.add_argument("--log-level", type=str, default=config.LOG_LEVEL)
    return parser.parse_args(argv)


def print_walkthrough() -> None:
    for label, summary in run_walkthrough():
        print(f"\n=== {label} ===")
        print(f"Phase: {summary.phase.value}")
        if summary.current_player:
            print(f"Current Player: {summary.current_player.color.value}")
        if summary.dice_value:
            print(f"Dice Value: {summary.dice_value}")
        for move in summary.possible_moves:
            print(f"  Token {move.token_id} at {move.current_position}")
        if summary.extra_turn_granted:
            print("Extra turn granted")


def main(argv=None) -> int:
    args = parse_args(argv)

    logger.remove()
    logger.add(sys.stderr, level=args.log_level.upper())

    if args.walkthrough:
        print_walkthrough()
        return 0

    chooser = RandomMoveChooser(args.seed) if args.chooser == "random" else FirstMoveChooser()
    simulator = Simulator(dice=Dice.seeded(args.seed), chooser=chooser)

    print("--- Starting Ludo simulation ---")
    start_time = time.time()
    result = simulator.run(max_turns=args.max_turns)
    elapsed = time.time() - start_time

    stats = game_stats(result.turn_state.game_state)
    print(f"Turns played: {result.turns_played}")
    for ps in stats.player_stats:
        print(
            f"  {ps.player_id:<7} completed={ps.completed_tokens} "
            f"in_play={ps.tokens_in_play} in_base={ps.tokens_in_base}"
        )
    print(f"Winners: {', '.join(stats.winners) if stats.winners else 'none'}")
    sixes = roll_stats(result.rolls)
    print(f"Rolls: {sixes['total']}, sixes: {sixes['six_percentage']:.1f}%")
    print(f"Simulation Time: {elapsed:.2f} seconds")
    return 0


if __name__ == "__main__":
    sys.exit(main())
