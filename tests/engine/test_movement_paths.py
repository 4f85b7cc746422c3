import unittest
from dataclasses import replace

from ludo_rules.board import CENTER, RING, is_safe_cell
from ludo_rules.movement import (
    can_exit_base,
    compute_next_position,
    distance_to_complete,
    get_valid_moves,
    has_valid_moves,
    move_token,
)
from ludo_rules.state import create_player
from ludo_rules.types import MoveKind, PlayerColor, Position, Token


def walk(position, steps, player):
    """Step-by-step reference walk; None when the walk runs past the center."""
    lane = player.home_path
    for _ in range(steps):
        if position == CENTER:
            return None
        if position in lane:
            k = lane.index(position)
            position = lane[k + 1] if k + 1 < len(lane) else CENTER
        elif position == player.home_entry_tile:
            position = lane[0]
        else:
            position = RING[(RING.index(position) + 1) % len(RING)]
    return position


def on_board(token_id, position):
    return Token(id=token_id, position=position, is_out=True, is_safe=is_safe_cell(position))


class TestComputeNextPosition(unittest.TestCase):
    def setUp(self):
        self.red = create_player(PlayerColor.RED)
        self.green = create_player(PlayerColor.GREEN)

    def test_matches_reference_walk_for_every_entry(self):
        for e in range(len(RING)):
            player = replace(self.red, home_entry_tile=RING[e])
            for i in range(len(RING)):
                for s in range(1, 7):
                    expected = walk(RING[i], s, player)
                    got = compute_next_position(RING[i], s, player)
                    if expected is None:
                        self.assertEqual(got, RING[i], (i, e, s))
                    else:
                        self.assertEqual(got, expected, (i, e, s))

    def test_wraps_past_index_zero(self):
        # GREEN sitting near the end of the ring keeps going around
        self.assertEqual(compute_next_position(RING[50], 4, self.green), RING[2])

    def test_entry_below_current_index_is_still_ahead(self):
        # RED on index 49 (entry 50): 1 to the entry, then into the lane
        self.assertEqual(compute_next_position(RING[49], 1, self.red), RING[50])
        self.assertEqual(compute_next_position(RING[49], 2, self.red), Position(7, 1))
        # GREEN on index 9 (entry 11) must not walk the whole ring
        self.assertEqual(compute_next_position(RING[9], 4, self.green), Position(2, 7))

    def test_own_entry_enters_lane(self):
        entry = self.red.home_entry_tile
        self.assertEqual(compute_next_position(entry, 1, self.red), Position(7, 1))
        self.assertEqual(compute_next_position(entry, 6, self.red), Position(7, 6))

    def test_exact_center(self):
        self.assertEqual(compute_next_position(Position(7, 4), 3, self.red), CENTER)
        self.assertEqual(compute_next_position(Position(7, 6), 1, self.red), CENTER)

    def test_overshoot_is_unchanged(self):
        self.assertEqual(compute_next_position(Position(7, 4), 4, self.red), Position(7, 4))
        self.assertEqual(compute_next_position(Position(7, 6), 2, self.red), Position(7, 6))

    def test_lane_step(self):
        self.assertEqual(compute_next_position(Position(7, 2), 2, self.red), Position(7, 4))

    def test_unknown_cell_is_unchanged(self):
        # another color's lane is not a path for RED
        self.assertEqual(compute_next_position(Position(1, 7), 2, self.red), Position(1, 7))
        self.assertIsNone(compute_next_position(None, 3, self.red))


class TestMoveToken(unittest.TestCase):
    def setUp(self):
        self.red = create_player(PlayerColor.RED)

    def test_exit_needs_six(self):
        token = self.red.tokens[0]
        self.assertTrue(can_exit_base(token, 6))
        for v in range(1, 6):
            self.assertFalse(can_exit_base(token, v))
            self.assertIs(move_token(token, v, self.red), token)

    def test_exit_places_on_start(self):
        token = self.red.tokens[0]
        moved = move_token(token, 6, self.red)
        self.assertEqual(moved.position, self.red.start_tile)
        self.assertTrue(moved.is_out)
        self.assertTrue(moved.is_safe)
        # input untouched
        self.assertFalse(token.is_out)
        self.assertIsNone(token.position)

    def test_advance_sets_safety(self):
        token = on_board("red_token_1", RING[5])
        moved = move_token(token, 3, self.red)
        self.assertEqual(moved.position, RING[8])
        self.assertTrue(moved.is_safe)
        moved = move_token(token, 2, self.red)
        self.assertFalse(moved.is_safe)

    def test_reaching_center_completes(self):
        token = on_board("red_token_1", Position(7, 5))
        moved = move_token(token, 2, self.red)
        self.assertEqual(moved.position, CENTER)
        self.assertTrue(moved.is_completed)
        self.assertTrue(moved.is_safe)

    def test_completed_token_is_frozen(self):
        token = Token(id="red_token_1", position=CENTER, is_out=True, is_safe=True, is_completed=True)
        self.assertIs(move_token(token, 3, self.red), token)
        self.assertEqual(get_valid_moves(token, 3, self.red), ())


class TestValidMoves(unittest.TestCase):
    def setUp(self):
        self.red = create_player(PlayerColor.RED)

    def test_base_tokens(self):
        token = self.red.tokens[0]
        self.assertEqual(get_valid_moves(token, 3, self.red), ())
        (option,) = get_valid_moves(token, 6, self.red)
        self.assertEqual(option.kind, MoveKind.EXIT_BASE)
        self.assertEqual(option.destination, self.red.start_tile)
        self.assertIsNone(option.origin)

    def test_options_agree_with_move_token(self):
        for i in range(len(RING)):
            token = on_board("red_token_1", RING[i])
            for s in range(1, 7):
                options = get_valid_moves(token, s, self.red)
                moved = move_token(token, s, self.red)
                if options:
                    self.assertEqual(options[0].kind, MoveKind.ADVANCE)
                    self.assertEqual(options[0].destination, moved.position)
                    self.assertNotEqual(moved.position, token.position)
                else:
                    self.assertEqual(moved.position, token.position)

    def test_overshoot_is_not_offered(self):
        token = on_board("red_token_1", Position(7, 5))
        self.assertEqual(get_valid_moves(token, 3, self.red), ())
        self.assertEqual(len(get_valid_moves(token, 2, self.red)), 1)

    def test_has_valid_moves(self):
        self.assertFalse(has_valid_moves(self.red, 4))
        self.assertTrue(has_valid_moves(self.red, 6))


class TestDistanceToComplete(unittest.TestCase):
    def setUp(self):
        self.red = create_player(PlayerColor.RED)

    def test_from_start(self):
        token = on_board("red_token_1", self.red.start_tile)
        self.assertEqual(distance_to_complete(token, self.red), 57)

    def test_from_lane(self):
        self.assertEqual(distance_to_complete(on_board("t", Position(7, 1)), self.red), 6)
        self.assertEqual(distance_to_complete(on_board("t", Position(7, 6)), self.red), 1)

    def test_not_on_path(self):
        self.assertEqual(distance_to_complete(self.red.tokens[0], self.red), -1)

    def test_distance_reached_by_exact_moves(self):
        token = on_board("red_token_1", RING[45])
        remaining = distance_to_complete(token, self.red)
        while remaining > 0:
            step = min(6, remaining)
            token = move_token(token, step, self.red)
            remaining -= step
            self.assertEqual(distance_to_complete(token, self.red), remaining or -1)
        self.assertTrue(token.is_completed)


if __name__ == "__main__":
    unittest.main()
