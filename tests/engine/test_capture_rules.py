import unittest
from dataclasses import replace

from ludo_rules.board import RING, is_safe_cell
from ludo_rules.capture import can_capture, resolve_captures, send_to_base
from ludo_rules.state import initialize_game, replace_tokens
from ludo_rules.types import Position, Token


class TestCanCapture(unittest.TestCase):
    def test_plain_cell(self):
        cell = RING[3]
        token = Token(id="green_token_1", position=cell, is_out=True)
        self.assertTrue(can_capture(token, cell))
        self.assertFalse(can_capture(token, RING[4]))

    def test_safe_cell_blocks_capture(self):
        for cell in (RING[0], RING[8], RING[50]):
            self.assertTrue(is_safe_cell(cell))
            token = Token(id="green_token_1", position=cell, is_out=True, is_safe=True)
            self.assertFalse(can_capture(token, cell))
            # a stale flag does not matter on a safe cell either
            token = replace(token, is_safe=False)
            self.assertFalse(can_capture(token, cell))

    def test_base_and_completed_tokens(self):
        self.assertFalse(can_capture(Token(id="t"), RING[3]))
        done = Token(id="t", position=RING[3], is_out=True, is_completed=True)
        self.assertFalse(can_capture(done, RING[3]))
        self.assertFalse(can_capture(Token(id="t", position=RING[3], is_out=True), None))

    def test_send_to_base(self):
        token = Token(id="t", position=RING[3], is_out=True, is_safe=True)
        home = send_to_base(token)
        self.assertIsNone(home.position)
        self.assertFalse(home.is_out)
        self.assertFalse(home.is_safe)
        self.assertFalse(home.is_completed)
        self.assertEqual(home.id, "t")


class TestResolveCaptures(unittest.TestCase):
    def setUp(self):
        self.game = initialize_game()

    def place(self, game, player_idx, token_idx, position):
        player = game.players[player_idx]
        tokens = list(player.tokens)
        tokens[token_idx] = replace(
            tokens[token_idx], position=position, is_out=True, is_safe=is_safe_cell(position)
        )
        return replace_tokens(game, player.id, tokens)

    def test_stacked_opponents_all_captured(self):
        cell = RING[4]
        game = self.place(self.game, 0, 0, cell)
        game = self.place(game, 1, 0, cell)
        game = self.place(game, 1, 1, cell)
        game = self.place(game, 2, 3, cell)

        players, captured = resolve_captures(game.players, "red", cell)
        self.assertEqual(
            {(c.player_id, c.token_id) for c in captured},
            {("green", "green_token_1"), ("green", "green_token_2"), ("blue", "blue_token_4")},
        )
        for player in players[1:]:
            for token in player.tokens:
                self.assertNotEqual(token.position, cell)
        # mover keeps its token
        self.assertEqual(players[0].tokens[0].position, cell)
        # players that lost nothing are the same objects
        self.assertIs(players[0], game.players[0])
        self.assertIs(players[3], game.players[3])
        self.assertIsNot(players[1], game.players[1])

    def test_no_capture_on_safe_cell(self):
        cell = RING[13]  # GREEN start
        game = self.place(self.game, 1, 0, cell)
        players, captured = resolve_captures(game.players, "red", cell)
        self.assertEqual(captured, ())
        self.assertEqual(players, game.players)

    def test_own_tokens_untouched(self):
        cell = RING[4]
        game = self.place(self.game, 0, 0, cell)
        game = self.place(game, 0, 1, cell)
        players, captured = resolve_captures(game.players, "red", cell)
        self.assertEqual(captured, ())
        self.assertEqual(players[0].tokens[1].position, cell)

    def test_lane_cell_never_collides(self):
        game = self.place(self.game, 1, 0, Position(1, 7))
        _, captured = resolve_captures(game.players, "red", Position(7, 1))
        self.assertEqual(captured, ())


if __name__ == "__main__":
    unittest.main()
