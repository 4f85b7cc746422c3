import os
import unittest
from unittest import mock

from ludo_rules.config import Config, config


class TestConfig(unittest.TestCase):
    def test_defaults(self):
        cfg = Config()
        self.assertEqual(cfg.RING_SIZE, 52)
        self.assertEqual(cfg.HOME_PATH_LENGTH, 6)
        self.assertEqual(cfg.STEPS_TO_CENTER, 57)
        self.assertEqual(cfg.STAR_INDICES, [8, 21, 34, 47])
        self.assertGreater(config.MAX_TURNS, 0)

    def test_invalid_settings(self):
        for kwargs in (
            {"NUM_PLAYERS": 3},
            {"RING_SIZE": 50},
            {"DICE_MIN": 0},
            {"DICE_MAX": 1},
            {"ENTRY_ROLL": 7},
            {"EXTRA_TURN_ROLL": 0},
            {"STAR_INDICES": [8, 60]},
            {"MAX_TURNS": 0},
        ):
            with self.assertRaises(ValueError, msg=str(kwargs)):
                Config(**kwargs)

    def test_seed_from_environment(self):
        with mock.patch.dict(os.environ, {"LUDO_DICE_SEED": "12"}):
            self.assertEqual(Config().DICE_SEED, 12)
        with mock.patch.dict(os.environ, {"LUDO_DICE_SEED": ""}):
            self.assertIsNone(Config().DICE_SEED)
        with mock.patch.dict(os.environ, {"LUDO_DICE_SEED": "abc"}):
            with self.assertRaises(ValueError):
                Config()


if __name__ == "__main__":
    unittest.main()
