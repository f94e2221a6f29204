import unittest

from fry_stack.game import Command
from fry_stack.visualization.keyrepeat import KeyRepeater


class TestKeyRepeater(unittest.TestCase):
    def setUp(self):
        self.repeater = KeyRepeater()

    def test_given_held_left_when_time_passes_then_resent_every_75ms(self):
        self.assertEqual(self.repeater.press(Command.MOVE_LEFT), Command.MOVE_LEFT)
        self.assertEqual(self.repeater.update(74), [])
        self.assertEqual(self.repeater.update(1), [Command.MOVE_LEFT])
        self.assertEqual(self.repeater.update(150), [Command.MOVE_LEFT, Command.MOVE_LEFT])

    def test_given_held_soft_drop_when_time_passes_then_resent_every_50ms(self):
        self.repeater.press(Command.SOFT_DROP)
        self.assertEqual(self.repeater.update(100), [Command.SOFT_DROP, Command.SOFT_DROP])

    def test_given_release_when_time_passes_then_no_repeats(self):
        self.repeater.press(Command.MOVE_RIGHT)
        self.repeater.release(Command.MOVE_RIGHT)
        self.assertEqual(self.repeater.update(500), [])

    def test_given_opposite_direction_when_pressed_then_replaces_previous(self):
        self.repeater.press(Command.MOVE_LEFT)
        self.repeater.press(Command.MOVE_RIGHT)
        self.assertEqual(self.repeater.update(75), [Command.MOVE_RIGHT])

    def test_given_one_shot_commands_when_held_then_never_repeat(self):
        self.repeater.press(Command.ROTATE)
        self.repeater.press(Command.HARD_DROP)
        self.assertEqual(self.repeater.update(1000), [])


if __name__ == "__main__":
    unittest.main()
