import unittest

from falling_blocks.game import Cue, ManualClock, NullAudio


class ManualClockTests(unittest.TestCase):
    def setUp(self):
        self.ticks = 0
        self.clock = ManualClock()

    def tick(self):
        self.ticks += 1

    def test_fires_at_interval(self):
        self.clock.start(1000, self.tick)
        self.assertEqual(self.clock.advance(999), 0)
        self.assertEqual(self.clock.advance(1), 1)
        self.assertEqual(self.clock.advance(2500), 2)
        self.assertEqual(self.ticks, 3)

    def test_stopped_clock_is_silent(self):
        self.clock.start(100, self.tick)
        self.clock.stop()
        self.assertEqual(self.clock.advance(1000), 0)
        self.assertFalse(self.clock.fire())
        self.assertEqual(self.ticks, 0)

    def test_restart_resets_elapsed(self):
        self.clock.start(1000, self.tick)
        self.clock.advance(900)
        self.clock.start(1000, self.tick)
        self.assertEqual(self.clock.advance(900), 0)

    def test_callback_can_stop_clock(self):
        def tick_and_stop():
            self.ticks += 1
            self.clock.stop()

        self.clock.start(10, tick_and_stop)
        self.assertEqual(self.clock.advance(100), 1)
        self.assertFalse(self.clock.running)

    def test_fire_runs_callback_once(self):
        self.clock.start(1000, self.tick)
        self.assertTrue(self.clock.fire())
        self.assertEqual(self.ticks, 1)

    def test_rejects_non_positive_interval(self):
        with self.assertRaises(ValueError):
            self.clock.start(0, self.tick)


class NullAudioTests(unittest.TestCase):
    def test_accepts_every_cue(self):
        audio = NullAudio()
        for cue in Cue:
            audio.play(cue)


if __name__ == "__main__":
    unittest.main()
