"""
Unit tests for the BeatScheduler and IdleMonitor, driven by a fake loop clock.
"""

import unittest
from unittest.mock import MagicMock

from fake_loop import FakeLoop
from stridebeat.cadence.idle import IdleMonitor
from stridebeat.cadence.scheduler import BeatScheduler

class TestBeatScheduler(unittest.TestCase):

    def setUp(self):
        self.loop = FakeLoop(start=10.0)
        self.beat_times = []
        self.scheduler = BeatScheduler(self.loop, lambda: self.beat_times.append(self.loop.time()))

    def test_start_beats_immediately(self):
        self.scheduler.start(120.0)
        self.assertEqual(self.beat_times, [10.0])
        self.assertTrue(self.scheduler.active)
        self.assertEqual(self.loop.pending(), 1)

    def test_period_matches_tempo(self):
        self.scheduler.start(150.0)
        self.loop.advance(3.9)
        gaps = [b - a for a, b in zip(self.beat_times, self.beat_times[1:])]
        self.assertEqual(len(self.beat_times), 10)
        for gap in gaps:
            self.assertAlmostEqual(gap, 0.4)
        self.assertAlmostEqual(self.scheduler.interval, 0.4)

    def test_restart_replaces_chain(self):
        self.scheduler.start(60.0)
        self.loop.advance(0.5)
        self.scheduler.restart(120.0)
        self.assertEqual(self.beat_times, [10.0, 10.5])
        self.assertEqual(self.loop.pending(), 1)

        self.loop.advance(1.0)
        self.assertEqual(self.beat_times, [10.0, 10.5, 11.0, 11.5])

    def test_repeated_start_keeps_single_pending_tick(self):
        for bpm in (90.0, 110.0, 130.0):
            self.scheduler.start(bpm)
        self.assertEqual(self.loop.pending(), 1)
        self.assertEqual(self.scheduler.bpm, 130.0)

    def test_stop_leaves_nothing_pending(self):
        self.scheduler.start(120.0)
        self.scheduler.stop()
        self.assertFalse(self.scheduler.active)
        self.assertEqual(self.loop.pending(), 0)
        self.loop.advance(5.0)
        self.assertEqual(self.beat_times, [10.0])

    def test_stop_before_start_is_harmless(self):
        self.scheduler.stop()
        self.assertFalse(self.scheduler.active)

    def test_cancelled_tick_never_fires(self):
        self.scheduler.start(120.0)
        stale_generation = self.scheduler._generation
        self.scheduler.stop()
        # Simulate the loop running a tick it had already dequeued
        self.scheduler._tick(stale_generation)
        self.assertEqual(self.beat_times, [10.0])
        self.assertEqual(self.loop.pending(), 0)

    def test_stop_from_beat_callback(self):
        calls = []

        def on_beat():
            calls.append(self.loop.time())
            if len(calls) == 2:
                scheduler.stop()

        scheduler = BeatScheduler(self.loop, on_beat)
        scheduler.start(120.0)
        self.loop.advance(3.0)
        self.assertEqual(calls, [10.0, 10.5])
        self.assertEqual(self.loop.pending(), 0)

    def test_rejects_non_positive_tempo(self):
        with self.assertRaises(ValueError):
            self.scheduler.start(0.0)

class TestIdleMonitor(unittest.TestCase):

    def setUp(self):
        self.loop = FakeLoop()
        self.on_idle = MagicMock()
        self.monitor = IdleMonitor(self.loop, 2.0, self.on_idle)

    def test_fires_once_after_timeout(self):
        self.monitor.arm()
        self.loop.advance(1.99)
        self.on_idle.assert_not_called()
        self.loop.advance(0.02)
        self.on_idle.assert_called_once()
        self.assertFalse(self.monitor.armed)
        self.loop.advance(10.0)
        self.on_idle.assert_called_once()

    def test_rearm_pushes_deadline_back(self):
        self.monitor.arm()
        self.loop.advance(1.5)
        self.monitor.arm()
        self.loop.advance(1.5)
        self.on_idle.assert_not_called()
        self.assertEqual(self.loop.pending(), 1)
        self.loop.advance(0.6)
        self.on_idle.assert_called_once()

    def test_cancel_prevents_firing(self):
        self.monitor.arm()
        self.monitor.cancel()
        self.loop.advance(5.0)
        self.on_idle.assert_not_called()
        self.assertEqual(self.loop.pending(), 0)

    def test_unarmed_monitor_stays_quiet(self):
        self.loop.advance(60.0)
        self.on_idle.assert_not_called()

if __name__ == '__main__':
    unittest.main()
