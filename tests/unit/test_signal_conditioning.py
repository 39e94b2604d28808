"""
Unit tests for the SignalConditioner and StepDetector.
"""

import unittest

from stridebeat.cadence.conditioner import Sample, SignalConditioner
from stridebeat.cadence.step_detector import StepDetector, StepEvent

class TestSample(unittest.TestCase):

    def test_magnitude_and_seconds_from_acceleration(self):
        sample = Sample.from_acceleration((3.0, 4.0, 12.0), 1500.0)
        self.assertAlmostEqual(sample.magnitude, 13.0)
        self.assertAlmostEqual(sample.timestamp, 1.5)

class TestSignalConditioner(unittest.TestCase):

    def test_mean_of_partial_window(self):
        conditioner = SignalConditioner(window_size=4)
        self.assertAlmostEqual(conditioner.observe(2.0), 2.0)
        self.assertAlmostEqual(conditioner.observe(4.0), 3.0)

    def test_oldest_values_evicted_first(self):
        conditioner = SignalConditioner(window_size=3)
        for value in (100.0, 1.0, 2.0):
            conditioner.observe(value)
        # 100.0 falls out when the fourth value arrives
        self.assertAlmostEqual(conditioner.observe(3.0), 2.0)
        self.assertEqual(len(conditioner), 3)

    def test_window_never_exceeds_size(self):
        conditioner = SignalConditioner(window_size=20)
        for i in range(100):
            conditioner.observe(float(i))
            self.assertLessEqual(len(conditioner), 20)
        self.assertAlmostEqual(conditioner.observe(100.0), sum(range(81, 101)) / 20)

    def test_reset_empties_window(self):
        conditioner = SignalConditioner(window_size=5)
        conditioner.observe(50.0)
        conditioner.reset()
        self.assertEqual(len(conditioner), 0)
        self.assertAlmostEqual(conditioner.observe(9.8), 9.8)

class TestStepDetector(unittest.TestCase):

    def setUp(self):
        self.detector = StepDetector(peak_threshold=10.5, min_step_interval=0.25)

    def test_no_steps_below_threshold(self):
        for i in range(200):
            self.assertIsNone(self.detector.observe(10.5 - (i % 7) * 0.1, 1.0 + i * 0.016))

    def test_rising_edge_emits_once_while_above(self):
        steps = [self.detector.observe(11.0, 1.0 + i * 0.1) for i in range(10)]
        self.assertEqual(steps[0], StepEvent(1.0))
        self.assertTrue(all(step is None for step in steps[1:]))

    def test_new_edge_after_dropping_below(self):
        self.assertIsNotNone(self.detector.observe(11.0, 1.0))
        self.assertIsNone(self.detector.observe(10.0, 1.2))
        step = self.detector.observe(11.0, 1.5)
        self.assertEqual(step, StepEvent(1.5))
        self.assertEqual(self.detector.last_step_timestamp, 1.5)

    def test_debounce_rejects_fast_retrigger(self):
        self.assertIsNotNone(self.detector.observe(11.0, 1.0))
        self.assertIsNone(self.detector.observe(10.0, 1.1))
        self.assertIsNone(self.detector.observe(11.0, 1.2))

    def test_debounce_interval_is_strict(self):
        self.assertIsNotNone(self.detector.observe(11.0, 1.0))
        self.detector.observe(10.0, 1.1)
        self.assertIsNone(self.detector.observe(11.0, 1.25))

    def test_debounced_crossing_still_sets_latch(self):
        self.assertIsNotNone(self.detector.observe(11.0, 1.0))
        self.detector.observe(10.0, 1.1)
        self.assertIsNone(self.detector.observe(11.0, 1.2))
        # Still above: no edge, even once the debounce interval has passed
        self.assertIsNone(self.detector.observe(11.0, 1.6))
        self.assertTrue(self.detector.above_threshold)

    def test_first_step_needs_interval_from_zero(self):
        self.assertIsNone(self.detector.observe(11.0, 0.2))

    def test_threshold_itself_is_not_a_crossing(self):
        self.assertIsNone(self.detector.observe(10.5, 1.0))
        self.assertFalse(self.detector.above_threshold)

    def test_at_most_one_step_per_interval(self):
        accepted = []
        t = 1.0
        for i in range(400):
            value = 11.0 if i % 2 == 0 else 10.0
            if self.detector.observe(value, t) is not None:
                accepted.append(t)
            t += 0.05
        gaps = [b - a for a, b in zip(accepted, accepted[1:])]
        self.assertTrue(gaps)
        self.assertTrue(all(gap > 0.25 for gap in gaps))

    def test_reset_clears_latch_and_last_step(self):
        self.detector.observe(11.0, 1.0)
        self.detector.reset()
        self.assertFalse(self.detector.above_threshold)
        self.assertEqual(self.detector.last_step_timestamp, 0.0)

if __name__ == '__main__':
    unittest.main()
