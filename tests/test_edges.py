import numpy as np
import pytest

from pulsemeter.core import EdgeKind, InvalidInputError, Level, classify, detect_edges, next_level


class TestNextLevel:
    def test_above_to_below_emits_falling(self):
        assert next_level(Level.ABOVE, 1.0, 2.0, 3.0) == (Level.BELOW, EdgeKind.FALLING)

    def test_below_to_above_emits_rising(self):
        assert next_level(Level.BELOW, 3.0, 2.0, 3.0) == (Level.ABOVE, EdgeKind.RISING)

    def test_inside_band_keeps_level(self):
        assert next_level(Level.ABOVE, 2.5, 2.0, 3.0) == (Level.ABOVE, None)
        assert next_level(Level.BELOW, 2.5, 2.0, 3.0) == (Level.BELOW, None)
        assert next_level(Level.BETWEEN, 2.5, 2.0, 3.0) == (Level.BETWEEN, None)

    def test_leaving_between_emits_nothing(self):
        assert next_level(Level.BETWEEN, 0.0, 2.0, 3.0) == (Level.BELOW, None)
        assert next_level(Level.BETWEEN, 9.0, 2.0, 3.0) == (Level.ABOVE, None)

    def test_classify(self):
        assert classify(3.0, 2.0, 3.0) is Level.ABOVE
        assert classify(2.0, 2.0, 3.0) is Level.BELOW
        assert classify(2.5, 2.0, 3.0) is Level.BETWEEN


class TestDetectEdges:
    def test_alternating_pulses(self):
        rising, falling = detect_edges([0.0, 5.0, 0.0, 5.0, 0.0], 2.0, 3.0)
        np.testing.assert_array_equal(rising, [1, 3])
        np.testing.assert_array_equal(falling, [2, 4])

    def test_first_sample_never_an_edge(self):
        rising, falling = detect_edges([5.0, 5.0, 0.0], 2.0, 3.0)
        np.testing.assert_array_equal(rising, [])
        np.testing.assert_array_equal(falling, [2])

    def test_starts_between_thresholds(self):
        # The first exit from the band only sets the baseline.
        rising, falling = detect_edges([2.5, 5.0, 0.0, 5.0], 2.0, 3.0)
        np.testing.assert_array_equal(rising, [3])
        np.testing.assert_array_equal(falling, [2])

    def test_hysteresis_suppresses_chatter(self):
        data = [0.0, 2.5, 1.9, 2.9, 3.0, 2.1, 2.5, 2.0]
        rising, falling = detect_edges(data, 2.0, 3.0)
        np.testing.assert_array_equal(rising, [4])
        np.testing.assert_array_equal(falling, [7])

    def test_equal_thresholds(self):
        rising, falling = detect_edges([0.0, 2.5, 0.0], 2.5, 2.5)
        np.testing.assert_array_equal(rising, [1])
        np.testing.assert_array_equal(falling, [2])

    def test_single_sample(self):
        rising, falling = detect_edges([5.0], 2.0, 3.0)
        assert rising.size == 0
        assert falling.size == 0

    def test_square_wave(self, square_wave):
        rising, falling = detect_edges(square_wave(), 2.0, 3.0)
        np.testing.assert_array_equal(rising, np.arange(3, 200, 20))
        np.testing.assert_array_equal(falling, np.arange(8, 200, 20))

    @pytest.mark.parametrize("seed", [0, 1, 2])
    def test_noise_gives_ordered_disjoint_lists(self, seed):
        rng = np.random.default_rng(seed)
        data = rng.uniform(0.0, 5.0, size=500)
        rising, falling = detect_edges(data, 2.0, 3.0)
        assert np.all(np.diff(rising) > 0)
        assert np.all(np.diff(falling) > 0)
        assert not set(rising.tolist()) & set(falling.tolist())
        assert abs(rising.size - falling.size) <= 1

    def test_inverted_thresholds(self):
        with pytest.raises(InvalidInputError):
            detect_edges([0.0, 5.0], 3.0, 2.0)

    def test_empty_samples(self):
        with pytest.raises(InvalidInputError):
            detect_edges([], 2.0, 3.0)
