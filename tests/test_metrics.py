"""
Metric Tests
============

Tests for pixel distance strategies and the sampled scene-change metric.
"""

import numpy as np
import pytest

from keyframe_mosaic.metrics import (
    ChannelDistance,
    SampleMetric,
    pixel_distances,
    sample_coordinates,
)


class TestPixelDistances:
    """Tests for per-pixel distance strategies."""

    def test_summed_cancels_opposite_deltas(self):
        """Summed distance takes the absolute value after adding deltas."""
        a = np.array([[100, 100, 100]], dtype=np.uint8)
        b = np.array([[110, 90, 100]], dtype=np.uint8)
        assert pixel_distances(a, b, ChannelDistance.SUMMED).tolist() == [0]

    def test_per_channel_adds_absolute_deltas(self):
        """Per-channel distance is the L1 norm of the deltas."""
        a = np.array([[100, 100, 100]], dtype=np.uint8)
        b = np.array([[110, 90, 100]], dtype=np.uint8)
        assert pixel_distances(a, b, ChannelDistance.PER_CHANNEL).tolist() == [20]

    def test_no_uint8_wraparound(self):
        """Deltas are computed in a signed type."""
        a = np.array([[255, 255, 255]], dtype=np.uint8)
        b = np.array([[0, 0, 0]], dtype=np.uint8)
        assert pixel_distances(a, b).tolist() == [765]
        assert pixel_distances(b, a).tolist() == [765]

    def test_strategy_from_string(self):
        """Strategies round-trip through their config values."""
        assert ChannelDistance("summed") is ChannelDistance.SUMMED
        assert ChannelDistance("per_channel") is ChannelDistance.PER_CHANNEL


class TestSampleCoordinates:
    """Tests for the sample lattice."""

    def test_truncating_mapping(self):
        """Coordinates are c * size // D."""
        ys, xs = sample_coordinates(10, 20, 30)
        assert len(ys) == 30 and len(xs) == 30
        assert ys[:4].tolist() == [0, 0, 0, 1]
        assert ys[-1] == 29 * 10 // 30
        assert xs[-1] == 29 * 20 // 30

    def test_coordinates_stay_in_bounds(self):
        """Every sample lies inside the image."""
        ys, xs = sample_coordinates(7, 3, 30)
        assert ys.max() < 7
        assert xs.max() < 3


class TestSampleMetric:
    """Tests for SampleMetric.compare."""

    def test_identical_images_score_zero(self, rng):
        """An image compared with itself scores 0."""
        image = rng.integers(0, 256, size=(48, 64, 3), dtype=np.uint8)
        assert SampleMetric().compare(image, image) == 0

    def test_black_to_white(self, black_frame, white_frame):
        """Black vs white scores the average per-channel difference."""
        score = SampleMetric().compare(black_frame, white_frame)
        assert score == pytest.approx(255.0)
        assert score > 24

    def test_symmetric(self, rng):
        """compare(a, b) == compare(b, a)."""
        a = rng.integers(0, 256, size=(30, 40, 3), dtype=np.uint8)
        b = rng.integers(0, 256, size=(30, 40, 3), dtype=np.uint8)
        metric = SampleMetric()
        assert metric.compare(a, b) == pytest.approx(metric.compare(b, a))

    def test_mismatched_dimensions_score_zero(self, solid_image):
        """Images of different sizes are not comparable."""
        a = solid_image(10, 10, (0, 0, 0))
        b = solid_image(12, 10, (255, 255, 255))
        assert SampleMetric().compare(a, b) == 0

    def test_uniform_shift(self, solid_image):
        """A uniform gray shift of d scores d."""
        a = solid_image(16, 9, (40, 40, 40))
        b = solid_image(16, 9, (50, 50, 50))
        assert SampleMetric().compare(a, b) == pytest.approx(10.0)

    def test_per_channel_strategy(self, solid_image):
        """Hue shifts are invisible to summed but not to per_channel."""
        a = solid_image(10, 10, (100, 100, 100))
        b = solid_image(10, 10, (130, 70, 100))
        assert SampleMetric(distance=ChannelDistance.SUMMED).compare(a, b) == 0
        assert SampleMetric(distance="per_channel").compare(a, b) == pytest.approx(20.0)

    def test_only_samples_lattice(self, solid_image):
        """Pixels between sample points do not affect the score."""
        a = solid_image(100, 100, (0, 0, 0))
        b = a.copy()
        # with D=10 on a 100x100 image, samples sit on multiples of 10
        b[5, 5] = (255, 255, 255)
        assert SampleMetric(sampling_density=10).compare(a, b) == 0

        b[10, 10] = (255, 255, 255)
        assert SampleMetric(sampling_density=10).compare(a, b) == pytest.approx(765 / 300)

    def test_weight(self):
        """Weight is 1 / (3 * D^2)."""
        assert SampleMetric(sampling_density=30).weight == pytest.approx(1 / 2700)

    def test_rejects_zero_density(self):
        """Density must be at least 1."""
        with pytest.raises(ValueError):
            SampleMetric(sampling_density=0)
