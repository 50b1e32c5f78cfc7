"""
Tests for the image similarity metric.
"""

import math

import numpy as np
import pytest

from pixevo.core.exceptions import ValidationError
from pixevo.optimization.genetic.similarity import (
    to_luma,
    luma_mean,
    luma_std_dev,
    structure_mean,
    component_similarity,
    similarity,
    pixel_difference_sum
)

pytestmark = [
    pytest.mark.unit,
    pytest.mark.optimization,
    pytest.mark.genetic
]


class TestLumaStatistics:
    """Test the luma conversion and per-image statistics."""

    def test_to_luma_primaries(self):
        """Pure red, green and blue map to their Rec. 709 weights."""
        image = np.array([[[255, 0, 0], [0, 255, 0], [0, 0, 255]]], dtype=np.uint8)
        luma = to_luma(image)

        assert luma.shape == (1, 3)
        assert list(luma[0]) == [54.0, 182.0, 18.0]

    def test_to_luma_truncates(self):
        """Fractional levels are dropped, not rounded: 0.0722 * 7 = 0.5054 maps to 0."""
        image = np.array([[[0, 0, 7], [1, 1, 0]]], dtype=np.uint8)
        assert list(to_luma(image)[0]) == [0.0, 0.0]

    def test_to_luma_white(self, solid_image):
        assert np.all(to_luma(solid_image(2, 2, (255, 255, 255))) == 255.0)

    def test_to_luma_grey_is_unchanged(self, solid_image):
        luma = to_luma(solid_image(3, 3, (77, 77, 77)))
        assert np.all(luma == 77.0)

    def test_mean_and_std_dev(self):
        luma = np.array([[0.0, 10.0], [20.0, 30.0]])
        mean = luma_mean(luma)

        assert mean == 15.0
        assert luma_std_dev(luma, mean) == pytest.approx(np.std(luma))

    def test_std_dev_of_flat_image_is_zero(self):
        luma = np.full((4, 4), 200.0)
        assert luma_std_dev(luma, luma_mean(luma)) == 0.0

    def test_structure_uses_first_nine_pixels(self):
        """Only the first nine flattened pixels are paired with the kernels."""
        luma = np.zeros((4, 4))
        luma.ravel()[2] = 100.0   # Gx weight 1, Gy weight -1
        luma.ravel()[12] = 250.0  # beyond the kernel, only affects the mean
        mean = luma_mean(luma)

        expected = math.sqrt(100.0 ** 2 + 100.0 ** 2) / 16 / mean
        assert structure_mean(luma, mean) == pytest.approx(expected)

    def test_structure_of_tiny_image(self):
        """Images with fewer than nine pixels use a truncated kernel."""
        luma = np.array([[10.0, 20.0]])
        mean = luma_mean(luma)

        # Gx = [-1, 0], Gy = [-1, -2]
        expected = math.sqrt(10.0 ** 2 + 50.0 ** 2) / 2 / mean
        assert structure_mean(luma, mean) == pytest.approx(expected)

    def test_structure_of_black_image_is_zero(self):
        luma = np.zeros((3, 3))
        assert structure_mean(luma, 0.0) == 0.0


class TestComponentSimilarity:
    """Test the symmetric 2ab / (a^2 + b^2) comparison."""

    def test_equal_values(self):
        assert component_similarity(0.37, 0.37) == 1.0

    def test_both_zero(self):
        assert component_similarity(0.0, 0.0) == 1.0

    def test_one_zero(self):
        assert component_similarity(0.0, 5.0) == 0.0

    def test_known_value(self):
        assert component_similarity(1.0, 2.0) == pytest.approx(0.8)

    def test_bounded(self):
        values = np.linspace(0.0, 300.0, 25)
        for a in values:
            for b in values:
                assert 0.0 <= component_similarity(a, b) <= 1.0


class TestSimilarity:
    """Test the full similarity score."""

    def test_identical_random_images(self, random_rgb):
        for seed in range(5):
            image = random_rgb(7, 5, seed=seed)
            assert similarity(image, image.copy()) == 1.0

    def test_identical_gradient_image(self, gradient_image):
        assert similarity(gradient_image, gradient_image) == 1.0

    def test_identical_flat_images(self, solid_image):
        """Flat images have zero contrast and structure but still score 1.0."""
        image = solid_image(3, 3, (120, 40, 200))
        assert similarity(image, image) == 1.0

    def test_identical_black_images(self, solid_image):
        image = solid_image(3, 3, (0, 0, 0))
        assert similarity(image, image) == 1.0

    def test_symmetric(self, random_rgb):
        for seed in range(5):
            a = random_rgb(9, 9, seed=seed)
            b = random_rgb(9, 9, seed=seed + 100)
            assert similarity(a, b) == similarity(b, a)

    def test_range_for_random_images(self, random_rgb):
        target = random_rgb(20, 20, seed=1)
        for seed in range(2, 12):
            score = similarity(target, random_rgb(20, 20, seed=seed))
            assert 0.0 <= score <= 1.0

    def test_flat_target_against_noise_is_zero(self, solid_image, random_rgb):
        """A flat target has no contrast, so any textured candidate scores 0."""
        target = solid_image(3, 3, (90, 90, 90))
        assert similarity(target, random_rgb(3, 3, seed=4)) == 0.0

    def test_black_candidate_is_not_nan(self, random_rgb, solid_image):
        score = similarity(random_rgb(3, 3, seed=2), solid_image(3, 3, (0, 0, 0)))
        assert not math.isnan(score)
        assert score == 0.0

    def test_closer_image_scores_higher(self, gradient_image):
        slightly_off = gradient_image.copy()
        slightly_off[0, 0] = (slightly_off[0, 0].astype(int) + 10).astype(np.uint8)
        inverted = 255 - gradient_image

        assert similarity(gradient_image, slightly_off) > similarity(gradient_image, inverted)

    def test_does_not_modify_inputs(self, random_rgb):
        a = random_rgb(5, 5, seed=1)
        b = random_rgb(5, 5, seed=2)
        a_before, b_before = a.copy(), b.copy()

        similarity(a, b)

        assert np.array_equal(a, a_before)
        assert np.array_equal(b, b_before)

    def test_dimension_mismatch(self, random_rgb):
        with pytest.raises(ValidationError):
            similarity(random_rgb(3, 3), random_rgb(4, 3))

    def test_zero_area_image(self):
        empty = np.zeros((0, 3, 3), dtype=np.uint8)
        with pytest.raises(ValidationError):
            similarity(empty, empty)

    def test_rejects_wrong_dtype(self, random_rgb):
        image = random_rgb(3, 3)
        with pytest.raises(ValidationError):
            similarity(image.astype(np.float64), image.astype(np.float64))


class TestPixelDifferenceSum:
    """Test the L1 pixel distance."""

    def test_identical_images(self, random_rgb):
        image = random_rgb(6, 6)
        assert pixel_difference_sum(image, image) == 0.0

    def test_known_difference(self, solid_image):
        a = solid_image(2, 2, (10, 20, 30))
        b = solid_image(2, 2, (20, 0, 30))
        # (10 + 20 + 0) per pixel, four pixels
        assert pixel_difference_sum(a, b) == 120.0

    def test_no_uint8_wraparound(self, solid_image):
        a = solid_image(1, 1, (0, 0, 0))
        b = solid_image(1, 1, (255, 255, 255))
        assert pixel_difference_sum(a, b) == 765.0
        assert pixel_difference_sum(b, a) == 765.0
