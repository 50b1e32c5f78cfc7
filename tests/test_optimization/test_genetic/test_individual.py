"""
Tests for the Individual data holder.
"""

import math

import numpy as np
import pytest

from pixevo.core.exceptions import ValidationError
from pixevo.optimization.genetic.individual import Individual, UNSCORED

pytestmark = [
    pytest.mark.unit,
    pytest.mark.optimization,
    pytest.mark.genetic
]


class TestIndividual:
    """Test Individual construction and evaluation."""

    def test_individual_creation(self, random_rgb):
        image = random_rgb(5, 4)
        individual = Individual(image)

        assert individual.fitness == UNSCORED
        assert not individual.is_scored
        assert individual.width == 5
        assert individual.height == 4
        assert individual.dimensions == (5, 4)
        assert np.array_equal(individual.image, image)

    def test_unscored_is_below_any_score(self):
        assert UNSCORED < 0.0

    def test_image_is_read_only(self, random_rgb):
        individual = Individual(random_rgb(3, 3))

        with pytest.raises(ValueError):
            individual.image[0, 0, 0] = 1

    def test_source_array_is_not_frozen(self, random_rgb):
        """Constructing from a writable array copies it instead of freezing the caller's data."""
        image = random_rgb(3, 3)
        Individual(image)

        image[0, 0, 0] = 7
        assert image.flags.writeable

    def test_read_only_image_is_shared(self, random_rgb):
        image = random_rgb(3, 3)
        image.flags.writeable = False

        assert Individual(image).image is image

    def test_read_only_view_is_copied(self):
        """A frozen view of a writable array cannot change the individual later."""
        base = np.zeros((3, 3, 3), dtype=np.uint8)
        view = base.view()
        view.flags.writeable = False

        individual = Individual(view)
        base[0, 0] = 255

        assert individual.image is not view
        assert np.all(individual.image == 0)
        assert not individual.image.flags.writeable

    def test_read_only_slice_is_copied(self, random_rgb):
        image = random_rgb(6, 6)
        corner = image[:3, :3]
        corner.flags.writeable = False
        before = corner.copy()

        individual = Individual(corner)
        image[:] = 0

        assert np.array_equal(individual.image, before)

    def test_rejects_invalid_image(self):
        with pytest.raises(ValidationError):
            Individual(np.zeros((3, 3), dtype=np.uint8))

    def test_evaluate_identical_target(self, random_rgb):
        image = random_rgb(4, 4, seed=3)
        individual = Individual(image)

        assert individual.evaluate(image) == 1.0
        assert individual.fitness == 1.0
        assert individual.is_scored

    def test_evaluate_is_idempotent(self, random_rgb):
        target = random_rgb(6, 6, seed=1)
        individual = Individual(random_rgb(6, 6, seed=2))

        first = individual.evaluate(target)
        second = individual.evaluate(target)

        assert first == second
        assert 0.0 <= first <= 1.0

    def test_evaluate_dimension_mismatch(self, random_rgb):
        individual = Individual(random_rgb(3, 3))

        with pytest.raises(ValidationError):
            individual.evaluate(random_rgb(4, 4))

    def test_repr(self, random_rgb):
        individual = Individual(random_rgb(3, 2))
        assert repr(individual) == "Individual(3x2, fitness=unscored)"

        individual.fitness = 0.5
        assert repr(individual) == "Individual(3x2, fitness=0.500000)"

        individual.fitness = math.nan
        assert repr(individual) == "Individual(3x2, fitness=nan)"
