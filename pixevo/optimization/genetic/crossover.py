"""
Pixel-wise recombination of two parent images.

Every pixel of a child is an independent Bernoulli draw: with probability
`cross_rate` it comes from the first parent, otherwise from the second.
There is no mutation; children only ever contain parent pixels.
"""

from typing import List, Optional

import numpy as np

from pixevo.core.exceptions import ValidationError
from pixevo.utils.validators import validate_same_dimensions
from .individual import Individual


def _check_cross_rate(cross_rate: float) -> None:
    if not isinstance(cross_rate, (int, float)) or not 0.0 <= cross_rate <= 1.0:
        raise ValidationError("Cross rate must be between 0 and 1", details={"cross_rate": cross_rate})


def crossover(
    parent_a: Individual,
    parent_b: Individual,
    cross_rate: float,
    rng: Optional[np.random.Generator] = None
) -> np.ndarray:
    """
    Produce one child image from two parents.

    Args:
        parent_a: Parent whose pixels are taken on success
        parent_b: Parent whose pixels are taken on failure
        cross_rate: Per-pixel probability of taking parent_a's pixel
        rng: Random generator; a fresh unseeded one when omitted

    Returns:
        New read-only image; the parents are not modified
    """
    _check_cross_rate(cross_rate)
    validate_same_dimensions(parent_a.image, parent_b.image)
    rng = rng if rng is not None else np.random.default_rng()

    # random() is in [0, 1): rate 1.0 always picks parent_a, 0.0 never does
    take_a = rng.random((parent_a.height, parent_a.width)) < cross_rate
    child = np.where(take_a[:, :, np.newaxis], parent_a.image, parent_b.image)
    child.flags.writeable = False
    return child


def generate_next_generation(
    best: Individual,
    second_best: Individual,
    cross_rate: float,
    population_size: int,
    rng: Optional[np.random.Generator] = None
) -> List[Individual]:
    """
    Replace a generation by `population_size` independent crossovers.

    The parents do not survive unless a child happens to reproduce one.

    Returns:
        List of new unscored individuals
    """
    _check_cross_rate(cross_rate)
    if isinstance(population_size, bool) or not isinstance(population_size, int) or population_size < 1:
        raise ValidationError(
            "Population size must be a positive integer",
            details={"population_size": population_size}
        )
    rng = rng if rng is not None else np.random.default_rng()

    return [
        Individual(crossover(best, second_best, cross_rate, rng))
        for _ in range(population_size)
    ]
