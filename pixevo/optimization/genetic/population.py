"""
Generation 0 for the image genetic algorithm.

Each individual gets its own generator seeded with `seed + index` (wrapping
at 64 bits), so the initial population depends only on the run seed and the
population size, whether it is built sequentially or in a process pool.
"""

from concurrent.futures import ProcessPoolExecutor
from typing import List

import numpy as np

from pixevo.core.exceptions import ConfigurationError
from pixevo.core.logging import get_logger
from pixevo.utils.validators import validate_dimensions
from .individual import Individual

logger = get_logger(__name__)

SEED_MODULUS = 2 ** 64


def derive_seeds(seed: int, population_size: int) -> List[int]:
    """Per-individual sub-seeds: (seed + i) mod 2**64."""
    return [(seed + i) % SEED_MODULUS for i in range(population_size)]


def random_image(width: int, height: int, seed: int) -> np.ndarray:
    """Uniform random RGB image; every channel byte drawn from [0, 255]."""
    rng = np.random.default_rng(seed)
    return rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8)


def _random_image_task(args) -> np.ndarray:
    width, height, seed = args
    return random_image(width, height, seed)


def initialize(
    population_size: int,
    width: int,
    height: int,
    seed: int,
    n_jobs: int = 1
) -> List[Individual]:
    """
    Build the first generation.

    Args:
        population_size: Number of individuals (at least 2)
        width: Image width in pixels
        height: Image height in pixels
        seed: Run seed (non-negative)
        n_jobs: Worker processes; 1 builds the images in this process

    Returns:
        List of `population_size` unscored individuals

    Raises:
        ConfigurationError: If the size, dimensions or seed are invalid
    """
    if isinstance(population_size, bool) or not isinstance(population_size, int) or population_size < 2:
        raise ConfigurationError(
            "Population size must be an integer of at least 2",
            details={"population_size": population_size}
        )
    width, height = validate_dimensions(width, height)
    if isinstance(seed, bool) or not isinstance(seed, int) or seed < 0:
        raise ConfigurationError("Seed must be a non-negative integer", details={"seed": seed})

    logger.info(f"Initializing population of size {population_size} ({width}x{height}, seed={seed})")

    tasks = [(width, height, s) for s in derive_seeds(seed, population_size)]

    if n_jobs > 1:
        with ProcessPoolExecutor(max_workers=n_jobs) as executor:
            images = list(executor.map(_random_image_task, tasks))
    else:
        images = [_random_image_task(task) for task in tasks]

    generation = [Individual(image) for image in images]
    logger.debug("Population initialized successfully")
    return generation
