"""
Individual representation for the image genetic algorithm.

An individual owns one candidate image and the fitness it scored against
the target in the current generation.
"""

import math
from typing import Tuple

import numpy as np

from pixevo.utils.validators import validate_image
from .similarity import similarity

# Below every valid score; NaN is handled separately by selection.
UNSCORED = float("-inf")


class Individual:
    """
    One candidate image and its cached fitness.

    The image array is made read-only on construction, so a parent can be
    shared by several children without defensive copies.
    """

    def __init__(self, image: np.ndarray, fitness: float = UNSCORED):
        """
        Initialize an individual.

        Args:
            image: RGB image, shape (height, width, 3), dtype uint8
            fitness: Initial fitness (unscored by default)
        """
        validate_image(image)
        # Views are copied too, their base may still be writable
        if image.flags.writeable or not image.flags.owndata:
            image = image.copy()
            image.flags.writeable = False
        self.image = image
        self.fitness = fitness

    @property
    def width(self) -> int:
        return self.image.shape[1]

    @property
    def height(self) -> int:
        return self.image.shape[0]

    @property
    def dimensions(self) -> Tuple[int, int]:
        """(width, height) of the image."""
        return self.width, self.height

    @property
    def is_scored(self) -> bool:
        return self.fitness != UNSCORED

    def evaluate(self, target: np.ndarray) -> float:
        """
        Score this individual against the target image.

        Args:
            target: Target image with the same dimensions

        Returns:
            The new fitness value
        """
        self.fitness = similarity(target, self.image)
        return self.fitness

    def __repr__(self) -> str:
        if math.isnan(self.fitness):
            score = "nan"
        elif self.is_scored:
            score = f"{self.fitness:.6f}"
        else:
            score = "unscored"
        return f"Individual({self.width}x{self.height}, fitness={score})"
