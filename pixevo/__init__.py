"""
PixEvo - Genetic Image Reconstruction

Evolves a population of random pixel images toward a target image using
structural similarity as fitness and pixel-wise crossover of the two
fittest individuals.
"""

__version__ = "0.1.0"

from .core.config import Config
from .core.logging import setup_logging
from .optimization.genetic import (
    ImageEvolution,
    EvolutionConfig,
    Individual,
    similarity
)

__all__ = [
    "Config",
    "setup_logging",
    "ImageEvolution",
    "EvolutionConfig",
    "Individual",
    "similarity"
]
