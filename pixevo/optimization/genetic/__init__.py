"""
Genetic algorithm that evolves random pixel images toward a target image.
"""

from .similarity import similarity, pixel_difference_sum
from .individual import Individual, UNSCORED
from .population import initialize
from .selection import select_top_two, rank_by_fitness
from .crossover import crossover, generate_next_generation
from .evolution import ImageEvolution, EvolutionConfig, GenerationResult

__all__ = [
    "similarity",
    "pixel_difference_sum",
    "Individual",
    "UNSCORED",
    "initialize",
    "select_top_two",
    "rank_by_fitness",
    "crossover",
    "generate_next_generation",
    "ImageEvolution",
    "EvolutionConfig",
    "GenerationResult"
]
