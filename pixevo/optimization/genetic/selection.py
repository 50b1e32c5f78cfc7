"""
Parent selection for the image genetic algorithm.
"""

import math
from typing import List, Sequence, Tuple

from pixevo.core.exceptions import SelectionError
from .individual import Individual


def fitness_sort_key(individual: Individual) -> Tuple[bool, float]:
    """Ascending key with NaN below every number, including -inf."""
    fitness = individual.fitness
    if math.isnan(fitness):
        return (False, 0.0)
    return (True, fitness)


def rank_by_fitness(generation: Sequence[Individual]) -> List[Individual]:
    """
    Individuals ordered by fitness, best first.

    The sort is stable, so ties keep their order in `generation`. The input
    sequence is not modified.
    """
    return sorted(generation, key=fitness_sort_key, reverse=True)


def select_top_two(generation: Sequence[Individual]) -> Tuple[Individual, Individual]:
    """
    Select the two fittest individuals of a generation.

    Args:
        generation: Scored individuals

    Returns:
        Tuple of (best, second_best)

    Raises:
        SelectionError: If the generation has fewer than two individuals
    """
    if len(generation) == 0:
        raise SelectionError("No individuals in the generation")
    if len(generation) == 1:
        raise SelectionError("At least two individuals are required in the generation")

    ranked = rank_by_fitness(generation)
    return ranked[0], ranked[1]
