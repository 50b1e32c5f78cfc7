"""
Optimization module for PixEvo.

This module provides the genetic algorithm and the image similarity
metric used as its fitness function.
"""

from .genetic.evolution import ImageEvolution, EvolutionConfig
from .genetic.individual import Individual
from .genetic.similarity import similarity

__all__ = [
    "ImageEvolution",
    "EvolutionConfig",
    "Individual",
    "similarity"
]
