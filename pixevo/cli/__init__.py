"""
Command Line Interface for PixEvo.

This package provides the `pixevo` entry point and the evolve command.
"""

from .evolve import evolve_command

__all__ = [
    'evolve_command'
]
