"""
Core functionality for the PixEvo system.

This module contains configuration management, logging setup, and custom exceptions.
"""

from .config import Config
from .exceptions import (
    PixEvoException,
    ConfigurationError,
    ValidationError,
    ImageError,
    OptimizationError,
    SelectionError
)
from .logging import setup_logging, get_logger

__all__ = [
    "Config",
    "PixEvoException",
    "ConfigurationError",
    "ValidationError",
    "ImageError",
    "OptimizationError",
    "SelectionError",
    "setup_logging",
    "get_logger"
]
