"""
Utility functions for the PixEvo system.

This module contains validators, decorators, and helper functions.
"""

from .validators import (
    validate_image,
    validate_same_dimensions,
    validate_dimensions,
    validate_evolution_config
)
from .decorators import log_execution_time
from .helpers import ensure_directory, safe_divide, format_percentage, date_seed

__all__ = [
    "validate_image",
    "validate_same_dimensions",
    "validate_dimensions",
    "validate_evolution_config",
    "log_execution_time",
    "ensure_directory",
    "safe_divide",
    "format_percentage",
    "date_seed"
]
