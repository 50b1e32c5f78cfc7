"""
Validation utilities for the PixEvo system.

Images are validated where they enter the genetic operators; evolution
settings are validated once, before the first generation is built.
"""

from typing import Any, List, Tuple

import numpy as np

from ..core.exceptions import ValidationError, ConfigurationError
from ..core.logging import get_logger


def validate_image(image: Any, name: str = "image") -> bool:
    """
    Validate an in-memory RGB image.

    Args:
        image: Array to validate
        name: Name used in error messages

    Returns:
        True if validation passes

    Raises:
        ValidationError: If the array is not a non-empty (H, W, 3) uint8 array
    """
    if not isinstance(image, np.ndarray):
        raise ValidationError(f"Expected {name} to be a numpy array, got {type(image)}")

    if image.ndim != 3 or image.shape[2] != 3:
        raise ValidationError(
            f"Expected {name} with shape (height, width, 3)", details={"shape": image.shape}
        )

    if image.dtype != np.uint8:
        raise ValidationError(f"Expected {name} of dtype uint8, got {image.dtype}")

    if image.shape[0] == 0 or image.shape[1] == 0:
        raise ValidationError(f"{name} has zero area", details={"shape": image.shape})

    return True


def validate_same_dimensions(first: np.ndarray, second: np.ndarray) -> bool:
    """
    Check that two images share width and height.

    Raises:
        ValidationError: If the shapes differ
    """
    if first.shape != second.shape:
        raise ValidationError(
            "Images must have identical dimensions",
            details={"first": first.shape, "second": second.shape}
        )
    return True


def validate_dimensions(width: Any, height: Any) -> Tuple[int, int]:
    """
    Validate requested image dimensions.

    Returns:
        (width, height) as ints

    Raises:
        ConfigurationError: If either dimension is not a positive integer
    """
    errors = []
    for label, value in (("width", width), ("height", height)):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value <= 0:
            errors.append(f"Image {label} must be a positive integer, got {value!r}")
    if errors:
        raise ConfigurationError("Invalid image dimensions", details=errors)
    return int(width), int(height)


def validate_evolution_config(config: Any) -> bool:
    """
    Validate evolution settings.

    Every problem is collected so a single error reports all of them.

    Args:
        config: EvolutionConfig (or any object with the same attributes)

    Returns:
        True if validation passes

    Raises:
        ConfigurationError: If validation fails
    """
    logger = get_logger(__name__)

    if config is None:
        raise ConfigurationError("Evolution configuration cannot be None")

    errors: List[str] = []

    if not _is_int(config.population_size) or config.population_size < 2:
        errors.append("Population size must be an integer of at least 2")

    if not _is_int(config.max_generations) or config.max_generations < 1:
        errors.append("Max generations must be a positive integer")

    if not isinstance(config.cross_rate, (int, float)) or not 0.0 <= config.cross_rate <= 1.0:
        errors.append("Cross rate must be between 0 and 1")

    if not _is_int(config.seed) or config.seed < 0:
        errors.append("Seed must be a non-negative integer")

    if config.crossover_seed is not None and (
        not _is_int(config.crossover_seed) or config.crossover_seed < 0
    ):
        errors.append("Crossover seed must be a non-negative integer")

    if not _is_int(config.checkpoint_interval) or config.checkpoint_interval < 1:
        errors.append("Checkpoint interval must be a positive integer")

    if not _is_int(config.log_interval) or config.log_interval < 1:
        errors.append("Log interval must be a positive integer")

    if not _is_int(config.n_jobs) or config.n_jobs < 1:
        errors.append("Number of jobs must be a positive integer")

    if errors:
        raise ConfigurationError("Evolution configuration validation failed", details=errors)

    logger.debug("Evolution configuration validation passed")
    return True


def _is_int(value: Any) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)
