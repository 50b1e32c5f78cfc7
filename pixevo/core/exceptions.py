"""
Custom exceptions for the PixEvo image evolution system.

Configuration problems are reported before any generation runs; the other
types cover malformed images, image file I/O, and misuse of the genetic
operators.
"""

from typing import Optional, Any


class PixEvoException(Exception):
    """Base exception for errors."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class ConfigurationError(PixEvoException):
    """Raised when run settings are invalid (population size, dimensions, rates)."""
    pass


class ValidationError(PixEvoException):
    """Raised when an image or operator argument fails validation."""
    pass


class ImageError(PixEvoException):
    """Raised when an image file cannot be read, decoded or written."""
    pass


class OptimizationError(PixEvoException):
    """Raised when there are issues during the evolutionary loop."""
    pass


class SelectionError(OptimizationError):
    """Raised when parents cannot be selected from a generation."""
    pass
