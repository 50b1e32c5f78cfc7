"""
Helper utilities for the PixEvo system.
"""

from datetime import date
from pathlib import Path
from typing import Optional, Union


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path

    Returns:
        Path object for the directory
    """
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """
    Safely divide two numbers, returning a default value if denominator is zero.

    Args:
        numerator: Numerator value
        denominator: Denominator value
        default: Default value to return if denominator is zero

    Returns:
        Division result or default value
    """
    if denominator == 0:
        return default
    return numerator / denominator


def format_percentage(value: float, decimal_places: int = 2) -> str:
    """
    Format a decimal value as a percentage string.

    Args:
        value: Decimal value (e.g., 0.05 for 5%)
        decimal_places: Number of decimal places to show

    Returns:
        Formatted percentage string
    """
    return f"{value * 100:.{decimal_places}f}%"


def date_seed(today: Optional[date] = None) -> int:
    """Return the date as a YYYYMMDD integer, used as the default run seed."""
    today = today or date.today()
    return int(today.strftime("%Y%m%d"))
