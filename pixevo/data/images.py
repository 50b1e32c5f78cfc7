"""
Image file I/O for PixEvo.

Images are exchanged with the genetic algorithm as (height, width, 3)
uint8 numpy arrays; Pillow handles decoding, resizing and PNG encoding.
"""

from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from ..core.exceptions import ImageError
from ..core.logging import get_logger
from ..utils.helpers import ensure_directory
from ..utils.validators import validate_image, validate_dimensions
from ..optimization.genetic.individual import Individual

logger = get_logger(__name__)


def load_image(file_path: Union[str, Path]) -> np.ndarray:
    """
    Load an image file as an RGB array.

    Args:
        file_path: Path to any format Pillow can decode

    Returns:
        Array of shape (height, width, 3), dtype uint8

    Raises:
        ImageError: If the file is missing or cannot be decoded
    """
    file_path = Path(file_path)
    try:
        with Image.open(file_path) as img:
            rgb = img.convert("RGB")
    except FileNotFoundError:
        raise ImageError(f"Image file not found: {file_path}")
    except (UnidentifiedImageError, OSError) as e:
        raise ImageError(f"Failed to open image {file_path}: {str(e)}")

    image = np.asarray(rgb, dtype=np.uint8).copy()
    logger.debug(f"Loaded {file_path} ({image.shape[1]}x{image.shape[0]})")
    return image


def resize_image(image: np.ndarray, width: int, height: int) -> np.ndarray:
    """Resize to exactly width x height with a Lanczos filter."""
    validate_image(image)
    width, height = validate_dimensions(width, height)
    resized = Image.fromarray(image).resize((width, height), Image.Resampling.LANCZOS)
    return np.asarray(resized, dtype=np.uint8).copy()


def save_png(image: np.ndarray, file_path: Union[str, Path]) -> Path:
    """
    Encode an RGB array as PNG.

    Raises:
        ImageError: If the file cannot be written
    """
    validate_image(image)
    file_path = Path(file_path)
    ensure_directory(file_path.parent)
    try:
        Image.fromarray(np.ascontiguousarray(image)).save(file_path, format="PNG")
    except OSError as e:
        raise ImageError(f"Failed to save image {file_path}: {str(e)}")
    logger.debug(f"Saved {file_path}")
    return file_path


class PngCheckpointWriter:
    """
    Checkpoint callback that writes the best image of a generation.

    Files are named `<prefix><generation>.png` inside `output_dir`.
    """

    def __init__(self, output_dir: Union[str, Path], prefix: str = "iteration"):
        self.output_dir = ensure_directory(output_dir)
        self.prefix = prefix
        self.written = []

    def path_for(self, generation: int) -> Path:
        return self.output_dir / f"{self.prefix}{generation}.png"

    def __call__(self, generation: int, individual: Individual) -> None:
        path = save_png(individual.image, self.path_for(generation))
        self.written.append(path)
        logger.info(f"Saved best image of generation {generation} to {path}")
