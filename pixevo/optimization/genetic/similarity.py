"""
Similarity metrics between RGB images.

`similarity` is the fitness function of the image evolution: an SSIM-like
score built from three luma statistics (mean brightness, contrast and a
global edge "structure" scalar), each compared with the symmetric form
2ab / (a^2 + b^2) and multiplied together. Identical images score exactly
1.0; the score lies in [0, 1] for 8-bit images.

`pixel_difference_sum` is a plain L1 distance used for progress reporting.
"""

import numpy as np

from pixevo.utils.helpers import safe_divide
from pixevo.utils.validators import validate_image, validate_same_dimensions

# Rec. 709 luma coefficients in units of 1/10000
LUMA_WEIGHTS = np.array([2126, 7152, 722], dtype=np.int64)
LUMA_SCALE = 10000

# Sobel kernel pair, row-major
SOBEL_X = np.array([-1.0, 0.0, 1.0, -2.0, 0.0, 2.0, -1.0, 0.0, 1.0])
SOBEL_Y = np.array([-1.0, -2.0, -1.0, 0.0, 0.0, 0.0, 1.0, 2.0, 1.0])


def to_luma(image: np.ndarray) -> np.ndarray:
    """
    Convert an (H, W, 3) uint8 image to 8-bit luma levels as float64.

    Integer weighted sum, truncated toward zero; a grey pixel keeps its level.
    """
    luma = (image.astype(np.int64) @ LUMA_WEIGHTS) // LUMA_SCALE
    return luma.astype(np.float64)


def luma_mean(luma: np.ndarray) -> float:
    return float(luma.sum() / luma.size)


def luma_std_dev(luma: np.ndarray, mean: float) -> float:
    """Population standard deviation, E[x^2] - mean^2 clamped at zero."""
    variance = float(np.square(luma).sum() / luma.size) - mean ** 2
    return float(np.sqrt(max(variance, 0.0)))


def structure_mean(luma: np.ndarray, mean: float) -> float:
    """
    Global edge-structure scalar of a luma image.

    The Sobel weights are paired positionally with the flattened pixel
    sequence (a dot product over the first nine pixels, fewer for tiny
    images) rather than convolved. The gradient magnitude is normalized by
    pixel count and by the image's mean luma; an all-black image has no
    structure and yields 0.0.
    """
    pixels = luma.ravel()
    n = min(pixels.size, SOBEL_X.size)
    sum_x = float(np.dot(pixels[:n], SOBEL_X[:n]))
    sum_y = float(np.dot(pixels[:n], SOBEL_Y[:n]))
    magnitude = np.sqrt(sum_x ** 2 + sum_y ** 2) / luma.size
    return safe_divide(float(magnitude), mean, default=0.0)


def component_similarity(a: float, b: float) -> float:
    """2ab / (a^2 + b^2); two zero statistics are identical and compare as 1.0."""
    denominator = a * a + b * b
    if denominator == 0.0:
        return 1.0
    # rounding can push near-equal pairs a hair above 1
    return min(2.0 * a * b / denominator, 1.0)


def similarity(target: np.ndarray, candidate: np.ndarray) -> float:
    """
    Structural similarity of two equally sized RGB images.

    Args:
        target: Reference image, shape (H, W, 3), dtype uint8
        candidate: Image to score, same shape as target

    Returns:
        Product of luma, contrast and structure similarities

    Raises:
        ValidationError: If either image is malformed or the shapes differ
    """
    validate_image(target, "target")
    validate_image(candidate, "candidate")
    validate_same_dimensions(target, candidate)

    luma1 = to_luma(target)
    luma2 = to_luma(candidate)

    mean1 = luma_mean(luma1)
    mean2 = luma_mean(luma2)

    std1 = luma_std_dev(luma1, mean1)
    std2 = luma_std_dev(luma2, mean2)

    structure1 = structure_mean(luma1, mean1)
    structure2 = structure_mean(luma2, mean2)

    luma_similarity = component_similarity(mean1, mean2)
    contrast_similarity = component_similarity(std1, std2)
    structure_similarity = component_similarity(structure1, structure2)

    return luma_similarity * contrast_similarity * structure_similarity


def pixel_difference_sum(first: np.ndarray, second: np.ndarray) -> float:
    """Sum of absolute per-channel differences; 0.0 for identical images."""
    validate_same_dimensions(first, second)
    diff = np.abs(first.astype(np.int32) - second.astype(np.int32))
    return float(diff.sum())
