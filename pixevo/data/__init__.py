"""
Image loading, resizing and PNG output for PixEvo.
"""

from .images import load_image, resize_image, save_png, PngCheckpointWriter

__all__ = [
    "load_image",
    "resize_image",
    "save_png",
    "PngCheckpointWriter"
]
