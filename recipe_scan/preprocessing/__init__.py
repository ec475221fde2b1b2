"""Image preprocessing module."""

from recipe_scan.preprocessing.encoder import EncodedImage, ImageEncoder

__all__ = ["EncodedImage", "ImageEncoder"]
