"""
Image encoding for text extraction requests.
"""

import io
from dataclasses import dataclass
from PIL import Image, ImageOps
import structlog

from recipe_scan.config import ImageSettings, get_settings
from recipe_scan.errors import ImageEncodingError
from recipe_scan.inputs import InputItem

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class EncodedImage:
    """Image bytes ready to send to the service."""
    data: bytes
    mime_type: str
    source_name: str = ""


class ImageEncoder:
    """
    Normalises photos before upload.

    Applies the EXIF orientation, converts to RGB, caps the longest side at
    max_dimension and re-encodes as JPEG.
    """

    MIME_TYPE = "image/jpeg"

    def __init__(self, config: ImageSettings = None):
        """
        Args:
            config: ImageSettings instance (uses default if not provided)
        """
        self.settings = config or get_settings().image

    def encode_bytes(self, image_bytes: bytes, source_name: str = "") -> EncodedImage:
        """
        Decode, normalise and re-encode one photo.

        Raises:
            ImageEncodingError: If any decode, transform or save step fails,
                including images over Pillow's decompression bomb limit
        """
        try:
            return self._encode(image_bytes, source_name)
        except Image.DecompressionBombError as e:
            raise ImageEncodingError(
                f"Image {source_name} is too large to decode: {e}",
                {"source": source_name, "reason": "decompression_bomb"}
            )
        except Exception as e:
            raise ImageEncodingError(
                f"Failed to encode image {source_name}: {e}",
                {"source": source_name, "error_type": type(e).__name__}
            )

    def _encode(self, image_bytes: bytes, source_name: str) -> EncodedImage:
        image = Image.open(io.BytesIO(image_bytes))
        image.load()

        image = ImageOps.exif_transpose(image)
        if image.mode != "RGB":
            image = image.convert("RGB")

        width, height = image.size
        longest = max(width, height)
        if longest > self.settings.max_dimension:
            scale = self.settings.max_dimension / longest
            image = image.resize(
                (max(1, int(width * scale)), max(1, int(height * scale))),
                Image.Resampling.LANCZOS
            )
            logger.debug(
                "image_downscaled",
                source=source_name,
                original=(width, height),
                resized=image.size
            )

        buffer = io.BytesIO()
        image.save(buffer, format="JPEG", quality=self.settings.jpeg_quality, optimize=True)
        return EncodedImage(data=buffer.getvalue(), mime_type=self.MIME_TYPE, source_name=source_name)

    def encode_item(self, item: InputItem) -> EncodedImage:
        """
        Read and encode one input item.

        Raises:
            ItemReadError: If the file cannot be read
            ImageEncodingError: If the content is not a decodable image
        """
        return self.encode_bytes(item.read_bytes(), source_name=item.name)
