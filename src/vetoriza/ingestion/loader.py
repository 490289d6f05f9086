"""
Image Loader - Decodes base64 input into a grayscale raster
"""
from io import BytesIO
from typing import Optional
from dataclasses import dataclass
from enum import Enum
import base64
import binascii
import logging
import struct

import numpy as np
from PIL import Image, UnidentifiedImageError

from ..config import get_settings
from ..errors import Base64DecodeError, ImageLoadError

logger = logging.getLogger(__name__)


class InputFormat(Enum):
    PNG = "png"
    JPEG = "jpeg"
    BMP = "bmp"
    GIF = "gif"
    TIFF = "tiff"
    WEBP = "webp"
    UNKNOWN = "unknown"


@dataclass
class LoadedImage:
    """Container for a decoded grayscale raster"""
    image: np.ndarray  # uint8, shape (H, W)
    format: InputFormat
    mode: str  # Pillow mode of the source before grayscale conversion

    @property
    def width(self) -> int:
        return int(self.image.shape[1])

    @property
    def height(self) -> int:
        return int(self.image.shape[0])


class ImageLoader:
    """
    Turns base64 text into an 8-bit single channel raster.

    Steps:
    - Strict standard base64 decoding (alphabet and padding checked)
    - Container detection and full decode via Pillow
    - Luma conversion (ITU-R 601-2) for colour sources, alpha ignored
    - 16-bit and float sources rescaled to 0-255 before thresholding
    """

    def __init__(self, max_image_size: Optional[int] = None):
        self.max_image_size = get_settings().max_image_size if max_image_size is None else max_image_size

    def load(self, data: str) -> LoadedImage:
        """Decode base64 text and load the image it contains"""
        return self.load_bytes(self.decode_base64(data))

    def decode_base64(self, data: str) -> bytes:
        """Decode standard base64, raising Base64DecodeError on any malformed input"""
        try:
            raw = base64.b64decode(data, validate=True)
        except binascii.Error as e:
            raise Base64DecodeError(str(e)) from e
        except ValueError as e:
            # Non-ASCII text never reaches the alphabet check
            raise Base64DecodeError(str(e)) from e

        # Padding bits must be zero, so the only accepted spelling is the canonical one
        if base64.b64encode(raw).decode("ascii") != data:
            raise Base64DecodeError("non-zero trailing bits before padding")
        return raw

    def load_bytes(self, data: bytes) -> LoadedImage:
        """Load raw image bytes as a grayscale raster"""
        if not data:
            raise ImageLoadError("empty image buffer")

        try:
            with Image.open(BytesIO(data)) as img:
                self._check_size(img.size)
                img.load()
                mode = img.mode
                format_type = self._detect_format(img.format)
                image = self._to_luma8(img)
        except ImageLoadError:
            raise
        except UnidentifiedImageError as e:
            raise ImageLoadError("unrecognized image format") from e
        except Image.DecompressionBombError as e:
            raise ImageLoadError(str(e)) from e
        except (OSError, SyntaxError, ValueError, EOFError, IndexError, struct.error) as e:
            # Pillow reports truncated and corrupt streams through these
            raise ImageLoadError(f"corrupt image data: {e}") from e

        logger.debug(f"Loaded {format_type.value} image {image.shape[1]}x{image.shape[0]} (mode {mode})")
        return LoadedImage(image=image, format=format_type, mode=mode)

    def _to_luma8(self, img: Image.Image) -> np.ndarray:
        """8-bit luma. Wide integer and float modes are rescaled, not clipped"""
        if img.mode == "I" or img.mode.startswith("I;16"):
            wide = np.clip(np.asarray(img, dtype=np.int64), 0, 65535)
            return ((wide + 128) // 257).astype(np.uint8)
        if img.mode == "F":
            unit = np.clip(np.asarray(img, dtype=np.float64), 0.0, 1.0)
            return np.rint(unit * 255).astype(np.uint8)
        return np.array(img.convert("L"), dtype=np.uint8)

    def _check_size(self, size):
        width, height = size
        if width == 0 or height == 0:
            raise ImageLoadError(f"image has no pixels: {width}x{height}")
        if self.max_image_size and max(width, height) > self.max_image_size:
            raise ImageLoadError(
                f"image {width}x{height} exceeds max dimension {self.max_image_size}"
            )

    def _detect_format(self, name: Optional[str]) -> InputFormat:
        """Map a Pillow format name to InputFormat"""
        if not name:
            return InputFormat.UNKNOWN
        try:
            return InputFormat(name.lower())
        except ValueError:
            return InputFormat.UNKNOWN
