"""
Onboarding Images - Picture acquisition and storage encoding.

The image picker is an external collaborator: it hands back an image or
reports that the user cancelled. Encoding turns the picked image into the
text payload stored on the profile (base64 of a JPEG).
"""

import base64
import binascii
import logging
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import Callable, Protocol, runtime_checkable

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

DEFAULT_PICTURE_QUALITY = 0.8


class PictureEncodingError(Exception):
    """The picked picture could not be compressed for storage."""


@dataclass
class PickResult:
    """Outcome of one image-picker request: an image, or a cancellation."""
    image: Image.Image | None = None
    cancelled: bool = False

    @classmethod
    def picked(cls, image: Image.Image) -> "PickResult":
        return cls(image=image)

    @classmethod
    def cancel(cls) -> "PickResult":
        return cls(cancelled=True)


@runtime_checkable
class ImagePicker(Protocol):
    """Anything that can ask the user for a picture."""

    async def pick(self) -> PickResult:
        ...


class FilePathImagePicker:
    """
    Picker that asks for a path to an image file.

    Used by the CLI. An empty answer cancels; a file that can't be read as
    an image is logged and also treated as a cancellation.
    """

    def __init__(self, prompt: Callable[[], str]):
        self.prompt = prompt

    async def pick(self) -> PickResult:
        answer = self.prompt().strip()
        if not answer:
            return PickResult.cancel()

        path = Path(answer).expanduser()
        try:
            with Image.open(path) as img:
                img.load()
                return PickResult.picked(img.copy())
        except (OSError, UnidentifiedImageError, Image.DecompressionBombError) as e:
            logger.warning(f"Could not read picture at {path}: {e}")
            return PickResult.cancel()


# =============================================================================
# Encoding
# =============================================================================

def _jpeg_quality(quality: float) -> int:
    """Map a 0-1 compression quality onto Pillow's 1-100 JPEG scale."""
    if not 0.0 < quality <= 1.0:
        raise ValueError(f"Picture quality must be in (0, 1], got {quality}")
    return max(1, round(quality * 100))


def encode_profile_picture(image: Image.Image, quality: float = DEFAULT_PICTURE_QUALITY) -> str:
    """
    Compress an image to JPEG and return it as base64 text.

    JPEG has no alpha channel, so the image is flattened to RGB first.
    """
    rgb = image if image.mode == "RGB" else image.convert("RGB")
    buffer = BytesIO()
    rgb.save(buffer, format="JPEG", quality=_jpeg_quality(quality))
    return base64.b64encode(buffer.getvalue()).decode("utf-8")


def decode_image(data: str) -> Image.Image:
    """
    Decode base64 image data (any format Pillow reads).

    Raises ValueError if the data is not base64 or not an image.
    """
    try:
        raw = base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Picture is not valid base64: {e}") from e

    try:
        with Image.open(BytesIO(raw)) as img:
            img.load()
            return img.copy()
    except (OSError, UnidentifiedImageError, Image.DecompressionBombError) as e:
        raise ValueError(f"Picture data is not a readable image: {e}") from e
