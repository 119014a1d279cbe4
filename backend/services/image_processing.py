"""
Image processing helpers built on Pillow.

Used to normalize downloaded images before they are sent to Gemini, to build
the JPEG fallback when Gemini returns no image, and to resize images served
through the image proxy.
"""
import base64
import io
from typing import Dict, Any

from PIL import Image, UnidentifiedImageError

MAX_RESIZE_WIDTH = 4096


class ImageProcessingError(Exception):
    """Raised when an image cannot be decoded or re-encoded."""


def _open(data: bytes) -> Image.Image:
    if not data:
        raise ImageProcessingError("Image data is empty")
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
        return image
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        raise ImageProcessingError(f"Could not decode image: {e}") from e


def describe_image(data: bytes) -> Dict[str, Any]:
    """
    Read basic metadata from encoded image bytes.

    Returns:
        Dict with format, width, height, mode and number of bands
    """
    image = _open(data)
    return {
        "format": image.format,
        "width": image.width,
        "height": image.height,
        "mode": image.mode,
        "bands": len(image.getbands()),
    }


def normalize_image(data: bytes) -> bytes:
    """Decode and re-encode an image in its original format."""
    image = _open(data)
    image_format = image.format or "PNG"
    if image_format == "JPEG" and image.mode not in ("RGB", "L", "CMYK"):
        image = image.convert("RGB")

    buffer = io.BytesIO()
    try:
        image.save(buffer, format=image_format)
    except (OSError, ValueError, KeyError) as e:
        raise ImageProcessingError(f"Could not re-encode {image_format} image: {e}") from e
    return buffer.getvalue()


def reencode_jpeg(data: bytes, quality: int = 90) -> bytes:
    """Re-encode an image as JPEG at the given quality."""
    image = _open(data)
    if image.mode != "RGB":
        image = image.convert("RGB")

    buffer = io.BytesIO()
    try:
        image.save(buffer, format="JPEG", quality=quality)
    except (OSError, ValueError) as e:
        raise ImageProcessingError(f"Could not encode JPEG: {e}") from e
    return buffer.getvalue()


def resize_image(data: bytes, width: int, quality: int = 75) -> bytes:
    """
    Downscale an image to the requested width and encode it as JPEG.

    Aspect ratio is preserved and images narrower than `width` are not enlarged.
    """
    if width < 1 or width > MAX_RESIZE_WIDTH:
        raise ImageProcessingError(f"Width must be between 1 and {MAX_RESIZE_WIDTH}")

    image = _open(data)
    if image.width > width:
        height = max(1, round(image.height * width / image.width))
        image = image.resize((width, height), Image.LANCZOS)
    if image.mode != "RGB":
        image = image.convert("RGB")

    buffer = io.BytesIO()
    image.save(buffer, format="JPEG", quality=quality)
    return buffer.getvalue()


def to_data_url(data: bytes, mime_type: str) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"
