"""Image payload utilities."""

import base64
import binascii
from io import BytesIO
from pathlib import Path
from typing import Union
from PIL import Image

from .logger import get_logger
from .errors import ImageProcessingError

logger = get_logger(__name__)


def base64_to_bytes(base64_string: str) -> bytes:
    """
    Convert base64 string to bytes.

    Args:
        base64_string: Base64 encoded image, optionally a data URL

    Returns:
        Image bytes

    Raises:
        ImageProcessingError: If the string is not valid base64
    """
    # Remove data URL prefix if present
    if "," in base64_string:
        base64_string = base64_string.split(",", 1)[1]

    try:
        return base64.b64decode(base64_string, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ImageProcessingError(f"Invalid base64 image payload: {e}") from e


def save_png(base64_data: str, path: Union[str, Path]) -> Path:
    """
    Decode a base64 image payload and write it as PNG.

    Models may answer with JPEG or WEBP; the payload is re-encoded so the
    file always matches its extension.

    Args:
        base64_data: Base64 image payload
        path: Destination file path

    Returns:
        Path of the written file

    Raises:
        ImageProcessingError: If the payload is not a readable image
    """
    image_bytes = base64_to_bytes(base64_data)
    path = Path(path)

    try:
        image = Image.open(BytesIO(image_bytes))
        image.load()
    except Exception as e:
        raise ImageProcessingError(f"Payload is not a readable image: {e}") from e

    source_format = image.format
    path.parent.mkdir(parents=True, exist_ok=True)

    if source_format == "PNG":
        path.write_bytes(image_bytes)
    else:
        if image.mode not in ("RGB", "RGBA", "L", "LA"):
            image = image.convert("RGBA")
        image.save(path, format="PNG")

    logger.info(
        "Icon written",
        extra={
            "path": str(path),
            "source_format": source_format,
            "size": list(image.size),
        }
    )

    return path
