"""
Input Validation

Checks for label photos, profile photos and free text. The validate_*
functions return (ok, reason); the ensure_/require_ variants raise.
"""

from io import BytesIO
from pathlib import Path
from typing import Optional, Tuple

from PIL import Image as PILImage, UnidentifiedImageError

from ..domain.value_objects.image_data import ImageData
from ..domain.exceptions import InvalidImageError, InvalidInputError


Check = Tuple[bool, Optional[str]]

OK: Check = (True, None)

SUPPORTED_FORMATS = {"jpeg", "jpg", "png", "bmp", "webp", "gif", "tiff"}

MAX_IMAGE_DIMENSION = 8192
MAX_FILE_SIZE = 10 * 1024 * 1024

_SIZE_LIMIT_MB = f"{MAX_FILE_SIZE / 1024 / 1024:.1f} MB"


def _open_image(image_bytes: bytes) -> Tuple[Optional[PILImage.Image], Optional[str]]:
    try:
        PILImage.open(BytesIO(image_bytes)).verify()
        # verify() leaves the image unusable
        return PILImage.open(BytesIO(image_bytes)), None
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as e:
        return None, f"Invalid image data: {e}"


def validate_image(image: ImageData) -> Check:
    data = image.bytes
    if not data:
        return False, "Image is empty"
    if len(data) > MAX_FILE_SIZE:
        return False, f"Image size exceeds maximum ({_SIZE_LIMIT_MB})"

    pil_image, error = _open_image(data)
    if pil_image is None:
        return False, error

    if max(pil_image.size) > MAX_IMAGE_DIMENSION:
        return False, f"Image dimensions exceed maximum ({MAX_IMAGE_DIMENSION}x{MAX_IMAGE_DIMENSION})"

    fmt = (pil_image.format or "unknown").lower()
    if fmt not in SUPPORTED_FORMATS:
        return False, f"Unsupported image format: {fmt}"
    return OK


def ensure_valid_image(image: ImageData) -> ImageData:
    ok, reason = validate_image(image)
    if not ok:
        raise InvalidImageError(details={"reason": reason})
    return image


def validate_image_file(file_path: str) -> Check:
    """Cheap checks on a path before its bytes are read."""
    path = Path(file_path)
    if not path.is_file():
        return False, f"File not found: {file_path}"

    suffix = path.suffix.lower().lstrip(".")
    if suffix not in SUPPORTED_FORMATS:
        return False, f"Unsupported file format: {suffix or 'none'}"
    if path.stat().st_size > MAX_FILE_SIZE:
        return False, f"File size exceeds maximum ({_SIZE_LIMIT_MB})"
    return OK


def validate_text(text: str, min_length: int = 1, max_length: int = 100000) -> Check:
    stripped = (text or "").strip()
    if not stripped:
        return False, "Text cannot be empty"
    if len(stripped) < min_length:
        return False, f"Text too short (minimum {min_length} characters)"
    if len(text) > max_length:
        return False, f"Text too long (maximum {max_length} characters)"
    return OK


def require_text(field: str, text: str, max_length: int = 100000) -> str:
    """Stripped text, or InvalidInputError naming the field."""
    ok, reason = validate_text(text, max_length=max_length)
    if not ok:
        raise InvalidInputError(field, reason)
    return text.strip()
