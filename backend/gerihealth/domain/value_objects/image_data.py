"""
Image Data Value Object

A label photo as raw bytes plus where it came from.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import base64
import binascii

from ..exceptions import InvalidImageError


FORMAT_MAP = {
    ".jpg": "jpeg",
    ".jpeg": "jpeg",
    ".png": "png",
    ".gif": "gif",
    ".bmp": "bmp",
    ".webp": "webp",
    ".heic": "heic",
}


def _split_data_url(value: str):
    """("data:image/png;base64,AAAA") -> ("png", "AAAA"); plain base64 passes through."""
    if not value.startswith("data:"):
        return None, value
    header, _, payload = value.partition(",")
    mime = header[len("data:"):].split(";")[0]
    fmt = mime.split("/", 1)[1] if mime.startswith("image/") else None
    return fmt, payload


@dataclass(frozen=True)
class ImageData:
    """
    Photo bytes are decoded when the object is built, so a bad base64
    upload fails before any stage runs.
    """

    data: bytes
    format: Optional[str] = None
    source: Optional[str] = None

    @property
    def bytes(self) -> bytes:
        return self.data

    @property
    def base64_string(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    def __len__(self) -> int:
        return len(self.data)

    def __repr__(self) -> str:
        return f"ImageData({self.source or 'bytes'}, {self.format or '?'}, {len(self.data)} bytes)"

    @classmethod
    def from_bytes(
        cls,
        data: bytes,
        format: Optional[str] = None,
        source: Optional[str] = None
    ) -> "ImageData":
        return cls(data=data, format=format, source=source)

    @classmethod
    def from_file(cls, file_path: str) -> "ImageData":
        path = Path(file_path)
        if not path.is_file():
            raise InvalidImageError(f"Image file not found: {file_path}")
        return cls(
            data=path.read_bytes(),
            format=FORMAT_MAP.get(path.suffix.lower()),
            source=str(path.absolute()),
        )

    @classmethod
    def from_base64(
        cls,
        base64_string: str,
        format: Optional[str] = None,
        source: Optional[str] = None
    ) -> "ImageData":
        """Accepts plain base64 or a data URL ("data:image/png;base64,...")."""
        url_format, payload = _split_data_url(base64_string.strip())
        try:
            data = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as e:
            raise InvalidImageError(f"Invalid base64 image data: {e}")
        return cls(data=data, format=format or url_format, source=source)
