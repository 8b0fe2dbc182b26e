"""Magic-byte image format sniffing."""
from enum import Enum
from typing import Optional

from nineladies.constants import (
    GIF_SIGNATURES,
    JPEG_SIGNATURE,
    PNG_SIGNATURE,
    RIFF_TAG,
    SNIFF_MIN_BYTES,
    WEBP_TAG,
    WEBP_TAG_OFFSET,
)


class ImageFormat(str, Enum):
    JPEG = "jpeg"
    PNG = "png"
    GIF = "gif"
    WEBP = "webp"

    @property
    def mime_type(self) -> str:
        return f"image/{self.value}"


def _is_webp(head: bytes) -> bool:
    # Bytes 4-7 hold the RIFF chunk size and are not part of the signature.
    return head.startswith(RIFF_TAG) and head[WEBP_TAG_OFFSET:SNIFF_MIN_BYTES] == WEBP_TAG


def detect(data: bytes) -> Optional[ImageFormat]:
    """Classify a buffer by its leading bytes. Returns None below 12 bytes or on no match."""
    head = bytes(data[:SNIFF_MIN_BYTES])
    match head:
        case h if len(h) < SNIFF_MIN_BYTES:
            return None
        case h if h.startswith(JPEG_SIGNATURE):
            return ImageFormat.JPEG
        case h if h.startswith(PNG_SIGNATURE):
            return ImageFormat.PNG
        case h if h.startswith(GIF_SIGNATURES):
            return ImageFormat.GIF
        case h if _is_webp(h):
            return ImageFormat.WEBP
        case _:
            return None
