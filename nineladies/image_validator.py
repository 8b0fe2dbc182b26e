"""Image validation: path → bytes + sniffed format, or a typed failure."""
from dataclasses import dataclass
from pathlib import Path

from nineladies.constants import MSG_FILE_NOT_FOUND, MSG_FILE_UNREADABLE, MSG_UNRECOGNIZED_FORMAT
from nineladies.errors import ImageNotFoundError, ImageReadError, UnrecognizedFormatError
from nineladies.image_format import ImageFormat, detect


@dataclass(frozen=True)
class ValidatedImage:
    path: str
    data: bytes
    format: ImageFormat


def validate(path: str) -> ValidatedImage:
    """Read ``path`` and confirm it is a supported image. Raises ImageValidationError."""
    file = Path(path)
    if not file.exists():
        raise ImageNotFoundError(path, MSG_FILE_NOT_FOUND % path)

    try:
        data = file.read_bytes()
    except OSError as exc:
        raise ImageReadError(path, MSG_FILE_UNREADABLE % (path, exc)) from exc

    match detect(data):
        case None:
            raise UnrecognizedFormatError(path, MSG_UNRECOGNIZED_FORMAT % path)
        case fmt:
            return ValidatedImage(path=path, data=data, format=fmt)
