import base64
import os
import sys

import pytest

from conftest import PNG_BYTES
from nineladies.errors import (
    ImageNotFoundError,
    ImageReadError,
    ImageValidationError,
    UnrecognizedFormatError,
)
from nineladies.image_format import ImageFormat
from nineladies.image_validator import validate


def test_validate_returns_bytes_and_format(images):
    image = validate(str(images["red"]))

    assert image.format is ImageFormat.PNG
    assert image.data == PNG_BYTES
    assert image.path == str(images["red"])


def test_validate_is_idempotent(images):
    first = validate(str(images["photo"]))
    second = validate(str(images["photo"]))

    assert first.format == second.format
    assert len(first.data) == len(second.data)


def test_validate_ignores_extension(tmp_path):
    disguised = tmp_path / "actually-a-png.txt"
    disguised.write_bytes(PNG_BYTES)

    assert validate(str(disguised)).format is ImageFormat.PNG


def test_validate_missing_file_raises_not_found(images):
    with pytest.raises(ImageNotFoundError, match="File not found"):
        validate(str(images["missing"]))


def test_validate_text_file_raises_unrecognized(images):
    with pytest.raises(UnrecognizedFormatError, match="Not a valid image format"):
        validate(str(images["text"]))


def test_validate_directory_raises_read_error(tmp_path):
    with pytest.raises(ImageReadError, match="Cannot read file"):
        validate(str(tmp_path))


@pytest.mark.skipif(
    sys.platform == "win32" or (hasattr(os, "geteuid") and os.geteuid() == 0),
    reason="permission bits are not enforced",
)
def test_validate_unreadable_file_raises_read_error(images):
    images["red"].chmod(0)
    try:
        with pytest.raises(ImageReadError):
            validate(str(images["red"]))
    finally:
        images["red"].chmod(0o644)


def test_validation_errors_carry_path(images):
    with pytest.raises(ImageValidationError) as info:
        validate(str(images["text"]))

    assert info.value.path == str(images["text"])


def test_image_bytes_survive_base64_round_trip(images):
    image = validate(str(images["red"]))
    encoded = base64.standard_b64encode(image.data).decode()

    assert base64.standard_b64decode(encoded) == image.data
