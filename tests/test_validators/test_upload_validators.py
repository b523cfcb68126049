import pytest

from imageupload.exceptions import MissingFile, UnsupportedMediaType
from imageupload.models.upload import RejectionReason
from imageupload.validators.upload import clean_filename, storage_filename, validate_mime_type


@pytest.mark.parametrize("content_type", ["image/png", "image/jpeg", "IMAGE/GIF", "image/svg+xml"])
def test_image_types_are_accepted(content_type):
    validate_mime_type(content_type, ("image/",))


@pytest.mark.parametrize("content_type", ["text/plain", "application/octet-stream", "imagepng", "", None])
def test_other_types_are_rejected(content_type):
    with pytest.raises(UnsupportedMediaType) as excinfo:
        validate_mime_type(content_type, ("image/",))

    assert excinfo.value.reason is RejectionReason.UNSUPPORTED_MEDIA_TYPE


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("cat.png", "cat.png"),
        ("../../cat.png", "cat.png"),
        ("C:\\Users\\me\\cat.png", "cat.png"),
        ("  spaced name.png ", "spaced name.png"),
    ],
)
def test_clean_filename(raw, expected):
    assert clean_filename(raw) == expected


@pytest.mark.parametrize("raw", [None, "", "   ", "..", "/", "a\x00b.png"])
def test_clean_filename_rejects_empty(raw):
    with pytest.raises(MissingFile):
        clean_filename(raw)


def test_storage_filename_prefixes_timestamp():
    assert storage_filename("cat.png", 1700000000123) == "1700000000123-cat.png"
    assert storage_filename("cat.png", 1) != storage_filename("cat.png", 2)
