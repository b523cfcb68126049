from pathlib import PureWindowsPath

from imageupload.exceptions import MissingFile, UnsupportedMediaType


def validate_mime_type(content_type: str | None, allowed_prefixes: tuple[str, ...]) -> None:
    declared = (content_type or "").strip().lower()
    if not declared or not any(declared.startswith(prefix.lower()) for prefix in allowed_prefixes):
        raise UnsupportedMediaType(content_type)


def clean_filename(filename: str | None) -> str:
    # PureWindowsPath splits on both "/" and "\\".
    name = PureWindowsPath((filename or "").strip()).name
    if name in {"", ".", ".."}:
        raise MissingFile("Upload has no usable filename")
    if "\x00" in name:
        raise MissingFile("Upload filename contains a NUL byte")
    return name


def storage_filename(original_filename: str, timestamp_ms: int) -> str:
    return f"{timestamp_ms}-{original_filename}"
