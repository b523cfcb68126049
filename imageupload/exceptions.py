"""Exceptions raised while accepting an upload."""

from imageupload.models.upload import RejectionReason


class UploadRejected(Exception):
    reason: RejectionReason = RejectionReason.MISSING_FILE


class MissingFile(UploadRejected):
    reason = RejectionReason.MISSING_FILE


class UnsupportedMediaType(UploadRejected):
    reason = RejectionReason.UNSUPPORTED_MEDIA_TYPE

    def __init__(self, content_type: str | None) -> None:
        self.content_type = content_type
        super().__init__(f"Only image files are allowed, got content_type={content_type!r}")


class PayloadTooLarge(UploadRejected):
    """Raised when an upload stream crosses the configured size limit."""

    reason = RejectionReason.PAYLOAD_TOO_LARGE

    def __init__(self, limit_bytes: int, received_bytes: int) -> None:
        self.limit_bytes = limit_bytes
        self.received_bytes = received_bytes
        super().__init__(f"File too large: received {received_bytes} bytes, limit is {limit_bytes} bytes")
