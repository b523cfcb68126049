from enum import Enum

from pydantic import BaseModel, model_validator


class RejectionReason(str, Enum):
    MISSING_FILE = "missing_file"
    UNSUPPORTED_MEDIA_TYPE = "unsupported_media_type"
    PAYLOAD_TOO_LARGE = "payload_too_large"
    STORAGE_ERROR = "storage_error"


class StoredLocation(BaseModel):
    name: str
    path: str
    size_bytes: int


class UploadedFile(BaseModel):
    original_filename: str
    content_type: str
    filename: str
    path: str
    size_bytes: int


class UploadOutcome(BaseModel):
    file: UploadedFile | None = None
    reason: RejectionReason | None = None
    detail: str | None = None

    @model_validator(mode="after")
    def _exactly_one(self) -> "UploadOutcome":
        if (self.file is None) == (self.reason is None):
            raise ValueError("UploadOutcome needs either a file or a rejection reason")
        return self

    @property
    def accepted(self) -> bool:
        return self.file is not None

    @classmethod
    def stored(cls, file: UploadedFile) -> "UploadOutcome":
        return cls(file=file)

    @classmethod
    def rejected(cls, reason: RejectionReason, detail: str | None = None) -> "UploadOutcome":
        return cls(reason=reason, detail=detail)
