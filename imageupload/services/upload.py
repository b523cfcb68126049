"""Single-file multipart upload handling.

``SingleFileUpload`` is used as a FastAPI dependency in front of a route. It
pulls one file part out of a ``multipart/form-data`` body, checks it against
the configured MIME prefixes and size limit and streams it into the
application's storage backend. The route receives an ``UploadOutcome`` and
never sees a rejection as an exception.
"""

import time
from collections.abc import AsyncIterator, Callable

from fastapi import Request
from loguru import logger
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException

from imageupload.config import Settings
from imageupload.exceptions import MissingFile, PayloadTooLarge, UploadRejected
from imageupload.models.upload import RejectionReason, UploadedFile, UploadOutcome
from imageupload.services.storage import Storage
from imageupload.validators.upload import clean_filename, storage_filename, validate_mime_type


def epoch_millis() -> int:
    return time.time_ns() // 1_000_000


async def limited_chunks(upload: UploadFile, limit_bytes: int, chunk_size: int) -> AsyncIterator[bytes]:
    received = 0
    while True:
        chunk = await upload.read(chunk_size)
        if not chunk:
            break
        received += len(chunk)
        if received > limit_bytes:
            raise PayloadTooLarge(limit_bytes, received)
        yield chunk


async def save_upload(
    upload: UploadFile,
    storage: Storage,
    app_settings: Settings,
    clock: Callable[[], int] = epoch_millis,
) -> UploadedFile:
    safe_name = clean_filename(upload.filename)
    validate_mime_type(upload.content_type, app_settings.allowed_mime_prefixes)
    if upload.size is not None and upload.size > app_settings.max_file_size:
        raise PayloadTooLarge(app_settings.max_file_size, upload.size)

    name = storage_filename(safe_name, clock())
    location = await storage.store(
        name,
        limited_chunks(upload, app_settings.max_file_size, app_settings.chunk_size),
    )
    return UploadedFile(
        original_filename=upload.filename or safe_name,
        content_type=upload.content_type or "application/octet-stream",
        filename=location.name,
        path=location.path,
        size_bytes=location.size_bytes,
    )


def _is_multipart(request: Request) -> bool:
    content_type = request.headers.get("content-type", "")
    return content_type.split(";", 1)[0].strip().lower() == "multipart/form-data"


class SingleFileUpload:
    def __init__(self, field_name: str | None = None, clock: Callable[[], int] = epoch_millis) -> None:
        self.field_name = field_name
        self.clock = clock

    async def __call__(self, request: Request) -> UploadOutcome:
        app_settings: Settings = request.app.state.settings
        storage: Storage = request.app.state.storage
        field_name = self.field_name or app_settings.upload_field

        if not _is_multipart(request):
            logger.warning(
                "Upload rejected reason={} content_type={}",
                RejectionReason.MISSING_FILE.value,
                request.headers.get("content-type"),
            )
            return UploadOutcome.rejected(RejectionReason.MISSING_FILE, "Request body is not multipart/form-data")

        try:
            async with request.form() as form:
                return await self._accept(form.getlist(field_name), field_name, storage, app_settings)
        except (StarletteHTTPException, MultiPartException) as exc:
            # Malformed multipart body.
            logger.warning("Upload rejected reason={} error={}", RejectionReason.MISSING_FILE.value, str(exc))
            return UploadOutcome.rejected(RejectionReason.MISSING_FILE, str(exc))

    async def _accept(
        self,
        values: list,
        field_name: str,
        storage: Storage,
        app_settings: Settings,
    ) -> UploadOutcome:
        files = [value for value in values if isinstance(value, UploadFile)]
        upload = files[0] if len(files) == 1 else None
        try:
            if not files:
                raise MissingFile(f"No file in field {field_name!r}")
            if len(files) > 1:
                raise MissingFile(f"Expected a single file in field {field_name!r}, got {len(files)}")
            saved = await save_upload(upload, storage, app_settings, self.clock)
        except UploadRejected as exc:
            logger.warning(
                "Upload rejected reason={} filename={} content_type={} error={}",
                exc.reason.value,
                upload.filename if upload else None,
                upload.content_type if upload else None,
                str(exc),
            )
            return UploadOutcome.rejected(exc.reason, str(exc))
        except OSError as exc:
            logger.exception(
                "Upload storage failed filename={} error={}",
                upload.filename,
                str(exc),
            )
            return UploadOutcome.rejected(RejectionReason.STORAGE_ERROR, str(exc))

        logger.info(
            "Upload stored filename={} original_filename={} content_type={} size_bytes={}",
            saved.filename,
            saved.original_filename,
            saved.content_type,
            saved.size_bytes,
        )
        return UploadOutcome.stored(saved)
