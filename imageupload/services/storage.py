from collections.abc import AsyncIterator
from contextlib import suppress
from pathlib import Path
from typing import Protocol

from loguru import logger

from imageupload.models.upload import StoredLocation


class Storage(Protocol):
    async def store(self, name: str, chunks: AsyncIterator[bytes]) -> StoredLocation:
        """Persist ``chunks`` under ``name``.

        If consuming ``chunks`` raises, whatever was written is discarded and
        the exception propagates.
        """
        ...


class LocalDiskStorage:
    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    async def store(self, name: str, chunks: AsyncIterator[bytes]) -> StoredLocation:
        destination = self.directory / name
        size = 0
        # Same-name uploads overwrite each other; last writer wins.
        fh = destination.open("wb")
        try:
            with fh:
                async for chunk in chunks:
                    fh.write(chunk)
                    size += len(chunk)
        except BaseException:
            with suppress(OSError):
                destination.unlink(missing_ok=True)
            logger.debug("Partial file removed destination={} bytes_written={}", str(destination), size)
            raise

        logger.debug("File saved storage_key={} destination={} size_bytes={}", name, str(destination), size)
        return StoredLocation(name=name, path=str(destination), size_bytes=size)


class InMemoryStorage:
    def __init__(self) -> None:
        self.files: dict[str, bytes] = {}

    async def store(self, name: str, chunks: AsyncIterator[bytes]) -> StoredLocation:
        buffer = bytearray()
        async for chunk in chunks:
            buffer.extend(chunk)
        self.files[name] = bytes(buffer)
        logger.debug("File kept in memory storage_key={} size_bytes={}", name, len(buffer))
        return StoredLocation(name=name, path=f"memory://{name}", size_bytes=len(buffer))
