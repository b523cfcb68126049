"""Shared fixtures for the upload server tests."""

import itertools

import pytest
from fastapi.testclient import TestClient

from imageupload.config import Settings
from imageupload.main import create_app
from imageupload.services.storage import InMemoryStorage

FIRST_TIMESTAMP = 1_700_000_000_000


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def settings(tmp_path):
    """Settings writing uploads into a temporary directory."""
    return Settings(_env_file=None, upload_dir=str(tmp_path / "uploads"))


@pytest.fixture
def upload_dir(settings):
    return settings.upload_path


@pytest.fixture
def clock():
    """Millisecond clock that advances by one on every call."""
    counter = itertools.count(FIRST_TIMESTAMP)
    return lambda: next(counter)


@pytest.fixture
def app(settings, clock):
    return create_app(settings, clock=clock)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def memory_storage():
    return InMemoryStorage()


@pytest.fixture
def memory_client(settings, clock, memory_storage):
    """Client for an app backed by in-memory storage."""
    application = create_app(settings, storage=memory_storage, clock=clock)
    with TestClient(application) as test_client:
        yield test_client


@pytest.fixture
def png_bytes():
    """1200 bytes starting with the PNG signature."""
    signature = b"\x89PNG\r\n\x1a\n"
    return signature + bytes(range(256)) * 4 + b"\x00" * (1200 - len(signature) - 1024)
