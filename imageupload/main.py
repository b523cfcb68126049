from collections.abc import Callable
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from loguru import logger

from imageupload.config import Settings
from imageupload.log import RequestContextMiddleware, setup_logging
from imageupload.routes.pages import build_router
from imageupload.services.storage import LocalDiskStorage, Storage
from imageupload.services.upload import SingleFileUpload, epoch_millis


def create_app(
    app_settings: Settings | None = None,
    storage: Storage | None = None,
    clock: Callable[[], int] = epoch_millis,
) -> FastAPI:
    app_settings = app_settings or Settings()
    setup_logging(app_settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Server is running on http://localhost:{}", app_settings.port)
        yield
        logger.info("Server stopped")

    app = FastAPI(title=app_settings.app_name, debug=app_settings.debug, lifespan=lifespan)
    app.state.settings = app_settings
    app.state.storage = storage or LocalDiskStorage(app_settings.upload_path)
    app.add_middleware(RequestContextMiddleware)
    app.include_router(build_router(SingleFileUpload(clock=clock)))
    return app


def run() -> None:
    app_settings = Settings()
    uvicorn.run(
        create_app(app_settings),
        host=app_settings.host,
        port=app_settings.port,
        log_level=app_settings.log_level.lower(),
    )
