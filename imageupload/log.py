"""Loguru setup and per-request log context."""

import sys
import time
from uuid import uuid4

from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from imageupload.config import Settings

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | req={extra[request_id]} | {name}:{line} | {message}"
REQUEST_ID_HEADER = "X-Request-ID"


def setup_logging(app_settings: Settings) -> None:
    logger.configure(
        handlers=[{"sink": sys.stdout, "level": app_settings.log_level.upper(), "format": LOG_FORMAT}],
        extra={"request_id": "-"},
    )


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Tags every log line emitted while serving a request with its id."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER, "") or uuid4().hex
        started = time.perf_counter()
        with logger.contextualize(request_id=request_id):
            logger.info("{} {} received", request.method, request.url.path)
            try:
                response = await call_next(request)
            except Exception:
                logger.exception("{} {} crashed", request.method, request.url.path)
                raise
            logger.info(
                "{} {} -> {} in {:.1f}ms",
                request.method,
                request.url.path,
                response.status_code,
                (time.perf_counter() - started) * 1000,
            )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
