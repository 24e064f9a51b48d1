"""Loguru configuration shared by the app, the seeder and the middleware."""

from __future__ import annotations

import logging
import time
import uuid
from contextvars import ContextVar
from sys import stdout
from typing import Any

from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from core.config_loader import settings

request_id_ctx_var: ContextVar[str] = ContextVar("request_id", default="-")


class _InterceptHandler(logging.Handler):
    """Forward stdlib records (uvicorn, sqlalchemy) to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())


def _patch_record(record: dict[str, Any]) -> None:
    record["extra"].setdefault("request_id", request_id_ctx_var.get())


def setup_logging() -> None:
    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)
    logging.getLogger("passlib.handlers.bcrypt").setLevel(logging.ERROR)
    logger.remove()
    logger.configure(patcher=_patch_record)
    logger.add(
        stdout,
        level=settings.LOG_LEVEL,
        backtrace=False,
        diagnose=False,
        serialize=settings.LOG_JSON,
    )


class RequestContextLogMiddleware(BaseHTTPMiddleware):
    """Tags each request with an id and emits one access log line."""

    async def dispatch(self, request: Request, call_next):  # type: ignore[override]
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        token = request_id_ctx_var.set(request_id)
        start = time.perf_counter()
        response = None
        try:
            response = await call_next(request)
            return response
        finally:
            status_code = response.status_code if response is not None else 500
            logger.bind(
                method=request.method,
                path=request.url.path,
                status=status_code,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
            ).info("request_completed")
            if response is not None:
                response.headers.setdefault("X-Request-ID", request_id)
            request_id_ctx_var.reset(token)
