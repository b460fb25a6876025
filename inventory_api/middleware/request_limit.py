from __future__ import annotations

from typing import Callable

from fastapi import status
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from inventory_api.core.logging import get_logger
from .observability import client_ip


class PayloadLimitMiddleware(BaseHTTPMiddleware):
    """Reject requests whose payload exceeds the configured limit."""

    def __init__(self, app, max_bytes: int) -> None:
        super().__init__(app)
        self.max_bytes = max_bytes
        self.logger = get_logger("inventory_api.request_limit")

    async def dispatch(self, request: Request, call_next: Callable):
        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > self.max_bytes:
            return self._reject(request, int(content_length))

        # cuerpos chunked no traen content-length; el body leido queda cacheado
        # en el request y starlette lo reenvia al endpoint
        body = await request.body()
        if len(body) > self.max_bytes:
            return self._reject(request, len(body))

        return await call_next(request)

    def _reject(self, request: Request, size: int) -> JSONResponse:
        self.logger.warning(
            "Rejected request exceeding payload limit",
            extra={
                "method": request.method,
                "path": request.url.path,
                "content_length": size,
                "client_ip": client_ip(request),
            },
        )
        return JSONResponse(
            {"detail": "Request payload too large."},
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
        )
