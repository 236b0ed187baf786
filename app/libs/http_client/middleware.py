import logging

import httpx

from .models import Request, Response
from .types import Middleware, NextFn


def logging_middleware(logger: logging.Logger | None = None) -> Middleware:
    log = logger or logging.getLogger(__name__)

    async def middleware(request: Request, next: NextFn) -> Response:
        log.info(f"-> {request.method} {request.url}")
        response = await next(request)
        log.info(f"<- {response.status_code} ({response.latency_ms}ms)")
        return response

    return middleware


def raise_for_status_middleware() -> Middleware:
    """非 2xx/3xx 响应直接抛出 httpx.HTTPStatusError"""

    async def middleware(request: Request, next: NextFn) -> Response:
        response = await next(request)
        if not response.ok:
            raise httpx.HTTPStatusError(
                f"HTTP {response.status_code} for {request.method} {request.url}",
                request=httpx.Request(request.method, request.url),
                response=httpx.Response(response.status_code, content=response.body),
            )
        return response

    return middleware
