import ssl
import time
from typing import Any

import httpx

from .models import Request, Response
from .types import Middleware


class HttpClient:
    def __init__(
        self,
        middlewares: list[Middleware] | None = None,
        connect_timeout: float = 6.0,
        read_timeout: float = 8.0,
        default_headers: dict[str, str] | None = None,
        cert: str | None = None,
    ):
        self._middlewares = middlewares or []
        self._connect_timeout = connect_timeout
        self._read_timeout = read_timeout
        self._default_headers = default_headers or {}
        self._cert = cert
        self._client: httpx.AsyncClient | None = None

    async def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                verify=self._ssl_context(),
                timeout=httpx.Timeout(self._read_timeout, connect=self._connect_timeout),
            )
        return self._client

    def _ssl_context(self) -> ssl.SSLContext | bool:
        if not self._cert:
            return True
        # 商户证书 (PEM, 包含证书与私钥)
        context = ssl.create_default_context()
        context.load_cert_chain(self._cert)
        return context

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    def _prepare_body(self, body: bytes | str | None) -> bytes:
        if body is None:
            return b""
        if isinstance(body, bytes):
            return body
        return body.encode("utf-8")

    def _merge_headers(self, headers: dict[str, str] | None) -> dict[str, str]:
        merged = dict(self._default_headers)
        if headers:
            merged.update(headers)
        return merged

    async def request(
        self,
        method: str,
        url: str,
        headers: dict[str, str] | None = None,
        body: bytes | str | None = None,
        connect_timeout: float | None = None,
        read_timeout: float | None = None,
    ) -> Response:
        req = Request(
            method=method,
            url=url,
            headers=self._merge_headers(headers),
            body=self._prepare_body(body),
            connect_timeout=connect_timeout or self._connect_timeout,
            read_timeout=read_timeout or self._read_timeout,
        )
        return await self._execute(req)

    async def _execute(self, request: Request) -> Response:
        if self._middlewares:
            return await self._execute_with_middleware(request, 0)
        return await self._do_request(request)

    async def _execute_with_middleware(self, request: Request, index: int) -> Response:
        if index >= len(self._middlewares):
            return await self._do_request(request)

        middleware = self._middlewares[index]

        async def next_fn(req: Request) -> Response:
            return await self._execute_with_middleware(req, index + 1)

        return await middleware(request, next_fn)

    async def _do_request(self, request: Request) -> Response:
        client = await self._ensure_client()
        start_time = time.time()

        http_response = await client.request(
            method=request.method,
            url=request.url,
            headers=request.headers,
            content=request.body,
            timeout=httpx.Timeout(request.read_timeout, connect=request.connect_timeout),
        )

        latency_ms = int((time.time() - start_time) * 1000)

        return Response(
            status_code=http_response.status_code,
            headers=dict(http_response.headers),
            body=http_response.content,
            latency_ms=latency_ms,
            request=request,
        )

    async def post(self, url: str, **kwargs: Any) -> Response:
        return await self.request("POST", url, **kwargs)
