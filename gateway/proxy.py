"""
Reverse proxy forwarding /api requests to the backend origin
"""

import logging
import time
from typing import Iterable, List, Optional

from urllib.parse import quote

import httpx
from fastapi import Request, Response

from exceptions import (
    ResourceNotFoundError,
    ServiceUnavailableError,
    UpstreamError,
    UpstreamTimeoutError,
)
from logging_config import log_proxy_request
from .rewrites import RewriteRule

logger = logging.getLogger(__name__)

# RFC 7230 section 6.1
HOP_BY_HOP_HEADERS = frozenset(
    {
        "connection",
        "keep-alive",
        "proxy-authenticate",
        "proxy-authorization",
        "te",
        "trailer",
        "trailers",
        "transfer-encoding",
        "upgrade",
    }
)

# httpx recomputes these for the outgoing request
EXCLUDED_REQUEST_HEADERS = HOP_BY_HOP_HEADERS | {"host", "content-length"}

# the body handed back is already decoded and re-measured
EXCLUDED_RESPONSE_HEADERS = HOP_BY_HOP_HEADERS | {"content-encoding", "content-length"}


def _raw_path(request: Request) -> str:
    """Request path as sent by the client, percent-escapes intact"""
    raw = request.scope.get("raw_path")
    if not raw:
        return quote(request.url.path)
    return raw.split(b"?", 1)[0].decode("latin-1")


def _connection_tokens(headers) -> set:
    value = headers.get("connection", "")
    return {token.strip().lower() for token in value.split(",") if token.strip()}


class ApiProxy:
    """
    Forwards incoming requests to the destination of the first matching
    rewrite rule and relays the upstream response unchanged.
    """

    def __init__(
        self,
        rules: Iterable[RewriteRule],
        timeout: float = 30.0,
        max_connections: int = 100,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.rules: List[RewriteRule] = list(rules)
        self.timeout = timeout
        self.max_connections = max_connections
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def is_started(self) -> bool:
        return self._client is not None

    async def start(self) -> None:
        """Open the shared upstream connection pool"""
        if self._client is not None:
            return
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            limits=httpx.Limits(max_connections=self.max_connections),
            transport=self._transport,
            follow_redirects=False,
        )
        logger.info(
            f"API proxy started - {len(self.rules)} rule(s): "
            + ", ".join(repr(rule) for rule in self.rules)
        )

    async def close(self) -> None:
        """Close the upstream connection pool"""
        if self._client is None:
            return
        await self._client.aclose()
        self._client = None
        logger.info("API proxy closed")

    def resolve(self, path: str, query: str = "") -> str:
        """Destination URL for ``path``; raises when no rule matches"""
        for rule in self.rules:
            url = rule.apply(path, query)
            if url is not None:
                return url
        raise ResourceNotFoundError("Route", path)

    def _request_headers(self, request: Request) -> List[tuple]:
        excluded = EXCLUDED_REQUEST_HEADERS | _connection_tokens(request.headers)
        headers = [
            (name, value)
            for name, value in request.headers.items()
            if name.lower() not in excluded and not name.lower().startswith("x-forwarded-")
        ]

        client_ip = request.client.host if request.client else None
        forwarded_for = request.headers.get("x-forwarded-for")
        if client_ip:
            forwarded_for = f"{forwarded_for}, {client_ip}" if forwarded_for else client_ip
        if forwarded_for:
            headers.append(("x-forwarded-for", forwarded_for))
        if request.headers.get("host"):
            headers.append(("x-forwarded-host", request.headers["host"]))
        headers.append(("x-forwarded-proto", request.url.scheme))
        return headers

    def _build_response(self, upstream: httpx.Response, method: str) -> Response:
        response = Response(content=upstream.content, status_code=upstream.status_code)
        excluded = EXCLUDED_RESPONSE_HEADERS | _connection_tokens(upstream.headers)
        for name, value in upstream.headers.multi_items():
            if name.lower() not in excluded:
                response.headers.append(name, value)

        # HEAD and 304 keep the backend's length although no body is relayed
        length = upstream.headers.get("content-length")
        if length is not None and (method == "HEAD" or upstream.status_code == 304):
            response.headers["content-length"] = length
        return response

    async def forward(self, request: Request) -> Response:
        """Replay ``request`` against the backend and relay its response"""
        if self._client is None:
            raise ServiceUnavailableError(service="API proxy")

        url = self.resolve(_raw_path(request), request.url.query)
        body = await request.body()
        start_time = time.time()

        try:
            upstream = await self._client.request(
                request.method,
                url,
                headers=self._request_headers(request),
                content=body,
            )
        except httpx.TimeoutException as e:
            logger.error(f"Upstream timeout: {request.method} {url}")
            raise UpstreamTimeoutError(upstream=url, timeout=self.timeout) from e
        except httpx.RequestError as e:
            logger.error(f"Upstream request failed: {request.method} {url} - {e!r}")
            raise UpstreamError(
                message="Upstream service request failed",
                upstream=url,
                details={"error": type(e).__name__},
            ) from e

        log_proxy_request(
            logger,
            method=request.method,
            upstream=url,
            status_code=upstream.status_code,
            duration=time.time() - start_time,
        )
        return self._build_response(upstream, request.method)


def get_proxy(request: Request) -> ApiProxy:
    """FastAPI dependency returning the application's proxy"""
    return request.app.state.proxy
