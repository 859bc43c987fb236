# src/feed_kit/sources/http.py

import logging

import httpx
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from feed_kit.errors import SourceError

from .base import ByteSource
from .iterable import IterableByteSource

logger = logging.getLogger(__name__)


class HttpByteSource(ByteSource):
    """Streams an HTTP response body.

    Transport-only retries while opening. Once bytes flow, a failure ends the
    source; the body is never re-requested.
    """

    def __init__(
        self,
        response: httpx.Response,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._response = response
        self._client = client  # Owned; closed with the source
        self._body = IterableByteSource(response.aiter_bytes())

    @classmethod
    async def open(
        cls,
        url: str,
        *,
        timeout: float = 30.0,
        max_retries: int = 3,
        headers: dict[str, str] | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> "HttpByteSource":
        """GET ``url`` and return a source bound to its body.

        Args:
            url: Feed URL.
            timeout: Per-request timeout in seconds.
            max_retries: Attempts for transport errors (connect, read, ...).
            headers: Extra request headers.
            client: Client to use. When omitted, one is created and owned.

        Raises:
            SourceError: On transport failure after retries or a non-2xx status.
        """
        owned = client is None
        http = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)
        try:
            response = await cls._send(http, url, headers or {}, max_retries)
        except httpx.HTTPError as exc:
            if owned:
                await http.aclose()
            logger.error("Cannot open feed URL %s: %s", url, exc)
            raise SourceError(f"Cannot open {url}: {exc}") from exc

        logger.info(
            "Opened feed URL %s: status=%d, content_type=%s",
            url,
            response.status_code,
            response.headers.get("content-type"),
        )
        return cls(response, client=http if owned else None)

    @staticmethod
    async def _send(
        http: httpx.AsyncClient,
        url: str,
        headers: dict[str, str],
        max_retries: int,
    ) -> httpx.Response:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(max_retries),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=10),
            retry=retry_if_exception_type(httpx.TransportError),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        ):
            with attempt:
                request = http.build_request("GET", url, headers=headers)
                response = await http.send(request, stream=True)
                if response.is_error:
                    await response.aclose()
                    response.raise_for_status()
                return response

    async def read(self, size: int) -> bytes | None:
        try:
            return await self._body.read(size)
        except httpx.HTTPError as exc:
            raise SourceError(f"HTTP body read failed: {exc}") from exc

    async def close(self) -> None:
        await self._body.close()
        await self._response.aclose()
        if self._client is not None:
            client, self._client = self._client, None
            await client.aclose()
