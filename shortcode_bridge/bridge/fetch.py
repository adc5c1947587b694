from __future__ import annotations

import enum
import json
import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from ..config import Settings, get_settings
from ..exceptions import InvalidFetchRequestError, ShortcodeFetchError
from .client_script import instantiate_get_script, instantiate_post_script

logger = logging.getLogger(__name__)

SUPPORTED_METHODS = ("GET", "POST")


class FetchStrategy(str, enum.Enum):
    """How a shortcode's remote content reaches the page.

    ``BLOCKING`` holds the render worker for a full network round trip. A
    deployment rendering only blocking shortcodes under load saturates its
    worker pool and starts queueing or rejecting requests, so prefer
    ``DEFERRED`` for anything not needed in the server-rendered markup.
    """

    BLOCKING = "blocking"
    DEFERRED = "deferred"

    @classmethod
    def from_flag(cls, jscaller: bool) -> "FetchStrategy":
        return cls.DEFERRED if jscaller else cls.BLOCKING


@dataclass(frozen=True)
class FetchRequest:
    url: str
    method: str = "POST"
    body: Optional[str] = None
    strategy: FetchStrategy = FetchStrategy.BLOCKING

    def __post_init__(self) -> None:
        method = (self.method or "").strip().upper()
        if method not in SUPPORTED_METHODS:
            raise InvalidFetchRequestError(f"Invalid method: {self.method}")
        object.__setattr__(self, "method", method)

        try:
            parsed = httpx.URL(self.url)
        except (httpx.InvalidURL, TypeError) as exc:
            raise InvalidFetchRequestError(f"Invalid URL: {self.url!r}") from exc
        if parsed.scheme not in {"http", "https"} or not parsed.host:
            raise InvalidFetchRequestError(f"URL must be absolute http(s): {self.url!r}")

        if method == "GET":
            if self.body is not None:
                raise InvalidFetchRequestError("GET requests do not carry a body")
            return
        body = "{}" if self.body is None else self.body
        try:
            json.loads(body)
        except ValueError as exc:
            raise InvalidFetchRequestError(f"Request body is not valid JSON: {exc}") from exc
        object.__setattr__(self, "body", body)

    def with_strategy(self, strategy: FetchStrategy) -> "FetchRequest":
        return FetchRequest(url=self.url, method=self.method, body=self.body, strategy=strategy)


def render_client_script(request: FetchRequest) -> str:
    """Build the deferred-delivery stub for ``request``; performs no I/O."""
    if request.method == "GET":
        return instantiate_get_script(request.url)
    return instantiate_post_script(request.url, request.body or "{}")


class BlockingFetcher:
    """Fetches shortcode content synchronously on the calling thread."""

    def __init__(
        self,
        *,
        settings: Optional[Settings] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._owns_client = client is None
        self._client = client or httpx.Client(
            timeout=httpx.Timeout(
                self.settings.fetch_timeout_seconds,
                connect=self.settings.connect_timeout_seconds,
            )
        )

    def fetch(self, request: FetchRequest) -> str:
        headers = {}
        content = None
        if request.method == "POST":
            headers["Content-Type"] = "application/json"
            content = request.body
        logger.debug("Blocking shortcode fetch: %s %s", request.method, request.url)
        try:
            response = self._client.request(request.method, request.url, headers=headers, content=content)
        except httpx.HTTPError as exc:
            logger.warning("Shortcode fetch failed: %s %s: %s", request.method, request.url, exc)
            raise ShortcodeFetchError(f"Request error: {exc}", url=request.url) from exc
        if not response.is_success:
            logger.warning(
                "Shortcode fetch returned status %s: %s %s",
                response.status_code,
                request.method,
                request.url,
            )
            raise ShortcodeFetchError(
                f"Request failed with status: {response.status_code}",
                url=request.url,
                status_code=response.status_code,
                body=response.text,
            )
        return response.text

    def close(self) -> None:
        if self._owns_client:
            self._client.close()


class ContentFetchBridge:
    def __init__(
        self,
        *,
        settings: Optional[Settings] = None,
        fetcher: Optional[BlockingFetcher] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._owns_fetcher = fetcher is None
        self._fetcher: Optional[BlockingFetcher] = fetcher or BlockingFetcher(settings=self.settings)

    @property
    def fetcher(self) -> BlockingFetcher:
        if self._fetcher is None:
            raise RuntimeError("ContentFetchBridge is closed")
        return self._fetcher

    def deliver(self, request: FetchRequest) -> str:
        if request.strategy is FetchStrategy.DEFERRED:
            return render_client_script(request)
        return self.fetcher.fetch(request)

    def fetch_shortcode(
        self,
        url: str,
        *,
        method: Optional[str] = None,
        body: Optional[str] = None,
        strategy: FetchStrategy = FetchStrategy.BLOCKING,
    ) -> str:
        request = FetchRequest(
            url=url,
            method=method or self.settings.default_method,
            body=body,
            strategy=strategy,
        )
        return self.deliver(request)

    def close(self) -> None:
        if self._owns_fetcher and self._fetcher is not None:
            self._fetcher.close()
            self._fetcher = None

    def __enter__(self) -> "ContentFetchBridge":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = [
    "BlockingFetcher",
    "ContentFetchBridge",
    "FetchRequest",
    "FetchStrategy",
    "SUPPORTED_METHODS",
    "render_client_script",
]
