"""HTTP fetcher and native crawler built on httpx and BeautifulSoup."""

import asyncio
import re
from collections import deque
from types import TracebackType
from typing import Optional
from urllib.parse import urljoin, urlparse

import httpx
from bs4 import BeautifulSoup

from sitemd.core.errors import FetchError
from sitemd.core.interfaces import Fetcher
from sitemd.core.models import CrawlConfig

RETRYABLE_CLIENT_STATUSES = {408, 429}

SKIP_PATTERNS = [
    r"\.(png|jpe?g|gif|svg|webp|ico|css|js|woff2?|ttf|pdf|zip)$",
]


class HttpFetcher(Fetcher):
    """Fetch documents over HTTP, one request at a time."""

    def __init__(
        self,
        timeout: float = 30.0,
        max_retries: int = 3,
        retry_delay: float = 0.5,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            timeout: Request timeout in seconds.
            max_retries: Attempts per document before giving up.
            retry_delay: Base delay between attempts in seconds.
            client: Client to use instead of creating one.
        """
        self._timeout = timeout
        self._max_retries = max(1, max_retries)
        self._retry_delay = retry_delay
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self) -> "HttpFetcher":
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                follow_redirects=True,
            )
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise RuntimeError("HttpFetcher must be used as an async context manager")
        return self._client

    async def fetch(self, url: str, depth: int = 0) -> str:
        """Fetch a single document.

        Only depth 0 is supported. Transient failures are retried; client
        errors other than 408 and 429 fail immediately.

        Raises:
            FetchError: If the document could not be retrieved.
        """
        if depth != 0:
            raise ValueError("HttpFetcher.fetch only supports depth 0; use crawl()")

        response = await self._get(url)
        return response.text

    async def _get(self, url: str) -> httpx.Response:
        last_error: Optional[Exception] = None

        for attempt in range(self._max_retries):
            try:
                response = await self.client.get(url)
                response.raise_for_status()
                return response

            except httpx.HTTPStatusError as e:
                if self._is_permanent(e.response.status_code):
                    raise FetchError(f"HTTP {e.response.status_code}", url=url) from e
                last_error = e

            except httpx.RequestError as e:
                last_error = e

            if attempt < self._max_retries - 1:
                await asyncio.sleep(self._retry_delay * (attempt + 1))

        raise FetchError(str(last_error) or "unknown error", url=url) from last_error

    def _is_permanent(self, status_code: int) -> bool:
        """Client errors other than timeouts and rate limits are not retried."""
        return 400 <= status_code < 500 and status_code not in RETRYABLE_CLIENT_STATUSES

    async def crawl(self, root: str, config: CrawlConfig) -> list[str]:
        """Crawl same-host links breadth-first from ``root``.

        If the root redirects to another host, links on that host are
        followed too. Redirects of other pages do not widen the crawl.

        Args:
            root: URL to start from.
            config: Maximum link depth and delay between requests.

        Returns:
            URLs of the HTML pages visited, in visit order.
        """
        # Hosts the crawl may visit; the root's redirect target is added below
        hosts = {urlparse(root).netloc}
        visited: set[str] = set()
        pages: list[str] = []
        queue: deque[tuple[str, int]] = deque([(self._normalize_url(root), 0)])
        first = True

        while queue:
            url, depth = queue.popleft()

            if url in visited or depth > config.depth:
                continue
            visited.add(url)

            if not self._should_process(url, hosts):
                continue

            # Politeness delay between consecutive requests
            if not first and config.delay_ms > 0:
                await asyncio.sleep(config.delay_ms / 1000)
            first = False

            try:
                response = await self._get(url)
            except FetchError:
                continue

            content_type = response.headers.get("content-type", "")
            if "text/html" not in content_type:
                continue

            pages.append(url)
            if depth == 0:
                hosts.add(urlparse(str(response.url)).netloc)

            if depth < config.depth:
                for link in self._extract_links(
                    response.text, str(response.url), hosts
                ):
                    if link not in visited:
                        queue.append((link, depth + 1))

        return pages

    def _normalize_url(self, url: str) -> str:
        """Normalize a URL for deduplication."""
        if "#" in url:
            url = url.split("#")[0]
        return url.rstrip("/")

    def _should_process(self, url: str, hosts: set[str]) -> bool:
        if urlparse(url).netloc not in hosts:
            return False
        return not any(re.search(p, url, re.IGNORECASE) for p in SKIP_PATTERNS)

    def _extract_links(
        self, html: str, current_url: str, hosts: set[str]
    ) -> list[str]:
        """Extract links to the crawled hosts from HTML content."""
        soup = BeautifulSoup(html, "html.parser")
        links: list[str] = []

        for a in soup.find_all("a", href=True):
            href = a["href"]

            if href.startswith(("javascript:", "mailto:", "tel:", "#")):
                continue

            full_url = urljoin(current_url, href)

            if urlparse(full_url).netloc in hosts:
                links.append(self._normalize_url(full_url))

        return links
