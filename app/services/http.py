"""
HTTP fetching of caption resources and HLS segments.
"""
from typing import Optional

import httpx
from loguru import logger

from app.core.constants import CaptionConfig
from app.core.exceptions import FetchError


class CaptionFetcher:
    """
    Fetches caption documents over HTTP with a fixed timeout and User-Agent.

    The same policy applies to the primary caption resource and to HLS
    segments. No retries happen here; failures surface as FetchError.
    """

    def __init__(
        self,
        timeout: float = CaptionConfig.FETCH_TIMEOUT_SECONDS,
        user_agent: str = CaptionConfig.USER_AGENT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the fetcher.

        Args:
            timeout: Per-request timeout in seconds.
            user_agent: Identifying client-agent string.
            transport: Optional httpx transport (used by tests).
        """
        self.timeout = timeout
        self.user_agent = user_agent
        self.transport = transport

    async def fetch_text(self, url: str) -> str:
        """
        GET a URL and return its body as text.

        Raises:
            FetchError: On an empty or unparseable URL, a non-200 status, a timeout or a transport error.
        """
        if not url:
            raise FetchError("subtitle URL is empty")

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                headers={"User-Agent": self.user_agent},
                follow_redirects=True,
                transport=self.transport,
            ) as client:
                response = await client.get(url)
        except httpx.TimeoutException as e:
            raise FetchError(f"request timed out after {self.timeout}s: {url}") from e
        except httpx.HTTPError as e:
            raise FetchError(f"failed to fetch {url}: {e}") from e
        except httpx.InvalidURL as e:
            raise FetchError(f"invalid URL {url[:200]!r}: {e}") from e

        if response.status_code != httpx.codes.OK:
            raise FetchError(
                f"HTTP request failed with status {response.status_code}: {url}",
                status=response.status_code,
            )

        logger.debug(f"Fetched {len(response.content)} bytes from {url}")
        return response.text
