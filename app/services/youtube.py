"""
YouTube metadata enrichment: locates the auto-generated caption track of a video.
"""
import asyncio
from typing import Optional

from cachetools import TTLCache
from loguru import logger
from pydantic import ValidationError
from tenacity import retry, retry_if_exception, stop_after_attempt, wait_incrementing
from yt_dlp import YoutubeDL
from yt_dlp.utils import DownloadError

from app.core.cache import CachedCaptionLookup, caption_cache
from app.core.constants import CaptionConfig, YtDlpConfig
from app.core.exceptions import FetchError
from app.models import VideoID, YtDlpResponse


def is_retryable_ytdlp_error(exc: BaseException) -> bool:
    """Retry only errors that look transient (timeouts, network trouble)."""
    if not isinstance(exc, DownloadError):
        return False
    message = str(exc).lower()
    return any(marker in message for marker in YtDlpConfig.RETRYABLE_MARKERS)


class CaptionLocator:
    """
    Service for finding the caption resource URL of a YouTube video.

    This service handles:
    1. Extracting video metadata with yt-dlp (no media download).
    2. Picking the first auto-generated caption track for the configured language.
    3. Caching lookups, including misses, to minimize calls to YouTube.
    """

    def __init__(
        self,
        language: str = CaptionConfig.DEFAULT_LANGUAGE,
        timeout: int = YtDlpConfig.TIMEOUT_SECONDS,
        cache: Optional[TTLCache] = None,
    ):
        """
        Initialize the CaptionLocator.

        Args:
            language: Caption language code to look for.
            timeout: Socket timeout in seconds for yt-dlp requests.
            cache: Lookup cache (defaults to the process-wide one).
        """
        self.language = language
        self.timeout = timeout
        self.cache = caption_cache if cache is None else cache

    def _extract_info_sync(self, video_url: str) -> Optional[dict]:
        """
        Synchronous helper to extract video info using yt-dlp.

        Args:
            video_url: Watch URL of the video.

        Returns:
            The raw info dict from yt-dlp.
        """
        ydl_opts = {
            "skip_download": True,
            "writeautomaticsub": True,
            "subtitleslangs": [self.language],
            "quiet": True,
            "no_warnings": True,
            "socket_timeout": self.timeout,
        }

        with YoutubeDL(ydl_opts) as ydl:
            return ydl.extract_info(video_url, download=False)

    @retry(
        stop=stop_after_attempt(YtDlpConfig.MAX_RETRIES + 1),
        wait=wait_incrementing(start=1, increment=1),
        retry=retry_if_exception(is_retryable_ytdlp_error),
        reraise=True,
    )
    async def _fetch_info(self, video_id: VideoID) -> Optional[dict]:
        """Run the blocking yt-dlp call in a thread pool, retrying transient failures."""
        return await asyncio.to_thread(self._extract_info_sync, video_id.watch_url)

    async def locate(self, video_id: str) -> Optional[str]:
        """
        Find the auto-generated caption URL for a video.

        Args:
            video_id: Raw or full (yt:video:ID) video ID.

        Returns:
            The caption resource URL, or None if the video has no auto captions.

        Raises:
            FetchError: If the video ID is malformed or yt-dlp fails after retries.
        """
        try:
            vid = VideoID.parse(video_id)
        except ValidationError as e:
            raise FetchError(f"failed to extract video ID from {video_id!r}") from e

        cached: Optional[CachedCaptionLookup] = self.cache.get(vid.raw)
        if cached is not None:
            logger.debug(f"Caption lookup cache hit for {vid.raw}")
            return cached["url"]

        try:
            info = await self._fetch_info(vid)
        except DownloadError as e:
            raise FetchError(f"yt-dlp failed for video {vid.raw}: {e}") from e

        url = None
        if info:
            url = YtDlpResponse(**info).auto_caption_url(self.language)

        if url:
            logger.info(f"Video {vid.raw}: found '{self.language}' auto captions")
        else:
            logger.info(f"Video {vid.raw}: no '{self.language}' auto captions")

        self.cache[vid.raw] = CachedCaptionLookup(url=url)
        return url
