"""
In-memory caching utilities with strong typing.
"""
from typing import Optional, TypedDict

from cachetools import TTLCache

from app.core.constants import YtDlpConfig


class CachedCaptionLookup(TypedDict):
    """Result of a caption lookup; a None url records that the video has no captions."""
    url: Optional[str]


def new_caption_cache(
    maxsize: int = YtDlpConfig.CACHE_MAXSIZE,
    ttl: int = YtDlpConfig.CACHE_TTL_SECONDS,
) -> TTLCache[str, CachedCaptionLookup]:
    """Create a cache of caption lookups keyed by raw video ID."""
    return TTLCache(maxsize=maxsize, ttl=ttl)


# Process-wide cache shared by all locators that don't bring their own
caption_cache: TTLCache[str, CachedCaptionLookup] = new_caption_cache()
