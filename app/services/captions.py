"""
Caption resolution: turns a fetched caption document into plain transcript text.

Supported wire formats, detected from content rather than file extension:

1. HLS playlist (`#EXTM3U`): only the first segment is fetched and parsed as VTT/SRT.
2. JSON timed-text (YouTube "json3"): segments are ordered by absolute timestamp.
3. WebVTT / SRT: timing lines, cue numbers, cue settings and markup are stripped.
"""
import re
from typing import List, Optional

from loguru import logger
from pydantic import ValidationError

from app.core.constants import CaptionConfig
from app.core.exceptions import FetchError
from app.models import CaptionFormat, CaptionResource, TimedSegment, TimedTextDocument
from app.services.http import CaptionFetcher

VTT_TIMING_PATTERN = re.compile(r"^[0-9]{2}:[0-9]{2}:[0-9]{2}\.[0-9]{3} --> [0-9]{2}:[0-9]{2}:[0-9]{2}\.[0-9]{3}")
SRT_TIMING_PATTERN = re.compile(r"^[0-9]{2}:[0-9]{2}:[0-9]{2},[0-9]{3} --> [0-9]{2}:[0-9]{2}:[0-9]{2},[0-9]{3}")
SEQUENCE_NUMBER_PATTERN = re.compile(r"[0-9]+")
HTML_TAG_PATTERN = re.compile(r"<[^>]*>")

CUE_SETTING_MARKERS = ("align:", "position:", "size:")

# Single pass in this order: "&amp;lt;" becomes "<", but "&amp;amp;" stays "&amp;"
HTML_ENTITIES = (
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&apos;", "'"),
)


def detect_caption_format(content: str) -> CaptionFormat:
    """Infer the caption format from the document body."""
    stripped = content.strip()
    if stripped.startswith(CaptionConfig.HLS_HEADER):
        return CaptionFormat.HLS_PLAYLIST
    if stripped.startswith("{"):
        return CaptionFormat.JSON_TIMED_TEXT
    return CaptionFormat.VTT_SRT


def parse_vtt_or_srt(content: str) -> str:
    """
    Extract spoken text from WebVTT or SRT content.

    Args:
        content: Raw caption document.

    Returns:
        Cue text joined with single spaces (empty if nothing survives).
    """
    text_lines: List[str] = []

    for line in content.split("\n"):
        line = line.strip()

        if not line or line.startswith("WEBVTT"):
            continue
        if VTT_TIMING_PATTERN.match(line) or SRT_TIMING_PATTERN.match(line):
            continue
        if SEQUENCE_NUMBER_PATTERN.fullmatch(line):
            continue
        if any(marker in line for marker in CUE_SETTING_MARKERS):
            continue

        line = HTML_TAG_PATTERN.sub("", line)
        for entity, char in HTML_ENTITIES:
            line = line.replace(entity, char)

        if line:
            text_lines.append(line)

    return " ".join(text_lines)


def parse_json_timed_text(content: str) -> Optional[str]:
    """
    Extract text from YouTube's JSON timed-text format.

    Event and segment order in the document is not reliable, so segments are
    sorted by absolute timestamp (event start + segment offset). Empty
    segments, bare newlines and bracketed markers such as "[Music]" are dropped.

    Args:
        content: Raw JSON document.

    Returns:
        The joined text, or None if the content is not a timed-text document.
    """
    try:
        document = TimedTextDocument.model_validate_json(content)
    except ValidationError:
        return None

    segments: List[TimedSegment] = []
    for event in document.events:
        for seg in event.segs:
            text = seg.utf8
            if not text or text == "\n":
                continue
            if text.startswith("[") and text.endswith("]"):
                continue
            segments.append(
                TimedSegment(text=text, timestamp_ms=event.t_start_ms + seg.t_offset_ms)
            )

    segments.sort(key=lambda s: s.timestamp_ms)
    return " ".join(s.text for s in segments)


def extract_segment_urls(content: str) -> List[str]:
    """Collect segment URLs from an HLS playlist, in playlist order."""
    urls = []
    for line in content.split("\n"):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("http"):
            urls.append(line)
    return urls


class CaptionResolver:
    """
    Resolves a caption document, following at most one level of playlist indirection.
    """

    def __init__(self, fetcher: CaptionFetcher):
        """
        Initialize the resolver.

        Args:
            fetcher: HTTP collaborator used for HLS segment retrieval.
        """
        self.fetcher = fetcher

    async def resolve(self, content: str) -> str:
        """
        Turn caption content into transcript text.

        Args:
            content: The caption document as fetched.

        Returns:
            Transcript text; empty when nothing could be extracted.
        """
        resource = CaptionResource(content=content, format=detect_caption_format(content))
        logger.debug(f"Resolving caption resource as {resource.format.value}")

        if resource.format == CaptionFormat.HLS_PLAYLIST:
            return await self._resolve_playlist(resource.content)

        if resource.format == CaptionFormat.JSON_TIMED_TEXT:
            text = parse_json_timed_text(resource.content)
            if text is not None:
                return text
            logger.debug("Content looked like JSON but did not parse; treating as VTT/SRT")

        return parse_vtt_or_srt(resource.content)

    async def _resolve_playlist(self, content: str) -> str:
        """
        Fetch and parse the first segment of an HLS playlist.

        A failed segment fetch yields an empty transcript instead of an error.
        """
        segment_urls = extract_segment_urls(content)
        if not segment_urls:
            logger.info("HLS playlist lists no segments")
            return ""

        # TODO: fetch and concatenate every segment once partial-transcript summaries are ruled out
        logger.debug(f"HLS playlist lists {len(segment_urls)} segments, fetching the first")
        try:
            body = await self.fetcher.fetch_text(segment_urls[0])
        except FetchError as e:
            logger.warning(f"Failed to fetch HLS segment, treating transcript as empty: {e}")
            return ""

        return parse_vtt_or_srt(body)
