"""
Application-wide constants and heuristic limits.

Grouped into static classes per pipeline stage for namespace management and discoverability.
"""


class CaptionConfig:
    """Configuration for caption retrieval."""
    FETCH_TIMEOUT_SECONDS = 30.0
    USER_AGENT = "yt-video-sum-be/1.0"
    HLS_HEADER = "#EXTM3U"
    DEFAULT_LANGUAGE = "en"


class NormalizerConfig:
    """Configuration for transcript normalization (tuned for English auto-captions)."""
    MAX_CHARS = 12_000  # ~3000 tokens at ~4 chars/token
    HEAD_RATIO = 0.4
    TAIL_RATIO = 0.4
    BOUNDARY_WINDOW = 100  # Characters searched for a sentence break at each cut
    ABBREVIATION_MARKER = " [content abbreviated] "
    SENTENCE_DELIMITER = ". "
    MIN_SENTENCE_CHARS = 10
    SIMILARITY_THRESHOLD = 0.7

    FILLER_TOKENS = (
        " um ",
        " uh ",
        " like ",
        " you know ",
        " I mean ",
        " so ",
        " well ",
        " basically ",
        " actually ",
        "[Music]",
        "[Applause]",
        "[Laughter]",
        "[Sound Effects]",
        "[Background Music]",
    )


class CompletionConfig:
    """Configuration for the completion service call."""
    TEMPERATURE = 0.7
    TIMEOUT_SECONDS = 300.0
    THINK_START = "<think>"
    THINK_END = "</think>"


class SummaryConfig:
    """Configuration for summary result assembly."""
    SOURCE_LANGUAGE = "en"


class YtDlpConfig:
    """Configuration for yt-dlp metadata enrichment."""
    TIMEOUT_SECONDS = 60
    MAX_RETRIES = 2
    CACHE_MAXSIZE = 256
    CACHE_TTL_SECONDS = 3600
    RETRYABLE_MARKERS = ("timeout", "connection", "network", "temporary failure")
