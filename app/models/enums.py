"""
Enums for type-safe values across the application.
"""
from enum import Enum


class LLMRole(str, Enum):
    """Role for LLM provider messages (OpenAI/Groq compatible)."""
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class LLMProviderType(str, Enum):
    """Supported LLM provider types for configuration."""
    OPENAI = "openai"
    GROQ = "groq"


class CaptionFormat(str, Enum):
    """Caption wire formats, inferred from content."""
    HLS_PLAYLIST = "hls_playlist"
    JSON_TIMED_TEXT = "json_timed_text"
    VTT_SRT = "vtt_srt"


class PipelineStage(str, Enum):
    """States a single summary request moves through."""
    IDLE = "idle"
    CONFIG_CHECKED = "config_checked"
    CACHE_CHECKED = "cache_checked"
    CAPTIONS_LOCATED = "captions_located"
    RESOLVED = "resolved"
    NORMALIZED = "normalized"
    COMPLETED = "completed"
    DONE = "done"
