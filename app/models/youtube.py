import re
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.enums import CaptionFormat

YOUTUBE_VIDEO_ID_PREFIX = "yt:video:"
YOUTUBE_VIDEO_ID_PATTERN = re.compile(r"^[a-zA-Z0-9_-]{11}$")

# --- Internal Parsing Models (yt-dlp) ---

class YtDlpCaption(BaseModel):
    ext: Optional[str] = None
    url: Optional[str] = None

    model_config = ConfigDict(extra='ignore')

class YtDlpResponse(BaseModel):
    id: Optional[str] = None
    title: Optional[str] = None
    duration: Optional[float] = None
    subtitles: Dict[str, List[YtDlpCaption]] = Field(default_factory=dict)
    automatic_captions: Dict[str, List[YtDlpCaption]] = Field(default_factory=dict)

    model_config = ConfigDict(extra='ignore')

    def auto_caption_url(self, language: str) -> Optional[str]:
        """Returns the first auto-generated caption URL for a language, if any."""
        captions = self.automatic_captions.get(language) or []
        return captions[0].url if captions else None

# --- Internal Parsing Models (JSON timed-text) ---

class TimedTextSeg(BaseModel):
    utf8: str = ""
    t_offset_ms: int = Field(default=0, alias="tOffsetMs")

    model_config = ConfigDict(extra='ignore', populate_by_name=True)

    @field_validator("utf8", mode="before")
    @classmethod
    def null_text(cls, v):
        return "" if v is None else v

    @field_validator("t_offset_ms", mode="before")
    @classmethod
    def null_offset(cls, v):
        return 0 if v is None else v

class TimedTextEvent(BaseModel):
    t_start_ms: int = Field(default=0, alias="tStartMs")
    d_duration_ms: int = Field(default=0, alias="dDurationMs")
    segs: List[TimedTextSeg] = Field(default_factory=list)

    model_config = ConfigDict(extra='ignore', populate_by_name=True)

    @field_validator("t_start_ms", "d_duration_ms", mode="before")
    @classmethod
    def null_times(cls, v):
        return 0 if v is None else v

    @field_validator("segs", mode="before")
    @classmethod
    def null_segs(cls, v):
        if isinstance(v, list):
            return [seg for seg in v if seg is not None]
        return v or []

class TimedTextDocument(BaseModel):
    events: List[TimedTextEvent] = Field(default_factory=list)

    model_config = ConfigDict(extra='ignore')

    @field_validator("events", mode="before")
    @classmethod
    def null_events(cls, v):
        if isinstance(v, list):
            return [event for event in v if event is not None]
        return v or []

# --- Core Data Models ---

class TimedSegment(BaseModel):
    text: str
    timestamp_ms: int

    model_config = ConfigDict(frozen=True)

class CaptionResource(BaseModel):
    content: str
    format: CaptionFormat

    model_config = ConfigDict(frozen=True)

class VideoID(BaseModel):
    """A YouTube video ID, accepted in raw (11 chars) or full (yt:video:ID) form."""

    raw: str

    model_config = ConfigDict(frozen=True)

    @field_validator("raw")
    @classmethod
    def validate_raw(cls, v: str) -> str:
        if len(v) != 11:
            raise ValueError(f"invalid raw video ID length: expected 11 characters, got {len(v)}")
        if not YOUTUBE_VIDEO_ID_PATTERN.match(v):
            raise ValueError(f"invalid raw video ID format: must match pattern {YOUTUBE_VIDEO_ID_PATTERN.pattern}")
        return v

    @classmethod
    def parse(cls, value: str) -> "VideoID":
        """Builds a VideoID from either form."""
        if value.startswith(YOUTUBE_VIDEO_ID_PREFIX):
            return cls(raw=value[len(YOUTUBE_VIDEO_ID_PREFIX):])
        return cls(raw=value)

    @property
    def watch_url(self) -> str:
        return f"https://www.youtube.com/watch?v={self.raw}"

    def __str__(self) -> str:
        return self.raw
