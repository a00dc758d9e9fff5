"""
Summary result and completion-service configuration models.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, model_validator


class LLMConfig(BaseModel):
    """Connection settings for the completion service."""

    endpoint_url: Optional[str] = None
    api_key: str = ""
    model: str = ""

    model_config = ConfigDict(frozen=True)

    @property
    def is_configured(self) -> bool:
        return bool(self.endpoint_url and self.endpoint_url.strip())


class SummaryResult(BaseModel):
    """
    Outcome of a single summarization request.

    A failed result carries only `video_id` and `error`; every other field
    keeps its zero value. `tracked` results are owned by durable storage,
    untracked ones must never be persisted.
    """

    video_id: str
    summary: str = ""
    thinking: str = ""
    source_language: str = ""
    generated_at: Optional[datetime] = None
    tracked: bool = False
    error: Optional[Exception] = None

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @model_validator(mode="after")
    def check_error_fields(self) -> "SummaryResult":
        if self.error is not None and (
            self.summary
            or self.thinking
            or self.source_language
            or self.generated_at is not None
            or self.tracked
        ):
            raise ValueError("a failed SummaryResult may only carry video_id and error")
        return self

    @classmethod
    def failed(cls, video_id: str, error: Exception) -> "SummaryResult":
        return cls(video_id=video_id, error=error)
