"""
Pydantic models for API request/response schemas.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from app.models.summary import SummaryResult


class VideoSummaryResponse(BaseModel):
    """Response model for a video summary."""

    video_id: str
    summary: str
    thinking: str = ""
    source_language: str
    generated_at: Optional[datetime] = None
    tracked: bool

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_result(cls, result: SummaryResult) -> "VideoSummaryResponse":
        return cls(
            video_id=result.video_id,
            summary=result.summary,
            thinking=result.thinking,
            source_language=result.source_language,
            generated_at=result.generated_at,
            tracked=result.tracked,
        )


class HealthResponse(BaseModel):
    """Response model for the health check."""

    status: str
    project: str

    model_config = ConfigDict(frozen=True)
