"""
Canned summaries for local development without an LLM or network access.
"""
import asyncio
from datetime import datetime, timezone
from typing import Optional

from loguru import logger

from app.core.constants import SummaryConfig
from app.models import SummaryResult
from app.repositories.summary import SummaryRepository

MOCK_SUMMARIES = (
    (
        ("tech", "code"),
        "This video explores advanced technical concepts and programming techniques. "
        "The presenter demonstrates practical examples and best practices for software development. "
        "Key insights include optimization strategies and modern development workflows. Video ID: {short_id}",
    ),
    (
        ("tutorial", "learn"),
        "An educational tutorial covering step-by-step instructions for beginners. "
        "The video breaks down complex topics into digestible segments with clear explanations. "
        "Viewers will gain practical skills and foundational knowledge. Video ID: {short_id}",
    ),
    (
        ("review", "test"),
        "A comprehensive review examining features, performance, and value proposition. "
        "The analysis includes detailed comparisons and real-world usage scenarios. "
        "The presenter provides honest insights and recommendations for potential users. Video ID: {short_id}",
    ),
)

DEFAULT_MOCK_SUMMARY = (
    "This video presents interesting content with valuable insights and engaging presentation. "
    "The creator shares expertise on the topic with clear explanations and practical examples. "
    "Viewers will find useful information and actionable takeaways. Mock summary for video ID: {short_id}"
)


def mock_summary_text(video_id: str) -> str:
    """Pick a canned summary from keywords in the video ID."""
    short_id = video_id[:8]
    for keywords, template in MOCK_SUMMARIES:
        if any(keyword in video_id for keyword in keywords):
            return template.format(short_id=short_id)
    return DEFAULT_MOCK_SUMMARY.format(short_id=short_id)


class MockSummaryService:
    """Drop-in replacement for SummaryService that never touches the network."""

    def __init__(self, summary_repository: SummaryRepository):
        self.summary_repository = summary_repository

    async def get_or_generate_summary(
        self,
        video_id: str,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> SummaryResult:
        stored = await self.summary_repository.get(video_id)
        if stored is not None:
            return stored.model_copy(update={"tracked": True})

        logger.info(f"Generating mock summary for {video_id}")
        return SummaryResult(
            video_id=video_id,
            summary=mock_summary_text(video_id),
            source_language=SummaryConfig.SOURCE_LANGUAGE,
            generated_at=datetime.now(timezone.utc),
            tracked=False,
        )
