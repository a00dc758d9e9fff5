"""
Tests for the canned summary service and the in-memory repository.
"""
import pytest

from app.models import SummaryResult
from app.repositories.summary import InMemorySummaryRepository
from app.services.mock import MockSummaryService, mock_summary_text


def test_mock_summary_text_keywords():
    assert "technical concepts" in mock_summary_text("techvideo01")
    assert "tutorial" in mock_summary_text("learnPython")
    assert "review" in mock_summary_text("reviewPhone")
    assert mock_summary_text("dQw4w9WgXcQ").endswith("Mock summary for video ID: dQw4w9Wg")


@pytest.mark.asyncio
async def test_mock_service_generates_untracked_summary():
    service = MockSummaryService(summary_repository=InMemorySummaryRepository())

    result = await service.get_or_generate_summary("dQw4w9WgXcQ")

    assert result.tracked is False
    assert result.source_language == "en"
    assert result.generated_at is not None
    assert result.thinking == ""


@pytest.mark.asyncio
async def test_mock_service_prefers_stored_summary():
    repository = InMemorySummaryRepository()
    await repository.save(SummaryResult(video_id="dQw4w9WgXcQ", summary="Stored.", tracked=True))
    service = MockSummaryService(summary_repository=repository)

    result = await service.get_or_generate_summary("dQw4w9WgXcQ")

    assert result.summary == "Stored."
    assert result.tracked is True


@pytest.mark.asyncio
async def test_repository_refuses_untracked_and_failed_results():
    repository = InMemorySummaryRepository()

    with pytest.raises(ValueError, match="untracked"):
        await repository.save(SummaryResult(video_id="dQw4w9WgXcQ", summary="S"))
    with pytest.raises(ValueError, match="failed"):
        await repository.save(SummaryResult.failed("dQw4w9WgXcQ", RuntimeError("boom")))

    assert len(repository) == 0
    assert await repository.get("dQw4w9WgXcQ") is None
