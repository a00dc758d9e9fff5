"""
Unit tests for Pydantic models.
"""
import pytest
from datetime import datetime, timezone
from pydantic import ValidationError

from app.models import (
    LLMConfig,
    SummaryResult,
    TimedTextDocument,
    VideoID,
    VideoSummaryResponse,
    YtDlpResponse,
)


def test_video_id_raw_form():
    """Test that an 11-character ID is accepted as-is."""
    vid = VideoID.parse("dQw4w9WgXcQ")
    assert vid.raw == "dQw4w9WgXcQ"
    assert str(vid) == "dQw4w9WgXcQ"


def test_video_id_full_form():
    """Test that the yt:video: prefix is stripped."""
    vid = VideoID.parse("yt:video:abc_DEF-123")
    assert vid.raw == "abc_DEF-123"
    assert vid.watch_url == "https://www.youtube.com/watch?v=abc_DEF-123"


@pytest.mark.parametrize("value", ["", "short", "dQw4w9WgXcQX", "dQw4w9WgX!Q", "yt:video:short"])
def test_video_id_rejects_malformed(value):
    """Test that wrong lengths and characters are rejected."""
    with pytest.raises(ValidationError):
        VideoID.parse(value)


def test_llm_config_is_configured():
    assert LLMConfig(endpoint_url="http://localhost:1234/v1").is_configured
    assert not LLMConfig().is_configured
    assert not LLMConfig(endpoint_url="  ").is_configured


def test_failed_summary_result():
    """Test that a failed result carries only the video ID and error."""
    error = RuntimeError("boom")
    result = SummaryResult.failed("dQw4w9WgXcQ", error)

    assert result.error is error
    assert result.summary == ""
    assert result.generated_at is None
    assert result.tracked is False


def test_failed_summary_result_rejects_content():
    """Test that an error cannot be combined with summary fields."""
    with pytest.raises(ValidationError):
        SummaryResult(video_id="dQw4w9WgXcQ", summary="partial", error=RuntimeError("boom"))
    with pytest.raises(ValidationError):
        SummaryResult(video_id="dQw4w9WgXcQ", tracked=True, error=RuntimeError("boom"))


def test_summary_response_from_result():
    generated_at = datetime(2024, 5, 1, tzinfo=timezone.utc)
    result = SummaryResult(
        video_id="dQw4w9WgXcQ",
        summary="S",
        thinking="T",
        source_language="en",
        generated_at=generated_at,
    )

    response = VideoSummaryResponse.from_result(result)

    assert response.summary == "S"
    assert response.thinking == "T"
    assert response.generated_at == generated_at
    assert response.tracked is False


def test_ytdlp_response_without_auto_captions():
    assert YtDlpResponse(id="x").auto_caption_url("en") is None
    assert YtDlpResponse(automatic_captions={"en": []}).auto_caption_url("en") is None


def test_timed_text_document_null_segs():
    document = TimedTextDocument.model_validate({"events": [{"tStartMs": 5, "segs": None}]})
    assert document.events[0].t_start_ms == 5
    assert document.events[0].segs == []
