import asyncio

import pytest

from app.core.exceptions import (
    CompletionError,
    ConfigurationError,
    EmptyContentError,
    FetchError,
    NotAvailableError,
)
from app.models import LLMConfig, PipelineStage, SummaryResult
from app.services.captions import CaptionResolver
from app.services.normalizer import CaptionNormalizer
from app.services.summarization import SummaryService

EXPECTED_TRANSCRIPT = "Hello and welcome to this video. Today we learn about Python programming."


@pytest.mark.asyncio
async def test_generates_untracked_summary(summary_service, mock_invoker, summary_repository):
    result = await summary_service.get_or_generate_summary("dQw4w9WgXcQ")

    assert result.video_id == "dQw4w9WgXcQ"
    assert result.summary == "The video introduces Python."
    assert result.thinking == "Plan the summary."
    assert result.source_language == "en"
    assert result.generated_at is not None
    assert result.tracked is False
    assert result.error is None

    args, kwargs = mock_invoker.complete.call_args
    assert args[0] == EXPECTED_TRANSCRIPT

    # Ad-hoc summaries are never stored
    assert len(summary_repository) == 0


@pytest.mark.asyncio
async def test_unconfigured_endpoint_fails_before_any_io(
    mock_locator, mock_fetcher, mock_invoker, summary_repository
):
    service = SummaryService(
        llm_config=LLMConfig(endpoint_url="   "),
        caption_locator=mock_locator,
        caption_fetcher=mock_fetcher,
        caption_resolver=CaptionResolver(fetcher=mock_fetcher),
        normalizer=CaptionNormalizer(),
        completion_invoker=mock_invoker,
        summary_repository=summary_repository,
    )

    with pytest.raises(ConfigurationError) as exc_info:
        await service.get_or_generate_summary("dQw4w9WgXcQ")

    assert exc_info.value.stage == PipelineStage.IDLE
    assert str(exc_info.value) == "idle: LLM not configured"
    mock_locator.locate.assert_not_called()
    mock_fetcher.fetch_text.assert_not_called()
    mock_invoker.complete.assert_not_called()


@pytest.mark.asyncio
async def test_stored_summary_is_returned_tracked(summary_service, summary_repository, mock_locator):
    stored = SummaryResult(
        video_id="dQw4w9WgXcQ",
        summary="Stored summary.",
        source_language="en",
        tracked=True,
    )
    await summary_repository.save(stored)

    result = await summary_service.get_or_generate_summary("dQw4w9WgXcQ")

    assert result.summary == "Stored summary."
    assert result.tracked is True
    mock_locator.locate.assert_not_called()


@pytest.mark.asyncio
async def test_no_captions(summary_service, mock_locator, mock_fetcher):
    mock_locator.locate.return_value = None

    with pytest.raises(NotAvailableError) as exc_info:
        await summary_service.get_or_generate_summary("dQw4w9WgXcQ")

    assert exc_info.value.stage == PipelineStage.CACHE_CHECKED
    assert exc_info.value.status_code == 404
    mock_fetcher.fetch_text.assert_not_called()


@pytest.mark.asyncio
async def test_caption_fetch_failure(summary_service, mock_fetcher, mock_invoker):
    mock_fetcher.fetch_text.side_effect = FetchError("HTTP request failed with status 404", status=404)

    with pytest.raises(FetchError) as exc_info:
        await summary_service.get_or_generate_summary("dQw4w9WgXcQ")

    assert exc_info.value.stage == PipelineStage.CAPTIONS_LOCATED
    assert exc_info.value.status == 404
    mock_invoker.complete.assert_not_called()


@pytest.mark.asyncio
async def test_empty_playlist_yields_empty_content(summary_service, mock_fetcher, mock_invoker):
    mock_fetcher.fetch_text.return_value = "#EXTM3U\n#EXT-X-VERSION:3\n#EXT-X-ENDLIST"

    with pytest.raises(EmptyContentError) as exc_info:
        await summary_service.get_or_generate_summary("dQw4w9WgXcQ")

    assert exc_info.value.stage == PipelineStage.NORMALIZED
    mock_fetcher.fetch_text.assert_awaited_once()
    mock_invoker.complete.assert_not_called()


@pytest.mark.asyncio
async def test_completion_failure(summary_service, mock_invoker):
    mock_invoker.complete.side_effect = CompletionError("completion timed out after 300.0s")

    with pytest.raises(CompletionError) as exc_info:
        await summary_service.get_or_generate_summary("dQw4w9WgXcQ")

    assert exc_info.value.stage == PipelineStage.NORMALIZED
    assert exc_info.value.detail == "normalized: completion timed out after 300.0s"


@pytest.mark.asyncio
async def test_response_without_thinking(summary_service, mock_invoker):
    mock_invoker.complete.return_value = "Plain summary."

    result = await summary_service.get_or_generate_summary("dQw4w9WgXcQ")

    assert result.summary == "Plain summary."
    assert result.thinking == ""


@pytest.mark.asyncio
async def test_cancel_event_is_forwarded(summary_service, mock_invoker):
    cancel = asyncio.Event()

    await summary_service.get_or_generate_summary("dQw4w9WgXcQ", cancel_event=cancel)

    assert mock_invoker.complete.call_args.kwargs["cancel_event"] is cancel


@pytest.mark.asyncio
async def test_summarize_to_result_reports_failure(summary_service, mock_locator):
    mock_locator.locate.return_value = None

    result = await summary_service.summarize_to_result("dQw4w9WgXcQ")

    assert isinstance(result.error, NotAvailableError)
    assert result.video_id == "dQw4w9WgXcQ"
    assert result.summary == ""
    assert result.thinking == ""
    assert result.source_language == ""
    assert result.generated_at is None
    assert result.tracked is False


@pytest.mark.asyncio
async def test_summarize_to_result_success(summary_service):
    result = await summary_service.summarize_to_result("dQw4w9WgXcQ")

    assert result.error is None
    assert result.summary == "The video introduces Python."
