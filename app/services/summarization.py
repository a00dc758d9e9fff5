"""
Video summarization pipeline.

This module provides the SummaryService class, which sequences the pipeline
for one video:

1. Configuration check: fail fast when no completion endpoint is set.
2. Cache lookup: return a stored summary of a tracked video.
3. Caption location: ask yt-dlp for the auto-caption resource.
4. Resolve and normalize: turn the caption document into bounded plain text.
5. Complete and split: summarize with the LLM, separate reasoning from answer.
6. Assemble: build an untracked SummaryResult.

Every failure surfaces as a SummaryError tagged with the stage it happened in.
Nothing is retried here and concurrent requests for the same video are not
merged; each request owns all of its working data.
"""
import asyncio
import time
from datetime import datetime, timezone
from typing import Optional

from loguru import logger

from app.core.constants import SummaryConfig
from app.core.exceptions import (
    ConfigurationError,
    EmptyContentError,
    NotAvailableError,
    SummaryError,
)
from app.models import LLMConfig, PipelineStage, SummaryResult
from app.repositories.summary import SummaryRepository
from app.services.captions import CaptionResolver
from app.services.completion import CompletionInvoker
from app.services.http import CaptionFetcher
from app.services.normalizer import CaptionNormalizer
from app.services.thinking import split_thinking
from app.services.youtube import CaptionLocator


class SummaryService:
    """
    Get-or-generate summaries for single YouTube videos.

    Ad-hoc summaries are returned untracked and never persisted by this
    service; storing tracked summaries is the caller's responsibility.
    """

    def __init__(
        self,
        llm_config: LLMConfig,
        caption_locator: CaptionLocator,
        caption_fetcher: CaptionFetcher,
        caption_resolver: CaptionResolver,
        normalizer: CaptionNormalizer,
        completion_invoker: CompletionInvoker,
        summary_repository: SummaryRepository,
    ):
        """
        Initialize the summary service.

        Args:
            llm_config: Completion service configuration.
            caption_locator: Finds caption resource URLs (yt-dlp).
            caption_fetcher: Downloads caption resources.
            caption_resolver: Turns caption documents into text.
            normalizer: Cleans and bounds transcript text.
            completion_invoker: Calls the LLM under a deadline.
            summary_repository: Stored summaries of tracked videos.
        """
        self.llm_config = llm_config
        self.caption_locator = caption_locator
        self.caption_fetcher = caption_fetcher
        self.caption_resolver = caption_resolver
        self.normalizer = normalizer
        self.completion_invoker = completion_invoker
        self.summary_repository = summary_repository

    async def get_or_generate_summary(
        self,
        video_id: str,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> SummaryResult:
        """
        Return the stored summary of a tracked video, or generate a fresh one.

        Args:
            video_id: Raw YouTube video ID.
            cancel_event: Set by the caller to abandon the completion call.

        Returns:
            SummaryResult: tracked when it came from storage, untracked otherwise.

        Raises:
            ConfigurationError: No completion endpoint configured (no I/O attempted).
            NotAvailableError: The video has no auto-generated captions.
            FetchError: Caption metadata or content could not be fetched.
            EmptyContentError: Captions yielded no text.
            CompletionError: The LLM call failed, timed out or was cancelled.
        """
        stage = PipelineStage.IDLE
        start_time = time.perf_counter()

        try:
            if not self.llm_config.is_configured:
                raise ConfigurationError()
            stage = PipelineStage.CONFIG_CHECKED

            stored = await self.summary_repository.get(video_id)
            if stored is not None:
                logger.info(f"Returning stored summary for {video_id}")
                return stored.model_copy(update={"tracked": True})
            stage = PipelineStage.CACHE_CHECKED

            caption_url = await self.caption_locator.locate(video_id)
            if not caption_url:
                raise NotAvailableError(video_id)
            stage = PipelineStage.CAPTIONS_LOCATED
            logger.debug(f"{video_id}: {stage.value}")

            content = await self.caption_fetcher.fetch_text(caption_url)
            transcript = await self.caption_resolver.resolve(content)
            stage = PipelineStage.RESOLVED
            logger.debug(f"{video_id}: {stage.value} ({len(transcript)} chars)")

            transcript = self.normalizer.normalize(transcript)
            stage = PipelineStage.NORMALIZED
            logger.debug(f"{video_id}: {stage.value} ({len(transcript)} chars)")
            if not transcript:
                raise EmptyContentError(video_id)

            raw_response = await self.completion_invoker.complete(
                transcript,
                self.llm_config,
                cancel_event=cancel_event,
            )
            thinking, summary = split_thinking(raw_response)
            stage = PipelineStage.COMPLETED
        except SummaryError as e:
            e.at_stage(stage)
            logger.warning(f"Summary for {video_id} failed: {e.detail}")
            raise

        result = SummaryResult(
            video_id=video_id,
            summary=summary,
            thinking=thinking,
            source_language=SummaryConfig.SOURCE_LANGUAGE,
            generated_at=datetime.now(timezone.utc),
            tracked=False,
        )
        stage = PipelineStage.DONE
        logger.debug(f"{video_id}: {stage.value}")
        logger.info(f"Summarized {video_id} in {time.perf_counter() - start_time:.2f}s")
        return result

    async def summarize_to_result(
        self,
        video_id: str,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> SummaryResult:
        """
        Same pipeline, reporting pipeline failures inside the result record.

        Returns:
            SummaryResult: on failure only `video_id` and `error` are set.
        """
        try:
            return await self.get_or_generate_summary(video_id, cancel_event=cancel_event)
        except SummaryError as e:
            return SummaryResult.failed(video_id, e)
