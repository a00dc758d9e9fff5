"""
Dependency injection factories for FastAPI.

This module provides factory functions for creating service instances
with proper dependency injection. Collaborators are configured from settings.
"""
from functools import lru_cache
from typing import Union

from fastapi import Depends

from app.core.config import settings
from app.models import LLMConfig
from app.repositories.summary import InMemorySummaryRepository, SummaryRepository
from app.services.captions import CaptionResolver
from app.services.completion import CompletionInvoker
from app.services.http import CaptionFetcher
from app.services.mock import MockSummaryService
from app.services.normalizer import CaptionNormalizer
from app.services.summarization import SummaryService
from app.services.youtube import CaptionLocator


# =============================================================================
# COLLABORATOR FACTORIES
# =============================================================================

def get_llm_config() -> LLMConfig:
    """Completion service configuration, read on every request."""
    return LLMConfig(
        endpoint_url=settings.LLM_ENDPOINT_URL,
        api_key=settings.LLM_API_KEY,
        model=settings.LLM_MODEL,
    )


@lru_cache
def get_summary_repository() -> SummaryRepository:
    """Process-wide store of tracked summaries."""
    return InMemorySummaryRepository()


@lru_cache
def get_caption_locator() -> CaptionLocator:
    """yt-dlp caption locator for the configured language."""
    return CaptionLocator(
        language=settings.CAPTION_LANGUAGE,
        timeout=settings.YTDLP_TIMEOUT_SECONDS,
    )


@lru_cache
def get_caption_fetcher() -> CaptionFetcher:
    """HTTP fetcher for caption documents and HLS segments."""
    return CaptionFetcher(
        timeout=settings.CAPTION_FETCH_TIMEOUT_SECONDS,
        user_agent=settings.HTTP_USER_AGENT,
    )


@lru_cache
def get_completion_invoker() -> CompletionInvoker:
    """LLM invoker using the configured provider SDK."""
    return CompletionInvoker(
        provider_type=settings.LLM_PROVIDER,
        temperature=settings.LLM_TEMPERATURE,
        max_tokens=settings.LLM_MAX_TOKENS,
        timeout=settings.LLM_TIMEOUT_SECONDS,
    )


# =============================================================================
# SERVICE FACTORIES
# =============================================================================

def get_summary_service(
    llm_config: LLMConfig = Depends(get_llm_config),
    caption_locator: CaptionLocator = Depends(get_caption_locator),
    caption_fetcher: CaptionFetcher = Depends(get_caption_fetcher),
    completion_invoker: CompletionInvoker = Depends(get_completion_invoker),
    summary_repository: SummaryRepository = Depends(get_summary_repository),
) -> Union[SummaryService, MockSummaryService]:
    """
    Get the summary service.

    Returns the canned MockSummaryService when DEBUG_MOCK_SUMMARY is set.
    """
    if settings.DEBUG_MOCK_SUMMARY:
        return MockSummaryService(summary_repository=summary_repository)

    return SummaryService(
        llm_config=llm_config,
        caption_locator=caption_locator,
        caption_fetcher=caption_fetcher,
        caption_resolver=CaptionResolver(fetcher=caption_fetcher),
        normalizer=CaptionNormalizer(),
        completion_invoker=completion_invoker,
        summary_repository=summary_repository,
    )
