"""
Shared pytest fixtures and configuration.
"""
import pytest
from unittest.mock import AsyncMock

from app.main import app
from app.api.dependencies import get_summary_service
from app.models import LLMConfig
from app.repositories.summary import InMemorySummaryRepository
from app.services.captions import CaptionResolver
from app.services.completion import CompletionInvoker
from app.services.http import CaptionFetcher
from app.services.normalizer import CaptionNormalizer
from app.services.summarization import SummaryService
from app.services.youtube import CaptionLocator

CAPTION_URL = "https://www.youtube.com/api/timedtext?v=dQw4w9WgXcQ&lang=en&fmt=vtt"

SAMPLE_VTT = """WEBVTT

00:00:01.000 --> 00:00:04.000
Hello and welcome to this video.

00:00:04.000 --> 00:00:08.000
Today we learn about Python programming."""


@pytest.fixture
def llm_config():
    """A configured completion service."""
    return LLMConfig(endpoint_url="http://localhost:11434/v1", api_key="key", model="test-model")


@pytest.fixture
def mock_locator():
    """Create a mock CaptionLocator that finds a caption track."""
    locator = AsyncMock(spec=CaptionLocator)
    locator.locate.return_value = CAPTION_URL
    return locator


@pytest.fixture
def mock_fetcher():
    """Create a mock CaptionFetcher serving a small VTT document."""
    fetcher = AsyncMock(spec=CaptionFetcher)
    fetcher.fetch_text.return_value = SAMPLE_VTT
    return fetcher


@pytest.fixture
def mock_invoker():
    """Create a mock CompletionInvoker returning a response with reasoning."""
    invoker = AsyncMock(spec=CompletionInvoker)
    invoker.complete.return_value = "<think>Plan the summary.</think>\n\nThe video introduces Python."
    return invoker


@pytest.fixture
def summary_repository():
    return InMemorySummaryRepository()


@pytest.fixture
def summary_service(llm_config, mock_locator, mock_fetcher, mock_invoker, summary_repository):
    """SummaryService wired with mocked I/O and the real text pipeline."""
    return SummaryService(
        llm_config=llm_config,
        caption_locator=mock_locator,
        caption_fetcher=mock_fetcher,
        caption_resolver=CaptionResolver(fetcher=mock_fetcher),
        normalizer=CaptionNormalizer(),
        completion_invoker=mock_invoker,
        summary_repository=summary_repository,
    )


@pytest.fixture
def mock_summary_service():
    """Create a mock summary service for API tests."""
    return AsyncMock(spec=SummaryService)


@pytest.fixture
def override_dependencies(mock_summary_service):
    """Override FastAPI dependencies for testing."""
    def override_get_summary_service():
        return mock_summary_service

    app.dependency_overrides[get_summary_service] = override_get_summary_service

    yield

    app.dependency_overrides.clear()
