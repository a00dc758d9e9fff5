"""
Unit tests for LLM providers and provider selection.
"""
import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock
from openai import NotFoundError

from app.core.providers import GroqProvider, OpenAIProvider, build_llm_provider
from app.core.providers.llm_provider import LLMMessage
from app.core.providers.openai_provider import is_model_loading_error
from app.models import LLMConfig, LLMProviderType, LLMRole


def make_not_found(message: str) -> NotFoundError:
    request = httpx.Request("POST", "http://localhost:1234/v1/chat/completions")
    return NotFoundError(message, response=httpx.Response(404, request=request), body=None)


def make_completion(content, with_choices=True):
    response = MagicMock()
    response.choices = [MagicMock(message=MagicMock(content=content))] if with_choices else []
    response.usage = None
    return response


@pytest.fixture
def provider():
    provider = OpenAIProvider(base_url="http://localhost:1234/v1", api_key="", model_name="local-model")
    provider.client = MagicMock()
    provider.client.chat.completions.create = AsyncMock(return_value=make_completion("Hi there"))
    return provider


@pytest.mark.asyncio
async def test_openai_generate_text(provider):
    messages = [
        LLMMessage(role=LLMRole.SYSTEM, content="Summarize."),
        LLMMessage(role=LLMRole.USER, content="transcript"),
    ]

    response = await provider.generate_text(messages, temperature=0.2, max_tokens=100)

    assert response.content == "Hi there"
    assert response.model == "local-model"
    kwargs = provider.client.chat.completions.create.call_args.kwargs
    assert kwargs["messages"] == [
        {"role": "system", "content": "Summarize."},
        {"role": "user", "content": "transcript"},
    ]
    assert kwargs["temperature"] == 0.2
    assert kwargs["max_tokens"] == 100


@pytest.mark.asyncio
async def test_openai_empty_choices(provider):
    provider.client.chat.completions.create.return_value = make_completion(None, with_choices=False)

    with pytest.raises(ValueError, match="empty response"):
        await provider.generate_text([LLMMessage(role=LLMRole.USER, content="x")])


def test_is_model_loading_error():
    assert is_model_loading_error(
        make_not_found("Error code: 404 - Failed to load model: Model does not exist")
    )
    assert not is_model_loading_error(make_not_found("Error code: 404 - page not found"))
    assert not is_model_loading_error(RuntimeError("Failed to load model. Model does not exist"))


def test_build_llm_provider():
    config = LLMConfig(endpoint_url="http://localhost:1234/v1", api_key="key", model="m")

    assert isinstance(build_llm_provider(LLMProviderType.OPENAI, config), OpenAIProvider)
    assert isinstance(build_llm_provider(LLMProviderType.GROQ, config), GroqProvider)
    assert build_llm_provider(LLMProviderType.OPENAI, config) is build_llm_provider(
        LLMProviderType.OPENAI, config
    )
