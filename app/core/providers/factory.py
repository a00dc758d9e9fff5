"""
Provider selection from configuration.
"""
from functools import lru_cache

from app.core.providers.groq_provider import GroqProvider
from app.core.providers.llm_provider import LLMProvider
from app.core.providers.openai_provider import OpenAIProvider
from app.models.enums import LLMProviderType
from app.models.summary import LLMConfig


@lru_cache(maxsize=8)
def build_llm_provider(provider_type: LLMProviderType, config: LLMConfig) -> LLMProvider:
    """
    Build (and memoize) the provider for a given configuration.

    Args:
        provider_type: Which SDK to talk through.
        config: Endpoint, credential and model name.

    Returns:
        A ready-to-use LLMProvider.
    """
    if provider_type == LLMProviderType.OPENAI:
        return OpenAIProvider(
            base_url=config.endpoint_url,
            api_key=config.api_key,
            model_name=config.model,
        )
    elif provider_type == LLMProviderType.GROQ:
        return GroqProvider(
            api_key=config.api_key,
            model_name=config.model,
            base_url=config.endpoint_url,
        )
    else:
        raise ValueError(f"Unknown LLM provider: {provider_type}")
