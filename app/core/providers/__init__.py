"""
Provider abstraction layer for model-agnostic completion calls.
"""
from app.core.providers.llm_provider import (
    LLMProvider,
    LLMMessage,
    LLMResponse,
)
from app.core.providers.openai_provider import OpenAIProvider
from app.core.providers.groq_provider import GroqProvider
from app.core.providers.factory import build_llm_provider

__all__ = [
    "LLMProvider",
    "LLMMessage",
    "LLMResponse",
    "OpenAIProvider",
    "GroqProvider",
    "build_llm_provider",
]
