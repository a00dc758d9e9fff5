"""
Abstract base class for LLM providers.

This module defines a vendor-neutral interface for interacting with
Large Language Models. Concrete implementations (OpenAI-compatible, Groq)
must implement this interface.
"""
from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel, ConfigDict

from app.models.enums import LLMRole


class LLMMessage(BaseModel):
    """Vendor-neutral message format for LLM conversations."""

    role: LLMRole
    content: str

    model_config = ConfigDict(frozen=True)


class LLMResponse(BaseModel):
    """Standardized response from an LLM provider."""

    content: str
    model: str
    usage: Optional[dict[str, int]] = None

    model_config = ConfigDict(frozen=True)


class LLMProvider(ABC):
    """
    Abstract interface for LLM providers.

    Example:
        provider = OpenAIProvider(
            base_url="http://localhost:11434/v1",
            api_key="...",
            model_name="qwen3:8b",
        )
        response = await provider.generate_text([
            LLMMessage(role=LLMRole.SYSTEM, content="You are helpful."),
            LLMMessage(role=LLMRole.USER, content="Hello!"),
        ])
        print(response.content)
    """

    model_name: str

    @abstractmethod
    async def generate_text(
        self,
        messages: list[LLMMessage],
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
    ) -> LLMResponse:
        """
        Generate text completion from messages.

        Args:
            messages: List of conversation messages.
            temperature: Sampling temperature (0.0-1.0).
            max_tokens: Maximum tokens to generate (None for model default).

        Returns:
            LLMResponse containing generated content and metadata.

        Raises:
            ValueError: If the service returns no choices.
        """
        ...

    @staticmethod
    def _to_chat_messages(messages: list[LLMMessage]) -> list[dict[str, str]]:
        """Convert to the OpenAI chat message format shared by compatible SDKs."""
        return [{"role": msg.role.value, "content": msg.content} for msg in messages]
