"""
OpenAI-compatible implementation of LLMProvider.

Works against any server that speaks the OpenAI chat completions API
(OpenAI itself, Ollama, LM Studio, vLLM, llama.cpp server).
"""
from typing import Optional

from loguru import logger
from openai import AsyncOpenAI, NotFoundError
from tenacity import retry, retry_if_exception, stop_after_attempt, wait_exponential

from app.core.providers.llm_provider import LLMProvider, LLMMessage, LLMResponse


def is_model_loading_error(exc: BaseException) -> bool:
    """
    Detect the 404 some local servers return while a model is still loading.

    Only this error is retried; everything else surfaces immediately.
    """
    if not isinstance(exc, NotFoundError):
        return False
    message = str(exc)
    return "Failed to load model" in message and "Model does not exist" in message


class OpenAIProvider(LLMProvider):
    """
    OpenAI-compatible implementation of LLMProvider.

    Example:
        provider = OpenAIProvider(
            base_url="https://api.openai.com/v1",
            api_key="your-api-key",
            model_name="gpt-4o-mini",
        )
        response = await provider.generate_text(messages)
    """

    def __init__(self, base_url: str, api_key: str, model_name: str):
        """
        Initialize the provider.

        Args:
            base_url: Endpoint of the OpenAI-compatible API.
            api_key: API key (local servers usually accept any value).
            model_name: Model to use.
        """
        # The SDK rejects an empty key even when the server ignores it
        self.client = AsyncOpenAI(base_url=base_url, api_key=api_key or "not-needed")
        self.model_name = model_name

    @retry(
        stop=stop_after_attempt(5),
        wait=wait_exponential(multiplier=1, min=1, max=30),
        retry=retry_if_exception(is_model_loading_error),
        reraise=True,
    )
    async def generate_text(
        self,
        messages: list[LLMMessage],
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
    ) -> LLMResponse:
        """Generate text completion using the chat completions API."""
        params = {
            "model": self.model_name,
            "messages": self._to_chat_messages(messages),
            "temperature": temperature,
        }
        if max_tokens:
            params["max_tokens"] = max_tokens

        logger.debug(f"Sending request to OpenAI-compatible endpoint ({self.model_name})")
        response = await self.client.chat.completions.create(**params)

        if not response.choices:
            raise ValueError("empty response from llm")

        usage = None
        if response.usage:
            usage = {
                "prompt_tokens": response.usage.prompt_tokens,
                "completion_tokens": response.usage.completion_tokens,
                "total_tokens": response.usage.total_tokens,
            }
            logger.debug(f"Token usage: {usage}")

        return LLMResponse(
            content=response.choices[0].message.content or "",
            model=self.model_name,
            usage=usage,
        )
