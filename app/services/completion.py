"""
Completion invocation under a timeout and caller-supplied cancellation.

The provider call runs as its own asyncio task; the task is the one-slot
handoff for its result. The caller waits for whichever comes first: the
result, the deadline, or the cancellation event. An abandoned call keeps
running in the background and its outcome is only logged.
"""
import asyncio
from typing import Callable, Optional

from loguru import logger

from app.core.constants import CompletionConfig
from app.core.exceptions import CompletionError
from app.core.prompts import SummarizationPrompts
from app.core.providers.factory import build_llm_provider
from app.core.providers.llm_provider import LLMMessage, LLMProvider
from app.models import LLMConfig, LLMProviderType, LLMRole


def _log_abandoned_outcome(task: asyncio.Task) -> None:
    """Consume the result of a completion nobody is waiting for any more."""
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.warning(f"Abandoned completion failed: {exc}")
    else:
        logger.debug("Abandoned completion finished after its caller gave up")


class CompletionInvoker:
    """
    Drives a single summarization call against the configured completion service.
    """

    def __init__(
        self,
        provider_type: LLMProviderType = LLMProviderType.OPENAI,
        temperature: float = CompletionConfig.TEMPERATURE,
        max_tokens: Optional[int] = None,
        timeout: float = CompletionConfig.TIMEOUT_SECONDS,
        provider_factory: Callable[[LLMProviderType, LLMConfig], LLMProvider] = build_llm_provider,
    ):
        """
        Initialize the invoker.

        Args:
            provider_type: SDK used to reach the endpoint.
            temperature: Sampling temperature for the summary.
            max_tokens: Response token cap (None for the model default).
            timeout: Default deadline in seconds for one completion.
            provider_factory: Builds a provider from a configuration.
        """
        self.provider_type = provider_type
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout
        self.provider_factory = provider_factory
        self._abandoned: set[asyncio.Task] = set()

    def _abandon(self, call: asyncio.Task) -> None:
        """Keep an abandoned call alive until it finishes, then log its outcome."""
        self._abandoned.add(call)
        call.add_done_callback(self._abandoned.discard)
        call.add_done_callback(_log_abandoned_outcome)

    def build_messages(self, transcript: str) -> list[LLMMessage]:
        """Fixed system instruction plus the transcript as the user message."""
        return [
            LLMMessage(role=LLMRole.SYSTEM, content=SummarizationPrompts.SINGLE_VIDEO),
            LLMMessage(role=LLMRole.USER, content=transcript),
        ]

    async def complete(
        self,
        transcript: str,
        llm_config: LLMConfig,
        timeout: Optional[float] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> str:
        """
        Request a summary and wait for it, the deadline or cancellation.

        Args:
            transcript: Normalized transcript text.
            llm_config: Endpoint, credential and model of the completion service.
            timeout: Deadline in seconds (defaults to the invoker's).
            cancel_event: Set by the caller to stop waiting.

        Returns:
            The raw completion text.

        Raises:
            CompletionError: If the provider fails, the deadline passes or the call is cancelled.
        """
        provider = self.provider_factory(self.provider_type, llm_config)
        deadline = self.timeout if timeout is None else timeout

        logger.info(f"Requesting summary from {llm_config.model or 'default model'} ({len(transcript)} chars)")
        call = asyncio.create_task(
            provider.generate_text(
                messages=self.build_messages(transcript),
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        )

        waiters = {call}
        cancel_waiter = None
        if cancel_event is not None:
            cancel_waiter = asyncio.create_task(cancel_event.wait())
            waiters.add(cancel_waiter)

        try:
            done, _ = await asyncio.wait(waiters, timeout=deadline, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            self._abandon(call)
            raise
        finally:
            if cancel_waiter is not None:
                cancel_waiter.cancel()

        if call not in done:
            self._abandon(call)
            if cancel_waiter is not None and cancel_waiter in done:
                raise CompletionError("completion cancelled by caller")
            raise CompletionError(f"completion timed out after {deadline}s")

        try:
            response = call.result()
        except Exception as e:
            raise CompletionError(f"error during API call: {e}") from e

        return response.content
