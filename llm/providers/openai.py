"""OpenAI-compatible chat completion provider.

Works against the hosted OpenAI API or any server exposing the same chat
completions endpoint (llama.cpp, Ollama) via ``base_url``.
"""

from typing import Iterator, Optional
from openai import OpenAI, OpenAIError
from llm.providers.base import CompletionProvider, ProviderError
from logger import get_logger

logger = get_logger()

# Local OpenAI-compatible servers ignore the key but the client requires one.
_PLACEHOLDER_API_KEY = "not-needed"


class OpenAIProvider(CompletionProvider):
    """Completion provider backed by the OpenAI chat completions API."""

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "gpt-4o-mini",
        base_url: Optional[str] = None,
        timeout: float = 60.0,
        temperature: float = 0.1,
        max_tokens: int = 1000,
        client: Optional[OpenAI] = None,
    ):
        """Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key (may be empty for local servers).
            model: Model to use (e.g., "gpt-4o-mini").
            base_url: Optional endpoint of an OpenAI-compatible server.
            timeout: Per-request timeout in seconds.
            temperature: Sampling temperature.
            max_tokens: Upper bound on generated tokens.
            client: Pre-built client, mainly for tests.
        """
        self.client = client or OpenAI(
            api_key=api_key or _PLACEHOLDER_API_KEY,
            base_url=base_url or None,
            timeout=timeout,
        )
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    def complete(self, prompt: str) -> str:
        """Send ``prompt`` and return the whole reply text.

        Raises:
            ProviderError: If the OpenAI API call fails.
        """
        logger.debug(f"Requesting completion from {self.model}")
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except OpenAIError as e:
            logger.error(f"OpenAI API error: {e}")
            raise ProviderError(str(e)) from e

        if not response.choices:
            raise ProviderError("OpenAI returned no choices")

        return response.choices[0].message.content or ""

    def complete_streaming(self, prompt: str) -> Iterator[str]:
        """Send ``prompt`` and yield reply fragments as they arrive.

        Raises:
            ProviderError: If the OpenAI API call fails, including mid-stream.
        """
        logger.debug(f"Requesting streamed completion from {self.model}")
        try:
            stream = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
                stream=True,
            )
            for chunk in stream:
                if not chunk.choices:
                    continue
                content = chunk.choices[0].delta.content
                if content:
                    yield content
        except OpenAIError as e:
            logger.error(f"OpenAI streaming error: {e}")
            raise ProviderError(str(e)) from e
