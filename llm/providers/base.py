"""Base provider interface for text-completion backends."""

from abc import ABC, abstractmethod
from typing import Iterator


class ProviderError(Exception):
    """Raised when the completion backend fails (transport, timeout, bad reply)."""


class CompletionProvider(ABC):
    """Abstract base class for completion providers.

    The agent treats a provider as an opaque text generator: it sends one
    prompt and receives text back, either all at once or as an ordered
    sequence of fragments. Output is untrusted and validated downstream.
    """

    @abstractmethod
    def complete(self, prompt: str) -> str:
        """Return the full completion for ``prompt``.

        Raises:
            ProviderError: If the backend call fails.
        """
        pass

    @abstractmethod
    def complete_streaming(self, prompt: str) -> Iterator[str]:
        """Yield completion fragments for ``prompt`` in order.

        Raises:
            ProviderError: If the backend call fails, possibly mid-stream.
        """
        pass
