"""LLM integration module: completion providers and prompt templates."""

from llm.factory import get_llm_provider
from llm.providers.base import CompletionProvider, ProviderError

__all__ = ["get_llm_provider", "CompletionProvider", "ProviderError"]
