"""Factory for creating completion provider instances."""

from typing import Optional
from config import Config
from llm.providers.base import CompletionProvider
from llm.providers.openai import OpenAIProvider
from logger import get_logger

logger = get_logger()


def get_llm_provider(config: Config) -> Optional[CompletionProvider]:
    """Create a completion provider instance based on configuration.

    Args:
        config: Application configuration.

    Returns:
        CompletionProvider instance, or None if the LLM is disabled.

    Raises:
        ValueError: If provider is configured but settings are invalid.
    """
    if not config.llm_enabled:
        logger.info("LLM agent is disabled")
        return None

    provider_name = config.llm_provider

    if provider_name == "openai":
        api_key = config.llm_openai_api_key
        base_url = config.llm_openai_base_url
        if not api_key and not base_url:
            raise ValueError(
                "OpenAI provider selected but neither llm.openai_api_key "
                "nor llm.openai_base_url is configured"
            )

        model = config.llm_openai_model
        logger.info(
            f"Initializing OpenAI provider (model: {model}, "
            f"endpoint: {base_url or 'api.openai.com'})"
        )

        return OpenAIProvider(
            api_key=api_key,
            model=model,
            base_url=base_url,
            timeout=config.llm_timeout,
        )

    elif not provider_name:
        logger.info("No LLM provider configured")
        return None

    else:
        raise ValueError(f"Unknown LLM provider: {provider_name}")
