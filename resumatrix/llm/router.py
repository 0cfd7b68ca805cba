"""
Provider selection based on settings.
"""
import logging

from resumatrix.core.config import Settings
from resumatrix.llm.provider import LLMProvider

logger = logging.getLogger(__name__)


def build_provider(settings: Settings) -> LLMProvider:
    """
    Create the provider selected by ``settings.llm_provider``.

    Raises:
        ConfigurationError: unknown provider or missing API key
    """
    settings.validate()

    if settings.llm_provider == "openai":
        from resumatrix.llm.openai_provider import OpenAIProvider
        provider = OpenAIProvider(api_key=settings.openai_api_key)
    else:
        from resumatrix.llm.gemini_provider import GeminiProvider
        provider = GeminiProvider(api_key=settings.gemini_api_key)

    logger.info(f"Using LLM provider '{provider.name}' with model '{settings.model_name}'")
    return provider
