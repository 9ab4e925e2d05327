"""LLM service factory"""

from flocore.settings import settings

from .base import BaseLLMService
from .dummy_llm import DummyLLM


def get_llm_service(provider: str | None = None) -> BaseLLMService:
    """Return the LLM service for the configured provider

    A new instance is returned on every call; callers construct one handle
    and pass it to the components that need it.

    Args:
        provider: provider name (settings.llm_provider when None)

    Returns:
        BaseLLMService instance
    """
    provider = provider or settings.llm_provider

    if provider == "gemini":
        from .gemini_llm import GeminiLLM

        return GeminiLLM()
    elif provider == "openai":
        from .openai_llm import OpenAILLM

        return OpenAILLM()
    elif provider == "anthropic":
        from .anthropic_llm import AnthropicLLM

        return AnthropicLLM()
    elif provider == "dummy":
        return DummyLLM()
    else:
        raise ValueError(f"Unsupported LLM provider: {provider}")
