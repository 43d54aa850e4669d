"""Chat-completion providers."""

from chat_api.core.llm.providers import (
    ChatMessages,
    LLMProvider,
    LLMResponse,
    OllamaProvider,
    OpenAIProvider,
    get_llm_provider,
)

__all__ = [
    "ChatMessages",
    "LLMProvider",
    "LLMResponse",
    "OllamaProvider",
    "OpenAIProvider",
    "get_llm_provider",
]
