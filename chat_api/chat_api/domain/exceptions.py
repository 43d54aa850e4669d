"""Custom exceptions for chat_api domain.

Collaborator clients raise these; the fetchers and the news orchestrator
catch them and degrade to "no data", while route handlers translate the
rest into HTTP errors.
"""


class ChatAPIError(Exception):
    """Base exception for all chat_api errors."""

    pass


class ConfigurationError(ChatAPIError):
    """Raised when required configuration is missing or invalid."""

    def __init__(self, message: str, variable: str | None = None):
        super().__init__(message)
        self.variable = variable


# ============================================================================
# External service errors
# ============================================================================


class ExternalServiceError(ChatAPIError):
    """Base class for external service errors."""

    pass


class FetchError(ExternalServiceError):
    """Raised when data fetching from an external service fails.

    Examples:
    - Network error reaching CoinGecko
    - Non-2xx or non-JSON response from NewsAPI
    """

    def __init__(self, message: str, service: str, query: str | None = None):
        super().__init__(message)
        self.service = service
        self.query = query


class NewsApiKeyMissingError(ExternalServiceError):
    """Raised when a news search is attempted without NEWS_API_KEY."""

    def __init__(self, message: str = "NEWS_API_KEY not configured"):
        super().__init__(message)


class UpstreamUnavailableError(ExternalServiceError):
    """Raised when the LLM collaborator fails to produce a completion."""

    def __init__(self, message: str, service: str = "llm"):
        super().__init__(message)
        self.service = service
