"""Configuration read from the environment.

Values are resolved on every call so tests can monkeypatch the environment
without reloading modules.
"""

import os

from chat_api.domain.exceptions import ConfigurationError

# Environment variable names
ENV_LLM_PROVIDER = "LLM_PROVIDER"
ENV_OPENAI_API_KEY = "OPENAI_API_KEY"
ENV_NEWS_API_KEY = "NEWS_API_KEY"
ENV_COINGECKO_BASE_URL = "COINGECKO_BASE_URL"
ENV_NEWS_API_BASE_URL = "NEWS_API_BASE_URL"
ENV_HTTP_TIMEOUT = "HTTP_TIMEOUT_SECONDS"
ENV_CHAT_MAX_TURNS = "CHAT_MAX_TURNS"
ENV_CHAT_MAX_SESSIONS = "CHAT_MAX_SESSIONS"
ENV_LOG_LEVEL = "LOG_LEVEL"

# Defaults
DEFAULT_LLM_PROVIDER = "openai"
DEFAULT_COINGECKO_BASE_URL = "https://api.coingecko.com/api/v3"
DEFAULT_NEWS_API_BASE_URL = "https://newsapi.org/v2"
DEFAULT_HTTP_TIMEOUT = 10.0
DEFAULT_CHAT_MAX_TURNS = 20
DEFAULT_CHAT_MAX_SESSIONS = 1000
DEFAULT_LOG_LEVEL = "INFO"


def _get_int(variable: str, default: int) -> int:
    value_str = os.environ.get(variable, "")
    if not value_str:
        return default
    try:
        return int(value_str)
    except ValueError as e:
        raise ConfigurationError(
            f"{variable} must be an integer, got {value_str!r}", variable
        ) from e


def get_news_api_key() -> str:
    """Get the NewsAPI key (empty string when not configured)."""
    return os.environ.get(ENV_NEWS_API_KEY, "")


def is_news_api_configured() -> bool:
    """True if a NewsAPI key is present in the environment."""
    return bool(get_news_api_key())


def get_llm_provider_name() -> str:
    return os.environ.get(ENV_LLM_PROVIDER, DEFAULT_LLM_PROVIDER).lower()


def is_llm_configured() -> bool:
    """True if the selected LLM provider has what it needs to run.

    OLLAMA needs no credential; OpenAI needs OPENAI_API_KEY.
    """
    if get_llm_provider_name() == "ollama":
        return True
    return bool(os.environ.get(ENV_OPENAI_API_KEY))


def get_coingecko_base_url() -> str:
    return os.environ.get(ENV_COINGECKO_BASE_URL, DEFAULT_COINGECKO_BASE_URL).rstrip("/")


def get_news_api_base_url() -> str:
    return os.environ.get(ENV_NEWS_API_BASE_URL, DEFAULT_NEWS_API_BASE_URL).rstrip("/")


def get_http_timeout() -> float:
    """Per-call timeout (seconds) for market data and news requests.

    Raises:
        ConfigurationError: If the value is not a positive number
    """
    timeout_str = os.environ.get(ENV_HTTP_TIMEOUT, "")
    if not timeout_str:
        return DEFAULT_HTTP_TIMEOUT
    try:
        timeout = float(timeout_str)
    except ValueError as e:
        raise ConfigurationError(
            f"{ENV_HTTP_TIMEOUT} must be a number, got {timeout_str!r}", ENV_HTTP_TIMEOUT
        ) from e
    if timeout <= 0:
        raise ConfigurationError(
            f"{ENV_HTTP_TIMEOUT} must be positive, got {timeout_str!r}", ENV_HTTP_TIMEOUT
        )
    return timeout


def get_chat_max_turns() -> int:
    """Maximum user/assistant pairs kept per conversation session.

    A value of 0 or less disables trimming.
    """
    return _get_int(ENV_CHAT_MAX_TURNS, DEFAULT_CHAT_MAX_TURNS)


def get_chat_max_sessions() -> int:
    """Maximum conversation sessions kept in memory.

    The least recently used session is evicted beyond this. A value of 0 or
    less disables eviction.
    """
    return _get_int(ENV_CHAT_MAX_SESSIONS, DEFAULT_CHAT_MAX_SESSIONS)


def get_log_level() -> str:
    return os.environ.get(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL).upper()
