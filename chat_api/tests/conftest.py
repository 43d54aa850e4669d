"""Pytest configuration and fixtures for all tests.

This module ensures tests run in isolation from production environment
variables and from state left behind by other tests.
"""

import os

import pytest

from chat_api.core.chat import get_session_store
from chat_api.core.feedback import get_feedback_store
from chat_api.main import app

# Credentials and endpoints that should never reach a real service from tests
CREDENTIAL_ENV_VARS = [
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "LLM_PROVIDER",
    "OLLAMA_BASE_URL",
    "OLLAMA_MODEL",
    "NEWS_API_KEY",
    "NEWS_API_BASE_URL",
    "COINGECKO_BASE_URL",
    "CHAT_MAX_TURNS",
    "CHAT_MAX_SESSIONS",
    "HTTP_TIMEOUT_SECONDS",
]


@pytest.fixture(autouse=True)
def isolate_from_env():
    """Clear credential env vars before each test to prevent external API calls.

    This fixture runs automatically for every test (autouse=True).
    It saves original values, clears them for the test, then restores after.
    """
    original_values = {}
    for var in CREDENTIAL_ENV_VARS:
        if var in os.environ:
            original_values[var] = os.environ.pop(var)

    yield

    for var, value in original_values.items():
        os.environ[var] = value


@pytest.fixture(autouse=True)
def reset_process_state():
    """Start every test with no sessions, no feedback and no overrides."""
    get_session_store().clear()
    get_feedback_store().clear()
    yield
    app.dependency_overrides.clear()
    get_session_store().clear()
