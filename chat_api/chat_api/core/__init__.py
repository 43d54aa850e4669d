"""Core chat, market data and sentiment logic."""
