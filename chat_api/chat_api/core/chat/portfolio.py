"""Portfolio snapshot context for a chat turn.

The browser client tracks holdings and sends a computed snapshot with each
message; this module only turns it into a context entry.
"""

from typing import Any

from chat_api.core.chat.prompts import render_portfolio


def format_portfolio_context(portfolio: dict[str, Any] | None) -> str | None:
    """Render the portfolio snapshot, or None if it holds no assets.

    Args:
        portfolio: Dict with total_value, total_change, asset_count,
            total_tokens and assets (each with id, amount, value, change_24h)

    Returns:
        Context text for the LLM, or None
    """
    if not portfolio or not portfolio.get("assets"):
        return None
    return render_portfolio(portfolio)
