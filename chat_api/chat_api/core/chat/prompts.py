"""Rendering of persona and ephemeral context entries from Jinja2 templates."""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader

from chat_api.core.intents import Intent, IntentKind
from chat_api.core.market_data import MarketSnapshot
from chat_api.core.sentiment import NewsAnalysis

# Template directory (relative to chat_api package)
TEMPLATE_DIR = Path(__file__).parent.parent.parent / "templates"

NEWS_SUBJECTS = {
    IntentKind.TRADING_ADVICE: "your trading question about",
    IntentKind.NEWS_SEARCH: "your search query about",
}


def format_money(value: float) -> str:
    """Format like 12,345.60 (always two decimals)."""
    return f"{value:,.2f}"


def format_amount(value: float) -> str:
    """Format like 1,234.5 (at most two decimals, trailing zeros dropped)."""
    text = f"{value:,.2f}"
    return text.rstrip("0").rstrip(".")


def format_quantity(value: float) -> str:
    """Format a token quantity at full precision, like 0.0005 or 3 (no rounding)."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


@lru_cache(maxsize=1)
def get_jinja_env() -> Environment:
    """Get Jinja2 environment for loading templates."""
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=False,  # We're generating prompts, not HTML
    )
    env.filters["money"] = format_money
    env.filters["amount"] = format_amount
    env.filters["quantity"] = format_quantity
    return env


def _render(template_name: str, **context: Any) -> str:
    template = get_jinja_env().get_template(template_name)
    return template.render(**context).strip()


def render_system_persona() -> str:
    return _render("system_persona.j2")


def render_market_data(snapshot: MarketSnapshot) -> str:
    return _render("market_data.j2", market_json=json.dumps(snapshot.to_dict()))


def render_portfolio(portfolio: dict[str, Any]) -> str:
    return _render("portfolio_context.j2", portfolio=portfolio)


def render_news_analysis(analysis: NewsAnalysis, intent: Intent | None) -> str:
    subject = NEWS_SUBJECTS.get(intent.kind, "") if intent else ""
    return _render(
        "news_analysis.j2",
        subject=subject,
        token=analysis.token,
        summary=analysis.summary,
    )


def render_news_unavailable(token: str) -> str:
    return _render("news_unavailable.j2", token=token)
