"""Provider factory and exports."""

from .base import QuoteProvider
from .alpha_vantage import AlphaVantageProvider, classify_payload, is_rate_limit_note


def get_provider(provider_name: str, cfg) -> QuoteProvider:
    """Get provider by canonical name ("alpha_vantage")."""
    if provider_name == AlphaVantageProvider.NAME:
        return AlphaVantageProvider.from_config(cfg)
    raise ValueError(f"Unknown provider: {provider_name}")


__all__ = [
    "QuoteProvider",
    "AlphaVantageProvider",
    "classify_payload",
    "is_rate_limit_note",
    "get_provider",
]
