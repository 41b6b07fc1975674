"""EODHD provider for symbol lists, earnings calendars and daily prices.

Requires an API token (EODHD_API_KEY).
"""

from earnmove.providers.eodhd.client import EODHDClient
from earnmove.providers.eodhd.models import ExchangeSymbol

__all__ = [
    "EODHDClient",
    "ExchangeSymbol",
]
