"""
Service layer for the shared budget currency service.

Services encapsulate business logic separate from route handlers.
"""
from services.conversion import CurrencyError, UnsupportedCurrencyError
from services.currency_service import CurrencyService, RateResolution
from services.rate_cache import RateCache
from services.rate_provider import RateProvider, ProviderError
from services.rates import RateSnapshot, fallback_snapshot

__all__ = [
    'CurrencyService',
    'RateResolution',
    'RateCache',
    'RateProvider',
    'ProviderError',
    'RateSnapshot',
    'fallback_snapshot',
    'CurrencyError',
    'UnsupportedCurrencyError',
]
