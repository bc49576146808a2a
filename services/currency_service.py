"""
Currency conversion service.

Resolves exchange rates (cache, live provider, stale cache, fallback table)
and converts amounts to and from the base currency all balances are stored in.
"""
import logging
from collections import namedtuple

from services import conversion
from services.rate_cache import RateCache, DEFAULT_TTL_SECONDS
from services.rate_provider import (
    RateProvider, ProviderError,
    DEFAULT_API_URL, DEFAULT_KEYED_API_URL, DEFAULT_TIMEOUT_SECONDS,
)
from services.rates import fallback_snapshot
from utils import normalize_currency_code

logger = logging.getLogger(__name__)

DEFAULT_BASE_CURRENCY = 'PHP'

# How the rates of a resolution were obtained
STATUS_CACHED = 'cached'
STATUS_LIVE = 'live'
STATUS_STALE = 'stale'
STATUS_FALLBACK = 'fallback'

RateResolution = namedtuple('RateResolution', ['snapshot', 'status'])


class CurrencyService:
    """Service for currency conversion operations.

    One instance is built at startup and shared by every request, so all
    callers see the same rate cache.
    """

    def __init__(self, base_currency=DEFAULT_BASE_CURRENCY, provider=None, cache=None):
        self.base_currency = normalize_currency_code(base_currency)
        self.provider = provider or RateProvider(self.base_currency)
        self.cache = cache or RateCache()

    @classmethod
    def from_config(cls, config):
        """
        Build a service from a Flask-style config mapping.

        Args:
            config (Mapping): Reads CURRENCY_BASE, EXCHANGE_RATE_API_KEY,
                EXCHANGE_RATE_API_URL, EXCHANGE_RATE_API_KEYED_URL,
                CURRENCY_CACHE_TTL and CURRENCY_REQUEST_TIMEOUT

        Returns:
            CurrencyService
        """
        base_currency = normalize_currency_code(
            config.get('CURRENCY_BASE') or DEFAULT_BASE_CURRENCY
        )
        provider = RateProvider(
            base_currency,
            api_key=config.get('EXCHANGE_RATE_API_KEY'),
            api_url=config.get('EXCHANGE_RATE_API_URL', DEFAULT_API_URL),
            keyed_api_url=config.get('EXCHANGE_RATE_API_KEYED_URL', DEFAULT_KEYED_API_URL),
            timeout=config.get('CURRENCY_REQUEST_TIMEOUT', DEFAULT_TIMEOUT_SECONDS),
        )
        cache = RateCache(ttl=config.get('CURRENCY_CACHE_TTL', DEFAULT_TTL_SECONDS))
        return cls(base_currency, provider=provider, cache=cache)

    # ------------------------------------------------------------------
    # Rate resolution
    # ------------------------------------------------------------------

    def resolve_rates(self):
        """
        Resolve the rates to use for a conversion. Never raises.

        Order: fresh cache, live provider, stale cache, fallback table.

        Returns:
            RateResolution: (snapshot, status)
        """
        cached = self.cache.get()
        if cached is not None:
            return RateResolution(cached, STATUS_CACHED)

        return self._fetch_with_fallback()

    def refresh_rates(self):
        """Fetch live rates even if the cache is fresh. Degrades like resolve_rates()."""
        return self._fetch_with_fallback()

    def get_rates(self):
        """Get the current RateSnapshot (from cache or fetch new)."""
        return self.resolve_rates().snapshot

    def _fetch_with_fallback(self):
        try:
            snapshot = self.provider.fetch()
        except ProviderError as e:
            logger.error(f"Error fetching exchange rates: {e}")
            return self._degraded()

        self.cache.set(snapshot)
        logger.info(f"Currency rates updated: {snapshot.source_date}")
        return RateResolution(snapshot, STATUS_LIVE)

    def _degraded(self):
        stale = self.cache.get_stale_if_any()
        if stale is not None:
            logger.warning(
                f"Using stale exchange rates from {stale.source_date} (degraded mode)"
            )
            return RateResolution(stale, STATUS_STALE)

        return RateResolution(fallback_snapshot(self.base_currency), STATUS_FALLBACK)

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def convert(self, amount, from_currency, to_currency):
        """
        Convert an amount from one currency to another.

        Args:
            amount (float): The amount to convert
            from_currency (str): Source currency code (e.g., 'USD')
            to_currency (str): Target currency code (e.g., 'PHP')

        Returns:
            float: The converted amount

        Raises:
            UnsupportedCurrencyError: If a currency has no known rate
        """
        from_currency = normalize_currency_code(from_currency)
        to_currency = normalize_currency_code(to_currency)

        # No rates needed for these
        if from_currency == to_currency:
            return amount
        if amount == 0:
            return 0

        return conversion.convert(
            amount, from_currency, to_currency, self.get_rates(), self.base_currency
        )

    def convert_to_base(self, amount, currency):
        """Convert an amount to the base currency for storage."""
        return self.convert(amount, currency, self.base_currency)

    def convert_from_base(self, amount_in_base, currency):
        """Convert a stored base-currency amount to a display currency."""
        return self.convert(amount_in_base, self.base_currency, currency)

    def get_rate(self, from_currency, to_currency):
        """
        Get the current rate for a currency pair.

        Returns:
            float: Multiply an amount in from_currency by this to get to_currency

        Raises:
            UnsupportedCurrencyError: If a currency has no known rate
        """
        from_currency = normalize_currency_code(from_currency)
        to_currency = normalize_currency_code(to_currency)
        if from_currency == to_currency:
            return 1

        return conversion.get_rate(
            from_currency, to_currency, self.get_rates(), self.base_currency
        )

    def convert_with_rate(self, amount, from_currency, to_currency):
        """
        Convert an amount and report the rate used, both from one snapshot.

        Returns:
            tuple: (converted_amount, rate) where converted_amount == amount * rate

        Raises:
            UnsupportedCurrencyError: If a currency has no known rate
        """
        from_currency = normalize_currency_code(from_currency)
        to_currency = normalize_currency_code(to_currency)
        if from_currency == to_currency:
            return amount, 1

        snapshot = self.get_rates()
        rate = conversion.get_rate(from_currency, to_currency, snapshot, self.base_currency)
        converted = conversion.convert(
            amount, from_currency, to_currency, snapshot, self.base_currency
        )
        return converted, rate

    def supported_currencies(self):
        """List supported currency codes, sorted, base included."""
        return conversion.supported_currencies(self.get_rates(), self.base_currency)
