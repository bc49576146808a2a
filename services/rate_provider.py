"""
Exchange rate provider.

Fetches the latest rates for the base currency from exchangerate-api.com.
Two upstream shapes carry the same data:

    legacy (v4):  {"base": "PHP", "date": "2024-01-15", "rates": {...}}
    keyed  (v6):  {"result": "success", "time_last_update_utc": "...",
                   "conversion_rates": {...}}

The keyed endpoint needs an API key. Without one only the legacy endpoint
is used.
"""
import logging
import math
import time

import requests

from services.rates import RateSnapshot, SOURCE_PROVIDER

logger = logging.getLogger(__name__)

DEFAULT_API_URL = 'https://api.exchangerate-api.com/v4/latest'
DEFAULT_KEYED_API_URL = 'https://v6.exchangerate-api.com/v6'
DEFAULT_TIMEOUT_SECONDS = 5


class ProviderError(Exception):
    """Raised when no retrieval path produced a usable rate table."""
    pass


class RateProvider:
    """Fetches and normalizes rates relative to one base currency."""

    def __init__(self, base_currency, api_key=None, api_url=DEFAULT_API_URL,
                 keyed_api_url=DEFAULT_KEYED_API_URL, timeout=DEFAULT_TIMEOUT_SECONDS,
                 clock=time.monotonic):
        self.base_currency = base_currency
        # Total budget for one fetch() across all URLs
        self.timeout = timeout
        self._clock = clock
        self.urls = []

        if api_key:
            self.urls.append(f"{keyed_api_url.rstrip('/')}/{api_key}/latest/{base_currency}")
        else:
            logger.warning(
                "EXCHANGE_RATE_API_KEY is not set; using the keyless rate API only"
            )
        if api_url:
            self.urls.append(f"{api_url.rstrip('/')}/{base_currency}")

        if not self.urls:
            logger.error("No exchange rate API configured; live rates unavailable")

    def fetch(self):
        """
        Fetch current rates, trying each configured URL in order.

        Returns:
            RateSnapshot: Normalized live rates

        Raises:
            ProviderError: If every retrieval path failed
        """
        if not self.urls:
            raise ProviderError("No exchange rate API configured")

        deadline = self._clock() + self.timeout
        errors = []
        for url in self.urls:
            remaining = deadline - self._clock()
            if remaining <= 0:
                errors.append(f"Timeout budget of {self.timeout}s exhausted")
                break
            try:
                return self._fetch_url(url, remaining)
            except ProviderError as e:
                # Don't log the URL itself, the keyed one embeds the API key
                errors.append(str(e))
                logger.warning(f"Exchange rate fetch failed: {e}")

        raise ProviderError('; '.join(errors))

    def _fetch_url(self, url, timeout):
        try:
            response = requests.get(url, timeout=timeout)
            response.raise_for_status()
        except requests.Timeout:
            raise ProviderError(f"Request timed out after {timeout:g}s")
        except requests.HTTPError as e:
            status = getattr(e.response, 'status_code', 'unknown')
            raise ProviderError(f"HTTP error {status}")
        except requests.RequestException as e:
            raise ProviderError(f"Request failed: {type(e).__name__}")

        try:
            payload = response.json()
        except ValueError:
            raise ProviderError("Response body is not valid JSON")

        return self.parse(payload)

    def parse(self, payload):
        """
        Normalize either upstream shape into a RateSnapshot.

        Args:
            payload (dict): Decoded JSON body

        Returns:
            RateSnapshot

        Raises:
            ProviderError: If the body has no usable rates
        """
        if not isinstance(payload, dict):
            raise ProviderError("Unexpected response format")

        if payload.get('result') == 'error':
            raise ProviderError(f"API error: {payload.get('error-type', 'unknown')}")

        raw_rates = payload.get('rates')
        if raw_rates is None:
            raw_rates = payload.get('conversion_rates')
        if not isinstance(raw_rates, dict):
            raise ProviderError("Response is missing a rates field")

        rates = {}
        for code, value in raw_rates.items():
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                logger.warning(f"Skipping non-numeric rate for {code}: {value!r}")
                continue
            if not math.isfinite(value) or value <= 0:
                logger.warning(f"Skipping invalid rate for {code}: {value!r}")
                continue
            rates[str(code).upper()] = float(value)

        if not rates:
            raise ProviderError("Response contained no valid rates")

        rates[self.base_currency] = 1.0

        return RateSnapshot(
            rates=rates,
            source_date=payload.get('date') or payload.get('time_last_update_utc'),
            source=SOURCE_PROVIDER,
        )
