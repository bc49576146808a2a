"""
Exchange rate snapshots and the built-in fallback table.

All rates are expressed as units of a currency per one unit of the base
currency, so dividing a foreign amount by its rate yields the base amount.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType

logger = logging.getLogger(__name__)

SOURCE_PROVIDER = 'provider'
SOURCE_FALLBACK = 'fallback'

# Approximate rates per 1 PHP, used only when no live or cached data exists
FALLBACK_BASE = 'PHP'
FALLBACK_RATES = {
    'PHP': 1,
    'USD': 0.018,
    'EUR': 0.016,
    'GBP': 0.014,
    'JPY': 2.65,
    'AUD': 0.027,
    'CAD': 0.024,
    'CNY': 0.13,
}


def _utcnow():
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class RateSnapshot:
    """One fetched (or fallback) set of exchange rates.

    Attributes:
        rates: Mapping of currency code -> units per one base unit (read-only)
        fetched_at: When the rates were retrieved (UTC)
        source_date: Date string reported upstream, if any
        source: 'provider' for live data, 'fallback' for the constant table
    """

    rates: MappingProxyType
    fetched_at: datetime = field(default_factory=_utcnow)
    source_date: str = None
    source: str = SOURCE_PROVIDER

    def __post_init__(self):
        # Copy so later mutation of the caller's dict can't leak in
        object.__setattr__(self, 'rates', MappingProxyType(dict(self.rates)))

    @property
    def is_fallback(self):
        return self.source == SOURCE_FALLBACK

    def to_dict(self):
        """Serialize for JSON responses."""
        return {
            'rates': dict(self.rates),
            'date': self.source_date,
            'timestamp': int(self.fetched_at.timestamp() * 1000),
            'source': self.source,
        }


def fallback_snapshot(base_currency=FALLBACK_BASE):
    """
    Build the static fallback snapshot for a base currency.

    The table is defined against PHP. For any other base it is rebased by
    dividing each rate by the base's PHP rate. A base missing from the
    table gets a snapshot holding only itself.

    Args:
        base_currency (str): Configured base currency code

    Returns:
        RateSnapshot: Never cached, dated today
    """
    logger.warning(f"Using fallback exchange rates (base {base_currency})")

    if base_currency == FALLBACK_BASE:
        rates = dict(FALLBACK_RATES)
    elif base_currency in FALLBACK_RATES:
        base_rate = FALLBACK_RATES[base_currency]
        rates = {code: rate / base_rate for code, rate in FALLBACK_RATES.items()}
        rates[base_currency] = 1
    else:
        logger.warning(f"No fallback rates known for base currency {base_currency}")
        rates = {base_currency: 1}

    now = _utcnow()
    return RateSnapshot(
        rates=rates,
        fetched_at=now,
        source_date=now.date().isoformat(),
        source=SOURCE_FALLBACK,
    )
