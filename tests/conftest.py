"""
Shared pytest fixtures for currency service tests.
"""
import pytest
import os
import sys
from datetime import datetime, timezone
from unittest.mock import MagicMock

# Add project root and tests directory to path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
tests_dir = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, project_root)
sys.path.insert(0, tests_dir)

from services.rates import RateSnapshot  # noqa: E402
from services.rate_cache import RateCache  # noqa: E402
from services.rate_provider import ProviderError  # noqa: E402
from services.currency_service import CurrencyService  # noqa: E402


# ============================================================================
# Rate data
# ============================================================================

BASE = 'PHP'

# Per 1 PHP
TEST_RATES = {
    'USD': 0.018,
    'EUR': 0.016,
    'GBP': 0.014,
    'JPY': 2.65,
}


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


def make_snapshot(rates=None, source_date='2024-01-15'):
    """Build a provider snapshot with TEST_RATES by default."""
    return RateSnapshot(
        rates=dict(TEST_RATES if rates is None else rates),
        fetched_at=datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc),
        source_date=source_date,
    )


# ============================================================================
# Service Fixtures
# ============================================================================

@pytest.fixture
def snapshot():
    """Snapshot with base PHP and TEST_RATES."""
    return make_snapshot()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    """Empty cache on the fake clock with the default 1 hour TTL."""
    return RateCache(ttl=3600, clock=clock)


@pytest.fixture
def provider(snapshot):
    """Mock provider that returns the test snapshot."""
    mock_provider = MagicMock()
    mock_provider.fetch.return_value = snapshot
    return mock_provider


@pytest.fixture
def failing_provider():
    """Mock provider that always fails."""
    mock_provider = MagicMock()
    mock_provider.fetch.side_effect = ProviderError("Network error")
    return mock_provider


@pytest.fixture
def currency_service(provider, cache):
    """CurrencyService with a mocked provider and fake-clock cache."""
    return CurrencyService(BASE, provider=provider, cache=cache)


# ============================================================================
# Flask App Fixtures
# ============================================================================

@pytest.fixture
def app(currency_service):
    """Create Flask app for testing with the mocked currency service."""
    from app import create_app
    flask_app = create_app('testing', currency_service=currency_service)
    return flask_app


@pytest.fixture
def api_client(app):
    """Create test client for API tests."""
    return app.test_client()
