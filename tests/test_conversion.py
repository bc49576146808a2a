"""
Unit tests for conversion math.
Tests rate direction, identity, round trips, and unsupported currencies.
"""
import pytest

from services.conversion import (
    convert, get_rate, convert_to_base, convert_from_base,
    supported_currencies, UnsupportedCurrencyError, CurrencyError,
)
from conftest import BASE, make_snapshot


pytestmark = pytest.mark.unit

CURRENCIES = ['PHP', 'USD', 'EUR', 'GBP', 'JPY']


class TestRateDirection:
    """Rates are units of foreign currency per 1 PHP."""

    def test_usd_to_base_divides(self, snapshot):
        """100 USD / 0.018 ~= 5555.56 PHP."""
        result = convert(100, 'USD', 'PHP', snapshot, BASE)
        assert result == pytest.approx(5555.5556, rel=1e-6)

    def test_base_to_eur_multiplies(self, snapshot):
        """1000 PHP * 0.016 = 16 EUR."""
        result = convert(1000, 'PHP', 'EUR', snapshot, BASE)
        assert result == pytest.approx(16.0)

    def test_cross_currency_goes_through_base(self, snapshot):
        """50 USD -> (50 / 0.018) PHP -> * 0.016 EUR ~= 44.44."""
        result = convert(50, 'USD', 'EUR', snapshot, BASE)
        assert result == pytest.approx(44.4444, rel=1e-4)

    def test_weaker_currency_yields_larger_base_amount(self, snapshot):
        """One USD is worth many PHP, never a fraction of one."""
        assert convert(1, 'USD', 'PHP', snapshot, BASE) > 1
        assert convert(1, 'PHP', 'USD', snapshot, BASE) < 1


class TestConvert:
    """Tests for convert function."""

    @pytest.mark.parametrize('currency', CURRENCIES)
    def test_same_currency_returns_amount_exactly(self, snapshot, currency):
        assert convert(123.456, currency, currency, snapshot, BASE) == 123.456

    def test_same_currency_skips_lookup(self, snapshot):
        """Unknown codes are fine when nothing needs converting."""
        assert convert(10, 'XYZ', 'XYZ', snapshot, BASE) == 10

    @pytest.mark.parametrize('from_currency,to_currency', [
        ('USD', 'PHP'), ('PHP', 'EUR'), ('GBP', 'JPY'),
    ])
    def test_zero_amount(self, snapshot, from_currency, to_currency):
        assert convert(0, from_currency, to_currency, snapshot, BASE) == 0

    @pytest.mark.parametrize('from_currency,to_currency', [
        ('USD', 'EUR'), ('PHP', 'JPY'), ('GBP', 'PHP'), ('JPY', 'USD'),
    ])
    def test_round_trip(self, snapshot, from_currency, to_currency):
        amount = 987.65
        there = convert(amount, from_currency, to_currency, snapshot, BASE)
        back = convert(there, to_currency, from_currency, snapshot, BASE)
        assert back == pytest.approx(amount)

    def test_base_not_required_in_rates(self):
        """Base is identity even when the table omits it."""
        snapshot = make_snapshot({'USD': 0.018})
        assert 'PHP' not in snapshot.rates
        assert convert(1000, 'PHP', 'USD', snapshot, BASE) == pytest.approx(18.0)

    def test_negative_amount(self, snapshot):
        """Refunds convert with the same rate."""
        assert convert(-1000, 'PHP', 'EUR', snapshot, BASE) == pytest.approx(-16.0)

    def test_unsupported_from_currency(self, snapshot):
        with pytest.raises(UnsupportedCurrencyError) as exc_info:
            convert(10, 'XYZ', 'PHP', snapshot, BASE)
        assert exc_info.value.currency == 'XYZ'
        assert 'XYZ' in str(exc_info.value)

    def test_unsupported_to_currency(self, snapshot):
        with pytest.raises(UnsupportedCurrencyError):
            convert(10, 'USD', 'XYZ', snapshot, BASE)

    def test_unsupported_is_a_value_error(self, snapshot):
        with pytest.raises(CurrencyError):
            convert(10, 'XYZ', 'USD', snapshot, BASE)
        with pytest.raises(ValueError):
            convert(10, 'XYZ', 'USD', snapshot, BASE)

    def test_zero_rate_is_unsupported(self):
        """A zero rate would divide by zero; treat it as missing."""
        snapshot = make_snapshot({'USD': 0})
        with pytest.raises(UnsupportedCurrencyError):
            convert(10, 'USD', 'PHP', snapshot, BASE)


class TestGetRate:
    """Tests for get_rate function."""

    @pytest.mark.parametrize('currency', CURRENCIES + ['XYZ'])
    def test_same_currency_is_one(self, snapshot, currency):
        assert get_rate(currency, currency, snapshot, BASE) == 1

    def test_from_base_is_table_rate(self, snapshot):
        assert get_rate('PHP', 'USD', snapshot, BASE) == snapshot.rates['USD']

    def test_to_base_is_inverse_table_rate(self, snapshot):
        assert get_rate('USD', 'PHP', snapshot, BASE) == 1 / snapshot.rates['USD']

    @pytest.mark.parametrize('from_currency,to_currency', [
        ('USD', 'EUR'), ('PHP', 'GBP'), ('JPY', 'PHP'), ('GBP', 'JPY'),
    ])
    def test_reciprocal(self, snapshot, from_currency, to_currency):
        forward = get_rate(from_currency, to_currency, snapshot, BASE)
        backward = get_rate(to_currency, from_currency, snapshot, BASE)
        assert forward * backward == pytest.approx(1.0)

    @pytest.mark.parametrize('from_currency,to_currency', [
        ('USD', 'EUR'), ('PHP', 'GBP'), ('JPY', 'PHP'),
    ])
    def test_consistent_with_convert(self, snapshot, from_currency, to_currency):
        amount = 250.0
        rate = get_rate(from_currency, to_currency, snapshot, BASE)
        converted = convert(amount, from_currency, to_currency, snapshot, BASE)
        assert converted == pytest.approx(amount * rate)

    def test_unsupported_raises(self, snapshot):
        with pytest.raises(UnsupportedCurrencyError):
            get_rate('USD', 'XYZ', snapshot, BASE)
        with pytest.raises(UnsupportedCurrencyError):
            get_rate('XYZ', 'PHP', snapshot, BASE)


class TestBaseWrappers:
    """Tests for convert_to_base and convert_from_base."""

    def test_convert_to_base(self, snapshot):
        assert convert_to_base(100, 'USD', snapshot, BASE) == pytest.approx(100 / 0.018)

    def test_convert_from_base(self, snapshot):
        assert convert_from_base(1000, 'EUR', snapshot, BASE) == pytest.approx(16.0)

    def test_base_to_base(self, snapshot):
        assert convert_to_base(42.5, 'PHP', snapshot, BASE) == 42.5


class TestSupportedCurrencies:
    """Tests for supported_currencies function."""

    def test_includes_base_and_table(self, snapshot):
        assert supported_currencies(snapshot, BASE) == ['EUR', 'GBP', 'JPY', 'PHP', 'USD']

    def test_base_only_snapshot(self):
        snapshot = make_snapshot({})
        assert supported_currencies(snapshot, BASE) == ['PHP']
