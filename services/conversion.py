"""
Currency conversion math.

Pure functions over a RateSnapshot. Rates are units of a currency per one
unit of the base currency:

    amount_in_base = amount / rates[from_currency]
    result = amount_in_base * rates[to_currency]

The base currency itself is always rate 1, whether or not the snapshot lists
it. Inverting this direction silently corrupts every stored amount.
"""


class CurrencyError(ValueError):
    """Base class for currency conversion errors."""
    pass


class UnsupportedCurrencyError(CurrencyError):
    """Raised when a currency code has no rate in the snapshot."""

    def __init__(self, currency):
        self.currency = currency
        super().__init__(f"Currency {currency} not supported")


def _rate_for(currency, snapshot, base_currency):
    """Look up the per-base rate for a currency, base being identity."""
    if currency == base_currency:
        return 1
    rate = snapshot.rates.get(currency)
    if not rate:
        raise UnsupportedCurrencyError(currency)
    return rate


def convert(amount, from_currency, to_currency, snapshot, base_currency):
    """
    Convert an amount between two currencies via the base currency.

    Args:
        amount (float): Amount in from_currency
        from_currency (str): Source currency code
        to_currency (str): Target currency code
        snapshot (RateSnapshot): Resolved rates
        base_currency (str): The snapshot's base currency code

    Returns:
        float: Amount in to_currency

    Raises:
        UnsupportedCurrencyError: If either non-base currency is unknown
    """
    if from_currency == to_currency:
        return amount

    if amount == 0:
        return 0

    amount_in_base = amount
    if from_currency != base_currency:
        amount_in_base = amount / _rate_for(from_currency, snapshot, base_currency)

    if to_currency == base_currency:
        return amount_in_base

    return amount_in_base * _rate_for(to_currency, snapshot, base_currency)


def get_rate(from_currency, to_currency, snapshot, base_currency):
    """
    Get the scalar rate such that convert(a, from, to) == a * rate.

    Raises:
        UnsupportedCurrencyError: If either non-base currency is unknown
    """
    if from_currency == to_currency:
        return 1

    from_rate = _rate_for(from_currency, snapshot, base_currency)
    to_rate = _rate_for(to_currency, snapshot, base_currency)

    if from_currency == base_currency:
        return to_rate
    if to_currency == base_currency:
        return 1 / from_rate
    return (1 / from_rate) * to_rate


def convert_to_base(amount, currency, snapshot, base_currency):
    """Convert an amount in any currency to the base currency."""
    return convert(amount, currency, base_currency, snapshot, base_currency)


def convert_from_base(amount_in_base, currency, snapshot, base_currency):
    """Convert a base-currency amount to another currency."""
    return convert(amount_in_base, base_currency, currency, snapshot, base_currency)


def supported_currencies(snapshot, base_currency):
    """Sorted currency codes available in the snapshot, base included."""
    codes = {code for code, rate in snapshot.rates.items() if rate}
    codes.add(base_currency)
    return sorted(codes)
