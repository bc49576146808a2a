"""
Utility functions for the shared budget currency service.
"""
import math
from decimal import Decimal, ROUND_HALF_UP


def normalize_currency_code(code):
    """
    Normalize a currency code for lookups.

    Args:
        code (str): Currency code in any case, possibly padded (e.g., ' usd')

    Returns:
        str: Upper-case code (e.g., 'USD'), or the input unchanged if not a string
    """
    if not isinstance(code, str):
        return code
    return code.strip().upper()


def parse_amount(value):
    """
    Parse a request amount into a float.

    Args:
        value: Number or numeric string

    Returns:
        float: The parsed amount

    Raises:
        ValueError: If the value is missing, not numeric, or not finite
    """
    if value is None or isinstance(value, bool):
        raise ValueError('Amount is required')

    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise ValueError('Amount must be a number')

    if not math.isfinite(amount):
        raise ValueError('Amount must be a finite number')

    return amount


def round_money(value, places=2):
    """
    Round a converted amount for display, half-up.

    Args:
        value (float): Amount
        places (int): Decimal places (2 for amounts, 6 for rates)

    Returns:
        float: Rounded value
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))
