"""
Monetary precision helpers for order pricing and printed output.

Pricing runs in full Decimal precision; these helpers are the only place
where amounts are rounded, and they are applied at the boundary (when an
order is persisted, printed or shown on the customer display).

Key Principles:
1. NEVER use float for money
2. Round once, at the boundary, with ROUND_HALF_EVEN (banker's rounding)
"""

from decimal import Decimal, ROUND_HALF_EVEN, getcontext
from typing import Union

# High precision for intermediate calculations (percentages of percentages)
getcontext().prec = 28

# Currency minor unit exponents (how many decimal places)
CURRENCY_EXPONENT = {
    "USD": 2,
    "EUR": 2,
    "GBP": 2,
    "AUD": 2,
    "CAD": 2,
    "NZD": 2,
    "JPY": 0,
    "KRW": 0,
    "KWD": 3,
    "BHD": 3,
}

Amount = Union[Decimal, str, int, float]


def currency_exponent(currency: str) -> int:
    """
    Get the number of decimal places for a currency.

    Examples:
        >>> currency_exponent("USD")
        2
        >>> currency_exponent("JPY")
        0
    """
    return CURRENCY_EXPONENT.get((currency or "USD").upper(), 2)


def quantize_decimal(currency: str) -> Decimal:
    """Smallest unit of a currency as a Decimal (0.01 for USD)."""
    return Decimal(10) ** -currency_exponent(currency)


def to_decimal(amount: Amount) -> Decimal:
    """Coerce any numeric input to Decimal without float artifacts."""
    if isinstance(amount, Decimal):
        return amount
    if isinstance(amount, float):
        # Convert float to string first to avoid binary precision noise
        return Decimal(str(amount))
    return Decimal(amount)


def quantize(currency: str, amount: Amount) -> Decimal:
    """
    Round to currency decimals using banker's rounding (ROUND_HALF_EVEN).

    Examples:
        >>> quantize("USD", "13.8402")
        Decimal('13.84')
        >>> quantize("USD", "10.125")
        Decimal('10.12')
    """
    return to_decimal(amount).quantize(quantize_decimal(currency), rounding=ROUND_HALF_EVEN)


def calculate_percentage(amount: Amount, percentage: Amount) -> Decimal:
    """
    Percentage of an amount, unrounded.

    Examples:
        >>> calculate_percentage("13.98", "10")
        Decimal('1.398')
    """
    return to_decimal(amount) * to_decimal(percentage) / Decimal("100")


def format_amount(amount: Amount, symbol: str = "$", currency: str = "USD") -> str:
    """
    Format an unrounded amount for printed receipts and the customer display.

    Takes the shop's configured symbol verbatim and never inserts
    thousands separators, since receipt columns are narrow.

    Examples:
        >>> format_amount(Decimal("13.8402"))
        '$13.84'
        >>> format_amount("-1.398", symbol="£")
        '-£1.40'
    """
    quantized = quantize(currency, amount)
    exponent = currency_exponent(currency)
    sign = "-" if quantized < 0 else ""
    return f"{sign}{symbol}{abs(quantized):.{exponent}f}"
