"""
Monetary precision helpers shared by the seat and split-check engines.

Every amount that a calculator rounds goes through ``quantize`` so seat
balances, split shares and integrity checks agree to the cent.

Rules:
- Money is Decimal. A float is only accepted at the boundary and goes through str().
- Rounding is ROUND_HALF_EVEN to the currency's minor unit, always before
  converting to integer minor units.
- Anything that is divided (split shares, allocated tax) adds back up to the
  exact amount it came from.
"""

from decimal import Decimal, ROUND_HALF_EVEN, getcontext
from typing import List, Union

getcontext().prec = 28

Amount = Union[Decimal, str, int, float]

DEFAULT_CURRENCY = "USD"

# Currency minor unit exponents (how many decimal places)
CURRENCY_EXPONENT = {
    "USD": 2,
    "EUR": 2,
    "GBP": 2,
    "CAD": 2,
    "AUD": 2,
    "JPY": 0,
    "KRW": 0,
    "KWD": 3,
    "BHD": 3,
}

CURRENCY_SYMBOLS = {
    "USD": "$",
    "CAD": "$",
    "AUD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "KRW": "₩",
}


def currency_exponent(currency: str) -> int:
    """
    Get the number of decimal places for a currency.

    Examples:
        >>> currency_exponent("USD")
        2
        >>> currency_exponent("JPY")
        0
    """
    return CURRENCY_EXPONENT.get(currency.upper(), 2)


def quantize_decimal(currency: str) -> Decimal:
    """Smallest unit of a currency as a Decimal (0.01 for USD)."""
    return Decimal(10) ** -currency_exponent(currency)


def to_decimal(amount: Amount) -> Decimal:
    """Coerce a boundary value to Decimal without binary float noise."""
    if isinstance(amount, Decimal):
        return amount
    if isinstance(amount, float):
        amount = str(amount)
    return Decimal(amount)


def quantize(currency: str, amount: Amount) -> Decimal:
    """
    Round to currency decimals using banker's rounding (ROUND_HALF_EVEN).

    This is the one rounding rule used by every calculator in the backend.

    Examples:
        >>> quantize("USD", "10.127")
        Decimal('10.13')
        >>> quantize("USD", "10.125")
        Decimal('10.12')  # Banker's rounding
    """
    return to_decimal(amount).quantize(quantize_decimal(currency), rounding=ROUND_HALF_EVEN)


def round_to_cents(amount: Amount) -> Decimal:
    """Shorthand for ``quantize`` in the default currency."""
    return quantize(DEFAULT_CURRENCY, amount)


def to_minor(currency: str, amount: Amount) -> int:
    """
    Convert to minor units (e.g., cents) after quantization.

    Examples:
        >>> to_minor("USD", "10.127")
        1013
        >>> to_minor("JPY", "1234.56")
        1235
    """
    quantized = quantize(currency, amount)
    exponent = currency_exponent(currency)
    return int((quantized * (10 ** exponent)).to_integral_value())


def from_minor(currency: str, minor: int) -> Decimal:
    """
    Convert from minor units back to a quantized Decimal.

    Examples:
        >>> from_minor("USD", 1013)
        Decimal('10.13')
    """
    exponent = currency_exponent(currency)
    return (Decimal(minor) / (10 ** exponent)).quantize(quantize_decimal(currency))


def allocate_minor(weights: List[int], total_minor: int) -> List[int]:
    """
    Distribute total_minor over slots in proportion to integer weights.

    Each slot first gets the floor of its exact share; the units left over go
    one at a time to the slots with the largest remainders, earlier slots
    winning ties. The result always sums to total_minor.

    Negative totals are allocated by magnitude and negated, so a comp line
    splits the same way a charge does.

    Examples:
        >>> allocate_minor([1, 1, 1], 1000)
        [334, 333, 333]
        >>> allocate_minor([1000, 1500, 2000], 100)
        [22, 33, 45]
    """
    total_weight = sum(weights)

    if total_weight == 0 or total_minor == 0:
        return [0] * len(weights)

    if total_minor < 0:
        return [-part for part in allocate_minor(weights, -total_minor)]

    # Integer arithmetic: divmod keeps residuals exact for any amount
    floors = []
    residuals = []
    for index, weight in enumerate(weights):
        base, residual = divmod(weight * total_minor, total_weight)
        floors.append(base)
        residuals.append((residual, index))

    remainder = total_minor - sum(floors)

    residuals.sort(key=lambda pair: (-pair[0], pair[1]))

    for _, index in residuals[:remainder]:
        floors[index] += 1

    return floors


def split_evenly(currency: str, amount: Amount, ways: int) -> List[Decimal]:
    """
    Split an amount into ``ways`` parts that sum exactly to the quantized amount.

    Each part is the amount divided by ``ways`` rounded to the minor unit; the
    leftover minor units go to the first parts in sequence.

    Examples:
        >>> split_evenly("USD", "10.00", 3)
        [Decimal('3.34'), Decimal('3.33'), Decimal('3.33')]
    """
    if ways < 1:
        raise ValueError(f"Cannot split an amount {ways} ways")

    parts = allocate_minor([1] * ways, to_minor(currency, amount))
    return [from_minor(currency, part) for part in parts]


def validate_minor_sum(components: List[int], expected_total: int, context: str = "") -> None:
    """
    Raise ValueError unless ``components`` add up to ``expected_total`` exactly.

    ``context`` is appended to the message to say which allocation drifted.
    """
    actual = sum(components)
    if actual != expected_total:
        where = f" {context}" if context else ""
        raise ValueError(
            f"Minor unit sum mismatch{where}: expected {expected_total}, got {actual} "
            f"(diff: {actual - expected_total:+d})"
        )


def format_money(currency: str, minor: int) -> str:
    """
    Render minor units for receipts and integrity messages.

    Examples:
        >>> format_money("USD", 2500)
        '$25.00'
        >>> format_money("USD", -250)
        '-$2.50'
    """
    code = currency.upper()
    symbol = CURRENCY_SYMBOLS.get(code, code + " ")
    places = currency_exponent(code)
    sign = "-" if minor < 0 else ""
    return f"{sign}{symbol}{from_minor(code, abs(minor)):,.{places}f}"


def format_amount(currency: str, amount: Amount) -> str:
    """Same as ``format_money`` for a Decimal amount."""
    return format_money(currency, to_minor(currency, amount))
