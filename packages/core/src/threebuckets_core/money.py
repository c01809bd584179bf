"""Integer money arithmetic.

Currency is always integer cents and rates are always integer basis points.
Compounding is computed with Python integers and floored, so results are
exact and reproducible.
"""

from decimal import ROUND_HALF_UP, Decimal

BPS_PER_UNIT = 10_000
MONTHS_PER_YEAR = 12


def compound(
    balance_cents: int,
    rate_bps: int,
    periods: int = 1,
    periods_per_year: int = 1,
) -> int:
    """Grow a balance for ``periods`` periods at an annual rate split evenly per period.

    Returns ``floor(balance * (1 + rate / periods_per_year) ** periods)``.
    """
    if periods <= 0:
        return balance_cents
    denominator = BPS_PER_UNIT * periods_per_year
    growth_numerator = (denominator + rate_bps) ** periods
    return balance_cents * growth_numerator // denominator**periods


def apply_bps(amount_cents: int, bps: int) -> int:
    """Return ``floor(amount * bps / 10000)``."""
    return amount_cents * bps // BPS_PER_UNIT


def cents_from_dollars(dollars) -> int:
    """Convert a dollar amount to integer cents, rounding half away from zero."""
    return int((Decimal(str(dollars)) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def dollars_from_cents(cents: int) -> Decimal:
    return Decimal(cents) / 100


def format_cents(cents: int) -> str:
    """Format cents as whole US dollars, e.g. ``-$1,235``."""
    dollars = dollars_from_cents(abs(cents)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    sign = "-" if cents < 0 else ""
    return f"{sign}${dollars:,}"


def format_bps(bps: int) -> str:
    """Format basis points as a percentage, e.g. ``6.00%``."""
    return f"{Decimal(bps) / 100:.2f}%"
