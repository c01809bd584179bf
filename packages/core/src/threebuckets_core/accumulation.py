"""Accumulation phase projections.

Grows nest egg accounts and the home value from today to the retirement
date.
"""

from .money import BPS_PER_UNIT, MONTHS_PER_YEAR, compound


def project_account_balance(
    current_balance_cents: int,
    monthly_contribution_cents: int,
    annual_rate_bps: int,
    months_to_retirement: int,
) -> int:
    """
    Project the future value of an account with level monthly contributions.

    FV = PV × (1 + r)^n + PMT × ((1 + r)^n − 1) / r, with r the monthly rate.

    The expression is evaluated exactly as a ratio of integers and floored
    once, so no fractional cents are produced.

    Args:
        current_balance_cents: Balance today
        monthly_contribution_cents: Contribution made every month until retirement
        annual_rate_bps: Annual rate of return, compounded monthly
        months_to_retirement: Number of months to grow

    Returns:
        Projected balance in cents at retirement
    """
    if months_to_retirement <= 0:
        return current_balance_cents

    if annual_rate_bps == 0:
        return current_balance_cents + monthly_contribution_cents * months_to_retirement

    n = months_to_retirement
    base = BPS_PER_UNIT * MONTHS_PER_YEAR
    grown = (base + annual_rate_bps) ** n
    start = base**n

    # PV·g + PMT·(g − 1)/r over a common denominator of base^n · bps
    numerator = (
        current_balance_cents * grown * annual_rate_bps
        + monthly_contribution_cents * (grown - start) * base
    )
    return numerator // (start * annual_rate_bps)


def project_home_value(
    current_value_cents: int,
    appreciation_rate_bps: int,
    years: int,
) -> int:
    """Project home value with annual appreciation: FV = PV × (1 + rate)^years."""
    if years <= 0:
        return current_value_cents
    return compound(current_value_cents, appreciation_rate_bps, periods=years)
