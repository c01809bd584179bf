"""HECM (reverse mortgage) calculations for Bucket 3.

The principal limit is the lender-supplied figure entered by the advisor.
This module works out what that principal limit means for the household:
mortgage payoff, cash to close, lump sum, line of credit and tenure figures.
"""

import structlog

from .accumulation import project_home_value
from .models import HecmResult, HomeEquityProfile, LocProjection, PayoutType
from .money import compound

logger = structlog.get_logger()

# Share of the principal limit available in the first year, in percent
FIRST_YEAR_DRAW_LIMIT_PCT = 60

LOC_PROJECTION_AGES = (70, 75, 80, 85)

DEFAULT_LOC_GROWTH_RATE_BPS = 600


def _lump_sum_available(
    principal_limit_cents: int,
    available_proceeds_cents: int,
    pays_off_mortgage: bool,
) -> int:
    # Mortgage payoff draws are exempt from the first-year limit
    if pays_off_mortgage:
        return available_proceeds_cents
    first_year_limit = principal_limit_cents * FIRST_YEAR_DRAW_LIMIT_PCT // 100
    return min(available_proceeds_cents, first_year_limit)


def _loc_start_balance(profile: HomeEquityProfile, available_proceeds_cents: int) -> int:
    if profile.hecm_payout_type == PayoutType.LOC:
        return max(0, available_proceeds_cents)
    if profile.hecm_payout_type == PayoutType.LUMP_SUM and available_proceeds_cents > 0:
        # Hybrid: the part not taken as cash stays in a growing credit line
        return max(0, available_proceeds_cents - profile.hecm_additional_lump_sum_cents)
    return 0


def project_loc_growth(
    start_balance_cents: int,
    growth_rate_bps: int,
    retirement_age: int,
    ages: tuple[int, ...] = LOC_PROJECTION_AGES,
) -> list[LocProjection]:
    """Grow an untouched line of credit to each reference age after retirement."""
    if start_balance_cents <= 0:
        return []
    return [
        LocProjection(
            age=age,
            balance_cents=compound(start_balance_cents, growth_rate_bps, periods=age - retirement_age),
        )
        for age in ages
        if age > retirement_age
    ]


def calculate_hecm(
    profile: HomeEquityProfile,
    *,
    years_to_retirement: int,
    youngest_borrower_age: int,
    lending_limit_cents: int,
    fallback_loc_growth_rate_bps: int = DEFAULT_LOC_GROWTH_RATE_BPS,
) -> HecmResult:
    """
    Calculate all HECM figures for a client.

    Args:
        profile: The client's home equity profile
        years_to_retirement: Whole years until the target retirement age (>= 0)
        youngest_borrower_age: Current age of the youngest borrower
        lending_limit_cents: FHA lending limit, caps the maximum claim amount
        fallback_loc_growth_rate_bps: LOC growth rate used when the profile has none

    Returns:
        HecmResult. A ``none`` payout still reports home value and principal
        limit, with zero proceeds-dependent payout figures.
    """
    years_to_retirement = max(0, years_to_retirement)

    projected_home_value = project_home_value(
        profile.current_home_value_cents,
        profile.home_appreciation_rate_bps,
        years_to_retirement,
    )
    max_claim_amount = min(projected_home_value, lending_limit_cents)
    retirement_age = youngest_borrower_age + years_to_retirement
    principal_limit = profile.hecm_principal_limit_cents

    # Without a payout the loan is never taken, so nothing is paid off or drawn
    takes_hecm = profile.hecm_payout_type != PayoutType.NONE
    pays_off_mortgage = (
        takes_hecm and profile.hecm_payoff_mortgage and profile.existing_mortgage_balance_cents > 0
    )
    mortgage_payoff = profile.existing_mortgage_balance_cents if pays_off_mortgage else 0

    # May be negative: the borrower brings the difference to closing
    available_proceeds = principal_limit - mortgage_payoff if takes_hecm else 0

    monthly_freed = (
        profile.existing_mortgage_payment_cents
        if takes_hecm and profile.hecm_payoff_mortgage and profile.existing_mortgage_payment_cents > 0
        else 0
    )

    lump_sum_available = (
        _lump_sum_available(principal_limit, available_proceeds, pays_off_mortgage)
        if takes_hecm
        else 0
    )

    loc_growth_rate = (
        profile.hecm_loc_growth_rate_bps
        if profile.hecm_loc_growth_rate_bps is not None
        else fallback_loc_growth_rate_bps
    )
    loc_start_balance = _loc_start_balance(profile, available_proceeds)
    loc_projections = project_loc_growth(loc_start_balance, loc_growth_rate, retirement_age)

    tenure_monthly = (
        profile.hecm_tenure_monthly_cents if profile.hecm_payout_type == PayoutType.TENURE else 0
    )

    result = HecmResult(
        projected_home_value_cents=projected_home_value,
        max_claim_amount_cents=max_claim_amount,
        principal_limit_cents=principal_limit,
        mortgage_payoff_cents=mortgage_payoff,
        available_proceeds_cents=available_proceeds,
        monthly_freed_cents=monthly_freed,
        lump_sum_available_cents=lump_sum_available,
        loc_start_balance_cents=loc_start_balance,
        loc_growth_rate_bps=loc_growth_rate,
        loc_projections=loc_projections,
        tenure_monthly_cents=tenure_monthly,
        retirement_age=retirement_age,
    )

    logger.debug(
        "hecm_calculated",
        payout_type=profile.hecm_payout_type.value,
        principal_limit=principal_limit,
        available_proceeds=available_proceeds,
        loc_start_balance=loc_start_balance,
    )
    return result
