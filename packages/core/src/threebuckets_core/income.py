"""Income (Bucket 1) calculations.

Builds per-age monthly income maps for the longevity projection, the
survivor variant of that map, and the cost of bridging a Social Security
deferral.
"""

from collections.abc import Iterable
from typing import Optional

from .models import (
    BridgeFundingSource,
    BridgePeriodResult,
    IncomeItem,
    IncomeType,
    Owner,
    SurvivorConfig,
)
from .money import MONTHS_PER_YEAR, apply_bps


def get_ss_monthly_amount(item: IncomeItem, claim_age: int) -> int:
    """
    Effective monthly benefit of an income item for a Social Security claim age.

    Claiming at 62, 67 or 70 selects that tier; any other age uses the 67
    tier. A missing tier falls back to the item's flat monthly amount.
    Non-Social-Security items always return their flat amount.
    """
    if not item.is_social_security:
        return item.monthly_amount_cents

    tiers = {
        62: item.ss_age62_cents,
        67: item.ss_age67_cents,
        70: item.ss_age70_cents,
    }
    tier_amount = tiers.get(claim_age, item.ss_age67_cents)
    return tier_amount if tier_amount is not None else item.monthly_amount_cents


def claim_age_for(owner: Owner, ss_primary_claim_age: int, ss_spouse_claim_age: int) -> int:
    """Joint items follow the primary's claim age."""
    return ss_spouse_claim_age if owner == Owner.SPOUSE else ss_primary_claim_age


def build_income_by_age(
    items: Iterable[IncomeItem],
    retirement_age: int,
    planning_horizon_age: int,
    ss_primary_claim_age: int,
    ss_spouse_claim_age: int,
) -> dict[int, int]:
    """
    Total monthly Bucket 1 income for every age from retirement to the horizon.

    Each item contributes within ``[max(start_age, retirement_age), end_age]``
    (open-ended items run to the horizon). Social Security additionally
    waits for the owner's claim age and pays the claim-age tier amount.

    Returns:
        Mapping of age to monthly income in cents, inclusive of both ends.
        Empty when the horizon precedes retirement.
    """
    items = list(items)
    income_by_age: dict[int, int] = {}

    for age in range(retirement_age, planning_horizon_age + 1):
        total = 0
        for item in items:
            effective_start = max(item.start_age, retirement_age)
            effective_end = item.end_age if item.end_age is not None else planning_horizon_age
            if age < effective_start or age > effective_end:
                continue

            if item.is_social_security:
                claim_age = claim_age_for(item.owner, ss_primary_claim_age, ss_spouse_claim_age)
                if age < claim_age:
                    continue
                total += get_ss_monthly_amount(item, claim_age)
            else:
                total += item.monthly_amount_cents
        income_by_age[age] = total

    return income_by_age


def _social_security_for(
    items: list[IncomeItem],
    owner: Owner,
    age: int,
    claim_age: int,
) -> int:
    if age < claim_age:
        return 0
    return sum(
        get_ss_monthly_amount(item, claim_age)
        for item in items
        if item.is_social_security and item.owner == owner
    )


def build_survivor_income_by_age(
    items: Iterable[IncomeItem],
    retirement_age: int,
    planning_horizon_age: int,
    ss_primary_claim_age: int,
    ss_spouse_claim_age: int,
    survivor: SurvivorConfig,
) -> dict[int, int]:
    """
    Monthly Bucket 1 income after one spouse dies.

    From the survivor event age on:
    - non-Social-Security income of the deceased stops, except pensions,
      which pay their survivor percentage;
    - the survivor's own and joint income continues unchanged;
    - Social Security pays the higher of the two spouses' claimed benefits,
      not their sum. A spouse who has not reached their claim age by a given
      age counts as 0 for that age.

    Returns:
        Mapping of age to monthly income in cents, starting at the later of
        the survivor event age and the retirement age.
    """
    items = list(items)
    deceased = survivor.surviving_spouse.deceased_owner
    income_by_age: dict[int, int] = {}

    first_age = max(survivor.survivor_event_age, retirement_age)
    for age in range(first_age, planning_horizon_age + 1):
        total = 0
        for item in items:
            if item.is_social_security:
                continue
            effective_end = item.end_age if item.end_age is not None else planning_horizon_age
            if age < item.start_age or age > effective_end:
                continue

            if item.owner == deceased:
                if item.income_type == IncomeType.PENSION:
                    total += apply_bps(item.monthly_amount_cents, item.pension_survivor_pct_bps or 0)
                continue

            total += item.monthly_amount_cents

        primary_ss = _social_security_for(items, Owner.PRIMARY, age, ss_primary_claim_age)
        spouse_ss = _social_security_for(items, Owner.SPOUSE, age, ss_spouse_claim_age)
        total += max(primary_ss, spouse_ss)

        income_by_age[age] = total

    return income_by_age


def calculate_bridge_period(
    items: Iterable[IncomeItem],
    retirement_age: int,
    ss_primary_claim_age: int,
    ss_spouse_claim_age: int,
    funding_source: Optional[BridgeFundingSource] = None,
) -> BridgePeriodResult:
    """
    Cost of the income gap while Social Security is deferred past retirement.

    A bridge exists when either claim age is later than the retirement age.
    The monthly gap is the claim-age benefit of every Social Security item
    whose owner claims after retiring; it lasts until the later claim age.
    """
    latest_claim_age = max(ss_primary_claim_age, ss_spouse_claim_age)

    if latest_claim_age <= retirement_age:
        return BridgePeriodResult(
            has_bridge_period=False,
            bridge_start_age=retirement_age,
            bridge_end_age=retirement_age,
        )

    monthly_gap = 0
    for item in items:
        if not item.is_social_security:
            continue
        claim_age = claim_age_for(item.owner, ss_primary_claim_age, ss_spouse_claim_age)
        if claim_age > retirement_age:
            monthly_gap += get_ss_monthly_amount(item, claim_age)

    bridge_months = (latest_claim_age - retirement_age) * MONTHS_PER_YEAR

    return BridgePeriodResult(
        has_bridge_period=True,
        bridge_start_age=retirement_age,
        bridge_end_age=latest_claim_age,
        monthly_gap_cents=monthly_gap,
        total_bridge_cost_cents=monthly_gap * bridge_months,
        funding_source=funding_source or BridgeFundingSource.BUCKET2,
    )
