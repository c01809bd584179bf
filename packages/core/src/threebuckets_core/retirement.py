"""Retirement phase calculations.

Models Bucket 2 and Bucket 3 depletion year by year from the retirement age
to the planning horizon.
"""

from typing import Optional

import structlog
from pydantic import BaseModel, Field

from .models import DepletionAges, PayoutType, YearlySnapshot
from .money import MONTHS_PER_YEAR, compound

logger = structlog.get_logger()


class RetirementProjectionInput(BaseModel):
    """Inputs to the longevity projection, already resolved by the orchestrator."""

    model_config = {"frozen": True}

    retirement_age: int
    planning_horizon_age: int

    # Bucket 1: age -> monthly income cents
    bucket1_monthly_by_age: dict[int, int] = Field(default_factory=dict)

    # Bucket 2
    bucket2_start_balance_cents: int = 0
    bucket2_monthly_draw_cents: int = 0
    bucket2_annual_rate_bps: int = 0

    # Bucket 3
    bucket3_type: PayoutType = PayoutType.NONE
    bucket3_start_balance_cents: int = 0
    bucket3_monthly_draw_cents: int = 0
    bucket3_loc_growth_rate_bps: int = 0

    target_monthly_income_cents: int = 0
    inflation_rate_bps: int = 0

    survivor_event_age: Optional[int] = None
    survivor_bucket1_monthly_by_age: Optional[dict[int, int]] = None


def _grow_then_draw(balance_cents: int, annual_rate_bps: int, monthly_draw_cents: int) -> int:
    """One month: compound at the monthly rate, then draw, never below zero."""
    if balance_cents <= 0:
        return balance_cents
    grown = compound(balance_cents, annual_rate_bps, periods_per_year=MONTHS_PER_YEAR)
    return max(0, grown - monthly_draw_cents)


def _bucket1_income(projection: RetirementProjectionInput, age: int) -> int:
    uses_survivor = (
        projection.survivor_event_age is not None
        and age >= projection.survivor_event_age
        and projection.survivor_bucket1_monthly_by_age is not None
    )
    income_map = (
        projection.survivor_bucket1_monthly_by_age
        if uses_survivor
        else projection.bucket1_monthly_by_age
    )
    return income_map.get(age, 0)


def project_retirement_phase(projection: RetirementProjectionInput) -> list[YearlySnapshot]:
    """
    Run the longevity projection.

    Each year steps 12 months of grow-then-draw for Bucket 2 and, for LOC
    payouts, Bucket 3. The target income inflates once per year starting
    with the second year.

    Total income in each snapshot uses the configured Bucket 2 and Bucket 3
    draws even after a bucket has depleted.

    Returns:
        One snapshot per age from retirement to the horizon inclusive; empty
        when the horizon precedes retirement.
    """
    snapshots: list[YearlySnapshot] = []
    is_loc = projection.bucket3_type == PayoutType.LOC

    bucket2_balance = projection.bucket2_start_balance_cents
    bucket3_balance = projection.bucket3_start_balance_cents if is_loc else 0
    target_monthly = projection.target_monthly_income_cents

    for year in range(projection.planning_horizon_age - projection.retirement_age + 1):
        age = projection.retirement_age + year

        if year > 0:
            target_monthly = compound(target_monthly, projection.inflation_rate_bps)

        bucket1_income = _bucket1_income(projection, age)

        for _ in range(MONTHS_PER_YEAR):
            bucket2_balance = _grow_then_draw(
                bucket2_balance,
                projection.bucket2_annual_rate_bps,
                projection.bucket2_monthly_draw_cents,
            )
            if is_loc:
                bucket3_balance = _grow_then_draw(
                    bucket3_balance,
                    projection.bucket3_loc_growth_rate_bps,
                    projection.bucket3_monthly_draw_cents,
                )

        snapshots.append(
            YearlySnapshot(
                age=age,
                bucket1_income_cents=bucket1_income,
                bucket2_balance_cents=bucket2_balance,
                bucket3_balance_cents=bucket3_balance,
                total_income_cents=(
                    bucket1_income
                    + projection.bucket2_monthly_draw_cents
                    + projection.bucket3_monthly_draw_cents
                ),
                target_income_cents=target_monthly,
            )
        )

    logger.debug(
        "retirement_phase_projected",
        years=len(snapshots),
        final_bucket2_balance=bucket2_balance,
        final_bucket3_balance=bucket3_balance,
    )
    return snapshots


def find_depletion_ages(snapshots: list[YearlySnapshot]) -> DepletionAges:
    """First age at which each bucket's balance is zero, or None if it lasts the horizon."""
    bucket2_depletion_age: Optional[int] = None
    bucket3_depletion_age: Optional[int] = None

    for snapshot in snapshots:
        if bucket2_depletion_age is None and snapshot.bucket2_balance_cents <= 0:
            bucket2_depletion_age = snapshot.age
        if bucket3_depletion_age is None and snapshot.bucket3_balance_cents <= 0:
            bucket3_depletion_age = snapshot.age

    return DepletionAges(
        bucket2_depletion_age=bucket2_depletion_age,
        bucket3_depletion_age=bucket3_depletion_age,
    )
