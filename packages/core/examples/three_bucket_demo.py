#!/usr/bin/env python3
"""
Three Buckets Demonstration

This script runs the full retirement cash-flow calculation for a sample
household and prints the advisor dashboard figures:
1. Build the household (income, nest egg, home equity, scenario)
2. Run the three-bucket calculation
3. Print the dashboard, HECM figures and longevity table

Run: python examples/three_bucket_demo.py
"""

from threebuckets_core import (
    AccountType,
    ClientProfile,
    FullCalculationInput,
    HomeEquityProfile,
    IncomeItem,
    IncomeType,
    NestEggAccount,
    Owner,
    PayoutType,
    Scenario,
    configure_logging,
    load_settings,
    run_full_calculation,
)
from threebuckets_core.models import MaritalStatus
from threebuckets_core.money import format_bps, format_cents


def create_sample_household() -> FullCalculationInput:
    """Create a sample married couple retiring at 62."""

    client = ClientProfile(
        primary_age=58,
        spouse_age=56,
        retirement_age=62,
        marital_status=MaritalStatus.MARRIED,
    )

    # Bucket 1: Social Security for both spouses plus part-time work
    income_items = [
        IncomeItem(
            owner=Owner.PRIMARY,
            income_type=IncomeType.SOCIAL_SECURITY,
            label="Robert's Social Security",
            monthly_amount_cents=210_000,
            start_age=62,
            ss_age62_cents=147_000,
            ss_age67_cents=210_000,
            ss_age70_cents=260_400,
        ),
        IncomeItem(
            owner=Owner.SPOUSE,
            income_type=IncomeType.SOCIAL_SECURITY,
            label="Mary's Social Security",
            monthly_amount_cents=145_000,
            start_age=62,
            ss_age62_cents=101_500,
            ss_age67_cents=145_000,
            ss_age70_cents=179_800,
        ),
        IncomeItem(
            owner=Owner.PRIMARY,
            income_type=IncomeType.WAGE,
            label="Part-time consulting",
            monthly_amount_cents=200_000,
            start_age=62,
            end_age=67,
        ),
    ]

    # Bucket 2: Nest egg
    accounts = [
        NestEggAccount(
            label="401(k)",
            account_type=AccountType.QUALIFIED,
            current_balance_cents=38_000_000,
            monthly_contribution_cents=150_000,
            rate_of_return_bps=700,
            monthly_draw_cents=200_000,
        ),
        NestEggAccount(
            label="Brokerage",
            account_type=AccountType.NON_QUALIFIED,
            current_balance_cents=8_500_000,
            monthly_contribution_cents=50_000,
            rate_of_return_bps=600,
        ),
    ]

    # Bucket 3: HECM lump sum that pays off the mortgage
    home_equity = HomeEquityProfile(
        current_home_value_cents=45_000_000,
        existing_mortgage_balance_cents=18_000_000,
        existing_mortgage_payment_cents=185_000,
        home_appreciation_rate_bps=400,
        hecm_payout_type=PayoutType.LUMP_SUM,
        hecm_payoff_mortgage=True,
        hecm_principal_limit_cents=22_500_000,
    )

    scenario = Scenario(
        name="Retire at 62",
        target_monthly_income_cents=700_000,
        bucket1_draw_cents=355_000,
        bucket2_draw_cents=200_000,
        bucket3_draw_cents=0,
        inflation_rate_bps=300,
        planning_horizon_age=90,
    )

    return FullCalculationInput(
        client=client,
        scenario=scenario,
        income_items=income_items,
        nest_egg_accounts=accounts,
        home_equity=home_equity,
    )


def main():
    """Run the three-bucket demonstration."""
    configure_logging(load_settings())

    print("=" * 70)
    print("THREE BUCKETS CORE - Retirement Cash-Flow Demo")
    print("=" * 70)
    print()

    # Step 1: Create sample data
    print("Step 1: Creating sample household...")
    calc_input = create_sample_household()
    print(f"  - Ages: {calc_input.client.primary_age} / {calc_input.client.spouse_age}")
    print(f"  - Retirement Age: {calc_input.client.retirement_age}")
    print(f"  - Target Income: {format_cents(calc_input.scenario.target_monthly_income_cents)}/mo")
    print()

    # Step 2: Run calculation
    print("Step 2: Running three-bucket calculation...")
    result = run_full_calculation(calc_input)
    accumulation = result.accumulation_phase
    print(f"  - Nest Egg Today: {format_cents(accumulation.total_current_nest_egg_cents)}")
    print(f"  - Nest Egg at Retirement: {format_cents(accumulation.total_projected_nest_egg_cents)}")
    print(f"  - Home Value at Retirement: {format_cents(accumulation.projected_home_value_cents)}")
    print()

    hecm = result.hecm
    if hecm is not None:
        print("HECM:")
        print(f"  - Principal Limit: {format_cents(hecm.principal_limit_cents)}")
        print(f"  - Mortgage Payoff: {format_cents(hecm.mortgage_payoff_cents)}")
        print(f"  - Available Proceeds: {format_cents(hecm.available_proceeds_cents)}")
        print(f"  - Cash to Close: {format_cents(hecm.cash_to_close_cents)}")
        print(f"  - LOC Growth Rate: {format_bps(hecm.loc_growth_rate_bps)}")
        for projection in hecm.loc_projections:
            print(f"    LOC at {projection.age}: {format_cents(projection.balance_cents)}")
        print()

    dashboard = result.dashboard
    print("Dashboard (monthly):")
    print(f"  - Bucket 1: {format_cents(dashboard.bucket1_monthly_cents)}")
    print(f"  - Bucket 2: {format_cents(dashboard.bucket2_monthly_cents)}")
    print(f"  - Bucket 3: {format_cents(dashboard.bucket3_monthly_cents)}")
    print(f"  - Total: {format_cents(dashboard.total_monthly_income_cents)}")
    print(f"  - Adjusted Target: {format_cents(dashboard.adjusted_target_cents)}")
    print(f"  - Shortfall: {format_cents(dashboard.shortfall_cents)}")
    print(f"  - Surplus: {format_cents(dashboard.surplus_cents)}")
    if dashboard.show_mortgage_banner:
        print(f"  * Mortgage paid off: {format_cents(dashboard.mortgage_freed_cents)}/mo freed")
    print()

    bridge = result.bridge_period
    if bridge.has_bridge_period:
        print(
            f"Social Security bridge: ages {bridge.bridge_start_age}-{bridge.bridge_end_age}, "
            f"{format_cents(bridge.monthly_gap_cents)}/mo, "
            f"{format_cents(bridge.total_bridge_cost_cents)} total"
        )
        print()

    # Step 3: Longevity table
    print("Step 3: Longevity projection")
    print(f"  {'Age':>4} {'Bucket 1':>12} {'Bucket 2':>16} {'Bucket 3':>14} {'Target':>12}")
    for snapshot in result.longevity_projection:
        print(
            f"  {snapshot.age:>4} "
            f"{format_cents(snapshot.bucket1_income_cents):>12} "
            f"{format_cents(snapshot.bucket2_balance_cents):>16} "
            f"{format_cents(snapshot.bucket3_balance_cents):>14} "
            f"{format_cents(snapshot.target_income_cents):>12}"
        )
    print()

    if result.warnings:
        print("Warnings:")
        for warning in result.warnings:
            print(f"  - {warning}")
        print()

    print("=" * 70)
    print("Demo complete!")
    print("=" * 70)


if __name__ == "__main__":
    main()
