"""Shared fixtures: a married couple retiring at 62 with a lump-sum HECM payoff."""

import pytest

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
)
from threebuckets_core.models import MaritalStatus


@pytest.fixture
def seed_client() -> ClientProfile:
    return ClientProfile(
        primary_age=58,
        spouse_age=56,
        retirement_age=62,
        marital_status=MaritalStatus.MARRIED,
    )


@pytest.fixture
def seed_income_items() -> list[IncomeItem]:
    return [
        IncomeItem(
            id="inc-1",
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
            id="inc-2",
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
            id="inc-3",
            owner=Owner.PRIMARY,
            income_type=IncomeType.WAGE,
            label="Part-time consulting",
            monthly_amount_cents=200_000,
            start_age=62,
            end_age=67,
        ),
    ]


@pytest.fixture
def seed_accounts() -> list[NestEggAccount]:
    return [
        NestEggAccount(
            id="acct-1",
            label="401(k)",
            account_type=AccountType.QUALIFIED,
            current_balance_cents=38_000_000,
            monthly_contribution_cents=150_000,
            rate_of_return_bps=700,
            monthly_draw_cents=200_000,
        ),
        NestEggAccount(
            id="acct-2",
            label="Brokerage",
            account_type=AccountType.NON_QUALIFIED,
            current_balance_cents=8_500_000,
            monthly_contribution_cents=50_000,
            rate_of_return_bps=600,
        ),
    ]


@pytest.fixture
def seed_home_equity() -> HomeEquityProfile:
    return HomeEquityProfile(
        current_home_value_cents=45_000_000,
        existing_mortgage_balance_cents=18_000_000,
        existing_mortgage_payment_cents=185_000,
        home_appreciation_rate_bps=400,
        hecm_payout_type=PayoutType.LUMP_SUM,
        hecm_payoff_mortgage=True,
        hecm_principal_limit_cents=22_500_000,
    )


@pytest.fixture
def seed_scenario() -> Scenario:
    return Scenario(
        id="scn-1",
        name="Retire at 62",
        target_monthly_income_cents=700_000,
        bucket1_draw_cents=355_000,
        bucket2_draw_cents=200_000,
        bucket3_draw_cents=0,
        inflation_rate_bps=300,
        planning_horizon_age=90,
    )


@pytest.fixture
def seed_input(
    seed_client,
    seed_scenario,
    seed_income_items,
    seed_accounts,
    seed_home_equity,
) -> FullCalculationInput:
    return FullCalculationInput(
        client=seed_client,
        scenario=seed_scenario,
        income_items=seed_income_items,
        nest_egg_accounts=seed_accounts,
        home_equity=seed_home_equity,
    )


@pytest.fixture
def seed_record() -> dict:
    """The seed household as the persistence layer stores it."""
    return {
        "id": "client-1",
        "age": 58,
        "spouse_age": 56,
        "target_retirement_age": 62,
        "marital_status": "married",
        "income_items": [
            {
                "id": "inc-1",
                "owner": "primary",
                "type": "social_security",
                "label": "Robert's Social Security",
                "monthly_amount_cents": 210_000,
                "start_age": 62,
                "ss_age62_cents": 147_000,
                "ss_age67_cents": 210_000,
                "ss_age70_cents": 260_400,
            },
            {
                "id": "inc-2",
                "owner": "spouse",
                "type": "social_security",
                "label": "Mary's Social Security",
                "monthly_amount_cents": 145_000,
                "start_age": 62,
                "ss_age62_cents": 101_500,
                "ss_age67_cents": 145_000,
                "ss_age70_cents": 179_800,
            },
            {
                "id": "inc-3",
                "owner": "primary",
                "type": "wage",
                "label": "Part-time consulting",
                "monthly_amount_cents": 200_000,
                "start_age": 62,
                "end_age": 67,
            },
        ],
        "nest_egg_accounts": [
            {
                "id": "acct-1",
                "label": "401(k)",
                "account_type": "qualified",
                "current_balance_cents": 38_000_000,
                "monthly_contribution_cents": 150_000,
                "rate_of_return_bps": 700,
                "monthly_draw_cents": 200_000,
            },
            {
                "id": "acct-2",
                "label": "Brokerage",
                "account_type": "non_qualified",
                "current_balance_cents": 8_500_000,
                "monthly_contribution_cents": 50_000,
                "rate_of_return_bps": 600,
            },
        ],
        "home_equity": {
            "current_home_value_cents": 45_000_000,
            "existing_mortgage_balance_cents": 18_000_000,
            "existing_mortgage_payment_cents": 185_000,
            "home_appreciation_rate_bps": 400,
            "hecm_payout_type": "lump_sum",
            "hecm_payoff_mortgage": True,
            "hecm_principal_limit_cents": 22_500_000,
            "hecm_loc_growth_rate_bps": None,
        },
        "scenarios": [
            {
                "id": "scn-1",
                "name": "Retire at 62",
                "is_active": False,
                "target_monthly_income_cents": 700_000,
                "bucket1_draw_cents": 355_000,
                "bucket2_draw_cents": 200_000,
                "bucket3_draw_cents": 0,
                "inflation_rate_bps": 300,
                "planning_horizon_age": 90,
            },
            {
                "id": "scn-2",
                "name": "Delay Social Security",
                "is_active": True,
                "target_monthly_income_cents": 700_000,
                "bucket1_draw_cents": 200_000,
                "bucket2_draw_cents": 300_000,
                "ss_primary_claim_age": 70,
                "ss_spouse_claim_age": 70,
            },
        ],
    }
