"""Tests for Bucket 1 income schedules and the Social Security bridge."""

import pytest

from threebuckets_core import (
    IncomeItem,
    IncomeType,
    Owner,
    SurvivingSpouse,
    SurvivorConfig,
    build_income_by_age,
    build_survivor_income_by_age,
    calculate_bridge_period,
    get_ss_monthly_amount,
)
from threebuckets_core.models import BridgeFundingSource


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def primary_ss() -> IncomeItem:
    return IncomeItem(
        owner=Owner.PRIMARY,
        income_type=IncomeType.SOCIAL_SECURITY,
        label="Robert's Social Security",
        monthly_amount_cents=210_000,
        start_age=62,
        ss_age62_cents=147_000,
        ss_age67_cents=210_000,
        ss_age70_cents=260_400,
    )


@pytest.fixture
def spouse_ss() -> IncomeItem:
    return IncomeItem(
        owner=Owner.SPOUSE,
        income_type=IncomeType.SOCIAL_SECURITY,
        label="Mary's Social Security",
        monthly_amount_cents=145_000,
        start_age=62,
        ss_age62_cents=101_500,
        ss_age67_cents=145_000,
        ss_age70_cents=179_800,
    )


@pytest.fixture
def part_time_wage() -> IncomeItem:
    return IncomeItem(
        owner=Owner.PRIMARY,
        income_type=IncomeType.WAGE,
        label="Part-time work",
        monthly_amount_cents=200_000,
        start_age=62,
        end_age=67,
    )


class TestGetSsMonthlyAmount:
    """Claim-age tier selection."""

    @pytest.mark.parametrize(
        "claim_age,expected",
        [(62, 147_000), (67, 210_000), (70, 260_400), (65, 210_000), (68, 210_000)],
    )
    def test_tier_for_claim_age(self, primary_ss: IncomeItem, claim_age, expected):
        """Ages other than 62, 67 and 70 use the full retirement age tier."""
        assert get_ss_monthly_amount(primary_ss, claim_age) == expected

    def test_missing_tier_falls_back_to_flat_amount(self):
        item = IncomeItem(
            owner=Owner.PRIMARY,
            income_type=IncomeType.SOCIAL_SECURITY,
            monthly_amount_cents=190_000,
            start_age=62,
            ss_age67_cents=210_000,
        )
        assert get_ss_monthly_amount(item, 62) == 190_000
        assert get_ss_monthly_amount(item, 70) == 190_000
        assert get_ss_monthly_amount(item, 67) == 210_000

    def test_non_social_security_uses_flat_amount(self, part_time_wage: IncomeItem):
        assert get_ss_monthly_amount(part_time_wage, 62) == 200_000


class TestBuildIncomeByAge:
    """Test suite for build_income_by_age."""

    def test_claim_at_62(self, primary_ss: IncomeItem):
        """Claiming at 62 pays the 62 tier from 62 on and nothing before."""
        income = build_income_by_age([primary_ss], 60, 75, 62, 67)

        assert income[60] == 0
        assert income[61] == 0
        assert all(income[age] == 147_000 for age in range(62, 76))

    def test_deferred_claim(self, primary_ss: IncomeItem):
        income = build_income_by_age([primary_ss], 62, 72, 70, 67)

        assert income[69] == 0
        assert income[70] == 260_400

    def test_spouse_uses_spouse_claim_age(self, primary_ss: IncomeItem, spouse_ss: IncomeItem):
        income = build_income_by_age([primary_ss, spouse_ss], 62, 72, 67, 62)

        assert income[62] == 101_500
        assert income[67] == 101_500 + 210_000

    def test_item_window_is_inclusive(self, part_time_wage: IncomeItem):
        income = build_income_by_age([part_time_wage], 62, 90, 67, 67)

        assert income[62] == 200_000
        assert income[67] == 200_000
        assert income[68] == 0

    def test_income_started_before_retirement_counts_from_retirement(self):
        pension = IncomeItem(
            owner=Owner.PRIMARY,
            income_type=IncomeType.PENSION,
            monthly_amount_cents=80_000,
            start_age=55,
        )
        income = build_income_by_age([pension], 62, 64, 67, 67)

        assert income == {62: 80_000, 63: 80_000, 64: 80_000}

    def test_combined_household(self, primary_ss, spouse_ss, part_time_wage):
        income = build_income_by_age([primary_ss, spouse_ss, part_time_wage], 62, 90, 67, 67)

        assert income[62] == 200_000
        assert income[67] == 200_000 + 210_000 + 145_000
        assert income[68] == 355_000
        assert len(income) == 29

    def test_horizon_before_retirement_is_empty(self, primary_ss: IncomeItem):
        assert build_income_by_age([primary_ss], 70, 65, 67, 67) == {}

    def test_items_not_mutated(self, primary_ss: IncomeItem, part_time_wage: IncomeItem):
        items = [primary_ss, part_time_wage]
        before = [item.model_dump() for item in items]

        build_income_by_age(items, 62, 90, 70, 67)

        assert [item.model_dump() for item in items] == before


class TestBuildSurvivorIncomeByAge:
    """Test suite for build_survivor_income_by_age."""

    def test_survivor_receives_higher_benefit(self, primary_ss: IncomeItem, spouse_ss: IncomeItem):
        """Social Security pays the higher of the two benefits, not the sum."""
        survivor = SurvivorConfig(survivor_event_age=80, surviving_spouse=SurvivingSpouse.SPOUSE)
        normal = build_income_by_age([primary_ss, spouse_ss], 62, 90, 67, 67)
        survivor_income = build_survivor_income_by_age(
            [primary_ss, spouse_ss], 62, 90, 67, 67, survivor
        )

        assert normal[80] == 355_000
        assert min(survivor_income) == 80
        assert all(survivor_income[age] == 210_000 for age in range(80, 91))

    def test_unclaimed_spouse_counts_as_zero(self, primary_ss: IncomeItem, spouse_ss: IncomeItem):
        survivor = SurvivorConfig(survivor_event_age=65, surviving_spouse=SurvivingSpouse.PRIMARY)
        income = build_survivor_income_by_age([primary_ss, spouse_ss], 62, 72, 62, 70, survivor)

        assert income[65] == 147_000
        assert income[69] == 147_000
        assert income[70] == 179_800

    def test_pension_survivor_percentage(self):
        pension = IncomeItem(
            owner=Owner.PRIMARY,
            income_type=IncomeType.PENSION,
            monthly_amount_cents=300_001,
            start_age=60,
            pension_survivor_pct_bps=5000,
        )
        survivor = SurvivorConfig(survivor_event_age=75, surviving_spouse=SurvivingSpouse.SPOUSE)
        income = build_survivor_income_by_age([pension], 62, 80, 67, 67, survivor)

        assert income[75] == 150_000

    def test_pension_without_survivor_benefit_stops(self):
        pension = IncomeItem(
            owner=Owner.SPOUSE,
            income_type=IncomeType.PENSION,
            monthly_amount_cents=300_000,
            start_age=60,
        )
        survivor = SurvivorConfig(survivor_event_age=75, surviving_spouse=SurvivingSpouse.PRIMARY)
        income = build_survivor_income_by_age([pension], 62, 80, 67, 67, survivor)

        assert income[75] == 0

    def test_deceased_income_stops_survivor_and_joint_continue(self):
        items = [
            IncomeItem(owner=Owner.PRIMARY, income_type=IncomeType.WAGE,
                       monthly_amount_cents=100_000, start_age=60),
            IncomeItem(owner=Owner.SPOUSE, income_type=IncomeType.BUSINESS,
                       monthly_amount_cents=40_000, start_age=60),
            IncomeItem(owner=Owner.JOINT, income_type=IncomeType.OTHER,
                       monthly_amount_cents=25_000, start_age=60),
            IncomeItem(owner=Owner.SPOUSE, income_type=IncomeType.PENSION,
                       monthly_amount_cents=90_000, start_age=60),
        ]
        survivor = SurvivorConfig(survivor_event_age=70, surviving_spouse=SurvivingSpouse.SPOUSE)
        income = build_survivor_income_by_age(items, 62, 75, 67, 67, survivor)

        assert income[70] == 40_000 + 25_000 + 90_000

    def test_starts_no_earlier_than_retirement(self, primary_ss: IncomeItem):
        survivor = SurvivorConfig(survivor_event_age=58, surviving_spouse=SurvivingSpouse.PRIMARY)
        income = build_survivor_income_by_age([primary_ss], 62, 64, 62, 67, survivor)

        assert sorted(income) == [62, 63, 64]


class TestCalculateBridgePeriod:
    """Test suite for calculate_bridge_period."""

    def test_bridge_until_claim_age(self, primary_ss: IncomeItem):
        """Retiring at 62 and claiming at 67 leaves five years to bridge."""
        bridge = calculate_bridge_period([primary_ss], 62, 67, 67)

        assert bridge.has_bridge_period is True
        assert bridge.bridge_start_age == 62
        assert bridge.bridge_end_age == 67
        assert bridge.monthly_gap_cents == 210_000
        assert bridge.duration_months == 60
        assert bridge.total_bridge_cost_cents == 210_000 * 60
        assert bridge.funding_source == BridgeFundingSource.BUCKET2

    def test_no_bridge_when_claiming_at_retirement(self, primary_ss, spouse_ss):
        bridge = calculate_bridge_period([primary_ss, spouse_ss], 67, 67, 62)

        assert bridge.has_bridge_period is False
        assert bridge.bridge_start_age == 67
        assert bridge.bridge_end_age == 67
        assert bridge.monthly_gap_cents == 0
        assert bridge.total_bridge_cost_cents == 0
        assert bridge.funding_source is None

    def test_only_deferred_benefits_count(self, primary_ss, spouse_ss):
        bridge = calculate_bridge_period([primary_ss, spouse_ss], 64, 70, 62)

        assert bridge.monthly_gap_cents == 260_400
        assert bridge.bridge_end_age == 70
        assert bridge.total_bridge_cost_cents == 260_400 * 72

    def test_both_deferred(self, primary_ss, spouse_ss, part_time_wage):
        bridge = calculate_bridge_period(
            [primary_ss, spouse_ss, part_time_wage], 62, 67, 70, BridgeFundingSource.BUCKET3
        )

        assert bridge.monthly_gap_cents == 210_000 + 179_800
        assert bridge.bridge_end_age == 70
        assert bridge.total_bridge_cost_cents == (210_000 + 179_800) * 96
        assert bridge.funding_source == BridgeFundingSource.BUCKET3
