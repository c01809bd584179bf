"""Result models produced by the calculation engine.

Results are built fresh on every calculation and are read-only for the
dashboard and document generator that consume them.
"""

from typing import Optional

from pydantic import BaseModel, Field, computed_field

from .inputs import AccountType, BridgeFundingSource


# =============================================================================
# ACCUMULATION PHASE
# =============================================================================

class AccountProjection(BaseModel):
    id: Optional[str] = None
    label: str
    account_type: AccountType
    current_balance_cents: int
    projected_balance_cents: int


class AccumulationResult(BaseModel):
    """Nest egg and home value projected forward to the retirement date."""
    months_to_retirement: int
    nest_egg_projections: list[AccountProjection] = Field(default_factory=list)
    total_current_nest_egg_cents: int = 0
    total_projected_nest_egg_cents: int = 0
    projected_home_value_cents: int = 0


# =============================================================================
# HECM
# =============================================================================

class LocProjection(BaseModel):
    """No-draw line-of-credit balance at a reference age."""
    age: int
    balance_cents: int


class HecmResult(BaseModel):
    """Reverse mortgage proceeds and payout figures.

    ``available_proceeds_cents`` is negative when the mortgage payoff exceeds
    the principal limit; the difference is cash the borrower must bring to
    closing.
    """
    projected_home_value_cents: int
    max_claim_amount_cents: int
    principal_limit_cents: int
    mortgage_payoff_cents: int
    available_proceeds_cents: int
    monthly_freed_cents: int
    lump_sum_available_cents: int
    loc_start_balance_cents: int
    loc_growth_rate_bps: int
    loc_projections: list[LocProjection] = Field(default_factory=list)
    tenure_monthly_cents: int = 0
    retirement_age: int

    @computed_field
    @property
    def cash_to_close_cents(self) -> int:
        """Cash the borrower must supply at closing (0 when proceeds cover payoff)."""
        return max(0, -self.available_proceeds_cents)


# =============================================================================
# INCOME
# =============================================================================

class BridgePeriodResult(BaseModel):
    """Income gap while Social Security is deferred past retirement."""
    has_bridge_period: bool
    bridge_start_age: int
    bridge_end_age: int
    monthly_gap_cents: int = 0
    total_bridge_cost_cents: int = 0
    funding_source: Optional[BridgeFundingSource] = None

    @computed_field
    @property
    def duration_months(self) -> int:
        return (self.bridge_end_age - self.bridge_start_age) * 12


# =============================================================================
# RETIREMENT PHASE
# =============================================================================

class YearlySnapshot(BaseModel):
    """End-of-year state for one age of the longevity projection."""
    age: int
    bucket1_income_cents: int
    bucket2_balance_cents: int
    bucket3_balance_cents: int
    total_income_cents: int
    target_income_cents: int


class DepletionAges(BaseModel):
    bucket2_depletion_age: Optional[int] = None
    bucket3_depletion_age: Optional[int] = None


# =============================================================================
# FULL CALCULATION
# =============================================================================

class DashboardSummary(BaseModel):
    """Monthly cash-flow figures shown on the advisor dashboard."""
    mortgage_freed_cents: int
    total_monthly_income_cents: int
    shortfall_cents: int
    surplus_cents: int
    bucket1_monthly_cents: int
    bucket2_monthly_cents: int
    bucket3_monthly_cents: int
    gross_target_cents: int
    adjusted_target_cents: int
    allocated_deposits_cents: int = 0
    unallocated_surplus_cents: int = 0
    deposit_exceeds_surplus: bool = False
    show_mortgage_banner: bool = False


class AuditEntry(BaseModel):
    """Audit log entry for calculation transparency."""
    step: str
    input_value: str
    output_value: str
    source: str
    notes: Optional[str] = None


class FullCalculationResult(BaseModel):
    """Complete result of one calculation run."""
    accumulation_phase: AccumulationResult
    hecm: Optional[HecmResult] = None
    bridge_period: BridgePeriodResult
    dashboard: DashboardSummary
    cash_to_close_cents: int = 0
    longevity_projection: list[YearlySnapshot] = Field(default_factory=list)
    depletion_ages: DepletionAges = Field(default_factory=DepletionAges)
    warnings: list[str] = Field(default_factory=list)
    audit_log: list[AuditEntry] = Field(default_factory=list)
