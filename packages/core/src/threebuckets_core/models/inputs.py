"""Input models for retirement cash-flow calculations.

These models describe one household at calculation time: the client
profile, recurring income (Bucket 1), nest egg accounts (Bucket 2), home
equity (Bucket 3), and the scenario being modeled.

All money fields are integer cents and all rate fields are integer basis
points. Models are frozen so the engine cannot mutate caller values.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator


# =============================================================================
# ENUMERATIONS
# =============================================================================

EARLIEST_SS_CLAIM_AGE = 62
FULL_RETIREMENT_AGE = 67
LATEST_SS_CLAIM_AGE = 70


class Owner(str, Enum):
    """Whose income an item is."""
    PRIMARY = "primary"
    SPOUSE = "spouse"
    JOINT = "joint"


class SurvivingSpouse(str, Enum):
    """Which spouse outlives the other in a survivor scenario."""
    PRIMARY = "primary"
    SPOUSE = "spouse"

    @property
    def deceased_owner(self) -> Owner:
        return Owner.SPOUSE if self is SurvivingSpouse.PRIMARY else Owner.PRIMARY


class IncomeType(str, Enum):
    """Kinds of recurring income."""
    SOCIAL_SECURITY = "social_security"
    WAGE = "wage"
    COMMISSION = "commission"
    BUSINESS = "business"
    PENSION = "pension"
    OTHER = "other"


class AccountType(str, Enum):
    """Tax characterization of a nest egg account (informational)."""
    QUALIFIED = "qualified"
    NON_QUALIFIED = "non_qualified"


class PayoutType(str, Enum):
    """How HECM proceeds are taken."""
    NONE = "none"
    LUMP_SUM = "lump_sum"
    LOC = "loc"
    TENURE = "tenure"


class BridgeFundingSource(str, Enum):
    """Bucket chosen to cover income during a Social Security deferral."""
    BUCKET1 = "bucket1"
    BUCKET2 = "bucket2"
    BUCKET3 = "bucket3"


class MaritalStatus(str, Enum):
    SINGLE = "single"
    MARRIED = "married"
    PARTNERED = "partnered"


# =============================================================================
# BUCKET 1 - INCOME
# =============================================================================

class IncomeItem(BaseModel):
    """A recurring income stream.

    For Social Security items the effective monthly amount depends on the
    claim age chosen in the scenario; ``monthly_amount_cents`` is only the
    fallback when the tier amount for that age is missing.
    """

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {
                    "owner": "primary",
                    "income_type": "social_security",
                    "label": "Robert's Social Security",
                    "monthly_amount_cents": 210000,
                    "start_age": 67,
                    "ss_age62_cents": 147000,
                    "ss_age67_cents": 210000,
                    "ss_age70_cents": 260400,
                }
            ]
        },
    }

    id: Optional[str] = None
    owner: Owner
    income_type: IncomeType
    label: str = ""
    monthly_amount_cents: int = Field(ge=0)
    start_age: int = Field(ge=0, le=120)
    end_age: Optional[int] = Field(
        default=None,
        ge=0,
        le=120,
        description="Last age the income is received; None continues to the horizon",
    )
    ss_age62_cents: Optional[int] = Field(default=None, ge=0)
    ss_age67_cents: Optional[int] = Field(default=None, ge=0)
    ss_age70_cents: Optional[int] = Field(default=None, ge=0)
    ss_claim_age: Optional[int] = Field(
        default=None,
        description="Claim age recorded on the item (not read); the scenario's claim age governs",
    )
    pension_survivor_pct_bps: Optional[int] = Field(
        default=None,
        ge=0,
        le=10_000,
        description="Share of the pension paid to the survivor, in basis points",
    )

    @property
    def is_social_security(self) -> bool:
        return self.income_type == IncomeType.SOCIAL_SECURITY

    @model_validator(mode="after")
    def check_ages(self) -> "IncomeItem":
        if self.is_social_security and self.start_age < EARLIEST_SS_CLAIM_AGE:
            raise ValueError(
                f"Social Security cannot start before age {EARLIEST_SS_CLAIM_AGE}"
            )
        if self.end_age is not None and self.end_age < self.start_age:
            raise ValueError("end_age must not be before start_age")
        return self


# =============================================================================
# BUCKET 2 - NEST EGG
# =============================================================================

class NestEggAccount(BaseModel):
    """An investment account that grows until retirement and is drawn after."""

    model_config = {"frozen": True}

    id: Optional[str] = None
    label: str = ""
    account_type: AccountType = AccountType.QUALIFIED
    current_balance_cents: int = Field(ge=0)
    monthly_contribution_cents: int = Field(default=0, ge=0)
    rate_of_return_bps: int = Field(default=0, ge=-10_000, le=10_000)
    monthly_draw_cents: int = Field(
        default=0,
        ge=0,
        description="Per-account draw recorded on the account (not read); the scenario's Bucket 2 draw governs",
    )


# =============================================================================
# BUCKET 3 - HOME EQUITY
# =============================================================================

class HomeEquityProfile(BaseModel):
    """The home and the HECM the advisor is modeling against it.

    ``hecm_principal_limit_cents`` is the lender-supplied figure; the engine
    does not derive it.
    """

    model_config = {"frozen": True}

    current_home_value_cents: int = Field(ge=0)
    existing_mortgage_balance_cents: int = Field(default=0, ge=0)
    existing_mortgage_payment_cents: int = Field(default=0, ge=0)
    home_appreciation_rate_bps: int = Field(default=400, ge=-10_000, le=10_000)
    hecm_expected_rate_bps: int = Field(default=0, ge=0)
    hecm_payout_type: PayoutType = PayoutType.NONE
    hecm_tenure_monthly_cents: int = Field(default=0, ge=0)
    hecm_loc_growth_rate_bps: Optional[int] = Field(
        default=None,
        ge=0,
        le=10_000,
        description="None falls back to the global LOC growth rate",
    )
    hecm_payoff_mortgage: bool = False
    hecm_principal_limit_cents: int = Field(default=0, ge=0)
    hecm_additional_lump_sum_cents: int = Field(
        default=0,
        ge=0,
        description="Cash drawn now when lump-sum surplus is parked in the LOC",
    )


# =============================================================================
# CLIENT AND SCENARIO
# =============================================================================

class SurvivorConfig(BaseModel):
    """When one spouse dies and who survives."""

    model_config = {"frozen": True}

    survivor_event_age: int = Field(gt=0, le=120)
    surviving_spouse: SurvivingSpouse


class ClientProfile(BaseModel):
    model_config = {"frozen": True}

    primary_age: int = Field(ge=0, le=120)
    spouse_age: Optional[int] = Field(default=None, ge=0, le=120)
    retirement_age: int = Field(ge=0, le=120)
    marital_status: MaritalStatus = MaritalStatus.SINGLE
    survivor: Optional[SurvivorConfig] = None

    @model_validator(mode="after")
    def check_survivor_has_spouse(self) -> "ClientProfile":
        if self.survivor is not None and self.spouse_age is None:
            raise ValueError("A survivor event requires a spouse age")
        return self

    @property
    def youngest_age(self) -> int:
        if self.spouse_age is None:
            return self.primary_age
        return min(self.primary_age, self.spouse_age)


class Scenario(BaseModel):
    """One what-if configuration of draws, claim ages and assumptions."""

    model_config = {"frozen": True}

    id: Optional[str] = None
    name: str = ""
    target_monthly_income_cents: int = Field(ge=0)
    bucket1_draw_cents: int = Field(default=0, ge=0)
    bucket2_draw_cents: int = Field(default=0, ge=0)
    bucket3_draw_cents: int = Field(default=0, ge=0)
    bridge_funding_source: Optional[BridgeFundingSource] = None
    ss_primary_claim_age: int = Field(
        default=FULL_RETIREMENT_AGE, ge=EARLIEST_SS_CLAIM_AGE, le=LATEST_SS_CLAIM_AGE
    )
    ss_spouse_claim_age: int = Field(
        default=FULL_RETIREMENT_AGE, ge=EARLIEST_SS_CLAIM_AGE, le=LATEST_SS_CLAIM_AGE
    )
    inflation_rate_bps: int = Field(default=300, ge=0, le=5000)
    planning_horizon_age: int = Field(default=90, ge=0, le=120)
    survivor_mode: bool = False
    bucket2_deposit_cents: int = Field(default=0, ge=0)
    bucket3_repayment_cents: int = Field(default=0, ge=0)


class FullCalculationInput(BaseModel):
    """Everything one calculation needs, with global settings already resolved."""

    model_config = {"frozen": True}

    client: ClientProfile
    scenario: Scenario
    income_items: list[IncomeItem] = Field(default_factory=list)
    nest_egg_accounts: list[NestEggAccount] = Field(default_factory=list)
    home_equity: Optional[HomeEquityProfile] = None

    lending_limit_cents: int = Field(default=120_975_000, ge=0)
    global_loc_growth_rate_bps: int = Field(default=600, ge=0)
    default_bucket2_rate_bps: int = 600
