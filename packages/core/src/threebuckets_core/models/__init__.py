"""Data models for threebuckets-core.

- Household inputs: client profile, income items, nest egg accounts,
  home equity and scenario (inputs.py)
- Calculation results: accumulation, HECM, bridge period, longevity
  projection and the dashboard summary (results.py)
"""

from threebuckets_core.models.inputs import (
    # Enumerations
    Owner,
    SurvivingSpouse,
    IncomeType,
    AccountType,
    PayoutType,
    BridgeFundingSource,
    MaritalStatus,
    # Social Security claim ages
    EARLIEST_SS_CLAIM_AGE,
    FULL_RETIREMENT_AGE,
    LATEST_SS_CLAIM_AGE,
    # Inputs
    IncomeItem,
    NestEggAccount,
    HomeEquityProfile,
    SurvivorConfig,
    ClientProfile,
    Scenario,
    FullCalculationInput,
)

from threebuckets_core.models.results import (
    AccountProjection,
    AccumulationResult,
    LocProjection,
    HecmResult,
    BridgePeriodResult,
    YearlySnapshot,
    DepletionAges,
    DashboardSummary,
    AuditEntry,
    FullCalculationResult,
)

__all__ = [
    # Enumerations
    "Owner",
    "SurvivingSpouse",
    "IncomeType",
    "AccountType",
    "PayoutType",
    "BridgeFundingSource",
    "MaritalStatus",
    "EARLIEST_SS_CLAIM_AGE",
    "FULL_RETIREMENT_AGE",
    "LATEST_SS_CLAIM_AGE",
    # Inputs
    "IncomeItem",
    "NestEggAccount",
    "HomeEquityProfile",
    "SurvivorConfig",
    "ClientProfile",
    "Scenario",
    "FullCalculationInput",
    # Results
    "AccountProjection",
    "AccumulationResult",
    "LocProjection",
    "HecmResult",
    "BridgePeriodResult",
    "YearlySnapshot",
    "DepletionAges",
    "DashboardSummary",
    "AuditEntry",
    "FullCalculationResult",
]
