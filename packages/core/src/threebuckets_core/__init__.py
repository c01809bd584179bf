"""Three Buckets Core - Retirement cash-flow projections across income, nest egg and home equity."""

__version__ = "0.1.0"

from .accumulation import project_account_balance, project_home_value
from .calculator import RetirementCalculator, run_full_calculation
from .config import EngineSettings, configure_logging, load_settings
from .exceptions import (
    ConfigurationError,
    RecordNotFoundError,
    ThreeBucketsError,
    ValidationError,
)
from .hecm import calculate_hecm
from .income import (
    build_income_by_age,
    build_survivor_income_by_age,
    calculate_bridge_period,
    get_ss_monthly_amount,
)
from .models import (
    AccountType,
    ClientProfile,
    FullCalculationInput,
    FullCalculationResult,
    HecmResult,
    HomeEquityProfile,
    IncomeItem,
    IncomeType,
    NestEggAccount,
    Owner,
    PayoutType,
    Scenario,
    SurvivingSpouse,
    SurvivorConfig,
    YearlySnapshot,
)
from .records import build_calculation_input, calculate_for_client
from .retirement import RetirementProjectionInput, find_depletion_ages, project_retirement_phase

__all__ = [
    # Calculations
    "project_account_balance",
    "project_home_value",
    "calculate_hecm",
    "get_ss_monthly_amount",
    "build_income_by_age",
    "build_survivor_income_by_age",
    "calculate_bridge_period",
    "RetirementProjectionInput",
    "project_retirement_phase",
    "find_depletion_ages",
    "RetirementCalculator",
    "run_full_calculation",
    # Records and settings
    "build_calculation_input",
    "calculate_for_client",
    "EngineSettings",
    "load_settings",
    "configure_logging",
    # Models
    "AccountType",
    "ClientProfile",
    "FullCalculationInput",
    "FullCalculationResult",
    "HecmResult",
    "HomeEquityProfile",
    "IncomeItem",
    "IncomeType",
    "NestEggAccount",
    "Owner",
    "PayoutType",
    "Scenario",
    "SurvivingSpouse",
    "SurvivorConfig",
    "YearlySnapshot",
    # Exceptions
    "ThreeBucketsError",
    "ValidationError",
    "RecordNotFoundError",
    "ConfigurationError",
]
