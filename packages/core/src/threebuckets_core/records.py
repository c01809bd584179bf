"""Mapping from stored client records to calculation input.

Client records arrive from the persistence layer as plain mappings with
snake_case keys (``income_items``, ``nest_egg_accounts``, ``home_equity``,
``scenarios`` ...). This module selects the scenario to run, resolves the
global settings, and validates everything into a FullCalculationInput so
that the engine only ever sees well-typed values.
"""

from collections.abc import Mapping
from typing import Any, Optional

import structlog
from pydantic import ValidationError as PydanticValidationError

from .calculator import run_full_calculation
from .config import EngineSettings, load_settings
from .exceptions import RecordNotFoundError, ValidationError
from .models import FullCalculationInput, FullCalculationResult

logger = structlog.get_logger()


def select_scenario(
    scenarios: list[Mapping[str, Any]],
    scenario_id: Optional[str] = None,
) -> Mapping[str, Any]:
    """Pick the requested scenario, else the active one, else the first.

    Raises:
        RecordNotFoundError: If no scenario matches.
    """
    if scenario_id is not None:
        for scenario in scenarios:
            if scenario.get("id") == scenario_id:
                return scenario
        raise RecordNotFoundError(
            "Scenario not found", record_type="scenario", record_id=scenario_id
        )

    for scenario in scenarios:
        if scenario.get("is_active"):
            return scenario
    if scenarios:
        return scenarios[0]
    raise RecordNotFoundError("No scenario found", record_type="scenario")


def _income_item(record: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "id": record.get("id"),
        "owner": record.get("owner"),
        "income_type": record.get("type"),
        "label": record.get("label", ""),
        "monthly_amount_cents": record.get("monthly_amount_cents"),
        "start_age": record.get("start_age"),
        "end_age": record.get("end_age"),
        "ss_age62_cents": record.get("ss_age62_cents"),
        "ss_age67_cents": record.get("ss_age67_cents"),
        "ss_age70_cents": record.get("ss_age70_cents"),
        "ss_claim_age": record.get("ss_claim_age"),
        "pension_survivor_pct_bps": record.get("pension_survivor_pct"),
    }


def _nest_egg_account(record: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "id": record.get("id"),
        "label": record.get("label", ""),
        "account_type": record.get("account_type") or "qualified",
        "current_balance_cents": record.get("current_balance_cents"),
        "monthly_contribution_cents": record.get("monthly_contribution_cents", 0),
        "rate_of_return_bps": record.get("rate_of_return_bps", 0),
        "monthly_draw_cents": record.get("monthly_draw_cents", 0),
    }


def _home_equity(
    record: Optional[Mapping[str, Any]],
    settings: EngineSettings,
) -> Optional[dict[str, Any]]:
    if record is None:
        return None
    keys = (
        "current_home_value_cents",
        "existing_mortgage_balance_cents",
        "existing_mortgage_payment_cents",
        "home_appreciation_rate_bps",
        "hecm_expected_rate_bps",
        "hecm_payout_type",
        "hecm_tenure_monthly_cents",
        "hecm_loc_growth_rate_bps",
        "hecm_payoff_mortgage",
        "hecm_principal_limit_cents",
        "hecm_additional_lump_sum_cents",
    )
    # Absent columns fall back to the model defaults, appreciation to the settings
    home_equity = {"home_appreciation_rate_bps": settings.home_appreciation_bps}
    home_equity.update({key: record[key] for key in keys if record.get(key) is not None})
    return home_equity


def _scenario(record: Mapping[str, Any], settings: EngineSettings) -> dict[str, Any]:
    return {
        "id": record.get("id"),
        "name": record.get("name", ""),
        "target_monthly_income_cents": record.get("target_monthly_income_cents"),
        "bucket1_draw_cents": record.get("bucket1_draw_cents", 0),
        "bucket2_draw_cents": record.get("bucket2_draw_cents", 0),
        "bucket3_draw_cents": record.get("bucket3_draw_cents", 0),
        "bridge_funding_source": record.get("bridge_funding_source"),
        "ss_primary_claim_age": record.get("ss_primary_claim_age", 67),
        "ss_spouse_claim_age": record.get("ss_spouse_claim_age", 67),
        "inflation_rate_bps": record.get("inflation_rate_bps", settings.inflation_rate_bps),
        "planning_horizon_age": record.get("planning_horizon_age", settings.planning_horizon_age),
        "survivor_mode": record.get("survivor_mode", False),
        "bucket2_deposit_cents": record.get("bucket2_deposit_cents") or 0,
        "bucket3_repayment_cents": record.get("bucket3_repayment_cents") or 0,
    }


def _client_profile(client: Mapping[str, Any]) -> dict[str, Any]:
    survivor = None
    if client.get("survivor_spouse") and client.get("survivor_event_age"):
        survivor = {
            "surviving_spouse": client["survivor_spouse"],
            "survivor_event_age": client["survivor_event_age"],
        }
    return {
        "primary_age": client.get("age"),
        "spouse_age": client.get("spouse_age"),
        "retirement_age": client.get("target_retirement_age"),
        "marital_status": client.get("marital_status") or "single",
        "survivor": survivor,
    }


def build_calculation_input(
    client: Mapping[str, Any],
    scenario_id: Optional[str] = None,
    settings: Optional[EngineSettings] = None,
) -> FullCalculationInput:
    """
    Validate a stored client record into calculation input.

    Args:
        client: Client record including income items, accounts, home equity
            and scenarios
        scenario_id: Scenario to run; defaults to the active scenario
        settings: Global settings; loaded from the environment when omitted

    Returns:
        FullCalculationInput ready for ``run_full_calculation``

    Raises:
        RecordNotFoundError: If the client has no matching scenario.
        ValidationError: If any field fails validation.
    """
    settings = settings or load_settings()
    scenario = select_scenario(list(client.get("scenarios") or []), scenario_id)

    raw = {
        "client": _client_profile(client),
        "scenario": _scenario(scenario, settings),
        "income_items": [_income_item(item) for item in client.get("income_items") or []],
        "nest_egg_accounts": [_nest_egg_account(acct) for acct in client.get("nest_egg_accounts") or []],
        "home_equity": _home_equity(client.get("home_equity"), settings),
        "lending_limit_cents": settings.hecm_lending_limit_cents,
        "global_loc_growth_rate_bps": settings.loc_growth_rate_bps,
        "default_bucket2_rate_bps": settings.default_bucket2_rate_bps,
    }

    try:
        calc_input = FullCalculationInput.model_validate(raw)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        logger.warning("client_record_invalid", field=field, error=first["msg"])
        raise ValidationError(
            f"Invalid client record: {field}",
            field=field,
            value=first.get("input"),
            constraint=first["msg"],
            details={"error_count": e.error_count()},
        ) from e

    logger.info(
        "calculation_input_built",
        client_id=client.get("id"),
        scenario_id=scenario.get("id"),
        income_items=len(calc_input.income_items),
        accounts=len(calc_input.nest_egg_accounts),
        has_home_equity=calc_input.home_equity is not None,
    )
    return calc_input


def calculate_for_client(
    client: Mapping[str, Any],
    scenario_id: Optional[str] = None,
    settings: Optional[EngineSettings] = None,
) -> FullCalculationResult:
    """Build input from a client record and run the full calculation."""
    return run_full_calculation(build_calculation_input(client, scenario_id, settings))
