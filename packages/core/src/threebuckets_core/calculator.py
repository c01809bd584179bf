"""Full three-bucket retirement cash-flow calculation.

Combines the accumulation, HECM, income and retirement phase calculations
into one result for the advisor dashboard and the client summary document.
"""

from typing import Optional

import structlog

from .accumulation import project_account_balance, project_home_value
from .hecm import calculate_hecm
from .income import build_income_by_age, build_survivor_income_by_age, calculate_bridge_period
from .models import (
    AccountProjection,
    AccumulationResult,
    AuditEntry,
    DashboardSummary,
    DepletionAges,
    FullCalculationInput,
    FullCalculationResult,
    HecmResult,
    PayoutType,
)
from .money import MONTHS_PER_YEAR, format_cents
from .retirement import RetirementProjectionInput, find_depletion_ages, project_retirement_phase

logger = structlog.get_logger()


class RetirementCalculator:
    """
    Calculate a household's retirement cash flow across the three buckets.

    Bucket 1 is recurring income, Bucket 2 the nest egg and Bucket 3 home
    equity through a HECM. Every step is recorded in an audit log that is
    returned with the result.

    An instance keeps the audit log of its current run, so concurrent
    calculations should each use their own instance (``run_full_calculation``
    does this).
    """

    def __init__(self):
        self._audit_log: list[AuditEntry] = []
        self._warnings: list[str] = []

    def _log_step(
        self,
        step: str,
        input_value: str,
        output_value: str,
        source: str,
        notes: Optional[str] = None,
    ) -> None:
        """Add an entry to the audit log."""
        entry = AuditEntry(
            step=step,
            input_value=input_value,
            output_value=output_value,
            source=source,
            notes=notes,
        )
        self._audit_log.append(entry)
        logger.info(
            "calculation_step",
            step=step,
            input=input_value,
            output=output_value,
            source=source,
        )

    def _project_accumulation(
        self,
        calc_input: FullCalculationInput,
        months_to_retirement: int,
        years_to_retirement: int,
    ) -> AccumulationResult:
        projections: list[AccountProjection] = []
        for account in calc_input.nest_egg_accounts:
            projected = project_account_balance(
                account.current_balance_cents,
                account.monthly_contribution_cents,
                account.rate_of_return_bps,
                months_to_retirement,
            )
            projections.append(AccountProjection(
                id=account.id,
                label=account.label,
                account_type=account.account_type,
                current_balance_cents=account.current_balance_cents,
                projected_balance_cents=projected,
            ))
            self._log_step(
                step=f"nest_egg_{account.label or account.id or len(projections)}",
                input_value=(
                    f"balance={account.current_balance_cents}, "
                    f"contribution={account.monthly_contribution_cents}, "
                    f"rate_bps={account.rate_of_return_bps}, months={months_to_retirement}"
                ),
                output_value=str(projected),
                source="Future value of balance plus monthly contributions",
            )

        home_equity = calc_input.home_equity
        projected_home_value = (
            project_home_value(
                home_equity.current_home_value_cents,
                home_equity.home_appreciation_rate_bps,
                years_to_retirement,
            )
            if home_equity is not None
            else 0
        )

        result = AccumulationResult(
            months_to_retirement=months_to_retirement,
            nest_egg_projections=projections,
            total_current_nest_egg_cents=sum(a.current_balance_cents for a in calc_input.nest_egg_accounts),
            total_projected_nest_egg_cents=sum(p.projected_balance_cents for p in projections),
            projected_home_value_cents=projected_home_value,
        )
        self._log_step(
            step="accumulation_totals",
            input_value=f"{len(projections)} accounts",
            output_value=(
                f"current={result.total_current_nest_egg_cents}, "
                f"projected={result.total_projected_nest_egg_cents}, "
                f"home_value={projected_home_value}"
            ),
            source="Accumulation phase",
        )
        return result

    def _calculate_hecm(
        self,
        calc_input: FullCalculationInput,
        years_to_retirement: int,
    ) -> Optional[HecmResult]:
        if calc_input.home_equity is None:
            self._log_step(
                step="hecm",
                input_value="no home equity profile",
                output_value="none",
                source="HECM calculator",
            )
            return None

        hecm = calculate_hecm(
            calc_input.home_equity,
            years_to_retirement=years_to_retirement,
            youngest_borrower_age=calc_input.client.youngest_age,
            lending_limit_cents=calc_input.lending_limit_cents,
            fallback_loc_growth_rate_bps=calc_input.global_loc_growth_rate_bps,
        )
        self._log_step(
            step="hecm",
            input_value=(
                f"payout={calc_input.home_equity.hecm_payout_type.value}, "
                f"principal_limit={hecm.principal_limit_cents}, "
                f"mortgage_payoff={hecm.mortgage_payoff_cents}"
            ),
            output_value=(
                f"available={hecm.available_proceeds_cents}, "
                f"lump_sum={hecm.lump_sum_available_cents}, "
                f"loc_start={hecm.loc_start_balance_cents}, "
                f"tenure={hecm.tenure_monthly_cents}"
            ),
            source="HECM calculator (manual principal limit)",
        )

        if hecm.cash_to_close_cents > 0:
            self._warnings.append(
                f"Mortgage payoff exceeds the principal limit: "
                f"{format_cents(hecm.cash_to_close_cents)} cash to close is required "
                f"and is funded from Bucket 2."
            )
        return hecm

    def _adjusted_target(self, calc_input: FullCalculationInput) -> int:
        """Target income less the mortgage payment a lump-sum payoff eliminates."""
        target = calc_input.scenario.target_monthly_income_cents
        home_equity = calc_input.home_equity
        payoff_active = (
            home_equity is not None
            and home_equity.hecm_payoff_mortgage
            and home_equity.hecm_payout_type == PayoutType.LUMP_SUM
            and home_equity.existing_mortgage_payment_cents > 0
        )
        adjusted = max(0, target - home_equity.existing_mortgage_payment_cents) if payoff_active else target

        self._log_step(
            step="adjusted_target",
            input_value=f"target={target}, mortgage_payoff_active={payoff_active}",
            output_value=str(adjusted),
            source="Scenario target income",
        )
        return adjusted

    def _build_dashboard(
        self,
        calc_input: FullCalculationInput,
        hecm: Optional[HecmResult],
        adjusted_target: int,
    ) -> DashboardSummary:
        scenario = calc_input.scenario
        home_equity = calc_input.home_equity

        is_tenure = home_equity is not None and home_equity.hecm_payout_type == PayoutType.TENURE
        if is_tenure:
            bucket3_monthly = hecm.tenure_monthly_cents if hecm is not None else 0
        else:
            bucket3_monthly = scenario.bucket3_draw_cents

        total = scenario.bucket1_draw_cents + scenario.bucket2_draw_cents + bucket3_monthly
        shortfall = max(0, adjusted_target - total)
        surplus = max(0, total - adjusted_target)

        allocated_deposits = scenario.bucket2_deposit_cents + scenario.bucket3_repayment_cents
        mortgage_freed = hecm.monthly_freed_cents if hecm is not None else 0
        payoff_by_lump_sum = (
            home_equity is not None
            and home_equity.hecm_payoff_mortgage
            and home_equity.hecm_payout_type == PayoutType.LUMP_SUM
            and home_equity.existing_mortgage_payment_cents > 0
        )

        dashboard = DashboardSummary(
            mortgage_freed_cents=mortgage_freed,
            total_monthly_income_cents=total,
            shortfall_cents=shortfall,
            surplus_cents=surplus,
            bucket1_monthly_cents=scenario.bucket1_draw_cents,
            bucket2_monthly_cents=scenario.bucket2_draw_cents,
            bucket3_monthly_cents=bucket3_monthly,
            gross_target_cents=scenario.target_monthly_income_cents,
            adjusted_target_cents=adjusted_target,
            allocated_deposits_cents=allocated_deposits,
            unallocated_surplus_cents=max(0, surplus - allocated_deposits),
            deposit_exceeds_surplus=surplus > 0 and allocated_deposits > surplus,
            show_mortgage_banner=(
                payoff_by_lump_sum
                and mortgage_freed > 0
                and adjusted_target != scenario.target_monthly_income_cents
            ),
        )

        self._log_step(
            step="dashboard_totals",
            input_value=(
                f"bucket1={scenario.bucket1_draw_cents}, bucket2={scenario.bucket2_draw_cents}, "
                f"bucket3={bucket3_monthly}, target={adjusted_target}"
            ),
            output_value=f"total={total}, shortfall={shortfall}, surplus={surplus}",
            source="Configured bucket draws",
        )

        if shortfall > 0:
            self._warnings.append(
                f"Monthly income falls short of the target by {format_cents(shortfall)}."
            )
        if dashboard.deposit_exceeds_surplus:
            self._warnings.append("Deposit exceeds available surplus.")
        return dashboard

    def calculate(self, calc_input: FullCalculationInput) -> FullCalculationResult:
        """
        Run the full calculation.

        Args:
            calc_input: Validated household snapshot with global settings resolved

        Returns:
            FullCalculationResult with audit log and warnings
        """
        self._audit_log = []
        self._warnings = []

        client = calc_input.client
        scenario = calc_input.scenario
        retirement_age = client.retirement_age
        horizon_age = scenario.planning_horizon_age

        # Step 1: Time to retirement (already retired clamps to 0)
        years_to_retirement = max(0, retirement_age - client.primary_age)
        months_to_retirement = years_to_retirement * MONTHS_PER_YEAR
        self._log_step(
            step="time_to_retirement",
            input_value=f"age={client.primary_age}, retirement_age={retirement_age}",
            output_value=f"years={years_to_retirement}, months={months_to_retirement}",
            source="Client profile",
        )

        # Steps 2-3: Accumulation phase
        accumulation = self._project_accumulation(calc_input, months_to_retirement, years_to_retirement)

        # Step 4: HECM
        hecm = self._calculate_hecm(calc_input, years_to_retirement)

        # Step 5: Adjusted target
        adjusted_target = self._adjusted_target(calc_input)

        # Step 6: Income by age
        bucket1_by_age = build_income_by_age(
            calc_input.income_items,
            retirement_age,
            horizon_age,
            scenario.ss_primary_claim_age,
            scenario.ss_spouse_claim_age,
        )
        survivor = client.survivor if scenario.survivor_mode else None
        survivor_by_age = None
        if survivor is not None:
            survivor_by_age = build_survivor_income_by_age(
                calc_input.income_items,
                retirement_age,
                horizon_age,
                scenario.ss_primary_claim_age,
                scenario.ss_spouse_claim_age,
                survivor,
            )
        self._log_step(
            step="income_by_age",
            input_value=f"{len(calc_input.income_items)} income items, ages {retirement_age}-{horizon_age}",
            output_value=f"at_retirement={bucket1_by_age.get(retirement_age, 0)}",
            source="Bucket 1 income schedule",
            notes=(
                f"survivor from age {survivor.survivor_event_age} "
                f"({survivor.surviving_spouse.value} survives)"
                if survivor is not None
                else None
            ),
        )

        # Step 7: Bridge period
        bridge_period = calculate_bridge_period(
            calc_input.income_items,
            retirement_age,
            scenario.ss_primary_claim_age,
            scenario.ss_spouse_claim_age,
            scenario.bridge_funding_source,
        )
        self._log_step(
            step="bridge_period",
            input_value=(
                f"retirement_age={retirement_age}, primary_claim={scenario.ss_primary_claim_age}, "
                f"spouse_claim={scenario.ss_spouse_claim_age}"
            ),
            output_value=(
                f"monthly_gap={bridge_period.monthly_gap_cents}, "
                f"total_cost={bridge_period.total_bridge_cost_cents}"
            ),
            source="Social Security deferral",
        )

        # Step 8: Dashboard
        dashboard = self._build_dashboard(calc_input, hecm, adjusted_target)

        # Step 9: Cash to close comes out of Bucket 2 before retirement income starts
        cash_to_close = hecm.cash_to_close_cents if hecm is not None else 0
        bucket2_start = max(0, accumulation.total_projected_nest_egg_cents - cash_to_close)

        # Step 10: Longevity projection
        accounts = calc_input.nest_egg_accounts
        bucket2_rate = (
            sum(a.rate_of_return_bps for a in accounts) // len(accounts)
            if accounts
            else calc_input.default_bucket2_rate_bps
        )
        payout_type = calc_input.home_equity.hecm_payout_type if calc_input.home_equity else PayoutType.NONE
        loc_growth_rate = hecm.loc_growth_rate_bps if hecm is not None else calc_input.global_loc_growth_rate_bps

        longevity = project_retirement_phase(RetirementProjectionInput(
            retirement_age=retirement_age,
            planning_horizon_age=horizon_age,
            bucket1_monthly_by_age=bucket1_by_age,
            bucket2_start_balance_cents=bucket2_start,
            bucket2_monthly_draw_cents=scenario.bucket2_draw_cents,
            bucket2_annual_rate_bps=bucket2_rate,
            bucket3_type=payout_type,
            bucket3_start_balance_cents=hecm.loc_start_balance_cents if hecm is not None else 0,
            bucket3_monthly_draw_cents=scenario.bucket3_draw_cents,
            bucket3_loc_growth_rate_bps=loc_growth_rate,
            target_monthly_income_cents=adjusted_target,
            inflation_rate_bps=scenario.inflation_rate_bps,
            survivor_event_age=survivor.survivor_event_age if survivor is not None else None,
            survivor_bucket1_monthly_by_age=survivor_by_age,
        ))
        self._log_step(
            step="longevity_projection",
            input_value=(
                f"bucket2_start={bucket2_start}, bucket2_rate_bps={bucket2_rate}, "
                f"bucket3_type={payout_type.value}, inflation_bps={scenario.inflation_rate_bps}"
            ),
            output_value=f"{len(longevity)} yearly snapshots",
            source="Retirement phase simulation",
        )

        # Step 11: Depletion ages
        depletion_ages = find_depletion_ages(longevity)
        self._warn_depletion(depletion_ages, payout_type)

        self._log_step(
            step="calculation_complete",
            input_value=f"scenario={scenario.name or scenario.id or 'unnamed'}",
            output_value=(
                f"shortfall={dashboard.shortfall_cents}, "
                f"bucket2_depletes={depletion_ages.bucket2_depletion_age}, "
                f"bucket3_depletes={depletion_ages.bucket3_depletion_age}"
            ),
            source="Three Buckets calculator",
        )

        return FullCalculationResult(
            accumulation_phase=accumulation,
            hecm=hecm,
            bridge_period=bridge_period,
            dashboard=dashboard,
            cash_to_close_cents=cash_to_close,
            longevity_projection=longevity,
            depletion_ages=depletion_ages,
            warnings=self._warnings,
            audit_log=self._audit_log,
        )

    def _warn_depletion(self, depletion_ages: DepletionAges, payout_type: PayoutType) -> None:
        if depletion_ages.bucket2_depletion_age is not None:
            self._warnings.append(
                f"Bucket 2 (nest egg) is depleted by age {depletion_ages.bucket2_depletion_age}."
            )
        # Only a line of credit carries a balance that can run out
        if payout_type == PayoutType.LOC and depletion_ages.bucket3_depletion_age is not None:
            self._warnings.append(
                f"Bucket 3 (HECM line of credit) is depleted by age {depletion_ages.bucket3_depletion_age}."
            )


def run_full_calculation(calc_input: FullCalculationInput) -> FullCalculationResult:
    """Run one calculation with a fresh calculator."""
    return RetirementCalculator().calculate(calc_input)
