"""Scenario analysis orchestrator: baseline, per-scenario and combined results.

Pure computation. No I/O. BondProperty + scenarios in, PropertyAnalysis out.
"""

import logging
from datetime import date
from decimal import Decimal

from wisebond.config import settings
from wisebond.engine.combined import combine_scenarios, combined_scenario
from wisebond.engine.scenarios import apply_scenario
from wisebond.engine.schedule import build_baseline_schedule
from wisebond.models.property import BondProperty
from wisebond.models.results import PropertyAnalysis, ScenarioResult, Schedule
from wisebond.models.scenario import CombinedScenario, LoanScenario

logger = logging.getLogger(__name__)


def total_interest(schedule: Schedule) -> Decimal:
    return sum((row.interest_payment for row in schedule), Decimal("0"))


def total_paid(schedule: Schedule) -> Decimal:
    return sum((row.total_payment for row in schedule), Decimal("0"))


def payoff_date(schedule: Schedule) -> date | None:
    return schedule[-1].payment_date if schedule else None


def summarize_scenario(
    baseline: Schedule,
    modified: Schedule,
    scenario: LoanScenario | CombinedScenario,
) -> ScenarioResult:
    """Compare ``modified`` against ``baseline``. Empty schedules count as zero."""
    return ScenarioResult(
        scenario=scenario,
        amortization_schedule=modified,
        total_interest_saved=total_interest(baseline) - total_interest(modified),
        months_saved=len(baseline) - len(modified),
        original_payoff_date=payoff_date(baseline),
        new_payoff_date=payoff_date(modified),
        total_amount_paid=total_paid(modified),
        original_total_amount=total_paid(baseline),
    )


def generate_property_analysis(
    prop: BondProperty,
    scenarios: list[LoanScenario],
    as_of: date | None = None,
    step_annual_increases: bool | None = None,
) -> PropertyAnalysis:
    """Run every active scenario against the bond's baseline schedule.

    Each scenario is applied to the baseline on its own. When more than one is
    active they are also folded together, in the order given, into a combined
    result.
    """
    if step_annual_increases is None:
        step_annual_increases = settings.step_annual_increases

    baseline = build_baseline_schedule(prop, as_of=as_of)
    active = [s for s in scenarios if s.is_active]

    results = [
        summarize_scenario(
            baseline,
            apply_scenario(baseline, scenario, prop, step_annual_increases),
            scenario,
        )
        for scenario in active
    ]

    combined = None
    if len(active) > 1:
        combined = summarize_scenario(
            baseline,
            combine_scenarios(baseline, active, prop, step_annual_increases),
            combined_scenario(prop),
        )

    logger.debug(
        "Analysis for property %s: %d baseline rows, %d active of %d scenarios",
        prop.id,
        len(baseline),
        len(active),
        len(scenarios),
    )
    return PropertyAnalysis(
        property=prop,
        baseline_schedule=baseline,
        scenario_results=results,
        combined_scenario_result=combined,
    )
