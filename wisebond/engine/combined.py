"""Fold several scenarios into one schedule.

Order matters: each scenario is applied to the schedule the previous ones
produced, so a lump sum listed after an extra-monthly scenario lands on the
already shortened schedule. Callers control the order deliberately.
"""

from wisebond.engine.scenarios import apply_scenario
from wisebond.models.property import BondProperty
from wisebond.models.results import Schedule
from wisebond.models.scenario import CombinedScenario, LoanScenario


def combine_scenarios(
    baseline: Schedule,
    scenarios: list[LoanScenario],
    prop: BondProperty,
    step_annual_increases: bool = False,
) -> Schedule:
    schedule = list(baseline)
    for scenario in scenarios:
        if scenario.is_active:
            schedule = apply_scenario(schedule, scenario, prop, step_annual_increases)
    return schedule


def combined_scenario(prop: BondProperty) -> CombinedScenario:
    return CombinedScenario(property_id=prop.id)
