from dataclasses import replace
from decimal import Decimal

from wisebond.engine.analysis import summarize_scenario
from wisebond.engine.combined import combine_scenarios, combined_scenario
from wisebond.engine.scenarios import apply_scenario
from wisebond.models.scenario import MonthlyIncreaseScenario, ScenarioType, Trigger


class TestCombineScenarios:
    def test_beats_each_scenario_alone(self, baseline, standard_bond, extra_1000, lump_50000):
        extra_only = apply_scenario(baseline, extra_1000, standard_bond)
        lump_only = apply_scenario(baseline, lump_50000, standard_bond)
        combined = combine_scenarios(baseline, [extra_1000, lump_50000], standard_bond)
        assert len(combined) < len(extra_only)
        assert len(combined) < len(lump_only)

    def test_months_saved_at_least_best_individual(self, baseline, standard_bond, extra_1000, lump_50000):
        increase = MonthlyIncreaseScenario(amount=Decimal("750"), start=Trigger.at_payment(36))
        scenarios = [extra_1000, lump_50000, increase]
        individual = [
            summarize_scenario(baseline, apply_scenario(baseline, s, standard_bond), s).months_saved
            for s in scenarios
        ]
        combined = summarize_scenario(
            baseline,
            combine_scenarios(baseline, scenarios, standard_bond),
            combined_scenario(standard_bond),
        )
        assert combined.months_saved >= max(individual)

    def test_earlier_extras_survive_later_recompute(self, baseline, standard_bond, extra_1000, lump_50000):
        combined = combine_scenarios(baseline, [extra_1000, lump_50000], standard_bond)
        lump_row = combined[23]
        assert lump_row.extra_payment == Decimal("1000")
        assert lump_row.lump_sum_payment == Decimal("50000")
        assert all(r.extra_payment == Decimal("1000") for r in combined[24:-1])

    def test_either_order_pays_off(self, baseline, standard_bond, extra_1000, lump_50000):
        forward = combine_scenarios(baseline, [extra_1000, lump_50000], standard_bond)
        backward = combine_scenarios(baseline, [lump_50000, extra_1000], standard_bond)
        assert forward[-1].remaining_balance == 0
        assert backward[-1].remaining_balance == 0
        assert backward[23].lump_sum_payment == Decimal("50000")

    def test_skips_inactive(self, baseline, standard_bond, extra_1000, lump_50000):
        combined = combine_scenarios(
            baseline, [extra_1000, replace(lump_50000, is_active=False)], standard_bond
        )
        assert combined == apply_scenario(baseline, extra_1000, standard_bond)

    def test_no_scenarios_copies_baseline(self, baseline, standard_bond):
        combined = combine_scenarios(baseline, [], standard_bond)
        assert combined == baseline
        assert combined is not baseline


class TestCombinedScenario:
    def test_pseudo_scenario(self, standard_bond):
        scenario = combined_scenario(standard_bond)
        assert scenario.name == "Combined Scenarios"
        assert scenario.is_active
        assert scenario.property_id == standard_bond.id
        assert scenario.scenario_type is ScenarioType.COMBINED
