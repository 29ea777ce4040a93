from dataclasses import replace
from datetime import date
from decimal import Decimal

from wisebond.config import settings
from wisebond.engine.analysis import (
    generate_property_analysis,
    payoff_date,
    summarize_scenario,
    total_interest,
    total_paid,
)
from wisebond.engine.scenarios import apply_scenario
from wisebond.models.scenario import (
    IncreaseFrequency,
    MonthlyIncreaseScenario,
    ScenarioType,
    Trigger,
)


class TestSummarizeScenario:
    def test_savings_against_baseline(self, baseline, standard_bond, extra_1000):
        modified = apply_scenario(baseline, extra_1000, standard_bond)
        result = summarize_scenario(baseline, modified, extra_1000)
        assert result.scenario is extra_1000
        assert result.amortization_schedule is modified
        assert result.months_saved == 240 - len(modified)
        assert result.total_interest_saved == total_interest(baseline) - total_interest(modified)
        assert result.total_interest_saved > 0
        assert result.original_payoff_date == date(2044, 1, 1)
        assert result.new_payoff_date == modified[-1].payment_date
        assert result.new_payoff_date < result.original_payoff_date
        assert result.original_total_amount == total_paid(baseline)
        assert result.total_amount_paid < result.original_total_amount

    def test_unchanged_schedule_saves_nothing(self, baseline, extra_1000):
        result = summarize_scenario(baseline, list(baseline), extra_1000)
        assert result.total_interest_saved == 0
        assert result.months_saved == 0
        assert result.new_payoff_date == result.original_payoff_date

    def test_empty_schedules(self, extra_1000):
        result = summarize_scenario([], [], extra_1000)
        assert result.total_interest_saved == Decimal("0")
        assert result.months_saved == 0
        assert result.original_payoff_date is None
        assert result.new_payoff_date is None
        assert result.total_amount_paid == Decimal("0")

    def test_payoff_date_of_empty(self):
        assert payoff_date([]) is None


class TestGeneratePropertyAnalysis:
    def test_no_scenarios(self, standard_bond, as_of):
        analysis = generate_property_analysis(standard_bond, [], as_of=as_of)
        assert analysis.property is standard_bond
        assert len(analysis.baseline_schedule) == 240
        assert analysis.scenario_results == []
        assert analysis.combined_scenario_result is None

    def test_only_inactive_scenarios(self, standard_bond, as_of, extra_1000):
        analysis = generate_property_analysis(
            standard_bond, [replace(extra_1000, is_active=False)], as_of=as_of
        )
        assert analysis.scenario_results == []
        assert analysis.combined_scenario_result is None

    def test_single_scenario_has_no_combined(self, standard_bond, as_of, extra_1000):
        analysis = generate_property_analysis(standard_bond, [extra_1000], as_of=as_of)
        assert len(analysis.scenario_results) == 1
        assert analysis.combined_scenario_result is None

    def test_extra_monthly_on_prime_bond(self, standard_bond, as_of, extra_1000):
        """R1,000 extra from payment 1 on R900K at 11.25% over 20 years."""
        result = generate_property_analysis(standard_bond, [extra_1000], as_of=as_of).scenario_results[0]
        assert len(result.amortization_schedule) < 240
        assert result.total_interest_saved > 0

    def test_scenarios_are_independent(self, standard_bond, as_of, extra_1000, lump_50000):
        analysis = generate_property_analysis(standard_bond, [extra_1000, lump_50000], as_of=as_of)
        lump_result = analysis.scenario_results[1]
        assert lump_result.scenario is lump_50000
        assert lump_result.amortization_schedule == apply_scenario(
            analysis.baseline_schedule, lump_50000, standard_bond
        )
        assert all(r.extra_payment == 0 for r in lump_result.amortization_schedule)

    def test_combined_result(self, standard_bond, as_of, extra_1000, lump_50000):
        analysis = generate_property_analysis(standard_bond, [extra_1000, lump_50000], as_of=as_of)
        combined = analysis.combined_scenario_result
        assert combined is not None
        assert combined.scenario.scenario_type is ScenarioType.COMBINED
        assert combined.scenario.name == "Combined Scenarios"
        assert combined.months_saved >= max(r.months_saved for r in analysis.scenario_results)

    def test_inactive_excluded_from_combined(self, standard_bond, as_of, extra_1000, lump_50000):
        analysis = generate_property_analysis(
            standard_bond, [extra_1000, replace(lump_50000, is_active=False)], as_of=as_of
        )
        assert len(analysis.scenario_results) == 1
        assert analysis.combined_scenario_result is None

    def test_paid_off_bond(self, standard_bond, as_of, lump_50000):
        prop = replace(standard_bond, remaining_term=0)
        analysis = generate_property_analysis(prop, [lump_50000], as_of=as_of)
        assert analysis.baseline_schedule == []
        result = analysis.scenario_results[0]
        assert result.amortization_schedule == []
        assert result.months_saved == 0
        assert result.total_interest_saved == 0
        assert result.new_payoff_date is None

    def test_annual_step_follows_settings(self, standard_bond, as_of, monkeypatch):
        scenario = MonthlyIncreaseScenario(
            amount=Decimal("500"),
            start=Trigger.at_payment(1),
            frequency=IncreaseFrequency.ANNUALLY,
        )
        flat = generate_property_analysis(standard_bond, [scenario], as_of=as_of)
        monkeypatch.setattr(settings, "step_annual_increases", True)
        stepped = generate_property_analysis(standard_bond, [scenario], as_of=as_of)
        assert flat.scenario_results[0].amortization_schedule[12].extra_payment == Decimal("500")
        assert stepped.scenario_results[0].amortization_schedule[12].extra_payment == Decimal("1000")

    def test_explicit_step_overrides_settings(self, standard_bond, as_of, monkeypatch):
        scenario = MonthlyIncreaseScenario(
            amount=Decimal("500"),
            start=Trigger.at_payment(1),
            frequency=IncreaseFrequency.ANNUALLY,
        )
        monkeypatch.setattr(settings, "step_annual_increases", True)
        analysis = generate_property_analysis(
            standard_bond, [scenario], as_of=as_of, step_annual_increases=False
        )
        assert analysis.scenario_results[0].amortization_schedule[12].extra_payment == Decimal("500")
