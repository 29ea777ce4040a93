import logging
from dataclasses import replace
from datetime import date
from decimal import Decimal

from wisebond.engine.schedule import (
    add_months,
    build_baseline_schedule,
    months_elapsed,
)

TOLERANCE = Decimal("0.01")


class TestDates:
    def test_add_months_clamps_to_month_end(self):
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
        assert add_months(date(2023, 1, 31), 1) == date(2023, 2, 28)

    def test_add_months_across_years(self):
        assert add_months(date(2024, 11, 15), 3) == date(2025, 2, 15)

    def test_months_elapsed(self):
        assert months_elapsed(date(2020, 6, 1), date(2024, 1, 15)) == 43

    def test_months_elapsed_never_negative(self):
        assert months_elapsed(date(2030, 1, 1), date(2024, 1, 1)) == 0

    def test_projection_starts_at_next_payment(self, standard_bond):
        schedule = build_baseline_schedule(standard_bond, as_of=date(2025, 3, 10))
        # 14 payments already made since January 2024
        assert schedule[0].payment_date == date(2025, 4, 1)
        assert schedule[0].payment_number == 1

    def test_payment_dates_are_monthly(self, baseline):
        assert baseline[0].payment_date == date(2024, 2, 1)
        assert baseline[11].payment_date == date(2025, 1, 1)
        assert baseline[-1].payment_date == date(2044, 1, 1)

    def test_month_end_start_date(self, standard_bond):
        prop = replace(standard_bond, loan_start_date=date(2024, 1, 31))
        schedule = build_baseline_schedule(prop, as_of=date(2024, 1, 31))
        assert schedule[0].payment_date == date(2024, 2, 29)
        assert schedule[1].payment_date == date(2024, 3, 31)


class TestBaselineSchedule:
    def test_full_term(self, baseline):
        assert len(baseline) == 240
        assert [r.payment_number for r in baseline] == list(range(1, 241))

    def test_first_payment_mostly_interest(self, baseline):
        first = baseline[0]
        assert first.interest_payment == Decimal("8437.5")
        assert first.principal_payment < first.interest_payment

    def test_balance_non_increasing_and_ends_at_zero(self, baseline):
        for prev, row in zip(baseline, baseline[1:]):
            assert row.remaining_balance <= prev.remaining_balance
        assert baseline[-1].remaining_balance == 0

    def test_principal_plus_interest_is_total(self, baseline):
        for row in baseline:
            assert abs(row.principal_payment + row.interest_payment - row.total_payment) <= TOLERANCE

    def test_no_extras_on_baseline(self, baseline):
        assert all(r.extra_payment == 0 and r.lump_sum_payment == 0 for r in baseline)

    def test_early_payoff_when_payment_overpays(self, small_baseline):
        """R1,000 a month clears R10K at 1% in 11 payments, not 12."""
        assert len(small_baseline) == 11
        assert small_baseline[0].interest_payment == Decimal("100")
        assert small_baseline[0].remaining_balance == Decimal("9100")
        last = small_baseline[-1]
        assert last.remaining_balance == 0
        assert last.total_payment < Decimal("1000")
        assert last.total_payment == last.principal_payment + last.interest_payment

    def test_bounded_by_remaining_term(self, standard_bond, as_of):
        prop = replace(standard_bond, remaining_term=60)
        schedule = build_baseline_schedule(prop, as_of=as_of)
        assert len(schedule) == 60
        assert schedule[-1].remaining_balance > 0

    def test_zero_remaining_term(self, standard_bond, as_of):
        prop = replace(standard_bond, remaining_term=0)
        assert build_baseline_schedule(prop, as_of=as_of) == []

    def test_zero_balance(self, standard_bond, as_of):
        prop = replace(standard_bond, current_loan_balance=Decimal("0"))
        assert build_baseline_schedule(prop, as_of=as_of) == []

    def test_zero_rate(self, as_of, standard_bond):
        prop = replace(
            standard_bond,
            current_loan_balance=Decimal("120000"),
            current_interest_rate=Decimal("0"),
            current_monthly_payment=Decimal("1000"),
            remaining_term=120,
        )
        schedule = build_baseline_schedule(prop, as_of=as_of)
        assert len(schedule) == 120
        assert all(r.interest_payment == 0 for r in schedule)
        assert schedule[-1].remaining_balance == 0

    def test_payment_below_interest_warns(self, standard_bond, as_of, caplog):
        prop = replace(standard_bond, current_monthly_payment=Decimal("5000"), remaining_term=24)
        with caplog.at_level(logging.WARNING, logger="wisebond.engine.schedule"):
            schedule = build_baseline_schedule(prop, as_of=as_of)
        assert len(schedule) == 24
        assert "does not cover interest" in caplog.text

    def test_fresh_list_per_call(self, standard_bond, as_of):
        a = build_baseline_schedule(standard_bond, as_of=as_of)
        b = build_baseline_schedule(standard_bond, as_of=as_of)
        assert a == b
        assert a is not b
