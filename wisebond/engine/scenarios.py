"""Apply a single loan scenario to an amortization schedule.

Pure functions. No I/O. Rows are immutable, so the input schedule is never
changed; every call returns a new list.

Once a row receives an extra or lump-sum payment, every later row is rebuilt
from the new balance with the bond's fixed rate and payment. Amounts that an
earlier scenario put on a later row are carried onto the rebuilt row, which is
what lets scenarios be folded one after another.
"""

import logging
from dataclasses import replace
from decimal import Decimal

from wisebond.engine.schedule import amortize_row
from wisebond.models.property import BondProperty
from wisebond.models.results import AmortizationRow, Schedule
from wisebond.models.scenario import (
    ExtraMonthlyScenario,
    IncreaseFrequency,
    LoanScenario,
    LumpSumScenario,
    MonthlyIncreaseScenario,
)

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def add_payment(
    row: AmortizationRow, extra: Decimal = ZERO, lump_sum: Decimal = ZERO
) -> AmortizationRow:
    """Put additional principal on ``row``, capped at its remaining balance."""
    lump_sum = min(lump_sum, row.remaining_balance)
    extra = min(extra, row.remaining_balance - lump_sum)
    added = extra + lump_sum
    if added <= 0:
        return row
    return replace(
        row,
        principal_payment=row.principal_payment + added,
        total_payment=row.total_payment + added,
        extra_payment=row.extra_payment + extra,
        lump_sum_payment=row.lump_sum_payment + lump_sum,
        remaining_balance=max(row.remaining_balance - added, ZERO),
    )


def recompute_row(
    source: AmortizationRow, opening_balance: Decimal, prop: BondProperty
) -> AmortizationRow:
    """Rebuild ``source`` against a new opening balance.

    Keeps the row's number and date and re-applies whatever extra or lump-sum
    amounts it already carried.
    """
    row = amortize_row(source.payment_number, source.payment_date, opening_balance, prop)
    if row.remaining_balance <= 0:
        return row
    return add_payment(row, source.extra_payment, source.lump_sum_payment)


def extra_monthly_applies(scenario: ExtraMonthlyScenario, row: AmortizationRow) -> bool:
    if not scenario.start.matches(row.payment_number, row.payment_date):
        return False
    if scenario.end is not None and scenario.end.matches(row.payment_number, row.payment_date):
        return False
    if scenario.duration_months is not None and row.payment_number > scenario.duration_months:
        return False
    return True


def increase_amount(
    scenario: MonthlyIncreaseScenario, months_since_start: int, step_annual_increases: bool
) -> Decimal:
    """Increase for a row ``months_since_start`` months after the first increased row.

    Flat unless annual stepping is switched on for an ``annually`` scenario, in
    which case the increase grows by one step every 12 months.
    """
    if step_annual_increases and scenario.frequency is IncreaseFrequency.ANNUALLY:
        return scenario.amount * (1 + months_since_start // 12)
    return scenario.amount


def apply_scenario(
    schedule: Schedule,
    scenario: LoanScenario,
    prop: BondProperty,
    step_annual_increases: bool = False,
) -> Schedule:
    """Return ``schedule`` as it looks with ``scenario`` applied.

    An inactive scenario returns an equal copy. The result is truncated at the
    row where the balance reaches zero.
    """
    if not scenario.is_active:
        return list(schedule)

    result: Schedule = []
    perturbed = False
    lump_sum_applied = False
    first_increase: int | None = None

    for source in schedule:
        row = recompute_row(source, result[-1].remaining_balance, prop) if perturbed else source

        extra = ZERO
        lump_sum = ZERO
        if isinstance(scenario, LumpSumScenario):
            if not lump_sum_applied and scenario.trigger.matches(row.payment_number, row.payment_date):
                lump_sum = scenario.amount
                lump_sum_applied = True
        elif isinstance(scenario, ExtraMonthlyScenario):
            if extra_monthly_applies(scenario, row):
                extra = scenario.amount
        elif isinstance(scenario, MonthlyIncreaseScenario):
            if scenario.start.matches(row.payment_number, row.payment_date):
                if first_increase is None:
                    first_increase = row.payment_number
                extra = increase_amount(
                    scenario, row.payment_number - first_increase, step_annual_increases
                )

        if extra > 0 or lump_sum > 0:
            row = add_payment(row, extra, lump_sum)
            perturbed = True

        result.append(row)
        if row.remaining_balance <= 0:
            break

    logger.debug(
        "Applied %s scenario %r: %d -> %d rows",
        scenario.scenario_type.value,
        scenario.name,
        len(schedule),
        len(result),
    )
    return result
