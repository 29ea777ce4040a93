"""Baseline amortization schedule for a bond's remaining life.

Pure functions. No I/O. The projection starts at the next payment due, not at
the original loan start, and rows are numbered from 1 within the projection.
"""

import calendar
import logging
from datetime import date
from decimal import Decimal

from wisebond.engine.payment import split_payment
from wisebond.models.property import BondProperty
from wisebond.models.results import AmortizationRow, Schedule

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
# Residual balance treated as paid off (absorbs floating drift on the last row)
PAYOFF_TOLERANCE = Decimal("0.01")
# Hard ceiling on any month-by-month loop
MAX_SCHEDULE_MONTHS = 1000


def add_months(dt: date, months: int) -> date:
    """Shift ``dt`` by whole months, clamping the day to the month's end."""
    year = dt.year + (dt.month - 1 + months) // 12
    month = (dt.month - 1 + months) % 12 + 1
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def months_elapsed(start: date, as_of: date) -> int:
    """Calendar months between ``start`` and ``as_of`` (never negative)."""
    return max(0, (as_of.year - start.year) * 12 + (as_of.month - start.month))


def payment_date(prop: BondProperty, payment_number: int, as_of: date) -> date:
    elapsed = months_elapsed(prop.loan_start_date, as_of)
    return add_months(prop.loan_start_date, elapsed + payment_number)


def amortize_row(
    payment_number: int,
    due: date,
    opening_balance: Decimal,
    prop: BondProperty,
) -> AmortizationRow:
    """One regular payment against ``opening_balance``.

    If the fixed payment would clear the balance, the row becomes the final
    payment: principal is the whole balance and the total shrinks to match.
    """
    interest, principal = split_payment(
        opening_balance, prop.current_interest_rate, prop.current_monthly_payment
    )
    if opening_balance - principal <= PAYOFF_TOLERANCE:
        return AmortizationRow(
            payment_number=payment_number,
            payment_date=due,
            principal_payment=opening_balance,
            interest_payment=interest,
            total_payment=opening_balance + interest,
            remaining_balance=ZERO,
        )
    return AmortizationRow(
        payment_number=payment_number,
        payment_date=due,
        principal_payment=principal,
        interest_payment=interest,
        total_payment=prop.current_monthly_payment,
        remaining_balance=opening_balance - principal,
    )


def build_baseline_schedule(prop: BondProperty, as_of: date | None = None) -> Schedule:
    """Project the unmodified schedule from the current balance.

    At most ``remaining_term`` rows; fewer when the fixed payment clears the
    balance early.
    """
    as_of = as_of or date.today()
    balance = prop.current_loan_balance
    term = min(prop.remaining_term, MAX_SCHEDULE_MONTHS)

    first_interest, first_principal = split_payment(
        balance, prop.current_interest_rate, prop.current_monthly_payment
    )
    if balance > 0 and first_principal <= 0:
        logger.warning(
            "Monthly payment %s does not cover interest %s; balance will not amortize",
            prop.current_monthly_payment,
            first_interest,
        )

    schedule: Schedule = []
    for number in range(1, term + 1):
        if balance <= 0:
            break
        row = amortize_row(number, payment_date(prop, number, as_of), balance, prop)
        schedule.append(row)
        balance = row.remaining_balance

    logger.debug(
        "Baseline schedule: %d rows from balance %s over %d months",
        len(schedule),
        prop.current_loan_balance,
        prop.remaining_term,
    )
    return schedule
