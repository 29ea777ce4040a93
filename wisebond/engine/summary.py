"""Roll an amortization schedule up into projection years."""

from decimal import Decimal

from wisebond.models.results import Schedule, YearlyAmortization


def yearly_summary(schedule: Schedule) -> list[YearlyAmortization]:
    """Aggregate rows by projection year (payments 1-12 are year 1, and so on).

    A final partial year is emitted when the schedule stops mid-year.
    """
    yearly: list[YearlyAmortization] = []
    year_principal = Decimal("0")
    year_interest = Decimal("0")
    year_extra = Decimal("0")
    year_paid = Decimal("0")
    cumulative_principal = Decimal("0")
    cumulative_interest = Decimal("0")

    for i, row in enumerate(schedule):
        year_principal += row.principal_payment
        year_interest += row.interest_payment
        year_extra += row.additional_payment
        year_paid += row.total_payment

        if row.payment_number % 12 == 0 or i == len(schedule) - 1:
            cumulative_principal += year_principal
            cumulative_interest += year_interest
            yearly.append(YearlyAmortization(
                year=(row.payment_number - 1) // 12 + 1,
                principal=year_principal,
                interest=year_interest,
                extra=year_extra,
                total_paid=year_paid,
                ending_balance=row.remaining_balance,
                cumulative_principal=cumulative_principal,
                cumulative_interest=cumulative_interest,
            ))
            year_principal = Decimal("0")
            year_interest = Decimal("0")
            year_extra = Decimal("0")
            year_paid = Decimal("0")

    return yearly
