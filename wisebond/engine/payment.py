"""Closed-form loan payment math.

Pure functions: Decimal in, Decimal out. No I/O. Rates are annual percentages.
"""

from decimal import Decimal

ZERO = Decimal("0")


def monthly_rate(annual_rate_percent: Decimal) -> Decimal:
    return Decimal(annual_rate_percent) / 100 / 12


def monthly_payment(principal: Decimal, annual_rate_percent: Decimal, term_months: int) -> Decimal:
    """Fixed monthly payment that amortizes ``principal`` over ``term_months``.

    M = P * r(1+r)^n / ((1+r)^n - 1), falling back to P / n at a zero rate.
    Not rounded; callers quantize for display.
    """
    if principal <= 0 or term_months <= 0:
        return ZERO
    if annual_rate_percent == 0:
        return principal / term_months

    r = monthly_rate(annual_rate_percent)
    factor = (1 + r) ** term_months
    return principal * r * factor / (factor - 1)


def split_payment(
    balance: Decimal, annual_rate_percent: Decimal, payment_amount: Decimal
) -> tuple[Decimal, Decimal]:
    """Split one payment into (interest, principal) against ``balance``.

    Principal can exceed the balance on the final payment; the schedule
    builders handle that case.
    """
    interest = balance * monthly_rate(annual_rate_percent)
    return interest, payment_amount - interest


def max_loan_amount(payment: Decimal, annual_rate_percent: Decimal, term_months: int) -> Decimal:
    """Largest principal a fixed ``payment`` amortizes: P = M * ((1+r)^n - 1) / (r(1+r)^n)."""
    if payment <= 0 or term_months <= 0:
        return ZERO
    if annual_rate_percent == 0:
        return payment * term_months

    r = monthly_rate(annual_rate_percent)
    factor = (1 + r) ** term_months
    return payment * (factor - 1) / (r * factor)
