"""Stand-alone bond calculators: repayment, affordability, deposit savings,
additional payment and transfer costs.

Pure functions: Decimal in, dataclass out. No I/O. Rates are annual
percentages; amounts are in rand.
"""

import math
from decimal import Decimal

from wisebond.engine.payment import max_loan_amount, monthly_payment, monthly_rate
from wisebond.engine.schedule import MAX_SCHEDULE_MONTHS, PAYOFF_TOLERANCE
from wisebond.models.results import (
    AdditionalPaymentResult,
    AffordabilityResult,
    BondRepaymentResult,
    DepositSavingsResult,
    TransferCostResult,
)

ZERO = Decimal("0")

# Banks cap the repayment at 30% of gross monthly income
MAX_DEBT_SERVICE_RATIO = Decimal("0.30")
DEFAULT_AFFORDABILITY_TERM_YEARS = 25
DEFAULT_DEPOSIT_PCT = Decimal("10")

# (threshold, base duty, marginal rate) per SARS transfer duty bracket
TRANSFER_DUTY_BRACKETS = [
    (Decimal("11000000"), Decimal("1026000"), Decimal("0.13")),
    (Decimal("2475000"), Decimal("88250"), Decimal("0.11")),
    (Decimal("1925000"), Decimal("44250"), Decimal("0.08")),
    (Decimal("1375000"), Decimal("11250"), Decimal("0.06")),
    (Decimal("1000000"), Decimal("0"), Decimal("0.03")),
]
TRANSFER_ATTORNEY_PCT = Decimal("0.015")
BOND_REGISTRATION_PCT = Decimal("0.012")
DEEDS_OFFICE_FEE = Decimal("1500")


def bond_repayment(
    property_value: Decimal,
    interest_rate: Decimal,
    term_years: int,
    deposit: Decimal = ZERO,
) -> BondRepaymentResult:
    """Monthly repayment on ``property_value`` less ``deposit``."""
    loan = max(property_value - deposit, ZERO)
    n = term_years * 12
    payment = monthly_payment(loan, interest_rate, n)
    total = payment * n
    return BondRepaymentResult(
        loan_amount=loan,
        monthly_repayment=payment,
        total_repayment=total,
        total_interest=total - loan,
    )


def affordability(
    gross_income: Decimal,
    monthly_expenses: Decimal,
    existing_debt: Decimal,
    interest_rate: Decimal,
    term_years: int = DEFAULT_AFFORDABILITY_TERM_YEARS,
    deposit_pct: Decimal = DEFAULT_DEPOSIT_PCT,
) -> AffordabilityResult:
    """Largest bond the applicant's monthly income supports.

    The repayment is the lower of disposable income and 30% of gross income;
    the recommended price assumes ``deposit_pct`` is paid up front.
    """
    disposable = gross_income - monthly_expenses - existing_debt
    max_payment = gross_income * MAX_DEBT_SERVICE_RATIO
    available = max(min(disposable, max_payment), ZERO)
    max_loan = max_loan_amount(available, interest_rate, term_years * 12)
    financed_share = 1 - deposit_pct / 100
    recommended = max_loan / financed_share if financed_share > 0 else ZERO
    return AffordabilityResult(
        disposable_income=disposable,
        max_monthly_payment=max_payment,
        available_for_loan=available,
        max_loan_amount=max_loan,
        recommended_property_price=recommended,
    )


def deposit_savings(
    property_price: Decimal,
    deposit_pct: Decimal,
    monthly_saving: Decimal,
    savings_interest: Decimal,
) -> DepositSavingsResult:
    """Months of saving (compounded monthly) needed to reach the deposit.

    FV = PMT * ((1+r)^n - 1) / r, solved for n and rounded up to whole months.
    ``months_to_save`` is None when the saving never reaches the target.
    """
    target = property_price * deposit_pct / 100
    if target <= 0:
        return DepositSavingsResult(
            deposit_amount=max(target, ZERO),
            months_to_save=0,
            total_contributions=ZERO,
            interest_earned=ZERO,
        )
    if monthly_saving <= 0:
        return DepositSavingsResult(
            deposit_amount=target,
            months_to_save=None,
            total_contributions=ZERO,
            interest_earned=ZERO,
        )

    r = monthly_rate(savings_interest)
    if r == 0:
        months = math.ceil(target / monthly_saving)
        future_value = monthly_saving * months
    else:
        exact = (target * r / monthly_saving + 1).ln() / (1 + r).ln()
        months = math.ceil(exact)
        future_value = monthly_saving * ((1 + r) ** months - 1) / r

    contributions = monthly_saving * months
    return DepositSavingsResult(
        deposit_amount=target,
        months_to_save=months,
        total_contributions=contributions,
        interest_earned=future_value - contributions,
    )


def _payoff(loan: Decimal, interest_rate: Decimal, payment: Decimal, limit: int) -> tuple[int, Decimal]:
    """(months, total interest) to clear ``loan`` with a fixed ``payment``."""
    r = monthly_rate(interest_rate)
    balance = loan
    months = 0
    interest_paid = ZERO
    while balance > PAYOFF_TOLERANCE and months < limit:
        interest = balance * r
        interest_paid += interest
        balance -= payment - interest
        months += 1
    return months, interest_paid


def additional_payment(
    loan_amount: Decimal,
    interest_rate: Decimal,
    term_years: int,
    additional: Decimal,
) -> AdditionalPaymentResult:
    """Effect of paying ``additional`` on top of the standard repayment every month."""
    n = term_years * 12
    standard = monthly_payment(loan_amount, interest_rate, n)
    new_payment = standard + max(additional, ZERO)

    standard_months, standard_interest = _payoff(loan_amount, interest_rate, standard, n)
    new_months, new_interest = _payoff(loan_amount, interest_rate, new_payment, MAX_SCHEDULE_MONTHS)

    return AdditionalPaymentResult(
        standard_monthly_payment=standard,
        new_monthly_payment=new_payment,
        standard_term_months=standard_months,
        new_term_months=new_months,
        months_saved=standard_months - new_months,
        standard_total_interest=standard_interest,
        new_total_interest=new_interest,
        interest_saved=standard_interest - new_interest,
    )


def transfer_duty(purchase_price: Decimal) -> Decimal:
    for threshold, base, rate in TRANSFER_DUTY_BRACKETS:
        if purchase_price > threshold:
            return base + (purchase_price - threshold) * rate
    return ZERO


def transfer_costs(purchase_price: Decimal) -> TransferCostResult:
    """Transfer duty plus approximate attorney, bond registration and deeds office fees."""
    duty = transfer_duty(purchase_price)
    attorney = purchase_price * TRANSFER_ATTORNEY_PCT
    registration = purchase_price * BOND_REGISTRATION_PCT
    return TransferCostResult(
        purchase_price=purchase_price,
        transfer_duty=duty,
        transfer_attorney_fee=attorney,
        bond_registration_fee=registration,
        deeds_office_fee=DEEDS_OFFICE_FEE,
        total_costs=duty + attorney + registration + DEEDS_OFFICE_FEE,
    )
