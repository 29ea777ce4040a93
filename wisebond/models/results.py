from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from wisebond.models.property import BondProperty
from wisebond.models.scenario import CombinedScenario, LoanScenario


@dataclass(frozen=True)
class AmortizationRow:
    payment_number: int
    payment_date: date
    principal_payment: Decimal
    interest_payment: Decimal
    total_payment: Decimal
    remaining_balance: Decimal
    extra_payment: Decimal = Decimal("0")
    lump_sum_payment: Decimal = Decimal("0")

    @property
    def additional_payment(self) -> Decimal:
        return self.extra_payment + self.lump_sum_payment


Schedule = list[AmortizationRow]


@dataclass(frozen=True)
class ScenarioResult:
    scenario: LoanScenario | CombinedScenario
    amortization_schedule: Schedule
    total_interest_saved: Decimal = Decimal("0")
    months_saved: int = 0
    original_payoff_date: date | None = None
    new_payoff_date: date | None = None
    total_amount_paid: Decimal = Decimal("0")
    original_total_amount: Decimal = Decimal("0")


@dataclass(frozen=True)
class PropertyAnalysis:
    property: BondProperty
    baseline_schedule: Schedule
    scenario_results: list[ScenarioResult] = field(default_factory=list)
    combined_scenario_result: ScenarioResult | None = None


@dataclass(frozen=True)
class YearlyAmortization:
    year: int
    principal: Decimal
    interest: Decimal
    extra: Decimal  # Extra monthly + lump sums
    total_paid: Decimal
    ending_balance: Decimal
    cumulative_principal: Decimal
    cumulative_interest: Decimal


# ---- Calculator results ----

@dataclass(frozen=True)
class BondRepaymentResult:
    loan_amount: Decimal
    monthly_repayment: Decimal
    total_repayment: Decimal
    total_interest: Decimal


@dataclass(frozen=True)
class AffordabilityResult:
    disposable_income: Decimal
    max_monthly_payment: Decimal
    available_for_loan: Decimal
    max_loan_amount: Decimal
    recommended_property_price: Decimal


@dataclass(frozen=True)
class DepositSavingsResult:
    deposit_amount: Decimal
    months_to_save: int | None  # None when the target is never reached
    total_contributions: Decimal
    interest_earned: Decimal

    @property
    def years_and_months(self) -> tuple[int, int] | None:
        if self.months_to_save is None:
            return None
        return divmod(self.months_to_save, 12)


@dataclass(frozen=True)
class AdditionalPaymentResult:
    standard_monthly_payment: Decimal
    new_monthly_payment: Decimal
    standard_term_months: int
    new_term_months: int
    months_saved: int
    standard_total_interest: Decimal
    new_total_interest: Decimal
    interest_saved: Decimal


@dataclass(frozen=True)
class TransferCostResult:
    purchase_price: Decimal
    transfer_duty: Decimal
    transfer_attorney_fee: Decimal
    bond_registration_fee: Decimal
    deeds_office_fee: Decimal
    total_costs: Decimal
