"""Pydantic schemas for API request/response models."""

from datetime import date
from decimal import Decimal
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from wisebond.engine.schedule import MAX_SCHEDULE_MONTHS
from wisebond.models.property import BondProperty
from wisebond.models.scenario import (
    ExtraMonthlyScenario,
    IncreaseFrequency,
    LumpSumScenario,
    MonthlyIncreaseScenario,
    Trigger,
)

TriggerType = Literal["date", "payment_number"]


# ---- Request schemas ----

class PropertyInput(BaseModel):
    id: int | None = None
    name: str = ""
    current_loan_balance: Decimal = Field(..., ge=0)
    current_interest_rate: Decimal = Field(..., ge=0, description="Annual rate in percent")
    current_monthly_payment: Decimal = Field(..., ge=0)
    remaining_term: int = Field(..., ge=0, le=MAX_SCHEDULE_MONTHS, description="Months left on the bond")
    original_term: int | None = Field(None, ge=0)
    loan_start_date: date

    def to_domain(self) -> BondProperty:
        return BondProperty(
            current_loan_balance=self.current_loan_balance,
            current_interest_rate=self.current_interest_rate,
            current_monthly_payment=self.current_monthly_payment,
            remaining_term=self.remaining_term,
            loan_start_date=self.loan_start_date,
            id=self.id,
            name=self.name,
            original_term=self.original_term,
        )


class _ScenarioInputBase(BaseModel):
    id: int | None = None
    property_id: int | None = None
    name: str = ""
    is_active: bool = True


class LumpSumInput(_ScenarioInputBase):
    type: Literal["lump_sum"]
    lump_sum_amount: Decimal = Field(..., ge=0)
    lump_sum_date: str = Field(..., description="ISO date or payment number")
    lump_sum_date_type: TriggerType = "date"

    def to_domain(self) -> LumpSumScenario:
        return LumpSumScenario(
            amount=self.lump_sum_amount,
            trigger=Trigger.parse(self.lump_sum_date, self.lump_sum_date_type),
            name=self.name,
            is_active=self.is_active,
            id=self.id,
            property_id=self.property_id,
        )


class ExtraMonthlyInput(_ScenarioInputBase):
    type: Literal["extra_monthly"]
    extra_monthly_amount: Decimal = Field(..., ge=0)
    extra_monthly_start_date: str
    extra_monthly_start_type: TriggerType = "date"
    extra_monthly_end_date: str | None = None
    extra_monthly_end_type: TriggerType = "date"
    extra_monthly_duration: int | None = Field(None, ge=1)

    def to_domain(self) -> ExtraMonthlyScenario:
        end = None
        if self.extra_monthly_end_date is not None:
            end = Trigger.parse(self.extra_monthly_end_date, self.extra_monthly_end_type)
        return ExtraMonthlyScenario(
            amount=self.extra_monthly_amount,
            start=Trigger.parse(self.extra_monthly_start_date, self.extra_monthly_start_type),
            end=end,
            duration_months=self.extra_monthly_duration,
            name=self.name,
            is_active=self.is_active,
            id=self.id,
            property_id=self.property_id,
        )


class MonthlyIncreaseInput(_ScenarioInputBase):
    type: Literal["monthly_increase"]
    monthly_increase_amount: Decimal = Field(..., ge=0)
    monthly_increase_start_date: str
    monthly_increase_start_type: TriggerType = "date"
    monthly_increase_frequency: Literal["once", "annually"] = "once"

    def to_domain(self) -> MonthlyIncreaseScenario:
        return MonthlyIncreaseScenario(
            amount=self.monthly_increase_amount,
            start=Trigger.parse(self.monthly_increase_start_date, self.monthly_increase_start_type),
            frequency=IncreaseFrequency(self.monthly_increase_frequency),
            name=self.name,
            is_active=self.is_active,
            id=self.id,
            property_id=self.property_id,
        )


ScenarioInput = Annotated[
    Union[LumpSumInput, ExtraMonthlyInput, MonthlyIncreaseInput],
    Field(discriminator="type"),
]


class AnalysisRequest(BaseModel):
    property: PropertyInput
    scenarios: list[ScenarioInput] = Field(
        default_factory=list,
        description="Applied in this order when scenarios are combined",
    )
    as_of: date | None = Field(None, description="Projection date (defaults to today)")


class BondRepaymentRequest(BaseModel):
    property_value: Decimal = Field(..., ge=0)
    interest_rate: Decimal = Field(..., ge=0)
    term_years: int = Field(..., ge=1, le=50)
    deposit: Decimal = Field(Decimal("0"), ge=0)


class AffordabilityRequest(BaseModel):
    gross_income: Decimal = Field(..., ge=0)
    monthly_expenses: Decimal = Field(Decimal("0"), ge=0)
    existing_debt: Decimal = Field(Decimal("0"), ge=0)
    interest_rate: Decimal = Field(..., ge=0, lt=100)
    term_years: int = Field(25, ge=1, le=50)
    deposit_pct: Decimal = Field(Decimal("10"), ge=0, lt=100)


class DepositSavingsRequest(BaseModel):
    property_price: Decimal = Field(..., ge=0)
    deposit_pct: Decimal = Field(..., ge=0, le=100)
    monthly_saving: Decimal = Field(..., ge=0)
    savings_interest: Decimal = Field(Decimal("0"), ge=0)


class AdditionalPaymentRequest(BaseModel):
    loan_amount: Decimal = Field(..., gt=0)
    interest_rate: Decimal = Field(..., ge=0)
    term_years: int = Field(..., ge=1, le=50)
    additional_payment: Decimal = Field(..., ge=0)


class TransferCostRequest(BaseModel):
    purchase_price: Decimal = Field(..., ge=0)


# ---- Response schemas ----

class PropertyResponse(BaseModel):
    id: int | None = None
    name: str = ""
    current_loan_balance: Decimal
    current_interest_rate: Decimal
    current_monthly_payment: Decimal
    remaining_term: int
    original_term: int | None = None
    loan_start_date: date


class ScenarioResponse(BaseModel):
    id: int | None = None
    property_id: int | None = None
    name: str
    type: str
    is_active: bool
    amount: Decimal | None = None
    trigger: str | None = None
    trigger_type: str | None = None
    end: str | None = None
    end_type: str | None = None
    duration_months: int | None = None
    frequency: str | None = None


class AmortizationRowResponse(BaseModel):
    payment_number: int
    payment_date: date
    principal_payment: Decimal
    interest_payment: Decimal
    total_payment: Decimal
    extra_payment: Decimal
    lump_sum_payment: Decimal
    remaining_balance: Decimal


class YearlyAmortizationResponse(BaseModel):
    year: int
    principal: Decimal
    interest: Decimal
    extra: Decimal
    total_paid: Decimal
    ending_balance: Decimal
    cumulative_principal: Decimal
    cumulative_interest: Decimal


class ScenarioResultResponse(BaseModel):
    scenario: ScenarioResponse
    amortization_schedule: list[AmortizationRowResponse]
    yearly_summary: list[YearlyAmortizationResponse] = []
    total_interest_saved: Decimal
    months_saved: int
    original_payoff_date: date | None = None
    new_payoff_date: date | None = None
    total_amount_paid: Decimal
    original_total_amount: Decimal


class PropertyAnalysisResponse(BaseModel):
    property: PropertyResponse
    baseline_schedule: list[AmortizationRowResponse]
    baseline_yearly_summary: list[YearlyAmortizationResponse] = []
    scenario_results: list[ScenarioResultResponse] = []
    combined_scenario_result: ScenarioResultResponse | None = None


class BondRepaymentResponse(BaseModel):
    loan_amount: Decimal
    monthly_repayment: Decimal
    total_repayment: Decimal
    total_interest: Decimal


class AffordabilityResponse(BaseModel):
    disposable_income: Decimal
    max_monthly_payment: Decimal
    available_for_loan: Decimal
    max_loan_amount: Decimal
    recommended_property_price: Decimal


class DepositSavingsResponse(BaseModel):
    deposit_amount: Decimal
    months_to_save: int | None = None
    years_to_save: int | None = None
    remaining_months: int | None = None
    total_contributions: Decimal
    interest_earned: Decimal


class AdditionalPaymentResponse(BaseModel):
    standard_monthly_payment: Decimal
    new_monthly_payment: Decimal
    standard_term_months: int
    new_term_months: int
    months_saved: int
    standard_total_interest: Decimal
    new_total_interest: Decimal
    interest_saved: Decimal


class TransferCostResponse(BaseModel):
    purchase_price: Decimal
    transfer_duty: Decimal
    transfer_attorney_fee: Decimal
    bond_registration_fee: Decimal
    deeds_office_fee: Decimal
    total_costs: Decimal


class PrimeRateResponse(BaseModel):
    prime_rate: Decimal
