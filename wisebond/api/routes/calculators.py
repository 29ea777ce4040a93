"""Stand-alone calculator routes."""

from fastapi import APIRouter, Depends

from wisebond.api.deps import get_prime_rate_client
from wisebond.api.schemas import (
    AdditionalPaymentRequest,
    AdditionalPaymentResponse,
    AffordabilityRequest,
    AffordabilityResponse,
    BondRepaymentRequest,
    BondRepaymentResponse,
    DepositSavingsRequest,
    DepositSavingsResponse,
    PrimeRateResponse,
    TransferCostRequest,
    TransferCostResponse,
)
from wisebond.data.prime_rate import PrimeRateClient
from wisebond.engine import calculators

router = APIRouter(prefix="/api/v1/calculators", tags=["calculators"])


@router.post("/bond-repayment", response_model=BondRepaymentResponse)
async def bond_repayment(req: BondRepaymentRequest):
    r = calculators.bond_repayment(req.property_value, req.interest_rate, req.term_years, req.deposit)
    return BondRepaymentResponse(
        loan_amount=r.loan_amount,
        monthly_repayment=r.monthly_repayment,
        total_repayment=r.total_repayment,
        total_interest=r.total_interest,
    )


@router.post("/affordability", response_model=AffordabilityResponse)
async def affordability(req: AffordabilityRequest):
    r = calculators.affordability(
        req.gross_income,
        req.monthly_expenses,
        req.existing_debt,
        req.interest_rate,
        term_years=req.term_years,
        deposit_pct=req.deposit_pct,
    )
    return AffordabilityResponse(
        disposable_income=r.disposable_income,
        max_monthly_payment=r.max_monthly_payment,
        available_for_loan=r.available_for_loan,
        max_loan_amount=r.max_loan_amount,
        recommended_property_price=r.recommended_property_price,
    )


@router.post("/deposit-savings", response_model=DepositSavingsResponse)
async def deposit_savings(req: DepositSavingsRequest):
    r = calculators.deposit_savings(
        req.property_price, req.deposit_pct, req.monthly_saving, req.savings_interest
    )
    years, months = r.years_and_months or (None, None)
    return DepositSavingsResponse(
        deposit_amount=r.deposit_amount,
        months_to_save=r.months_to_save,
        years_to_save=years,
        remaining_months=months,
        total_contributions=r.total_contributions,
        interest_earned=r.interest_earned,
    )


@router.post("/additional-payment", response_model=AdditionalPaymentResponse)
async def additional_payment(req: AdditionalPaymentRequest):
    r = calculators.additional_payment(
        req.loan_amount, req.interest_rate, req.term_years, req.additional_payment
    )
    return AdditionalPaymentResponse(
        standard_monthly_payment=r.standard_monthly_payment,
        new_monthly_payment=r.new_monthly_payment,
        standard_term_months=r.standard_term_months,
        new_term_months=r.new_term_months,
        months_saved=r.months_saved,
        standard_total_interest=r.standard_total_interest,
        new_total_interest=r.new_total_interest,
        interest_saved=r.interest_saved,
    )


@router.post("/transfer-costs", response_model=TransferCostResponse)
async def transfer_costs(req: TransferCostRequest):
    r = calculators.transfer_costs(req.purchase_price)
    return TransferCostResponse(
        purchase_price=r.purchase_price,
        transfer_duty=r.transfer_duty,
        transfer_attorney_fee=r.transfer_attorney_fee,
        bond_registration_fee=r.bond_registration_fee,
        deeds_office_fee=r.deeds_office_fee,
        total_costs=r.total_costs,
    )


@router.get("/prime-rate", response_model=PrimeRateResponse)
async def prime_rate(client: PrimeRateClient = Depends(get_prime_rate_client)):
    """Current SARB prime lending rate (falls back to the configured rate)."""
    return PrimeRateResponse(prime_rate=await client.get_prime_rate())
