"""Analysis routes: property + scenarios in, full scenario analysis out."""

import logging

from fastapi import APIRouter, HTTPException

from wisebond.api.schemas import (
    AmortizationRowResponse,
    AnalysisRequest,
    PropertyAnalysisResponse,
    PropertyResponse,
    ScenarioResponse,
    ScenarioResultResponse,
    YearlyAmortizationResponse,
)
from wisebond.engine.analysis import generate_property_analysis
from wisebond.engine.summary import yearly_summary
from wisebond.models.results import PropertyAnalysis, ScenarioResult, Schedule
from wisebond.models.scenario import (
    CombinedScenario,
    ExtraMonthlyScenario,
    LoanScenario,
    LumpSumScenario,
    MonthlyIncreaseScenario,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["analysis"])


def scenario_to_response(scenario: LoanScenario | CombinedScenario) -> ScenarioResponse:
    resp = ScenarioResponse(
        id=scenario.id,
        property_id=scenario.property_id,
        name=scenario.name,
        type=scenario.scenario_type.value,
        is_active=scenario.is_active,
    )
    if isinstance(scenario, LumpSumScenario):
        resp.amount = scenario.amount
        resp.trigger = scenario.trigger.serialize()
        resp.trigger_type = scenario.trigger.kind.value
    elif isinstance(scenario, ExtraMonthlyScenario):
        resp.amount = scenario.amount
        resp.trigger = scenario.start.serialize()
        resp.trigger_type = scenario.start.kind.value
        if scenario.end is not None:
            resp.end = scenario.end.serialize()
            resp.end_type = scenario.end.kind.value
        resp.duration_months = scenario.duration_months
    elif isinstance(scenario, MonthlyIncreaseScenario):
        resp.amount = scenario.amount
        resp.trigger = scenario.start.serialize()
        resp.trigger_type = scenario.start.kind.value
        resp.frequency = scenario.frequency.value
    return resp


def _rows(schedule: Schedule) -> list[AmortizationRowResponse]:
    return [
        AmortizationRowResponse(
            payment_number=r.payment_number,
            payment_date=r.payment_date,
            principal_payment=r.principal_payment,
            interest_payment=r.interest_payment,
            total_payment=r.total_payment,
            extra_payment=r.extra_payment,
            lump_sum_payment=r.lump_sum_payment,
            remaining_balance=r.remaining_balance,
        )
        for r in schedule
    ]


def _yearly(schedule: Schedule) -> list[YearlyAmortizationResponse]:
    return [
        YearlyAmortizationResponse(
            year=y.year,
            principal=y.principal,
            interest=y.interest,
            extra=y.extra,
            total_paid=y.total_paid,
            ending_balance=y.ending_balance,
            cumulative_principal=y.cumulative_principal,
            cumulative_interest=y.cumulative_interest,
        )
        for y in yearly_summary(schedule)
    ]


def _result_to_response(result: ScenarioResult) -> ScenarioResultResponse:
    return ScenarioResultResponse(
        scenario=scenario_to_response(result.scenario),
        amortization_schedule=_rows(result.amortization_schedule),
        yearly_summary=_yearly(result.amortization_schedule),
        total_interest_saved=result.total_interest_saved,
        months_saved=result.months_saved,
        original_payoff_date=result.original_payoff_date,
        new_payoff_date=result.new_payoff_date,
        total_amount_paid=result.total_amount_paid,
        original_total_amount=result.original_total_amount,
    )


def analysis_to_response(analysis: PropertyAnalysis) -> PropertyAnalysisResponse:
    """Convert engine PropertyAnalysis to API response."""
    p = analysis.property
    combined = analysis.combined_scenario_result
    return PropertyAnalysisResponse(
        property=PropertyResponse(
            id=p.id,
            name=p.name,
            current_loan_balance=p.current_loan_balance,
            current_interest_rate=p.current_interest_rate,
            current_monthly_payment=p.current_monthly_payment,
            remaining_term=p.remaining_term,
            original_term=p.original_term,
            loan_start_date=p.loan_start_date,
        ),
        baseline_schedule=_rows(analysis.baseline_schedule),
        baseline_yearly_summary=_yearly(analysis.baseline_schedule),
        scenario_results=[_result_to_response(r) for r in analysis.scenario_results],
        combined_scenario_result=_result_to_response(combined) if combined else None,
    )


@router.post("/analysis", response_model=PropertyAnalysisResponse)
async def analyze(req: AnalysisRequest):
    """Project the bond and every active scenario against it.

    Scenarios are combined in request order.
    """
    try:
        prop = req.property.to_domain()
        scenarios = [s.to_domain() for s in req.scenarios]
    except ValueError as e:
        logger.info("Rejected analysis request: %s", e)
        raise HTTPException(status_code=400, detail=str(e))

    analysis = generate_property_analysis(prop, scenarios, as_of=req.as_of)
    return analysis_to_response(analysis)
