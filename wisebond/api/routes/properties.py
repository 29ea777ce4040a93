"""Persisted property routes."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from wisebond.api.deps import get_db
from wisebond.api.routes.analysis import analysis_to_response, scenario_to_response
from wisebond.api.schemas import PropertyAnalysisResponse, ScenarioResponse
from wisebond.engine.analysis import generate_property_analysis
from wisebond.models.db import (
    LoanScenarioRecord,
    PropertyRecord,
    property_from_record,
    scenario_from_record,
)
from wisebond.models.scenario import LoanScenario

router = APIRouter(prefix="/api/v1/properties", tags=["properties"])


async def _load_property(db: AsyncSession, property_id: int) -> PropertyRecord:
    record = await db.get(PropertyRecord, property_id)
    if record is None:
        raise HTTPException(status_code=404, detail=f"Property {property_id} not found")
    return record


async def _load_scenarios(db: AsyncSession, property_id: int) -> list[LoanScenario]:
    rows = await db.scalars(
        select(LoanScenarioRecord)
        .where(LoanScenarioRecord.property_id == property_id)
        .order_by(LoanScenarioRecord.id)
    )
    try:
        return [scenario_from_record(r) for r in rows]
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{property_id}/scenarios", response_model=list[ScenarioResponse])
async def get_property_scenarios(property_id: int, db: AsyncSession = Depends(get_db)):
    """Saved scenarios for a property, in creation order."""
    await _load_property(db, property_id)
    return [scenario_to_response(s) for s in await _load_scenarios(db, property_id)]


@router.get("/{property_id}/analysis", response_model=PropertyAnalysisResponse)
async def get_property_analysis(property_id: int, db: AsyncSession = Depends(get_db)):
    """Analysis of a saved property against its saved scenarios."""
    record = await _load_property(db, property_id)
    scenarios = await _load_scenarios(db, property_id)
    analysis = generate_property_analysis(property_from_record(record), scenarios)
    return analysis_to_response(analysis)
