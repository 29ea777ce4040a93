"""Canonical test fixtures used across all engine tests.

Fixture: R900K bond at 11.25% with 240 months left, paying the standard
amortized instalment. Projection date 2024-01-15 on a bond that started
2024-01-01, so payment 1 falls on 2024-02-01.
"""

from datetime import date
from decimal import Decimal

import pytest

from wisebond.engine.payment import monthly_payment
from wisebond.engine.schedule import build_baseline_schedule
from wisebond.models.property import BondProperty
from wisebond.models.scenario import (
    ExtraMonthlyScenario,
    LumpSumScenario,
    Trigger,
)

AS_OF = date(2024, 1, 15)


@pytest.fixture
def as_of() -> date:
    return AS_OF


@pytest.fixture
def standard_bond() -> BondProperty:
    """R900K at 11.25% over 20 years."""
    return BondProperty(
        current_loan_balance=Decimal("900000"),
        current_interest_rate=Decimal("11.25"),
        current_monthly_payment=monthly_payment(Decimal("900000"), Decimal("11.25"), 240),
        remaining_term=240,
        loan_start_date=date(2024, 1, 1),
        id=1,
        name="Sea Point flat",
        original_term=240,
    )


@pytest.fixture
def small_bond() -> BondProperty:
    """R10K at 12% (exactly 1% a month) paying R1,000: easy to check by hand."""
    return BondProperty(
        current_loan_balance=Decimal("10000"),
        current_interest_rate=Decimal("12"),
        current_monthly_payment=Decimal("1000"),
        remaining_term=12,
        loan_start_date=date(2024, 1, 1),
        id=2,
    )


@pytest.fixture
def baseline(standard_bond, as_of):
    return build_baseline_schedule(standard_bond, as_of=as_of)


@pytest.fixture
def small_baseline(small_bond, as_of):
    return build_baseline_schedule(small_bond, as_of=as_of)


@pytest.fixture
def extra_1000() -> ExtraMonthlyScenario:
    return ExtraMonthlyScenario(
        amount=Decimal("1000"),
        start=Trigger.at_payment(1),
        name="Extra R1,000",
        id=10,
        property_id=1,
    )


@pytest.fixture
def lump_50000() -> LumpSumScenario:
    return LumpSumScenario(
        amount=Decimal("50000"),
        trigger=Trigger.at_payment(24),
        name="Bonus year 2",
        id=11,
        property_id=1,
    )
