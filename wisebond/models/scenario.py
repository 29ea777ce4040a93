"""Loan scenario variants.

One frozen dataclass per scenario type; each carries only its own fields.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum


class ScenarioType(Enum):
    LUMP_SUM = "lump_sum"
    EXTRA_MONTHLY = "extra_monthly"
    MONTHLY_INCREASE = "monthly_increase"
    COMBINED = "combined"


class TriggerKind(Enum):
    DATE = "date"
    PAYMENT_NUMBER = "payment_number"


class IncreaseFrequency(Enum):
    ONCE = "once"
    ANNUALLY = "annually"


@dataclass(frozen=True)
class Trigger:
    kind: TriggerKind
    value: date | int

    @classmethod
    def on_date(cls, value: date) -> "Trigger":
        return cls(kind=TriggerKind.DATE, value=value)

    @classmethod
    def at_payment(cls, number: int) -> "Trigger":
        return cls(kind=TriggerKind.PAYMENT_NUMBER, value=number)

    @classmethod
    def parse(cls, raw: str, kind: str) -> "Trigger":
        """Build a trigger from the stored string form ("2026-03-01" or "12")."""
        trigger_kind = TriggerKind(kind)
        if trigger_kind is TriggerKind.PAYMENT_NUMBER:
            return cls.at_payment(int(raw))
        return cls.on_date(date.fromisoformat(raw))

    def matches(self, payment_number: int, payment_date: date) -> bool:
        """True once a row has reached the trigger (inclusive)."""
        if self.kind is TriggerKind.PAYMENT_NUMBER:
            return payment_number >= self.value
        return payment_date >= self.value

    def serialize(self) -> str:
        if isinstance(self.value, date):
            return self.value.isoformat()
        return str(self.value)


@dataclass(frozen=True)
class LumpSumScenario:
    amount: Decimal
    trigger: Trigger
    name: str = ""
    is_active: bool = True
    id: int | None = None
    property_id: int | None = None

    scenario_type = ScenarioType.LUMP_SUM


@dataclass(frozen=True)
class ExtraMonthlyScenario:
    amount: Decimal
    start: Trigger
    end: Trigger | None = None  # Exclusive
    duration_months: int | None = None  # Counted from payment 1
    name: str = ""
    is_active: bool = True
    id: int | None = None
    property_id: int | None = None

    scenario_type = ScenarioType.EXTRA_MONTHLY


@dataclass(frozen=True)
class MonthlyIncreaseScenario:
    amount: Decimal
    start: Trigger
    frequency: IncreaseFrequency = IncreaseFrequency.ONCE
    name: str = ""
    is_active: bool = True
    id: int | None = None
    property_id: int | None = None

    scenario_type = ScenarioType.MONTHLY_INCREASE


@dataclass(frozen=True)
class CombinedScenario:
    """Stand-in scenario for the result of folding every active scenario."""

    name: str = "Combined Scenarios"
    is_active: bool = True
    id: int = 0
    property_id: int | None = None

    scenario_type = ScenarioType.COMBINED


LoanScenario = LumpSumScenario | ExtraMonthlyScenario | MonthlyIncreaseScenario
