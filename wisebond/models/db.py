"""SQLAlchemy ORM models for the persisted property and scenario rows.

Scenario rows keep the flat, nullable-column shape: one column group per
scenario type, with only the group matching ``type`` filled in. The
``*_from_record`` helpers turn rows into the engine's value types.
"""

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from wisebond.models.property import BondProperty
from wisebond.models.scenario import (
    ExtraMonthlyScenario,
    IncreaseFrequency,
    LoanScenario,
    LumpSumScenario,
    MonthlyIncreaseScenario,
    ScenarioType,
    Trigger,
)


class Base(DeclarativeBase):
    pass


class PropertyRecord(Base):
    __tablename__ = "properties"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), onupdate=func.now())

    name: Mapped[str] = mapped_column(String(255), default="")
    address: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Loan state
    current_loan_balance: Mapped[Decimal] = mapped_column(Numeric(14, 2))
    current_interest_rate: Mapped[Decimal] = mapped_column(Numeric(6, 3))  # Annual percent
    current_monthly_payment: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    remaining_term: Mapped[int] = mapped_column(Integer)  # Months
    original_term: Mapped[int | None] = mapped_column(Integer, nullable=True)
    loan_start_date: Mapped[date] = mapped_column(Date)

    scenarios: Mapped[list["LoanScenarioRecord"]] = relationship(
        back_populates="property", cascade="all, delete-orphan"
    )


class LoanScenarioRecord(Base):
    __tablename__ = "loan_scenarios"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    property_id: Mapped[int] = mapped_column(ForeignKey("properties.id"), index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), onupdate=func.now())

    name: Mapped[str] = mapped_column(String(255))
    type: Mapped[str] = mapped_column(String(32))  # lump_sum, extra_monthly, monthly_increase
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    # Triggers are stored as strings: ISO date or payment number, with a *_type column
    lump_sum_amount: Mapped[Decimal | None] = mapped_column(Numeric(14, 2), nullable=True)
    lump_sum_date: Mapped[str | None] = mapped_column(String(20), nullable=True)
    lump_sum_date_type: Mapped[str | None] = mapped_column(String(20), nullable=True)

    extra_monthly_amount: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    extra_monthly_start_date: Mapped[str | None] = mapped_column(String(20), nullable=True)
    extra_monthly_start_type: Mapped[str | None] = mapped_column(String(20), nullable=True)
    extra_monthly_end_date: Mapped[str | None] = mapped_column(String(20), nullable=True)
    extra_monthly_end_type: Mapped[str | None] = mapped_column(String(20), nullable=True)
    extra_monthly_duration: Mapped[int | None] = mapped_column(Integer, nullable=True)

    monthly_increase_amount: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    monthly_increase_start_date: Mapped[str | None] = mapped_column(String(20), nullable=True)
    monthly_increase_start_type: Mapped[str | None] = mapped_column(String(20), nullable=True)
    monthly_increase_frequency: Mapped[str | None] = mapped_column(String(20), nullable=True)

    property: Mapped["PropertyRecord"] = relationship(back_populates="scenarios")


def property_from_record(record: PropertyRecord) -> BondProperty:
    return BondProperty(
        current_loan_balance=Decimal(record.current_loan_balance),
        current_interest_rate=Decimal(record.current_interest_rate),
        current_monthly_payment=Decimal(record.current_monthly_payment),
        remaining_term=record.remaining_term,
        loan_start_date=record.loan_start_date,
        id=record.id,
        name=record.name or "",
        original_term=record.original_term,
    )


def _required(record: LoanScenarioRecord, *columns: str) -> None:
    missing = [c for c in columns if getattr(record, c) is None]
    if missing:
        raise ValueError(
            f"Scenario {record.id} ({record.type}) is missing {', '.join(missing)}"
        )


def _trigger(raw: str | None, kind: str | None) -> Trigger | None:
    if raw is None:
        return None
    return Trigger.parse(raw, kind or "date")


def scenario_from_record(record: LoanScenarioRecord) -> LoanScenario:
    """Build the typed scenario for a stored row.

    Raises ValueError for an unknown type or a missing required column.
    """
    try:
        scenario_type = ScenarioType(record.type)
    except ValueError:
        raise ValueError(f"Unknown scenario type {record.type!r}") from None

    common = dict(
        name=record.name,
        is_active=bool(record.is_active),
        id=record.id,
        property_id=record.property_id,
    )

    if scenario_type is ScenarioType.LUMP_SUM:
        _required(record, "lump_sum_amount", "lump_sum_date")
        return LumpSumScenario(
            amount=Decimal(record.lump_sum_amount),
            trigger=_trigger(record.lump_sum_date, record.lump_sum_date_type),
            **common,
        )

    if scenario_type is ScenarioType.EXTRA_MONTHLY:
        _required(record, "extra_monthly_amount", "extra_monthly_start_date")
        return ExtraMonthlyScenario(
            amount=Decimal(record.extra_monthly_amount),
            start=_trigger(record.extra_monthly_start_date, record.extra_monthly_start_type),
            end=_trigger(record.extra_monthly_end_date, record.extra_monthly_end_type),
            duration_months=record.extra_monthly_duration,
            **common,
        )

    if scenario_type is ScenarioType.MONTHLY_INCREASE:
        _required(record, "monthly_increase_amount", "monthly_increase_start_date")
        return MonthlyIncreaseScenario(
            amount=Decimal(record.monthly_increase_amount),
            start=_trigger(record.monthly_increase_start_date, record.monthly_increase_start_type),
            frequency=IncreaseFrequency(record.monthly_increase_frequency or "once"),
            **common,
        )

    raise ValueError(f"Scenario type {record.type!r} cannot be stored")
