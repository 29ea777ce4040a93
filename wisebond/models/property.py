from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class BondProperty:
    """Current state of a bond as the engine sees it."""

    current_loan_balance: Decimal
    current_interest_rate: Decimal  # Annual, percent (11.25 = 11.25%)
    current_monthly_payment: Decimal
    remaining_term: int  # Months
    loan_start_date: date

    id: int | None = None
    name: str = ""
    original_term: int | None = None  # Months
