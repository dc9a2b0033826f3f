"""
Core Data Models for the Expense Tracker

These models define the schemas for everything the ledger engine
reads and produces:
1. ExpenseRecord - one spending event in the ledger
2. BudgetConfig - the single global monthly budget
3. Outcome models returned by engine operations

DESIGN DECISION: Identifiers are assigned only by the ledger engine.
Nothing outside `expense_tracker.ledger` constructs an ExpenseRecord
with a hand-picked id.
"""

import datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class ExpenseCategory(str, Enum):
    """Supported expense categories."""
    FOOD = "food"
    TRANSPORT = "transport"
    ENTERTAINMENT = "entertainment"
    UTILITIES = "utilities"
    OTHER = "other"

    @classmethod
    def choices(cls) -> list[str]:
        return [category.value for category in cls]


# =============================================================================
# LEDGER MODELS
# =============================================================================

class ExpenseRecord(BaseModel):
    """
    A single expense stored in the ledger.

    The persisted shape matches the ledger document:
    {"id": 1, "category": "food", "date": "2024-07-03",
     "amount": 12.5, "description": "Lunch"}
    """
    model_config = ConfigDict(frozen=True)

    id: int = Field(
        ...,
        ge=1,
        description="Dense 1-based identifier, ordered by insertion"
    )
    category: ExpenseCategory = Field(
        ...,
        description="Expense category"
    )
    date: datetime.date = Field(
        default_factory=datetime.date.today,
        description="Day the expense was recorded"
    )
    amount: Decimal = Field(
        ...,
        gt=0,
        description="Amount spent"
    )
    description: str = Field(
        default="",
        description="Free-text description"
    )

    @field_validator("category", mode="before")
    @classmethod
    def normalize_category(cls, v):
        """Accept categories in any case ("Food", "FOOD")."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_serializer("amount")
    def serialize_amount(self, amount: Decimal) -> float:
        # Ledger documents store amounts as JSON numbers
        return float(amount)


class BudgetConfig(BaseModel):
    """
    The config document.

    `monthly_budget` is None only when the stored document could not
    be read; a fresh config always starts at 0.
    """
    model_config = ConfigDict(populate_by_name=True)

    monthly_budget: Optional[Annotated[Decimal, Field(ge=0)]] = Field(
        default=Decimal("0"),
        alias="monthlyBudget",
        description="Monthly spending limit"
    )

    @property
    def is_defined(self) -> bool:
        return self.monthly_budget is not None

    @field_serializer("monthly_budget")
    def serialize_budget(self, budget: Optional[Decimal]) -> Optional[float]:
        return float(budget) if budget is not None else None


# =============================================================================
# OUTCOME MODELS
# =============================================================================

class BudgetWarning(BaseModel):
    """
    Non-blocking notice that a month's spending went over budget.

    `projected_total` includes the expense being added.
    """

    month: int = Field(..., ge=1, le=12)
    monthly_budget: Decimal
    projected_total: Decimal

    @property
    def overage(self) -> Decimal:
        return self.projected_total - self.monthly_budget


class AddOutcome(BaseModel):
    """Result of adding an expense."""

    expense: ExpenseRecord
    expenses: list[ExpenseRecord]
    budget_warning: Optional[BudgetWarning] = None


class DeleteOutcome(BaseModel):
    """Result of deleting an expense and renumbering the rest."""

    removed: ExpenseRecord
    expenses: list[ExpenseRecord]
    renumbered_count: int = Field(
        default=0,
        ge=0,
        description="How many later records had their id shifted down"
    )


class ExportResult(BaseModel):
    """Result of writing the flat-text export."""

    path: str
    row_count: int = Field(..., ge=1)
