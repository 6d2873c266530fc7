import datetime
from enum import Enum
from uuid import uuid4

from pydantic import AliasChoices, BaseModel, Field, model_validator


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


EXPENSE_CATEGORIES = ("Seeds", "Fertilizer", "Pesticides", "Labor", "Machinery", "Utilities", "Other")
INCOME_CATEGORIES = ("Sale", "Subsidy", "Other")

CATEGORIES_BY_TYPE = {
    TransactionType.EXPENSE: EXPENSE_CATEGORIES,
    TransactionType.INCOME: INCOME_CATEGORIES,
}


class TransactionCreate(BaseModel):
    """A ledger entry as entered by the farmer."""

    type: TransactionType = Field(description="Whether money came in or went out.")
    category: str = Field(description="Category allowed for the transaction type.")
    description: str = Field(default="", description="Free text note.")
    amount: float = Field(gt=0, description="Amount in rupees.")
    date: datetime.date = Field(description="Date the transaction happened.")

    @model_validator(mode="after")
    def _check_category(self):
        allowed = CATEGORIES_BY_TYPE[self.type]
        if self.category not in allowed:
            raise ValueError(
                f"Category '{self.category}' is not valid for {self.type.value}. "
                f"Use one of: {', '.join(allowed)}."
            )
        return self


class Transaction(TransactionCreate):
    id: str = Field(
        default_factory=lambda: uuid4().hex,
        validation_alias=AliasChoices("id", "_id"),
        serialization_alias="_id",
    )
    farmer_id: str = Field(description="UUID of the farmer owning this entry.")
    created_at: float = Field(default_factory=lambda: datetime.datetime.now().timestamp())


class LedgerSummary(BaseModel):
    """Totals shown on the Krishi Khata overview cards."""

    total_income: float = 0
    total_expenses: float = 0
    profit_loss: float = 0
    is_profit: bool = True
    transaction_count: int = 0
