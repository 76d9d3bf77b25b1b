from datetime import date as Date
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, Field


class Transaction(BaseModel):
    """A categorized bank transaction as supplied by the caller."""

    user_id: Optional[str] = None
    amount: Optional[Decimal] = None
    date: Optional[Date] = None
    direction: Optional[Literal["debit", "credit"]] = None
    description: Optional[str] = None


class TaxInstalmentExtraction(BaseModel):
    """A transaction recognised as a tax instalment payment."""

    user_id: str
    amount: Decimal = Field(ge=0)
    date: Date
    method: Literal["estimated", "auto"]
    source: str = "plaid"
    notes: str = ""
