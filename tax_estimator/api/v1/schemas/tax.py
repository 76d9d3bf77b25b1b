# tax_estimator/api/v1/schemas/tax.py
"""Request schemas for tax summary endpoints."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field


class TaxSummaryRequest(BaseModel):
    net_income: Decimal = Field(..., description="Gross business income for the year")
    personal_amount: Decimal | None = Field(
        default=None, ge=0,
        description="Personal exemption; defaults to DEFAULT_PERSONAL_AMOUNT",
    )
    other_credits: Decimal | None = Field(
        default=None, ge=0,
        description="Other deductible credits; defaults to DEFAULT_OTHER_CREDITS",
    )


class TaxProjectionRequest(BaseModel):
    income_ytd: Decimal = Field(..., ge=0)
    expenses_ytd: Decimal = Field(default=Decimal("0"), ge=0)
    personal_amount: Decimal | None = Field(default=None, ge=0)
    other_credits: Decimal | None = Field(default=None, ge=0)
    as_of: date | None = Field(default=None, description="Projection date; defaults to today")
