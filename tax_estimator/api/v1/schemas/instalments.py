# tax_estimator/api/v1/schemas/instalments.py
"""Request schemas for instalment endpoints."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from tax_estimator.domain.models.transaction import Transaction


class InstalmentPlanRequest(BaseModel):
    method: str | None = Field(default=None, description="safe_harbour | estimate | not_required")
    prior_year_tax: Decimal | None = Field(default=None)
    as_of: datetime | None = Field(default=None, description="Evaluation instant; defaults to now")


class InstalmentDetectRequest(BaseModel):
    transactions: list[Transaction] = Field(default_factory=list)
