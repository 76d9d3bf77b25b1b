# tax_estimator/api/v1/routes/tax.py
"""
Tax estimate endpoints: bracket summary, active bracket table, YTD projection.
"""

from __future__ import annotations

import logging
from datetime import datetime

from fastapi import APIRouter, Depends

from tax_estimator.api.v1.deps import get_now, get_tax_year_config
from tax_estimator.api.v1.envelope import ok
from tax_estimator.api.v1.schemas.tax import TaxProjectionRequest, TaxSummaryRequest
from tax_estimator.config.settings import Settings, get_settings
from tax_estimator.domain.models.tax_bracket_config import TaxYearConfig
from tax_estimator.domain.services.tax_calculator import (
    compute_tax_summary,
    estimate_quarterly_payment,
    marginal_rate,
    project_annual_tax,
)

logger = logging.getLogger("api.v1.tax")

router = APIRouter(prefix="/tax", tags=["Tax"])


def _credits(body, cfg: Settings) -> tuple:
    personal = body.personal_amount if body.personal_amount is not None else cfg.DEFAULT_PERSONAL_AMOUNT
    other = body.other_credits if body.other_credits is not None else cfg.DEFAULT_OTHER_CREDITS
    return personal, other


@router.post("/summary", response_model=dict)
async def tax_summary(
    body: TaxSummaryRequest,
    config: TaxYearConfig = Depends(get_tax_year_config),
    cfg: Settings = Depends(get_settings),
):
    """
    Compute tax under every configured schedule for the given net income.

    Returns per-schedule tax, bracket breakdown, effective rate and after-tax income.
    """
    personal, other = _credits(body, cfg)
    result = compute_tax_summary(body.net_income, personal, other, config)

    data = result.to_dict()
    data["tax_year"] = config.tax_year
    data["marginal_rates"] = {
        s.name: str(marginal_rate(result.taxable_income, s.brackets))
        for s in config.schedules
    }
    return ok(data=data)


@router.get("/brackets", response_model=dict)
async def tax_brackets(config: TaxYearConfig = Depends(get_tax_year_config)):
    """Active bracket table."""
    return ok(data=config.to_dict())


@router.post("/projection", response_model=dict)
async def tax_projection(
    body: TaxProjectionRequest,
    config: TaxYearConfig = Depends(get_tax_year_config),
    cfg: Settings = Depends(get_settings),
    now: datetime = Depends(get_now),
):
    """Project full-year tax from year-to-date income and expenses."""
    as_of = body.as_of or now.date()
    personal, other = _credits(body, cfg)
    result = project_annual_tax(
        body.income_ytd, body.expenses_ytd, personal, other,
        as_of=as_of, schedules=config,
    )

    data = result.to_dict()
    data["as_of"] = as_of.isoformat()
    data["quarterly_estimate"] = str(estimate_quarterly_payment(
        body.income_ytd, body.expenses_ytd, personal, other,
        as_of=as_of, schedules=config,
    ))
    return ok(data=data)
