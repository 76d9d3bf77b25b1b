# tax_estimator/api/v1/routes/instalments.py
"""
Instalment endpoints: safe-harbour plan and payment detection.
"""

from __future__ import annotations

import logging
from datetime import datetime

from fastapi import APIRouter, Depends

from tax_estimator.api.v1.deps import get_now
from tax_estimator.api.v1.envelope import ok
from tax_estimator.api.v1.schemas.instalments import (
    InstalmentDetectRequest,
    InstalmentPlanRequest,
)
from tax_estimator.domain.services.instalment_detection import (
    extract_cra_quarterly_payments,
    extract_tax_instalments_from_transactions,
)
from tax_estimator.domain.services.instalment_scheduler import (
    calculate_instalments,
    days_until,
    format_quarter_name,
)

logger = logging.getLogger("api.v1.instalments")

router = APIRouter(prefix="/instalments", tags=["Instalments"])


@router.post("", response_model=dict)
async def instalment_plan(
    body: InstalmentPlanRequest,
    now: datetime = Depends(get_now),
):
    """
    Safe-harbour instalment plan for the calendar year containing ``as_of``.

    Non-eligible users get ``is_eligible: false`` with empty lists.
    """
    as_of = body.as_of or now
    result = calculate_instalments(body.method, body.prior_year_tax, as_of)

    data = result.to_dict()
    data["as_of"] = as_of.isoformat()
    data["next_due_date"] = (
        result.next_instalments[0].due_date.isoformat() if result.next_instalments else None
    )
    for entry, inst in zip(
        data["instalments"] + data["next_instalments"] + data["overdue_instalments"],
        result.instalments + result.next_instalments + result.overdue_instalments,
    ):
        entry["label"] = format_quarter_name(inst.quarter)
        entry["days_until_due"] = days_until(inst.due_date, as_of)

    return ok(data=data)


@router.post("/detect", response_model=dict)
async def detect_instalment_payments(body: InstalmentDetectRequest):
    """Find tax instalment payments among the supplied transactions."""
    keyword_matches = extract_tax_instalments_from_transactions(body.transactions)
    cra_matches = extract_cra_quarterly_payments(body.transactions)

    logger.info(
        "Instalment detection: %d transactions, %d keyword, %d CRA",
        len(body.transactions), len(keyword_matches), len(cra_matches),
    )

    return ok(data={
        "keyword_matches": [m.model_dump(mode="json") for m in keyword_matches],
        "cra_matches": [m.model_dump(mode="json") for m in cra_matches],
    })
