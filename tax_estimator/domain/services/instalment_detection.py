# tax_estimator/domain/services/instalment_detection.py
"""
Recognise tax instalment payments among already-fetched bank transactions.

Two passes:
- keyword match: debits above a minimum amount whose description mentions
  tax or instalments (``method="estimated"``)
- CRA match: debits to the revenue agency dated close to a quarterly due
  date (``method="auto"``)

Pure functions over caller-supplied transactions; nothing is fetched or saved.
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Iterable

from tax_estimator.config.settings import settings
from tax_estimator.domain.models.transaction import TaxInstalmentExtraction, Transaction
from tax_estimator.domain.services.instalment_scheduler import quarterly_due_dates

logger = logging.getLogger("instalment_detection")

TAX_KEYWORDS = ("cra", "tax", "instalment")
CRA_KEYWORDS = ("cra", "canada revenue agency")
CRA_AUTO_NOTE = "Auto-tagged based on date and CRA match"


def _mentions(description: str | None, keywords: Iterable[str]) -> bool:
    if not description:
        return False
    text = description.lower()
    return any(k in text for k in keywords)


def _to_extraction(tx: Transaction, method: str, notes: str) -> TaxInstalmentExtraction | None:
    # Both fields are required downstream
    if not tx.user_id or tx.date is None:
        return None
    return TaxInstalmentExtraction(
        user_id=tx.user_id,
        amount=abs(tx.amount),
        date=tx.date,
        method=method,
        source="plaid",
        notes=notes,
    )


def is_near_quarterly_due_date(day: date, window_days: int | None = None) -> bool:
    """True when *day* falls within +/- *window_days* of a due date in the same year."""
    window = settings.INSTALMENT_MATCH_WINDOW_DAYS if window_days is None else window_days
    return any(
        abs((day - due).days) <= window
        for _, due in quarterly_due_dates(day.year)
    )


def extract_tax_instalments_from_transactions(
    transactions: Iterable[Transaction],
    min_amount=None,
) -> list[TaxInstalmentExtraction]:
    """Debits above *min_amount* whose description mentions tax or instalments."""
    threshold = Decimal(str(settings.INSTALMENT_MIN_AMOUNT if min_amount is None else min_amount))
    found: list[TaxInstalmentExtraction] = []

    for tx in transactions:
        if tx.direction != "debit" or not tx.amount or tx.amount <= threshold:
            continue
        if not _mentions(tx.description, TAX_KEYWORDS):
            continue
        extraction = _to_extraction(tx, "estimated", tx.description)
        if extraction is not None:
            found.append(extraction)

    logger.debug("Keyword match: %d instalment payments found", len(found))
    return found


def extract_cra_quarterly_payments(
    transactions: Iterable[Transaction],
    window_days: int | None = None,
) -> list[TaxInstalmentExtraction]:
    """Debits to the revenue agency dated near a quarterly due date."""
    found: list[TaxInstalmentExtraction] = []

    for tx in transactions:
        if tx.direction != "debit" or not tx.amount or tx.amount <= 0:
            continue
        if not _mentions(tx.description, CRA_KEYWORDS):
            continue
        if tx.date is None or not is_near_quarterly_due_date(tx.date, window_days):
            continue
        extraction = _to_extraction(tx, "auto", CRA_AUTO_NOTE)
        if extraction is not None:
            found.append(extraction)

    logger.debug("CRA match: %d quarterly payments found", len(found))
    return found
