# tax_estimator/domain/services/instalment_scheduler.py
"""
Quarterly tax instalment schedule (safe-harbour method).

Safe-harbour instalments are one quarter of last year's total tax, due on
fixed dates: March 15, June 15, September 15 and December 15. Dates are not
shifted for weekends or holidays.

The evaluation instant ``now`` is always passed in. A due date counts from
the midnight that starts its day, so on the due day itself any instant after
midnight already reports the instalment as overdue.

Once December 15 has passed, the plan has no upcoming instalments. It does
not roll into next year; a fresh ``now`` in January produces the new dates.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, time
from decimal import Decimal

from tax_estimator.domain.models.instalment import (
    InstalmentCalculation,
    InstalmentMethod,
    InstalmentResult,
    Quarter,
)
from tax_estimator.domain.services.formatting import format_currency

logger = logging.getLogger("instalment_scheduler")

DUE_DAY = 15
MAX_NEXT_INSTALMENTS = 2

_QUARTER_NAMES = {
    Quarter.Q1: "1st Quarter",
    Quarter.Q2: "2nd Quarter",
    Quarter.Q3: "3rd Quarter",
    Quarter.Q4: "4th Quarter",
}


def _as_instant(now: date | datetime) -> datetime:
    if isinstance(now, datetime):
        return now
    return datetime.combine(now, time.min)


def _due_instant(due_date: date, now: datetime) -> datetime:
    return datetime.combine(due_date, time.min, tzinfo=now.tzinfo)


def quarterly_due_dates(year: int) -> list[tuple[Quarter, date]]:
    """The four fixed instalment due dates for *year*, in quarter order."""
    return [(q, date(year, q.due_month, DUE_DAY)) for q in Quarter]


def calculate_instalments(
    method: InstalmentMethod | str | None,
    prior_year_tax,
    now: date | datetime,
) -> InstalmentResult:
    """
    Build the instalment plan for the calendar year containing *now*.

    Only ``safe_harbour`` with a non-zero prior-year tax is eligible; any
    other combination returns ``InstalmentResult.not_eligible()``.

    Returns:
        Up to two upcoming instalments (due at or after *now*), all overdue
        instalments, both in quarter order, and the per-quarter amount.
    """
    if InstalmentMethod.parse(method) is not InstalmentMethod.SAFE_HARBOUR or not prior_year_tax:
        return InstalmentResult.not_eligible()

    quarterly_amount = Decimal(str(prior_year_tax)) / 4
    instant = _as_instant(now)

    instalments = [
        InstalmentCalculation(
            quarter=quarter,
            due_date=due,
            amount=quarterly_amount,
            is_overdue=_due_instant(due, instant) < instant,
        )
        for quarter, due in quarterly_due_dates(instant.year)
    ]

    upcoming = [i for i in instalments if not i.is_overdue][:MAX_NEXT_INSTALMENTS]
    overdue = [i for i in instalments if i.is_overdue]

    logger.debug(
        "Instalments for %s: quarterly=%s upcoming=%s overdue=%s",
        instant.year, quarterly_amount,
        [i.quarter.value for i in upcoming], [i.quarter.value for i in overdue],
    )

    return InstalmentResult(
        next_instalments=tuple(upcoming),
        overdue_instalments=tuple(overdue),
        quarterly_amount=quarterly_amount,
        is_eligible=True,
        instalments=tuple(instalments),
    )


def get_next_instalment_due_date(
    method: InstalmentMethod | str | None,
    prior_year_tax,
    now: date | datetime,
) -> date | None:
    """Due date of the next upcoming instalment, or ``None`` if there is none this year."""
    result = calculate_instalments(method, prior_year_tax, now)
    if not result.next_instalments:
        return None
    return result.next_instalments[0].due_date


def format_quarter_name(quarter: Quarter | str) -> str:
    """``Q2`` -> ``2nd Quarter``. Unrecognized values are returned unchanged."""
    try:
        return _QUARTER_NAMES[Quarter(quarter)]
    except ValueError:
        return quarter


def days_until(due_date: date, now: date | datetime) -> int:
    """Whole days from *now* to *due_date*; negative once the date has passed."""
    today = now.date() if isinstance(now, datetime) else now
    return (due_date - today).days


def format_instalment_plan(result: InstalmentResult, now: date | datetime) -> str:
    """Format an instalment plan as a plain-text reminder."""
    if not result.is_eligible:
        return "No safe-harbour instalments scheduled."

    lines = [
        "--- Tax Instalments ---",
        f"Quarterly Amount: {format_currency(result.quarterly_amount, cents=True)}",
        "",
    ]

    if result.next_instalments:
        lines.append("Upcoming:")
        for i in result.next_instalments:
            lines.append(
                f"  {format_quarter_name(i.quarter)} - {i.due_date:%B %d, %Y} "
                f"({days_until(i.due_date, now)} days): "
                f"{format_currency(i.amount, cents=True)}"
            )
    else:
        lines.append("No upcoming instalments this year.")

    if result.overdue_instalments:
        lines.append("")
        lines.append("Overdue:")
        for i in result.overdue_instalments:
            lines.append(
                f"  {format_quarter_name(i.quarter)} - {i.due_date:%B %d, %Y}: "
                f"{format_currency(i.amount, cents=True)}"
            )

    return "\n".join(lines)
