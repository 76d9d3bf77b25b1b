# tax_estimator/domain/services/tax_calculator.py
"""
Progressive bracket tax computation.

Computes tax owed under one or more independent bracket schedules (e.g.
federal and provincial), sums them, and derives effective rate and
after-tax income. Everything here is a pure function of its arguments;
no clock reads, no I/O.

Amounts are ``Decimal`` throughout. Nothing is rounded here; rounding is a
display concern (see ``formatting``).

Non-finite input is a caller error, passed through rather than rejected:
NaN income yields NaN tax, infinite income yields infinite tax, and
undefined operations (inf - inf, inf / inf) quietly become NaN.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation, localcontext
from typing import Union

from tax_estimator.domain.models.tax_bracket_config import (
    BracketSchedule,
    TaxBracket,
    TaxYearConfig,
)
from tax_estimator.domain.services.formatting import (
    format_currency,
    format_percent,
    format_rate,
)

logger = logging.getLogger("tax_calculator")

D = lambda x: Decimal(str(x)) if x else Decimal("0")  # noqa: E731

ZERO = Decimal("0")

Schedules = Union[
    TaxYearConfig,
    Iterable[BracketSchedule],
    Mapping[str, Sequence[TaxBracket]],
    None,
]


# ---------------------------------------------------------------------------
# Data models
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BracketDetail:
    """How much of the income one bracket taxed."""
    label: str
    rate: Decimal
    income_in_bracket: Decimal
    tax: Decimal

    def to_dict(self) -> dict:
        return {
            "range": self.label,
            "rate": format_rate(self.rate),
            "income": str(self.income_in_bracket),
            "tax": str(self.tax),
        }


@dataclass(frozen=True)
class TaxCalculationResult:
    """Tax summary across all schedules."""
    taxable_income: Decimal
    per_schedule_tax: dict[str, Decimal]
    total_tax: Decimal
    effective_rate: Decimal          # percentage, e.g. 17.43
    after_tax_income: Decimal        # net income minus total tax
    net_income: Decimal = ZERO
    bracket_details: dict[str, list[BracketDetail]] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "net_income": str(self.net_income),
            "taxable_income": str(self.taxable_income),
            "per_schedule_tax": {k: str(v) for k, v in self.per_schedule_tax.items()},
            "total_tax": str(self.total_tax),
            "effective_rate": str(self.effective_rate),
            "after_tax_income": str(self.after_tax_income),
            "bracket_details": {
                k: [d.to_dict() for d in v] for k, v in self.bracket_details.items()
            },
        }


# ---------------------------------------------------------------------------
# Schedule helpers
# ---------------------------------------------------------------------------

def _normalize_schedules(schedules: Schedules) -> tuple[BracketSchedule, ...]:
    """Turn any accepted schedule container into validated ``BracketSchedule`` objects."""
    if schedules is None:
        from tax_estimator.domain.services.tax_bracket_defaults import resolve_tax_year_config

        schedules = resolve_tax_year_config()

    if isinstance(schedules, TaxYearConfig):
        return schedules.schedules

    if isinstance(schedules, Mapping):
        return tuple(
            b if isinstance(b, BracketSchedule) else BracketSchedule(name=name, brackets=tuple(b))
            for name, b in schedules.items()
        )

    return tuple(schedules)


# ---------------------------------------------------------------------------
# Core computation functions
# ---------------------------------------------------------------------------

@contextmanager
def _pass_through_non_finite():
    """Decimal context where NaN/infinity arithmetic yields NaN instead of raising."""
    with localcontext() as ctx:
        ctx.traps[InvalidOperation] = False
        yield ctx


def _clamp_income(income) -> Decimal:
    """Clamp negative income to zero; NaN is left as is."""
    value = D(income)
    if value.is_nan():
        return value
    return max(value, ZERO)


def _slice(remaining: Decimal, bracket: TaxBracket) -> Decimal:
    """Portion of *remaining* that falls inside *bracket*."""
    width = bracket.width
    if width is None or remaining.is_nan():
        return remaining
    return min(remaining, width)


def compute_schedule_tax(income, brackets: Iterable[TaxBracket]) -> Decimal:
    """
    Tax owed on *income* under a single progressive schedule.

    Each bracket taxes the slice of remaining income that fits in its width;
    the walk stops once nothing is left. Negative income is clamped to zero.
    """
    with _pass_through_non_finite():
        tax = ZERO
        remaining = _clamp_income(income)

        for bracket in brackets:
            if not remaining.is_nan() and remaining <= 0:
                break
            taxable_in_bracket = _slice(remaining, bracket)
            tax += taxable_in_bracket * bracket.rate
            remaining -= taxable_in_bracket

        return tax


def compute_bracket_breakdown(income, brackets: Iterable[TaxBracket]) -> list[BracketDetail]:
    """Per-bracket lines for *income*. The ``tax`` values sum to ``compute_schedule_tax``."""
    with _pass_through_non_finite():
        details: list[BracketDetail] = []
        remaining = _clamp_income(income)

        for bracket in brackets:
            if not remaining.is_nan() and remaining <= 0:
                break
            taxable_in_bracket = _slice(remaining, bracket)
            details.append(BracketDetail(
                label=bracket.label(),
                rate=bracket.rate,
                income_in_bracket=taxable_in_bracket,
                tax=taxable_in_bracket * bracket.rate,
            ))
            remaining -= taxable_in_bracket

        return details


def marginal_rate(income, brackets: Sequence[TaxBracket]) -> Decimal:
    """Rate applied to the next dollar earned above *income*."""
    income = _clamp_income(income)
    if income.is_nan():
        return income
    for bracket in brackets:
        if bracket.max is None or income < bracket.max:
            return bracket.rate
    return ZERO


def compute_tax_summary(
    net_income,
    personal_amount=None,
    other_credits=None,
    schedules: Schedules = None,
) -> TaxCalculationResult:
    """
    Tax summary for *net_income* under every schedule.

    Args:
        net_income: Gross income for the year (may be zero or negative).
        personal_amount: Personal exemption; absent counts as zero.
        other_credits: Other deductible amounts; absent counts as zero.
        schedules: ``TaxYearConfig``, iterable of ``BracketSchedule`` or a
            mapping of name to brackets. ``None`` uses the configured year.

    Schedules are independent: tax under one never offsets another.
    """
    resolved = _normalize_schedules(schedules)

    with _pass_through_non_finite():
        net_income = D(net_income)
        taxable_income = _clamp_income(net_income - D(personal_amount) - D(other_credits))

        per_schedule_tax: dict[str, Decimal] = {}
        bracket_details: dict[str, list[BracketDetail]] = {}
        for schedule in resolved:
            per_schedule_tax[schedule.name] = compute_schedule_tax(taxable_income, schedule)
            bracket_details[schedule.name] = compute_bracket_breakdown(taxable_income, schedule)

        total_tax = sum(per_schedule_tax.values(), ZERO)

        # Undefined for zero income; reported as 0 rather than failing
        if not net_income.is_nan() and net_income > 0:
            effective_rate = total_tax / net_income * 100
        else:
            effective_rate = ZERO

        after_tax_income = net_income - total_tax

    logger.debug(
        "Tax summary: taxable=%s total=%s schedules=%s",
        taxable_income, total_tax, list(per_schedule_tax),
    )

    return TaxCalculationResult(
        taxable_income=taxable_income,
        per_schedule_tax=per_schedule_tax,
        total_tax=total_tax,
        effective_rate=effective_rate,
        after_tax_income=after_tax_income,
        net_income=net_income,
        bracket_details=bracket_details,
    )


# ---------------------------------------------------------------------------
# Year-to-date projection
# ---------------------------------------------------------------------------

def annualize(amount_ytd, as_of: date) -> Decimal:
    """Scale a year-to-date amount to a full year using months elapsed (Jan = 1)."""
    months_elapsed = as_of.month
    return D(amount_ytd) / months_elapsed * 12


def project_annual_tax(
    income_ytd,
    expenses_ytd,
    personal_amount=None,
    other_credits=None,
    *,
    as_of: date,
    schedules: Schedules = None,
) -> TaxCalculationResult:
    """Project full-year tax from year-to-date business income and expenses."""
    projected_income = annualize(income_ytd, as_of)
    projected_expenses = annualize(expenses_ytd, as_of)
    return compute_tax_summary(
        projected_income - projected_expenses,
        personal_amount,
        other_credits,
        schedules,
    )


def estimate_quarterly_payment(
    income_ytd,
    expenses_ytd,
    personal_amount=None,
    other_credits=None,
    *,
    as_of: date,
    schedules: Schedules = None,
) -> Decimal:
    """Quarterly instalment for the ``estimate`` method: projected tax / 4."""
    projection = project_annual_tax(
        income_ytd, expenses_ytd, personal_amount, other_credits,
        as_of=as_of, schedules=schedules,
    )
    return projection.total_tax / 4


# ---------------------------------------------------------------------------
# Plain-text formatter
# ---------------------------------------------------------------------------

def format_tax_summary(result: TaxCalculationResult) -> str:
    """Format a tax summary as a plain-text breakdown."""
    lines = [
        "--- Estimated Tax ---",
        "",
        f"Net Income: {format_currency(result.net_income)}",
        f"Taxable Income: {format_currency(result.taxable_income)}",
        "",
    ]

    for name, tax in result.per_schedule_tax.items():
        lines.append(f"{name.title()} Tax: {format_currency(tax)}")
        for d in result.bracket_details.get(name, []):
            lines.append(
                f"  {d.label} @ {format_rate(d.rate)}: {format_currency(d.tax)}"
            )

    lines.extend([
        "",
        f"Total Tax: {format_currency(result.total_tax)}",
        f"Effective Rate: {format_percent(result.effective_rate)}",
        f"After-Tax Income: {format_currency(result.after_tax_income)}",
    ])
    return "\n".join(lines)
