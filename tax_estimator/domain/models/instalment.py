# tax_estimator/domain/models/instalment.py
"""
Value objects for quarterly tax instalment planning.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum


class InstalmentMethod(str, Enum):
    """How the user sizes their quarterly prepayments."""

    SAFE_HARBOUR = "safe_harbour"  # one quarter of last year's total tax
    ESTIMATE = "estimate"          # one quarter of this year's projected tax
    NOT_REQUIRED = "not_required"

    @classmethod
    def parse(cls, value: InstalmentMethod | str | None) -> InstalmentMethod | None:
        """Return the member whose value matches exactly, or ``None`` for absent/unknown values."""
        if value is None or isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


class Quarter(str, Enum):
    Q1 = "Q1"
    Q2 = "Q2"
    Q3 = "Q3"
    Q4 = "Q4"

    @property
    def due_month(self) -> int:
        return {"Q1": 3, "Q2": 6, "Q3": 9, "Q4": 12}[self.value]


@dataclass(frozen=True)
class InstalmentCalculation:
    """One quarter's instalment. ``is_overdue`` is only valid for the ``now`` it was built with."""

    quarter: Quarter
    due_date: date
    amount: Decimal
    is_overdue: bool

    def to_dict(self) -> dict:
        return {
            "quarter": self.quarter.value,
            "due_date": self.due_date.isoformat(),
            "amount": str(self.amount),
            "is_overdue": self.is_overdue,
        }


@dataclass(frozen=True)
class InstalmentResult:
    """Instalment plan for the calendar year containing the evaluation instant.

    ``instalments`` holds all four quarters; ``next_instalments`` is capped at two.
    """

    next_instalments: tuple[InstalmentCalculation, ...] = field(default_factory=tuple)
    overdue_instalments: tuple[InstalmentCalculation, ...] = field(default_factory=tuple)
    quarterly_amount: Decimal = Decimal("0")
    is_eligible: bool = False
    instalments: tuple[InstalmentCalculation, ...] = field(default_factory=tuple)

    @classmethod
    def not_eligible(cls) -> InstalmentResult:
        return cls()

    def to_dict(self) -> dict:
        return {
            "instalments": [i.to_dict() for i in self.instalments],
            "next_instalments": [i.to_dict() for i in self.next_instalments],
            "overdue_instalments": [i.to_dict() for i in self.overdue_instalments],
            "quarterly_amount": str(self.quarterly_amount),
            "is_eligible": self.is_eligible,
        }
