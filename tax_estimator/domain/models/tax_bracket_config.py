# tax_estimator/domain/models/tax_bracket_config.py
"""
Domain dataclasses for progressive tax bracket configuration.

TaxBracket:      One marginal-rate tier ``[min, max)`` taxed at ``rate``.
BracketSchedule: A named, validated, ascending list of brackets (e.g. federal).
TaxYearConfig:   All schedules that apply for a single tax year.

Schedules are validated once, when they are built. The calculator trusts
them afterwards and never re-checks ordering at call time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Iterator, Sequence


class InvalidBracketConfigError(ValueError):
    """Raised when a bracket table is malformed."""


@dataclass(frozen=True)
class TaxBracket:
    """A single marginal-rate tier. ``max=None`` means unbounded."""

    min: Decimal
    max: Decimal | None
    rate: Decimal  # fraction, e.g. Decimal("0.205")

    def __post_init__(self) -> None:
        object.__setattr__(self, "min", Decimal(str(self.min)))
        if self.max is not None:
            object.__setattr__(self, "max", Decimal(str(self.max)))
        object.__setattr__(self, "rate", Decimal(str(self.rate)))

    @property
    def width(self) -> Decimal | None:
        if self.max is None:
            return None
        return self.max - self.min

    def label(self) -> str:
        if self.max is None:
            return f"${self.min:,.0f}+"
        return f"${self.min:,.0f} - ${self.max:,.0f}"


@dataclass(frozen=True)
class BracketSchedule:
    """A named progressive schedule, e.g. ``federal`` or ``ontario``."""

    name: str
    brackets: tuple[TaxBracket, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "brackets", tuple(self.brackets))
        validate_brackets(self.brackets, name=self.name)

    def __iter__(self) -> Iterator[TaxBracket]:
        return iter(self.brackets)

    def __len__(self) -> int:
        return len(self.brackets)

    @classmethod
    def from_tuples(
        cls, name: str, rows: Sequence[tuple[Any, Any, Any]],
    ) -> BracketSchedule:
        """Build from ``[(min, max_or_None, rate), ...]`` rows."""
        return cls(name=name, brackets=tuple(TaxBracket(lo, hi, rate) for lo, hi, rate in rows))


def validate_brackets(brackets: Sequence[TaxBracket], name: str = "schedule") -> None:
    """Check a bracket list is non-empty, contiguous, ascending and capped by an open tier.

    Raises:
        InvalidBracketConfigError: on the first problem found.
    """
    if not brackets:
        raise InvalidBracketConfigError(f"{name}: bracket list is empty")

    if brackets[0].min != 0:
        raise InvalidBracketConfigError(
            f"{name}: first bracket must start at 0, got {brackets[0].min}"
        )

    last_index = len(brackets) - 1
    for i, bracket in enumerate(brackets):
        if not (Decimal("0") <= bracket.rate <= Decimal("1")):
            raise InvalidBracketConfigError(
                f"{name}: bracket {i} rate {bracket.rate} is outside [0, 1]"
            )

        if bracket.max is None:
            if i != last_index:
                raise InvalidBracketConfigError(
                    f"{name}: only the last bracket may be unbounded (bracket {i})"
                )
        else:
            if i == last_index:
                raise InvalidBracketConfigError(
                    f"{name}: last bracket must be unbounded, got max={bracket.max}"
                )
            if bracket.max <= bracket.min:
                raise InvalidBracketConfigError(
                    f"{name}: bracket {i} has zero or negative width "
                    f"({bracket.min} - {bracket.max})"
                )

        if i > 0:
            prev = brackets[i - 1]
            if bracket.min != prev.max:
                raise InvalidBracketConfigError(
                    f"{name}: bracket {i} starts at {bracket.min} but bracket "
                    f"{i - 1} ends at {prev.max} (unsorted, overlapping or gapped)"
                )


@dataclass(frozen=True)
class TaxYearConfig:
    """All bracket schedules for one tax year."""

    tax_year: int
    schedules: tuple[BracketSchedule, ...] = field(default_factory=tuple)

    # Metadata
    source: str = "hardcoded"  # "hardcoded", "file"

    def __post_init__(self) -> None:
        object.__setattr__(self, "schedules", tuple(self.schedules))
        if not self.schedules:
            raise InvalidBracketConfigError(f"{self.tax_year}: no schedules configured")
        names = [s.name for s in self.schedules]
        if len(set(names)) != len(names):
            raise InvalidBracketConfigError(
                f"{self.tax_year}: duplicate schedule names {names}"
            )

    @property
    def schedule_names(self) -> list[str]:
        return [s.name for s in self.schedules]

    def schedule(self, name: str) -> BracketSchedule:
        for s in self.schedules:
            if s.name == name:
                return s
        raise KeyError(name)

    # ---- serialization ----

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-safe dict."""
        return {
            "tax_year": self.tax_year,
            "schedules": {
                s.name: [
                    {
                        "min": str(b.min),
                        "max": str(b.max) if b.max is not None else None,
                        "rate": str(b.rate),
                    }
                    for b in s.brackets
                ]
                for s in self.schedules
            },
            "source": self.source,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TaxYearConfig:
        """Reconstruct (and re-validate) from a stored JSON dict."""
        try:
            tax_year = int(data["tax_year"])
            raw_schedules = data["schedules"]
            schedules = tuple(
                BracketSchedule(
                    name=name,
                    brackets=tuple(
                        TaxBracket(
                            min=Decimal(str(row["min"])),
                            max=Decimal(str(row["max"])) if row.get("max") is not None else None,
                            rate=Decimal(str(row["rate"])),
                        )
                        for row in rows
                    ),
                )
                for name, rows in raw_schedules.items()
            )
        except InvalidBracketConfigError:
            raise
        except (KeyError, TypeError, ValueError, ArithmeticError, AttributeError) as exc:
            raise InvalidBracketConfigError(f"Malformed bracket config: {exc!r}") from exc

        return cls(
            tax_year=tax_year,
            schedules=schedules,
            source=data.get("source", "file"),
        )
