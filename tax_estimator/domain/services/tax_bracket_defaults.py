# tax_estimator/domain/services/tax_bracket_defaults.py
"""
Bracket table resolution.

Order:
1. JSON file named by ``TAX_BRACKETS_FILE`` (validated on load)
2. Hardcoded tables below, keyed by ``TAX_YEAR``

Year-over-year selection stops here: the calculator is handed a table and
never picks one itself.
"""

from __future__ import annotations

import json
import logging
from decimal import Decimal
from pathlib import Path

from tax_estimator.config.settings import Settings, settings as default_settings
from tax_estimator.domain.models.tax_bracket_config import (
    BracketSchedule,
    InvalidBracketConfigError,
    TaxYearConfig,
)

logger = logging.getLogger("tax_bracket_defaults")

FEDERAL = "federal"
ONTARIO = "ontario"

# 2024 federal brackets
FEDERAL_BRACKETS_2024 = BracketSchedule.from_tuples(FEDERAL, [
    (Decimal("0"), Decimal("55867"), Decimal("0.15")),
    (Decimal("55867"), Decimal("111733"), Decimal("0.205")),
    (Decimal("111733"), Decimal("173205"), Decimal("0.26")),
    (Decimal("173205"), Decimal("246752"), Decimal("0.29")),
    (Decimal("246752"), None, Decimal("0.33")),
])

# 2024 Ontario brackets
ONTARIO_BRACKETS_2024 = BracketSchedule.from_tuples(ONTARIO, [
    (Decimal("0"), Decimal("51446"), Decimal("0.0505")),
    (Decimal("51446"), Decimal("102894"), Decimal("0.0915")),
    (Decimal("102894"), Decimal("150000"), Decimal("0.1116")),
    (Decimal("150000"), Decimal("220000"), Decimal("0.1216")),
    (Decimal("220000"), None, Decimal("0.1316")),
])

_HARDCODED: dict[int, TaxYearConfig] = {
    2024: TaxYearConfig(
        tax_year=2024,
        schedules=(FEDERAL_BRACKETS_2024, ONTARIO_BRACKETS_2024),
        source="hardcoded",
    ),
}


def default_tax_year_config(tax_year: int = 2024) -> TaxYearConfig:
    """Return the hardcoded bracket table for *tax_year*."""
    try:
        return _HARDCODED[tax_year]
    except KeyError:
        raise InvalidBracketConfigError(
            f"No built-in bracket table for {tax_year} "
            f"(available: {sorted(_HARDCODED)}); set TAX_BRACKETS_FILE"
        ) from None


def load_tax_year_config(path: str | Path) -> TaxYearConfig:
    """Read and validate a bracket table from a JSON file."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise InvalidBracketConfigError(f"Cannot read bracket file {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise InvalidBracketConfigError(f"Bracket file {path} must contain a JSON object")

    data.setdefault("source", "file")
    config = TaxYearConfig.from_dict(data)
    logger.info(
        "Loaded %d bracket schedules for %s from %s",
        len(config.schedules), config.tax_year, path,
    )
    return config


def resolve_tax_year_config(cfg: Settings | None = None) -> TaxYearConfig:
    """Pick the active bracket table from settings (file first, then hardcoded)."""
    cfg = cfg or default_settings
    if cfg.TAX_BRACKETS_FILE:
        return load_tax_year_config(cfg.TAX_BRACKETS_FILE)
    return default_tax_year_config(cfg.TAX_YEAR)
