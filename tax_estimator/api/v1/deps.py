# tax_estimator/api/v1/deps.py
"""
FastAPI dependencies for the v1 API layer.

The bracket table and the clock are both resolved here, at the edge, so the
domain services stay pure and tests can override either one.
"""

from __future__ import annotations

from datetime import datetime

from fastapi import Depends

from tax_estimator.config.settings import Settings, get_settings
from tax_estimator.domain.models.tax_bracket_config import TaxYearConfig
from tax_estimator.domain.services.tax_bracket_defaults import resolve_tax_year_config


def get_tax_year_config(cfg: Settings = Depends(get_settings)) -> TaxYearConfig:
    """Active bracket table (file or hardcoded)."""
    return resolve_tax_year_config(cfg)


def get_now() -> datetime:
    """Evaluation instant for requests that do not pass ``as_of``."""
    return datetime.now()
