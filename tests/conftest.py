"""Shared test fixtures for the tax estimator test suite."""

from datetime import date, datetime
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from tax_estimator.api.v1.deps import get_now
from tax_estimator.domain.models.tax_bracket_config import BracketSchedule
from tax_estimator.domain.models.transaction import Transaction
from tax_estimator.domain.services.tax_bracket_defaults import (
    FEDERAL_BRACKETS_2024,
    ONTARIO_BRACKETS_2024,
    default_tax_year_config,
)
from tax_estimator.main import app


@pytest.fixture
def federal() -> BracketSchedule:
    return FEDERAL_BRACKETS_2024


@pytest.fixture
def ontario() -> BracketSchedule:
    return ONTARIO_BRACKETS_2024


@pytest.fixture
def config_2024():
    return default_tax_year_config(2024)


@pytest.fixture
def mid_year() -> datetime:
    """Noon on July 1st 2024: Q1 and Q2 have passed, Q3 and Q4 are ahead."""
    return datetime(2024, 7, 1, 12, 0)


@pytest.fixture
def sample_transactions() -> list[Transaction]:
    """Mix of instalment payments and ordinary spending."""
    return [
        Transaction(
            user_id="u1", amount=Decimal("2500.00"), date=date(2024, 3, 14),
            direction="debit", description="CRA TAX INSTALMENT",
        ),
        Transaction(
            user_id="u1", amount=Decimal("2500.00"), date=date(2024, 6, 20),
            direction="debit", description="Online payment - Canada Revenue Agency",
        ),
        Transaction(
            user_id="u1", amount=Decimal("64.20"), date=date(2024, 6, 15),
            direction="debit", description="Grocery store",
        ),
        Transaction(
            user_id="u1", amount=Decimal("3000.00"), date=date(2024, 9, 15),
            direction="credit", description="CRA refund",
        ),
        Transaction(
            user_id="u1", amount=Decimal("80.00"), date=date(2024, 12, 15),
            direction="debit", description="Property tax adjustment",
        ),
    ]


@pytest.fixture
def client(mid_year):
    app.dependency_overrides[get_now] = lambda: mid_year
    yield TestClient(app)
    app.dependency_overrides.clear()
