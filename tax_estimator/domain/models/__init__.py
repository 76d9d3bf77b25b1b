"""Domain value objects: bracket tables, instalment plans, transactions."""

from tax_estimator.domain.models.instalment import (
    InstalmentCalculation,
    InstalmentMethod,
    InstalmentResult,
    Quarter,
)
from tax_estimator.domain.models.tax_bracket_config import (
    BracketSchedule,
    InvalidBracketConfigError,
    TaxBracket,
    TaxYearConfig,
)
from tax_estimator.domain.models.transaction import TaxInstalmentExtraction, Transaction

__all__ = [
    # Bracket config
    "BracketSchedule",
    "InvalidBracketConfigError",
    "TaxBracket",
    "TaxYearConfig",
    # Instalments
    "InstalmentCalculation",
    "InstalmentMethod",
    "InstalmentResult",
    "Quarter",
    # Transactions
    "TaxInstalmentExtraction",
    "Transaction",
]
