# scripts/estimate_tax.py
"""
Print a tax estimate and safe-harbour instalment plan from the command line.

    python scripts/estimate_tax.py 100000 --prior-year-tax 18000
    python scripts/estimate_tax.py 100000 --as-of 2024-07-01 --brackets brackets.json
"""

import argparse
import sys
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from loguru import logger

from tax_estimator.config.settings import settings
from tax_estimator.core.logging_config import setup_logging
from tax_estimator.domain.models.tax_bracket_config import InvalidBracketConfigError
from tax_estimator.domain.services.instalment_scheduler import (
    calculate_instalments,
    format_instalment_plan,
)
from tax_estimator.domain.services.tax_bracket_defaults import (
    default_tax_year_config,
    load_tax_year_config,
)
from tax_estimator.domain.services.tax_calculator import compute_tax_summary, format_tax_summary


def _decimal(value: str) -> Decimal:
    try:
        return Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}")


def _parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Estimate income tax and instalments")
    parser.add_argument("net_income", type=_decimal)
    parser.add_argument("--personal-amount", type=_decimal, default=Decimal(str(settings.DEFAULT_PERSONAL_AMOUNT)))
    parser.add_argument("--other-credits", type=_decimal, default=Decimal(str(settings.DEFAULT_OTHER_CREDITS)))
    parser.add_argument("--prior-year-tax", type=_decimal, default=None)
    parser.add_argument("--method", default="safe_harbour")
    parser.add_argument("--as-of", type=date.fromisoformat, default=None)
    parser.add_argument("--tax-year", type=int, default=settings.TAX_YEAR)
    parser.add_argument("--brackets", default=settings.TAX_BRACKETS_FILE, help="JSON bracket table")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = _parse_args(argv)
    setup_logging(settings.LOG_LEVEL)

    try:
        config = (
            load_tax_year_config(args.brackets) if args.brackets
            else default_tax_year_config(args.tax_year)
        )
    except InvalidBracketConfigError as exc:
        logger.error("Cannot load brackets: {}", exc)
        return 1

    logger.info("Using {} brackets ({})", config.tax_year, config.source)

    summary = compute_tax_summary(args.net_income, args.personal_amount, args.other_credits, config)
    print(format_tax_summary(summary))

    if args.prior_year_tax is not None:
        now = datetime.combine(args.as_of, datetime.min.time()) if args.as_of else datetime.now()
        plan = calculate_instalments(args.method, args.prior_year_tax, now)
        print()
        print(format_instalment_plan(plan, now))

    return 0


if __name__ == "__main__":
    sys.exit(main())
