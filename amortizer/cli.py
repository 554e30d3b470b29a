"""CLI for computing a loan amortization schedule.

Usage:
    python -m amortizer.cli 3000000 7.0 20
    python -m amortizer.cli 3000000 7.0 20 --floating --rate-change 0.5 --change-after 5 --yearly
    python -m amortizer.cli 1000000 8.5 15 --frequency 6months --csv schedule.csv
    python -m amortizer.cli 3000000 7.0 20 --salary 1200000 --extra 5000
"""

import argparse
import asyncio
import logging
import sys

from amortizer.config import settings
from amortizer.data.suggestions import SuggestionClient, frequency_label
from amortizer.engine.amortization import compute_schedule, yearly_breakdown
from amortizer.engine.export import format_money, write_csv
from amortizer.models.loan import (
    AmortizationSchedule,
    InvalidParameters,
    LoanParameters,
    PaymentFrequency,
    RateType,
)


# ── Helpers ──────────────────────────────────────────────────────────────────

def _money(v: float) -> str:
    return f"₹{float(v):,.2f}"


def _header(title: str) -> None:
    print(f"\n{'=' * 64}")
    print(f"  {title}")
    print(f"{'=' * 64}")


# ── Report sections ──────────────────────────────────────────────────────────

def print_summary(schedule: AmortizationSchedule) -> None:
    params = schedule.parameters
    s = schedule.summary
    _header("Loan Summary")
    print(f"  Principal:           {_money(params.principal)}")
    print(f"  Annual rate:         {params.annual_rate_percent:.2f}%")
    print(f"  Term:                {params.term_years:g} years ({s.number_of_payments} payments, "
          f"{frequency_label(params.payments_per_year)})")
    if params.is_floating:
        print(f"  Rate change:         {params.floating_rate_change_percent:+.2f}% "
              f"after {params.floating_rate_change_after_years} years")
    print()
    print(f"  Payment per period:  {_money(s.payment_per_period)}")
    print(f"  Total interest:      {_money(s.total_interest)}")
    print(f"  Total paid:          {_money(s.total_paid)}")
    print()


def print_yearly(schedule: AmortizationSchedule) -> None:
    _header("Yearly Breakdown")
    print(f"  {'Year':>4}  {'Principal':>16}  {'Interest':>16}  {'Balance':>16}")
    for y in yearly_breakdown(schedule):
        print(f"  {y.year:>4}  {_money(y.principal):>16}  {_money(y.interest):>16}  "
              f"{_money(y.ending_balance):>16}")
    print()


def print_schedule(schedule: AmortizationSchedule) -> None:
    _header("Full Amortization Schedule")
    print(f"  {'#':>4}  {'Beginning':>14}  {'Payment':>12}  {'Principal':>12}  "
          f"{'Interest':>12}  {'Remaining':>14}")
    for r in schedule.records:
        print(f"  {r.payment_number:>4}  {format_money(r.beginning_balance):>14}  "
              f"{format_money(r.payment_amount):>12}  {format_money(r.principal_paid):>12}  "
              f"{format_money(r.interest_paid):>12}  {format_money(r.remaining_balance):>14}")
    print()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Home loan amortization schedule")
    parser.add_argument("principal", type=float, help="Loan amount")
    parser.add_argument("rate", type=float, help="Annual interest rate in percent (e.g. 7.0)")
    parser.add_argument("years", type=float, help="Loan term in years")
    parser.add_argument(
        "--frequency",
        choices=[f.value for f in PaymentFrequency],
        default=PaymentFrequency.MONTHLY.value,
        help="Payment frequency (default: monthly)",
    )
    parser.add_argument("--floating", action="store_true", help="Floating rate loan")
    parser.add_argument("--rate-change", type=float, default=0.5, help="Floating rate change in percent (default: 0.5)")
    parser.add_argument("--change-after", type=int, default=5, help="Years before the rate changes (default: 5)")
    parser.add_argument("--yearly", action="store_true", help="Show yearly breakdown")
    parser.add_argument("--full", action="store_true", help="Show every payment")
    parser.add_argument("--csv", nargs="?", const=settings.csv_filename, help="Write the schedule to a CSV file")
    parser.add_argument("--salary", type=float, help="Annual salary, for prepayment suggestions")
    parser.add_argument("--extra", type=float, help="Additional affordable amount per payment, for suggestions")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=settings.log_level)

    params = LoanParameters.from_frequency(
        principal=args.principal,
        annual_rate_percent=args.rate,
        term_years=args.years,
        frequency=PaymentFrequency(args.frequency),
        rate_type=RateType.FLOATING if args.floating else RateType.FIXED,
        floating_rate_change_percent=args.rate_change,
        floating_rate_change_after_years=args.change_after,
    )

    try:
        schedule = compute_schedule(params)
    except InvalidParameters as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    print_summary(schedule)
    if args.yearly:
        print_yearly(schedule)
    if args.full:
        print_schedule(schedule)
    if args.csv:
        path = write_csv(schedule, args.csv)
        print(f"  Schedule written to {path}")

    if args.salary is not None or args.extra is not None:
        result = asyncio.run(SuggestionClient().get_suggestions(params, args.salary, args.extra))
        _header("Prepayment Suggestions")
        print(result.text if result.ok else f"  {result.error}")
        print()

    return 0


if __name__ == "__main__":
    sys.exit(main())
