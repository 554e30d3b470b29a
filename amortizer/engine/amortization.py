"""Amortization schedule computation.

Pure functions: LoanParameters in, dataclass out. No I/O.

Arithmetic is binary floating point throughout so a schedule reproduces the
classic annuity figures to the last bit; rounding to cents happens only at
the export edge.
"""

import logging
import math
from fractions import Fraction

from amortizer.models.loan import (
    AmortizationSchedule,
    InvalidParameters,
    LoanParameters,
    PeriodRecord,
    ScheduleSummary,
    YearlyBreakdown,
    as_fraction,
)

logger = logging.getLogger(__name__)


def _finite(name: str, value) -> float:
    if isinstance(value, bool):
        raise InvalidParameters(f"{name} must be a number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        raise InvalidParameters(f"{name} must be a number, got {value!r}")
    if not math.isfinite(number):
        raise InvalidParameters(f"{name} must be finite, got {value!r}")
    return number


def validate_parameters(params: LoanParameters) -> int:
    """Reject parameters that would yield a degenerate schedule.

    Returns the whole number of payment periods.

    Raises:
        InvalidParameters: naming the first offending field.
    """
    if _finite("principal", params.principal) <= 0:
        raise InvalidParameters("principal must be positive")
    annual_rate = _finite("annual_rate_percent", params.annual_rate_percent)
    if annual_rate < 0:
        raise InvalidParameters("annual_rate_percent must not be negative")
    if _finite("term_years", params.term_years) <= 0:
        raise InvalidParameters("term_years must be positive")
    if _finite("payments_per_year", params.payments_per_year) <= 0:
        raise InvalidParameters("payments_per_year must be positive")

    total = params.total_periods
    if total.denominator != 1:
        raise InvalidParameters(
            f"term_years * payments_per_year must be a whole number of periods, got {float(total):g}"
        )
    if total < 1:
        raise InvalidParameters("loan must have at least one payment period")

    if params.is_floating:
        change = _finite("floating_rate_change_percent", params.floating_rate_change_percent)
        after = _finite("floating_rate_change_after_years", params.floating_rate_change_after_years)
        if after < 0 or not after.is_integer():
            raise InvalidParameters("floating_rate_change_after_years must be a non-negative whole number")
        if annual_rate + change < 0:
            raise InvalidParameters("floating rate change would make the annual rate negative")

    return int(total)


def _finite_result(name: str, value: float) -> float:
    if not math.isfinite(value):
        raise InvalidParameters(f"{name} is not finite; the inputs are too large to amortize")
    return value


def level_payment(balance: float, period_rate: float, periods: int) -> float:
    """Payment that retires `balance` in `periods` equal installments.

    Uses the annuity formula P * r / (1 - (1 + r)^-n); straight-line P / n
    when the rate is zero, and the whole balance when no periods remain.
    """
    if periods <= 0:
        return balance
    if period_rate > 0:
        return balance * period_rate / (1 - (1 + period_rate) ** -periods)
    return balance / periods


def compute_schedule(params: LoanParameters) -> AmortizationSchedule:
    """Generate the complete amortization schedule for a loan.

    Floating-rate loans re-amortize the carried balance once, at the first
    period of year `floating_rate_change_after_years + 1`, over the periods
    that remain. The last period always pays off the exact remaining balance.
    """
    n_periods = validate_parameters(params)

    rate = params.period_rate
    pmt = _finite_result("payment", level_payment(float(params.principal), rate, n_periods))

    change_period = None
    if params.is_floating:
        change_period = params.periods_before_rate_change + 1

    records: list[PeriodRecord] = []
    balance = float(params.principal)

    for period in range(1, n_periods + 1):
        if period == change_period:
            rate = params.floating_period_rate
            remaining_periods = n_periods - params.periods_before_rate_change
            pmt = _finite_result("payment after rate change", level_payment(balance, rate, remaining_periods))
            logger.debug(
                "Rate change at period %d: %.4f%%/period over %d periods, payment %.2f",
                period, rate * 100, remaining_periods, pmt,
            )

        interest = _finite_result("interest", balance * rate)
        principal_paid = _finite_result("principal", pmt - interest)

        # Final payment clears whatever balance is left
        if period == n_periods:
            principal_paid = balance
            pmt = _finite_result("final payment", principal_paid + interest)

        balance -= principal_paid

        records.append(PeriodRecord(
            payment_number=period,
            beginning_balance=balance + principal_paid,
            payment_amount=pmt,
            principal_paid=principal_paid,
            interest_paid=interest,
            remaining_balance=balance if balance > 0 else 0.0,
        ))

        if balance < 0:
            balance = 0.0

    summary = summarize(records)
    logger.debug(
        "Computed %d-period schedule: payment %.2f, total interest %.2f",
        n_periods, summary.payment_per_period, summary.total_interest,
    )
    return AmortizationSchedule(parameters=params, records=tuple(records), summary=summary)


def summarize(records: list[PeriodRecord] | tuple[PeriodRecord, ...]) -> ScheduleSummary:
    """Totals over a schedule; payment per period is the first period's payment."""
    total_interest = 0.0
    total_principal = 0.0
    total_paid = 0.0
    for r in records:
        total_interest += r.interest_paid
        total_principal += r.principal_paid
        total_paid += r.payment_amount

    return ScheduleSummary(
        payment_per_period=records[0].payment_amount if records else 0.0,
        total_interest=total_interest,
        total_principal=total_principal,
        total_paid=total_paid,
        number_of_payments=len(records),
    )


def loan_year(payment_number: int, payments_per_year) -> int:
    """1-based loan year in which a payment falls."""
    return math.ceil(Fraction(payment_number) / as_fraction(payments_per_year))


def yearly_breakdown(schedule: AmortizationSchedule) -> list[YearlyBreakdown]:
    """Aggregate a schedule by loan year.

    Years without a payment (frequencies longer than a year) are skipped.
    """
    ppy = schedule.parameters.payments_per_year
    yearly: list[YearlyBreakdown] = []
    year_principal = 0.0
    year_interest = 0.0
    year_payments = 0.0

    for i, r in enumerate(schedule.records):
        year_principal += r.principal_paid
        year_interest += r.interest_paid
        year_payments += r.payment_amount

        year = loan_year(r.payment_number, ppy)
        is_last = i == len(schedule.records) - 1
        if is_last or loan_year(r.payment_number + 1, ppy) != year:
            yearly.append(YearlyBreakdown(
                year=year,
                principal=year_principal,
                interest=year_interest,
                payments=year_payments,
                ending_balance=r.remaining_balance,
            ))
            year_principal = 0.0
            year_interest = 0.0
            year_payments = 0.0

    return yearly
