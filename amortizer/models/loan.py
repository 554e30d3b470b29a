"""Loan amortization data types."""

from dataclasses import dataclass
from enum import Enum
from fractions import Fraction
from math import floor

# Float inputs such as 1/3 are snapped back to the nearest simple ratio,
# but only when that ratio rounds to the very same float
MAX_DENOMINATOR = 1000


class InvalidParameters(ValueError):
    """Loan parameters that cannot produce a finite, complete schedule."""


class RateType(Enum):
    FIXED = "fixed"
    FLOATING = "floating"


class PaymentFrequency(Enum):
    MONTHLY = "monthly"
    SEMI_ANNUAL = "6months"
    YEARLY = "yearly"
    TRI_ANNUAL = "3years"
    QUINARY = "5years"

    @property
    def payments_per_year(self) -> Fraction:
        return _PAYMENTS_PER_YEAR[self]

    @property
    def label(self) -> str:
        return _LABELS[self]


_PAYMENTS_PER_YEAR = {
    PaymentFrequency.MONTHLY: Fraction(12),
    PaymentFrequency.SEMI_ANNUAL: Fraction(2),
    PaymentFrequency.YEARLY: Fraction(1),
    PaymentFrequency.TRI_ANNUAL: Fraction(1, 3),
    PaymentFrequency.QUINARY: Fraction(1, 5),
}

_LABELS = {
    PaymentFrequency.MONTHLY: "monthly",
    PaymentFrequency.SEMI_ANNUAL: "every 6 months",
    PaymentFrequency.YEARLY: "yearly",
    PaymentFrequency.TRI_ANNUAL: "every 3 years",
    PaymentFrequency.QUINARY: "every 5 years",
}


def as_fraction(value: int | float | Fraction) -> Fraction:
    """Exact rational for a user-supplied count (years, payments per year)."""
    if isinstance(value, (int, Fraction)):
        return Fraction(value)
    exact = Fraction(value)
    snapped = exact.limit_denominator(MAX_DENOMINATOR)
    if float(snapped) == value:
        return snapped
    return exact


@dataclass(frozen=True)
class LoanParameters:
    principal: float
    annual_rate_percent: float  # Nominal, e.g. 7.0 for 7%
    term_years: int | float
    payments_per_year: int | float | Fraction = Fraction(12)
    rate_type: RateType = RateType.FIXED

    # Floating rate: one-time change applied from year `after_years + 1`
    floating_rate_change_percent: float = 0.0  # Signed delta, e.g. 0.5 or -0.25
    floating_rate_change_after_years: int = 0

    @classmethod
    def from_frequency(
        cls,
        principal: float,
        annual_rate_percent: float,
        term_years: int | float,
        frequency: PaymentFrequency = PaymentFrequency.MONTHLY,
        **kwargs,
    ) -> "LoanParameters":
        return cls(
            principal=principal,
            annual_rate_percent=annual_rate_percent,
            term_years=term_years,
            payments_per_year=frequency.payments_per_year,
            **kwargs,
        )

    @property
    def is_floating(self) -> bool:
        return self.rate_type == RateType.FLOATING

    @property
    def total_periods(self) -> Fraction:
        """term_years * payments_per_year; whole for any valid loan."""
        return as_fraction(self.term_years) * as_fraction(self.payments_per_year)

    @property
    def period_rate(self) -> float:
        return self.annual_rate_percent / 100 / float(as_fraction(self.payments_per_year))

    @property
    def floating_period_rate(self) -> float:
        rate = self.annual_rate_percent + self.floating_rate_change_percent
        return rate / 100 / float(as_fraction(self.payments_per_year))

    @property
    def periods_before_rate_change(self) -> int:
        """Whole periods completed before the floating change takes effect.

        Fractional boundaries (e.g. a change after 5 years on a 3-year
        frequency) are floored to the last whole period.
        """
        years = as_fraction(self.floating_rate_change_after_years)
        return floor(years * as_fraction(self.payments_per_year))


@dataclass(frozen=True)
class PeriodRecord:
    payment_number: int  # 1-based
    beginning_balance: float
    payment_amount: float
    principal_paid: float
    interest_paid: float
    remaining_balance: float


@dataclass(frozen=True)
class ScheduleSummary:
    payment_per_period: float  # First period's payment
    total_interest: float
    total_principal: float
    total_paid: float
    number_of_payments: int


@dataclass(frozen=True)
class AmortizationSchedule:
    parameters: LoanParameters
    records: tuple[PeriodRecord, ...]
    summary: ScheduleSummary

    def __len__(self) -> int:
        return len(self.records)


@dataclass(frozen=True)
class YearlyBreakdown:
    year: int
    principal: float
    interest: float
    payments: float
    ending_balance: float
