"""Canonical loan fixtures used across tests.

Fixture: ₹3,000,000 home loan, 7% nominal, 20yr, monthly payments.
"""

import pytest

from amortizer.models.loan import LoanParameters, PaymentFrequency, RateType


@pytest.fixture
def fixed_params() -> LoanParameters:
    """₹3M at 7% over 20 years, fixed."""
    return LoanParameters.from_frequency(
        principal=3_000_000,
        annual_rate_percent=7.0,
        term_years=20,
        frequency=PaymentFrequency.MONTHLY,
    )


@pytest.fixture
def floating_params() -> LoanParameters:
    """Same loan, rate rises 0.5% after 5 years."""
    return LoanParameters.from_frequency(
        principal=3_000_000,
        annual_rate_percent=7.0,
        term_years=20,
        frequency=PaymentFrequency.MONTHLY,
        rate_type=RateType.FLOATING,
        floating_rate_change_percent=0.5,
        floating_rate_change_after_years=5,
    )


@pytest.fixture
def zero_rate_params() -> LoanParameters:
    """₹1M interest-free over 10 years."""
    return LoanParameters.from_frequency(
        principal=1_000_000,
        annual_rate_percent=0.0,
        term_years=10,
        frequency=PaymentFrequency.MONTHLY,
    )
