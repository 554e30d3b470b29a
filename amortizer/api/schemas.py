"""Pydantic schemas for API request/response models."""

from pydantic import BaseModel, Field

MAX_TERM_YEARS = 100


# ---- Request schemas ----

class LoanRequest(BaseModel):
    principal: float = Field(..., description="Loan amount")
    annual_rate_percent: float = Field(..., description="Nominal annual rate in percent, e.g. 7.0")
    term_years: float = Field(..., le=MAX_TERM_YEARS, description="Loan term in years")
    payment_frequency: str = Field("monthly", description="monthly | 6months | yearly | 3years | 5years")
    rate_type: str = Field("fixed", description="fixed | floating")

    # Floating rate only
    floating_rate_change_percent: float = 0.0
    floating_rate_change_after_years: int = 0


class SuggestionRequest(LoanRequest):
    annual_salary: float | None = None
    additional_affordability: float | None = Field(
        None, description="Extra amount the borrower can pay each period"
    )


# ---- Response schemas ----

class PeriodRecordResponse(BaseModel):
    payment_number: int
    beginning_balance: float
    payment_amount: float
    principal_paid: float
    interest_paid: float
    remaining_balance: float


class SummaryResponse(BaseModel):
    payment_per_period: float
    total_interest: float
    total_principal: float
    total_paid: float
    number_of_payments: int


class YearlyBreakdownResponse(BaseModel):
    year: int
    principal: float
    interest: float
    payments: float
    ending_balance: float


class ScheduleResponse(BaseModel):
    summary: SummaryResponse
    schedule: list[PeriodRecordResponse]
    yearly: list[YearlyBreakdownResponse] = []


class SuggestionResponse(BaseModel):
    status: str  # "success" | "failure"
    text: str | None = None
    error: str | None = None
