"""Schedule routes: JSON schedule and CSV download."""

from dataclasses import asdict

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

from amortizer.api.schemas import (
    LoanRequest,
    PeriodRecordResponse,
    ScheduleResponse,
    SummaryResponse,
    YearlyBreakdownResponse,
)
from amortizer.config import settings
from amortizer.engine.amortization import compute_schedule, yearly_breakdown
from amortizer.engine.export import schedule_to_csv
from amortizer.models.loan import (
    AmortizationSchedule,
    InvalidParameters,
    LoanParameters,
    PaymentFrequency,
    RateType,
)

router = APIRouter(prefix="/api/v1", tags=["schedule"])


def build_parameters(req: LoanRequest) -> LoanParameters:
    """Convert a request into engine parameters, rejecting unknown enums with 422."""
    try:
        frequency = PaymentFrequency(req.payment_frequency)
        rate_type = RateType(req.rate_type)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return LoanParameters.from_frequency(
        principal=req.principal,
        annual_rate_percent=req.annual_rate_percent,
        term_years=req.term_years,
        frequency=frequency,
        rate_type=rate_type,
        floating_rate_change_percent=req.floating_rate_change_percent,
        floating_rate_change_after_years=req.floating_rate_change_after_years,
    )


def _compute(req: LoanRequest) -> AmortizationSchedule:
    params = build_parameters(req)
    try:
        return compute_schedule(params)
    except InvalidParameters as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.post("/schedule", response_model=ScheduleResponse)
async def get_schedule(req: LoanRequest):
    """Full amortization schedule with summary and yearly totals."""
    schedule = _compute(req)
    return ScheduleResponse(
        summary=SummaryResponse(**asdict(schedule.summary)),
        schedule=[PeriodRecordResponse(**asdict(r)) for r in schedule.records],
        yearly=[YearlyBreakdownResponse(**asdict(y)) for y in yearly_breakdown(schedule)],
    )


@router.post("/schedule/csv")
async def download_schedule_csv(req: LoanRequest):
    """Amortization schedule as a CSV attachment."""
    schedule = _compute(req)
    return Response(
        content=schedule_to_csv(schedule),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{settings.csv_filename}"'},
    )
