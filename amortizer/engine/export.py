"""CSV export of an amortization schedule.

Monetary fields are rounded half-up on the exact binary value, the same
result JavaScript's toFixed(2) gives, so exported files line up with the
schedules users already have.
"""

import csv
import io
import logging
from decimal import Decimal, ROUND_HALF_UP
from pathlib import Path

from amortizer.config import settings
from amortizer.models.loan import AmortizationSchedule, PeriodRecord

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")

CSV_HEADERS = [
    "Payment #",
    "Beginning Balance",
    "Payment per Period",
    "Principal Paid",
    "Interest Paid",
    "Remaining Balance",
]


def format_money(value: float) -> str:
    return str(Decimal(value).quantize(TWO_PLACES, ROUND_HALF_UP))


def record_to_row(record: PeriodRecord) -> list[str]:
    return [
        str(record.payment_number),
        format_money(record.beginning_balance),
        format_money(record.payment_amount),
        format_money(record.principal_paid),
        format_money(record.interest_paid),
        format_money(record.remaining_balance),
    ]


def schedule_to_csv(schedule: AmortizationSchedule) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for record in schedule.records:
        writer.writerow(record_to_row(record))
    return buf.getvalue()


def write_csv(schedule: AmortizationSchedule, path: str | Path | None = None) -> Path:
    """Write the schedule to `path` (defaults to settings.csv_filename)."""
    out = Path(path or settings.csv_filename)
    out.write_text(schedule_to_csv(schedule), encoding="utf-8", newline="")
    logger.info("Wrote %d rows to %s", len(schedule.records), out)
    return out
