"""CSV rendering of attendance records for the manager export."""

import csv
import io
from collections.abc import Iterable
from datetime import datetime

from attendly.core.clock import as_utc
from attendly.core.config import settings

HEADER = (
    "Employee ID",
    "Name",
    "Email",
    "Department",
    "Date",
    "Check In",
    "Check Out",
    "Status",
    "Total Hours",
)


def _local_time(value: datetime | None, fmt: str) -> str:
    if value is None:
        return ""
    return as_utc(value).astimezone().strftime(fmt)


def _hours(value: float | None) -> str:
    if value is None:
        return ""
    return f"{value:.2f}".rstrip("0").rstrip(".")


def _row(record, time_format: str) -> list[str]:
    employee = record.employee
    return [
        employee.employee_code if employee else "",
        employee.name if employee else "",
        employee.email if employee else "",
        (employee.department or "") if employee else "",
        record.date or "",
        _local_time(record.check_in_time, time_format),
        _local_time(record.check_out_time, time_format),
        record.status or "",
        _hours(record.total_hours),
    ]


def to_delimited_text(records: Iterable, time_format: str | None = None) -> str:
    """
    Render records (with `employee` loaded) as CSV.

    Only fields containing a delimiter, quote or line break are quoted;
    missing values become empty strings.
    """
    time_format = time_format or settings.EXPORT_TIME_FORMAT
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(HEADER)
    for record in records:
        writer.writerow(_row(record, time_format))
    return buffer.getvalue()
