"""
Folding attendance records into summaries.

Functions here take already-loaded records and employees and never touch the
database, so every aggregate can be tested with plain objects. Record
objects need `employee_id`, `date`, `status`, `total_hours` and, for the
daily views, `check_in_time` / `check_out_time`; employees need `id` and
`department`.
"""

from collections import defaultdict
from collections.abc import Iterable, Sequence
from datetime import date

from attendly.schemas.attendance import (
    DepartmentSummary,
    EmployeeBrief,
    EmployeeSummary,
    Summary,
    TodayCounts,
    TodayStatusEntry,
    TodayStatusResponse,
)
from attendly.schemas.dashboard import DayStatus, DepartmentSnapshot, TrendPoint
from attendly.services.status import HALF_DAY, LATE, PRESENT
from attendly.services.workdays import implicit_absences, is_working_day

UNASSIGNED_DEPARTMENT = "Unassigned"
_ATTENDED = (PRESENT, LATE, HALF_DAY)


def _total_hours(records: Iterable) -> float:
    return round(sum(r.total_hours or 0 for r in records), 2)


def _department(employee) -> str:
    return employee.department or UNASSIGNED_DEPARTMENT


def _group_by_employee(records: Iterable) -> dict:
    grouped: dict = defaultdict(list)
    for record in records:
        grouped[record.employee_id].append(record)
    return grouped


def summarize(records: Sequence, working_days_passed: int) -> Summary:
    """Status counts and hours for one employee's records over a period."""
    return Summary(
        present=sum(1 for r in records if r.status == PRESENT),
        late=sum(1 for r in records if r.status == LATE),
        half_day=sum(1 for r in records if r.status == HALF_DAY),
        absent=implicit_absences(working_days_passed, len(records)),
        total_hours=_total_hours(records),
        total_days=len(records),
        working_days=working_days_passed,
    )


def summarize_roster(
    employees: Sequence, records: Iterable, working_days_passed: int
) -> list[EmployeeSummary]:
    """One summary per employee, including employees without any record."""
    by_employee = _group_by_employee(records)
    return [
        EmployeeSummary(
            employee=EmployeeBrief.model_validate(emp),
            **summarize(by_employee.get(emp.id, []), working_days_passed).model_dump(),
        )
        for emp in employees
    ]


def summarize_by_department(
    employees: Sequence, records: Iterable, working_days_passed: int
) -> list[DepartmentSummary]:
    by_employee = _group_by_employee(records)
    members: dict[str, list] = defaultdict(list)
    for emp in employees:
        members[_department(emp)].append(emp)

    result = []
    for department in sorted(members):
        totals = Summary(working_days=working_days_passed)
        for emp in members[department]:
            s = summarize(by_employee.get(emp.id, []), working_days_passed)
            totals.present += s.present
            totals.late += s.late
            totals.half_day += s.half_day
            totals.absent += s.absent
            totals.total_hours += s.total_hours
            totals.total_days += s.total_days
        totals.total_hours = round(totals.total_hours, 2)
        result.append(
            DepartmentSummary(
                department=department,
                employees=len(members[department]),
                **totals.model_dump(),
            )
        )
    return result


def today_snapshot(employees: Sequence, records: Iterable) -> TodayStatusResponse:
    """Per-employee status for a single day; no record means absent."""
    by_employee = {r.employee_id: r for r in records}
    entries = []
    for emp in employees:
        record = by_employee.get(emp.id)
        entries.append(
            TodayStatusEntry(
                employee=EmployeeBrief.model_validate(emp),
                status=record.status if record else "absent",
                check_in_time=record.check_in_time if record else None,
                check_out_time=record.check_out_time if record else None,
                total_hours=(record.total_hours or 0) if record else 0,
            )
        )

    counts = TodayCounts(
        present=sum(1 for e in entries if e.status in _ATTENDED),
        absent=sum(1 for e in entries if e.status == "absent"),
        late=sum(1 for e in entries if e.status == LATE),
        total=len(entries),
    )
    return TodayStatusResponse(employees=entries, summary=counts)


def department_snapshot(employees: Sequence, records: Iterable) -> list[DepartmentSnapshot]:
    """Headcount and attendance per department for the day the records cover."""
    attended = {r.employee_id for r in records}
    totals: dict[str, int] = defaultdict(int)
    present: dict[str, int] = defaultdict(int)
    for emp in employees:
        dept = _department(emp)
        totals[dept] += 1
        if emp.id in attended:
            present[dept] += 1

    return [
        DepartmentSnapshot(
            department=dept,
            total=totals[dept],
            present=present[dept],
            absent=totals[dept] - present[dept],
        )
        for dept in sorted(totals)
    ]


def weekly_trend(
    days: Sequence[date], records: Iterable, total_employees: int
) -> list[TrendPoint]:
    """Records per calendar day. Weekends are kept, unlike the monthly summary."""
    per_day: dict[str, int] = defaultdict(int)
    for record in records:
        per_day[record.date] += 1

    trend = []
    for d in days:
        key = d.isoformat()
        trend.append(
            TrendPoint(
                date=key,
                day_name=d.strftime("%a"),
                present=per_day[key],
                absent=max(0, total_employees - per_day[key]),
            )
        )
    return trend


def recent_days(days: Sequence[date], records: Iterable) -> list[DayStatus]:
    """One employee's status per day, `weekend`/`absent` when there is no record."""
    by_date = {r.date: r for r in records}
    result = []
    for d in days:
        key = d.isoformat()
        record = by_date.get(key)
        if record is not None:
            status = record.status
        elif is_working_day(d):
            status = "absent"
        else:
            status = "weekend"
        result.append(
            DayStatus(
                date=key,
                day_name=d.strftime("%a"),
                status=status,
                total_hours=(record.total_hours or 0) if record else 0,
            )
        )
    return result
