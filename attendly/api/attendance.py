"""
Attendance API routes.

Employee routes act on the caller's own records; manager routes see the
whole roster. Calendar days are compared as YYYY-MM-DD strings.
"""

import logging
import math
import uuid

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from attendly.core.clock import Clock, get_clock
from attendly.core.errors import ValidationError
from attendly.core.middleware import get_current_user, require_role
from attendly.db.models import Employee
from attendly.db.session import get_db
from attendly.schemas.attendance import (
    AttendancePage,
    AttendanceRecordResponse,
    AttendanceRecordWithEmployee,
    DepartmentSummary,
    EmployeeAttendanceResponse,
    EmployeeBrief,
    EmployeeSummary,
    MySummary,
    NotCheckedIn,
    Status,
    TodayStatusResponse,
)
from attendly.services import records as store
from attendly.services.aggregation import (
    summarize,
    summarize_by_department,
    summarize_roster,
    today_snapshot,
)
from attendly.services.export import to_delimited_text
from attendly.services.workdays import (
    count_working_days,
    days_in_month,
    month_range,
    passed_working_days,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _period(month: int | None, year: int | None, clock: Clock) -> tuple[int, int]:
    today = clock.today()
    return month or today.month, year or today.year


def _date_filters(
    date: str | None, start_date: str | None, end_date: str | None
) -> tuple[str | None, str | None, str | None]:
    if date:
        return store.parse_day(date, "date"), None, None
    if start_date or end_date:
        if not (start_date and end_date):
            raise ValidationError("Both 'start_date' and 'end_date' are required for a range")
        start = store.parse_day(start_date, "start_date")
        end = store.parse_day(end_date, "end_date")
        if start > end:
            raise ValidationError("'start_date' must not be after 'end_date'")
        return None, start, end
    return None, None, None


def _employee_filter(value: str | None) -> uuid.UUID | None:
    if not value or value == "all":
        return None
    try:
        return uuid.UUID(value)
    except ValueError:
        raise ValidationError("'employee_id' must be a UUID or 'all'")


def _page(total: int, page: int, limit: int, items) -> AttendancePage:
    return AttendancePage(
        total=total,
        page=page,
        limit=limit,
        pages=math.ceil(total / limit) if total > 0 else 1,
        items=[AttendanceRecordWithEmployee.model_validate(r) for r in items],
    )


# ---------------------------------------------------------------------------
# Employee endpoints
# ---------------------------------------------------------------------------


@router.post(
    "/checkin",
    response_model=AttendanceRecordResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Check in for today",
)
async def check_in(
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
    current_user: Employee = Depends(get_current_user),
) -> AttendanceRecordResponse:
    record = await store.check_in(db, current_user, clock)
    return AttendanceRecordResponse.model_validate(record)


@router.post(
    "/checkout",
    response_model=AttendanceRecordResponse,
    summary="Check out for today",
)
async def check_out(
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
    current_user: Employee = Depends(get_current_user),
) -> AttendanceRecordResponse:
    record = await store.check_out(db, current_user, clock)
    return AttendanceRecordResponse.model_validate(record)


@router.get(
    "/today",
    response_model=AttendanceRecordResponse | NotCheckedIn,
    summary="Today's record or a not-checked-in placeholder",
)
async def get_today(
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
    current_user: Employee = Depends(get_current_user),
) -> AttendanceRecordResponse | NotCheckedIn:
    today = clock.today().isoformat()
    record = await store.get_record(db, current_user.id, today)
    if record is None:
        return NotCheckedIn(date=today)
    return AttendanceRecordResponse.model_validate(record)


@router.get(
    "/my-history",
    response_model=AttendancePage,
    summary="Own attendance history (paginated, newest first)",
)
async def get_my_history(
    month: int | None = Query(default=None, ge=1, le=12),
    year: int | None = Query(default=None, ge=1970, le=9999),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=31, ge=1, le=366),
    db: AsyncSession = Depends(get_db),
    current_user: Employee = Depends(get_current_user),
) -> AttendancePage:
    start = end = None
    if month and year:
        start, end = month_range(year, month)
    elif year:
        start, end = f"{year:04d}-01-01", f"{year:04d}-12-31"
    elif month:
        raise ValidationError("'year' is required when 'month' is given")

    total, items = await store.paginate_records(
        db, employee_id=current_user.id, start=start, end=end, page=page, limit=limit
    )
    return _page(total, page, limit, items)


@router.get(
    "/my-summary",
    response_model=MySummary,
    summary="Own monthly summary",
)
async def get_my_summary(
    month: int | None = Query(default=None, ge=1, le=12),
    year: int | None = Query(default=None, ge=1970, le=9999),
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
    current_user: Employee = Depends(get_current_user),
) -> MySummary:
    m, y = _period(month, year, clock)
    start, end = month_range(y, m)
    records = await store.records_in_range(db, start, end, employee_id=current_user.id)
    summary = summarize(records, passed_working_days(y, m, clock.today()))
    return MySummary(
        **summary.model_dump(),
        working_days_in_month=count_working_days(y, m, days_in_month(y, m)),
    )


# ---------------------------------------------------------------------------
# Manager endpoints
# ---------------------------------------------------------------------------


@router.get(
    "/all",
    response_model=AttendancePage,
    summary="Filtered attendance of all employees",
)
async def get_all_attendance(
    date: str | None = Query(default=None, description="YYYY-MM-DD"),
    start_date: str | None = Query(default=None, description="YYYY-MM-DD"),
    end_date: str | None = Query(default=None, description="YYYY-MM-DD"),
    status_filter: Status | None = Query(default=None, alias="status"),
    employee: str | None = Query(default=None, description="Name, partial, case-insensitive"),
    department: str | None = Query(default=None),
    employee_id: str | None = Query(default=None, description="Employee UUID or 'all'"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
    _current_user: Employee = Depends(require_role("manager")),
) -> AttendancePage:
    day, start, end = _date_filters(date, start_date, end_date)
    total, items = await store.paginate_records(
        db,
        employee_id=_employee_filter(employee_id),
        day=day,
        start=start,
        end=end,
        status=status_filter,
        employee_name=employee,
        department=department,
        page=page,
        limit=limit,
    )
    return _page(total, page, limit, items)


@router.get(
    "/employee/{employee_id}",
    response_model=EmployeeAttendanceResponse,
    summary="One employee's profile and records",
)
async def get_employee_attendance(
    employee_id: uuid.UUID,
    month: int | None = Query(default=None, ge=1, le=12),
    year: int | None = Query(default=None, ge=1970, le=9999),
    db: AsyncSession = Depends(get_db),
    _current_user: Employee = Depends(require_role("manager")),
) -> EmployeeAttendanceResponse:
    employee = await store.get_employee(db, employee_id)
    if month and year:
        start, end = month_range(year, month)
    else:
        start, end = "0000-01-01", "9999-12-31"
    records = await store.records_in_range(db, start, end, employee_id=employee.id)
    return EmployeeAttendanceResponse(
        employee=EmployeeBrief.model_validate(employee),
        records=[AttendanceRecordResponse.model_validate(r) for r in records],
    )


@router.get(
    "/summary",
    response_model=list[EmployeeSummary],
    summary="Monthly summary for every employee",
)
async def get_team_summary(
    month: int | None = Query(default=None, ge=1, le=12),
    year: int | None = Query(default=None, ge=1970, le=9999),
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
    _current_user: Employee = Depends(require_role("manager")),
) -> list[EmployeeSummary]:
    m, y = _period(month, year, clock)
    start, end = month_range(y, m)
    employees = await store.list_employees(db)
    records = await store.records_in_range(db, start, end)
    return summarize_roster(employees, records, passed_working_days(y, m, clock.today()))


@router.get(
    "/summary/departments",
    response_model=list[DepartmentSummary],
    summary="Monthly summary per department",
)
async def get_department_summary(
    month: int | None = Query(default=None, ge=1, le=12),
    year: int | None = Query(default=None, ge=1970, le=9999),
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
    _current_user: Employee = Depends(require_role("manager")),
) -> list[DepartmentSummary]:
    m, y = _period(month, year, clock)
    start, end = month_range(y, m)
    employees = await store.list_employees(db)
    records = await store.records_in_range(db, start, end)
    return summarize_by_department(
        employees, records, passed_working_days(y, m, clock.today())
    )


@router.get(
    "/export",
    summary="Download attendance as CSV",
    response_class=Response,
    responses={200: {"content": {"text/csv": {}}}},
)
async def export_attendance(
    start_date: str | None = Query(default=None, description="YYYY-MM-DD"),
    end_date: str | None = Query(default=None, description="YYYY-MM-DD"),
    employee_id: str | None = Query(default=None, description="Employee UUID or 'all'"),
    db: AsyncSession = Depends(get_db),
    current_user: Employee = Depends(require_role("manager")),
) -> Response:
    _, start, end = _date_filters(None, start_date, end_date)

    eid = _employee_filter(employee_id)

    records = await store.records_in_range(
        db, start or "0000-01-01", end or "9999-12-31", employee_id=eid, with_employee=True
    )
    logger.info(
        "Export by %s: %d records (range=%s..%s, employee=%s)",
        current_user.employee_code, len(records), start, end, eid or "all",
    )
    return Response(
        content=to_delimited_text(records),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=attendance-report.csv"},
    )


@router.get(
    "/today-status",
    response_model=TodayStatusResponse,
    summary="Today's status for every employee",
)
async def get_today_status(
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
    _current_user: Employee = Depends(require_role("manager")),
) -> TodayStatusResponse:
    employees = await store.list_employees(db)
    records = await store.records_on(db, clock.today().isoformat())
    return today_snapshot(employees, records)
