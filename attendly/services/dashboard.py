"""Role dashboards assembled from the record store and the aggregation engine."""

from sqlalchemy.ext.asyncio import AsyncSession

from attendly.core.clock import Clock
from attendly.db.models import Employee
from attendly.schemas.attendance import AttendanceRecordResponse, EmployeeBrief, NotCheckedIn
from attendly.schemas.dashboard import EmployeeDashboard, ManagerDashboard, TodayStats
from attendly.services import records as store
from attendly.services.aggregation import (
    department_snapshot,
    recent_days,
    summarize,
    today_snapshot,
    weekly_trend,
)
from attendly.services.workdays import last_n_days, month_range, passed_working_days


async def employee_dashboard(
    db: AsyncSession, employee: Employee, clock: Clock
) -> EmployeeDashboard:
    today = clock.today()
    today_key = today.isoformat()

    start, end = month_range(today.year, today.month)
    month_records = await store.records_in_range(db, start, end, employee_id=employee.id)

    week = last_n_days(today, 7)
    week_records = await store.records_in_range(
        db, week[0].isoformat(), today_key, employee_id=employee.id
    )

    todays = next((r for r in month_records if r.date == today_key), None)
    return EmployeeDashboard(
        today=(
            AttendanceRecordResponse.model_validate(todays)
            if todays is not None
            else NotCheckedIn(date=today_key)
        ),
        monthly=summarize(month_records, passed_working_days(today.year, today.month, today)),
        recent_attendance=recent_days(week, week_records),
    )


async def manager_dashboard(db: AsyncSession, clock: Clock) -> ManagerDashboard:
    today = clock.today()
    today_key = today.isoformat()

    employees = await store.list_employees(db)
    roster_ids = {emp.id for emp in employees}
    todays = [r for r in await store.records_on(db, today_key) if r.employee_id in roster_ids]
    snapshot = today_snapshot(employees, todays)

    week = last_n_days(today, 7)
    week_records = [
        r
        for r in await store.records_in_range(db, week[0].isoformat(), today_key)
        if r.employee_id in roster_ids
    ]

    return ManagerDashboard(
        total_employees=len(employees),
        today_stats=TodayStats(
            present=snapshot.summary.present,
            absent=snapshot.summary.absent,
            late=snapshot.summary.late,
        ),
        absent_employees=[
            EmployeeBrief.model_validate(emp)
            for emp, entry in zip(employees, snapshot.employees)
            if entry.status == "absent"
        ],
        weekly_trend=weekly_trend(week, week_records, len(employees)),
        department_stats=department_snapshot(employees, todays),
    )
