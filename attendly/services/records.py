"""
Attendance record store.

All reads and writes of `attendance_records` go through here. Each mutation
is a single commit; the `(employee_id, date)` unique constraint is the only
guard against concurrent duplicate check-ins.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from attendly.core.clock import Clock, as_utc
from attendly.core.errors import (
    AlreadyCheckedInError,
    AlreadyCheckedOutError,
    NotCheckedInError,
    NotFoundError,
    ValidationError,
)
from attendly.db.models import AttendanceRecord, Employee
from attendly.services.status import classify_check_in, classify_check_out

logger = logging.getLogger(__name__)


def parse_day(value: str, field: str = "date") -> str:
    """Validate a YYYY-MM-DD query value and return it unchanged."""
    message = f"'{field}' must be a date in YYYY-MM-DD format"
    # strptime alone accepts unpadded months and days
    if len(value) != 10:
        raise ValidationError(message)
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        raise ValidationError(message)
    return value


async def get_record(
    db: AsyncSession, employee_id: uuid.UUID, day: str
) -> AttendanceRecord | None:
    result = await db.execute(
        select(AttendanceRecord).where(
            AttendanceRecord.employee_id == employee_id,
            AttendanceRecord.date == day,
        )
    )
    return result.scalar_one_or_none()


async def check_in(db: AsyncSession, employee: Employee, clock: Clock) -> AttendanceRecord:
    now = clock.now()
    today = clock.today().isoformat()
    # Rollback expires loaded instances
    code = employee.employee_code

    if await get_record(db, employee.id, today) is not None:
        raise AlreadyCheckedInError()

    record = AttendanceRecord(
        employee_id=employee.id,
        date=today,
        check_in_time=now,
        status=classify_check_in(now),
        total_hours=0.0,
    )
    db.add(record)
    try:
        await db.commit()
    except IntegrityError:
        # Lost the race against a concurrent check-in for the same day
        await db.rollback()
        logger.info("Duplicate check-in rejected by constraint: employee=%s date=%s", code, today)
        raise AlreadyCheckedInError()
    await db.refresh(record)

    logger.info("Check-in: employee=%s date=%s status=%s", code, today, record.status)
    return record


async def check_out(db: AsyncSession, employee: Employee, clock: Clock) -> AttendanceRecord:
    now = clock.now()
    today = clock.today().isoformat()

    record = await get_record(db, employee.id, today)
    if record is None or record.check_in_time is None:
        raise NotCheckedInError()
    if record.check_out_time is not None:
        raise AlreadyCheckedOutError()

    status, total_hours = classify_check_out(as_utc(record.check_in_time), now, record.status)
    record.check_out_time = now
    record.total_hours = total_hours
    record.status = status
    await db.commit()
    await db.refresh(record)

    logger.info(
        "Check-out: employee=%s date=%s hours=%.2f status=%s",
        employee.employee_code, today, total_hours, status,
    )
    return record


async def records_in_range(
    db: AsyncSession,
    start: str,
    end: str,
    employee_id: uuid.UUID | None = None,
    with_employee: bool = False,
) -> Sequence[AttendanceRecord]:
    stmt = select(AttendanceRecord).where(AttendanceRecord.date.between(start, end))
    if employee_id is not None:
        stmt = stmt.where(AttendanceRecord.employee_id == employee_id)
    if with_employee:
        stmt = stmt.options(selectinload(AttendanceRecord.employee))
    stmt = stmt.order_by(AttendanceRecord.date.desc(), AttendanceRecord.id)
    result = await db.execute(stmt)
    return result.scalars().all()


async def records_on(
    db: AsyncSession, day: str, with_employee: bool = False
) -> Sequence[AttendanceRecord]:
    return await records_in_range(db, day, day, with_employee=with_employee)


async def paginate_records(
    db: AsyncSession,
    *,
    employee_id: uuid.UUID | None = None,
    day: str | None = None,
    start: str | None = None,
    end: str | None = None,
    status: str | None = None,
    employee_name: str | None = None,
    department: str | None = None,
    page: int = 1,
    limit: int = 20,
) -> tuple[int, Sequence[AttendanceRecord]]:
    """Filtered records, newest first, with their employees loaded."""
    conditions = []
    if day:
        conditions.append(AttendanceRecord.date == day)
    elif start and end:
        conditions.append(AttendanceRecord.date.between(start, end))
    if status:
        conditions.append(AttendanceRecord.status == status)
    if employee_id is not None:
        conditions.append(AttendanceRecord.employee_id == employee_id)
    if employee_name or department:
        emp_q = select(Employee.id)
        if employee_name:
            emp_q = emp_q.where(Employee.name.ilike(f"%{employee_name}%"))
        if department:
            emp_q = emp_q.where(Employee.department.ilike(f"%{department}%"))
        conditions.append(AttendanceRecord.employee_id.in_(emp_q))

    count_result = await db.execute(
        select(func.count()).select_from(AttendanceRecord).where(*conditions)
    )
    total = int(count_result.scalar_one())

    stmt = (
        select(AttendanceRecord)
        .where(*conditions)
        .options(selectinload(AttendanceRecord.employee))
        .order_by(AttendanceRecord.date.desc(), AttendanceRecord.id)
        .offset((page - 1) * limit)
        .limit(limit)
    )
    result = await db.execute(stmt)
    return total, result.scalars().all()


async def list_employees(db: AsyncSession, department: str | None = None) -> Sequence[Employee]:
    """Roster of non-manager employees in registration order."""
    stmt = select(Employee).where(Employee.role == "employee")
    if department is not None:
        stmt = stmt.where(Employee.department == department)
    stmt = stmt.order_by(Employee.created_at, Employee.employee_code)
    result = await db.execute(stmt)
    return result.scalars().all()


async def get_employee(db: AsyncSession, employee_id: uuid.UUID) -> Employee:
    result = await db.execute(select(Employee).where(Employee.id == employee_id))
    employee = result.scalar_one_or_none()
    if employee is None:
        raise NotFoundError("Employee not found")
    return employee
