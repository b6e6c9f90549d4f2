import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator

from attendly.core.clock import as_utc

Status = Literal["present", "late", "half-day"]


class EmployeeBrief(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    employee_code: str
    name: str
    email: str
    department: str | None = None


class AttendanceRecordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    employee_id: uuid.UUID
    date: str
    check_in_time: datetime | None = None
    check_out_time: datetime | None = None
    status: Status
    total_hours: float = 0.0

    @field_validator("check_in_time", "check_out_time")
    @classmethod
    def ensure_aware(cls, v: datetime | None) -> datetime | None:
        return as_utc(v)


class AttendanceRecordWithEmployee(AttendanceRecordResponse):
    employee: EmployeeBrief | None = None


class NotCheckedIn(BaseModel):
    status: Literal["not-checked-in"] = "not-checked-in"
    date: str


class Summary(BaseModel):
    present: int = 0
    late: int = 0
    half_day: int = 0
    absent: int = 0
    total_hours: float = 0.0
    total_days: int = 0
    working_days: int = 0


class MySummary(Summary):
    working_days_in_month: int


class EmployeeSummary(Summary):
    employee: EmployeeBrief


class DepartmentSummary(Summary):
    department: str
    employees: int


class TodayStatusEntry(BaseModel):
    employee: EmployeeBrief
    status: Literal["present", "late", "half-day", "absent"]
    check_in_time: datetime | None = None
    check_out_time: datetime | None = None
    total_hours: float = 0.0

    @field_validator("check_in_time", "check_out_time")
    @classmethod
    def ensure_aware(cls, v: datetime | None) -> datetime | None:
        return as_utc(v)


class TodayCounts(BaseModel):
    present: int
    absent: int
    late: int
    total: int


class TodayStatusResponse(BaseModel):
    employees: list[TodayStatusEntry]
    summary: TodayCounts


class EmployeeAttendanceResponse(BaseModel):
    employee: EmployeeBrief
    records: list[AttendanceRecordResponse]


class AttendancePage(BaseModel):
    total: int
    page: int
    limit: int
    pages: int
    items: list[AttendanceRecordWithEmployee]
