from typing import Literal

from pydantic import BaseModel

from attendly.schemas.attendance import (
    AttendanceRecordResponse,
    EmployeeBrief,
    NotCheckedIn,
    Summary,
)


class DayStatus(BaseModel):
    date: str
    day_name: str
    status: Literal["present", "late", "half-day", "absent", "weekend"]
    total_hours: float = 0.0


class TrendPoint(BaseModel):
    date: str
    day_name: str
    present: int
    absent: int


class DepartmentSnapshot(BaseModel):
    department: str
    total: int
    present: int
    absent: int


class TodayStats(BaseModel):
    present: int
    absent: int
    late: int


class EmployeeDashboard(BaseModel):
    today: AttendanceRecordResponse | NotCheckedIn
    monthly: Summary
    recent_attendance: list[DayStatus]


class ManagerDashboard(BaseModel):
    total_employees: int
    today_stats: TodayStats
    absent_employees: list[EmployeeBrief]
    weekly_trend: list[TrendPoint]
    department_stats: list[DepartmentSnapshot]
