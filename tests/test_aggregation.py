"""
Aggregation engine tests on plain in-memory records.

Tests:
  - summarize counts/hours/absence, including the zero-record month
  - roster and department folds
  - today snapshot, department snapshot, weekly trend, recent days
"""

import uuid
from datetime import date
from types import SimpleNamespace

from attendly.services.aggregation import (
    UNASSIGNED_DEPARTMENT,
    department_snapshot,
    recent_days,
    summarize,
    summarize_by_department,
    summarize_roster,
    today_snapshot,
    weekly_trend,
)


def _employee(code: str, name: str, department: str | None) -> SimpleNamespace:
    return SimpleNamespace(
        id=uuid.uuid4(),
        employee_code=code,
        name=name,
        email=f"{code.lower()}@company.com",
        department=department,
    )


def _record(employee, day: str, status: str, hours: float = 8.0) -> SimpleNamespace:
    return SimpleNamespace(
        employee_id=employee.id,
        date=day,
        status=status,
        total_hours=hours,
        check_in_time=None,
        check_out_time=None,
    )


ALICE = _employee("EMP002", "Alice", "Engineering")
BOB = _employee("EMP003", "Bob", "Engineering")
CARA = _employee("EMP004", "Cara", None)


class TestSummarize:
    def test_counts_by_stored_status(self) -> None:
        records = [
            _record(ALICE, "2024-06-03", "present", 8.25),
            _record(ALICE, "2024-06-04", "late", 7.5),
            _record(ALICE, "2024-06-05", "half-day", 3.1),
            _record(ALICE, "2024-06-06", "present", 8.0),
        ]
        s = summarize(records, working_days_passed=5)
        assert (s.present, s.late, s.half_day) == (2, 1, 1)
        assert s.absent == 1
        assert s.total_hours == 26.85
        assert s.total_days == 4
        assert s.working_days == 5

    def test_zero_records_full_absence(self) -> None:
        s = summarize([], working_days_passed=20)
        assert s.model_dump() == {
            "present": 0,
            "late": 0,
            "half_day": 0,
            "absent": 20,
            "total_hours": 0.0,
            "total_days": 0,
            "working_days": 20,
        }

    def test_absent_floored_at_zero(self) -> None:
        # Weekend records inflate counts without raising the denominator
        records = [_record(ALICE, f"2024-06-0{d}", "present") for d in (1, 2, 3)]
        s = summarize(records, working_days_passed=1)
        assert s.absent == 0
        assert s.present == 3

    def test_future_month_has_no_absence(self) -> None:
        assert summarize([], working_days_passed=0).absent == 0

    def test_missing_hours_count_as_zero(self) -> None:
        records = [_record(ALICE, "2024-06-03", "present", hours=None)]
        assert summarize(records, 1).total_hours == 0.0


class TestRoster:
    def test_every_employee_gets_a_summary(self) -> None:
        records = [
            _record(ALICE, "2024-06-03", "present"),
            _record(ALICE, "2024-06-04", "late"),
            _record(BOB, "2024-06-03", "half-day", 2.0),
        ]
        result = summarize_roster([ALICE, BOB, CARA], records, working_days_passed=3)

        assert [r.employee.name for r in result] == ["Alice", "Bob", "Cara"]
        alice, bob, cara = result
        assert (alice.present, alice.late, alice.absent) == (1, 1, 1)
        assert (bob.half_day, bob.absent, bob.total_hours) == (1, 2, 2.0)
        assert (cara.present, cara.late, cara.half_day, cara.absent, cara.total_hours) == (
            0, 0, 0, 3, 0.0,
        )

    def test_by_department_groups_and_sums(self) -> None:
        records = [
            _record(ALICE, "2024-06-03", "present", 8.0),
            _record(BOB, "2024-06-03", "late", 7.25),
        ]
        result = summarize_by_department([ALICE, BOB, CARA], records, working_days_passed=2)
        by_dept = {d.department: d for d in result}

        eng = by_dept["Engineering"]
        assert eng.employees == 2
        assert (eng.present, eng.late, eng.absent) == (1, 1, 2)
        assert eng.total_hours == 15.25

        unassigned = by_dept[UNASSIGNED_DEPARTMENT]
        assert unassigned.employees == 1
        assert unassigned.absent == 2


class TestDailyViews:
    def test_today_snapshot(self) -> None:
        records = [
            _record(ALICE, "2024-06-03", "late"),
            _record(BOB, "2024-06-03", "half-day"),
        ]
        snap = today_snapshot([ALICE, BOB, CARA], records)
        statuses = {e.employee.name: e.status for e in snap.employees}
        assert statuses == {"Alice": "late", "Bob": "half-day", "Cara": "absent"}
        assert snap.summary.model_dump() == {"present": 2, "absent": 1, "late": 1, "total": 3}

    def test_department_snapshot(self) -> None:
        records = [_record(ALICE, "2024-06-03", "present")]
        result = {d.department: d for d in department_snapshot([ALICE, BOB, CARA], records)}
        assert (result["Engineering"].total, result["Engineering"].present) == (2, 1)
        assert result["Engineering"].absent == 1
        assert result[UNASSIGNED_DEPARTMENT].present == 0

    def test_weekly_trend_keeps_weekends(self) -> None:
        days = [date(2024, 6, d) for d in (1, 2, 3)]  # Sat, Sun, Mon
        records = [
            _record(ALICE, "2024-06-01", "present"),
            _record(ALICE, "2024-06-03", "present"),
            _record(BOB, "2024-06-03", "late"),
        ]
        trend = weekly_trend(days, records, total_employees=3)
        assert [(p.date, p.present, p.absent) for p in trend] == [
            ("2024-06-01", 1, 2),
            ("2024-06-02", 0, 3),
            ("2024-06-03", 2, 1),
        ]
        assert trend[0].day_name == "Sat"

    def test_recent_days_marks_weekends_and_absences(self) -> None:
        days = [date(2024, 6, d) for d in (1, 3, 4)]
        records = [_record(ALICE, "2024-06-04", "late", 6.5)]
        result = recent_days(days, records)
        assert [(d.date, d.status, d.total_hours) for d in result] == [
            ("2024-06-01", "weekend", 0),
            ("2024-06-03", "absent", 0),
            ("2024-06-04", "late", 6.5),
        ]
