"""
Dashboard tests.

Tests:
  - employee dashboard: today, monthly summary, last 7 days with weekends
  - manager dashboard: today stats, absent list, weekly trend, departments
"""

from __future__ import annotations

from datetime import datetime

from httpx import AsyncClient

from attendly.core.clock import FixedClock
from tests.helpers import attend


class TestEmployeeDashboard:
    async def test_dashboard_without_records(
        self, client: AsyncClient, employee: dict
    ) -> None:
        resp = await client.get("/api/dashboard/employee", headers=employee["headers"])
        assert resp.status_code == 200, resp.text
        data = resp.json()
        assert data["today"] == {"status": "not-checked-in", "date": "2024-06-03"}
        assert data["monthly"]["absent"] == 1
        assert len(data["recent_attendance"]) == 7

    async def test_recent_days_and_month(
        self, client: AsyncClient, clock: FixedClock, employee: dict
    ) -> None:
        await attend(client, clock, employee["headers"], datetime(2024, 6, 3, 9, 0), datetime(2024, 6, 3, 17, 0))
        await attend(client, clock, employee["headers"], datetime(2024, 6, 4, 9, 45), datetime(2024, 6, 4, 17, 0))

        clock.set(datetime(2024, 6, 5, 12, 0))
        resp = await client.get("/api/dashboard/employee", headers=employee["headers"])
        assert resp.status_code == 200, resp.text
        data = resp.json()

        assert data["today"]["status"] == "not-checked-in"
        monthly = data["monthly"]
        assert (monthly["present"], monthly["late"], monthly["absent"]) == (1, 1, 1)
        assert monthly["working_days"] == 3

        recent = [(d["date"], d["status"]) for d in data["recent_attendance"]]
        assert recent == [
            ("2024-05-30", "absent"),
            ("2024-05-31", "absent"),
            ("2024-06-01", "weekend"),
            ("2024-06-02", "weekend"),
            ("2024-06-03", "present"),
            ("2024-06-04", "late"),
            ("2024-06-05", "absent"),
        ]
        assert data["recent_attendance"][5]["total_hours"] == 7.25


class TestManagerDashboard:
    async def test_requires_manager(self, client: AsyncClient, employee: dict) -> None:
        resp = await client.get("/api/dashboard/manager", headers=employee["headers"])
        assert resp.status_code == 403, resp.text

    async def test_overview(
        self,
        client: AsyncClient,
        clock: FixedClock,
        manager: dict,
        employee: dict,
        other_employee: dict,
    ) -> None:
        await attend(client, clock, employee["headers"], datetime(2024, 6, 3, 9, 0))
        await attend(client, clock, other_employee["headers"], datetime(2024, 6, 3, 9, 10))
        await attend(client, clock, employee["headers"], datetime(2024, 6, 4, 9, 35))
        # Manager records never count towards the roster
        await attend(client, clock, manager["headers"], datetime(2024, 6, 4, 9, 0))

        clock.set(datetime(2024, 6, 4, 10, 0))
        resp = await client.get("/api/dashboard/manager", headers=manager["headers"])
        assert resp.status_code == 200, resp.text
        data = resp.json()

        assert data["total_employees"] == 2
        assert data["today_stats"] == {"present": 1, "absent": 1, "late": 1}
        assert [e["name"] for e in data["absent_employees"]] == ["Priya Sharma"]

        trend = {p["date"]: (p["present"], p["absent"]) for p in data["weekly_trend"]}
        assert len(trend) == 7
        assert trend["2024-06-03"] == (2, 0)
        assert trend["2024-06-04"] == (1, 1)
        assert trend["2024-06-01"] == (0, 2)

        departments = {d["department"]: d for d in data["department_stats"]}
        assert departments["Engineering"]["present"] == 1
        assert departments["Design"]["absent"] == 1
        assert "Management" not in departments
