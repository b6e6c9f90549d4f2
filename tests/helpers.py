"""Request helpers shared by the API tests."""

from __future__ import annotations

from datetime import datetime

from httpx import AsyncClient

from attendly.core.clock import FixedClock


async def register(
    client: AsyncClient,
    name: str,
    role: str = "employee",
    department: str | None = "Engineering",
    email: str | None = None,
    password: str = "Secret123!",
) -> dict:
    """Register through the API; returns the user dict plus token and headers."""
    payload = {
        "name": name,
        "email": email or f"{name.lower().replace(' ', '.')}@company.com",
        "password": password,
        "role": role,
        "department": department,
    }
    resp = await client.post("/api/auth/register", json=payload)
    assert resp.status_code == 201, resp.text
    data = resp.json()
    return {
        **data["user"],
        "password": password,
        "token": data["access_token"],
        "headers": {"Authorization": f"Bearer {data['access_token']}"},
    }


async def attend(
    client: AsyncClient,
    clock: FixedClock,
    headers: dict,
    check_in: datetime,
    check_out: datetime | None = None,
) -> dict:
    """Check in (and optionally out) at the given local times."""
    clock.set(check_in)
    resp = await client.post("/api/attendance/checkin", headers=headers)
    assert resp.status_code == 201, resp.text
    if check_out is None:
        return resp.json()
    clock.set(check_out)
    resp = await client.post("/api/attendance/checkout", headers=headers)
    assert resp.status_code == 200, resp.text
    return resp.json()
