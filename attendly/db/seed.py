"""
Seed script: a manager, ten employees and 30 days of weekday attendance.

Usage:
    python -m attendly.db.seed
"""

import asyncio
import random
from datetime import date, datetime, time, timedelta, timezone

from sqlalchemy import select

from attendly.core.security import hash_password
from attendly.db.models import AttendanceRecord, Employee
from attendly.db.session import AsyncSessionLocal
from attendly.services.status import classify_check_in, classify_check_out
from attendly.services.workdays import is_working_day

MANAGER_EMAIL = "manager@company.com"
EMPLOYEE_COUNT = 10
DAYS_BACK = 30

DEPARTMENTS = ["Engineering", "Design", "Marketing", "Sales", "HR", "Finance", "Operations"]
FIRST_NAMES = [
    "Arjun", "Nisha", "Ravi", "Priya", "Aman", "Divya", "Rohit", "Sneha",
    "Karan", "Meera", "Aditya", "Pooja", "Varun", "Neha", "Sanjay", "Asha",
]
LAST_NAMES = [
    "Reddy", "Sharma", "Verma", "Patel", "Singh", "Gupta", "Kumar", "Iyer",
    "Nair", "Jain", "Das", "Rao", "Mishra", "Pillai", "Bose", "Kapoor",
]


def _random_employees(rng: random.Random) -> list[dict]:
    employees: list[dict] = []
    used_emails: set[str] = set()
    while len(employees) < EMPLOYEE_COUNT:
        first, last = rng.choice(FIRST_NAMES), rng.choice(LAST_NAMES)
        email = f"{first.lower()}.{last.lower()}{rng.randint(0, 99)}@company.com"
        if email in used_emails:
            continue
        used_emails.add(email)
        employees.append(
            {
                "name": f"{first} {last}",
                "email": email,
                "department": rng.choice(DEPARTMENTS),
            }
        )
    return employees


def _random_day(rng: random.Random, day: date) -> tuple[datetime, datetime] | None:
    """Check-in/out instants (local time) for one day, or None for an absence."""
    roll = rng.random()
    if roll < 0.05:
        return None
    if roll < 0.15:
        check_in = time(9, rng.randint(31, 59)) if rng.random() < 0.5 else time(10, rng.randint(0, 29))
    else:
        check_in = time(8, rng.randint(0, 59)) if rng.random() < 0.5 else time(9, rng.randint(0, 30))

    if rng.random() < 0.05:
        check_out = time(12, rng.randint(0, 59))
    else:
        check_out = time(rng.randint(17, 19), rng.randint(0, 59))

    # Naive datetimes are taken as server-local time
    return (
        datetime.combine(day, check_in).astimezone(timezone.utc),
        datetime.combine(day, check_out).astimezone(timezone.utc),
    )


async def seed(session) -> None:
    result = await session.execute(select(Employee).where(Employee.email == MANAGER_EMAIL))
    if result.scalar_one_or_none() is not None:
        print("Seed data already present, skipping.")
        return

    rng = random.Random()
    manager = Employee(
        employee_code="EMP001",
        name="Demo Manager",
        email=MANAGER_EMAIL,
        password_hash=hash_password("manager123"),
        role="manager",
        department="Management",
    )
    session.add(manager)

    employees = []
    for idx, data in enumerate(_random_employees(rng), start=2):
        emp = Employee(
            employee_code=f"EMP{idx:03d}",
            password_hash=hash_password("password123"),
            role="employee",
            **data,
        )
        session.add(emp)
        employees.append(emp)
    await session.flush()

    today = date.today()
    created = 0
    for emp in employees:
        for offset in range(DAYS_BACK, 0, -1):
            day = today - timedelta(days=offset)
            if not is_working_day(day):
                continue
            times = _random_day(rng, day)
            if times is None:
                continue
            check_in, check_out = times
            status, total_hours = classify_check_out(check_in, check_out, classify_check_in(check_in))
            session.add(
                AttendanceRecord(
                    employee_id=emp.id,
                    date=day.isoformat(),
                    check_in_time=check_in,
                    check_out_time=check_out,
                    status=status,
                    total_hours=total_hours,
                )
            )
            created += 1

    print(f"Created {len(employees) + 1} users and {created} attendance records")
    print(f"Manager: {MANAGER_EMAIL} / manager123")
    for emp in employees[:3]:
        print(f"Employee: {emp.email} / password123")


async def main():
    async with AsyncSessionLocal() as session:
        async with session.begin():
            await seed(session)
            print("Seed complete.")


if __name__ == "__main__":
    asyncio.run(main())
