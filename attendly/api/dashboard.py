from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from attendly.core.clock import Clock, get_clock
from attendly.core.middleware import get_current_user, require_role
from attendly.db.models import Employee
from attendly.db.session import get_db
from attendly.schemas.dashboard import EmployeeDashboard, ManagerDashboard
from attendly.services.dashboard import employee_dashboard, manager_dashboard

router = APIRouter()


@router.get(
    "/employee",
    response_model=EmployeeDashboard,
    summary="Today, this month and the last 7 days for the caller",
)
async def get_employee_dashboard(
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
    current_user: Employee = Depends(get_current_user),
) -> EmployeeDashboard:
    return await employee_dashboard(db, current_user, clock)


@router.get(
    "/manager",
    response_model=ManagerDashboard,
    summary="Team overview: today, weekly trend and departments",
)
async def get_manager_dashboard(
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
    _current_user: Employee = Depends(require_role("manager")),
) -> ManagerDashboard:
    return await manager_dashboard(db, clock)
