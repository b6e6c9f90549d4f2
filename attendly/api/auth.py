import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from attendly.core.errors import ConflictError
from attendly.core.middleware import get_current_user
from attendly.core.security import create_access_token, hash_password, verify_password
from attendly.db.models import Employee
from attendly.db.session import get_db
from attendly.schemas.employee import (
    AuthResponse,
    EmployeeResponse,
    LoginRequest,
    ProfileUpdate,
    RegisterRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _issue(employee: Employee) -> AuthResponse:
    token = create_access_token(str(employee.id), role=employee.role)
    return AuthResponse(access_token=token, user=EmployeeResponse.model_validate(employee))


async def _next_employee_code(db: AsyncSession) -> str:
    result = await db.execute(select(func.count()).select_from(Employee))
    return f"EMP{int(result.scalar_one()) + 1:03d}"


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new employee or manager",
)
async def register(
    body: RegisterRequest,
    db: AsyncSession = Depends(get_db),
) -> AuthResponse:
    existing = await db.execute(select(Employee).where(Employee.email == body.email))
    if existing.scalar_one_or_none() is not None:
        raise ConflictError("Email already registered")

    employee = Employee(
        employee_code=await _next_employee_code(db),
        name=body.name,
        email=body.email,
        password_hash=hash_password(body.password),
        role=body.role,
        department=body.department,
    )
    db.add(employee)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError("Email or employee code already registered")
    await db.refresh(employee)

    logger.info("Registered %s %s (%s)", employee.role, employee.employee_code, employee.email)
    return _issue(employee)


@router.post("/login", response_model=AuthResponse, summary="Login with email or name")
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db),
) -> AuthResponse:
    identifier = body.email.strip()
    if not identifier or not body.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please provide email/username and password",
        )

    result = await db.execute(
        select(Employee)
        .where(
            or_(
                Employee.email == identifier.lower(),
                func.lower(Employee.name) == identifier.lower(),
            )
        )
        .order_by(Employee.created_at, Employee.employee_code)
    )
    employee = result.scalars().first()

    if employee is None or not verify_password(body.password, employee.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    return _issue(employee)


@router.get("/me", response_model=EmployeeResponse, summary="Current employee profile")
async def get_me(current_user: Employee = Depends(get_current_user)) -> EmployeeResponse:
    return EmployeeResponse.model_validate(current_user)


@router.put("/profile", response_model=EmployeeResponse, summary="Update name or department")
async def update_profile(
    body: ProfileUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: Employee = Depends(get_current_user),
) -> EmployeeResponse:
    if body.name is not None:
        current_user.name = body.name
    if body.department is not None:
        current_user.department = body.department
    await db.commit()
    await db.refresh(current_user)
    return EmployeeResponse.model_validate(current_user)
