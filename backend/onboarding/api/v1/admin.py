"""Admin console endpoints — login, list, view and edit employee records."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from onboarding.api.deps import ADMIN_ROLE, get_current_admin, get_db, get_settings
from onboarding.api.schemas.admin import (
    EmployeeListResponse,
    EmployeeUpdateRequest,
    EmployeeUpdateResponse,
    LoginRequest,
    TokenResponse,
)
from onboarding.core.config import Settings
from onboarding.core.logging import get_logger
from onboarding.core.security import create_access_token
from onboarding.repositories import employees as employee_repository
from onboarding.validation.access_gate import check_admin_credentials

logger = get_logger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"])

EMPLOYEE_NOT_FOUND = "Employee not found"


@router.post("/login", response_model=TokenResponse)
async def login(payload: LoginRequest, config: Settings = Depends(get_settings)):
    """Check the fixed admin pair and issue an access token."""
    decision = check_admin_credentials(payload.username, payload.password)
    if not decision.allowed:
        logger.info("Admin login rejected", username=payload.username)
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"success": False, "error": decision.message},
        )

    access_token = create_access_token({"sub": config.ADMIN_USERNAME, "role": ADMIN_ROLE})
    return TokenResponse(
        access_token=access_token,
        token_type="bearer",
        expires_in=config.JWT_ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )


@router.get(
    "/employees",
    response_model=EmployeeListResponse,
    dependencies=[Depends(get_current_admin)],
)
async def list_employees(
    offset: int = Query(default=0, ge=0),
    limit: int | None = Query(default=None, ge=1),
    db: AsyncSession = Depends(get_db),
) -> EmployeeListResponse:
    """List stored records, newest first; all of them unless a page is asked for."""
    employees = await employee_repository.list_employees(db, offset=offset, limit=limit)
    return EmployeeListResponse(
        data=[employee.to_dict() for employee in employees],
        total=await employee_repository.count_employees(db),
    )


@router.get("/employees/{passport_no}", dependencies=[Depends(get_current_admin)])
async def get_employee(passport_no: str, db: AsyncSession = Depends(get_db)) -> dict:
    employee = await employee_repository.get_employee_by_passport_no(db, passport_no)
    if employee is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=EMPLOYEE_NOT_FOUND)
    return employee.to_dict()


@router.put(
    "/employees/{passport_no}",
    response_model=EmployeeUpdateResponse,
    dependencies=[Depends(get_current_admin)],
)
async def save_employee(
    passport_no: str,
    payload: EmployeeUpdateRequest,
    db: AsyncSession = Depends(get_db),
) -> EmployeeUpdateResponse:
    """Merge edited and custom fields into the stored record."""
    try:
        employee = await employee_repository.update_employee(db, passport_no, payload.data)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    if employee is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=EMPLOYEE_NOT_FOUND)

    logger.info("Employee record updated", passport_no=employee.passport_no, fields=sorted(payload.data))
    return EmployeeUpdateResponse(success=True, data=employee.to_dict())
