from datetime import date, datetime, time, timezone
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from core.database import get_db
from core.deps import require_json
from core.pagination import Page, PageParams, page_params
from .schema import EmployeeSchema, EmployeeCreate
from . import service

employee_router = APIRouter(prefix="/employees", tags=["Employees"])

# Search with optional filters
@employee_router.get("/find", response_model=Page[EmployeeSchema])
def find_employees(
    department_id: Optional[int] = Query(None, alias="departmentId"),
    hire_date: Optional[date] = Query(None, alias="hireDate", description="Hired on or after this day (yyyy-MM-dd, UTC)"),
    min_salary: Optional[Decimal] = Query(None, alias="minSalary"),
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
):
    hired_since = datetime.combine(hire_date, time.min, tzinfo=timezone.utc) if hire_date else None
    return service.find_employees(
        db,
        department_id=department_id,
        hired_since=hired_since,
        min_salary=min_salary,
        params=params,
    )

# Employees of one department
@employee_router.get("/department/{department_id}", response_model=Page[EmployeeSchema])
def employees_by_department(
    department_id: int,
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
):
    return service.get_employees_page_by_department(db, department_id, params)

# Get employee by id
@employee_router.get("/{employee_id}", response_model=EmployeeSchema)
def employee_detail(employee_id: int, db: Session = Depends(get_db)):
    return service.get_employee(db, employee_id)

@employee_router.get("/{employee_id}/exists", response_model=bool)
def employee_exists(employee_id: int, db: Session = Depends(get_db)):
    return service.employee_exists(db, employee_id)

# Create employee
@employee_router.post(
    "",
    response_model=EmployeeSchema,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_json)],
)
def employee_post(payload: EmployeeCreate, db: Session = Depends(get_db)):
    return service.create_employee(db, payload)

# Delete employee
@employee_router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
def employee_delete(employee_id: int, db: Session = Depends(get_db)):
    service.delete_employee(db, employee_id)
