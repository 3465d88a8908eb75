from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from core.database import get_db
from core.deps import require_json
from core.pagination import Page, PageParams, page_params
from .schema import DepartmentSchema, DepartmentCreate
from . import service

department_router = APIRouter(prefix="/departments", tags=["Departments"])

# Search with optional filters
@department_router.get("/find", response_model=Page[DepartmentSchema])
def find_departments(
    company_id: Optional[int] = Query(None, alias="companyId", description="Filter by company ID"),
    name_filter: Optional[str] = Query(None, alias="nameFilter", description="Case-insensitive name substring"),
    min_employees: Optional[int] = Query(None, alias="minEmployees", ge=0, description="Minimum number of employees"),
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
):
    return service.find_departments(
        db,
        company_id=company_id,
        name_filter=name_filter,
        min_employees=min_employees,
        params=params,
    )

@department_router.get("/find/by-employee-count", response_model=Page[DepartmentSchema])
def find_by_employee_count(
    company_id: int = Query(..., alias="companyId"),
    min_employees: int = Query(..., alias="minEmployees", ge=0),
    max_employees: int = Query(..., alias="maxEmployees", ge=0),
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
):
    return service.find_departments_by_employee_count(
        db,
        company_id=company_id,
        min_employees=min_employees,
        max_employees=max_employees,
        params=params,
    )

@department_router.get("/find/most-recent-hire", response_model=DepartmentSchema)
def find_most_recent_hire(company_id: int = Query(..., alias="companyId"), db: Session = Depends(get_db)):
    obj = service.find_department_with_most_recent_hire(db, company_id)
    if not obj:
        raise HTTPException(status_code=404, detail="no department with employees in this company")
    return obj

# Departments of one company
@department_router.get("/company/{company_id}", response_model=Page[DepartmentSchema])
def departments_by_company(
    company_id: int,
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
):
    return service.get_departments_page_by_company(db, company_id, params)

# Get department by id
@department_router.get("/{department_id}", response_model=DepartmentSchema)
def department_detail(department_id: int, db: Session = Depends(get_db)):
    return service.get_department(db, department_id)

@department_router.get("/{department_id}/exists", response_model=bool)
def department_exists(department_id: int, db: Session = Depends(get_db)):
    return service.department_exists(db, department_id)

# Create department
@department_router.post(
    "",
    response_model=DepartmentSchema,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_json)],
)
def department_post(payload: DepartmentCreate, db: Session = Depends(get_db)):
    return service.create_department(db, payload)

# Delete department, moving its employees to transferToId first if it has any
@department_router.delete("/{department_id}", status_code=status.HTTP_204_NO_CONTENT)
def department_delete(
    department_id: int,
    transfer_to_id: Optional[int] = Query(None, alias="transferToId", description="Department receiving the employees"),
    db: Session = Depends(get_db),
):
    service.delete_department(db, department_id, transfer_to_id)
