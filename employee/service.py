from __future__ import annotations
from datetime import datetime
from decimal import Decimal
from typing import Optional, List

import structlog
from sqlalchemy import select, exists
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.exceptions import NotFoundError, ConflictError
from core.filters import FilterBuilder
from core.pagination import PageParams, paginate
from department.models import Department
from .filters import in_department, hired_since as hired_since_filter, with_min_salary
from .models import Employee
from .schema import EmployeeCreate

logger = structlog.get_logger(__name__)

KIND = "Employee"

SORTABLE = {
    "id": Employee.id,
    "firstName": Employee.first_name,
    "lastName": Employee.last_name,
    "email": Employee.email,
    "hireDate": Employee.hire_date,
    "salary": Employee.salary,
    "departmentId": Employee.department_id,
}

DEFAULT_ORDER = [Employee.last_name.asc(), Employee.first_name.asc()]


def _email_taken_message(email: str) -> str:
    return f"Employee with email already exists: {email}"


def _page(db: Session, stmt, params: PageParams) -> dict:
    return paginate(
        db, stmt, params,
        kind=KIND, sortable=SORTABLE,
        default_order=DEFAULT_ORDER, id_column=Employee.id,
    )


def _require_department(db: Session, department_id: int) -> Department:
    dept = db.get(Department, department_id)
    if not dept:
        raise NotFoundError("Department", department_id)
    return dept


def employee_exists(db: Session, employee_id: int) -> bool:
    return db.get(Employee, employee_id) is not None


def get_employee(db: Session, employee_id: int) -> Employee:
    emp = db.get(Employee, employee_id)
    if not emp:
        raise NotFoundError(KIND, employee_id)
    return emp


def get_employees_by_department(db: Session, department_id: int) -> List[Employee]:
    _require_department(db, department_id)
    stmt = select(Employee).where(Employee.department_id == department_id).order_by(*DEFAULT_ORDER, Employee.id)
    return list(db.scalars(stmt))


def get_employees_page_by_department(db: Session, department_id: int, params: PageParams) -> dict:
    _require_department(db, department_id)
    return _page(db, select(Employee).where(in_department(department_id)), params)


def find_employees(
    db: Session,
    *,
    department_id: Optional[int] = None,
    hired_since: Optional[datetime] = None,
    min_salary: Optional[Decimal] = None,
    params: PageParams,
) -> dict:
    criteria = (
        FilterBuilder()
        .add(department_id, in_department)
        .add(hired_since, hired_since_filter)
        .add(min_salary, with_min_salary)
        .build()
    )
    return _page(db, select(Employee).where(criteria), params)


def create_employee(db: Session, dto: EmployeeCreate) -> Employee:
    _require_department(db, dto.department_id)

    # email is unique across the whole system, not per department
    if db.scalar(select(exists().where(Employee.email == dto.email))):
        raise ConflictError(_email_taken_message(dto.email))

    emp = Employee(
        department_id=dto.department_id,
        first_name=dto.first_name,
        last_name=dto.last_name,
        email=dto.email,
        hire_date=dto.hire_date,
        salary=dto.salary,
    )
    db.add(emp)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(_email_taken_message(dto.email))
    db.refresh(emp)
    logger.info("employee_created", employee_id=emp.id, department_id=emp.department_id)
    return emp


def delete_employee(db: Session, employee_id: int) -> None:
    emp = get_employee(db, employee_id)
    db.delete(emp)
    db.commit()
    logger.info("employee_deleted", employee_id=employee_id)
