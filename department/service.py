from __future__ import annotations
from typing import Optional, List

import structlog
from sqlalchemy import select, update, func, exists
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.exceptions import NotFoundError, ConflictError
from core.filters import FilterBuilder
from core.pagination import PageParams, paginate
from company.models import Company
from employee.models import Employee
from .filters import has_company_id, name_contains, has_min_employees, has_max_employees
from .models import Department, name_key_of
from .schema import DepartmentCreate

logger = structlog.get_logger(__name__)

KIND = "Department"

SORTABLE = {
    "id": Department.id,
    "name": Department.name,
    "companyId": Department.company_id,
}

# name ascending, newest first among equal names
DEFAULT_ORDER = [Department.name.asc(), Department.id.desc()]


def _duplicate_name_message(name: str) -> str:
    return f"Department already exists in company: {name}"


def _page(db: Session, stmt, params: PageParams) -> dict:
    return paginate(
        db, stmt, params,
        kind=KIND, sortable=SORTABLE,
        default_order=DEFAULT_ORDER, id_column=Department.id,
    )


def _require_company(db: Session, company_id: int) -> Company:
    company = db.get(Company, company_id)
    if not company:
        raise NotFoundError("Company", company_id)
    return company


def _name_taken(db: Session, name: str, company_id: int) -> bool:
    stmt = select(
        exists().where(
            Department.company_id == company_id,
            Department.name_key == name_key_of(name),
        )
    )
    return bool(db.scalar(stmt))


def _count_employees(db: Session, department_id: int) -> int:
    stmt = select(func.count(Employee.id)).where(Employee.department_id == department_id)
    return db.scalar(stmt) or 0


def department_exists(db: Session, department_id: int) -> bool:
    return db.get(Department, department_id) is not None


def get_department(db: Session, department_id: int) -> Department:
    dept = db.get(Department, department_id)
    if not dept:
        raise NotFoundError(KIND, department_id)
    return dept


def get_departments_by_company(db: Session, company_id: int) -> List[Department]:
    _require_company(db, company_id)
    stmt = select(Department).where(Department.company_id == company_id).order_by(*DEFAULT_ORDER)
    return list(db.scalars(stmt))


def get_departments_page_by_company(db: Session, company_id: int, params: PageParams) -> dict:
    _require_company(db, company_id)
    return _page(db, select(Department).where(has_company_id(company_id)), params)


def find_departments(
    db: Session,
    *,
    company_id: Optional[int] = None,
    name_filter: Optional[str] = None,
    min_employees: Optional[int] = None,
    params: PageParams,
) -> dict:
    """Search departments; every filter is optional and absent ones match everything."""
    criteria = (
        FilterBuilder()
        .add(company_id, has_company_id)
        .add(name_filter, name_contains)
        .add(min_employees, has_min_employees)
        .build()
    )
    return _page(db, select(Department).where(criteria), params)


def find_departments_by_employee_count(
    db: Session,
    *,
    company_id: int,
    min_employees: int,
    max_employees: int,
    params: PageParams,
) -> dict:
    """Departments of a company whose head count lies in [min_employees, max_employees]."""
    if min_employees > max_employees:
        raise ConflictError("minEmployees must not be greater than maxEmployees")
    criteria = (
        FilterBuilder()
        .add(company_id, has_company_id)
        .add(min_employees, has_min_employees)
        .add(max_employees, has_max_employees)
        .build()
    )
    return _page(db, select(Department).where(criteria), params)


def find_department_with_most_recent_hire(db: Session, company_id: int) -> Optional[Department]:
    _require_company(db, company_id)
    stmt = (
        select(Department)
        .join(Employee, Employee.department_id == Department.id)
        .where(Department.company_id == company_id)
        .order_by(Employee.hire_date.desc(), Employee.id.desc())
        .limit(1)
    )
    return db.scalars(stmt).first()


def create_department(db: Session, dto: DepartmentCreate) -> Department:
    _require_company(db, dto.company_id)

    if _name_taken(db, dto.name, dto.company_id):
        raise ConflictError(_duplicate_name_message(dto.name))

    dept = Department(company_id=dto.company_id, name=dto.name)
    db.add(dept)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(_duplicate_name_message(dto.name))
    db.refresh(dept)
    logger.info("department_created", department_id=dept.id, company_id=dept.company_id, name=dept.name)
    return dept


def delete_department(db: Session, department_id: int, transfer_to_id: Optional[int] = None) -> None:
    """
    Delete a department.

    An empty department is removed outright. One that still has employees
    needs a transfer target in the same company; its employees are moved
    there and the department is removed in the same commit.
    - 404 if the department or the transfer target does not exist
    - 400 if no target was given, it is in another company, or it is the department itself
    """
    logger.debug("department_delete_requested", department_id=department_id, transfer_to_id=transfer_to_id)
    dept = get_department(db, department_id)

    target_id = None
    if _count_employees(db, department_id) > 0:
        if transfer_to_id is None:
            raise ConflictError("Department has employees. Must specify a transfer department ID.")

        target = db.get(Department, transfer_to_id)
        if not target:
            raise NotFoundError(KIND, transfer_to_id)

        if target.company_id != dept.company_id:
            raise ConflictError("Target department must be in the same company")

        if target.id == dept.id:
            raise ConflictError("Cannot transfer employees to the same department")
        target_id = target.id

    # reassignment and removal commit together or not at all
    moved = 0
    try:
        if target_id is not None:
            moved = db.execute(
                update(Employee)
                .where(Employee.department_id == department_id)
                .values(department_id=target_id)
            ).rowcount
        db.delete(dept)
        db.commit()
    except Exception:
        db.rollback()
        raise

    if target_id is not None:
        logger.info("department_employees_transferred", department_id=department_id, target_id=target_id, moved=moved)
    logger.info("department_deleted", department_id=department_id)
