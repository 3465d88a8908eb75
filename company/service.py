from typing import Optional, List

import structlog
from sqlalchemy import select, delete, exists
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.exceptions import NotFoundError, ConflictError
from core.filters import FilterBuilder
from core.pagination import PageParams, paginate
from department.models import Department
from employee.models import Employee
from .filters import with_min_departments, with_min_employees
from .models import Company
from .schema import CompanyCreate

logger = structlog.get_logger(__name__)

KIND = "Company"

SORTABLE = {
    "id": Company.id,
    "name": Company.name,
    "taxId": Company.tax_id,
    "createdAt": Company.created_at,
}


def _tax_id_taken_message(tax_id: str) -> str:
    return f"Company with tax ID already exists: {tax_id}"


def _page(db: Session, stmt, params: PageParams) -> dict:
    return paginate(
        db, stmt, params,
        kind=KIND, sortable=SORTABLE,
        default_order=[Company.name.asc()], id_column=Company.id,
    )


def company_exists(db: Session, company_id: int) -> bool:
    return db.get(Company, company_id) is not None


def get_company(db: Session, company_id: int) -> Company:
    company = db.get(Company, company_id)
    if not company:
        raise NotFoundError(KIND, company_id)
    return company


def list_companies(db: Session) -> List[Company]:
    stmt = select(Company).order_by(Company.name.asc(), Company.id.asc())
    return list(db.scalars(stmt))


def get_companies_page(db: Session, params: PageParams) -> dict:
    return _page(db, select(Company), params)


def find_companies_with_min_departments(db: Session, min_departments: int, params: PageParams) -> dict:
    return _page(db, select(Company).where(with_min_departments(min_departments)), params)


def find_companies_with_min_employees(db: Session, min_employees: int, params: PageParams) -> dict:
    return _page(db, select(Company).where(with_min_employees(min_employees)), params)


def find_companies_with_min_departments_and_employees(
    db: Session,
    min_departments: int,
    min_employees: int,
    params: PageParams,
) -> dict:
    criteria = (
        FilterBuilder()
        .add(min_departments, with_min_departments)
        .add(min_employees, with_min_employees)
        .build()
    )
    return _page(db, select(Company).where(criteria), params)


def find_companies(
    db: Session,
    *,
    min_departments: Optional[int] = None,
    min_employees: Optional[int] = None,
    params: PageParams,
) -> dict:
    if min_departments is not None and min_employees is not None:
        return find_companies_with_min_departments_and_employees(db, min_departments, min_employees, params)
    if min_departments is not None:
        return find_companies_with_min_departments(db, min_departments, params)
    if min_employees is not None:
        return find_companies_with_min_employees(db, min_employees, params)
    return get_companies_page(db, params)


def create_company(db: Session, dto: CompanyCreate) -> Company:
    if db.scalar(select(exists().where(Company.tax_id == dto.tax_id))):
        raise ConflictError(_tax_id_taken_message(dto.tax_id))

    company = Company(name=dto.name, tax_id=dto.tax_id)
    db.add(company)
    try:
        db.commit()
    except IntegrityError:
        # lost the race against a concurrent insert with the same tax id
        db.rollback()
        raise ConflictError(_tax_id_taken_message(dto.tax_id))
    db.refresh(company)
    logger.info("company_created", company_id=company.id, tax_id=company.tax_id)
    return company


def delete_company(db: Session, company_id: int) -> None:
    logger.debug("company_delete_requested", company_id=company_id)
    company = get_company(db, company_id)

    has_employees = db.scalar(
        select(
            exists()
            .where(Employee.department_id == Department.id)
            .where(Department.company_id == company_id)
        )
    )
    if has_employees:
        logger.warning("company_delete_refused", company_id=company_id, reason="departments have employees")
        raise ConflictError("Cannot delete company with existing employees. Transfer or remove employees first.")

    name = company.name
    try:
        # departments are known to be empty at this point
        db.execute(delete(Department).where(Department.company_id == company_id))
        db.delete(company)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("company_deleted", company_id=company_id, name=name)
