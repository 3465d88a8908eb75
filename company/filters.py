"""Optional predicates over companies, each backed by a live count subquery."""
from typing import Optional

from core.filters import Predicate, at_least, count_of
from company.models import Company
from department.models import Department
from employee.models import Employee


def department_count():
    return count_of(Department.id, Department.company_id == Company.id, correlate=Company)


def employee_count():
    # summed over every department of the company
    return count_of(
        Employee.id,
        Department.company_id == Company.id,
        joins=[(Department, Employee.department_id == Department.id)],
        correlate=Company,
    )


def with_min_departments(min_departments: Optional[int]) -> Predicate:
    if min_departments is None:
        return None
    return at_least(department_count(), min_departments)


def with_min_employees(min_employees: Optional[int]) -> Predicate:
    if min_employees is None:
        return None
    return at_least(employee_count(), min_employees)
