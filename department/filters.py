from typing import Optional

from core.filters import Predicate, at_least, at_most, contains_ci, count_of, equals
from department.models import Department
from employee.models import Employee


def employee_count():
    return count_of(Employee.id, Employee.department_id == Department.id, correlate=Department)


def has_company_id(company_id: Optional[int]) -> Predicate:
    return equals(Department.company_id, company_id)


def name_contains(name: Optional[str]) -> Predicate:
    # folded key, so non-ASCII names match case-insensitively as well
    return contains_ci(Department.name_key, name)


def has_min_employees(count: Optional[int]) -> Predicate:
    if count is None:
        return None
    return at_least(employee_count(), count)


def has_max_employees(count: Optional[int]) -> Predicate:
    if count is None:
        return None
    return at_most(employee_count(), count)
