from datetime import datetime
from decimal import Decimal
from typing import Optional

from core.filters import Predicate, at_least, equals, on_or_after
from employee.models import Employee


def in_department(department_id: Optional[int]) -> Predicate:
    return equals(Employee.department_id, department_id)


def hired_since(since: Optional[datetime]) -> Predicate:
    return on_or_after(Employee.hire_date, since)


def with_min_salary(min_salary: Optional[Decimal]) -> Predicate:
    return at_least(Employee.salary, min_salary)
