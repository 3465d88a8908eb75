from __future__ import annotations
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from email_validator import validate_email, EmailNotValidError
from pydantic import ConfigDict, Field, field_validator
from core.schema import ApiModel, require_text


class EmployeeSchema(ApiModel):
    id: int
    first_name: str
    last_name: str
    email: str
    hire_date: datetime
    department_id: int
    salary: Optional[Decimal] = None


# what clients send
class EmployeeCreate(ApiModel):
    first_name: str
    last_name: str
    email: str
    department_id: int
    hire_date: datetime
    salary: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
    model_config = ConfigDict(extra="forbid")

    @field_validator("first_name", mode="before")
    @classmethod
    def first_name_present(cls, v):
        return require_text(v, "First name is required", 50, "First name cannot exceed 50 characters")

    @field_validator("last_name", mode="before")
    @classmethod
    def last_name_present(cls, v):
        return require_text(v, "Last name is required", 50, "Last name cannot exceed 50 characters")

    @field_validator("email", mode="before")
    @classmethod
    def email_format(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            raise ValueError("Email is required")
        if not isinstance(v, str):
            raise ValueError("Invalid email format")
        try:
            validate_email(v, check_deliverability=False)
        except EmailNotValidError:
            raise ValueError("Invalid email format")
        return v

    @field_validator("department_id", mode="before")
    @classmethod
    def department_id_present(cls, v):
        if v is None:
            raise ValueError("Department ID is required")
        return v

    @field_validator("hire_date", mode="before")
    @classmethod
    def hire_date_present(cls, v):
        if v is None:
            raise ValueError("Hire date is required")
        return v

    @field_validator("hire_date")
    @classmethod
    def hire_date_not_in_future(cls, v: datetime) -> datetime:
        # naive timestamps are taken as UTC
        v = v.replace(tzinfo=timezone.utc) if v.tzinfo is None else v.astimezone(timezone.utc)
        if v > datetime.now(timezone.utc):
            raise ValueError("Hire date cannot be in the future")
        return v
