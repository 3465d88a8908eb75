from __future__ import annotations
from pydantic import ConfigDict, field_validator
from core.schema import ApiModel, require_text


class DepartmentSchema(ApiModel):
    id: int
    name: str
    company_id: int


# what clients send
class DepartmentCreate(ApiModel):
    name: str
    company_id: int
    model_config = ConfigDict(extra="forbid")

    @field_validator("name", mode="before")
    @classmethod
    def name_present(cls, v):
        return require_text(v, "Department name is required", 50, "Department name cannot exceed 50 characters")

    @field_validator("company_id", mode="before")
    @classmethod
    def company_id_present(cls, v):
        if v is None:
            raise ValueError("Company ID is required")
        return v
