from __future__ import annotations
import re
from datetime import datetime
from pydantic import ConfigDict, field_validator
from core.schema import ApiModel, require_text

TAX_ID_PATTERN = re.compile(r"[0-9]{10}")


class CompanySchema(ApiModel):
    id: int
    name: str
    tax_id: str
    created_at: datetime


# what clients send
class CompanyCreate(ApiModel):
    name: str
    tax_id: str
    model_config = ConfigDict(extra="forbid")

    @field_validator("name", mode="before")
    @classmethod
    def name_present(cls, v):
        return require_text(v, "Company name is required", 100, "Company name cannot exceed 100 characters")

    @field_validator("tax_id", mode="before")
    @classmethod
    def tax_id_format(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            raise ValueError("Tax ID is required")
        if not isinstance(v, str) or not TAX_ID_PATTERN.fullmatch(v):
            raise ValueError("Tax ID must be exactly 10 digits")
        return v
