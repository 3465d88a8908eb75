from __future__ import annotations
from sqlalchemy.orm import Mapped, mapped_column, validates
from sqlalchemy import String, ForeignKey, UniqueConstraint
from core.database import Base


def name_key_of(name: str) -> str:
    # full Unicode case folding; SQL lower() only folds ASCII on SQLite
    return name.casefold()


class Department(Base):
    __tablename__ = "departments"
    # "IT" and "it" collide inside one company, not across companies
    __table_args__ = (
        UniqueConstraint("company_id", "name_key", name="uq_department_company_name_key"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    company_id: Mapped[int] = mapped_column(ForeignKey("companies.id", ondelete="CASCADE"), index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    name_key: Mapped[str] = mapped_column(String(150), nullable=False)

    @validates("name")
    def _sync_name_key(self, key, value):
        self.name_key = name_key_of(value)
        return value
