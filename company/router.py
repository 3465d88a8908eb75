from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from core.database import get_db
from core.deps import require_json
from core.pagination import Page, PageParams, page_params
from .schema import CompanySchema, CompanyCreate
from . import service

company_router = APIRouter(prefix="/companies", tags=["Companies"])

# List companies (paged)
@company_router.get("", response_model=Page[CompanySchema])
def list_companies(params: PageParams = Depends(page_params), db: Session = Depends(get_db)):
    return service.get_companies_page(db, params)

# Search by department / employee head counts
@company_router.get("/find", response_model=Page[CompanySchema])
def find_companies(
    min_departments: Optional[int] = Query(None, alias="minDepartments", ge=0, description="Minimum number of departments"),
    min_employees: Optional[int] = Query(None, alias="minEmployees", ge=0, description="Minimum number of employees"),
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
):
    return service.find_companies(
        db,
        min_departments=min_departments,
        min_employees=min_employees,
        params=params,
    )

# Get company by id
@company_router.get("/{company_id}", response_model=CompanySchema)
def company_detail(company_id: int, db: Session = Depends(get_db)):
    return service.get_company(db, company_id)

@company_router.get("/{company_id}/exists", response_model=bool)
def company_exists(company_id: int, db: Session = Depends(get_db)):
    return service.company_exists(db, company_id)

# Create company
@company_router.post(
    "",
    response_model=CompanySchema,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_json)],
)
def company_post(payload: CompanyCreate, db: Session = Depends(get_db)):
    return service.create_company(db, payload)

# Delete company, refused while any of its departments has employees
@company_router.delete("/{company_id}", status_code=status.HTTP_204_NO_CONTENT)
def company_delete(company_id: int, db: Session = Depends(get_db)):
    service.delete_company(db, company_id)
