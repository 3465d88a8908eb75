from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware
from core.config_loader import settings
from core.error_handlers import register_error_handlers
from core.logging import configure_logging

from company.router import company_router
from department.router import department_router
from employee.router import employee_router
import models_bootstrap

configure_logging()

openapi_tags = [
    {
        "name": "Companies",
        "description": "Companies and their department / head count search",
    },
    {
        "name": "Departments",
        "description": "Departments, including deletion with employee transfer",
    },
    {
        "name": "Employees",
        "description": "Employee records",
    },
    {
        "name": "Health Checks",
        "description": "Application health checks",
    }
]

app = FastAPI(title="Org Chart API", openapi_tags=openapi_tags)

if settings.BACKEND_CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            str(origin).strip("/") for origin in settings.BACKEND_CORS_ORIGINS
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

register_error_handlers(app)

app.include_router(company_router, prefix="/api")
app.include_router(department_router, prefix="/api")
app.include_router(employee_router, prefix="/api")


@app.get("/health", tags=['Health Checks'])
def read_root():
    return {"health": "true"}
