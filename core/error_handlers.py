"""Maps domain and validation errors to HTTP responses."""
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import structlog

from core.exceptions import NotFoundError, ConflictError, InvalidSortError

logger = structlog.get_logger(__name__)

_VALUE_ERROR_PREFIX = "Value error, "


def validation_errors_to_fields(errors) -> dict[str, str]:
    """Flatten pydantic errors into {field: message}, keeping every violation."""
    fields: dict[str, str] = {}
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        field = loc[-1] if loc else "body"
        if err.get("type") == "missing":
            message = f"{field} is required"
        else:
            message = err.get("msg", "invalid value")
            if message.startswith(_VALUE_ERROR_PREFIX):
                message = message[len(_VALUE_ERROR_PREFIX):]
        # first violation per field wins, the rest are usually consequences of it
        fields.setdefault(field, message)
    return fields


def register_error_handlers(app: FastAPI) -> None:

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        logger.info("not_found", path=request.url.path, kind=exc.kind, entity_id=exc.entity_id)
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": exc.message})

    @app.exception_handler(ConflictError)
    async def conflict_handler(request: Request, exc: ConflictError):
        logger.info("business_rule_violation", path=request.url.path, detail=exc.message)
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": exc.message})

    @app.exception_handler(InvalidSortError)
    async def invalid_sort_handler(request: Request, exc: InvalidSortError):
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={exc.prop: exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=validation_errors_to_fields(exc.errors()),
        )

    @app.exception_handler(Exception)
    async def unexpected_handler(request: Request, exc: Exception):
        logger.error("unexpected_error", path=request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )
