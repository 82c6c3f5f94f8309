import logging
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from app.errors import ErrorType, ERROR_STATUS_MAP

logger = logging.getLogger(__name__)


class AppException(Exception):
    """Custom exception that services can raise."""

    def __init__(self, error_type: ErrorType, message: str):
        self.error_type = error_type
        self.message = message
        super().__init__(message)


def error_content(error_type: ErrorType, message: str) -> dict:
    return {"message": message, "code": error_type.value}


async def app_exception_handler(_request: Request, exc: AppException) -> JSONResponse:
    """Global handler for AppException - converts to proper HTTP response."""
    status_code = ERROR_STATUS_MAP.get(exc.error_type, 500)
    return JSONResponse(
        status_code=status_code,
        content=error_content(exc.error_type, exc.message)
    )


def format_validation_errors(errors: list[dict]) -> str:
    """Build a single message from pydantic error entries.

    Missing fields are collapsed into one "Missing required fields" list,
    anything else is reported as "<field>: <reason>".
    """
    missing = []
    invalid = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(loc) or "body"
        if error.get("type") == "missing":
            missing.append(field)
        else:
            invalid.append(f"{field}: {error.get('msg', 'invalid value')}")

    parts = []
    if missing:
        parts.append(f"Missing required fields: {', '.join(missing)}")
    parts.extend(invalid)
    return "; ".join(parts) or "Invalid request"


async def validation_exception_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handler for FastAPI request validation - returns 422 with a field-list message."""
    return JSONResponse(
        status_code=ERROR_STATUS_MAP[ErrorType.VALIDATION_ERROR],
        content=error_content(ErrorType.VALIDATION_ERROR, format_validation_errors(exc.errors()))
    )


async def generic_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
    """Global handler for unhandled exceptions - returns 500."""
    logger.error(f"Unhandled exception: {exc}")
    return JSONResponse(
        status_code=500,
        content=error_content(ErrorType.INTERNAL_ERROR, "Internal server error")
    )
