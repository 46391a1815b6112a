"""
Application exceptions. Each maps to an HTTP status with a {code, message} detail.
"""
from typing import Any, Dict, List, Optional
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


class AppException(HTTPException):
    """Base for domain errors raised from services and routers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "ERROR"
    message: str = "An error occurred"

    def __init__(self, message: Optional[str] = None, **extra: Any):
        detail: Dict[str, Any] = {"code": self.code, "message": message or self.message}
        detail.update(extra)
        super().__init__(status_code=self.status_code, detail=detail)


class ValidationError(AppException):
    """Malformed or missing input. Carries per-field errors."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "VALIDATION_ERROR"
    message = "Validation error"

    def __init__(self, errors: List[Dict[str, str]], message: Optional[str] = None):
        self.errors = errors
        super().__init__(message, errors=errors)

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls([{"field": field, "message": message}])


class NotFound(AppException):
    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"

    def __init__(self, resource: str = "Resource"):
        super().__init__(f"{resource} not found")


class Forbidden(AppException):
    status_code = status.HTTP_403_FORBIDDEN
    code = "FORBIDDEN"
    message = "You are not allowed to access this resource."


class StorageError(AppException):
    """Persistence failure. The message stays opaque; details go to the log."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "STORAGE_ERROR"
    message = "An error occurred while saving data. Please try again."


def _field_name(loc) -> str:
    # ("body", "senderId") -> "senderId"; ("query", "uid") -> "uid"
    parts = [str(p) for p in loc[1:]] or [str(p) for p in loc]
    return ".".join(parts)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report request parsing failures as 400 in the ValidationError shape."""
    errors = [{"field": _field_name(err.get("loc", ())), "message": err.get("msg", "")} for err in exc.errors()]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": {"code": ValidationError.code, "message": ValidationError.message, "errors": errors}},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, request_validation_handler)
