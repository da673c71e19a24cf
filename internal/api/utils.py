"""
API utility functions for response formatting.
"""

from typing import Any, Dict

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.errors import NotFoundError, ValidationError
from core.logger import format_exception_short, logger
from services.results import ServiceResult


def success_response(message: str = "Success", data: Any = None) -> Dict:
    """
    Create a success response.

    Args:
        message: Success message
        data: Response data (optional)

    Returns:
        Standard response dictionary with success=True
    """
    return {"success": True, "message": message, "data": data}


def error_response(message: str, data: Any = None) -> Dict:
    """
    Create an error response.

    Args:
        message: Error message
        data: Optional error data

    Returns:
        Standard response dictionary with success=False
    """
    return {"success": False, "message": message, "data": data}


def status_code_for(result: ServiceResult, success_status: int = status.HTTP_200_OK) -> int:
    """Map a service envelope to an HTTP status code."""
    if result.success:
        return success_status
    if isinstance(result.error, ValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(result.error, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def to_response(result: ServiceResult, success_status: int = status.HTTP_200_OK) -> JSONResponse:
    """
    Convert a service envelope to a JSON response.

    Args:
        result: Envelope returned by a service call
        success_status: Status code used when the call succeeded

    Returns:
        JSONResponse with the {success, message, data} body
    """
    return JSONResponse(
        status_code=status_code_for(result, success_status),
        content=result.to_dict(),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Make every error, including framework ones, answer with the standard envelope."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_response(message=str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        details = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in exc.errors()
        )
        logger.warning(f"⚠️ API: Invalid request {request.method} {request.url.path}: {details}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_response(message=f"Invalid fields: {details}"),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(
            f"❌ API: Unhandled error on {request.method} {request.url.path}: "
            f"{format_exception_short(exc)}"
        )
        logger.opt(exception=exc).debug("Unhandled error details:")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_response(message="Internal server error"),
        )
