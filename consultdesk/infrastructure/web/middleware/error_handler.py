"""
Global error handling for the FastAPI application.
Use case error codes are translated to HTTP statuses here, and any
exception that escapes a route is formatted as JSON by the middleware.
"""

import logging
import traceback
from typing import Any, Dict, Optional, TypeVar
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from fastapi import status

from consultdesk.application.use_cases.base_use_case import UseCaseResult
from consultdesk.config import settings

logger = logging.getLogger(__name__)

R = TypeVar('R')

ERROR_STATUS_CODES: Dict[str, int] = {
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "INVALID_RANGE": status.HTTP_400_BAD_REQUEST,
    "UNKNOWN_RANGE_TOKEN": status.HTTP_400_BAD_REQUEST,
    "BUSINESS_RULE_VIOLATION": status.HTTP_400_BAD_REQUEST,
    "ENTITY_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "DUPLICATE_ENTITY": status.HTTP_409_CONFLICT,
    "CONCURRENT_AGGREGATION": status.HTTP_409_CONFLICT,
    "MISSING_RATE": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "EMPTY_PERIOD": status.HTTP_422_UNPROCESSABLE_ENTITY,
}


def status_for_code(error_code: Optional[str]) -> int:
    return ERROR_STATUS_CODES.get(error_code, status.HTTP_500_INTERNAL_SERVER_ERROR)


class BusinessException(Exception):
    """
    Base exception for errors that already carry their HTTP status.
    """
    def __init__(
        self,
        message: str,
        error_code: str = None,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        details: Dict[str, Any] = None
    ):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        body = {
            "error": self.error_code,
            "message": self.message,
            "status_code": self.status_code,
        }
        if self.details:
            body["details"] = self.details
        return body


class UnauthorizedException(BusinessException):
    """Exception raised when the caller's tenant cannot be identified."""
    def __init__(self, message: str = "Authentication required", **kwargs):
        super().__init__(
            message=message,
            error_code="UNAUTHORIZED",
            status_code=status.HTTP_401_UNAUTHORIZED,
            **kwargs
        )


def raise_for_result(result: UseCaseResult[R]) -> R:
    """Return the result's data, or raise the error mapped to its HTTP status."""
    if result.success:
        return result.data

    details = {}
    if result.metadata and result.metadata.get("field"):
        details["field"] = result.metadata["field"]

    if result.error_code in ERROR_STATUS_CODES:
        raise BusinessException(
            message=result.error,
            error_code=result.error_code,
            status_code=status_for_code(result.error_code),
            details=details,
        )

    # already logged with its traceback by the use case
    raise BusinessException(
        message="An unexpected error occurred",
        error_code=result.error_code or "UNKNOWN_ERROR",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


async def business_exception_handler(request: Request, exc: BusinessException) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.error_code}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Middleware to handle all uncaught exceptions and format error responses.
    """

    async def dispatch(self, request: Request, call_next):
        try:
            response = await call_next(request)
            return response
        except Exception as exc:
            return await self.handle_exception(request, exc)

    async def handle_exception(self, request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            f"Unhandled exception: {type(exc).__name__}: {str(exc)}",
            exc_info=True,
            extra={
                "request_path": request.url.path,
                "request_method": request.method,
                "client_host": request.client.host if request.client else None
            }
        )

        error_response = {
            "error": "INTERNAL_SERVER_ERROR",
            "message": "An unexpected error occurred",
            "status_code": status.HTTP_500_INTERNAL_SERVER_ERROR,
        }

        if settings.debug:
            error_response["debug"] = {
                "exception_type": type(exc).__name__,
                "traceback": traceback.format_exc().split("\n")
            }

        return JSONResponse(
            status_code=error_response["status_code"],
            content=error_response
        )
