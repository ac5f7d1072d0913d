"""
Web middleware and error translation.
"""

from .error_handler import (
    ErrorHandlerMiddleware,
    BusinessException,
    UnauthorizedException,
    business_exception_handler,
    raise_for_result,
    status_for_code,
)

__all__ = [
    "ErrorHandlerMiddleware",
    "BusinessException",
    "UnauthorizedException",
    "business_exception_handler",
    "raise_for_result",
    "status_for_code",
]
