"""
Custom exception classes for shop record operations
"""
from typing import Any, Dict, Optional
from fastapi import HTTPException, status


class BaseCustomException(Exception):
    """Base custom exception class"""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class BusinessLogicError(BaseCustomException):
    """Raised when business logic validation fails"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details
        )


class NotFoundError(BaseCustomException):
    """Raised when a requested resource is not found"""

    def __init__(self, resource: str, identifier: str, details: Optional[Dict[str, Any]] = None):
        message = f"{resource} with identifier '{identifier}' not found"
        details = details or {}
        details.setdefault("resource", resource)
        details.setdefault("identifier", identifier)
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            details=details
        )


class ValidationError(BaseCustomException):
    """Raised when data validation fails"""

    def __init__(self, message: str, field: str = None, details: Optional[Dict[str, Any]] = None):
        if field:
            details = details or {}
            details["field"] = field

        super().__init__(
            message=message,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details=details
        )


class InsufficientStockError(BaseCustomException):
    """Raised when a stock change would leave a product below zero"""

    def __init__(self, product_id: str, available: int, requested: int):
        message = (
            f"Insufficient stock for product '{product_id}': "
            f"{available} available, change of {requested} requested"
        )
        super().__init__(
            message=message,
            status_code=status.HTTP_409_CONFLICT,
            details={
                "product_id": product_id,
                "available": available,
                "requested": requested
            }
        )


def create_http_exception_from_custom(exc: BaseCustomException) -> HTTPException:
    """Convert custom exception to FastAPI HTTPException"""
    return HTTPException(
        status_code=exc.status_code,
        detail={
            "message": exc.message,
            "type": exc.__class__.__name__,
            "details": exc.details
        }
    )
