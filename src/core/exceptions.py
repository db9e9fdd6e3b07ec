from typing import List, Optional

from fastapi import status

from src.core.response.schemas import ErrorDetail


class AppException(Exception):
    """Base for errors that map onto an HTTP error response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code: str = "ERROR"
    default_detail: str = "Unknown Error"

    def __init__(
        self,
        detail: Optional[str] = None,
        error_details: Optional[List[ErrorDetail]] = None,
    ):
        self.detail = detail or self.default_detail
        self.error_details = error_details or []
        super().__init__(self.detail)


class UnauthenticatedException(AppException):
    status_code = status.HTTP_401_UNAUTHORIZED
    error_code = "UNAUTHENTICATED"
    default_detail = "Authentication required"


class ForbiddenException(AppException):
    status_code = status.HTTP_403_FORBIDDEN
    error_code = "FORBIDDEN"
    default_detail = "You are not allowed to perform this action"


class NotFoundException(AppException):
    status_code = status.HTTP_404_NOT_FOUND
    error_code = "NOT_FOUND"
    default_detail = "Item not found"


class ValidationException(AppException):
    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "VALIDATION_ERROR"
    default_detail = "Validation error"


class ConflictException(AppException):
    status_code = status.HTTP_409_CONFLICT
    error_code = "CONFLICT"
    default_detail = "Item already exists"


class ServiceException(AppException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code = "SERVICE_ERROR"
    default_detail = "Service error"
