from typing import Any, Dict, List, Optional

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.core import exceptions
from src.core.logger import get_logger
from src.core.response.schemas import BaseResponse, ErrorDetail, ErrorResponse, PaginatedResponse

logger = get_logger("errors")


def success_response(
    data: Any = None,
    message: Optional[str] = None,
    status_code: int = status.HTTP_200_OK,
) -> JSONResponse:
    body = BaseResponse(success=True, message=message, data=jsonable_encoder(data))
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


def paginated_response(
    items: List[Any],
    total: int,
    page: int,
    per_page: int,
    pages: int,
    message: Optional[str] = None,
) -> JSONResponse:
    body = PaginatedResponse(
        success=True,
        message=message,
        data=jsonable_encoder(items),
        total=total,
        page=page,
        per_page=per_page,
        pages=pages,
    )
    return JSONResponse(status_code=status.HTTP_200_OK, content=jsonable_encoder(body))


def error_response(
    error_code: str,
    message: str,
    status_code: int = status.HTTP_400_BAD_REQUEST,
    details: Optional[List[Dict[str, Any]]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    body = ErrorResponse(
        message=message,
        error_code=error_code,
        error_details=[ErrorDetail(**d) for d in details or []],
    )
    return JSONResponse(
        status_code=status_code, content=jsonable_encoder(body), headers=headers
    )


def app_error_response(exc: exceptions.AppException) -> JSONResponse:
    """Render any AppException with its own status and error code."""
    headers = None
    if isinstance(exc, exceptions.UnauthenticatedException):
        headers = {"WWW-Authenticate": "Bearer"}
    return error_response(
        error_code=exc.error_code,
        message=str(exc.detail),
        status_code=exc.status_code,
        details=[detail.model_dump() for detail in exc.error_details],
        headers=headers,
    )


async def app_exception_handler(request: Request, exc: exceptions.AppException):
    return app_error_response(exc)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies, unknown fields and bad path params all answer 400."""
    details = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "path", "query")]
        details.append(
            {
                "field": ".".join(loc),
                "code": str(err.get("type", "invalid")).upper(),
                "message": str(err.get("msg", "Invalid value")),
            }
        )
    return error_response(
        error_code="VALIDATION_ERROR",
        message="Validation error",
        status_code=status.HTTP_400_BAD_REQUEST,
        details=details,
    )


async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(
        error_code="INTERNAL_SERVER_ERROR",
        message="Internal server error",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
