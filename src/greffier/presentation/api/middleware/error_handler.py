"""
Global error handling middleware.
"""

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from greffier.domain.exceptions import GreffierException, ValidationError
from greffier.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)

STATUS_CODE_MAP = {
    "ENTITY_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "AUTHENTICATION_ERROR": status.HTTP_401_UNAUTHORIZED,
    "WALLET_CONFLICT": status.HTTP_409_CONFLICT,
    "INCONSISTENT_STATE": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "STORAGE_UNAVAILABLE": status.HTTP_503_SERVICE_UNAVAILABLE,
}


async def greffier_exception_handler(
    request: Request, exc: GreffierException
) -> JSONResponse:
    """
    Handle Greffier domain exceptions.

    Converts domain exceptions to appropriate HTTP responses.
    """
    status_code = STATUS_CODE_MAP.get(
        exc.code, status.HTTP_500_INTERNAL_SERVER_ERROR
    )

    if status_code >= 500:
        logger.error(
            f"{request.method} {request.url.path} failed: {exc.code}",
            extra={"error": exc.code},
            exc_info=exc,
        )

    headers = None
    if status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}

    return JSONResponse(
        status_code=status_code,
        content={
            "error": exc.code,
            "message": exc.message,
        },
        headers=headers,
    )


async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Report malformed request bodies as VALIDATION_ERROR (400).

    Only the first problem is reported, in the same shape as a
    domain ValidationError.
    """
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = [str(part) for part in first.get("loc", ()) if part != "body"]
    field = ".".join(location) or "body"
    reason = first.get("msg", "invalid request")

    logger.info(
        f"{request.method} {request.url.path} rejected: {field}: {reason}",
        extra={"field": field},
    )
    return await greffier_exception_handler(
        request, ValidationError(field=field, reason=reason)
    )
