"""
Central error handling for the Extension Tracker backend

Domain errors are HTTPException subclasses so services can raise them the
same way they raise plain HTTPException; each carries a stable category
that the handlers put into the response body.
"""
import logging
import traceback

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi import HTTPException

logger = logging.getLogger(__name__)

CATEGORY_VALIDATION = "validation_error"
CATEGORY_AUTHORIZATION = "authorization_error"
CATEGORY_NOT_FOUND = "not_found"
CATEGORY_INTERNAL = "internal_error"

_CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "*",
    "Access-Control-Allow-Headers": "*",
}


class DomainError(HTTPException):
    """Base class for errors with a stable category"""
    status_code: int = status.HTTP_400_BAD_REQUEST
    category: str = "error"

    def __init__(self, detail: str):
        super().__init__(status_code=self.status_code, detail=detail)


class ReviewValidationError(DomainError):
    """Malformed request, e.g. a review status outside the allowed values"""
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    category = CATEGORY_VALIDATION


class InvalidTransitionError(ReviewValidationError):
    """Requested review transition is not defined for the current status"""
    status_code = status.HTTP_409_CONFLICT


class AuthorizationError(DomainError):
    """Actor lacks the role or ownership required for the operation"""
    status_code = status.HTTP_403_FORBIDDEN
    category = CATEGORY_AUTHORIZATION


class NotFoundError(DomainError):
    """Entity missing, or hidden from the requesting actor"""
    status_code = status.HTTP_404_NOT_FOUND
    category = CATEGORY_NOT_FOUND


def _category_for_status(status_code: int) -> str:
    if status_code == status.HTTP_403_FORBIDDEN:
        return CATEGORY_AUTHORIZATION
    if status_code == status.HTTP_404_NOT_FOUND:
        return CATEGORY_NOT_FOUND
    if status_code in (status.HTTP_400_BAD_REQUEST, status.HTTP_409_CONFLICT, status.HTTP_422_UNPROCESSABLE_ENTITY):
        return CATEGORY_VALIDATION
    if status_code == status.HTTP_401_UNAUTHORIZED:
        return "authentication_error"
    return CATEGORY_INTERNAL if status_code >= 500 else "error"


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """
    Handle HTTPException (and DomainError) with consistent JSON response format

    Args:
        request: FastAPI request object
        exc: HTTPException instance

    Returns:
        JSONResponse with error details
    """
    category = getattr(exc, "category", None) or _category_for_status(exc.status_code)
    headers = dict(_CORS_HEADERS)
    if exc.headers:
        headers.update(exc.headers)
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": True,
            "status_code": exc.status_code,
            "category": category,
            "detail": exc.detail,
            "path": str(request.url.path)
        },
        headers=headers
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Handle RequestValidationError with consistent JSON response format

    Does not leak internal validation details in production.
    """
    from app.core.config import settings

    if settings.APP_ENV == "prod":
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "error": True,
                "status_code": 422,
                "category": CATEGORY_VALIDATION,
                "detail": "Validation error: Invalid request data",
                "path": str(request.url.path)
            }
        )

    # Sanitize for JSON: e.g. ctx.error ValueError -> str
    errors = []
    for e in exc.errors():
        err = dict(e)
        if "ctx" in err and isinstance(err["ctx"], dict):
            err["ctx"] = {
                k: (str(v) if not isinstance(v, (str, int, float, bool, type(None))) else v)
                for k, v in err["ctx"].items()
            }
        errors.append(err)
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": True,
            "status_code": 422,
            "category": CATEGORY_VALIDATION,
            "detail": "Validation error",
            "errors": errors,
            "path": str(request.url.path)
        }
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected exceptions with consistent JSON response format

    Does not leak internal error details in production.
    """
    from app.core.config import settings

    logger.error("Unhandled exception: %s", exc, exc_info=True)

    if settings.APP_ENV == "prod":
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": True,
                "status_code": 500,
                "category": CATEGORY_INTERNAL,
                "detail": "Internal server error",
                "path": str(request.url.path)
            },
            headers=_CORS_HEADERS
        )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": True,
            "status_code": 500,
            "category": CATEGORY_INTERNAL,
            "detail": str(exc),
            "path": str(request.url.path),
            "traceback": traceback.format_exc() if settings.APP_ENV == "local" else None
        },
        headers=_CORS_HEADERS
    )
