"""
Custom exceptions and handlers for consistent API error responses.

Services raise the domain exceptions defined here; the handlers registered
by ``register_exception_handlers`` translate them into the standard
response envelope so transport concerns never leak into the core.
"""

from typing import Any, Dict, List, Optional
import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .response_models import error_envelope

logger = logging.getLogger(__name__)


class StorystError(Exception):
    """Base exception for all domain errors"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code: str = "INTERNAL_ERROR"
    default_message: str = "An internal error occurred"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)


class AuthError(StorystError):
    """Base class for every authentication rejection"""

    status_code = status.HTTP_401_UNAUTHORIZED
    error_code = "AUTH_FAILED"
    default_message = "Authentication failed"


class MissingCredentialError(AuthError):
    """No usable ``Authorization: Bearer <token>`` header was supplied"""

    error_code = "MISSING_CREDENTIAL"
    default_message = "Authentication token not provided"


class InvalidCredentialError(AuthError):
    """Signature, structure or claims of the credential are not valid"""

    error_code = "INVALID_CREDENTIAL"
    default_message = "Invalid authentication token"


class ExpiredCredentialError(AuthError):
    """The credential was valid but its expiry has passed"""

    error_code = "EXPIRED_CREDENTIAL"
    default_message = "Authentication token has expired"


class UnauthenticatedError(AuthError):
    """An operation that needs an identity was invoked without one"""

    error_code = "UNAUTHENTICATED"
    default_message = "Customer identity not found in authentication token"


class ForbiddenError(StorystError):
    """Authenticated caller may not act on the requested resource"""

    status_code = status.HTTP_403_FORBIDDEN
    error_code = "FORBIDDEN"
    default_message = "Permission denied"


class NotFoundError(StorystError):
    """Resource not found error"""

    status_code = status.HTTP_404_NOT_FOUND
    error_code = "NOT_FOUND"
    default_message = "Resource not found"


class DuplicateEmailError(StorystError):
    """A customer with the same email already exists"""

    status_code = status.HTTP_409_CONFLICT
    error_code = "DUPLICATE_EMAIL"
    default_message = "Email already registered"

    def __init__(self, email: Optional[str] = None, field: str = "email"):
        super().__init__(details={"field": field})
        self.email = email
        self.field = field


class ValidationFailedError(StorystError):
    """Input rejected before it reached the core"""

    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "VALIDATION_FAILED"
    default_message = "Invalid request data"

    def __init__(
        self,
        message: Optional[str] = None,
        errors: Optional[List[Dict[str, str]]] = None,
    ):
        super().__init__(message)
        self.errors = errors or []


class InternalFaultError(StorystError):
    """Unexpected storage or infrastructure fault, with details withheld"""


def _auth_headers(exc: StorystError) -> Optional[Dict[str, str]]:
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        return {"WWW-Authenticate": "Bearer"}
    return None


async def handle_storyst_error(request: Request, exc: StorystError) -> JSONResponse:
    """Handle domain errors"""
    if exc.status_code >= 500:
        logger.error(f"{exc.error_code} at {request.url.path}: {exc.message}")
    else:
        logger.warning(f"{exc.error_code} at {request.url.path}: {exc.message}")

    errors = getattr(exc, "errors", None)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_envelope(
            status_code=exc.status_code,
            message=exc.message,
            error_code=exc.error_code,
            details=exc.details or None,
            errors=errors or None,
        ),
        headers=_auth_headers(exc),
    )


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Convert pydantic request validation failures to a 400 response"""
    errors = [
        {
            "path": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
            "message": err.get("msg", ""),
        }
        for err in exc.errors()
    ]
    logger.warning(f"Validation failed at {request.url.path}: {errors}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_envelope(
            status_code=status.HTTP_400_BAD_REQUEST,
            message=ValidationFailedError.default_message,
            error_code=ValidationFailedError.error_code,
            errors=errors,
        ),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler; the original error is logged, never returned"""
    logger.exception(f"Unhandled error at {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_envelope(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message=InternalFaultError.default_message,
            error_code=InternalFaultError.error_code,
        ),
    )


def register_exception_handlers(app):
    """Register all exception handlers with the FastAPI app"""
    app.add_exception_handler(StorystError, handle_storyst_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
