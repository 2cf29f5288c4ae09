import logging
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error."


class ServiceError(Exception):
    """Base class for failures a request handler reports to the caller."""

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    @property
    def public_message(self) -> str:
        return self.message


class ConflictError(ServiceError):
    status_code = 400


class BadRequestError(ServiceError):
    status_code = 400


class ExternalServiceError(ServiceError):
    """
    Failure reported by the hosted backend or the transport to it.

    The detail is for server logs only; callers always see the generic
    internal error message.
    """

    status_code = 500

    def __init__(self, operation: str, detail: str):
        super().__init__(f"{operation} failed: {detail}")
        self.operation = operation
        self.detail = detail

    @property
    def public_message(self) -> str:
        return INTERNAL_ERROR_MESSAGE


def format_violations(errors) -> list[dict]:
    """Turn pydantic errors into the field violation list returned on 400."""
    violations = []
    for error in errors:
        loc = [part for part in error.get("loc", ()) if part != "body"]
        if error.get("type") == "json_invalid" or not loc:
            path = "body"
        else:
            path = str(loc[0])
        # the body itself and plaintext passwords are never echoed back
        value = None if path in ("body", "password") else error.get("input")
        violations.append({
            "type": "field",
            "msg": error.get("msg"),
            "path": path,
            "location": "body",
            "value": value,
        })
    return violations


async def service_error_handler(request: Request, exc: ServiceError):
    if isinstance(exc, ExternalServiceError):
        logger.error(f"{request.method} {request.url.path}: {exc}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"message": exc.public_message})


async def validation_error_handler(request: Request, exc: RequestValidationError):
    violations = format_violations(exc.errors())
    logger.info(f"{request.method} {request.url.path} failed validation on {[v['path'] for v in violations]}")
    return JSONResponse(status_code=400, content=jsonable_encoder({"errors": violations}))


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unexpected error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"message": INTERNAL_ERROR_MESSAGE})


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
