# storefront/api/errors.py
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from storefront.domain.errors import (
    ConflictError,
    NotFoundError,
    StorefrontError,
    ValidationError,
)
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

STATUS_CODES = {
    ValidationError: 400,
    NotFoundError: 404,
    ConflictError: 409,
}


def status_for(exc: Exception) -> int:
    for kind, code in STATUS_CODES.items():
        if isinstance(exc, kind):
            return code
    return 500


def public_message(exc: Exception) -> str:
    # store and unexpected failures never leak details to the client
    if status_for(exc) == 500:
        return "Internal server error"
    return str(exc)


async def storefront_error_handler(request: Request, exc: StorefrontError):
    code = status_for(exc)
    if code == 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc!r}")
    return JSONResponse(status_code=code, content={"status": "error", "error": public_message(exc)})


async def request_validation_handler(request: Request, exc: RequestValidationError):
    # body/query problems share the 400 of service-level validation
    problems = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err["loc"])
        problems.append(f"{field}: {err['msg']}")
    return JSONResponse(status_code=400, content={"status": "error", "error": "; ".join(problems)})


async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception(f"{request.method} {request.url.path} crashed")
    return JSONResponse(status_code=500, content={"status": "error", "error": "Internal server error"})


def register_error_handlers(app: FastAPI):
    app.add_exception_handler(StorefrontError, storefront_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
