"""Map domain errors and request validation failures onto HTTP responses.

Only request bodies and domain validation answer 400. Anything else that
fails validation is a server-side fault and falls through to a 500.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError
from protean.exceptions import ValidationError as DomainValidationError

from shared.errors import StorefrontError

logger = structlog.get_logger(__name__)


def _field_errors(errors: list[dict]) -> dict[str, list[str]]:
    fields: dict[str, list[str]] = {}
    for error in errors:
        location = [str(part) for part in error.get("loc", ()) if part != "body"]
        fields.setdefault(".".join(location) or "body", []).append(error.get("msg", "Invalid value"))
    return fields


def _domain_messages(exc: DomainValidationError) -> dict:
    if isinstance(exc.messages, dict):
        return exc.messages
    return {"body": exc.messages if isinstance(exc.messages, list) else [exc.messages]}


async def storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("Request failed", path=request.url.path, error=exc.message, status_code=exc.status_code)
    else:
        logger.info("Request rejected", path=request.url.path, error=exc.message, status_code=exc.status_code)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = _field_errors(list(exc.errors()))
    logger.info("Request validation failed", path=request.url.path, errors=errors)
    return JSONResponse(status_code=400, content={"message": "Invalid request", "errors": errors})


async def domain_validation_handler(request: Request, exc: DomainValidationError) -> JSONResponse:
    errors = _domain_messages(exc)
    logger.info("Domain validation failed", path=request.url.path, errors=errors)
    return JSONResponse(status_code=400, content={"message": "Invalid request", "errors": errors})


async def object_not_found_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    logger.info("Object not found", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=404, content={"message": "Not found", "errors": {}})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StorefrontError, storefront_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(DomainValidationError, domain_validation_handler)
    app.add_exception_handler(ObjectNotFoundError, object_not_found_handler)
