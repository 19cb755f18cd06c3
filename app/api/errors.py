"""Exception handlers: service errors to JSON, validation errors to 400, everything else to a bare 500."""

import logging
from typing import TypeVar

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from app.core.errors import InvalidInputError, ServiceError, UnauthenticatedError

ModelT = TypeVar("ModelT", bound=BaseModel)

logger = logging.getLogger(__name__)


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    content: dict[str, str] = {"detail": exc.message}
    field = getattr(exc, "field", None)
    if field:
        content["field"] = field
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthenticatedError) else None
    return JSONResponse(status_code=exc.status_code, content=content, headers=headers)


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report the first invalid field; body/form/query prefixes are dropped from its location."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    loc = [
        str(part)
        for part in first.get("loc", ())
        if part not in ("body", "query", "path", "form")
    ]
    field = ".".join(loc) or None
    message = first.get("msg", "Invalid input")
    content: dict[str, str] = {"detail": f"{field}: {message}" if field else message}
    if field:
        content["field"] = field
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=content)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled %s on %s %s", type(exc).__name__, request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)


def validate_model(model: type[ModelT], **data: object) -> ModelT:
    """Build a request model from loose (form) fields, raising InvalidInputError on the first bad field."""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ())) or None
        raise InvalidInputError(
            f"{field}: {first['msg']}" if field else first["msg"], field=field
        ) from e
