import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from user_api.domain.errors import (
    DuplicateEmailError,
    FieldError,
    InvalidCredentialsError,
    UserNotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# リクエストのどの部分かを示す先頭要素はフィールド名に含めない
REQUEST_PARTS = {"body", "query", "path", "header"}


def field_errors_from_request(exc: RequestValidationError) -> list[FieldError]:
    errors = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] in REQUEST_PARTS:
            loc = loc[1:]
        errors.append(FieldError(".".join(loc) or None, error.get("msg", "invalid value")))
    return errors


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=field_errors_from_request(exc),
        )

    @app.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError):
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=exc.errors)

    @app.exception_handler(DuplicateEmailError)
    async def duplicate_email_handler(request: Request, exc: DuplicateEmailError):
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=exc.errors)

    @app.exception_handler(InvalidCredentialsError)
    async def invalid_credentials_handler(request: Request, exc: InvalidCredentialsError):
        return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content=exc.errors)

    @app.exception_handler(UserNotFoundError)
    async def not_found_handler(request: Request, exc: UserNotFoundError):
        return Response(status_code=status.HTTP_404_NOT_FOUND)

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception("unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "internal server error"},
        )
