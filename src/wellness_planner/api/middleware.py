"""Error rendering and request guards for the action API.

Every failure leaves the service as an RFC 9457 Problem Details document
that also carries ``success: false`` and a machine-readable ``code``.
"""

from typing import Any, Callable, Optional

from fastapi import FastAPI, Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from ..config import get_config
from ..core.enums import ErrorCode
from ..core.errors import WellnessError
from ..utils.logging_config import get_logger, log_exception

logger = get_logger(__name__)

STATUS_TITLES = {
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    405: "Method Not Allowed",
    413: "Payload Too Large",
    422: "Unprocessable Entity",
    500: "Internal Server Error",
    503: "Service Unavailable",
}

STATUS_CODES = {
    400: ErrorCode.BAD_REQUEST,
    401: ErrorCode.UNAUTHORIZED,
    404: ErrorCode.NOT_FOUND,
    413: ErrorCode.PAYLOAD_TOO_LARGE,
    422: ErrorCode.VALIDATION_ERROR,
}


def code_for_status(status_code: int) -> ErrorCode:
    """Error code used for a bare HTTP status."""
    if status_code in STATUS_CODES:
        return STATUS_CODES[status_code]
    if status_code >= 500:
        return ErrorCode.INTERNAL_ERROR
    return ErrorCode.BAD_REQUEST


def problem_response(
    status_code: int,
    title: str,
    code: ErrorCode,
    detail: Optional[str] = None,
    instance: Optional[str] = None,
    headers: Optional[dict] = None,
    **extra_fields: Any,
) -> JSONResponse:
    """Create a JSON response in RFC 9457 Problem Details format."""
    problem = {
        "type": f"https://httpstatuses.com/{status_code}",
        "title": title,
        "status": status_code,
        "success": False,
        "code": code.value,
    }

    if detail:
        problem["detail"] = detail
    if instance:
        problem["instance"] = instance

    problem.update(extra_fields)

    return JSONResponse(
        status_code=status_code,
        content=problem,
        media_type="application/problem+json",
        headers=headers,
    )


async def wellness_error_handler(request: Request, exc: WellnessError) -> JSONResponse:
    headers = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return problem_response(
        status_code=exc.status_code,
        title=exc.title,
        code=exc.code,
        detail=exc.message,
        instance=str(request.url),
        headers=headers,
        **exc.extra_fields,
    )


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.info(f"Validation failed for {request.url.path}: {len(exc.errors())} error(s)")
    return problem_response(
        status_code=422,
        title="Validation Error",
        code=ErrorCode.VALIDATION_ERROR,
        detail="Request validation failed",
        instance=str(request.url),
        errors=jsonable_encoder(exc.errors()),
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return problem_response(
        status_code=exc.status_code,
        title=STATUS_TITLES.get(exc.status_code, "HTTP Error"),
        code=code_for_status(exc.status_code),
        detail=str(exc.detail) if exc.detail else None,
        instance=str(request.url),
        headers=getattr(exc, "headers", None),
    )


def install_error_handlers(app: FastAPI) -> None:
    """Register the Problem Details renderers on the application."""
    app.add_exception_handler(WellnessError, wellness_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)


class ProblemDetailsMiddleware(BaseHTTPMiddleware):
    """Converts exceptions no handler claimed into a 500 Problem Details response."""

    def __init__(self, app: ASGIApp):
        super().__init__(app)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except WellnessError as exc:
            return await wellness_error_handler(request, exc)
        except Exception as exc:
            log_exception(
                "api", exc, {"method": request.method, "path": request.url.path}
            )
            return problem_response(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                title="Internal Server Error",
                code=ErrorCode.INTERNAL_ERROR,
                detail="An unexpected error occurred",
                instance=str(request.url),
            )


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    """Rejects requests whose declared body size exceeds the configured limit."""

    def __init__(self, app: ASGIApp, max_request_bytes: Optional[int] = None):
        super().__init__(app)
        self.max_request_bytes = max_request_bytes or get_config().app.max_request_bytes

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        content_length = request.headers.get("content-length")
        if content_length:
            try:
                length = int(content_length)
            except ValueError:
                return problem_response(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    title="Bad Request",
                    code=ErrorCode.BAD_REQUEST,
                    detail="Invalid Content-Length header",
                    instance=str(request.url),
                )

            if length > self.max_request_bytes:
                logger.warning(
                    f"Rejected {length} byte request to {request.url.path} "
                    f"(limit {self.max_request_bytes})"
                )
                return problem_response(
                    status_code=413,
                    title="Payload Too Large",
                    code=ErrorCode.PAYLOAD_TOO_LARGE,
                    detail=(
                        f"Request size {length} bytes exceeds limit of "
                        f"{self.max_request_bytes} bytes"
                    ),
                    instance=str(request.url),
                )

        return await call_next(request)
