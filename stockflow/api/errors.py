"""
Error responses - every failure is rendered as {"error": str, "details"?: [str]}
"""
import logging
from typing import List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError
from starlette.exceptions import HTTPException as StarletteHTTPException

from stockflow.core.exceptions import StockFlowError

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str, details: Optional[List[str]] = None, headers=None) -> JSONResponse:
    body = {"error": message}
    if details:
        body["details"] = details
    return JSONResponse(status_code=status_code, content=body, headers=headers)


def _describe_validation_error(error: dict) -> str:
    # ("body", "items", 0, "quantity") -> "items.0.quantity"
    location = ".".join(str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path"))
    message = error.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


def register_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(StockFlowError)
    async def stockflow_error_handler(request: Request, exc: StockFlowError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.code} {exc.message}")
        return error_response(exc.status_code, exc.message, exc.details)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        details = [_describe_validation_error(e) for e in exc.errors()]
        return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request data", details)

    @app.exception_handler(OperationalError)
    async def database_unavailable_handler(request: Request, exc: OperationalError):
        logger.error(f"{request.method} {request.url.path} database error: {exc.orig}")
        return error_response(status.HTTP_503_SERVICE_UNAVAILABLE, "Database unavailable, try again")

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")
