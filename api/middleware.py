"""
Consolidated middleware for the Honest Meals API
"""

import time
import logging
from datetime import datetime, timezone
from uuid import UUID, uuid4
from decimal import Decimal

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from app.exceptions import AppError

logger = logging.getLogger("honestmeals.middleware")


# ============================================================================
# Helper Functions
# ============================================================================


def make_serializable(obj):
    """Convert objects to JSON-serializable format"""
    if isinstance(obj, Decimal):
        return float(obj)
    elif isinstance(obj, UUID):
        return str(obj)
    elif isinstance(obj, Exception):
        # pydantic puts the raised ValueError in the error context
        return str(obj)
    elif isinstance(obj, dict):
        return {k: make_serializable(v) for k, v in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [make_serializable(item) for item in obj]
    return obj


def error_body(code: str, message, details=None) -> dict:
    error = {"code": code, "message": message}
    if details:
        error["details"] = details
    return {
        "success": False,
        "error": error,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# ============================================================================
# Request Logging Middleware
# ============================================================================


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log all HTTP requests and responses"""

    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid4())
        request.state.request_id = request_id

        logger.info(
            f"request_started request_id={request_id} method={request.method} "
            f"path={request.url.path} "
            f"client={request.client.host if request.client else None}"
        )

        start_time = time.time()

        try:
            response: Response = await call_next(request)
            process_time = time.time() - start_time

            logger.info(
                f"request_completed request_id={request_id} method={request.method} "
                f"path={request.url.path} status={response.status_code} "
                f"time={process_time:.4f}s"
            )

            response.headers["X-Request-ID"] = request_id
            response.headers["X-Process-Time"] = f"{process_time:.4f}"

            return response

        except Exception as exc:
            process_time = time.time() - start_time
            logger.error(
                f"request_failed request_id={request_id} method={request.method} "
                f"path={request.url.path} error={exc} time={process_time:.4f}s",
                exc_info=True,
            )
            raise


# ============================================================================
# Error Handlers
# ============================================================================


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle Pydantic validation errors"""
    logger.warning(f"Validation error on {request.url.path}: {exc.errors()}")

    return JSONResponse(
        status_code=422,
        content=error_body(
            "VALIDATION_ERROR",
            "Request validation failed",
            make_serializable(exc.errors()),
        ),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions"""
    logger.warning(f"HTTP {exc.status_code} on {request.url.path}: {exc.detail}")

    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(f"HTTP_{exc.status_code}", exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def app_error_handler(request: Request, exc: AppError):
    """Handle errors raised by the service layer"""
    log = logger.error if exc.http_status >= 500 else logger.warning
    log(f"{exc.__class__.__name__} on {request.url.path}: {exc}")

    payload = exc.to_dict()
    return JSONResponse(
        status_code=exc.http_status,
        content=error_body(
            payload["code"], payload["message"], make_serializable(payload.get("details"))
        ),
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected errors"""
    logger.exception(f"Unexpected error on {request.url.path}: {str(exc)}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("INTERNAL_SERVER_ERROR", "An unexpected error occurred"),
    )
