"""
SocialFeed API Response Utilities
Error response format and exception handlers
"""
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from typing import Any, Dict, List, Optional
from datetime import datetime
import math

from .errors import FeedError
from .logging_config import api_logger


# ============================================================
# SUCCESS HELPERS
# ============================================================

def pagination(page: int, page_size: int, total: int) -> Dict[str, int]:
    """Pagination block for list responses"""
    return {
        "currentPage": page,
        "totalPages": math.ceil(total / page_size) if total else 0,
        "totalPosts": total,
    }


# ============================================================
# ERROR RESPONSES
# ============================================================

def error_response(
    status_code: int,
    message: str,
    error_code: str,
    details: Optional[Any] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    content = {
        "ok": False,
        "message": message,
        "error_code": error_code,
        "timestamp": datetime.utcnow().isoformat() + "Z",
    }
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content, headers=headers)


async def feed_error_handler(request: Request, exc: FeedError) -> JSONResponse:
    if exc.status_code >= 500:
        api_logger.error(
            f"API Error: {exc.message}",
            error=exc.__cause__ or exc,
            error_code=exc.error_code,
            path=request.url.path,
        )
    else:
        api_logger.warning(
            f"API Error: {exc.message}",
            status_code=exc.status_code,
            error_code=exc.error_code,
            path=request.url.path,
        )
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return error_response(exc.status_code, exc.message, exc.error_code, exc.details, headers)


def _validation_errors(exc: RequestValidationError) -> List[Dict[str, str]]:
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path", "form")]
        errors.append({"field": ".".join(loc), "message": err.get("msg", "Invalid value")})
    return errors


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = _validation_errors(exc)
    api_logger.warning("Request validation failed", path=request.url.path, errors=errors)
    message = errors[0]["message"] if errors else "Invalid input"
    return error_response(400, message, "VALIDATION_ERROR", {"errors": errors})


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    api_logger.warning(
        f"HTTP Error: {exc.detail}",
        status_code=exc.status_code,
        path=request.url.path,
    )
    return error_response(
        exc.status_code,
        str(exc.detail),
        f"HTTP_{exc.status_code}",
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    api_logger.error(f"Unexpected error: {exc}", error=exc, path=request.url.path)
    return error_response(500, "Something went wrong", "INTERNAL_ERROR")


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(FeedError, feed_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
