"""
Application Exception Handling

Single AppException class for all application errors with FastAPI integration.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse


logger = logging.getLogger(__name__)


class AppException(Exception):
    """
    Unified application exception for all error scenarios.

    Provides consistent error response format across the entire API.

    Usage:
        raise AppException("Catalog spreadsheet not found", "SOURCE_UNAVAILABLE", 500)
        raise AppException("Invalid email", "INVALID_EMAIL", 400, {"email": "x@"})

    Error Codes:
        Catalog:
            - SOURCE_UNAVAILABLE (500)
            - CATALOG_BUILD_FAILED (500)
            - FEATURED_BUILD_FAILED (500)
            - INVALID_MARKET (400)

        Subscription:
            - INVALID_EMAIL (400)
            - SUBSCRIPTION_FAILED (500)

        General:
            - INTERNAL_ERROR (500)
    """

    def __init__(
        self,
        message: str,
        code: str,
        status_code: int = 400,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize application exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code (e.g., "SOURCE_UNAVAILABLE")
            status_code: HTTP status code (default: 400)
            details: Additional error context (optional)
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON response."""
        error_dict = {
            "success": False,
            "error": {
                "code": self.code,
                "message": self.message,
                "timestamp": self.timestamp
            }
        }

        if self.details:
            error_dict["error"]["details"] = self.details

        return error_dict


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """
    FastAPI exception handler for AppException.

    Converts AppException to consistent JSON error response.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Last-resort handler for errors no endpoint translated.

    Logs the traceback and answers with INTERNAL_ERROR.
    """
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    error = internal_error()
    return JSONResponse(
        status_code=error.status_code,
        content=error.to_dict()
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with FastAPI app.

    Call this in main.py after creating the FastAPI instance.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


# ============================================
# CONVENIENCE FACTORY FUNCTIONS
# ============================================

def source_unavailable(path: Optional[str] = None) -> AppException:
    """Create catalog workbook missing exception."""
    details = {"path": path} if path else {}
    return AppException(
        "Catalog spreadsheet not found",
        "SOURCE_UNAVAILABLE",
        500,
        details
    )


def catalog_build_failed(detail: str) -> AppException:
    """Create catalog build failure exception."""
    return AppException(
        "Failed to build catalog",
        "CATALOG_BUILD_FAILED",
        500,
        {"details": detail}
    )


def featured_build_failed(detail: str) -> AppException:
    """Create featured selection failure exception."""
    return AppException(
        "Failed to build featured products",
        "FEATURED_BUILD_FAILED",
        500,
        {"details": detail}
    )


def invalid_email(email: str) -> AppException:
    """Create invalid email exception."""
    return AppException(
        "Invalid email address",
        "INVALID_EMAIL",
        400,
        {"email": email}
    )


def subscription_failed(detail: str) -> AppException:
    """Create subscription storage failure exception."""
    return AppException(
        "Failed to store subscription",
        "SUBSCRIPTION_FAILED",
        500,
        {"details": detail}
    )


def internal_error(message: str = "Internal server error") -> AppException:
    """Create internal server error exception."""
    return AppException(message, "INTERNAL_ERROR", 500)


def invalid_market(market: str) -> AppException:
    """Create invalid market code exception."""
    return AppException(
        f"Invalid market code: {market}",
        "INVALID_MARKET",
        400,
        {"market": market}
    )
