"""
==============================================================================
Core Package
==============================================================================

Core utilities and infrastructure for the application.

This package provides:
- Custom exception handling with consistent error responses
- Exception factory functions for common error scenarios

Modules:
--------
- exceptions: AppException class and error factory functions

Usage:
------
    from app.core import AppException

    # Or use exception factory functions via module
    from app.core import exceptions
    raise exceptions.source_unavailable("data/catalog.xlsx")

==============================================================================
"""

from .exceptions import (
    AppException,
    register_exception_handlers,
)

__all__ = [
    # Exceptions
    "AppException",
    "register_exception_handlers",
]
