"""
==============================================================================
Utilities Package
==============================================================================

Utility classes and functions for the application.

Modules:
--------
- validators: Email and market code validation

==============================================================================
"""

from .validators import EmailValidator, MarketValidator

__all__ = [
    "EmailValidator",
    "MarketValidator",
]
