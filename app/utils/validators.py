"""
==============================================================================
Validation Utilities Module
==============================================================================

Validation classes for public input data.

This module implements:
- EmailValidator: Validates and normalizes subscriber emails
- MarketValidator: Validates two-letter market codes

Validation Rules for Emails:
---------------------------
- Required, trimmed
- One "@" with non-blank local part and a dotted domain
- No whitespace
- Stored as lowercase

==============================================================================
"""

from __future__ import annotations

import re
from typing import Optional, Tuple


class EmailValidator:
    """
    Validator for subscriber email addresses.

    Example:
        >>> validator = EmailValidator()
        >>> is_valid, normalized, error = validator.validate(" Ana@Example.COM ")
        >>> print(normalized)
        'ana@example.com'
    """

    PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

    MAX_LENGTH = 254

    def validate(self, email: Optional[str]) -> Tuple[bool, Optional[str], Optional[str]]:
        """
        Validate and normalize an email address.

        Args:
            email: Raw email input

        Returns:
            Tuple of (is_valid, normalized_email, error_message)
        """
        if not email:
            return False, None, "Email is required"

        email = email.strip().lower()

        if not email:
            return False, None, "Email is required"

        if len(email) > self.MAX_LENGTH:
            return False, None, f"Email must be at most {self.MAX_LENGTH} characters"

        if not self.PATTERN.match(email):
            return False, None, "Email is not valid"

        return True, email, None

    def is_valid(self, email: Optional[str]) -> bool:
        """Quick validation check."""
        is_valid, _, _ = self.validate(email)
        return is_valid


class MarketValidator:
    """
    Validator for market codes.

    Markets are two ASCII letters, compared upper-case.
    """

    PATTERN = re.compile(r"^[A-Za-z]{2}$")

    def validate(self, market: Optional[str]) -> Tuple[bool, Optional[str]]:
        """
        Validate a market code.

        Returns:
            Tuple of (is_valid, error_message)
        """
        if not market or not market.strip():
            return False, "Market is required"

        if not self.PATTERN.match(market.strip()):
            return False, "Market must be a two-letter code"

        return True, None

    def is_valid(self, market: Optional[str]) -> bool:
        """Quick validation check."""
        is_valid, _ = self.validate(market)
        return is_valid
