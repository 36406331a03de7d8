"""
==============================================================================
Subscription Schemas Module
==============================================================================

Request and response schemas for newsletter subscriptions.

Email format is checked by the service so that a bad address answers
INVALID_EMAIL (400) instead of a generic validation error.

==============================================================================
"""

from typing import Optional
from pydantic import BaseModel, Field, field_validator


class SubscribeRequest(BaseModel):
    """Newsletter subscription request."""
    name: str = Field(default="", max_length=120)
    email: str = Field(default="", max_length=320)
    phone: str = Field(default="", max_length=40)

    @field_validator("name", "email", "phone", mode="before")
    @classmethod
    def strip_whitespace(cls, v: Optional[str]) -> str:
        if v is None:
            return ""
        return str(v).strip()


class SubscribeResponse(BaseModel):
    """Subscription acknowledgement."""
    ok: bool = Field(default=True)
