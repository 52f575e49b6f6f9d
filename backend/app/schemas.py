"""
Pydantic schemas for response validation.
"""

from pydantic import BaseModel

from freshness.models import BadgeResponse


class GreetingResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    status: str


class ErrorResponse(BaseModel):
    error: str
    detail: str
    status_code: int


__all__ = ["BadgeResponse", "ErrorResponse", "GreetingResponse", "HealthResponse"]
