"""
Standard error response models.
"""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard API error response."""

    success: bool = Field(False, description="Always false for errors")
    error: str = Field(..., description="Human-readable error message")
