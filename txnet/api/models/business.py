"""Business request models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class BusinessCreateRequest(BaseModel):
    """Request model for creating a business.

    Both fields are checked by the endpoint so that a missing value yields
    the API's own 400 message.
    """

    name: Optional[str] = Field(None, description="Business name")
    industry: Optional[str] = Field(None, description="Business industry")
