"""
Item API Schemas - Response envelopes for the /json endpoints
"""

from typing import Any
from pydantic import BaseModel, Field


class ItemCreatedResponse(BaseModel):
    """Response after creating an item"""

    id: str = Field(..., description="Generated item ID")
    url: str = Field(..., description="Absolute URL of the new item")
    data: Any = Field(None, description="The request body, echoed back")


class ItemDeletedResponse(BaseModel):
    """Response after deleting an item"""

    message: str = Field(..., description="Human-readable confirmation")
    id: str = Field(..., description="ID of the deleted item")


class ErrorResponse(BaseModel):
    """Body of every error response"""

    error: str = Field(..., description="Short error message")
