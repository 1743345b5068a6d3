"""
Shared Pydantic Schemas
"""

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Plain acknowledgement for updates and deletes."""

    message: str = Field(..., examples=["Book updated successfully"])


class ErrorResponse(BaseModel):
    """Body of every domain error response."""

    detail: str = Field(..., description="Human-readable error message")
    kind: str = Field(..., description="Error category", examples=["not_found"])
