"""
Purpose:
- Pydantic models for /upload so the API is self-documenting and stable.
"""

from __future__ import annotations
from pydantic import BaseModel, Field


class CaptionResult(BaseModel):
    caption: str = Field(..., description="Generated caption")
    model: str = Field(..., description="Label of the model that produced the caption")
    processing_time_ms: int = Field(..., ge=0, description="Normalize + upstream call time in milliseconds")


class ErrorDetail(BaseModel):
    code: str
    message: str
    request_id: str


class ErrorResponse(BaseModel):
    detail: ErrorDetail
