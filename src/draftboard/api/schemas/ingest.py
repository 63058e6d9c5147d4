from __future__ import annotations

from typing import List

from pydantic import BaseModel


class FieldErrorResponse(BaseModel):
    path: str
    message: str


class IngestResponse(BaseModel):
    success: bool = True
    message: str | None = None
    timestamp: str | None = None
    count: int | None = None


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    error: str | None = None
    errors: List[FieldErrorResponse] | None = None
