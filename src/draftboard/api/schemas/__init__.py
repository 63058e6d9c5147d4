"""Pydantic models for API I/O."""

from .ingest import ErrorResponse, FieldErrorResponse, IngestResponse
from .reports import (
    MatchingPlayerResponse,
    MatchingPlayersResponse,
    TeamRatingResponse,
    TeamRatingsResponse,
)

__all__ = [
    "ErrorResponse",
    "FieldErrorResponse",
    "IngestResponse",
    "MatchingPlayerResponse",
    "MatchingPlayersResponse",
    "TeamRatingResponse",
    "TeamRatingsResponse",
]
