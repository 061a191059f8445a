"""Pydantic request/response models for the API."""

from .analytics import (
    CompilationSessionExit,
    CompilationSessionOpen,
    CompilationSessionResponse,
    IntervalChangeCreate,
    InteractionCreate,
    InteractionType,
    PageSessionCreate,
    PageSessionEnd,
)
from .search import ErrorResponse, MatchOut, SearchRequest, SearchResponse

__all__ = [
    "CompilationSessionExit",
    "CompilationSessionOpen",
    "CompilationSessionResponse",
    "ErrorResponse",
    "IntervalChangeCreate",
    "InteractionCreate",
    "InteractionType",
    "MatchOut",
    "PageSessionCreate",
    "PageSessionEnd",
    "SearchRequest",
    "SearchResponse",
]
