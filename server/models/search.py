"""Search request/response models."""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class SearchRequest(BaseModel):
    """Body of POST /search. Forwarded to the inference endpoint as-is."""

    prompt: str
    similarity_threshold: float = Field(0.1, ge=0.0, le=1.0)
    match_count: int = Field(20, ge=1)
    session_id: Optional[str] = None
    identity_ref: Optional[str] = None

    @field_validator("prompt")
    @classmethod
    def prompt_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("prompt cannot be empty")
        return v


class MatchOut(BaseModel):
    id: str
    title: str = ""
    access_url: Optional[str] = None
    similarity: float


class SearchResponse(BaseModel):
    matches: List[MatchOut]
    prompt: str
    threshold: float
    search_id: str


class ErrorResponse(BaseModel):
    error: str
