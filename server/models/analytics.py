"""Analytics ingestion request/response models."""

from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator

InteractionType = Literal["NEXT", "PREV", "AUTO_ADVANCE_START", "AUTO_ADVANCE_STOP"]


class PageSessionCreate(BaseModel):
    session_id: str
    started_at: Optional[str] = None


class PageSessionEnd(BaseModel):
    ended_at: Optional[str] = None


class InteractionCreate(BaseModel):
    session_id: str
    video_id: str
    event_type: InteractionType
    duration_seconds: Optional[int] = Field(None, ge=0)

    @model_validator(mode="after")
    def duration_only_on_stop(self):
        if self.event_type == "AUTO_ADVANCE_STOP":
            if self.duration_seconds is None:
                raise ValueError("duration_seconds is required for AUTO_ADVANCE_STOP")
        elif self.duration_seconds is not None:
            raise ValueError("duration_seconds is only allowed for AUTO_ADVANCE_STOP")
        return self


class IntervalChangeCreate(BaseModel):
    session_id: str
    interval_seconds: int = Field(..., ge=1)


class CompilationSessionOpen(BaseModel):
    session_id: str
    entered_at: Optional[str] = None


class CompilationSessionExit(BaseModel):
    exited_at: Optional[str] = None


class CompilationSessionResponse(BaseModel):
    id: str
