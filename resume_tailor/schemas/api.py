from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

from .job import Job
from .resume import Resume
from .tailor import ATSScore, TailorResponseData

T = TypeVar("T")


class ParseTextRequest(BaseModel):
    raw_text: str | None = Field(default=None, max_length=50000)


class ScoreRequest(BaseModel):
    resume: Any = None
    job: Any = None


class TailorRequest(BaseModel):
    resume: Any = None
    job: Any = None
    style: Any = "concise"


class Envelope(BaseModel, Generic[T]):
    success: bool
    data: T | None = None
    error: str | None = None


ResumeEnvelope = Envelope[Resume]
JobEnvelope = Envelope[Job]
ATSScoreEnvelope = Envelope[ATSScore]
TailorEnvelope = Envelope[TailorResponseData]
