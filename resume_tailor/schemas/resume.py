from __future__ import annotations

from pydantic import BaseModel, Field


class ResumeBullet(BaseModel):
    id: str
    section: str
    company: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    raw_text: str
    action: str | None = None
    impact: str | None = None
    metric_value: float | None = None
    metric_unit: str | None = None
    tailored_text: str | None = None
    suggested_metric: str | None = None

    @property
    def display_text(self) -> str:
        return self.tailored_text or self.raw_text


class Resume(BaseModel):
    name: str
    email: str
    phone: str | None = None
    summary: str | None = None
    sections: list[str] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    bullets: list[ResumeBullet] = Field(default_factory=list)


class TailoredResumeOutput(BaseModel):
    resume: Resume
    match_score: float = Field(ge=0.0, le=1.0)
    missing_skills: list[str] = Field(default_factory=list)
