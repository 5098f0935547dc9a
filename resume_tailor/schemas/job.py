from __future__ import annotations

from pydantic import BaseModel, Field


class Job(BaseModel):
    id: str | None = None
    title: str
    seniority: str | None = None
    company: str | None = None
    location: str | None = None
    keywords: list[str] = Field(default_factory=list)
    responsibilities: list[str] = Field(default_factory=list)
    required_skills: list[str] | None = None
    preferred_skills: list[str] | None = None
