from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from .resume import TailoredResumeOutput

TailoringStyle = Literal["concise", "detailed"]
TAILORING_STYLES: tuple[str, ...] = ("concise", "detailed")


class IndustryBenchmarkResult(BaseModel):
    industry: str
    average: float
    top: float
    percentile: int = Field(ge=1, le=99)
    delta_from_average: float


class ATSScore(BaseModel):
    overall_score: int = Field(ge=0, le=100)
    keyword_match: int = Field(ge=0, le=100)
    formatting_score: int = Field(ge=0, le=100)
    readability_score: int = Field(ge=0, le=100)
    suggestions: list[str] = Field(default_factory=list)
    industry_benchmark: IndustryBenchmarkResult | None = None


class BulletSimilarityMatch(BaseModel):
    responsibility: str
    bullet_id: str
    bullet_text: str
    similarity: float = Field(ge=0.0, le=1.0)
    section: str | None = None
    company: str | None = None


class TailorResponseData(TailoredResumeOutput):
    remaining_quota: int | None = None
    similar_bullets: list[BulletSimilarityMatch] = Field(default_factory=list)
