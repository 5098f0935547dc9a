from __future__ import annotations

import math
from dataclasses import dataclass
from functools import lru_cache

from resume_tailor.core.vocabulary import get_vocabulary_value
from resume_tailor.schemas import IndustryBenchmarkResult, Job


@dataclass(frozen=True)
class IndustryProfile:
    industry: str
    keywords: tuple[str, ...]
    average: float
    top: float


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@lru_cache(maxsize=1)
def industry_profiles() -> tuple[IndustryProfile, ...]:
    entries = get_vocabulary_value("scoring.industry_benchmarks", [])
    if not isinstance(entries, list):
        raise RuntimeError("Vocabulary entry 'scoring.industry_benchmarks' must be a list.")
    return tuple(
        IndustryProfile(
            industry=str(entry["industry"]),
            keywords=tuple(str(keyword).lower() for keyword in entry.get("keywords", [])),
            average=float(entry["average"]),
            top=float(entry["top"]),
        )
        for entry in entries
    )


def _job_text(job: Job) -> str:
    parts: list[str] = [job.title, job.seniority or ""]
    parts.extend(job.keywords)
    parts.extend(job.responsibilities)
    parts.extend(job.required_skills or [])
    parts.extend(job.preferred_skills or [])
    return " ".join(parts).lower()


def detect_industry(job: Job, profiles: tuple[IndustryProfile, ...] | None = None) -> IndustryProfile | None:
    """Pick the profile with the most keyword hits; a tie or no hits yields None."""
    text = _job_text(job)
    scored = [
        (sum(1 for keyword in profile.keywords if keyword in text), profile)
        for profile in (profiles if profiles is not None else industry_profiles())
    ]
    if not scored:
        return None
    best = max(hits for hits, _ in scored)
    if best <= 0:
        return None
    leaders = [profile for hits, profile in scored if hits == best]
    if len(leaders) > 1:
        return None
    return leaders[0]


def calculate_percentile(score: float, profile: IndustryProfile) -> int:
    clamped = max(0.0, min(100.0, score))
    if clamped <= profile.average:
        fraction = 0.0 if profile.average == 0 else clamped / profile.average
        return max(1, round_half_up(fraction * 50))

    spread = (profile.top - profile.average) or 1.0
    above = clamped - profile.average
    return min(99, round_half_up(50 + (above / spread) * 50))


def benchmark_score(score: int, profile: IndustryProfile) -> IndustryBenchmarkResult:
    return IndustryBenchmarkResult(
        industry=profile.industry,
        average=profile.average,
        top=profile.top,
        percentile=calculate_percentile(score, profile),
        delta_from_average=round(score - profile.average, 1),
    )
