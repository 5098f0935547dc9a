from __future__ import annotations

import re

from resume_tailor.normalize.utils import strip_bullet_prefix
from resume_tailor.schemas import Job, Resume, ResumeBullet, TailoredResumeOutput, TailoringStyle
from resume_tailor.scoring import get_missing_skills

CONCISE_MAX_CHARS = 100
SUGGESTED_METRIC = "Consider adding: X% improvement or Y users impacted"
NO_KEYWORDS_MATCH_SCORE = 0.5

_CLAUSE_BREAK = re.compile(r"\s*(?:;|\s[-–—]\s)\s*")
_WHITESPACE = re.compile(r"\s+")


def clean_bullet_text(text: str) -> str:
    cleaned = _WHITESPACE.sub(" ", strip_bullet_prefix(text)).strip()
    if cleaned:
        cleaned = cleaned[0].upper() + cleaned[1:]
    return cleaned


def shorten(text: str, limit: int = CONCISE_MAX_CHARS) -> str:
    """First clause of ``text``, cut at a word boundary within ``limit`` chars."""
    clause = _CLAUSE_BREAK.split(text, maxsplit=1)[0].strip()
    if len(clause) <= limit:
        return clause
    cut = clause[: limit + 1]
    boundary = cut.rfind(" ")
    if boundary > 0:
        cut = cut[:boundary]
    else:
        cut = clause[:limit]
    return cut.rstrip(" ,.;:")


def rewrite_bullet(text: str, style: TailoringStyle) -> str:
    cleaned = clean_bullet_text(text)
    if style == "concise":
        return shorten(cleaned)
    return cleaned


def keyword_match_score(resume: Resume, job: Job) -> float:
    if not job.keywords:
        return NO_KEYWORDS_MATCH_SCORE
    skills = {skill.lower() for skill in resume.skills}
    texts = [bullet.raw_text.lower() for bullet in resume.bullets]
    matched = [
        keyword
        for keyword in job.keywords
        if keyword.lower() in skills or any(keyword.lower() in text for text in texts)
    ]
    return round(len(matched) / len(job.keywords), 2)


def _tailor_bullet(bullet: ResumeBullet, style: TailoringStyle) -> ResumeBullet:
    rewritten = rewrite_bullet(bullet.raw_text, style)
    return bullet.model_copy(
        update={
            "tailored_text": rewritten if rewritten and rewritten != bullet.raw_text else None,
            "suggested_metric": SUGGESTED_METRIC if bullet.metric_value is None else None,
        }
    )


class StubTailoringEngine:
    """Deterministic tailoring with no external backend."""

    def tailor_sync(self, resume: Resume, job: Job, style: TailoringStyle = "concise") -> TailoredResumeOutput:
        tailored = resume.model_copy(
            update={"bullets": [_tailor_bullet(bullet, style) for bullet in resume.bullets]}
        )
        return TailoredResumeOutput(
            resume=tailored,
            match_score=keyword_match_score(resume, job),
            missing_skills=get_missing_skills(resume, job),
        )

    async def tailor(self, resume: Resume, job: Job, style: TailoringStyle = "concise") -> TailoredResumeOutput:
        return self.tailor_sync(resume, job, style)
