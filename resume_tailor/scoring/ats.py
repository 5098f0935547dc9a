"""ATS compatibility scoring.

``check_ats_compatibility`` is a pure function of (Resume, Job): the same pair
always yields the same ATSScore, and neither input is modified.
"""

from __future__ import annotations

from resume_tailor.normalize.utils import contains_action_verb
from resume_tailor.schemas import ATSScore, Job, Resume
from resume_tailor.schemas.validator import DEFAULT_EMAIL, DEFAULT_NAME

from .benchmark import IndustryProfile, benchmark_score, detect_industry, round_half_up

KEYWORD_WEIGHT = 0.4
FORMATTING_WEIGHT = 0.3
READABILITY_WEIGHT = 0.3

MISSING_NAME_PENALTY = 20
MISSING_EMAIL_PENALTY = 20
MISSING_SUMMARY_PENALTY = 10
MISSING_SECTIONS_PENALTY = 15
MISSING_SKILLS_PENALTY = 15
MISSING_BULLETS_PENALTY = 20
LOW_METRIC_COVERAGE_PENALTY = 10
METRIC_COVERAGE_FLOOR = 0.5

LONG_BULLET_CHARS = 200
LONG_BULLET_PENALTY = 5
ACTION_VERB_COVERAGE_FLOOR = 0.7
LOW_ACTION_VERB_PENALTY = 15

MIN_SKILLS = 5
MAX_LISTED_KEYWORDS = 5


def _resume_text(resume: Resume, *, include_skills: bool) -> str:
    parts: list[str] = [resume.summary or ""]
    if include_skills:
        parts.extend(resume.skills)
    parts.extend(bullet.display_text for bullet in resume.bullets)
    return " ".join(parts).lower()


def _has_metric(resume_bullet) -> bool:
    return resume_bullet.metric_value is not None or bool(resume_bullet.suggested_metric)


def keyword_match_fraction(resume: Resume, job: Job) -> float:
    if not job.keywords:
        return 0.0
    text = _resume_text(resume, include_skills=True)
    matched = [keyword for keyword in job.keywords if keyword.lower() in text]
    return len(matched) / len(job.keywords)


def missing_keywords(resume: Resume, job: Job) -> list[str]:
    text = _resume_text(resume, include_skills=True)
    return [keyword for keyword in job.keywords if keyword.lower() not in text]


def calculate_formatting_score(resume: Resume) -> int:
    score = 100
    if not resume.name or resume.name == DEFAULT_NAME:
        score -= MISSING_NAME_PENALTY
    if not resume.email or resume.email == DEFAULT_EMAIL:
        score -= MISSING_EMAIL_PENALTY
    if not resume.summary:
        score -= MISSING_SUMMARY_PENALTY
    if not resume.sections:
        score -= MISSING_SECTIONS_PENALTY
    if not resume.skills:
        score -= MISSING_SKILLS_PENALTY
    if not resume.bullets:
        score -= MISSING_BULLETS_PENALTY

    with_metrics = sum(1 for bullet in resume.bullets if _has_metric(bullet))
    if with_metrics < len(resume.bullets) * METRIC_COVERAGE_FLOOR:
        score -= LOW_METRIC_COVERAGE_PENALTY

    return max(0, score)


def calculate_readability_score(resume: Resume) -> int:
    score = 100
    long_bullets = sum(1 for bullet in resume.bullets if len(bullet.display_text) > LONG_BULLET_CHARS)
    score -= long_bullets * LONG_BULLET_PENALTY

    with_actions = sum(1 for bullet in resume.bullets if contains_action_verb(bullet.display_text))
    if with_actions < len(resume.bullets) * ACTION_VERB_COVERAGE_FLOOR:
        score -= LOW_ACTION_VERB_PENALTY

    return max(0, score)


def combine_scores(keyword_fraction: float, formatting_score: int, readability_score: int) -> int:
    overall = round_half_up(
        keyword_fraction * 100 * KEYWORD_WEIGHT
        + formatting_score * FORMATTING_WEIGHT
        + readability_score * READABILITY_WEIGHT
    )
    return min(100, max(0, overall))


def generate_suggestions(
    resume: Resume,
    job: Job,
    profile: IndustryProfile | None = None,
    overall_score: int | None = None,
) -> list[str]:
    suggestions: list[str] = []

    missing = missing_keywords(resume, job)
    if missing:
        suggestions.append(f"Add missing keywords: {', '.join(missing[:MAX_LISTED_KEYWORDS])}")

    if not resume.summary:
        suggestions.append("Add a professional summary section")

    if len(resume.skills) < MIN_SKILLS:
        suggestions.append("Include more relevant skills (aim for 8-12)")

    without_metrics = sum(1 for bullet in resume.bullets if not _has_metric(bullet))
    if without_metrics > 0:
        suggestions.append(f"Add quantifiable metrics to {without_metrics} bullet points")

    if profile is not None and overall_score is not None and overall_score < profile.average:
        delta = abs(round_half_up(overall_score - profile.average))
        suggestions.append(
            f"Your ATS score is {delta} points below the typical {profile.industry} resume. "
            "Emphasize in-demand keywords and measurable outcomes to close the gap."
        )

    return suggestions


def check_ats_compatibility(resume: Resume, job: Job) -> ATSScore:
    fraction = keyword_match_fraction(resume, job)
    formatting = calculate_formatting_score(resume)
    readability = calculate_readability_score(resume)
    overall = combine_scores(fraction, formatting, readability)

    profile = detect_industry(job)
    return ATSScore(
        overall_score=overall,
        keyword_match=round_half_up(fraction * 100),
        formatting_score=formatting,
        readability_score=readability,
        suggestions=generate_suggestions(resume, job, profile, overall),
        industry_benchmark=benchmark_score(overall, profile) if profile is not None else None,
    )


def get_missing_skills(resume: Resume, job: Job) -> list[str]:
    skills = {skill.lower() for skill in resume.skills}
    text = _resume_text(resume, include_skills=False)
    return [
        keyword
        for keyword in job.keywords
        if keyword.lower() not in skills and keyword.lower() not in text
    ]
