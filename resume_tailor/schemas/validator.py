"""Structural gate and default-filling sanitizer for Resume and Job payloads.

The ``is_valid_*`` predicates accept anything (dicts from a request body or
already-built models) and answer with a boolean; they never raise. The
``sanitize_*`` functions accept partial payloads and return complete models.
Sanitizing is idempotent: a sanitized value passes through unchanged.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from .job import Job
from .resume import Resume, ResumeBullet

DEFAULT_NAME = "Unknown"
DEFAULT_EMAIL = "unknown@email.com"
DEFAULT_JOB_TITLE = "Unknown Position"
DEFAULT_SECTION = "Experience"


class _StrictBullet(BaseModel):
    model_config = ConfigDict(strict=True)

    id: str
    section: str
    raw_text: str
    company: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    action: str | None = None
    impact: str | None = None
    metric_value: float | None = None
    metric_unit: str | None = None
    tailored_text: str | None = None
    suggested_metric: str | None = None


class _StrictResume(BaseModel):
    model_config = ConfigDict(strict=True)

    name: str
    email: str
    phone: str | None = None
    summary: str | None = None
    sections: list[str]
    skills: list[str]
    bullets: list[_StrictBullet]


class _StrictJob(BaseModel):
    model_config = ConfigDict(strict=True)

    id: str | None = None
    title: str
    seniority: str | None = None
    company: str | None = None
    location: str | None = None
    keywords: list[str]
    responsibilities: list[str]
    required_skills: list[str] | None = None
    preferred_skills: list[str] | None = None


def _as_mapping(value: Any) -> Mapping[str, Any] | None:
    if isinstance(value, BaseModel):
        return value.model_dump()
    if isinstance(value, Mapping):
        return value
    return None


def _conforms(model: type[BaseModel], value: Any) -> bool:
    payload = _as_mapping(value)
    if payload is None:
        return False
    try:
        model.model_validate(dict(payload))
    except ValidationError:
        return False
    return True


def is_valid_bullet(value: Any) -> bool:
    return _conforms(_StrictBullet, value)


def is_valid_resume(value: Any) -> bool:
    return _conforms(_StrictResume, value)


def is_valid_job(value: Any) -> bool:
    return _conforms(_StrictJob, value)


def _text_or_none(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _string_list(values: Any) -> list[str]:
    if not values:
        return []
    return [str(item) for item in values if item is not None and str(item).strip()]


def _dedupe(values: list[str]) -> list[str]:
    seen: set[str] = set()
    unique: list[str] = []
    for value in values:
        if value in seen:
            continue
        seen.add(value)
        unique.append(value)
    return unique


def _unique_bullet_id(candidate: str | None, index: int, taken: set[str]) -> str:
    if candidate and candidate not in taken:
        return candidate
    generated = f"bullet-{index}"
    suffix = 1
    while generated in taken:
        generated = f"bullet-{index}-{suffix}"
        suffix += 1
    return generated


def _sanitize_bullets(raw_bullets: Any) -> list[ResumeBullet]:
    bullets: list[ResumeBullet] = []
    taken: set[str] = set()
    for item in raw_bullets or []:
        data = _as_mapping(item)
        if data is None:
            continue
        raw_text = str(data.get("raw_text") or "")
        if not raw_text.strip():
            continue

        index = len(bullets)
        bullet_id = _unique_bullet_id(_text_or_none(data.get("id")), index, taken)
        taken.add(bullet_id)

        metric_value = data.get("metric_value")
        bullets.append(
            ResumeBullet(
                id=bullet_id,
                section=_text_or_none(data.get("section")) or DEFAULT_SECTION,
                company=_text_or_none(data.get("company")),
                start_date=_text_or_none(data.get("start_date")),
                end_date=_text_or_none(data.get("end_date")),
                raw_text=raw_text,
                action=_text_or_none(data.get("action")),
                impact=_text_or_none(data.get("impact")),
                metric_value=float(metric_value) if metric_value is not None else None,
                metric_unit=_text_or_none(data.get("metric_unit")),
                tailored_text=_text_or_none(data.get("tailored_text")),
                suggested_metric=_text_or_none(data.get("suggested_metric")),
            )
        )
    return bullets


def sanitize_resume(value: Mapping[str, Any] | Resume | None) -> Resume:
    data = _as_mapping(value) or {}
    return Resume(
        name=_text_or_none(data.get("name")) or DEFAULT_NAME,
        email=_text_or_none(data.get("email")) or DEFAULT_EMAIL,
        phone=_text_or_none(data.get("phone")),
        summary=_text_or_none(data.get("summary")),
        sections=_dedupe(_string_list(data.get("sections"))),
        skills=_dedupe(_string_list(data.get("skills"))),
        bullets=_sanitize_bullets(data.get("bullets")),
    )


def sanitize_job(value: Mapping[str, Any] | Job | None) -> Job:
    data = _as_mapping(value) or {}
    required = data.get("required_skills")
    preferred = data.get("preferred_skills")
    return Job(
        id=_text_or_none(data.get("id")),
        title=_text_or_none(data.get("title")) or DEFAULT_JOB_TITLE,
        seniority=_text_or_none(data.get("seniority")),
        company=_text_or_none(data.get("company")),
        location=_text_or_none(data.get("location")),
        keywords=_dedupe(_string_list(data.get("keywords"))),
        responsibilities=_string_list(data.get("responsibilities")),
        required_skills=_string_list(required) if required is not None else None,
        preferred_skills=_string_list(preferred) if preferred is not None else None,
    )
