"""Resume and job parsing strategies.

Two interchangeable strategies produce the same schema: the heuristic parsers
in ``resume_tailor.normalize`` (deterministic, always available) and the
model-assisted parsers below. The fallback parsers compose them so that a
backend failure degrades to the heuristic result instead of an error.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from functools import lru_cache
from typing import Protocol

from pydantic import BaseModel, Field

from resume_tailor.ai.factory import get_structured_generator
from resume_tailor.ai.prompts import (
    JOB_PARSER_SYSTEM_PROMPT,
    RESUME_PARSER_SYSTEM_PROMPT,
    build_job_parse_prompt,
    build_resume_parse_prompt,
)
from resume_tailor.ai.types import StructuredGenerator
from resume_tailor.core.config import settings
from resume_tailor.core.results import BackendError, Degraded, Ok, Result
from resume_tailor.normalize import extract_email, parse_job_heuristics, parse_resume_heuristics
from resume_tailor.schemas import (
    Job,
    Resume,
    is_valid_job,
    is_valid_resume,
    sanitize_job,
    sanitize_resume,
)

logger = logging.getLogger(__name__)


class ModelBullet(BaseModel):
    id: str | None = None
    section: str = "Experience"
    company: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    raw_text: str
    action: str | None = None
    impact: str | None = None
    metric_value: float | None = None
    metric_unit: str | None = None


class ModelResumeOutput(BaseModel):
    name: str = "Unknown"
    email: str | None = None
    phone: str | None = None
    summary: str | None = None
    sections: list[str] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    bullets: list[ModelBullet] = Field(default_factory=list)


class ModelJobOutput(BaseModel):
    title: str = "Unknown Position"
    seniority: str | None = None
    company: str | None = None
    location: str | None = None
    keywords: list[str] = Field(default_factory=list)
    responsibilities: list[str] = Field(default_factory=list)
    required_skills: list[str] | None = None
    preferred_skills: list[str] | None = None


class ResumeParser(Protocol):
    async def parse(self, raw_text: str) -> Resume: ...


class JobParser(Protocol):
    async def parse(self, raw_text: str) -> Job: ...


class HeuristicResumeParser:
    async def parse(self, raw_text: str) -> Resume:
        return parse_resume_heuristics(raw_text)


class HeuristicJobParser:
    async def parse(self, raw_text: str) -> Job:
        return parse_job_heuristics(raw_text)


class ModelResumeParser:
    def __init__(
        self,
        generator: StructuredGenerator,
        model_id: str,
        timeout_s: float | None = None,
    ) -> None:
        self._generator = generator
        self._model_id = model_id
        self._timeout_s = timeout_s

    async def try_parse(self, raw_text: str) -> Result[Resume]:
        try:
            output = await asyncio.wait_for(
                self._generator.generate_structured(
                    self._model_id,
                    RESUME_PARSER_SYSTEM_PROMPT,
                    build_resume_parse_prompt(raw_text),
                    ModelResumeOutput,
                ),
                timeout=self._timeout_s,
            )
        except Exception as exc:  # noqa: BLE001 - heuristic fallback is expected
            return Degraded(reason="resume_model_failed", error=exc)

        payload = output.model_dump()
        payload["email"] = output.email or extract_email(raw_text)
        payload["bullets"] = [
            {**bullet, "id": bullet.get("id") or uuid.uuid4().hex}
            for bullet in payload["bullets"]
        ]
        resume = sanitize_resume(payload)
        if not is_valid_resume(resume):
            return Degraded(reason="resume_model_invalid_schema")
        return Ok(resume)


class ModelJobParser:
    def __init__(
        self,
        generator: StructuredGenerator,
        model_id: str,
        timeout_s: float | None = None,
    ) -> None:
        self._generator = generator
        self._model_id = model_id
        self._timeout_s = timeout_s

    async def try_parse(self, raw_text: str) -> Result[Job]:
        try:
            output = await asyncio.wait_for(
                self._generator.generate_structured(
                    self._model_id,
                    JOB_PARSER_SYSTEM_PROMPT,
                    build_job_parse_prompt(raw_text),
                    ModelJobOutput,
                ),
                timeout=self._timeout_s,
            )
        except Exception as exc:  # noqa: BLE001 - heuristic fallback is expected
            return Degraded(reason="job_model_failed", error=exc)

        job = sanitize_job(output.model_dump())
        if not is_valid_job(job):
            return Degraded(reason="job_model_invalid_schema")
        return Ok(job)


class FallbackResumeParser:
    def __init__(self, model: ModelResumeParser | None, heuristic: HeuristicResumeParser | None = None):
        self._model = model
        self._heuristic = heuristic or HeuristicResumeParser()

    async def parse(self, raw_text: str) -> Resume:
        if self._model is not None:
            outcome = await self._model.try_parse(raw_text)
            if isinstance(outcome, Ok):
                return outcome.value
            logger.warning("resume_parse_fallback_to_heuristics: %s", outcome.describe())
        return await self._heuristic.parse(raw_text)


class FallbackJobParser:
    def __init__(self, model: ModelJobParser | None, heuristic: HeuristicJobParser | None = None):
        self._model = model
        self._heuristic = heuristic or HeuristicJobParser()

    async def parse(self, raw_text: str) -> Job:
        if self._model is not None:
            outcome = await self._model.try_parse(raw_text)
            if isinstance(outcome, Ok):
                return outcome.value
            logger.warning("job_parse_fallback_to_heuristics: %s", outcome.describe())
        return await self._heuristic.parse(raw_text)


def _model_generator() -> StructuredGenerator | None:
    try:
        return get_structured_generator()
    except (BackendError, ValueError) as exc:
        logger.warning("structured_generator_unavailable: %s", exc)
        return None


@lru_cache(maxsize=1)
def get_resume_parser() -> FallbackResumeParser:
    generator = _model_generator() if settings.use_ai_parsing else None
    model = (
        ModelResumeParser(generator, settings.parser_model, timeout_s=settings.backend_timeout_s)
        if generator is not None
        else None
    )
    return FallbackResumeParser(model)


@lru_cache(maxsize=1)
def get_job_parser() -> FallbackJobParser:
    generator = _model_generator() if settings.use_ai_parsing else None
    model = (
        ModelJobParser(generator, settings.job_parser_model, timeout_s=settings.backend_timeout_s)
        if generator is not None
        else None
    )
    return FallbackJobParser(model)
