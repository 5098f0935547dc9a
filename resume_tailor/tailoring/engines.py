from __future__ import annotations

import asyncio
import logging
import math
from functools import lru_cache
from typing import Protocol

from pydantic import BaseModel, Field

from resume_tailor.ai.factory import get_structured_generator
from resume_tailor.ai.prompts import TAILORING_SYSTEM_PROMPT, build_tailoring_prompt
from resume_tailor.ai.types import StructuredGenerator
from resume_tailor.core.config import settings
from resume_tailor.core.results import BackendError, Degraded, Ok, Result
from resume_tailor.schemas import Job, Resume, ResumeBullet, TailoredResumeOutput, TailoringStyle
from resume_tailor.scoring import get_missing_skills

from .stub import StubTailoringEngine

logger = logging.getLogger(__name__)


class ModelTailoredBullet(BaseModel):
    id: str
    tailored_text: str | None = None
    suggested_metric: str | None = None


class ModelTailoringOutput(BaseModel):
    bullets: list[ModelTailoredBullet] = Field(default_factory=list)
    match_score: float = 0.0


class TailoringEngine(Protocol):
    async def tailor(self, resume: Resume, job: Job, style: TailoringStyle) -> TailoredResumeOutput: ...


def _merge_bullet(bullet: ResumeBullet, rewrite: ModelTailoredBullet | None) -> ResumeBullet:
    if rewrite is None:
        return bullet.model_copy(update={"tailored_text": None})
    text = (rewrite.tailored_text or "").strip()
    suggestion = (rewrite.suggested_metric or "").strip()
    return bullet.model_copy(
        update={
            "tailored_text": text if text and text != bullet.raw_text else None,
            # metrics the bullet already states are never replaced by a suggestion
            "suggested_metric": (suggestion or None) if bullet.metric_value is None else None,
        }
    )


class ModelTailoringEngine:
    def __init__(
        self,
        generator: StructuredGenerator,
        model_id: str,
        timeout_s: float | None = None,
    ) -> None:
        self._generator = generator
        self._model_id = model_id
        self._timeout_s = timeout_s

    async def try_tailor(self, resume: Resume, job: Job, style: TailoringStyle) -> Result[TailoredResumeOutput]:
        try:
            output = await asyncio.wait_for(
                self._generator.generate_structured(
                    self._model_id,
                    TAILORING_SYSTEM_PROMPT,
                    build_tailoring_prompt(resume, job, style),
                    ModelTailoringOutput,
                ),
                timeout=self._timeout_s,
            )
        except Exception as exc:  # noqa: BLE001 - stub fallback is expected
            return Degraded(reason="tailor_model_failed", error=exc)

        if not math.isfinite(output.match_score):
            return Degraded(reason="tailor_model_invalid_score")

        rewrites = {item.id: item for item in output.bullets}
        tailored = resume.model_copy(
            update={"bullets": [_merge_bullet(bullet, rewrites.get(bullet.id)) for bullet in resume.bullets]}
        )
        return Ok(
            TailoredResumeOutput(
                resume=tailored,
                match_score=round(min(1.0, max(0.0, output.match_score)), 2),
                missing_skills=get_missing_skills(resume, job),
            )
        )


class FallbackTailoringEngine:
    def __init__(self, model: ModelTailoringEngine | None, stub: StubTailoringEngine | None = None):
        self._model = model
        self._stub = stub or StubTailoringEngine()

    async def tailor(self, resume: Resume, job: Job, style: TailoringStyle = "concise") -> TailoredResumeOutput:
        if self._model is not None:
            outcome = await self._model.try_tailor(resume, job, style)
            if isinstance(outcome, Ok):
                return outcome.value
            logger.warning("tailor_fallback_to_stub: %s", outcome.describe())
        return await self._stub.tailor(resume, job, style)


@lru_cache(maxsize=1)
def get_tailoring_engine() -> FallbackTailoringEngine:
    model = None
    if settings.use_ai_tailoring:
        try:
            model = ModelTailoringEngine(
                get_structured_generator(),
                settings.tailor_model,
                timeout_s=settings.backend_timeout_s,
            )
        except (BackendError, ValueError) as exc:
            logger.warning("structured_generator_unavailable: %s", exc)
    return FallbackTailoringEngine(model)
