"""Responsibility-to-bullet similarity.

Best-effort enrichment for the tailoring response: every failure path ends in
an empty list, never an exception.
"""

from __future__ import annotations

import asyncio
import logging

from resume_tailor.core.config import settings
from resume_tailor.core.results import Degraded, Ok, Result
from resume_tailor.schemas import BulletSimilarityMatch, Job, Resume

from .embeddings import EmbeddingProvider, cosine_similarity, get_embedding_provider

logger = logging.getLogger(__name__)

MIN_ITEM_CHARS = 10


async def _embed(provider: EmbeddingProvider, text: str) -> Result[list[float]]:
    try:
        return Ok(await provider.embed(text))
    except Exception as exc:  # noqa: BLE001 - a failed item is skipped
        return Degraded(reason="embedding_failed", error=exc)


async def _match(
    resume: Resume,
    job: Job,
    provider: EmbeddingProvider,
    max_responsibilities: int,
    max_bullets: int,
    threshold: float,
) -> list[BulletSimilarityMatch]:
    # fragments of MIN_ITEM_CHARS or fewer never count against the caps
    responsibilities = [
        text.strip() for text in job.responsibilities if len(text.strip()) > MIN_ITEM_CHARS
    ][:max_responsibilities]
    bullets = [
        bullet for bullet in resume.bullets if len(bullet.display_text.strip()) > MIN_ITEM_CHARS
    ][:max_bullets]
    if not responsibilities or not bullets:
        return []

    responsibility_results, bullet_results = await asyncio.gather(
        asyncio.gather(*(_embed(provider, text) for text in responsibilities)),
        asyncio.gather(*(_embed(provider, bullet.display_text) for bullet in bullets)),
    )

    embedded_bullets = [
        (bullet, outcome.value)
        for bullet, outcome in zip(bullets, bullet_results)
        if isinstance(outcome, Ok)
    ]
    skipped = sum(1 for outcome in (*responsibility_results, *bullet_results) if isinstance(outcome, Degraded))
    if skipped:
        logger.warning("similarity_embeddings_skipped count=%s", skipped)

    matches: list[BulletSimilarityMatch] = []
    for responsibility, outcome in zip(responsibilities, responsibility_results):
        if not isinstance(outcome, Ok):
            continue
        best_bullet = None
        best_score = float("-inf")
        for bullet, vector in embedded_bullets:
            score = cosine_similarity(outcome.value, vector)
            if score > best_score:
                best_bullet, best_score = bullet, score
        if best_bullet is None or best_score < threshold:
            continue
        matches.append(
            BulletSimilarityMatch(
                responsibility=responsibility,
                bullet_id=best_bullet.id,
                bullet_text=best_bullet.display_text,
                similarity=round(min(1.0, max(0.0, best_score)), 2),
                section=best_bullet.section,
                company=best_bullet.company,
            )
        )

    matches.sort(key=lambda item: item.similarity, reverse=True)
    return matches


async def find_similar_bullets(
    resume: Resume,
    job: Job,
    provider: EmbeddingProvider | None = None,
    max_responsibilities: int | None = None,
    max_bullets: int | None = None,
    threshold: float | None = None,
) -> list[BulletSimilarityMatch]:
    try:
        return await _match(
            resume,
            job,
            provider or get_embedding_provider(),
            max_responsibilities if max_responsibilities is not None else settings.similarity_max_responsibilities,
            max_bullets if max_bullets is not None else settings.similarity_max_bullets,
            threshold if threshold is not None else settings.similarity_threshold,
        )
    except Exception as exc:  # noqa: BLE001 - similarity is optional enrichment
        logger.warning("similarity_failed: %s", exc)
        return []
