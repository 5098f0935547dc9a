import logging

from fastapi import APIRouter, HTTPException, Request, status

from resume_tailor.core.rate_limit import tailor_rate_limit
from resume_tailor.schemas import TAILORING_STYLES, TailorResponseData
from resume_tailor.schemas.api import TailorEnvelope, TailorRequest
from resume_tailor.semantic import find_similar_bullets
from resume_tailor.tailoring import get_tailoring_engine

from .responses import error_response, require_job, require_resume

logger = logging.getLogger(__name__)

router = APIRouter()


def _style(value) -> str:
    if value is None or value == "":
        return "concise"
    if value not in TAILORING_STYLES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='Style must be "concise" or "detailed"',
        )
    return value


@router.post("/tailor", response_model=TailorEnvelope, response_model_exclude_none=True)
@tailor_rate_limit()
async def tailor_resume(request: Request, payload: TailorRequest):
    _ = request
    resume = require_resume(payload.resume)
    job = require_job(payload.job)
    style = _style(payload.style)

    # quota and auth checks happen upstream of this route
    logger.info(
        "ai.tailor_request style=%s sections=%s job_keywords=%s",
        style,
        len(resume.sections),
        len(job.keywords),
    )
    try:
        result = await get_tailoring_engine().tailor(resume, job, style)
    except Exception as exc:
        logger.exception("ai.tailor_failed: %s", exc)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to tailor resume")

    logger.info(
        "ai.tailor_success match_score=%s missing_skills=%s tailored_bullets=%s",
        result.match_score,
        len(result.missing_skills),
        sum(1 for bullet in result.resume.bullets if bullet.tailored_text),
    )

    similar_bullets = await find_similar_bullets(result.resume, job)
    return TailorEnvelope(
        success=True,
        data=TailorResponseData(
            resume=result.resume,
            match_score=result.match_score,
            missing_skills=result.missing_skills,
            similar_bullets=similar_bullets,
        ),
    )
