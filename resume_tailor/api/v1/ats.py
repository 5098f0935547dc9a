import logging

from fastapi import APIRouter, Request, status

from resume_tailor.core.rate_limit import rate_limit
from resume_tailor.schemas.api import ATSScoreEnvelope, ScoreRequest
from resume_tailor.scoring import check_ats_compatibility

from .responses import error_response, require_job, require_resume

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/ats-score", response_model=ATSScoreEnvelope, response_model_exclude_none=True)
@rate_limit()
async def ats_score(request: Request, payload: ScoreRequest):
    _ = request
    resume = require_resume(payload.resume)
    job = require_job(payload.job)
    try:
        score = check_ats_compatibility(resume, job)
    except Exception:
        logger.exception("ats_score_failed")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to calculate ATS score")

    logger.info(
        "ats_scored overall=%s keyword=%s industry=%s",
        score.overall_score,
        score.keyword_match,
        score.industry_benchmark.industry if score.industry_benchmark else None,
    )
    return ATSScoreEnvelope(success=True, data=score)
