import logging

from fastapi import APIRouter, Request, status

from resume_tailor.core.rate_limit import rate_limit
from resume_tailor.schemas import is_valid_job
from resume_tailor.schemas.api import JobEnvelope, ParseTextRequest
from resume_tailor.services.parser import get_job_parser

from .responses import error_response, require_text

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/job/parse", response_model=JobEnvelope, response_model_exclude_none=True)
@rate_limit()
async def parse_job(request: Request, payload: ParseTextRequest):
    _ = request
    raw_text = require_text(payload.raw_text)
    try:
        job = await get_job_parser().parse(raw_text)
    except Exception:
        logger.exception("job_parse_failed chars=%s", len(raw_text))
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to parse job description")

    if not is_valid_job(job):
        logger.warning("job_parse_invalid_output chars=%s", len(raw_text))
        return error_response(status.HTTP_422_UNPROCESSABLE_ENTITY, "Parsed job failed validation")

    logger.info("job_parsed keywords=%s responsibilities=%s", len(job.keywords), len(job.responsibilities))
    return JobEnvelope(success=True, data=job)
