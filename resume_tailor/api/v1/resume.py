import logging

from fastapi import APIRouter, File, HTTPException, Request, UploadFile, status

from resume_tailor.core.config import settings
from resume_tailor.core.rate_limit import rate_limit
from resume_tailor.schemas import is_valid_resume
from resume_tailor.schemas.api import ParseTextRequest, ResumeEnvelope
from resume_tailor.services.documents import DocumentError, extract_document_text
from resume_tailor.services.parser import get_resume_parser

from .responses import error_response, require_text

logger = logging.getLogger(__name__)

router = APIRouter()


async def _parse_resume(raw_text: str):
    try:
        resume = await get_resume_parser().parse(raw_text)
    except Exception:
        logger.exception("resume_parse_failed chars=%s", len(raw_text))
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to parse resume")

    if not is_valid_resume(resume):
        logger.warning("resume_parse_invalid_output chars=%s", len(raw_text))
        return error_response(status.HTTP_422_UNPROCESSABLE_ENTITY, "Parsed resume failed validation")

    logger.info(
        "resume_parsed sections=%s skills=%s bullets=%s",
        len(resume.sections),
        len(resume.skills),
        len(resume.bullets),
    )
    return ResumeEnvelope(success=True, data=resume)


@router.post("/resume/parse", response_model=ResumeEnvelope, response_model_exclude_none=True)
@rate_limit()
async def parse_resume(request: Request, payload: ParseTextRequest):
    _ = request
    raw_text = require_text(payload.raw_text)
    return await _parse_resume(raw_text)


@router.post("/resume/parse-file", response_model=ResumeEnvelope, response_model_exclude_none=True)
@rate_limit()
async def parse_resume_file(request: Request, file: UploadFile = File(...)):
    _ = request
    content = await file.read(settings.max_upload_bytes + 1)
    try:
        document = extract_document_text(file.filename or "", content, max_bytes=settings.max_upload_bytes)
    except DocumentError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    if not document.text.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No extractable text found in file")
    return await _parse_resume(document.text)
