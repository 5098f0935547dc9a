from __future__ import annotations

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from resume_tailor.schemas import Job, Resume, is_valid_job, is_valid_resume, sanitize_job, sanitize_resume


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "data": None, "error": message},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    _ = request
    return error_response(exc.status_code, str(exc.detail))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    _ = request
    first = exc.errors()[0] if exc.errors() else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    return error_response(status.HTTP_400_BAD_REQUEST, f"{location}: {message}" if location else message)


def require_text(raw_text: str | None) -> str:
    if raw_text is None or not raw_text.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing or empty raw_text")
    return raw_text


def require_resume(value) -> Resume:
    if value is None or not is_valid_resume(value):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid or missing resume data")
    # unique bullet ids and non-empty raw_text from here on
    return sanitize_resume(value)


def require_job(value) -> Job:
    if value is None or not is_valid_job(value):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid or missing job data")
    return sanitize_job(value)
