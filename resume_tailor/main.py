import logging

import sentry_sdk
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from resume_tailor.api.v1.ats import router as ats_router
from resume_tailor.api.v1.health import router as health_router
from resume_tailor.api.v1.job import router as job_router
from resume_tailor.api.v1.responses import http_exception_handler, validation_exception_handler
from resume_tailor.api.v1.resume import router as resume_router
from resume_tailor.api.v1.tailor import router as tailor_router
from resume_tailor.core.config import settings
from resume_tailor.core.rate_limit import limiter

load_dotenv()
logging.basicConfig(level=settings.log_level, format="%(message)s")
if settings.sentry_dsn:
    sentry_sdk.init(dsn=settings.sentry_dsn)

app = FastAPI(title="Resume Tailor API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_allowed_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_middleware(SlowAPIMiddleware)

app.include_router(health_router, prefix="/v1", tags=["Health"])
app.include_router(resume_router, prefix="/v1", tags=["Resume"])
app.include_router(job_router, prefix="/v1", tags=["Job"])
app.include_router(ats_router, prefix="/v1", tags=["ATS"])
app.include_router(tailor_router, prefix="/v1", tags=["Tailor"])
