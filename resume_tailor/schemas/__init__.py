from .job import Job
from .resume import Resume, ResumeBullet, TailoredResumeOutput
from .tailor import (
    TAILORING_STYLES,
    ATSScore,
    BulletSimilarityMatch,
    IndustryBenchmarkResult,
    TailoringStyle,
    TailorResponseData,
)
from .validator import (
    is_valid_bullet,
    is_valid_job,
    is_valid_resume,
    sanitize_job,
    sanitize_resume,
)

__all__ = [
    "Job",
    "Resume",
    "ResumeBullet",
    "TailoredResumeOutput",
    "ATSScore",
    "BulletSimilarityMatch",
    "IndustryBenchmarkResult",
    "TailoringStyle",
    "TAILORING_STYLES",
    "TailorResponseData",
    "is_valid_bullet",
    "is_valid_resume",
    "is_valid_job",
    "sanitize_resume",
    "sanitize_job",
]
