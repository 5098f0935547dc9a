from __future__ import annotations

from resume_tailor.schemas import Resume, sanitize_resume

from .bullets import extract_bullets
from .extractors import (
    extract_email,
    extract_name,
    extract_phone,
    extract_sections,
    extract_skills,
    extract_summary,
)


def parse_resume_heuristics(raw_text: str) -> Resume:
    text = raw_text or ""
    return sanitize_resume(
        {
            "name": extract_name(text),
            "email": extract_email(text),
            "phone": extract_phone(text),
            "summary": extract_summary(text),
            "sections": extract_sections(text),
            "skills": extract_skills(text),
            "bullets": [bullet.model_dump() for bullet in extract_bullets(text)],
        }
    )
