from .bullets import extract_bullets, extract_metric, parse_employer_line
from .extractors import (
    extract_email,
    extract_name,
    extract_phone,
    extract_sections,
    extract_skills,
    extract_summary,
)
from .normalize_job import parse_job_heuristics
from .normalize_resume import parse_resume_heuristics
from .segmenter import TextSection, match_section_header, segment_text

__all__ = [
    "TextSection",
    "match_section_header",
    "segment_text",
    "extract_name",
    "extract_email",
    "extract_phone",
    "extract_summary",
    "extract_skills",
    "extract_sections",
    "extract_bullets",
    "extract_metric",
    "parse_employer_line",
    "parse_resume_heuristics",
    "parse_job_heuristics",
]
