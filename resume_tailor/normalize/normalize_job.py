from __future__ import annotations

import re
from functools import lru_cache

from resume_tailor.core.vocabulary import get_vocabulary_value, get_word_list
from resume_tailor.schemas import Job, sanitize_job

from .utils import is_bullet_like, strip_bullet_prefix

TITLE_SCAN_LINES = 10
MIN_TITLE_CHARS = 5
MAX_TITLE_CHARS = 100
MIN_RESPONSIBILITY_CHARS = 10
MAX_HEADER_CHARS = 80

_COMPANY_RE = re.compile(r"^(?:company|employer|organization)\s*[:\-–]\s*(.+)$", re.IGNORECASE)
_LOCATION_RE = re.compile(r"^(?:location|based in|office)\s*[:\-–]\s*(.+)$", re.IGNORECASE)
# "Backend Engineer at Acme Corp (Remote)"; company words must be capitalized
_AT_COMPANY_RE = re.compile(
    r"\sat\s+(?P<company>[A-Z][\w&.'-]*(?:\s+[A-Z0-9][\w&.'-]*)*)\s*(?:[,(|\-–].*)?$"
)


@lru_cache(maxsize=1)
def _patterns() -> dict[str, re.Pattern[str]]:
    def compiled(path: str) -> re.Pattern[str]:
        value = get_vocabulary_value(path)
        if not value:
            raise RuntimeError(f"Vocabulary entry '{path}' is missing.")
        return re.compile(str(value), re.IGNORECASE)

    return {
        "start": compiled("jobs.responsibilities_start"),
        "stop": compiled("jobs.responsibilities_stop"),
        "preferred": compiled("jobs.preferred_marker"),
        "required": compiled("jobs.requirement_marker"),
    }


def extract_title(lines: list[str]) -> str | None:
    excluded = get_word_list("jobs.title_excluded_words")
    for line in lines[:TITLE_SCAN_LINES]:
        stripped = line.strip()
        if not MIN_TITLE_CHARS < len(stripped) < MAX_TITLE_CHARS:
            continue
        lowered = stripped.lower()
        if any(word in lowered for word in excluded):
            continue
        return stripped
    return None


def extract_seniority(text: str) -> str | None:
    lowered = text.lower()
    for level in get_word_list("jobs.seniority_levels"):
        if level in lowered:
            return level[:1].upper() + level[1:]
    return None


def extract_keywords(text: str) -> list[str]:
    lowered = text.lower()
    keywords: list[str] = []
    for keyword in get_word_list("jobs.tech_keywords"):
        if keyword in lowered and keyword not in keywords:
            keywords.append(keyword)
    return keywords


def _labelled_value(lines: list[str], pattern: re.Pattern[str]) -> str | None:
    for line in lines:
        match = pattern.match(line.strip())
        if match:
            return match.group(1).strip() or None
    return None


def extract_company(lines: list[str]) -> str | None:
    labelled = _labelled_value(lines, _COMPANY_RE)
    if labelled:
        return labelled
    for line in lines[:TITLE_SCAN_LINES]:
        stripped = line.strip()
        if not stripped or is_bullet_like(stripped):
            continue
        match = _AT_COMPANY_RE.search(stripped)
        if match:
            return match.group("company").rstrip(".")
    return None


def _block_header(line: str) -> str | None:
    """Classify a job-posting header line: 'required', 'preferred', 'duties' or None."""
    if is_bullet_like(line) or len(line) > MAX_HEADER_CHARS:
        return None
    patterns = _patterns()
    if patterns["preferred"].match(line):
        return "preferred"
    if not patterns["start"].match(line):
        return None
    if patterns["preferred"].search(line):
        return "preferred"
    if patterns["required"].search(line):
        return "required"
    return "duties"


def _skills_in(text: str, keywords: list[str]) -> list[str]:
    lowered = text.lower()
    return [keyword for keyword in keywords if keyword in lowered]


def parse_job_heuristics(raw_text: str) -> Job:
    text = raw_text or ""
    lines = text.splitlines()
    keywords = extract_keywords(text)

    responsibilities: list[str] = []
    required: list[str] = []
    preferred: list[str] = []
    block: str | None = None

    for line in lines:
        stripped = line.strip()
        if not stripped:
            continue

        header = _block_header(stripped)
        if header is not None:
            block = header
            continue

        if block is not None and _patterns()["stop"].match(stripped):
            block = None
            continue

        if block is None or not is_bullet_like(stripped):
            continue
        if len(stripped) <= MIN_RESPONSIBILITY_CHARS:
            continue

        item = strip_bullet_prefix(stripped)
        responsibilities.append(item)
        if block == "required":
            required.extend(skill for skill in _skills_in(item, keywords) if skill not in required)
        elif block == "preferred":
            preferred.extend(skill for skill in _skills_in(item, keywords) if skill not in preferred)

    return sanitize_job(
        {
            "title": extract_title(lines),
            "seniority": extract_seniority(text),
            "company": extract_company(lines),
            "location": _labelled_value(lines, _LOCATION_RE),
            "keywords": keywords,
            "responsibilities": responsibilities,
            "required_skills": required or None,
            "preferred_skills": preferred or None,
        }
    )
