from __future__ import annotations

import re
from functools import lru_cache

from resume_tailor.core.vocabulary import get_vocabulary_value, get_word_list

from .segmenter import match_section_header, segment_text
from .utils import normalize_line

EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
PHONE_RE = re.compile(r"(?:\+?\d{1,3}[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}")
_SKILL_DELIMITERS = re.compile(r"[,•|·;\-–—]")

MAX_NAME_LENGTH = 50
NAME_SCAN_LINES = 3


def _non_empty_lines(text: str) -> list[str]:
    return [line.strip() for line in text.splitlines() if line.strip()]


def _summary_label() -> str:
    return str(get_vocabulary_value("sections.summary_label", "Summary"))


def _skills_label() -> str:
    return str(get_vocabulary_value("sections.skills_label", "Skills"))


@lru_cache(maxsize=1)
def _skill_keyword_patterns() -> tuple[tuple[str, re.Pattern[str]], ...]:
    patterns = []
    for keyword in get_word_list("parsing.resume_tech_keywords"):
        lowered = keyword.lower()
        patterns.append(
            (lowered, re.compile(rf"(?<![a-z0-9]){re.escape(lowered)}(?![a-z0-9])"))
        )
    return tuple(patterns)


def extract_name(text: str) -> str:
    for line in _non_empty_lines(text)[:NAME_SCAN_LINES]:
        if EMAIL_RE.search(line) or PHONE_RE.search(line):
            continue
        if len(line) > MAX_NAME_LENGTH:
            continue
        if match_section_header(line) is not None:
            continue
        return line
    return "Unknown"


def extract_email(text: str) -> str | None:
    match = EMAIL_RE.search(text)
    return match.group(0) if match else None


def extract_phone(text: str) -> str | None:
    match = PHONE_RE.search(text)
    return match.group(0).strip() if match else None


def extract_summary(text: str) -> str | None:
    summary_label = _summary_label()
    for section in segment_text(text):
        if section.header is not None and section.label == summary_label:
            if not section.lines:
                continue
            return normalize_line(" ".join(section.lines))
    return None


def extract_sections(text: str) -> list[str]:
    sections: list[str] = []
    for section in segment_text(text):
        if not section.header or section.header in sections:
            continue
        sections.append(section.header)
    return sections


def _skill_candidates(line: str) -> list[str]:
    candidates = []
    for piece in _SKILL_DELIMITERS.split(line):
        cleaned = piece.strip().strip("*").strip()
        if ":" in cleaned:
            # "Languages: Python" -> "Python"
            cleaned = cleaned.split(":", 1)[1].strip()
        if 1 < len(cleaned) < 50:
            candidates.append(cleaned)
    return candidates


def extract_skills(text: str) -> list[str]:
    """Collect skills listed under a Skills header plus known technology keywords.

    Keywords are searched across the whole document; the first spelling seen
    wins when deduplicating.
    """
    skills_label = _skills_label()
    skills: list[str] = []
    seen: set[str] = set()

    def add(skill: str) -> None:
        key = skill.lower()
        if key in seen:
            return
        seen.add(key)
        skills.append(skill)

    for section in segment_text(text):
        if section.header is None or section.label != skills_label:
            continue
        for line in section.lines:
            for candidate in _skill_candidates(line):
                add(candidate)

    lowered = text.lower()
    for keyword, pattern in _skill_keyword_patterns():
        if pattern.search(lowered):
            add(keyword)

    return skills
