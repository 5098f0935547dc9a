from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache

from resume_tailor.core.vocabulary import get_vocabulary_value, get_word_list
from resume_tailor.schemas import ResumeBullet

from .segmenter import default_section_label, match_section_header
from .utils import action_verbs, first_word, is_bullet_like, strip_bullet_prefix

MIN_BULLET_CHARS = 10

_NUMBER = r"\d[\d,]*(?:\.\d+)?"
_COMPANY_SPLIT = re.compile(r"\s*[|,•·]\s*|\s+[-–—]+\s+|\s+(?:at|@)\s+", re.IGNORECASE)
_COMPANY_TRIM = " \t-–—|,()/"
_CONNECTORS = {"to", "till", "until", "and", "from"}
_IMPACT_RE = re.compile(
    r"\b(?:resulting in|leading to|which (?:led to|resulted in)|to achieve)\s+(.+?)[.;]?$",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class Metric:
    value: float
    unit: str


@dataclass(frozen=True)
class EmployerLine:
    company: str | None
    start_date: str | None
    end_date: str | None


@lru_cache(maxsize=1)
def _date_pattern() -> re.Pattern[str]:
    pattern = get_vocabulary_value("parsing.date_pattern")
    if not pattern:
        raise RuntimeError("Vocabulary entry 'parsing.date_pattern' is missing.")
    return re.compile(rf"\b(?:{pattern})\b", re.IGNORECASE)


@lru_cache(maxsize=1)
def _metric_pattern() -> re.Pattern[str]:
    units = "|".join(get_word_list("parsing.metric_units"))
    return re.compile(
        rf"\$\s*(?P<lead>{_NUMBER})|(?P<num>{_NUMBER})\s*(?P<unit>{units})(?![a-z])",
        re.IGNORECASE,
    )


@lru_cache(maxsize=1)
def _role_pattern() -> re.Pattern[str]:
    words = "|".join(re.escape(word) for word in get_word_list("parsing.role_words"))
    return re.compile(rf"\b(?:{words})s?\b", re.IGNORECASE)


def has_date(line: str) -> bool:
    return bool(_date_pattern().search(line))


def extract_metric(text: str) -> Metric | None:
    match = _metric_pattern().search(text)
    if match is None:
        return None
    if match.group("lead") is not None:
        return Metric(value=float(match.group("lead").replace(",", "")), unit="$")
    return Metric(value=float(match.group("num").replace(",", "")), unit=match.group("unit"))


def detect_action(text: str) -> str | None:
    word = first_word(text)
    return word if word in action_verbs() else None


def extract_impact(text: str) -> str | None:
    match = _IMPACT_RE.search(text)
    return match.group(1).strip() if match else None


def _pick_company(segments: list[str]) -> str | None:
    if not segments:
        return None
    if len(segments) == 1:
        return segments[0]
    role = _role_pattern()
    for segment in segments:
        if not role.search(segment):
            return segment
    return " ".join(segments)


def parse_employer_line(line: str) -> EmployerLine:
    """Split a "Role | Company | Jan 2021 - Present" style line into its parts."""
    dates = [match.group(0) for match in _date_pattern().finditer(line)]
    without_dates = _date_pattern().sub(" ", line)
    segments = []
    for piece in _COMPANY_SPLIT.split(without_dates):
        cleaned = " ".join(piece.strip(_COMPANY_TRIM).split())
        if cleaned and cleaned.lower() not in _CONNECTORS:
            segments.append(cleaned)
    return EmployerLine(
        company=_pick_company(segments),
        start_date=dates[0] if dates else None,
        end_date=dates[1] if len(dates) > 1 else None,
    )


def _is_candidate(line: str) -> bool:
    return is_bullet_like(line) or first_word(line) in action_verbs()


def extract_bullets(text: str) -> list[ResumeBullet]:
    bullets: list[ResumeBullet] = []
    current_section = default_section_label()
    employer = EmployerLine(company=None, start_date=None, end_date=None)
    previous_plain: str | None = None

    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line:
            continue

        header = match_section_header(line)
        if header is not None:
            current_section = header.text or header.label
            previous_plain = None
            continue

        candidate = _is_candidate(line)
        if has_date(line) and not is_bullet_like(line) and first_word(line) not in action_verbs():
            employer = parse_employer_line(line)
            if employer.company is None and previous_plain:
                # dates on their own line: the company sits on the line above
                employer = EmployerLine(previous_plain, employer.start_date, employer.end_date)
            continue

        if not candidate:
            previous_plain = line
            continue

        raw_text = strip_bullet_prefix(line)
        if len(raw_text) <= MIN_BULLET_CHARS:
            continue

        metric = extract_metric(raw_text)
        bullets.append(
            ResumeBullet(
                id=f"bullet-{len(bullets)}",
                section=current_section,
                company=employer.company,
                start_date=employer.start_date,
                end_date=employer.end_date,
                raw_text=raw_text,
                action=detect_action(raw_text),
                impact=extract_impact(raw_text),
                metric_value=metric.value if metric else None,
                metric_unit=metric.unit if metric else None,
            )
        )

    return bullets
