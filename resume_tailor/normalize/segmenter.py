from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import lru_cache

from resume_tailor.core.vocabulary import get_vocabulary_value

from .utils import enumerate_lines, is_bullet_like

_HEADER_PUNCTUATION = re.compile(r"[:\-–—]")


@dataclass(frozen=True)
class SectionHeader:
    label: str
    text: str
    inline: str | None = None


@dataclass
class TextSection:
    label: str
    header: str | None
    start_line: int
    end_line: int
    lines: list[str] = field(default_factory=list)


@lru_cache(maxsize=1)
def _header_patterns() -> tuple[tuple[str, re.Pattern[str]], ...]:
    entries = get_vocabulary_value("sections.headers", [])
    if not isinstance(entries, list) or not entries:
        raise RuntimeError("Vocabulary entry 'sections.headers' must be a non-empty list.")
    compiled: list[tuple[str, re.Pattern[str]]] = []
    for entry in entries:
        label = str(entry["label"])
        pattern = re.compile(
            rf"^(?:{entry['pattern']})\s*(?:[:\-–—]+\s*(?P<inline>.*))?$",
            re.IGNORECASE,
        )
        compiled.append((label, pattern))
    return tuple(compiled)


def default_section_label() -> str:
    return str(get_vocabulary_value("sections.default_label", "Experience"))


def clean_header(line: str) -> str:
    return _HEADER_PUNCTUATION.sub("", line).strip()


def match_section_header(line: str) -> SectionHeader | None:
    stripped = line.strip()
    if not stripped or is_bullet_like(stripped):
        return None
    for label, pattern in _header_patterns():
        match = pattern.match(stripped)
        if match is None:
            continue
        inline = (match.group("inline") or "").strip() or None
        text = stripped[: match.start("inline")] if inline else stripped
        return SectionHeader(label=label, text=clean_header(text), inline=inline)
    return None


def segment_text(text: str) -> list[TextSection]:
    """Split text into sections at header lines.

    Lines before the first header belong to an implicit section carrying the
    default label. Empty implicit sections are dropped.
    """
    sections: list[TextSection] = []
    current = TextSection(label=default_section_label(), header=None, start_line=1, end_line=0)

    for line_no, raw_line in enumerate_lines(text):
        header = match_section_header(raw_line)
        if header is not None:
            if current.header is not None or current.lines:
                sections.append(current)
            current = TextSection(
                label=header.label,
                header=header.text,
                start_line=line_no,
                end_line=line_no,
            )
            if header.inline:
                current.lines.append(header.inline)
            continue
        current.end_line = line_no
        if raw_line.strip():
            current.lines.append(raw_line.strip())

    if current.header is not None or current.lines:
        sections.append(current)
    return sections
