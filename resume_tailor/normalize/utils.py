from __future__ import annotations

import re
from functools import lru_cache

from resume_tailor.core.vocabulary import get_word_list

BULLET_MARKERS = ("•", "-", "*")
_BULLET_PATTERN = re.compile(r"^\s*[•\-*]\s*")
_WHITESPACE = re.compile(r"\s+")


def enumerate_lines(text: str) -> list[tuple[int, str]]:
    return [(index + 1, line) for index, line in enumerate(text.splitlines())]


def normalize_line(line: str) -> str:
    return _WHITESPACE.sub(" ", line).strip()


def is_bullet_like(line: str) -> bool:
    return line.strip().startswith(BULLET_MARKERS)


def strip_bullet_prefix(line: str) -> str:
    return _BULLET_PATTERN.sub("", line, count=1).strip()


def first_word(text: str) -> str:
    parts = text.strip().split()
    if not parts:
        return ""
    return parts[0].lower().strip(".,;:!")


@lru_cache(maxsize=1)
def action_verbs() -> frozenset[str]:
    return frozenset(verb.lower() for verb in get_word_list("parsing.action_verbs"))


def contains_action_verb(text: str) -> bool:
    lowered = text.lower()
    return any(verb in lowered for verb in action_verbs())
