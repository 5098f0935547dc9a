from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

_VOCABULARY_CACHE: dict[str, Any] | None = None
_VOCABULARY_PATH = Path(__file__).with_name("vocabulary.yaml")


def get_vocabulary_config() -> dict[str, Any]:
    """Load the static matching vocabularies from vocabulary.yaml and cache them."""
    global _VOCABULARY_CACHE

    if _VOCABULARY_CACHE is not None:
        return _VOCABULARY_CACHE

    if not _VOCABULARY_PATH.exists():
        raise RuntimeError(f"Vocabulary config not found at '{_VOCABULARY_PATH}'.")

    try:
        raw = _VOCABULARY_PATH.read_text(encoding="utf-8")
    except OSError as exc:
        raise RuntimeError(f"Failed to read vocabulary config '{_VOCABULARY_PATH}': {exc}") from exc

    try:
        parsed = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise RuntimeError(f"Invalid YAML in vocabulary config '{_VOCABULARY_PATH}': {exc}") from exc

    if not isinstance(parsed, dict):
        raise RuntimeError(
            f"Invalid vocabulary config '{_VOCABULARY_PATH}': expected a top-level mapping."
        )

    _VOCABULARY_CACHE = parsed
    return _VOCABULARY_CACHE


def get_vocabulary_value(path: str, default: Any = None) -> Any:
    """Get nested config value using dot path notation, e.g. 'parsing.action_verbs'."""
    if not path:
        return default

    current: Any = get_vocabulary_config()
    for key in path.split("."):
        if not isinstance(current, dict):
            return default
        if key not in current:
            return default
        current = current[key]
    return current


def get_word_list(path: str) -> tuple[str, ...]:
    values = get_vocabulary_value(path, [])
    if not isinstance(values, list):
        raise RuntimeError(f"Vocabulary entry '{path}' must be a list.")
    return tuple(str(value) for value in values)
