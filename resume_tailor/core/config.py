from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_float(name: str, default: float) -> float:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str]) -> tuple[str, ...]:
    raw = _get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",")]
    clean = [item for item in values if item]
    return tuple(clean) if clean else tuple(default)


@dataclass(frozen=True)
class Settings:
    log_level: str
    sentry_dsn: str | None
    rate_limit: str
    tailor_rate_limit: str
    rate_limit_enabled: bool
    cors_allowed_origins: tuple[str, ...]
    use_ai_parsing: bool
    use_ai_tailoring: bool
    ai_provider: str
    parser_model: str
    job_parser_model: str
    tailor_model: str
    embedding_provider: str
    openai_embedding_model: str
    local_embedding_model: str
    similarity_max_bullets: int
    similarity_max_responsibilities: int
    similarity_threshold: float
    max_upload_bytes: int
    backend_timeout_s: float


def load_settings() -> Settings:
    parser_model = _get_env("OPENAI_PARSER_MODEL", "gpt-4o-mini") or "gpt-4o-mini"
    return Settings(
        log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
        sentry_dsn=_get_env("SENTRY_DSN"),
        rate_limit=_get_env("RATE_LIMIT", "30/minute") or "30/minute",
        tailor_rate_limit=_get_env("TAILOR_RATE_LIMIT", "10/minute") or "10/minute",
        rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
        cors_allowed_origins=_get_env_list(
            "CORS_ALLOWED_ORIGINS",
            [
                "http://localhost:3000",
                "http://127.0.0.1:3000",
            ],
        ),
        use_ai_parsing=_get_env_bool("USE_AI_PARSING", False),
        use_ai_tailoring=_get_env_bool("USE_AI_TAILORING", False),
        ai_provider=(_get_env("AI_PROVIDER", "openai") or "openai").strip().lower(),
        parser_model=parser_model,
        job_parser_model=_get_env("OPENAI_JOB_PARSER_MODEL", parser_model) or parser_model,
        tailor_model=_get_env("OPENAI_TAILOR_MODEL", "gpt-4o") or "gpt-4o",
        embedding_provider=(_get_env("EMBEDDING_PROVIDER", "local") or "local").strip().lower(),
        openai_embedding_model=_get_env("OPENAI_EMBEDDING_MODEL", "text-embedding-3-small")
        or "text-embedding-3-small",
        local_embedding_model=_get_env("LOCAL_EMBEDDING_MODEL", "sentence-transformers/all-MiniLM-L6-v2")
        or "sentence-transformers/all-MiniLM-L6-v2",
        similarity_max_bullets=_get_env_int("SIMILARITY_MAX_BULLETS", 20),
        similarity_max_responsibilities=_get_env_int("SIMILARITY_MAX_RESPONSIBILITIES", 10),
        similarity_threshold=_get_env_float("SIMILARITY_THRESHOLD", 0.55),
        max_upload_bytes=_get_env_int("MAX_UPLOAD_BYTES", 5 * 1024 * 1024),
        backend_timeout_s=_get_env_float("BACKEND_TIMEOUT_S", 45.0),
    )


settings = load_settings()

if settings.embedding_provider not in {"local", "openai", "hashing"}:
    raise RuntimeError("EMBEDDING_PROVIDER must be one of: local, openai, hashing.")
