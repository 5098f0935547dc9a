from functools import lru_cache

from resume_tailor.ai.providers.openai_provider import OpenAIStructuredGenerator
from resume_tailor.ai.types import StructuredGenerator
from resume_tailor.core.config import settings


@lru_cache(maxsize=1)
def get_structured_generator() -> StructuredGenerator:
    if settings.ai_provider == "openai":
        return OpenAIStructuredGenerator(timeout_s=settings.backend_timeout_s)

    raise ValueError(f"Unsupported AI_PROVIDER='{settings.ai_provider}'")
