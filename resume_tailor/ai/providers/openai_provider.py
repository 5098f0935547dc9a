from __future__ import annotations

import json
import logging
import os
from typing import Optional

from openai import AsyncOpenAI
from pydantic import ValidationError

from resume_tailor.ai.types import SchemaT
from resume_tailor.core.results import BackendError

logger = logging.getLogger(__name__)

_SCHEMA_INSTRUCTIONS = (
    "Respond with a single JSON object and nothing else. "
    "It must validate against this JSON Schema:\n{schema}"
)


class OpenAIStructuredGenerator:
    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_s: float = 30.0,
        max_retries: int = 0,
        temperature: float = 0.2,
        max_output_tokens: int = 4000,
    ):
        self._temperature = temperature
        self._max_output_tokens = max_output_tokens
        key = (api_key or os.getenv("OPENAI_API_KEY") or "").strip()
        if not key:
            raise BackendError("OPENAI_API_KEY is missing", code="llm_disabled")

        self._client = AsyncOpenAI(
            api_key=key,
            base_url=(base_url or os.getenv("OPENAI_BASE_URL") or None),
            timeout=float(os.getenv("OPENAI_TIMEOUT_S", str(timeout_s))),
            max_retries=int(os.getenv("OPENAI_MAX_RETRIES", str(max_retries))),
        )

    async def generate_structured(
        self,
        model_id: str,
        system_prompt: str,
        user_prompt: str,
        output_schema: type[SchemaT],
    ) -> SchemaT:
        schema = json.dumps(output_schema.model_json_schema(), ensure_ascii=False)
        system = f"{system_prompt}\n\n{_SCHEMA_INSTRUCTIONS.format(schema=schema)}"

        response = await self._client.chat.completions.create(
            model=model_id,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": user_prompt},
            ],
            temperature=self._temperature,
            response_format={"type": "json_object"},
            max_tokens=self._max_output_tokens,
        )
        content = response.choices[0].message.content if response.choices else ""
        if not content:
            raise BackendError(f"Empty response from model '{model_id}'", code="empty_response")

        try:
            return output_schema.model_validate_json(content)
        except ValidationError as exc:
            logger.debug("structured_output_invalid model=%s errors=%s", model_id, exc.error_count())
            raise BackendError(
                f"Model '{model_id}' returned output that does not match {output_schema.__name__}",
                code="invalid_schema",
            ) from exc
