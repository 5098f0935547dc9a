from __future__ import annotations

import asyncio
import hashlib
import os
import re
import threading
from functools import lru_cache
from typing import Protocol

import numpy as np
from openai import AsyncOpenAI
from sentence_transformers import SentenceTransformer

from resume_tailor.core.config import settings
from resume_tailor.core.results import BackendError

_TOKEN_PATTERN = re.compile(r"[a-z0-9\+#]+")


class EmbeddingProvider(Protocol):
    async def embed(self, text: str) -> list[float]:
        """Return a vector embedding for a single text."""


class HashingEmbeddingProvider:
    """Deterministic bag-of-tokens embedding; needs no model download."""

    def __init__(self, dimension: int = 64) -> None:
        if dimension <= 0:
            raise ValueError("dimension must be greater than 0")
        self.dimension = dimension

    async def embed(self, text: str) -> list[float]:
        vector = np.zeros(self.dimension, dtype="float32")
        for token in _TOKEN_PATTERN.findall(text.lower()):
            digest = hashlib.sha256(token.encode("utf-8")).hexdigest()
            vector[int(digest[:8], 16) % self.dimension] += 1.0

        norm = float(np.linalg.norm(vector))
        if norm <= 0:
            return vector.tolist()
        return (vector / norm).tolist()


class SentenceTransformerEmbeddingProvider:
    _model_cache: dict[str, SentenceTransformer] = {}
    _model_lock = threading.Lock()

    def __init__(self, model_name: str | None = None) -> None:
        self.model_name = model_name or settings.local_embedding_model

    @classmethod
    def _get_model(cls, model_name: str) -> SentenceTransformer:
        model = cls._model_cache.get(model_name)
        if model is not None:
            return model
        with cls._model_lock:
            model = cls._model_cache.get(model_name)
            if model is None:
                model = SentenceTransformer(model_name)
                cls._model_cache[model_name] = model
            return model

    def _encode(self, text: str) -> list[float]:
        model = self._get_model(self.model_name)
        emb = model.encode([text], normalize_embeddings=True)
        return np.asarray(emb, dtype="float32").reshape(-1).tolist()

    async def embed(self, text: str) -> list[float]:
        return await asyncio.to_thread(self._encode, text)


class OpenAIEmbeddingProvider:
    def __init__(self, model: str | None = None, api_key: str | None = None) -> None:
        key = (api_key or os.getenv("OPENAI_API_KEY") or "").strip()
        if not key:
            raise BackendError("OPENAI_API_KEY is missing", code="embeddings_disabled")
        self.model = model or settings.openai_embedding_model
        self._client = AsyncOpenAI(
            api_key=key,
            base_url=os.getenv("OPENAI_BASE_URL") or None,
            timeout=settings.backend_timeout_s,
            max_retries=0,
        )

    async def embed(self, text: str) -> list[float]:
        response = await self._client.embeddings.create(model=self.model, input=text)
        if not response.data:
            raise BackendError(f"Empty embedding response from '{self.model}'", code="empty_response")
        return list(response.data[0].embedding)


def cosine_similarity(left: list[float], right: list[float]) -> float:
    """Cosine over the shared prefix of both vectors; zero for degenerate input."""
    size = min(len(left), len(right))
    if size == 0:
        return 0.0
    a = np.asarray(left[:size], dtype="float64")
    b = np.asarray(right[:size], dtype="float64")
    left_norm = float(np.linalg.norm(a))
    right_norm = float(np.linalg.norm(b))
    if left_norm <= 0 or right_norm <= 0:
        return 0.0
    return float(np.dot(a, b) / (left_norm * right_norm))


@lru_cache(maxsize=1)
def get_embedding_provider() -> EmbeddingProvider:
    if settings.embedding_provider == "openai":
        return OpenAIEmbeddingProvider()
    if settings.embedding_provider == "hashing":
        return HashingEmbeddingProvider()
    return SentenceTransformerEmbeddingProvider()
