from .embeddings import (
    EmbeddingProvider,
    HashingEmbeddingProvider,
    OpenAIEmbeddingProvider,
    SentenceTransformerEmbeddingProvider,
    cosine_similarity,
    get_embedding_provider,
)
from .similarity import find_similar_bullets

__all__ = [
    "EmbeddingProvider",
    "HashingEmbeddingProvider",
    "SentenceTransformerEmbeddingProvider",
    "OpenAIEmbeddingProvider",
    "cosine_similarity",
    "get_embedding_provider",
    "find_similar_bullets",
]
