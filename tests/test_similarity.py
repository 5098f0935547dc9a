import asyncio
import sys
import threading
import time
import unittest
from pathlib import Path
from unittest.mock import patch

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_tailor.schemas import Job, Resume, ResumeBullet  # noqa: E402
from resume_tailor.semantic import HashingEmbeddingProvider, cosine_similarity, find_similar_bullets  # noqa: E402
from resume_tailor.semantic.embeddings import SentenceTransformerEmbeddingProvider  # noqa: E402


class TableEmbeddingProvider:
    def __init__(self, table, failing=()):
        self.table = table
        self.failing = set(failing)

    async def embed(self, text):
        if text in self.failing:
            raise RuntimeError(f"cannot embed {text}")
        return self.table[text]


class BrokenEmbeddingProvider:
    async def embed(self, text):
        raise ConnectionError("embedding backend offline")


def _resume() -> Resume:
    return Resume(
        name="Jane",
        email="jane@example.com",
        bullets=[
            ResumeBullet(id="b1", section="Experience", company="Acme", raw_text="Built REST APIs"),
            ResumeBullet(id="b2", section="Experience", raw_text="Led a team of five"),
        ],
    )


def _job() -> Job:
    return Job(title="Eng", responsibilities=["Build public APIs", "Manage people leaders", "Unrelated paperwork"])


TABLE = {
    "Build public APIs": [1.0, 0.0],
    "Manage people leaders": [0.0, 1.0],
    "Unrelated paperwork": [-1.0, 0.0],
    "Built REST APIs": [1.0, 0.0],
    "Led a team of five": [0.6, 0.8],
}


class SimilarityTests(unittest.IsolatedAsyncioTestCase):
    async def test_best_match_per_responsibility_above_threshold(self):
        matches = await find_similar_bullets(_resume(), _job(), provider=TableEmbeddingProvider(TABLE), threshold=0.55)
        self.assertEqual(
            [(m.responsibility, m.bullet_id) for m in matches],
            [("Build public APIs", "b1"), ("Manage people leaders", "b2")],
        )
        self.assertEqual([m.similarity for m in matches], [1.0, 0.8])
        self.assertEqual(matches[0].company, "Acme")
        for match in matches:
            self.assertTrue(0.55 <= match.similarity <= 1.0)

    async def test_failed_items_are_skipped(self):
        provider = TableEmbeddingProvider(TABLE, failing={"Built REST APIs"})
        with self.assertLogs("resume_tailor.semantic.similarity", level="WARNING"):
            matches = await find_similar_bullets(_resume(), _job(), provider=provider, threshold=0.55)
        self.assertEqual(
            [(m.responsibility, m.bullet_id, m.similarity) for m in matches],
            [("Manage people leaders", "b2", 0.8), ("Build public APIs", "b2", 0.6)],
        )

    async def test_backend_failure_returns_empty(self):
        matches = await find_similar_bullets(_resume(), _job(), provider=BrokenEmbeddingProvider(), threshold=0.55)
        self.assertEqual(matches, [])

    async def test_limits_and_empty_inputs(self):
        provider = TableEmbeddingProvider(TABLE)
        matches = await find_similar_bullets(
            _resume(), _job(), provider=provider, max_responsibilities=1, threshold=0.55
        )
        self.assertEqual(len(matches), 1)
        empty = await find_similar_bullets(Resume(name="A", email="a@b.co"), _job(), provider=provider)
        self.assertEqual(empty, [])

    async def test_short_fragments_are_ignored(self):
        class ConstantEmbeddingProvider:
            def __init__(self):
                self.seen = []

            async def embed(self, text):
                self.seen.append(text)
                return [1.0, 0.0]

        provider = ConstantEmbeddingProvider()
        resume = Resume(
            name="Jane",
            email="jane@example.com",
            bullets=[ResumeBullet(id="b1", section="Experience", raw_text="Shipped it")],
        )
        job = Job(title="Eng", responsibilities=["Build APIs", "   "])
        self.assertEqual(await find_similar_bullets(resume, job, provider=provider), [])
        self.assertEqual(provider.seen, [])

    async def test_short_fragments_do_not_use_up_caps(self):
        resume = Resume(
            name="Jane",
            email="jane@example.com",
            bullets=[
                ResumeBullet(id="b0", section="Experience", raw_text="Misc tasks"),
                ResumeBullet(id="b1", section="Experience", raw_text="Built REST APIs"),
            ],
        )
        job = Job(title="Eng", responsibilities=["  Build APIs ", "  Build public APIs  "])
        matches = await find_similar_bullets(
            resume,
            job,
            provider=TableEmbeddingProvider(TABLE),
            max_responsibilities=1,
            max_bullets=1,
            threshold=0.55,
        )
        self.assertEqual(
            [(m.responsibility, m.bullet_id, m.similarity) for m in matches],
            [("Build public APIs", "b1", 1.0)],
        )

    async def test_hashing_provider_is_deterministic(self):
        provider = HashingEmbeddingProvider(dimension=32)
        first = await provider.embed("Built REST APIs in Python")
        second = await provider.embed("Built REST APIs in Python")
        self.assertEqual(first, second)
        self.assertAlmostEqual(cosine_similarity(first, second), 1.0, places=5)


class SlowModel:
    instances = 0
    lock = threading.Lock()

    def __init__(self, model_name):
        with SlowModel.lock:
            SlowModel.instances += 1
        time.sleep(0.05)
        self.model_name = model_name

    def encode(self, texts, normalize_embeddings=True):
        return [[1.0, 0.0] for _ in texts]


class SentenceTransformerProviderTests(unittest.IsolatedAsyncioTestCase):
    async def test_concurrent_embeds_load_model_once(self):
        model_name = "test-slow-model"
        SlowModel.instances = 0
        SentenceTransformerEmbeddingProvider._model_cache.pop(model_name, None)
        self.addCleanup(SentenceTransformerEmbeddingProvider._model_cache.pop, model_name, None)

        with patch("resume_tailor.semantic.embeddings.SentenceTransformer", SlowModel):
            provider = SentenceTransformerEmbeddingProvider(model_name)
            vectors = await asyncio.gather(*(provider.embed(f"text {i}") for i in range(8)))

        self.assertEqual(SlowModel.instances, 1)
        self.assertEqual(vectors, [[1.0, 0.0]] * 8)


class CosineTests(unittest.TestCase):
    def test_degenerate_vectors(self):
        self.assertEqual(cosine_similarity([], [1.0]), 0.0)
        self.assertEqual(cosine_similarity([0.0, 0.0], [1.0, 0.0]), 0.0)
        self.assertAlmostEqual(cosine_similarity([1.0, 0.0, 5.0], [1.0, 0.0]), 1.0)


if __name__ == "__main__":
    unittest.main()
