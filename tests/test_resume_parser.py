import asyncio
import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_tailor.core.results import BackendError, Degraded, Ok  # noqa: E402
from resume_tailor.normalize import parse_resume_heuristics  # noqa: E402
from resume_tailor.schemas import is_valid_resume  # noqa: E402
from resume_tailor.services.parser import (  # noqa: E402
    FallbackJobParser,
    FallbackResumeParser,
    ModelBullet,
    ModelJobOutput,
    ModelJobParser,
    ModelResumeOutput,
    ModelResumeParser,
)

RESUME_TEXT = (
    "Jane Doe\n"
    "jane@example.com\n"
    "Experience\n"
    "Senior Engineer | TechCorp | Jan 2021 - Present\n"
    "- Built payment APIs in Python for 3 million users\n"
)


class FakeGenerator:
    def __init__(self, output=None, error=None, delay=0.0):
        self.output = output
        self.error = error
        self.delay = delay
        self.calls = []

    async def generate_structured(self, model_id, system_prompt, user_prompt, output_schema):
        self.calls.append((model_id, output_schema))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.output


class HeuristicResumeParserTests(unittest.TestCase):
    def test_empty_input_yields_defaults(self):
        resume = parse_resume_heuristics("")
        self.assertEqual(resume.name, "Unknown")
        self.assertEqual(resume.email, "unknown@email.com")
        self.assertEqual((resume.sections, resume.skills, resume.bullets), ([], [], []))

    def test_never_raises_on_odd_input(self):
        samples = ["   ", "\n\n\n", "•", "Skills:", "$$$ 100% %%%", "Jan 2020 - Present", "🙂" * 40]
        for sample in samples:
            self.assertTrue(is_valid_resume(parse_resume_heuristics(sample)))

    def test_full_resume(self):
        resume = parse_resume_heuristics(RESUME_TEXT)
        self.assertEqual(resume.name, "Jane Doe")
        self.assertEqual(resume.email, "jane@example.com")
        self.assertEqual(resume.sections, ["Experience"])
        self.assertIn("python", resume.skills)
        self.assertEqual(len(resume.bullets), 1)
        self.assertEqual(resume.bullets[0].company, "TechCorp")
        self.assertEqual(resume.bullets[0].metric_value, 3.0)


class ModelResumeParserTests(unittest.IsolatedAsyncioTestCase):
    async def test_model_output_is_sanitized_and_completed(self):
        output = ModelResumeOutput(
            name="Jane Doe",
            skills=["Python", "python"],
            bullets=[ModelBullet(raw_text="Led migration to the cloud"), ModelBullet(raw_text="  ")],
        )
        generator = FakeGenerator(output=output)
        outcome = await ModelResumeParser(generator, "test-model").try_parse(RESUME_TEXT)

        self.assertIsInstance(outcome, Ok)
        resume = outcome.value
        self.assertEqual(resume.email, "jane@example.com")
        self.assertEqual(len(resume.bullets), 1)
        self.assertTrue(resume.bullets[0].id)
        self.assertEqual(generator.calls, [("test-model", ModelResumeOutput)])

    async def test_backend_failure_is_degraded(self):
        generator = FakeGenerator(error=BackendError("boom", code="empty_response"))
        outcome = await ModelResumeParser(generator, "test-model").try_parse(RESUME_TEXT)
        self.assertIsInstance(outcome, Degraded)
        self.assertIn("boom", outcome.describe())

    async def test_timeout_is_degraded(self):
        generator = FakeGenerator(output=ModelResumeOutput(), delay=1.0)
        outcome = await ModelResumeParser(generator, "test-model", timeout_s=0.01).try_parse(RESUME_TEXT)
        self.assertIsInstance(outcome, Degraded)

    async def test_fallback_uses_heuristics_on_failure(self):
        model = ModelResumeParser(FakeGenerator(error=RuntimeError("down")), "test-model")
        with self.assertLogs("resume_tailor.services.parser", level="WARNING"):
            resume = await FallbackResumeParser(model).parse(RESUME_TEXT)
        self.assertEqual(resume, parse_resume_heuristics(RESUME_TEXT))

    async def test_fallback_without_model_is_heuristic(self):
        resume = await FallbackResumeParser(None).parse(RESUME_TEXT)
        self.assertEqual(resume, parse_resume_heuristics(RESUME_TEXT))


class ModelJobParserTests(unittest.IsolatedAsyncioTestCase):
    async def test_model_job_output(self):
        output = ModelJobOutput(title="Backend Engineer", keywords=["python", "python"], responsibilities=["Build APIs"])
        parser = FallbackJobParser(ModelJobParser(FakeGenerator(output=output), "test-model"))
        job = await parser.parse("Backend Engineer\n- Build APIs")
        self.assertEqual(job.title, "Backend Engineer")
        self.assertEqual(job.keywords, ["python"])

    async def test_job_fallback(self):
        parser = FallbackJobParser(ModelJobParser(FakeGenerator(error=ValueError("bad")), "test-model"))
        with self.assertLogs("resume_tailor.services.parser", level="WARNING"):
            job = await parser.parse("Python Developer\nResponsibilities:\n- Write Python services daily\n")
        self.assertEqual(job.responsibilities, ["Write Python services daily"])


if __name__ == "__main__":
    unittest.main()
