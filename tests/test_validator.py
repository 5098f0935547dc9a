import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_tailor.schemas import (  # noqa: E402
    Job,
    Resume,
    is_valid_bullet,
    is_valid_job,
    is_valid_resume,
    sanitize_job,
    sanitize_resume,
)


PARTIAL_RESUMES = [
    {},
    {"name": "  ", "skills": ["Python", "Python", ""]},
    {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "bullets": [
            {"id": "a", "raw_text": "Built APIs"},
            {"id": "a", "raw_text": "Led migration"},
            {"raw_text": "   "},
            {"section": "", "raw_text": "Reduced cost by 20%", "metric_value": 20},
        ],
    },
]

PARTIAL_JOBS = [
    {},
    {"title": "Backend Engineer", "keywords": ["python", "python"], "responsibilities": ["", "Build APIs"]},
    {"title": "Data Analyst", "required_skills": ["sql"], "preferred_skills": []},
]


class ValidatorTests(unittest.TestCase):
    def test_validator_rejects_malformed_values(self):
        self.assertFalse(is_valid_resume(None))
        self.assertFalse(is_valid_resume("resume"))
        self.assertFalse(is_valid_resume({"name": "Jane", "email": "j@x.com"}))
        self.assertFalse(is_valid_resume({"name": 1, "email": "j@x.com", "sections": [], "skills": [], "bullets": []}))
        self.assertFalse(is_valid_job({"title": "Eng", "keywords": "python", "responsibilities": []}))
        self.assertFalse(is_valid_bullet({"id": "1", "raw_text": "Built"}))

    def test_validator_accepts_complete_values(self):
        resume = {
            "name": "Jane",
            "email": "jane@example.com",
            "sections": ["Experience"],
            "skills": ["Python"],
            "bullets": [{"id": "1", "section": "Experience", "raw_text": "Built APIs", "metric_value": 3}],
        }
        self.assertTrue(is_valid_resume(resume))
        self.assertTrue(is_valid_resume(Resume.model_validate(resume)))
        self.assertTrue(is_valid_job({"title": "Eng", "keywords": [], "responsibilities": []}))

    def test_sanitize_fills_defaults(self):
        resume = sanitize_resume({})
        self.assertEqual(resume.name, "Unknown")
        self.assertEqual(resume.email, "unknown@email.com")
        self.assertEqual(resume.bullets, [])

        job = sanitize_job(None)
        self.assertEqual(job.title, "Unknown Position")
        self.assertEqual(job.keywords, [])

    def test_sanitize_bullets_drops_blank_and_makes_ids_unique(self):
        resume = sanitize_resume(PARTIAL_RESUMES[2])
        self.assertEqual(len(resume.bullets), 3)
        ids = [bullet.id for bullet in resume.bullets]
        self.assertEqual(len(ids), len(set(ids)))
        self.assertEqual(resume.bullets[2].section, "Experience")
        self.assertEqual(resume.bullets[2].metric_value, 20.0)

    def test_sanitize_is_idempotent(self):
        for partial in PARTIAL_RESUMES:
            once = sanitize_resume(partial)
            self.assertEqual(sanitize_resume(once), once)
        for partial in PARTIAL_JOBS:
            once = sanitize_job(partial)
            self.assertEqual(sanitize_job(once), once)

    def test_sanitized_values_pass_validator(self):
        for partial in PARTIAL_RESUMES:
            self.assertTrue(is_valid_resume(sanitize_resume(partial)))
        for partial in PARTIAL_JOBS:
            job = sanitize_job(partial)
            self.assertIsInstance(job, Job)
            self.assertTrue(is_valid_job(job))


if __name__ == "__main__":
    unittest.main()
