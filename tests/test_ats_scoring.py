import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_tailor.schemas import Job, Resume, ResumeBullet  # noqa: E402
from resume_tailor.scoring import check_ats_compatibility, detect_industry, get_missing_skills  # noqa: E402
from resume_tailor.scoring.benchmark import IndustryProfile, calculate_percentile  # noqa: E402


def _complete_resume() -> Resume:
    return Resume(
        name="Jane Doe",
        email="jane@example.com",
        summary="Backend engineer",
        sections=["Experience"],
        skills=["Python", "Docker"],
        bullets=[
            ResumeBullet(
                id="b1",
                section="Experience",
                raw_text="Built Python services handling 2 million requests",
                metric_value=2,
                metric_unit="million",
            )
        ],
    )


class ATSScoringTests(unittest.TestCase):
    def test_keyword_match_half(self):
        resume = Resume(
            name="John Doe",
            email="john@example.com",
            skills=["React"],
            bullets=[ResumeBullet(id="1", section="Experience", raw_text="Built dashboards")],
        )
        job = Job(title="Eng", keywords=["react", "docker"])
        score = check_ats_compatibility(resume, job)
        self.assertEqual(score.keyword_match, 50)
        self.assertEqual(score.suggestions[0], "Add missing keywords: docker")

    def test_perfect_components_give_perfect_overall(self):
        score = check_ats_compatibility(_complete_resume(), Job(title="Platform", keywords=["python", "docker"]))
        self.assertEqual(score.keyword_match, 100)
        self.assertEqual(score.formatting_score, 100)
        self.assertEqual(score.readability_score, 100)
        self.assertEqual(score.overall_score, 100)

    def test_formatting_and_readability_penalties(self):
        long_text = "Worked on " + "many internal things " * 12
        resume = Resume(
            name="Unknown",
            email="unknown@email.com",
            bullets=[ResumeBullet(id="1", section="Experience", raw_text=long_text)],
        )
        score = check_ats_compatibility(resume, Job(title="Eng"))
        # name 20, email 20, summary 10, sections 15, skills 15, metrics 10
        self.assertEqual(score.formatting_score, 10)
        # one long bullet and no action verbs
        self.assertEqual(score.readability_score, 80)
        self.assertEqual(score.keyword_match, 0)
        self.assertIn("Add a professional summary section", score.suggestions)
        self.assertIn("Include more relevant skills (aim for 8-12)", score.suggestions)
        self.assertIn("Add quantifiable metrics to 1 bullet points", score.suggestions)

    def test_scoring_is_deterministic_and_pure(self):
        resume = _complete_resume()
        job = Job(title="Data Scientist", keywords=["python", "sql", "machine learning"])
        before = (resume.model_dump(), job.model_dump())
        first = check_ats_compatibility(resume, job)
        second = check_ats_compatibility(resume, job)
        self.assertEqual(first, second)
        self.assertEqual((resume.model_dump(), job.model_dump()), before)

    def test_industry_benchmark_attached(self):
        job = Job(title="Data Scientist", keywords=["python", "sql", "machine learning"])
        score = check_ats_compatibility(_complete_resume(), job)
        benchmark = score.industry_benchmark
        self.assertIsNotNone(benchmark)
        self.assertEqual(benchmark.industry, "Data & AI")
        self.assertEqual(benchmark.average, 68)
        self.assertTrue(1 <= benchmark.percentile <= 99)
        self.assertEqual(benchmark.delta_from_average, round(score.overall_score - 68, 1))

    def test_industry_tie_or_no_hits_has_no_benchmark(self):
        self.assertIsNone(detect_industry(Job(title="Role", keywords=["python", "react"])))
        self.assertIsNone(detect_industry(Job(title="Role")))

    def test_percentile_mapping(self):
        profile = IndustryProfile(industry="Test", keywords=(), average=72, top=90)
        self.assertEqual(calculate_percentile(72, profile), 50)
        self.assertEqual(calculate_percentile(36, profile), 25)
        self.assertEqual(calculate_percentile(0, profile), 1)
        self.assertEqual(calculate_percentile(81, profile), 75)
        self.assertEqual(calculate_percentile(100, profile), 99)

    def test_benchmark_gap_suggestion(self):
        resume = Resume(name="Jane", email="jane@example.com")
        job = Job(title="Data Analyst", keywords=["sql", "python"])
        score = check_ats_compatibility(resume, job)
        self.assertLess(score.overall_score, 68)
        self.assertTrue(score.suggestions[-1].startswith("Your ATS score is"))
        self.assertIn("Data & AI", score.suggestions[-1])


class MissingSkillsTests(unittest.TestCase):
    def test_missing_skills_checks_skills_and_text(self):
        resume = Resume(
            name="Jane",
            email="jane@example.com",
            summary="Cloud engineer",
            skills=["Python"],
            bullets=[ResumeBullet(id="1", section="Experience", raw_text="Deployed services with Docker")],
        )
        job = Job(title="Eng", keywords=["python", "docker", "aws", "cloud"])
        self.assertEqual(get_missing_skills(resume, job), ["aws"])

    def test_missing_skills_subset_of_keywords(self):
        resume = _complete_resume()
        job = Job(title="Eng", keywords=["Kubernetes", "python", "Redis"])
        missing = get_missing_skills(resume, job)
        self.assertTrue(set(missing) <= set(job.keywords))
        text = " ".join([resume.summary or ""] + [b.raw_text for b in resume.bullets]).lower()
        for skill in missing:
            self.assertNotIn(skill.lower(), [s.lower() for s in resume.skills])
            self.assertNotIn(skill.lower(), text)


if __name__ == "__main__":
    unittest.main()
