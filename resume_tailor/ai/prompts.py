import json

from resume_tailor.schemas import Job, Resume

RESUME_PARSER_SYSTEM_PROMPT = (
    "You are an expert resume parsing engine. "
    "Extract structured JSON containing the candidate's name, contact information, summary, "
    "sections, skills, and work bullets. "
    "Preserve original bullet wording and never invent details."
)

JOB_PARSER_SYSTEM_PROMPT = (
    "You are an expert ATS analyst. "
    "Convert the job description into structured JSON identifying the role title, seniority, "
    "keywords, and key responsibilities."
)

TAILORING_SYSTEM_PROMPT = """You are an expert resume writer and career coach specializing in ATS-optimized resumes.

CRITICAL RULES:
1. NEVER invent or fabricate metrics, numbers, or statistics that weren't in the original resume
2. If a bullet lacks quantifiable metrics, add a "suggested_metric" field with a realistic suggestion the user can verify
3. Keep all tailored bullets concise (under 2 lines / 150 characters)
4. Naturally incorporate job keywords without keyword stuffing
5. Start bullets with strong action verbs
6. Maintain the original meaning and truthfulness of each bullet
7. Never change "id" or "raw_text"; write the rewrite into "tailored_text"
8. Output valid JSON matching the exact schema provided"""

_STYLE_GUIDES = {
    "concise": "Maximum 1 line, punchy, impact-focused.",
    "detailed": "Up to 2 lines, includes context and impact.",
}


def build_resume_parse_prompt(raw_text: str) -> str:
    return f"Extract structured resume JSON from the following text.\n\nRESUME:\n{raw_text}"


def build_job_parse_prompt(raw_text: str) -> str:
    return f"Extract structured job JSON from the following posting.\n\nJOB DESCRIPTION:\n{raw_text}"


def build_tailoring_prompt(resume: Resume, job: Job, style: str) -> str:
    resume_json = json.dumps(resume.model_dump(exclude_none=True), indent=2, ensure_ascii=False)
    job_json = json.dumps(job.model_dump(exclude_none=True), indent=2, ensure_ascii=False)
    return (
        f"RESUME:\n{resume_json}\n\n"
        f"JOB DESCRIPTION:\n{job_json}\n\n"
        f"TAILORING STYLE: {style}\n\n"
        "Instructions:\n"
        "1. For each bullet in the resume, create a \"tailored_text\" that incorporates relevant "
        "job keywords naturally, highlights experience relevant to this role, keeps the same "
        "factual content and uses strong action verbs.\n"
        "2. If the original bullet lacks metrics, DO NOT invent numbers; add a \"suggested_metric\" "
        "placeholder such as \"X% improvement in [metric]\" or \"Y users impacted\".\n"
        f"3. Style: {_STYLE_GUIDES.get(style, _STYLE_GUIDES['concise'])}\n"
        "4. match_score (0-1): keyword overlap, skill alignment and experience relevance.\n\n"
        "Return JSON with \"bullets\" (one entry per resume bullet: \"id\", \"tailored_text\", "
        "optional \"suggested_metric\") and \"match_score\"."
    )
