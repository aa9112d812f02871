import io
import json
import logging
import re
from typing import Any, Dict, List, Optional, Tuple, Union

import pdfplumber
from fastapi import Depends

from resume_tailor.models.job import ParsedJobDescription, ParseOptions
from resume_tailor.models.profile import SKILL_CATEGORIES, ParsedProfile, ProfileParseOptions
from resume_tailor.services.config import settings
from resume_tailor.services.dispatcher import CredentialPool, GenerationDispatcher
from resume_tailor.services.errors import InvalidGenerationError
from resume_tailor.services.gemini import GeminiTransport
from resume_tailor.services.prompts import (
    ATS_REPORT_PROMPT,
    COVER_LETTER_PROMPT,
    JOB_DESCRIPTION_PROMPT,
    RESUME_PROFILE_PROMPT,
    TAILOR_RESUME_PROMPT,
    ats_report_structure,
    job_description_structure,
    profile_structure,
    resume_structure,
)
from resume_tailor.services.scorer import compute_score

logger = logging.getLogger("uvicorn.error")

PLACEHOLDER = re.compile(r"\$\{(\w+)\}")
CODE_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$")

JOB_TEXT_FIELDS = ("company", "location", "employment_type", "experience_level", "salary_range", "department")
JOB_LIST_FIELDS = ("required_skills", "preferred_skills", "responsibilities", "qualifications", "benefits")


def _fill(template: str, **values: str) -> str:
    """Substitute ``${name}`` placeholders in a single pass."""
    return PLACEHOLDER.sub(lambda m: values.get(m.group(1), m.group(0)), template)


def _clean_text(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    return value.strip() or None


def _strings(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


def _clean_list(value: Any) -> List[str]:
    return list(dict.fromkeys(_strings(value)))


def _dicts(value: Any) -> List[dict]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _as_prompt_json(value: Any) -> str:
    if isinstance(value, ParsedJobDescription):
        value = value.model_dump()
    return json.dumps(value, indent=2)


class ResumeTailorGenerator:

    def __init__(self, dispatcher: GenerationDispatcher):
        self.dispatcher = dispatcher

    @classmethod
    def extract_text_from_pdf(cls, file_bytes: bytes) -> Tuple[str, int]:
        text = ""
        try:
            with pdfplumber.open(io.BytesIO(file_bytes)) as pdf:
                num_pages = len(pdf.pages)
                for page in pdf.pages:
                    page_text = page.extract_text()
                    if page_text:
                        text += page_text + "\n"
        except Exception as e:
            logger.exception("Failed to extract text from PDF")
            raise ValueError(f"Failed to extract text from PDF: {e}")
        return text, num_pages

    @classmethod
    def parse_llm_response(cls, llm_response: str) -> Union[dict, list]:
        stripped = CODE_FENCE.sub("", llm_response.strip())
        cleaned_response = re.search(r"\{.*\}|\[.*\]", stripped, re.DOTALL)
        if cleaned_response:
            json_string = cleaned_response.group(0)
        else:
            json_string = stripped

        try:
            return json.loads(json_string)
        except json.JSONDecodeError:
            logger.error("LLM response is not valid JSON. Raw start: %s", llm_response[:100].replace('\n', ' '))
            logger.error("Attempted parse: %s", json_string[:200].replace('\n', ' '))
            raise InvalidGenerationError("LLM response is not valid JSON")

    @classmethod
    def preprocess_job_text(cls, raw_text: str) -> str:
        text = raw_text.replace("\r\n", "\n")
        text = re.sub(r"\n\s*\n", "\n", text)
        return re.sub(r"[ \t]+", " ", text).strip()

    @classmethod
    def clean_job_description(cls, data: Any, options: Optional[ParseOptions] = None) -> ParsedJobDescription:
        """Coerce whatever the model returned into the fixed job-description shape."""
        if not isinstance(data, dict):
            raise InvalidGenerationError("Job description response is not a JSON object")
        options = options or ParseOptions()

        parsed = ParsedJobDescription(
            title=_clean_text(data.get("title")) or "Unknown Position",
            **{field: _clean_text(data.get(field)) for field in JOB_TEXT_FIELDS},
            **{field: _clean_list(data.get(field)) for field in JOB_LIST_FIELDS},
        )

        if options.maxSkills:
            parsed.required_skills = parsed.required_skills[:options.maxSkills]
            parsed.preferred_skills = parsed.preferred_skills[:options.maxSkills]
        if options.maxResponsibilities:
            parsed.responsibilities = parsed.responsibilities[:options.maxResponsibilities]
        if not options.includeCompany:
            parsed.company = None
        if not options.includeSalary:
            parsed.salary_range = None
        return parsed

    @classmethod
    def clean_profile(cls, data: Any, options: Optional[ProfileParseOptions] = None) -> ParsedProfile:
        """Coerce a parsed resume into the profile shape, dropping entries without their key field."""
        if not isinstance(data, dict):
            raise InvalidGenerationError("Profile response is not a JSON object")
        options = options or ProfileParseOptions()

        skills, seen = [], set()
        for item in _dicts(data.get("skills")):
            name = _clean_text(item.get("skill"))
            if not name or name.lower() in seen:
                continue
            seen.add(name.lower())
            category = item.get("category")
            skills.append({
                "skill": name,
                "category": category if category in SKILL_CATEGORIES else None,
                "level": _clean_text(item.get("level")) or "Intermediate",
            })

        certifications = [
            {
                "name": _clean_text(item.get("name")),
                **{
                    field: _clean_text(item.get(field)) or ""
                    for field in ("issuer", "issue_date", "expiry_date", "credential_id", "credential_url", "year")
                },
            }
            for item in _dicts(data.get("certifications"))
            if _clean_text(item.get("name"))
        ]

        experience = [
            {
                "title": _clean_text(item.get("title")),
                **{field: _clean_text(item.get(field)) or "" for field in ("company", "duration", "location")},
                "responsibilities": _strings(item.get("responsibilities")),
            }
            for item in _dicts(data.get("experience"))
            if _clean_text(item.get("title"))
        ]

        education = []
        for item in _dicts(data.get("education")):
            institution = _clean_text(item.get("institution"))
            if not institution:
                continue
            gpa = item.get("gpa")
            education.append({
                "institution": institution,
                **{
                    field: _clean_text(item.get(field)) or ""
                    for field in ("field", "degree", "description", "location", "duration")
                },
                # bool is an int subclass
                "gpa": gpa if isinstance(gpa, (int, float)) and not isinstance(gpa, bool) else None,
            })

        projects = [
            {
                "name": _clean_text(item.get("name")),
                "description": _clean_text(item.get("description")),
                "technologies": _clean_list(item.get("technologies")),
                "link": _clean_text(item.get("link")),
            }
            for item in _dicts(data.get("projects"))
            if _clean_text(item.get("name")) or _clean_text(item.get("description"))
        ]

        links = data.get("links") if isinstance(data.get("links"), dict) else {}
        languages = [
            {
                "language": _clean_text(item.get("language")),
                "level": _clean_text(item.get("level")) or "Conversational",
            }
            for item in _dicts(data.get("languages"))
            if _clean_text(item.get("language"))
        ]

        profile = ParsedProfile(
            name=_clean_text(data.get("name")) or "Unknown",
            email=_clean_text(data.get("email")),
            phone=_clean_text(data.get("phone")),
            location=_clean_text(data.get("location")),
            summary=_clean_text(data.get("summary")),
            skills=skills,
            certifications=certifications,
            experience=experience,
            education=education,
            projects=projects,
            links={field: _clean_text(links.get(field)) for field in ("linkedin", "portfolio", "github")},
            languages=languages,
        )

        if options.maxSkills:
            profile.skills = profile.skills[:options.maxSkills]
        if options.maxExperience:
            profile.experience = profile.experience[:options.maxExperience]
        if not options.includePersonalInfo:
            profile.email = None
            profile.phone = None
            profile.location = None
        return profile

    @classmethod
    def estimate_ats_score(cls, resume: Dict[str, Any], job_description: Union[str, ParsedJobDescription]) -> int:
        """Skills listed on the resume as a share of the required skills, capped at 100.

        Raw job text carries no required-skill list, so it scores 0, as does an empty list.
        """
        if not isinstance(job_description, ParsedJobDescription):
            return 0
        skills = resume.get("skills")
        skill_count = len(skills) if isinstance(skills, list) else 0
        return min(100, compute_score(skill_count, len(job_description.required_skills)))

    async def parse_resume_to_profile(self, resume_text: str, options: Optional[ProfileParseOptions] = None) -> ParsedProfile:
        prompt = _fill(
            RESUME_PROFILE_PROMPT,
            ProfileFormat=profile_structure,
            resumeData=re.sub(r"\s+", " ", resume_text).strip(),
        )
        llm_response = await self.dispatcher.generate(prompt)
        logger.info("Received resume profile parse (first 200 chars): %s", llm_response[:200].replace('\n', ' '))
        return self.clean_profile(self.parse_llm_response(llm_response), options)

    async def parse_job_description(self, raw_text: str, options: Optional[ParseOptions] = None) -> ParsedJobDescription:
        prompt = _fill(
            JOB_DESCRIPTION_PROMPT,
            JobDescriptionFormat=job_description_structure,
            jobDescription=self.preprocess_job_text(raw_text),
        )
        llm_response = await self.dispatcher.generate(prompt)
        logger.info("Received job description parse (first 200 chars): %s", llm_response[:200].replace('\n', ' '))
        return self.clean_job_description(self.parse_llm_response(llm_response), options)

    async def tailor_resume(self, job_description: Union[str, ParsedJobDescription], profile: Dict[str, Any]) -> dict:
        prompt = _fill(
            TAILOR_RESUME_PROMPT,
            profile=json.dumps(profile, indent=2),
            jobDescription=_as_prompt_json(job_description),
            ResumeFormat=resume_structure,
        )
        resume = self.parse_llm_response(await self.dispatcher.generate(prompt))
        if not isinstance(resume, dict):
            raise InvalidGenerationError("Tailored resume is not a JSON object")
        return resume

    async def generate_ats_report(self, job_description: str, resume_data: Union[str, Dict[str, Any]]) -> dict:
        # Extracted resume text goes in as-is; structured resumes as JSON.
        prompt = _fill(
            ATS_REPORT_PROMPT,
            jobDescription=job_description,
            resume=resume_data if isinstance(resume_data, str) else json.dumps(resume_data, indent=2),
            AtsReportFormat=ats_report_structure,
        )
        report = self.parse_llm_response(await self.dispatcher.generate(prompt.strip()))
        if not isinstance(report, dict):
            raise InvalidGenerationError("ATS report is not a JSON object")
        logger.info("Successfully parsed ATS JSON.")
        return report

    async def generate_cover_letter(self, job_description: str, resume_data: Dict[str, Any], tone: str = "professional") -> str:
        # Profiles may be nested under "resume" when they come from a saved tailored resume.
        profile_source = resume_data.get("resume") or resume_data
        prompt = _fill(
            COVER_LETTER_PROMPT,
            jobDescription=json.dumps(job_description),
            resume=json.dumps(profile_source),
            tone=tone,
        )
        cover_letter = (await self.dispatcher.generate(re.sub(r"\s+", " ", prompt).strip())).strip()
        if not cover_letter:
            raise InvalidGenerationError("Gemini returned no content")
        return cover_letter


def get_dispatcher() -> GenerationDispatcher:
    return GenerationDispatcher(
        CredentialPool(settings.gemini_api_keys),
        GeminiTransport.from_settings(settings),
    )


def get_generator(dispatcher: GenerationDispatcher = Depends(get_dispatcher)) -> ResumeTailorGenerator:
    return ResumeTailorGenerator(dispatcher)
