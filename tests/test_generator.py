import asyncio
import json

import pytest

from resume_tailor.models.job import ParsedJobDescription, ParseOptions
from resume_tailor.models.profile import ProfileParseOptions
from resume_tailor.services.dispatcher import CredentialPool, GenerationDispatcher, Success
from resume_tailor.services.errors import InvalidGenerationError
from resume_tailor.services.generator import ResumeTailorGenerator

from tests.fakes import ScriptedTransport


def make_generator(text):
    transport = ScriptedTransport(default=Success(text=text))
    dispatcher = GenerationDispatcher(CredentialPool(["key"]), transport)
    return ResumeTailorGenerator(dispatcher), transport


def test_parse_llm_response_strips_fences_and_chatter():
    raw = 'Sure! Here it is:\n```json\n{"score": 90, "tags": ["a"]}\n```'
    assert ResumeTailorGenerator.parse_llm_response(raw) == {"score": 90, "tags": ["a"]}


def test_parse_llm_response_rejects_non_json():
    with pytest.raises(InvalidGenerationError):
        ResumeTailorGenerator.parse_llm_response("I cannot help with that.")


def test_preprocess_job_text_normalizes_whitespace():
    raw = "Senior   Engineer\r\n\r\n\r\nPython\t and   Go  "
    assert ResumeTailorGenerator.preprocess_job_text(raw) == "Senior Engineer\nPython and Go"


def test_clean_job_description_trims_and_deduplicates():
    parsed = ResumeTailorGenerator.clean_job_description({
        "title": "  Backend Engineer ",
        "company": "  ",
        "location": "Berlin",
        "salary_range": 120000,
        "required_skills": [" Python ", "Python", "", 42, "SQL"],
        "benefits": "not a list",
    })
    assert parsed.title == "Backend Engineer"
    assert parsed.company is None
    assert parsed.location == "Berlin"
    assert parsed.salary_range is None
    assert parsed.required_skills == ["Python", "SQL"]
    assert parsed.benefits == []


def test_clean_job_description_defaults_title():
    assert ResumeTailorGenerator.clean_job_description({}).title == "Unknown Position"


def test_clean_job_description_applies_options():
    options = ParseOptions(includeCompany=False, includeSalary=False, maxSkills=1, maxResponsibilities=2)
    parsed = ResumeTailorGenerator.clean_job_description({
        "company": "Acme",
        "salary_range": "$100k",
        "required_skills": ["Python", "SQL"],
        "preferred_skills": ["Go", "Rust"],
        "responsibilities": ["Build", "Ship", "Support"],
    }, options)
    assert parsed.company is None
    assert parsed.salary_range is None
    assert parsed.required_skills == ["Python"]
    assert parsed.preferred_skills == ["Go"]
    assert parsed.responsibilities == ["Build", "Ship"]


def test_clean_job_description_rejects_lists():
    with pytest.raises(InvalidGenerationError):
        ResumeTailorGenerator.clean_job_description(["title"])


def test_parse_job_description_builds_prompt_and_cleans():
    generator, transport = make_generator(json.dumps({"title": "Data Engineer", "required_skills": ["Spark"]}))
    parsed = asyncio.run(generator.parse_job_description("We need a Data Engineer with Spark."))
    assert parsed.title == "Data Engineer"
    assert parsed.required_skills == ["Spark"]
    prompt = transport.calls[0][0]
    assert "We need a Data Engineer with Spark." in prompt
    assert '"required_skills"' in prompt
    assert "${" not in prompt


def test_tailor_resume_embeds_profile_and_job():
    generator, transport = make_generator('{"name": "Jane Doe", "skills": ["Python"]}')
    resume = asyncio.run(generator.tailor_resume("Python developer", {"full_name": "Jane Doe"}))
    assert resume == {"name": "Jane Doe", "skills": ["Python"]}
    prompt = transport.calls[0][0]
    assert '"full_name": "Jane Doe"' in prompt
    assert '"Python developer"' in prompt


def test_tailor_resume_requires_object():
    generator, _ = make_generator('["not", "an", "object"]')
    with pytest.raises(InvalidGenerationError):
        asyncio.run(generator.tailor_resume("job", {}))


def test_generate_ats_report_returns_parsed_json():
    generator, _ = make_generator('```json\n{"overall_fit_score_percentage": 72}\n```')
    report = asyncio.run(generator.generate_ats_report("job text", {"name": "Jane"}))
    assert report == {"overall_fit_score_percentage": 72}


def test_generate_cover_letter_uses_nested_resume_and_tone():
    generator, transport = make_generator("  Dear hiring manager,\n\nI am excited...  ")
    letter = asyncio.run(generator.generate_cover_letter("job", {"id": "r1", "resume": {"name": "Jane"}}, tone="warm"))
    assert letter == "Dear hiring manager,\n\nI am excited..."
    prompt = transport.calls[0][0]
    assert "Tone: warm" in prompt
    assert '{"name": "Jane"}' in prompt
    assert "\n" not in prompt


def test_generate_cover_letter_rejects_blank_output():
    generator, _ = make_generator("   ")
    with pytest.raises(InvalidGenerationError):
        asyncio.run(generator.generate_cover_letter("job", {"name": "Jane"}))


def test_extract_text_from_pdf_rejects_garbage():
    with pytest.raises(ValueError):
        ResumeTailorGenerator.extract_text_from_pdf(b"definitely not a pdf")


def test_tailor_resume_accepts_parsed_job_description():
    generator, transport = make_generator('{"name": "Jane Doe"}')
    job = ParsedJobDescription(title="Backend Engineer", required_skills=["Python"])
    asyncio.run(generator.tailor_resume(job, {"name": "Jane"}))
    prompt = transport.calls[0][0]
    assert '"title": "Backend Engineer"' in prompt
    assert '"Python"' in prompt


def test_generate_ats_report_embeds_resume_text_verbatim():
    generator, transport = make_generator('{"overall_fit_score_percentage": 60}')
    asyncio.run(generator.generate_ats_report("Python Django", "Jane Doe\nPython developer\n"))
    prompt = transport.calls[0][0]
    assert "CANDIDATE_RESUME: Jane Doe\nPython developer" in prompt
    assert json.dumps("Jane Doe\nPython developer\n") not in prompt


def test_estimate_ats_score_uses_required_skills():
    job = ParsedJobDescription(required_skills=["Python", "Django", "SQL", "AWS"])
    assert ResumeTailorGenerator.estimate_ats_score({"skills": ["Python", "Go", "SQL"]}, job) == 75
    many = {"skills": [f"skill-{i}" for i in range(9)]}
    assert ResumeTailorGenerator.estimate_ats_score(many, job) == 100


def test_estimate_ats_score_is_zero_without_required_skills():
    resume = {"skills": ["Python"]}
    assert ResumeTailorGenerator.estimate_ats_score(resume, ParsedJobDescription(title="Engineer")) == 0
    assert ResumeTailorGenerator.estimate_ats_score(resume, "Python developer") == 0
    assert ResumeTailorGenerator.estimate_ats_score({"skills": "Python"}, ParsedJobDescription(required_skills=["Python"])) == 0


def test_clean_profile_trims_and_nulls_blanks():
    profile = ResumeTailorGenerator.clean_profile({
        "name": "  Jane Doe ",
        "email": " jane@example.com ",
        "phone": "   ",
        "location": 42,
        "links": {"linkedin": " https://linkedin.com/in/jane ", "github": ""},
    })
    assert profile.name == "Jane Doe"
    assert profile.email == "jane@example.com"
    assert profile.phone is None
    assert profile.location is None
    assert profile.summary is None
    assert profile.links.linkedin == "https://linkedin.com/in/jane"
    assert profile.links.github is None
    assert profile.links.portfolio is None


def test_clean_profile_defaults_name():
    assert ResumeTailorGenerator.clean_profile({"name": "  "}).name == "Unknown"


def test_clean_profile_skills_categories_levels_and_duplicates():
    profile = ResumeTailorGenerator.clean_profile({
        "skills": [
            {"skill": " Python ", "category": "Technical Skill", "level": " Expert "},
            {"skill": "python", "category": "Hard Skill"},
            {"skill": "Teamwork", "category": "People Skill"},
            {"skill": "  ", "category": "Soft Skill"},
            "not a dict",
        ],
    })
    assert [s.model_dump() for s in profile.skills] == [
        {"skill": "Python", "category": "Technical Skill", "level": "Expert"},
        {"skill": "Teamwork", "category": None, "level": "Intermediate"},
    ]


def test_clean_profile_drops_entries_without_key_field():
    profile = ResumeTailorGenerator.clean_profile({
        "experience": [
            {"title": " Engineer ", "company": " Acme ", "responsibilities": [" Built APIs ", "", 3]},
            {"company": "No Title Inc"},
        ],
        "education": [
            {"institution": " MIT ", "degree": "BSc", "gpa": 3.8},
            {"degree": "MSc"},
            {"institution": "Stanford", "gpa": "3.9"},
        ],
        "certifications": [{"name": " AWS SA ", "issuer": None}, {"issuer": "Nobody"}],
        "projects": [
            {"name": " Tracker ", "technologies": [" React ", "React", ""], "link": " "},
            {"description": "Side project"},
            {"link": "https://example.com"},
        ],
        "languages": [{"language": "English"}, {"level": "Native"}],
    })
    assert len(profile.experience) == 1
    assert profile.experience[0].title == "Engineer"
    assert profile.experience[0].company == "Acme"
    assert profile.experience[0].duration == ""
    assert profile.experience[0].responsibilities == ["Built APIs"]

    assert [e.institution for e in profile.education] == ["MIT", "Stanford"]
    assert profile.education[0].gpa == 3.8
    assert profile.education[1].gpa is None
    assert profile.education[1].field == ""

    assert [c.name for c in profile.certifications] == ["AWS SA"]
    assert profile.certifications[0].issuer == ""

    assert len(profile.projects) == 2
    assert profile.projects[0].name == "Tracker"
    assert profile.projects[0].technologies == ["React"]
    assert profile.projects[0].link is None
    assert profile.projects[1].name is None
    assert profile.projects[1].description == "Side project"

    assert [(l.language, l.level) for l in profile.languages] == [("English", "Conversational")]


def test_clean_profile_applies_options():
    options = ProfileParseOptions(includePersonalInfo=False, maxSkills=1, maxExperience=1)
    profile = ResumeTailorGenerator.clean_profile({
        "name": "Jane",
        "email": "jane@example.com",
        "phone": "555-0100",
        "location": "Berlin",
        "skills": [{"skill": "Python"}, {"skill": "SQL"}],
        "experience": [{"title": "Engineer"}, {"title": "Intern"}],
    }, options)
    assert profile.name == "Jane"
    assert (profile.email, profile.phone, profile.location) == (None, None, None)
    assert [s.skill for s in profile.skills] == ["Python"]
    assert [e.title for e in profile.experience] == ["Engineer"]


def test_clean_profile_rejects_lists():
    with pytest.raises(InvalidGenerationError):
        ResumeTailorGenerator.clean_profile([{"name": "Jane"}])


def test_parse_resume_to_profile_builds_prompt_and_cleans():
    generator, transport = make_generator(json.dumps({"name": "Jane Doe", "skills": [{"skill": "Python"}]}))
    profile = asyncio.run(generator.parse_resume_to_profile("Jane Doe\n\n  Python   developer"))
    assert profile.name == "Jane Doe"
    assert profile.skills[0].level == "Intermediate"
    prompt = transport.calls[0][0]
    assert "Resume Data:" in prompt
    assert "Jane Doe Python developer" in prompt
    assert '"credential_url"' in prompt
    assert "${" not in prompt
