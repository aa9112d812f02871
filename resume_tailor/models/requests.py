from typing import Any, Dict, Union
from pydantic import BaseModel, Field
from resume_tailor.models.job import ParsedJobDescription, ParseOptions
from resume_tailor.models.profile import ProfileParseOptions


# ---------- Lexical ATS ----------
class LexicalScoreRequest(BaseModel):
    resumeText: str = ""
    jobDescription: str = ""


# ---------- LLM-backed endpoints ----------
class JobDescriptionParseRequest(BaseModel):
    rawText: str
    options: ParseOptions = Field(default_factory=ParseOptions)


class ResumeProfileParseRequest(BaseModel):
    parsedResumeData: str
    options: ProfileParseOptions = Field(default_factory=ProfileParseOptions)


class AtsScoreRequest(BaseModel):
    jobDescription: str
    # Extracted resume text, or structured resume JSON.
    resumeData: Union[str, Dict[str, Any]]


class TailorResumeRequest(BaseModel):
    # Raw posting text, or the output of /job-description/parse.
    jobDescription: Union[str, ParsedJobDescription]
    profile: Dict[str, Any]


class CoverLetterRequest(BaseModel):
    jobDescription: str
    resumeData: Dict[str, Any]
    tone: str = "professional"
