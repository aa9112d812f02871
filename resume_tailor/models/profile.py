from typing import List, Optional
from pydantic import BaseModel, Field

SKILL_CATEGORIES = ("Soft Skill", "Hard Skill", "Technical Skill")


# ---------- Profile Sections ----------
class ProfileSkill(BaseModel):
    skill: str
    category: Optional[str] = None
    level: str = "Intermediate"


class ProfileCertification(BaseModel):
    name: str
    issuer: str = ""
    issue_date: str = ""
    expiry_date: str = ""
    credential_id: str = ""
    credential_url: str = ""
    year: str = ""


class ProfileExperience(BaseModel):
    title: str
    company: str = ""
    duration: str = ""
    location: str = ""
    responsibilities: List[str] = Field(default_factory=list)


class ProfileEducation(BaseModel):
    institution: str
    field: str = ""
    degree: str = ""
    description: str = ""
    location: str = ""
    duration: str = ""
    gpa: Optional[float] = None


class ProfileProject(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    technologies: List[str] = Field(default_factory=list)
    link: Optional[str] = None


class ProfileLinks(BaseModel):
    linkedin: Optional[str] = None
    portfolio: Optional[str] = None
    github: Optional[str] = None


class ProfileLanguage(BaseModel):
    language: str
    level: str = "Conversational"


# ---------- Parsed Profile ----------
class ParsedProfile(BaseModel):
    name: str = "Unknown"
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    summary: Optional[str] = None
    skills: List[ProfileSkill] = Field(default_factory=list)
    certifications: List[ProfileCertification] = Field(default_factory=list)
    experience: List[ProfileExperience] = Field(default_factory=list)
    education: List[ProfileEducation] = Field(default_factory=list)
    projects: List[ProfileProject] = Field(default_factory=list)
    links: ProfileLinks = Field(default_factory=ProfileLinks)
    languages: List[ProfileLanguage] = Field(default_factory=list)


# ---------- Parse Options ----------
class ProfileParseOptions(BaseModel):
    includePersonalInfo: bool = True
    maxSkills: Optional[int] = Field(default=None, ge=1)
    maxExperience: Optional[int] = Field(default=None, ge=1)
