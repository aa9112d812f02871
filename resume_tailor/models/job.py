from typing import List, Optional
from pydantic import BaseModel, Field


# ---------- Parsed Job Description ----------
class ParsedJobDescription(BaseModel):
    title: str = "Unknown Position"
    company: Optional[str] = None
    location: Optional[str] = None
    employment_type: Optional[str] = None
    experience_level: Optional[str] = None
    salary_range: Optional[str] = None
    required_skills: List[str] = Field(default_factory=list)
    preferred_skills: List[str] = Field(default_factory=list)
    responsibilities: List[str] = Field(default_factory=list)
    qualifications: List[str] = Field(default_factory=list)
    benefits: List[str] = Field(default_factory=list)
    department: Optional[str] = None


# ---------- Parse Options ----------
class ParseOptions(BaseModel):
    includeCompany: bool = True
    includeSalary: bool = True
    maxSkills: Optional[int] = Field(default=None, ge=1)
    maxResponsibilities: Optional[int] = Field(default=None, ge=1)
