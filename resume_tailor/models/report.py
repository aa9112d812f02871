from typing import Tuple
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# ---------- Lexical Match Report ----------
class MatchReport(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    score: int = Field(ge=0, le=100)
    matched_keywords: Tuple[str, ...]
    # First 10 gaps, for display.
    missing_keywords: Tuple[str, ...]
    all_missing_keywords: Tuple[str, ...]
    strengths: Tuple[str, ...]
    improvements: Tuple[str, ...]
    recommendations: Tuple[str, ...]
    summary: str

    @property
    def job_keyword_count(self) -> int:
        return len(self.matched_keywords) + len(self.all_missing_keywords)
