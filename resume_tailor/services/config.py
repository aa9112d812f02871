from typing import List
from pydantic_settings import BaseSettings
from pydantic import field_validator

class Settings(BaseSettings):
    PORT: int = 8000
    DEBUG: bool = False
    ALLOWED_ORIGINS: str = ""

    GEMINI_API_KEY: str = ""
    GEMINI_API_KEY2: str = ""
    GEMINI_API_KEY3: str = ""
    GEMINI_MODEL: str = "gemini-2.0-flash"
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"
    GEMINI_TEMPERATURE: float = 0.1
    GEMINI_TOP_P: float = 0.95
    GEMINI_TOP_K: int = 40
    GEMINI_TIMEOUT: float = 60.0

    REDIS_URL: str = "redis://localhost:6379/0"
    ARTIFACT_TTL_SECONDS: int = 60 * 60 * 24

    GENERATION_RATE_LIMIT: str = "20/minute"
    MAX_JOB_DESCRIPTION_CHARS: int = 50000

    @field_validator("ALLOWED_ORIGINS")
    def parse_allowed_origins(cls, v: str) -> List[str]:
        return v.split(",") if v else []

    @property
    def gemini_api_keys(self) -> List[str]:
        return [self.GEMINI_API_KEY, self.GEMINI_API_KEY2, self.GEMINI_API_KEY3]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"
        validate_default = True

settings = Settings()
