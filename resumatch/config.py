"""Application configuration using Pydantic settings."""
from functools import lru_cache
from typing import List
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Settings
    app_name: str = "ResuMatch"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server Settings
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS Settings
    cors_origins: List[str] = [
        "http://localhost:3000",
        "http://localhost:3001",
    ]
    cors_allow_credentials: bool = True
    cors_allow_methods: List[str] = ["*"]
    cors_allow_headers: List[str] = ["*"]

    # Upload Settings
    max_file_size_mb: int = 10
    min_job_description_length: int = 50

    # Text Extraction
    ocr_fallback: bool = True
    ocr_dpi: int = 300

    # Analysis
    keyword_count: int = 30
    skills_full_text_scan: bool = True
    words_per_page: int = 275

    class Config:
        env_prefix = "RESUMATCH_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
