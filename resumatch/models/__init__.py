"""Data models for the ResuMatch API."""
from resumatch.models.analysis import (
    AnalyzeResponse,
    HealthResponse,
    RecommendationResponse,
)

__all__ = [
    "AnalyzeResponse",
    "HealthResponse",
    "RecommendationResponse",
]
