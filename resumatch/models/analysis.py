"""Request/response models for the analysis API."""
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response."""
    status: Literal["healthy", "unhealthy"]
    version: str
    timestamp: datetime
    ocr_enabled: bool = Field(alias="ocrEnabled")
    supported_formats: List[str] = Field(alias="supportedFormats", default_factory=list)

    class Config:
        populate_by_name = True


class RecommendationResponse(BaseModel):
    """One prioritized improvement suggestion."""
    priority: Literal["critical", "high", "medium", "low"]
    category: str
    title: str
    message: str
    description: str = ""
    action: str = ""
    impact: str = ""
    examples: List[str] = Field(default_factory=list)


class AnalyzeResponse(BaseModel):
    """Complete resume-vs-job-description analysis response."""
    success: bool
    message: str
    file_name: Optional[str] = Field(None, alias="fileName")
    jd_match_score: int = Field(..., alias="jdMatchScore", ge=0, le=100)
    ats_score: int = Field(..., alias="atsScore", ge=0, le=100)
    ats_readability_score: int = Field(..., alias="atsReadabilityScore", ge=0, le=100)
    grade: str
    matched_keywords: List[str] = Field(alias="matchedKeywords", default_factory=list)
    missing_keywords: List[str] = Field(alias="missingKeywords", default_factory=list)
    recommendations: List[RecommendationResponse] = Field(default_factory=list)
    analysis_time_ms: Optional[float] = Field(None, alias="analysisTimeMs")
    result: Dict[str, Any] = Field(default_factory=dict, description="Full analysis breakdown")

    class Config:
        populate_by_name = True
