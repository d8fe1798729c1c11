"""
API Routes for ResuMatch.

Provides endpoints for:
- Analyzing an uploaded resume against a job description
- Health checks
"""
import time
from datetime import datetime
import logging

from fastapi import APIRouter, File, Form, UploadFile
from fastapi.concurrency import run_in_threadpool

from resumatch.models.analysis import (
    AnalyzeResponse,
    HealthResponse,
    RecommendationResponse,
)
from resumatch.services.analyzer import analyze
from resumatch.services.text_extractor import resolve_format
from resumatch.exceptions import FileTooLargeError
from resumatch.config import get_settings

logger = logging.getLogger(__name__)
router = APIRouter()

SUPPORTED_FORMATS = ["pdf", "docx", "doc", "txt"]


@router.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """
    Health check endpoint.

    Returns the service status, version, and the accepted upload formats.
    """
    settings = get_settings()

    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        timestamp=datetime.utcnow(),
        ocrEnabled=settings.ocr_fallback,
        supportedFormats=SUPPORTED_FORMATS,
    )


@router.post("/analyze", response_model=AnalyzeResponse, tags=["Analysis"])
async def analyze_resume(
    resume: UploadFile = File(..., description="Resume file (PDF, DOCX, DOC or TXT)"),
    job_description: str = Form(..., alias="jobDescription", description="Job description text"),
):
    """
    Analyze a resume against a job description.

    Multipart form fields:
    - resume: The resume file
    - jobDescription: The job description text

    Returns:
    - jdMatchScore: How well the resume matches the job (0-100)
    - atsScore: ATS best-practices score (0-100)
    - atsReadabilityScore: How easily an ATS can parse the file (0-100)
    - recommendations: Prioritized improvement suggestions
    - result: The full analysis breakdown
    """
    settings = get_settings()
    start_time = time.time()

    data = await resume.read()
    limit_bytes = settings.max_file_size_mb * 1024 * 1024
    if len(data) > limit_bytes:
        raise FileTooLargeError(
            f"File exceeds the {settings.max_file_size_mb}MB limit",
            size_bytes=len(data),
            limit_bytes=limit_bytes,
        )

    declared_format = resolve_format(resume.content_type, resume.filename)
    logger.info(f"Analyzing {resume.filename} ({declared_format}, {len(data)} bytes)")

    result = await run_in_threadpool(
        analyze,
        data,
        declared_format,
        resume.filename,
        job_description,
        settings,
    )

    analysis_time = (time.time() - start_time) * 1000

    return AnalyzeResponse(
        success=True,
        message="Resume analyzed successfully",
        fileName=result.file_name,
        jdMatchScore=result.jd_match_score,
        atsScore=result.ats_score,
        atsReadabilityScore=result.ats_readability_score,
        grade=result.ats_best_practices.grade,
        matchedKeywords=list(result.matched_keywords),
        missingKeywords=list(result.missing_keywords),
        recommendations=[
            RecommendationResponse(
                priority=r.priority,
                category=r.category,
                title=r.title,
                message=r.message,
                description=r.description,
                action=r.action,
                impact=r.impact,
                examples=r.examples,
            )
            for r in result.recommendations
        ],
        analysisTimeMs=round(analysis_time, 2),
        result=result.to_dict(),
    )
