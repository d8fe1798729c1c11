"""
Resume analysis pipeline.

``analyze`` takes raw upload bytes, extracts the text and hands it to
``analyze_text``, which runs every stage from preprocessing to
recommendations and returns one read-only ``AnalysisResult``. The two
headline scores (job match and ATS readability) are computed independently
and never combined.
"""

from __future__ import annotations

import dataclasses
import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from resumatch.config import Settings, get_settings
from resumatch.exceptions import InsufficientJobDescriptionError
from resumatch.services.achievement_analyzer import AchievementAnalysis, analyze_achievements
from resumatch.services.ats_scorer import ATSBestPracticesResult, get_ats_scorer
from resumatch.services.formatting_analyzer import FormattingResult, analyze_formatting
from resumatch.services.keyword_optimizer import KeywordOptimization, analyze_keyword_density
from resumatch.services.recommendations import AnalysisGaps, Recommendation, generate
from resumatch.services.resume_parser import StructuredResume, parse
from resumatch.services.score_aggregator import ScoreBreakdown, aggregate, education_match, experience_match
from resumatch.services.similarity import (
    SimilarityScores,
    extract_keywords,
    find_keyword_match,
    similarity,
    weighted_keyword_match,
)
from resumatch.services.skills_matcher import SkillsMatcher, SkillsMatchResult
from resumatch.services.technical_extractor import JobRequirements, TermSet, extract_requirements, extract_technical
from resumatch.services.text_extractor import extract_text

logger = logging.getLogger(__name__)


def to_jsonable(value: Any) -> Any:
    """Convert nested dataclasses, enums and sets into plain JSON types."""
    if isinstance(value, TermSet):
        return value.to_dict()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {str(to_jsonable(k)): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (set, frozenset)):
        return sorted(to_jsonable(v) for v in value)
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value


@dataclass(frozen=True)
class AnalysisResult:
    """Everything one analysis produced. Read-only."""

    file_name: Optional[str]

    jd_match_score: int
    ats_score: int
    ats_readability_score: int

    similarity: SimilarityScores
    breakdown: ScoreBreakdown
    experience_match: float
    education_match: float

    skills: SkillsMatchResult
    job_requirements: JobRequirements
    resume_terms: TermSet

    job_keywords: tuple[str, ...]
    matched_keywords: tuple[str, ...]
    missing_keywords: tuple[str, ...]

    formatting: FormattingResult
    structured_data: StructuredResume
    ats_best_practices: ATSBestPracticesResult
    keyword_optimization: KeywordOptimization
    achievements: AchievementAnalysis

    recommendations: tuple[Recommendation, ...]

    def to_dict(self) -> dict[str, Any]:
        data = to_jsonable(self)
        data["breakdown"]["boost"]["total"] = self.breakdown.boost.total
        data["structured_data"]["skills"]["total"] = self.structured_data.skills.total
        data["achievements"]["has_quantifiable_results"] = self.achievements.has_quantifiable_results
        return data


def analyze_text(
    resume_text: str,
    job_description: str,
    *,
    file_name: Optional[str] = None,
    resume_bytes: Optional[bytes] = None,
    declared_format: Optional[str] = None,
    page_count: Optional[int] = None,
    settings: Optional[Settings] = None,
) -> AnalysisResult:
    """
    Run the matching pipeline on already extracted text.

    Args:
        resume_text: Plain resume text
        job_description: Job description text
        file_name: Uploaded file name, echoed in the result
        resume_bytes: Original file bytes, for the byte-level page count
        declared_format: "pdf", "docx", "doc" or "txt" when known
        page_count: Page count already read from the bytes
        settings: Overrides the cached application settings

    Returns:
        AnalysisResult. Equal inputs give equal results.
    """
    settings = settings or get_settings()
    resume_text = resume_text or ""
    job_description = job_description or ""

    requirements = extract_requirements(job_description)
    resume_terms = extract_technical(resume_text)

    scores = similarity(job_description, resume_text)

    job_keywords = extract_keywords(job_description, settings.keyword_count)
    resume_keywords = extract_keywords(resume_text, None)
    keyword_score = weighted_keyword_match(job_keywords, resume_keywords)

    resume_keyword_terms = [k.term for k in resume_keywords]
    resume_keyword_set = set(resume_keyword_terms)
    matched_keywords, missing_keywords = [], []
    for keyword in job_keywords:
        if find_keyword_match(keyword.term, resume_keyword_terms, resume_keyword_set):
            matched_keywords.append(keyword.term)
        else:
            missing_keywords.append(keyword.term)

    matcher = SkillsMatcher(full_text_scan=settings.skills_full_text_scan)
    skills = matcher.match(job_description, resume_text, requirements.terms, resume_terms)

    experience_score = experience_match(job_description, resume_text)
    education_score = education_match(job_description, resume_text)

    match = aggregate(
        scores,
        keyword_score,
        skills.match_ratio,
        experience_score,
        education_score,
        job_text=job_description,
        resume_text=resume_text,
    )

    structured = parse(resume_text)
    formatting = analyze_formatting(
        resume_bytes,
        resume_text,
        declared_format=declared_format,
        page_count=page_count,
        words_per_page=settings.words_per_page,
    )
    best_practices = get_ats_scorer().analyze(resume_text, structured)

    keyword_optimization = analyze_keyword_density(resume_text, [k.term for k in job_keywords])
    achievements = analyze_achievements(resume_text)

    recommendations = generate(AnalysisGaps(
        ats=best_practices,
        technical=skills.technical,
        full_text=skills.full_text,
        formatting=formatting,
        keyword_optimization=keyword_optimization,
    ))

    logger.info(
        f"Analysis complete: match {match.final_score}, ATS {best_practices.overall_score}, "
        f"readability {formatting.ats_readability_score}, {len(recommendations)} recommendations"
    )

    return AnalysisResult(
        file_name=file_name,
        jd_match_score=match.final_score,
        ats_score=best_practices.overall_score,
        ats_readability_score=formatting.ats_readability_score,
        similarity=scores,
        breakdown=match.breakdown,
        experience_match=experience_score,
        education_match=education_score,
        skills=skills,
        job_requirements=requirements,
        resume_terms=resume_terms,
        job_keywords=tuple(k.term for k in job_keywords),
        matched_keywords=tuple(matched_keywords),
        missing_keywords=tuple(missing_keywords),
        formatting=formatting,
        structured_data=structured,
        ats_best_practices=best_practices,
        keyword_optimization=keyword_optimization,
        achievements=achievements,
        recommendations=tuple(recommendations),
    )


def analyze(
    resume_bytes: bytes,
    declared_format: str,
    file_name: Optional[str],
    job_description: str,
    settings: Optional[Settings] = None,
) -> AnalysisResult:
    """
    Analyze an uploaded resume against a job description.

    Raises:
        InsufficientJobDescriptionError: the job description is too short
        UnsupportedFormatError, DocumentDecodeError, EmptyDocumentError:
            the resume text could not be extracted
    """
    settings = settings or get_settings()

    stripped = (job_description or "").strip()
    if len(stripped) < settings.min_job_description_length:
        raise InsufficientJobDescriptionError(
            f"Job description must be at least {settings.min_job_description_length} characters",
            length=len(stripped),
            minimum=settings.min_job_description_length,
        )

    start = time.perf_counter()
    document = extract_text(
        resume_bytes,
        declared_format,
        ocr_fallback=settings.ocr_fallback,
        ocr_dpi=settings.ocr_dpi,
    )
    logger.info(f"Extracted {len(document.text)} characters from {file_name or declared_format}")

    result = analyze_text(
        document.text,
        job_description,
        file_name=file_name,
        resume_bytes=resume_bytes,
        declared_format=declared_format,
        page_count=document.page_count,
        settings=settings,
    )
    logger.debug(f"Pipeline took {(time.perf_counter() - start) * 1000:.1f}ms")
    return result
