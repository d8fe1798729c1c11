"""Keyword density analysis of a resume against the job's keywords."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Sequence

from resumatch.services.nlp_utils import TOKEN_PATTERN, count_term

logger = logging.getLogger(__name__)


OPTIMAL_MIN_DENSITY = 1.0
OPTIMAL_MAX_DENSITY = 3.0

MISSING_PENALTY = 50
OVER_OPTIMIZED_PENALTY = 20
OPTIMAL_BONUS = 30

PLACEMENT_SECTIONS = (
    ("summary", re.compile(r"summary|objective|profile|about", re.IGNORECASE)),
    ("experience", re.compile(r"experience|employment|work history", re.IGNORECASE)),
    ("skills", re.compile(r"skills|technical skills|competencies", re.IGNORECASE)),
    ("education", re.compile(r"education|academic|university|college", re.IGNORECASE)),
)
TECHNICAL_HINTS = ("javascript", "python", "react", "sql", "aws", "docker")
SOFT_HINTS = ("leadership", "communication", "teamwork", "collaboration")


@dataclass
class KeywordDensity:
    count: int
    density: float  # percent of all resume words
    is_optimal: bool
    is_over_optimized: bool
    is_missing: bool


@dataclass
class KeywordSuggestion:
    keyword: str
    priority: str  # high, medium or low
    message: str
    suggested_locations: list[str] = field(default_factory=list)


@dataclass
class KeywordOptimization:
    keywords: dict[str, KeywordDensity]
    optimization_score: int
    suggestions: list[KeywordSuggestion]
    missing_count: int = 0
    over_optimized_count: int = 0
    optimal_count: int = 0
    average_density: float = 0.0


def suggest_keyword_placement(resume_text: str, keyword: str) -> list[str]:
    lowered = keyword.lower()
    if any(hint in lowered for hint in TECHNICAL_HINTS):
        return ["Add to Skills section", "Mention in relevant work experience descriptions"]
    if any(hint in lowered for hint in SOFT_HINTS):
        return ["Add to Summary/Profile section", "Include in work experience achievements"]

    section = "experience"
    for line in resume_text.splitlines():
        for name, pattern in PLACEMENT_SECTIONS:
            if pattern.search(line):
                section = name
                break
    return [f"Add to {section.capitalize()} section", "Include naturally in work experience descriptions"]


def optimization_score(total: int, missing: int, over_optimized: int, optimal: int) -> int:
    if total == 0:
        return 100
    score = (
        100
        - missing / total * MISSING_PENALTY
        - over_optimized / total * OVER_OPTIMIZED_PENALTY
        + optimal / total * OPTIMAL_BONUS
    )
    return max(0, min(100, round(score)))


def analyze_keyword_density(resume_text: str, job_keywords: Sequence[str]) -> KeywordOptimization:
    """Report how often each job keyword occurs in the resume, and whether that is too little or too much."""
    total_words = len(TOKEN_PATTERN.findall((resume_text or "").lower()))

    keywords: dict[str, KeywordDensity] = {}
    suggestions: list[KeywordSuggestion] = []

    for keyword in dict.fromkeys(job_keywords):
        count = count_term(resume_text, keyword)
        density = count / total_words * 100 if total_words else 0.0
        analysis = KeywordDensity(
            count=count,
            density=round(density, 2),
            is_optimal=OPTIMAL_MIN_DENSITY <= density <= OPTIMAL_MAX_DENSITY,
            is_over_optimized=density > OPTIMAL_MAX_DENSITY,
            is_missing=count == 0,
        )
        keywords[keyword] = analysis

        if analysis.is_missing:
            suggestions.append(KeywordSuggestion(
                keyword=keyword,
                priority="high",
                message=f'Add "{keyword}" - this is a required keyword from the job description',
                suggested_locations=suggest_keyword_placement(resume_text, keyword),
            ))
        elif analysis.is_over_optimized:
            suggestions.append(KeywordSuggestion(
                keyword=keyword,
                priority="medium",
                message=f'Reduce "{keyword}" usage - current density ({density:.2f}%) exceeds optimal range (1-3%)',
            ))
        elif density < OPTIMAL_MIN_DENSITY:
            suggestions.append(KeywordSuggestion(
                keyword=keyword,
                priority="low",
                message=f'Consider adding more instances of "{keyword}" - current density ({density:.2f}%) is below optimal',
                suggested_locations=suggest_keyword_placement(resume_text, keyword),
            ))

    missing = sum(1 for k in keywords.values() if k.is_missing)
    over = sum(1 for k in keywords.values() if k.is_over_optimized)
    optimal = sum(1 for k in keywords.values() if k.is_optimal)
    average = round(sum(k.density for k in keywords.values()) / len(keywords), 2) if keywords else 0.0

    rank = {"high": 3, "medium": 2, "low": 1}
    return KeywordOptimization(
        keywords=keywords,
        optimization_score=optimization_score(len(keywords), missing, over, optimal),
        suggestions=sorted(suggestions, key=lambda s: -rank[s.priority]),
        missing_count=missing,
        over_optimized_count=over,
        optimal_count=optimal,
        average_density=average,
    )
