"""
Multi-factor job-match scoring.

Combines semantic similarity, weighted keyword match, skill relevance,
experience and education into one 0-100 score. The non-linear skew and the
additive boost are separate pure functions so their constants can be tuned
without touching the weighting.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from resumatch.services.nlp_utils import contains_term
from resumatch.services.similarity import SimilarityScores
from resumatch.services.vocabulary import BOOST_TECH_KEYWORDS, CERTIFICATION_KEYWORDS, EDUCATION_LEVELS

logger = logging.getLogger(__name__)


WEIGHTS = {
    "semantic_similarity": 0.30,
    "keyword_match": 0.35,
    "skill_relevance": 0.20,
    "experience_match": 0.10,
    "education_match": 0.05,
}

REQUIRED_YEARS_PATTERN = re.compile(r"(\d+)\+?\s*(?:year|yr|years)\b", re.IGNORECASE)
STATED_YEARS_PATTERN = re.compile(r"(\d+)\+?\s*(?:years?|yrs?)\s*(?:of\s*)?(?:experience|exp)", re.IGNORECASE)

NEUTRAL_MATCH = 0.5
EXPERIENCE_FLOOR = 0.2
EDUCATION_FLOOR = 0.1

STRONG_SKILL_RATIO = 0.7
GOOD_SKILL_RATIO = 0.5
STRONG_SKILL_BOOST = 5
GOOD_SKILL_BOOST = 3
TECH_MATCH_BOOST = 1.5
MAX_TECH_BOOST = 8
CERTIFICATION_BOOST = 2


@dataclass
class BoostDetails:
    skill_boost: float = 0.0
    tech_boost: float = 0.0
    certification_boost: float = 0.0
    matched_tech_keywords: list[str] = field(default_factory=list)

    @property
    def total(self) -> float:
        return self.skill_boost + self.tech_boost + self.certification_boost


@dataclass
class ScoreBreakdown:
    """Normalized component values (0-1), their weighted contributions (0-100) and the boost."""
    components: dict[str, float]
    weighted: dict[str, float]
    boost: BoostDetails


@dataclass
class AggregateScore:
    final_score: int
    base_score: int
    breakdown: ScoreBreakdown


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def experience_match(job_text: str, resume_text: str) -> float:
    """Stated years of experience against the first years figure in the job text."""
    required = REQUIRED_YEARS_PATTERN.search(job_text or "")
    required_years = int(required.group(1)) if required else 0
    if required_years == 0:
        return NEUTRAL_MATCH

    stated = STATED_YEARS_PATTERN.search(resume_text or "")
    stated_years = int(stated.group(1)) if stated else 0
    if stated_years == 0:
        return EXPERIENCE_FLOOR

    return max(EXPERIENCE_FLOOR, min(1.0, stated_years / required_years))


def highest_education_level(text: str) -> int:
    levels = [level for term, level in EDUCATION_LEVELS.items() if contains_term(text, term)]
    return max(levels, default=0)


def education_match(job_text: str, resume_text: str) -> float:
    """Highest degree level in the resume against the highest one the job names."""
    required = highest_education_level(job_text or "")
    if required == 0:
        return NEUTRAL_MATCH

    held = highest_education_level(resume_text or "")
    if held == 0:
        return EDUCATION_FLOOR

    return max(EDUCATION_FLOOR, min(1.0, held / required))


def apply_distribution_skew(score: float) -> float:
    """Spread the distribution: damp low scores, reward high ones."""
    if score < 50:
        return score * 0.95
    if score < 80:
        return score
    return min(100.0, score * 1.05)


def apply_intelligent_boost(
    score: float,
    skill_match_ratio: float,
    job_text: str,
    resume_text: str,
) -> tuple[float, BoostDetails]:
    """Additive boost for strong skills, shared core technologies and certifications. Capped at 100."""
    details = BoostDetails()

    if skill_match_ratio > STRONG_SKILL_RATIO:
        details.skill_boost = STRONG_SKILL_BOOST
    elif skill_match_ratio > GOOD_SKILL_RATIO:
        details.skill_boost = GOOD_SKILL_BOOST

    details.matched_tech_keywords = [
        tech for tech in BOOST_TECH_KEYWORDS
        if contains_term(job_text, tech) and contains_term(resume_text, tech)
    ]
    details.tech_boost = min(len(details.matched_tech_keywords) * TECH_MATCH_BOOST, MAX_TECH_BOOST)

    job_lower = (job_text or "").lower()
    if "certification" in job_lower or "certified" in job_lower:
        resume_lower = (resume_text or "").lower()
        details.certification_boost = sum(
            CERTIFICATION_BOOST for keyword in CERTIFICATION_KEYWORDS if keyword in resume_lower
        )

    return min(100.0, score + details.total), details


def aggregate(
    similarity: SimilarityScores,
    keyword_match: float,
    skills: float,
    experience_score: float,
    education_score: float,
    *,
    job_text: str,
    resume_text: str,
) -> AggregateScore:
    """
    Combine the match signals into the job-description match score.

    Args:
        similarity: Semantic similarity scores; ``combined`` is used
        keyword_match: Weighted keyword match, 0-100
        skills: Skill match ratio, 0-1
        experience_score: Experience match, 0-1
        education_score: Education match, 0-1
        job_text: Job description, for the boost
        resume_text: Resume text, for the boost
    """
    components = {
        "semantic_similarity": _clamp(similarity.combined),
        "keyword_match": _clamp(keyword_match / 100),
        "skill_relevance": _clamp(skills),
        "experience_match": _clamp(experience_score),
        "education_match": _clamp(education_score),
    }
    weighted = {name: components[name] * WEIGHTS[name] * 100 for name in WEIGHTS}

    base_score = round(apply_distribution_skew(sum(weighted.values())))
    boosted, boost = apply_intelligent_boost(base_score, components["skill_relevance"], job_text, resume_text)
    final_score = round(min(100.0, boosted))

    logger.debug(
        "Match score: base %d, boost +%.1f, final %d (%s)",
        base_score,
        boost.total,
        final_score,
        ", ".join(f"{name}={value:.1f}" for name, value in weighted.items()),
    )

    return AggregateScore(
        final_score=final_score,
        base_score=base_score,
        breakdown=ScoreBreakdown(components=components, weighted=weighted, boost=boost),
    )
