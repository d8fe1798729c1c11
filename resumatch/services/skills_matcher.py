"""
Technical and skills matching between a job description and a resume.

``SkillsMatcher`` runs two strategies:
- category: compares the vocabulary TermSets of both documents per category,
  with edit-distance and containment fallbacks
- full-text scan: looks for every required skill (category terms plus a
  catalog of common skills) directly in the resume text, using a variation
  table and capturing surrounding context

When both run, the full-text scan provides the skill relevance score and the
category comparison stays available for the per-category breakdown and the
missing-requirement severities.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Optional

from resumatch.services.nlp_utils import TERM_CHARS, contains_term, string_similarity
from resumatch.services.technical_extractor import TermSet, extract_technical
from resumatch.services.vocabulary import (
    CATEGORY_SKILL_LABELS,
    CATEGORY_WEIGHTS,
    SKILL_CATALOG,
    SKILL_VARIATIONS,
    TECH_FAMILIES,
    TechCategory,
)

logger = logging.getLogger(__name__)


SIMILARITY_THRESHOLD = 0.7
PREFIX_BONUS = 0.025
CONTAINMENT_CONFIDENCE = 0.8

PARTIAL_VARIATION_CONFIDENCE = 0.9
WORD_CONTAINMENT_CONFIDENCE = 0.75
MIN_FUZZY_SKILL_LENGTH = 5
MIN_FUZZY_WORD_LENGTH = 3
MIN_CONTAINED_WORD_LENGTH = 4
CONTEXT_RADIUS = 50

NEUTRAL_SKILL_RELEVANCE = 50.0

# Severity bucket and requirement type of an unmatched category term
MISSING_SEVERITY = {
    TechCategory.PROGRAMMING_LANGUAGES: ("critical", "programmingLanguage"),
    TechCategory.FRAMEWORKS: ("important", "framework"),
    TechCategory.TOOLS: ("nice_to_have", "tool"),
}

# Version or ".js" suffix glued to a skill name: react.js, reactjs, python3, angular 2
VERSION_SUFFIX = r"(?:\.?js|[ \t]?\d+(?:\.\d+)*)"

WORD_PUNCTUATION = ".,;:!?()[]{}\"'|/"


@dataclass
class TermMatch:
    required_term: str
    found_term: str
    match_type: str  # "exact" or "fuzzy"
    confidence: float


@dataclass
class CategoryMatch:
    matched: list[TermMatch] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)
    match_rate: float = 0.0


@dataclass
class MissingRequirements:
    critical: list[dict] = field(default_factory=list)
    important: list[dict] = field(default_factory=list)
    nice_to_have: list[dict] = field(default_factory=list)


@dataclass
class TechnicalMatch:
    per_category: dict[str, CategoryMatch]
    missing_requirements: MissingRequirements
    related_matches: list[dict]
    overall_score: float
    job_terms: TermSet
    resume_terms: TermSet


@dataclass
class RequiredSkill:
    term: str
    category: str
    priority: str


@dataclass
class SkillMatch:
    skill: str
    category: str
    priority: str
    found: bool = False
    confidence: float = 0.0
    matched_variation: Optional[str] = None
    context: Optional[str] = None


@dataclass
class FullTextSkillsMatch:
    overall_match_score: int
    total_required: int
    matched: int
    skill_matches: list[SkillMatch] = field(default_factory=list)
    missing_skills: list[str] = field(default_factory=list)
    category_scores: dict[str, dict] = field(default_factory=dict)

    def missing_by_priority(self, priority: str) -> list[str]:
        return [m.skill for m in self.skill_matches if not m.found and m.priority == priority]


@dataclass
class SkillsMatchResult:
    technical: TechnicalMatch
    full_text: Optional[FullTextSkillsMatch]
    skill_relevance: float  # 0-100
    match_ratio: float  # 0-1
    source: str  # "full_text", "category" or "neutral"


# ---------------------------------------------------------------------------
# Category strategy
# ---------------------------------------------------------------------------

def _find_fuzzy_match(term: str, candidates: list[str]) -> Optional[TermMatch]:
    best: Optional[TermMatch] = None
    for candidate in candidates:
        score = string_similarity(term, candidate, prefix_bonus=PREFIX_BONUS)
        if score >= SIMILARITY_THRESHOLD and (best is None or score > best.confidence):
            best = TermMatch(term, candidate, "fuzzy", score)
    if best:
        return best

    # "github" in "github actions", never "java" in "javascript"
    for candidate in candidates:
        if contains_term(candidate, term) or contains_term(term, candidate):
            return TermMatch(term, candidate, "fuzzy", CONTAINMENT_CONFIDENCE)
    return None


def match_category(job_terms, resume_terms) -> CategoryMatch:
    """Match each job term against the resume terms of the same category."""
    result = CategoryMatch()
    resume_lower = sorted({t.lower() for t in resume_terms})
    job_sorted = sorted(job_terms)

    for term in job_sorted:
        lowered = term.lower()
        if lowered in resume_lower:
            result.matched.append(TermMatch(term, lowered, "exact", 1.0))
            continue
        fuzzy = _find_fuzzy_match(lowered, resume_lower)
        if fuzzy:
            fuzzy.required_term = term
            result.matched.append(fuzzy)
        else:
            result.missing.append(term)

    result.match_rate = len(result.matched) / len(job_sorted) * 100 if job_sorted else 0.0
    return result


def _technical_score(per_category: dict[str, CategoryMatch], job_terms: TermSet) -> float:
    weighted = 0.0
    total_weight = 0.0
    for category in TechCategory:
        if not job_terms.by_category(category):
            continue
        weight = CATEGORY_WEIGHTS[category]
        weighted += per_category[category.value].match_rate * weight
        total_weight += weight
    return round(weighted / total_weight, 1) if total_weight else 0.0


def _missing_requirements(per_category: dict[str, CategoryMatch]) -> MissingRequirements:
    missing = MissingRequirements()
    for category, (bucket, requirement_type) in MISSING_SEVERITY.items():
        for term in per_category[category.value].missing:
            getattr(missing, bucket).append({"type": requirement_type, "term": term})
    return missing


def _related_matches(job_terms: TermSet, resume_terms: TermSet) -> list[dict]:
    job_tech = sorted(job_terms.programming_languages | job_terms.frameworks)
    resume_tech = resume_terms.programming_languages | resume_terms.frameworks

    related = []
    for required in job_tech:
        for candidate in TECH_FAMILIES.get(required, ()):
            if candidate in resume_tech:
                related.append({"required": required, "found": candidate, "relationship": "related"})
    return related


# ---------------------------------------------------------------------------
# Full-text strategy
# ---------------------------------------------------------------------------

def skill_variations(skill: str) -> list[str]:
    """Spellings a skill may appear under in a resume."""
    lowered = skill.lower()
    variations = [lowered, *SKILL_VARIATIONS.get(lowered, ())]
    if "." in lowered:
        variations.append(lowered.replace(".", ""))
        variations.append(lowered.replace(".", " ").strip())
    if " " in lowered:
        variations.append(re.sub(r"\s+", "", lowered))
        variations.append(re.sub(r"\s+", "-", lowered))
    return [v for v in dict.fromkeys(variations) if v]


@lru_cache(maxsize=2048)
def _versioned_pattern(variation: str) -> re.Pattern:
    return re.compile(
        rf"(?<![{TERM_CHARS}]){re.escape(variation)}{VERSION_SUFFIX}(?![{TERM_CHARS}])",
        re.IGNORECASE,
    )


def _context(text: str, fragment: str) -> Optional[str]:
    index = text.lower().find(fragment.lower())
    if index == -1:
        return None
    start = max(0, index - CONTEXT_RADIUS)
    end = min(len(text), index + len(fragment) + CONTEXT_RADIUS)
    return text[start:end].strip()


def _resume_words(resume_text: str) -> list[str]:
    words = (w.strip(WORD_PUNCTUATION) for w in resume_text.lower().split())
    return [w for w in dict.fromkeys(words) if len(w) >= MIN_FUZZY_WORD_LENGTH]


def _fuzzy_word_match(skill: str, words: list[str]) -> Optional[tuple[str, float]]:
    if len(skill) < MIN_FUZZY_SKILL_LENGTH:
        return None
    for word in words:
        score = string_similarity(skill, word)
        if score > SIMILARITY_THRESHOLD:
            return word, score
    for word in words:
        if len(word) >= MIN_CONTAINED_WORD_LENGTH and (skill in word or word in skill):
            return word, WORD_CONTAINMENT_CONFIDENCE
    return None


def required_skills(job_text: str, job_terms: TermSet) -> list[RequiredSkill]:
    """Category terms first (with their priority), then catalog skills found in the job text."""
    skills: list[RequiredSkill] = []
    seen: set[str] = set()
    for category in TechCategory:
        label, priority = CATEGORY_SKILL_LABELS[category]
        for term in sorted(job_terms.by_category(category)):
            if term not in seen:
                seen.add(term)
                skills.append(RequiredSkill(term, label, priority))

    for skill in SKILL_CATALOG:
        if skill not in seen and contains_term(job_text, skill):
            seen.add(skill)
            skills.append(RequiredSkill(skill, "other", "medium"))
    return skills


def check_skill(skill: RequiredSkill, resume_text: str, words: list[str]) -> SkillMatch:
    match = SkillMatch(skill=skill.term, category=skill.category, priority=skill.priority)

    for variation in skill_variations(skill.term):
        if contains_term(resume_text, variation):
            confidence = 1.0
        elif _versioned_pattern(variation).search(resume_text):
            confidence = PARTIAL_VARIATION_CONFIDENCE
        else:
            continue
        match.found = True
        match.confidence = confidence
        match.matched_variation = variation
        match.context = _context(resume_text, variation)
        return match

    fuzzy = _fuzzy_word_match(skill.term.lower(), words)
    if fuzzy:
        word, confidence = fuzzy
        match.found = True
        match.confidence = confidence
        match.matched_variation = word
        match.context = _context(resume_text, word)
    return match


def _category_scores(matches: list[SkillMatch]) -> dict[str, dict]:
    totals: dict[str, dict] = {}
    for m in matches:
        entry = totals.setdefault(m.category, {"matched": 0, "total": 0})
        entry["total"] += 1
        if m.found:
            entry["matched"] += 1
    for entry in totals.values():
        entry["match_rate"] = round(entry["matched"] / entry["total"] * 100)
    return totals


class SkillsMatcher:
    """
    Single entry point for skill matching.

    Precedence: the full-text scan score is the skill relevance whenever the
    scan is enabled and the job lists at least one required skill; otherwise
    the category score is used when the job names any category term; with
    neither, relevance is a neutral 50.
    """

    def __init__(self, full_text_scan: bool = True):
        self.full_text_scan = full_text_scan

    def match_technical(
        self,
        job_text: str,
        resume_text: str,
        job_terms: Optional[TermSet] = None,
        resume_terms: Optional[TermSet] = None,
    ) -> TechnicalMatch:
        job_terms = job_terms if job_terms is not None else extract_technical(job_text)
        resume_terms = resume_terms if resume_terms is not None else extract_technical(resume_text)

        per_category = {
            category.value: match_category(
                job_terms.by_category(category),
                resume_terms.by_category(category),
            )
            for category in TechCategory
        }

        return TechnicalMatch(
            per_category=per_category,
            missing_requirements=_missing_requirements(per_category),
            related_matches=_related_matches(job_terms, resume_terms),
            overall_score=_technical_score(per_category, job_terms),
            job_terms=job_terms,
            resume_terms=resume_terms,
        )

    def scan_skills(
        self,
        job_text: str,
        resume_text: str,
        job_terms: Optional[TermSet] = None,
    ) -> FullTextSkillsMatch:
        job_terms = job_terms if job_terms is not None else extract_technical(job_text)
        skills = required_skills(job_text, job_terms)
        words = _resume_words(resume_text)

        matches = [check_skill(skill, resume_text, words) for skill in skills]
        matched = [m for m in matches if m.found]

        return FullTextSkillsMatch(
            overall_match_score=round(len(matched) / len(skills) * 100) if skills else 0,
            total_required=len(skills),
            matched=len(matched),
            skill_matches=matches,
            missing_skills=[m.skill for m in matches if not m.found],
            category_scores=_category_scores(matches),
        )

    def match(
        self,
        job_text: str,
        resume_text: str,
        job_terms: Optional[TermSet] = None,
        resume_terms: Optional[TermSet] = None,
    ) -> SkillsMatchResult:
        job_terms = job_terms if job_terms is not None else extract_technical(job_text)
        technical = self.match_technical(job_text, resume_text, job_terms, resume_terms)

        full_text = None
        if self.full_text_scan:
            full_text = self.scan_skills(job_text, resume_text, job_terms)

        if full_text is not None and full_text.total_required > 0:
            relevance, source = float(full_text.overall_match_score), "full_text"
        elif not job_terms.is_empty():
            relevance, source = technical.overall_score, "category"
        else:
            relevance, source = NEUTRAL_SKILL_RELEVANCE, "neutral"

        logger.debug("Skill relevance %.1f from %s strategy", relevance, source)
        return SkillsMatchResult(
            technical=technical,
            full_text=full_text,
            skill_relevance=relevance,
            match_ratio=relevance / 100,
            source=source,
        )
