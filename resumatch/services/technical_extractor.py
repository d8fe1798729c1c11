"""
Technical term extraction.

Looks up the curated category vocabularies in a document and derives the
free-form technical keywords of a job posting. Matching is purely lexical:
near-synonyms that are not in the vocabulary tables are invisible here.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from resumatch.services.nlp_utils import contains_term
from resumatch.services.vocabulary import (
    COMMON_WORDS,
    COMPOUND_TERMS,
    ENGLISH_STOPWORDS,
    SOFT_SKILLS,
    TechCategory,
    terms_for,
)

logger = logging.getLogger(__name__)


CAPITALIZED_PHRASE = re.compile(r"\b[A-Z][a-z]+(?:[ \t]+[A-Z][a-z]+)*\b")

CERTIFICATION_PATTERNS = (
    re.compile(r"aws\s+certified(?:[ \t]+[a-z]+){0,3}", re.IGNORECASE),
    re.compile(r"azure\s+certified(?:[ \t]+[a-z]+){0,3}", re.IGNORECASE),
    re.compile(r"google\s+cloud\s+certified(?:[ \t]+[a-z]+){0,3}", re.IGNORECASE),
    re.compile(r"pmp\s+certified", re.IGNORECASE),
    re.compile(r"scrum\s+master", re.IGNORECASE),
    re.compile(r"\bcertified(?:[ \t]+[a-z]+){1,4}", re.IGNORECASE),
)

EXPERIENCE_PATTERNS = (
    re.compile(r"(\d+)\+?\s*(?:years?|yrs?)\s+(?:of\s+)?(?:experience|exp)\b", re.IGNORECASE),
    re.compile(r"minimum\s+(?:of\s+)?(\d+)\s+(?:years?|yrs?)", re.IGNORECASE),
    re.compile(r"(\d+)\s*-\s*(\d+)\s+(?:years?|yrs?)", re.IGNORECASE),
)

EDUCATION_REQUIREMENT_TERMS = (
    "bachelor", "bachelor's", "bachelor of science", "bs", "bsc",
    "master", "master's", "master of science", "ms", "msc",
    "phd", "doctorate", "mba", "btech", "mtech", "degree",
)


@dataclass(frozen=True)
class TermSet:
    """Vocabulary terms found in one document, split by category."""

    programming_languages: frozenset[str] = frozenset()
    frameworks: frozenset[str] = frozenset()
    tools: frozenset[str] = frozenset()
    platforms: frozenset[str] = frozenset()
    databases: frozenset[str] = frozenset()
    methodologies: frozenset[str] = frozenset()

    @property
    def all_terms(self) -> frozenset[str]:
        return frozenset().union(*(self.by_category(c) for c in TechCategory))

    def by_category(self, category: TechCategory) -> frozenset[str]:
        return getattr(self, category.value)

    def is_empty(self) -> bool:
        return not self.all_terms

    def to_dict(self) -> dict[str, list[str]]:
        data = {c.value: sorted(self.by_category(c)) for c in TechCategory}
        data["all_terms"] = sorted(self.all_terms)
        return data


@dataclass
class JobRequirements:
    """Everything the job description asks for, as far as it can be read lexically."""

    terms: TermSet
    technical_keywords: list[str] = field(default_factory=list)
    certifications: list[str] = field(default_factory=list)
    soft_skills: list[str] = field(default_factory=list)
    experience_years: list[int] = field(default_factory=list)
    education_levels: list[str] = field(default_factory=list)


def _unique(items) -> list[str]:
    return list(dict.fromkeys(items))


def extract_technical(text: str) -> TermSet:
    """Return the category vocabulary terms that occur in ``text``."""
    if not text or not text.strip():
        return TermSet()

    found = {
        category.value: frozenset(
            term for term in terms_for(category) if contains_term(text, term)
        )
        for category in TechCategory
    }
    return TermSet(**found)


def extract_compound_terms(text: str) -> list[str]:
    return _unique(term for term in COMPOUND_TERMS if contains_term(text, term))


def is_common_word(word: str) -> bool:
    word = word.lower()
    return word in COMMON_WORDS or word in ENGLISH_STOPWORDS


def extract_technical_keywords(text: str, known_terms=()) -> list[str]:
    """
    Free-form technical keywords of a document.

    Combines the known vocabulary terms present in the text, capitalized
    phrases that are not ordinary English words, and compound terms such as
    "machine learning".
    """
    if not text:
        return []

    keywords = [term for term in sorted(known_terms) if contains_term(text, term)]

    for phrase in CAPITALIZED_PHRASE.findall(text):
        lowered = phrase.lower()
        if len(lowered) > 2 and not is_common_word(lowered):
            keywords.append(lowered)

    keywords.extend(extract_compound_terms(text))
    return _unique(keywords)


def extract_certifications(text: str) -> list[str]:
    found = []
    for pattern in CERTIFICATION_PATTERNS:
        found.extend(m.group(0).strip().lower() for m in pattern.finditer(text))
    return _unique(found)


def extract_experience_years(text: str) -> list[int]:
    years = []
    for pattern in EXPERIENCE_PATTERNS:
        years.extend(int(m.group(1)) for m in pattern.finditer(text))
    return years


def extract_education_levels(text: str) -> list[str]:
    return [level for level in EDUCATION_REQUIREMENT_TERMS if contains_term(text, level)]


def extract_soft_skills(text: str) -> list[str]:
    return [skill for skill in SOFT_SKILLS if contains_term(text, skill)]


def extract_requirements(job_text: str) -> JobRequirements:
    """Read the technical and non-technical requirements of a job description."""
    terms = extract_technical(job_text)
    requirements = JobRequirements(
        terms=terms,
        technical_keywords=extract_technical_keywords(job_text, terms.all_terms),
        certifications=extract_certifications(job_text),
        soft_skills=extract_soft_skills(job_text),
        experience_years=extract_experience_years(job_text),
        education_levels=extract_education_levels(job_text),
    )
    logger.debug(
        "Job requirements: %d technical terms, %d keywords",
        len(terms.all_terms),
        len(requirements.technical_keywords),
    )
    return requirements
