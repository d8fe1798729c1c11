"""
Text similarity scoring.

Combines three lexical measures into one semantic score:
- Jaccard over stemmed unigrams plus raw bigrams
- Cosine over unigram counts, reinforced by bigram membership
- Bigram overlap (Jaccard over bigrams only)

Also extracts TF-IDF keywords and scores weighted keyword coverage.
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from dataclasses import dataclass
from typing import Optional, Sequence

from resumatch.services.nlp_utils import PreprocessedText, preprocess

logger = logging.getLogger(__name__)


JACCARD_WEIGHT = 0.3
COSINE_WEIGHT = 0.5
BIGRAM_WEIGHT = 0.2

# Contribution of each bigram that contains a unigram to that unigram's component
BIGRAM_REINFORCEMENT = 0.5

PARTIAL_MATCH_CREDIT = 0.7

# With a single document, idf = 1 + ln(N / (1 + df)) is the same for every term
SINGLE_DOCUMENT_IDF = 1 + math.log(1 / 2)
IMPORTANCE_SCALE = 100


@dataclass(frozen=True)
class SimilarityScores:
    jaccard: float = 0.0
    cosine: float = 0.0
    bigram_overlap: float = 0.0
    combined: float = 0.0


@dataclass(frozen=True)
class Keyword:
    """A document keyword with its single-document TF-IDF weight."""

    term: str
    tfidf: float
    importance: float


def jaccard(a: set, b: set) -> float:
    union = a | b
    if not union:
        return 0.0
    return len(a & b) / len(union)


def _term_vector(doc: PreprocessedText, vocabulary: Sequence[str]) -> list[float]:
    unigram_counts = Counter(doc.unigrams)
    bigram_counts = Counter(doc.bigrams)
    vector = []
    for term in vocabulary:
        reinforcement = sum(count for bigram, count in bigram_counts.items() if term in bigram)
        vector.append(unigram_counts[term] + BIGRAM_REINFORCEMENT * reinforcement)
    return vector


def cosine(doc_a: PreprocessedText, doc_b: PreprocessedText) -> float:
    # Sorted vocabulary keeps the float summation order independent of argument order
    vocabulary = sorted(set(doc_a.unigrams) | set(doc_b.unigrams))
    if not vocabulary:
        return 0.0

    vector_a = _term_vector(doc_a, vocabulary)
    vector_b = _term_vector(doc_b, vocabulary)

    norm_a = math.sqrt(sum(v * v for v in vector_a))
    norm_b = math.sqrt(sum(v * v for v in vector_b))
    if norm_a == 0 or norm_b == 0:
        return 0.0

    if vector_a == vector_b:
        return 1.0

    dot = sum(x * y for x, y in zip(vector_a, vector_b))
    return min(1.0, dot / (norm_a * norm_b))


def similarity(text_a: str, text_b: str) -> SimilarityScores:
    """Compare two texts; empty or stopword-only input scores zero everywhere."""
    doc_a = preprocess(text_a)
    doc_b = preprocess(text_b)

    jaccard_score = jaccard(
        set(doc_a.unigrams) | set(doc_a.bigrams),
        set(doc_b.unigrams) | set(doc_b.bigrams),
    )
    cosine_score = cosine(doc_a, doc_b)
    bigram_score = jaccard(set(doc_a.bigrams), set(doc_b.bigrams))

    combined = (
        JACCARD_WEIGHT * jaccard_score
        + COSINE_WEIGHT * cosine_score
        + BIGRAM_WEIGHT * bigram_score
    )
    return SimilarityScores(
        jaccard=jaccard_score,
        cosine=cosine_score,
        bigram_overlap=bigram_score,
        combined=min(1.0, combined),
    )


def extract_keywords(text: str, count: Optional[int] = 30) -> list[Keyword]:
    """
    Top keywords by single-document TF-IDF.

    Ties keep the order of first occurrence. ``count=None`` returns every
    distinct term.
    """
    tokens = preprocess(text).raw_tokens
    if not tokens:
        return []

    frequencies = Counter(tokens)
    first_seen = {}
    for index, token in enumerate(tokens):
        first_seen.setdefault(token, index)

    ranked = sorted(frequencies, key=lambda t: (-frequencies[t], first_seen[t]))
    if count is not None:
        ranked = ranked[:count]

    keywords = []
    for term in ranked:
        tfidf = frequencies[term] * SINGLE_DOCUMENT_IDF
        keywords.append(Keyword(term=term, tfidf=tfidf, importance=tfidf * IMPORTANCE_SCALE))
    return keywords


def find_keyword_match(term: str, resume_terms: Sequence[str], resume_set: set) -> Optional[str]:
    """Return "exact", "partial" or None for one job keyword."""
    if term in resume_set:
        return "exact"
    for candidate in resume_terms:
        if term in candidate or candidate in term:
            return "partial"
    return None


def weighted_keyword_match(
    job_keywords: Sequence[Keyword],
    resume_keywords: Sequence[Keyword],
) -> float:
    """
    Importance-weighted share of job keywords found among resume keywords.

    Exact matches earn the full weight, substring matches 70% of it.
    """
    if not job_keywords or not resume_keywords:
        return 0.0

    resume_terms = [k.term for k in resume_keywords]
    resume_set = set(resume_terms)

    total_weight = 0.0
    matched_weight = 0.0
    for keyword in job_keywords:
        total_weight += keyword.importance
        match = find_keyword_match(keyword.term, resume_terms, resume_set)
        if match == "exact":
            matched_weight += keyword.importance
        elif match == "partial":
            matched_weight += keyword.importance * PARTIAL_MATCH_CREDIT

    if total_weight <= 0:
        return 0.0
    return matched_weight / total_weight * 100
