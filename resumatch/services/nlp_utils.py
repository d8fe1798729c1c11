"""Lexical preprocessing helpers shared by the matching pipeline.

This module provides:
- Tokenization with stopword filtering
- Porter stemming (NLTK) for the unigram stream
- Bigram/trigram construction from the unstemmed token stream
- Edit-distance string similarity
- Boundary-aware regex patterns for vocabulary lookups
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Sequence

from nltk.stem import PorterStemmer

from resumatch.services.vocabulary import ENGLISH_STOPWORDS


TOKEN_PATTERN = re.compile(r"\w+")

# Characters that glue onto a technical term ("c++", "c#"), so they also
# count as part of a word when checking term boundaries.
TERM_CHARS = r"\w+#"

MAX_PREFIX_LENGTH = 4

_stemmer = PorterStemmer()


@dataclass
class PreprocessedText:
    """Token streams derived from one document.

    Unigrams are stemmed; bigrams and trigrams are built from the unstemmed,
    stopword-filtered tokens, so the two must not be compared directly.
    """

    unigrams: list[str] = field(default_factory=list)
    bigrams: list[str] = field(default_factory=list)
    trigrams: list[str] = field(default_factory=list)
    raw_tokens: list[str] = field(default_factory=list)


def tokenize(text: str) -> list[str]:
    """Lowercase word tokens with English stopwords removed."""
    if not text:
        return []
    return [t for t in TOKEN_PATTERN.findall(text.lower()) if t not in ENGLISH_STOPWORDS]


@lru_cache(maxsize=8192)
def stem(token: str) -> str:
    return _stemmer.stem(token)


def ngrams(tokens: Sequence[str], n: int) -> list[str]:
    if n <= 0 or len(tokens) < n:
        return []
    return [" ".join(tokens[i:i + n]) for i in range(len(tokens) - n + 1)]


def preprocess(text: str) -> PreprocessedText:
    """Tokenize, filter, stem and build n-grams for a document."""
    raw_tokens = tokenize(text)
    return PreprocessedText(
        unigrams=[stem(t) for t in raw_tokens],
        bigrams=ngrams(raw_tokens, 2),
        trigrams=ngrams(raw_tokens, 3),
        raw_tokens=raw_tokens,
    )


def levenshtein(a: str, b: str) -> int:
    """Classic edit distance, two-row dynamic programming."""
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            cost = 0 if char_a == char_b else 1
            current.append(min(
                previous[j] + 1,
                current[j - 1] + 1,
                previous[j - 1] + cost,
            ))
        previous = current
    return previous[-1]


def common_prefix_length(a: str, b: str, limit: int = MAX_PREFIX_LENGTH) -> int:
    length = 0
    for char_a, char_b in zip(a[:limit], b[:limit]):
        if char_a != char_b:
            break
        length += 1
    return length


def string_similarity(a: str, b: str, prefix_bonus: float = 0.0) -> float:
    """
    Normalized edit-distance similarity in [0, 1].

    ``1 - levenshtein / max_len`` plus ``prefix_bonus`` for each shared
    leading character (at most four), capped at 1.0.
    """
    if a == b:
        return 1.0
    if not a or not b:
        return 0.0

    similarity = 1 - levenshtein(a, b) / max(len(a), len(b))
    if prefix_bonus:
        similarity += prefix_bonus * common_prefix_length(a, b)
    return min(1.0, similarity)


@lru_cache(maxsize=2048)
def term_pattern(term: str) -> re.Pattern:
    """Case-insensitive pattern matching ``term`` as a standalone token."""
    return re.compile(
        rf"(?<![{TERM_CHARS}]){re.escape(term)}(?![{TERM_CHARS}])",
        re.IGNORECASE,
    )


def contains_term(text: str, term: str) -> bool:
    return bool(text) and term_pattern(term).search(text) is not None


def count_term(text: str, term: str) -> int:
    if not text:
        return 0
    return len(term_pattern(term).findall(text))
