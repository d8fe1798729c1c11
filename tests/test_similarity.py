import pytest

from resumatch.services.similarity import (
    Keyword,
    SimilarityScores,
    extract_keywords,
    similarity,
    weighted_keyword_match,
)


class TestSimilarity:
    """Semantic similarity scores"""

    def test_empty_inputs(self):
        """Test empty inputs score zero everywhere"""
        assert similarity("", "") == SimilarityScores(0.0, 0.0, 0.0, 0.0)

    @pytest.mark.parametrize("text", [
        "Built distributed data pipelines with Python, Kafka and Spark",
        "python python java",
        "b c d e f g h",
        "Senior engineer leading platform teams across cloud infrastructure and developer tooling",
    ])
    def test_reflexive(self, text):
        """Test a text is exactly maximally similar to itself"""
        scores = similarity(text, text)
        assert scores.jaccard == 1.0
        assert scores.cosine == 1.0
        assert scores.bigram_overlap == 1.0
        assert scores.combined == pytest.approx(1.0)

    def test_symmetric(self, sample_resume, sample_job):
        """Test swapping the inputs gives identical scores"""
        assert similarity(sample_resume, sample_job) == similarity(sample_job, sample_resume)

    def test_bounds(self, sample_resume, sample_job):
        """Test every component stays in [0, 1]"""
        scores = similarity(sample_resume, sample_job)
        for value in (scores.jaccard, scores.cosine, scores.bigram_overlap, scores.combined):
            assert 0.0 <= value <= 1.0
        assert scores.combined > 0

    def test_unrelated_texts(self):
        """Test texts without shared words score zero"""
        scores = similarity("gardening tomatoes", "quantum physics")
        assert scores.combined == 0.0


class TestExtractKeywords:
    """Single-document TF-IDF keywords"""

    def test_ranked_by_frequency_then_first_occurrence(self):
        """Test ties keep the order of first occurrence"""
        keywords = extract_keywords("beta alpha beta alpha gamma")
        assert [k.term for k in keywords] == ["beta", "alpha", "gamma"]

    def test_importance_scales_tfidf(self):
        """Test importance is tfidf times 100"""
        keyword = extract_keywords("python python django")[0]
        assert keyword.term == "python"
        assert keyword.importance == pytest.approx(keyword.tfidf * 100)

    def test_count(self):
        """Test the count limit and count=None"""
        text = "one two three four five"
        assert len(extract_keywords(text, 2)) == 2
        assert len(extract_keywords(text, None)) == 5

    def test_empty(self):
        """Test empty text has no keywords"""
        assert extract_keywords("") == []


class TestWeightedKeywordMatch:
    """Importance-weighted keyword coverage"""

    def test_empty_lists(self):
        """Test empty keyword lists score zero"""
        assert weighted_keyword_match([], [Keyword("python", 1.0, 100.0)]) == 0.0
        assert weighted_keyword_match([Keyword("python", 1.0, 100.0)], []) == 0.0

    def test_exact_and_partial(self):
        """Test partial matches earn 70% of the weight"""
        job = [Keyword("python", 1.0, 100.0), Keyword("postgres", 1.0, 100.0)]
        resume = [Keyword("python", 1.0, 100.0), Keyword("postgresql", 1.0, 100.0)]
        assert weighted_keyword_match(job, resume) == pytest.approx(85.0)

    def test_adding_missing_keyword_never_lowers_score(self, sample_job):
        """Test that adding a missing job keyword to the resume cannot reduce the score"""
        resume = "Python developer building services with Django"
        job_keywords = extract_keywords(sample_job, 30)

        before = weighted_keyword_match(job_keywords, extract_keywords(resume, None))
        after = weighted_keyword_match(job_keywords, extract_keywords(resume + " kubernetes", None))

        assert after >= before
        assert after > before
