import pytest

from resumatch.services.keyword_optimizer import (
    analyze_keyword_density,
    optimization_score,
    suggest_keyword_placement,
)


class TestOptimizationScore:
    """Score formula"""

    def test_no_keywords(self):
        """Test nothing to optimize scores 100"""
        assert optimization_score(0, 0, 0, 0) == 100

    def test_penalties_and_bonus(self):
        """Test missing and over-optimized keywords cost points, optimal ones earn them"""
        assert optimization_score(2, 1, 1, 0) == 65
        assert optimization_score(4, 0, 0, 2) == 100
        assert optimization_score(4, 4, 0, 0) == 50


class TestAnalyzeKeywordDensity:
    """Per-keyword density analysis"""

    def test_missing_and_over_optimized(self):
        """Test a missing keyword is high priority and listed first"""
        result = analyze_keyword_density("python python java", ["python", "rust"])

        assert result.optimization_score == 65
        assert result.missing_count == 1
        assert result.over_optimized_count == 1
        assert result.keywords["python"].count == 2
        assert result.keywords["rust"].is_missing
        assert [s.priority for s in result.suggestions] == ["high", "medium"]
        assert result.suggestions[0].keyword == "rust"

    def test_optimal_density(self):
        """Test one mention in fifty words is optimal"""
        result = analyze_keyword_density("python " + "word " * 49, ["python"])
        assert result.keywords["python"].density == pytest.approx(2.0)
        assert result.keywords["python"].is_optimal
        assert result.suggestions == []

    def test_low_density(self):
        """Test a rare keyword gets a low-priority suggestion"""
        result = analyze_keyword_density("python " + "word " * 199, ["python"])
        assert result.keywords["python"].density == pytest.approx(0.5)
        assert result.suggestions[0].priority == "low"

    def test_whole_term_counting(self):
        """Test keywords are counted as whole terms"""
        result = analyze_keyword_density("JavaScript and Java", ["java"])
        assert result.keywords["java"].count == 1

    def test_no_keywords(self):
        """Test an empty keyword list"""
        result = analyze_keyword_density("python developer", [])
        assert result.optimization_score == 100
        assert result.average_density == 0.0

    def test_empty_resume(self):
        """Test every keyword is missing from an empty resume"""
        result = analyze_keyword_density("", ["python"])
        assert result.missing_count == 1
        assert result.keywords["python"].density == 0.0


class TestPlacement:
    """Placement hints"""

    def test_technical_keyword(self):
        """Test technical keywords go to the skills section"""
        assert suggest_keyword_placement("", "python")[0] == "Add to Skills section"

    def test_soft_keyword(self):
        """Test soft skills go to the summary"""
        assert suggest_keyword_placement("", "leadership")[0] == "Add to Summary/Profile section"

    def test_last_matching_section(self):
        """Test other keywords go to the last section heading seen"""
        text = "Summary\nExperience\nEducation"
        assert suggest_keyword_placement(text, "budgeting")[0] == "Add to Education section"
