import pytest

from resumatch.services.score_aggregator import (
    aggregate,
    apply_distribution_skew,
    apply_intelligent_boost,
    education_match,
    experience_match,
)
from resumatch.services.similarity import SimilarityScores


class TestExperienceMatch:
    """Years of experience against the job's requirement"""

    def test_ratio(self):
        """Test stated years divided by required years"""
        assert experience_match("5+ years of Python", "3 years of experience") == pytest.approx(0.6)

    def test_capped_at_one(self):
        """Test more experience than required caps at 1"""
        assert experience_match("5 years required", "10 years of experience") == 1.0

    def test_no_requirement_is_neutral(self):
        """Test a job without a years figure is neutral"""
        assert experience_match("Python developer", "3 years of experience") == 0.5

    def test_year_must_be_a_whole_word(self):
        """Test words starting with year are not a requirement"""
        assert experience_match("Join our 2 yearly reviews with the team", "3 years of experience") == 0.5

    def test_nothing_stated(self):
        """Test a resume without stated years gets the floor"""
        assert experience_match("5 years required", "Python developer") == 0.2


class TestEducationMatch:
    """Degree level against the job's requirement"""

    def test_lower_degree(self):
        """Test a bachelor against a master requirement"""
        assert education_match("Master's degree required", "Bachelor of Science") == pytest.approx(0.75)

    def test_plural_degree_names(self):
        """Test Bachelors and Masters count at their level"""
        assert education_match("Bachelor's degree in Computer Science required", "Bachelors in Computer Science") == 1.0
        assert education_match("Master's degree in Statistics required", "Masters in Statistics") == 1.0

    def test_no_requirement_is_neutral(self):
        """Test a job without a degree is neutral"""
        assert education_match("Python developer", "Bachelor of Science") == 0.5

    def test_no_degree_held(self):
        """Test a resume without a degree gets the floor"""
        assert education_match("Bachelor's degree required", "Self taught") == 0.1


class TestDistributionSkew:
    """Non-linear score spreading"""

    def test_low_scores_damped(self):
        """Test scores under 50 shrink by 5%"""
        assert apply_distribution_skew(40) == pytest.approx(38)

    def test_middle_unchanged(self):
        """Test scores between 50 and 80 pass through"""
        assert apply_distribution_skew(60) == 60

    def test_high_scores_rewarded(self):
        """Test scores from 80 grow by 5%, capped at 100"""
        assert apply_distribution_skew(90) == pytest.approx(94.5)
        assert apply_distribution_skew(99) == 100


class TestIntelligentBoost:
    """Additive boost"""

    def test_skill_and_tech_boost(self):
        """Test a strong skill ratio plus shared technologies"""
        score, details = apply_intelligent_boost(60, 0.8, "Python and Docker", "Python, Docker")
        assert details.skill_boost == 5
        assert details.matched_tech_keywords == ["python", "docker"]
        assert details.tech_boost == pytest.approx(3)
        assert score == pytest.approx(68)

    def test_certification_boost(self):
        """Test certification terms only count when the job asks for them"""
        _, details = apply_intelligent_boost(50, 0, "AWS certification preferred", "AWS certified architect")
        assert details.certification_boost == 4
        _, details = apply_intelligent_boost(50, 0, "Cloud architect", "AWS certified architect")
        assert details.certification_boost == 0

    def test_capped_at_100(self):
        """Test the boosted score never exceeds 100"""
        score, _ = apply_intelligent_boost(99, 1.0, "", "")
        assert score == 100


class TestAggregate:
    """Weighted combination"""

    def test_perfect_inputs(self):
        """Test all signals at their maximum give 100"""
        result = aggregate(SimilarityScores(combined=1.0), 100, 1.0, 1.0, 1.0, job_text="", resume_text="")
        assert result.final_score == 100

    def test_zero_inputs(self):
        """Test all signals at zero give 0"""
        result = aggregate(SimilarityScores(), 0, 0.0, 0.0, 0.0, job_text="", resume_text="")
        assert result.final_score == 0
        assert result.breakdown.boost.total == 0

    def test_weighted_breakdown(self):
        """Test the weighted contributions add up to the unskewed base"""
        result = aggregate(SimilarityScores(combined=0.6), 60, 0.6, 0.6, 0.6, job_text="", resume_text="")
        assert sum(result.breakdown.weighted.values()) == pytest.approx(60)
        assert result.base_score == 60
        # skill ratio 0.6 earns the smaller skill boost
        assert result.final_score == 63

    def test_components_clamped(self):
        """Test out-of-range inputs are clamped"""
        result = aggregate(SimilarityScores(combined=1.5), 150, -1.0, 2.0, 0.5, job_text="", resume_text="")
        assert result.breakdown.components["semantic_similarity"] == 1.0
        assert result.breakdown.components["keyword_match"] == 1.0
        assert result.breakdown.components["skill_relevance"] == 0.0
        assert 0 <= result.final_score <= 100
