import pytest

from resumatch.services.skills_matcher import (
    RequiredSkill,
    SkillsMatcher,
    check_skill,
    match_category,
    required_skills,
    skill_variations,
)
from resumatch.services.technical_extractor import extract_technical


class TestMatchCategory:
    """Per-category term matching"""

    def test_exact_match(self):
        """Test identical terms match with full confidence"""
        result = match_category({"python"}, {"python"})
        assert result.match_rate == 100
        assert result.matched[0].match_type == "exact"
        assert result.matched[0].confidence == 1.0

    def test_java_does_not_match_javascript(self):
        """Test java is reported missing against javascript"""
        result = match_category({"java"}, {"javascript"})
        assert result.matched == []
        assert result.missing == ["java"]
        assert result.match_rate == 0

    def test_fuzzy_by_edit_distance(self):
        """Test close spellings match fuzzily"""
        result = match_category({"postgresql"}, {"postgres"})
        assert result.matched[0].match_type == "fuzzy"
        assert result.matched[0].confidence == pytest.approx(0.9)

    def test_fuzzy_by_bounded_containment(self):
        """Test containment as a whole token matches at 0.8"""
        result = match_category({"github"}, {"github actions"})
        assert result.matched[0].found_term == "github actions"
        assert result.matched[0].confidence == pytest.approx(0.8)

    def test_empty_job_terms(self):
        """Test a category without job terms has a zero rate"""
        assert match_category(set(), {"python"}).match_rate == 0


class TestTechnicalMatch:
    """Category strategy across all categories"""

    def test_matched_languages_and_experience_years(self):
        """Test JavaScript and React are matched exactly"""
        matcher = SkillsMatcher()
        result = matcher.match_technical(
            "3+ years JavaScript and React experience",
            "5 years of experience with JavaScript, React, and Node.js",
        )
        assert result.per_category["programming_languages"].match_rate == 100
        frameworks = result.per_category["frameworks"]
        assert any(m.required_term == "react" and m.match_type == "exact" for m in frameworks.matched)

    def test_missing_java_is_critical(self):
        """Test a missing language is a critical requirement"""
        result = SkillsMatcher().match_technical("Java developer wanted", "Expert in JavaScript")
        assert {"type": "programmingLanguage", "term": "java"} in result.missing_requirements.critical

    def test_overall_score_renormalized_over_job_categories(self):
        """Test categories the job does not mention do not dilute the score"""
        result = SkillsMatcher().match_technical("Python and Django", "Python")
        assert result.overall_score == pytest.approx(55.6)

    def test_overall_score_without_job_terms(self):
        """Test a job without category terms scores zero"""
        result = SkillsMatcher().match_technical("We value people who care.", "Python")
        assert result.overall_score == 0.0

    def test_related_matches(self):
        """Test family relations are reported"""
        result = SkillsMatcher().match_technical("Python required", "Django and Flask")
        assert {"required": "python", "found": "django", "relationship": "related"} in result.related_matches


class TestFullTextScan:
    """Full-text skill scanning"""

    def test_variations(self):
        """Test dotted and multi-word skill variations"""
        assert {"node.js", "nodejs", "node js"} <= set(skill_variations("node.js"))
        assert {"machinelearning", "machine-learning", "ml"} <= set(skill_variations("machine learning"))

    def test_required_skill_priorities(self):
        """Test category labels and priorities"""
        job = "Python, React, Docker, and Agile"
        skills = {s.term: s for s in required_skills(job, extract_technical(job))}
        assert skills["python"].priority == "critical"
        assert skills["python"].category == "programmingLanguage"
        assert skills["react"].priority == "high"
        assert skills["docker"].priority == "medium"
        assert skills["agile"].priority == "medium"

    def test_variation_and_context(self):
        """Test variations are found and context captured"""
        matches = SkillsMatcher().scan_skills(
            "Experience with React and Kubernetes",
            "Built apps with React.js and k8s",
        )
        assert matches.overall_match_score == 100
        kubernetes = next(m for m in matches.skill_matches if m.skill == "kubernetes")
        assert kubernetes.matched_variation == "k8s"
        assert "k8s" in kubernetes.context

    def test_versioned_skill(self):
        """Test a version suffix matches at 0.9"""
        match = check_skill(RequiredSkill("vue", "framework", "high"), "Vue3 frontend work", ["vue3", "frontend", "work"])
        assert match.found
        assert match.confidence == pytest.approx(0.9)

    def test_short_skill_not_fuzzy_matched(self):
        """Test java is not found in a JavaScript resume"""
        match = check_skill(RequiredSkill("java", "programmingLanguage", "critical"), "JavaScript", ["javascript"])
        assert not match.found

    def test_nothing_required(self):
        """Test a job without skills scores zero"""
        matches = SkillsMatcher().scan_skills("We value people who care.", "Python")
        assert matches.total_required == 0
        assert matches.overall_match_score == 0


class TestSkillRelevance:
    """Strategy precedence"""

    def test_full_text_preferred(self):
        """Test the full-text score is used when the job lists skills"""
        result = SkillsMatcher().match("Python and Docker", "Python only")
        assert result.source == "full_text"
        assert result.skill_relevance == 50
        assert result.match_ratio == pytest.approx(0.5)

    def test_category_when_scan_disabled(self):
        """Test the category score is used when the scan is off"""
        result = SkillsMatcher(full_text_scan=False).match("Python and Django", "Python")
        assert result.source == "category"
        assert result.full_text is None
        assert result.skill_relevance == pytest.approx(55.6)

    def test_neutral_without_requirements(self):
        """Test relevance is neutral when nothing is required"""
        result = SkillsMatcher().match("We value people who care.", "Python")
        assert result.source == "neutral"
        assert result.skill_relevance == 50
