from resumatch.services.ats_scorer import (
    SECTION_WEIGHTS,
    ATSScorer,
    SectionAnalysis,
    get_ats_scorer,
    weighted_section_score,
)
from resumatch.services.resume_parser import parse


SECTIONS = {
    "contact", "summary", "experience", "education", "skills", "location",
    "length", "keywords", "achievements", "action_verbs", "format",
}


class TestWeightedSectionScore:
    """Weighted averaging over present sections"""

    def test_no_sections(self):
        """Test zero when nothing weighted is present"""
        assert weighted_section_score({}, SECTION_WEIGHTS) == 0

    def test_renormalizes_over_present_sections(self):
        """Test absent sections drop out of the denominator"""
        sections = {"contact": SectionAnalysis(name="contact", score=80)}
        assert weighted_section_score(sections, SECTION_WEIGHTS) == 80


class TestATSScorer:
    """Best-practices analysis"""

    def test_complete_resume(self, sample_resume):
        """Test a complete resume scores high on the core sections"""
        result = ATSScorer().analyze(sample_resume, parse(sample_resume))

        assert set(result.sections) == SECTIONS
        assert result.sections["contact"].score == 100
        assert result.sections["experience"].score == 100
        assert result.sections["education"].score == 100
        assert result.sections["skills"].score == 100
        assert result.sections["location"].score == 100
        assert result.overall_score >= 85
        assert result.grade.startswith("A")
        assert "contact" in {s.section for s in result.strengths}

    def test_contact_capped_without_email_or_phone(self):
        """Test an unreachable candidate scores at most 30 on contact"""
        text = "John Doe\nSenior engineer building web platforms for ten years"
        result = ATSScorer().analyze(text, parse(text))
        contact = result.sections["contact"]
        assert contact.score <= 30
        assert not contact.present
        assert contact.metrics == {"has_email": False, "has_phone": False, "completeness": contact.score}

    def test_empty_resume(self):
        """Test an empty resume is scored, not rejected"""
        result = ATSScorer().analyze("")
        assert set(result.sections) == SECTIONS
        for section in result.sections.values():
            assert 0 <= section.score <= 100
        assert 0 <= result.overall_score <= 100
        assert result.grade == "F"
        assert result.ats_compatibility.score == 10

    def test_weak_action_verbs(self):
        """Test weak verbs lower the action verb score"""
        result = ATSScorer().analyze("Worked on reports. Helped the team. Assisted customers.")
        assert result.sections["action_verbs"].score == 60
        assert result.sections["action_verbs"].metrics["weak"] == 3

    def test_achievements(self):
        """Test quantified achievements are counted"""
        text = "Grew revenue 25%, saved $4000, onboarded 300 users"
        assert ATSScorer().analyze(text).sections["achievements"].score == 100

    def test_location_mention(self):
        """Test a City, ST mention without a full address"""
        text = "Jane Smith\nBased in Denver, CO"
        assert ATSScorer().analyze(text, parse(text)).sections["location"].score == 80

    def test_grades(self):
        """Test the letter grade scale"""
        scorer = get_ats_scorer()
        assert scorer._score_to_grade(95) == "A+"
        assert scorer._score_to_grade(82) == "B+"
        assert scorer._score_to_grade(60) == "C"
        assert scorer._score_to_grade(49) == "F"

    def test_singleton(self):
        """Test the scorer singleton"""
        assert get_ats_scorer() is get_ats_scorer()
