from resumatch.services.ats_scorer import ATSBestPracticesResult, ATSCompatibility, SectionAnalysis
from resumatch.services.formatting_analyzer import FormattingResult
from resumatch.services.keyword_optimizer import analyze_keyword_density
from resumatch.services.recommendations import AnalysisGaps, generate
from resumatch.services.skills_matcher import SkillsMatcher


def make_ats(sections=None, overall=90):
    return ATSBestPracticesResult(
        overall_score=overall,
        grade="A",
        sections=sections or {},
        strengths=[],
        ats_compatibility=ATSCompatibility(score=100),
    )


def make_formatting(**kwargs):
    return FormattingResult(ats_readability_score=80, font_score=100, page_count=1, word_count=400, **kwargs)


class TestGenerate:
    """Rule evaluation and ordering"""

    def test_no_gaps(self):
        """Test a resume without gaps gets no recommendations"""
        assert generate(AnalysisGaps(ats=make_ats())) == []

    def test_missing_contact_is_critical(self):
        """Test an unreachable candidate gets a critical contact recommendation"""
        contact = SectionAnalysis(name="contact", score=0, metrics={"has_email": False, "has_phone": False})
        recommendations = generate(AnalysisGaps(ats=make_ats({"contact": contact})))

        assert len(recommendations) == 1
        assert recommendations[0].priority == "critical"
        assert recommendations[0].category == "contact"
        assert "email address and phone number" in recommendations[0].message

    def test_stable_order_within_priority(self):
        """Test equal priorities keep the order the rules produced them in"""
        contact = SectionAnalysis(name="contact", score=60, present=True, metrics={"has_email": True, "has_phone": False})
        gaps = AnalysisGaps(
            ats=make_ats({"contact": contact}),
            formatting=make_formatting(has_tables=True, has_images=True),
        )
        titles = [r.title for r in generate(gaps)]
        assert titles == ["Complete Contact Information", "Remove Tables", "Remove Images and Graphics"]

    def test_low_overall_score(self):
        """Test a low overall score is flagged"""
        recommendations = generate(AnalysisGaps(ats=make_ats(overall=40)))
        assert [r.title for r in recommendations] == ["Improve Overall ATS Score"]
        assert "40%" in recommendations[0].message


class TestTechnicalRules:
    """Rules fed by the skills matcher"""

    def test_missing_language(self):
        """Test a missing language is critical and sorted first"""
        technical = SkillsMatcher().match_technical("Java developer wanted", "Expert in JavaScript")
        recommendations = generate(AnalysisGaps(ats=make_ats(), technical=technical))

        assert recommendations[0].title == "Missing Critical Programming Languages"
        assert recommendations[0].priority == "critical"
        assert "java" in recommendations[0].message
        assert "Low programming languages Match" in [r.title for r in recommendations]

    def test_missing_skills(self):
        """Test full-text gaps are grouped by priority"""
        full_text = SkillsMatcher().scan_skills("Python and React", "Docker only")
        recommendations = generate(AnalysisGaps(ats=make_ats(), full_text=full_text))

        by_title = {r.title: r for r in recommendations}
        assert by_title["Missing Critical Skills"].examples == ["python"]
        assert by_title["Missing Important Skills"].examples == ["react"]
        assert recommendations[0].title == "Missing Critical Skills"


    def test_every_field_filled(self):
        """Test technical and skill gap recommendations carry a description and impact"""
        matcher = SkillsMatcher()
        job = "Java and Spring developer with Python and React"
        resume = "Expert in JavaScript and Vue"
        gaps = AnalysisGaps(
            ats=make_ats(),
            technical=matcher.match_technical(job, resume),
            full_text=matcher.scan_skills(job, resume),
        )
        recommendations = generate(gaps)

        assert {r.category for r in recommendations} == {"technical", "skills_match"}
        assert "Low programming languages Match" in [r.title for r in recommendations]
        for recommendation in recommendations:
            assert recommendation.description
            assert recommendation.impact
            assert recommendation.action


class TestKeywordRules:
    """Job keyword coverage"""

    def test_missing_keywords(self):
        """Test missing job keywords are listed in the action"""
        optimization = analyze_keyword_density("python developer", ["kubernetes", "terraform"])
        recommendations = generate(AnalysisGaps(ats=make_ats(), keyword_optimization=optimization))

        assert len(recommendations) == 1
        assert recommendations[0].title == "Add Missing Job Keywords"
        assert "kubernetes, terraform" in recommendations[0].action

    def test_well_covered_keywords(self):
        """Test no recommendation when the optimization score is high"""
        optimization = analyze_keyword_density("python " + "word " * 49, ["python"])
        assert generate(AnalysisGaps(ats=make_ats(), keyword_optimization=optimization)) == []
