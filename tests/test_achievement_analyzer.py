from resumatch.services.achievement_analyzer import analyze_achievements, achievement_score


def _types(text):
    return {a.type for a in analyze_achievements(text).achievements}


class TestPatterns:
    """Individual achievement patterns"""

    def test_percentage_change(self):
        """Test an improvement by a percentage"""
        result = analyze_achievements("Revenue increased by 25% year over year")
        assert result.achievements[0].type == "percentage_change"
        assert result.achievements[0].metric == "25"
        assert result.impact_statements == 1

    def test_team_size(self):
        """Test a managed team size"""
        assert "team_size" in _types("Led a team of 8 developers on the platform")

    def test_cost_savings(self):
        """Test a saved amount"""
        result = analyze_achievements("Saved $50,000 annually through automation")
        assert result.achievements[0].type == "cost_savings"
        assert result.achievements[0].metric == "$50,000"

    def test_project_count(self):
        """Test a delivered project count"""
        assert "project_count" in _types("Delivered 12 projects on time and on budget")

    def test_experience_years(self):
        """Test stated years of experience"""
        assert "experience_years" in _types("7 years of experience in backend development")

    def test_short_lines_ignored(self):
        """Test lines of ten characters or fewer are skipped"""
        assert analyze_achievements("grew 5%").total_achievements == 0


class TestAchievementScore:
    """Density bands"""

    def test_bands(self):
        """Test each achievements-per-line band"""
        assert achievement_score(0, 0) == 0
        assert achievement_score(1, 10) == 100
        assert achievement_score(1, 15) == 80
        assert achievement_score(1, 4) == 90
        assert achievement_score(1, 2) == 70
        assert achievement_score(1, 30) == 50
        assert achievement_score(0, 10) == 20


class TestAnalyzeAchievements:
    """Whole-resume analysis"""

    def test_empty_text(self):
        """Test an empty resume has no quantifiable results"""
        result = analyze_achievements("")
        assert result.total_achievements == 0
        assert result.achievement_score == 0
        assert not result.has_quantifiable_results
        assert len(result.recommendations) == 1

    def test_listing_is_capped(self):
        """Test at most twenty achievements are listed but all are counted"""
        text = "\n".join(f"Revenue increased by {n}% this quarter" for n in range(1, 26))
        result = analyze_achievements(text)

        assert result.total_achievements == 25
        assert len(result.achievements) == 20
        assert result.metrics == 25
        assert result.achievement_score == 70
        assert result.recommendations == []

    def test_sample_resume(self, sample_resume):
        """Test the sample resume has quantified results"""
        result = analyze_achievements(sample_resume)
        assert result.has_quantifiable_results
        assert 0 <= result.achievement_score <= 100
