from resumatch.services.formatting_analyzer import analyze_formatting, estimate_page_count


HEADER = "Jane Smith\njane@example.com\n(555) 123-4567\nExperience\nEducation\nSkills\n"
FILLER_LINE = "- Developed and improved scalable backend services using Python daily\n"


def make_resume(word_count):
    """Header plus ten-word bullet lines up to roughly ``word_count`` words."""
    lines = (word_count - 8) // 10
    return HEADER + FILLER_LINE * lines


class TestPageCount:
    """Text-based page estimation"""

    def test_estimate(self):
        """Test the ceil(words / 275) estimate with a floor of one page"""
        assert estimate_page_count(0) == 1
        assert estimate_page_count(275) == 1
        assert estimate_page_count(276) == 2
        assert estimate_page_count(2998) == 11


class TestAnalyzeFormatting:
    """Formatting checks and readability score"""

    def test_long_resume_penalized(self):
        """Test an 11-page resume warns and scores below a 2-page version"""
        short = analyze_formatting(None, make_resume(500))
        long = analyze_formatting(None, make_resume(3000))

        assert long.page_count == 11
        assert any("too long" in warning for warning in long.warnings)
        assert not any("too long" in warning for warning in short.warnings)
        assert long.ats_readability_score < short.ats_readability_score

    def test_images_detected(self):
        """Test image markers are reported"""
        result = analyze_formatting(None, make_resume(500) + "[image] company logo\n")
        assert result.has_images
        assert any("Images" in issue for issue in result.issues)

    def test_tab_tables_detected(self):
        """Test many tabs are treated as a table layout"""
        result = analyze_formatting(None, make_resume(500) + "a\tb\tc\td\n" * 4)
        assert result.has_tables
        assert any("tabs" in issue for issue in result.issues)

    def test_pdf_page_count(self):
        """Test a byte-level page count marks the document as PDF"""
        text = make_resume(500)
        as_pdf = analyze_formatting(None, text, declared_format="pdf", page_count=1)
        as_txt = analyze_formatting(None, text, declared_format="txt")

        assert as_pdf.is_pdf
        assert as_pdf.page_count == 1
        assert not as_txt.is_pdf
        assert any("PDF" in warning for warning in as_txt.warnings)

    def test_missing_contact(self):
        """Test a missing email is an issue"""
        result = analyze_formatting(None, "Experience\nEducation\nSkills\n- Built things")
        assert not result.contact_info_complete
        assert any("Email" in issue for issue in result.issues)
        assert "contact" in result.missing_sections

    def test_suspicious_font(self):
        """Test decorative fonts lower the font score"""
        result = analyze_formatting(None, make_resume(500) + "Font: Comic Sans\n")
        assert result.font_score == 90

    def test_empty_text(self):
        """Test empty text stays in bounds"""
        result = analyze_formatting(None, "")
        assert 0 <= result.ats_readability_score <= 100
        assert result.word_count == 0

    def test_score_bounds(self, sample_resume):
        """Test the score is clamped to [0, 100]"""
        for text in ("", sample_resume, make_resume(500), make_resume(3000), "[image]" * 10):
            score = analyze_formatting(None, text).ats_readability_score
            assert 0 <= score <= 100
