"""
Formatting analysis for ATS readability.

The score starts from a neutral base and each independent check either adds
quality points or subtracts penalty points. Only layout and hygiene signals
are considered here; keyword overlap with a job description never affects
the readability score.
"""

import logging
import math
import re
from dataclasses import dataclass, field
from typing import Optional

from resumatch.services.text_extractor import count_pdf_pages

logger = logging.getLogger(__name__)


BASE_SCORE = 50
WORDS_PER_PAGE = 275

SUSPICIOUS_FONTS = ("comic", "papyrus", "wingdings", "symbol", "webdings")
IMAGE_MARKERS = ("[image]", "[graphic]", "[photo]", "image:", "graphic:")

# section: (points when present, penalty when missing)
REQUIRED_SECTIONS = {
    "experience": (15, 20),
    "education": (12, 15),
    "skills": (10, 12),
    "contact": (8, 10),
}

EMAIL_PATTERN = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")
PHONE_PATTERN = re.compile(r"(?:\+?\d{1,3}[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}")
BULLET_PATTERN = re.compile(r"[•·▪▫◦‣⁃\-*]")
NON_ASCII_PATTERN = re.compile(r"[^\x00-\x7F]")
ACTION_VERB_PATTERN = re.compile(
    r"\b(?:developed|created|implemented|managed|led|improved|designed|built|"
    r"achieved|increased|reduced|optimized)\b",
    re.IGNORECASE,
)


@dataclass
class FormattingResult:
    """Outcome of the formatting checks."""
    ats_readability_score: int  # 0-100
    font_score: int
    page_count: int
    word_count: int
    is_pdf: bool = False
    has_images: bool = False
    has_tables: bool = False
    contact_info_complete: bool = False
    issues: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)
    missing_sections: list[str] = field(default_factory=list)
    quality_points: int = 0
    penalty_points: int = 0


def estimate_page_count(word_count: int, words_per_page: int = WORDS_PER_PAGE) -> int:
    return max(1, math.ceil(word_count / words_per_page))


def generate_formatting_recommendations(issues: list[str], warnings: list[str], score: int) -> list[str]:
    recommendations = []

    if score < 70:
        recommendations.append("Critical: Resume has significant formatting issues that may cause ATS rejection")
    if any("tabs" in issue for issue in issues):
        recommendations.append("Remove tab characters - use spaces or proper formatting instead")
    if any("Images" in issue for issue in issues):
        recommendations.append("Remove images and graphics - ATS systems cannot read image content")
    if any("sections" in warning for warning in warnings):
        recommendations.append("Add missing recommended sections (Experience, Education, Skills, Contact)")
    if score < 80:
        recommendations.append("Use ATS-friendly fonts: Arial, Calibri, or Times New Roman")
        recommendations.append("Avoid headers and footers - they may interfere with ATS parsing")
        recommendations.append("Keep resume to 1-2 pages for optimal ATS compatibility")

    if not recommendations:
        recommendations.append("Resume formatting looks good for ATS compatibility")
    return recommendations


def analyze_formatting(
    data: Optional[bytes],
    text: str,
    declared_format: Optional[str] = None,
    page_count: Optional[int] = None,
    words_per_page: int = WORDS_PER_PAGE,
) -> FormattingResult:
    """
    Score how readable a resume is for an ATS.

    Args:
        data: Raw file bytes, used for the byte-level page count. May be None.
        text: Extracted resume text.
        declared_format: "pdf", "docx", "doc" or "txt" when known.
        page_count: Page count already read from the bytes, if any.
        words_per_page: Words per page for the text-based page estimate.
    """
    text = text or ""
    issues: list[str] = []
    warnings: list[str] = []
    quality = 0
    penalty = 0

    lowered = text.lower()
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    word_count = len(text.split())

    if page_count is None and data and declared_format in (None, "pdf"):
        page_count = count_pdf_pages(data)
    is_pdf = page_count is not None
    if page_count is None:
        page_count = estimate_page_count(word_count, words_per_page)

    # Fonts
    font_score = 100
    for font in SUSPICIOUS_FONTS:
        if font in lowered:
            warnings.append(f"Potentially problematic font detected: {font}")
            font_score -= 10
            penalty += 5

    # Tabs usually mean a table layout
    tab_count = text.count("\t")
    if tab_count > 10:
        issues.append("Multiple tabs detected - may cause ATS parsing issues")
        penalty += 15
    elif tab_count > 5:
        warnings.append("Some tabs detected - may cause minor parsing issues")
        penalty += 5

    first_lines = " ".join(lines[:3]).lower()
    last_lines = " ".join(lines[-3:]).lower()
    if first_lines == last_lines and len(first_lines) > 20:
        warnings.append("Potential header/footer detected - may interfere with ATS parsing")
        penalty += 5

    has_images = False
    for marker in IMAGE_MARKERS:
        if marker in lowered:
            has_images = True
            issues.append("Images or graphics detected - ATS cannot read image content")
            penalty += 20

    found_sections = []
    missing_sections = []
    for section, (points, missing_penalty) in REQUIRED_SECTIONS.items():
        if re.search(rf"\b{section}\b", text, re.IGNORECASE):
            found_sections.append(section)
            quality += points
        else:
            missing_sections.append(section)
            penalty += missing_penalty
    if missing_sections:
        warnings.append(f"Missing recommended sections: {', '.join(missing_sections)}")

    non_ascii = len(NON_ASCII_PATTERN.findall(text))
    if non_ascii > 100:
        issues.append("Many special characters detected - may cause ATS parsing issues")
        penalty += 15
    elif non_ascii > 50:
        warnings.append("Some special characters detected - may cause minor parsing issues")
        penalty += 8

    # Pages
    if page_count == 1:
        quality += 8
    elif page_count == 2:
        quality += 5
    elif page_count > 2:
        warnings.append(f"Resume is too long: {page_count} pages, optimal length is 1-2 pages")
        penalty += (page_count - 2) * 5
    else:
        warnings.append("Resume appears too short - may seem incomplete")
        penalty += 15

    if is_pdf:
        quality += 3
    else:
        warnings.append("Consider using PDF format for better ATS compatibility")

    has_email = EMAIL_PATTERN.search(text) is not None
    has_phone = PHONE_PATTERN.search(text) is not None
    if has_email:
        quality += 8
    else:
        issues.append("Email address not found or improperly formatted")
        penalty += 20
    if has_phone:
        quality += 4
    else:
        warnings.append("Phone number not found or may be improperly formatted")
        penalty += 10
    if has_email and has_phone:
        quality += 3

    bullet_count = len(BULLET_PATTERN.findall(text))
    if bullet_count >= 15:
        quality += 4
    elif bullet_count >= 10:
        quality += 2
    elif bullet_count >= 5:
        quality += 1
    elif bullet_count == 0:
        warnings.append("No bullet points detected - consider using bullets for better readability")
        penalty += 8

    if 400 <= word_count <= 700:
        quality += 4
    elif 300 <= word_count < 400:
        quality += 2
    elif 700 < word_count <= 900:
        quality += 2
    elif word_count < 200:
        penalty += 15
    elif word_count > 1200:
        penalty += 10

    proper_structure = len(found_sections) >= 3 and has_email and word_count >= 300
    if proper_structure and len(found_sections) == len(REQUIRED_SECTIONS):
        quality += 5
    elif proper_structure:
        quality += 2

    action_verbs = len(ACTION_VERB_PATTERN.findall(text))
    if action_verbs >= 10:
        quality += 3
    elif action_verbs < 3:
        penalty += 5

    score = max(0, min(100, BASE_SCORE + quality - penalty))
    logger.debug(
        "Formatting analysis: base %d, quality +%d, penalties -%d, final %d (pages %d, words %d)",
        BASE_SCORE, quality, penalty, score, page_count, word_count,
    )

    return FormattingResult(
        ats_readability_score=score,
        font_score=font_score,
        page_count=page_count,
        word_count=word_count,
        is_pdf=is_pdf,
        has_images=has_images,
        has_tables=tab_count > 10,
        contact_info_complete=has_email and has_phone,
        issues=issues,
        warnings=warnings,
        recommendations=generate_formatting_recommendations(issues, warnings, score),
        missing_sections=missing_sections,
        quality_points=quality,
        penalty_points=penalty,
    )
