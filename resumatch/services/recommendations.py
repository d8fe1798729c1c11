"""
Recommendation generation.

Each rule is an independent function from ``AnalysisGaps`` to zero or more
``Recommendation`` records. ``generate`` runs every rule and stably sorts the
results by priority, so recommendations of equal priority keep the order in
which the rules found them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from resumatch.services.ats_scorer import ATSBestPracticesResult, COMPLETE_THRESHOLD
from resumatch.services.formatting_analyzer import FormattingResult
from resumatch.services.keyword_optimizer import KeywordOptimization
from resumatch.services.skills_matcher import FullTextSkillsMatch, TechnicalMatch

logger = logging.getLogger(__name__)


PRIORITY_RANK = {"critical": 4, "high": 3, "medium": 2, "low": 1}

LOW_MATCH_RATE = 50
KEYWORD_OPTIMIZATION_THRESHOLD = 70
MAX_LISTED_KEYWORDS = 5
ACHIEVEMENT_THRESHOLD = 50


@dataclass
class Recommendation:
    priority: str  # critical, high, medium or low
    category: str
    title: str
    message: str
    description: str = ""
    action: str = ""
    impact: str = ""
    examples: list[str] = field(default_factory=list)


@dataclass
class AnalysisGaps:
    """Everything the rules look at."""
    ats: ATSBestPracticesResult
    technical: Optional[TechnicalMatch] = None
    full_text: Optional[FullTextSkillsMatch] = None
    formatting: Optional[FormattingResult] = None
    keyword_optimization: Optional[KeywordOptimization] = None


def _first_issue(issues: list[str], default: str) -> str:
    return issues[0] if issues else default


def _terms(entries: list[dict], limit: Optional[int] = None) -> str:
    terms = [entry["term"] for entry in entries]
    return ", ".join(terms[:limit] if limit else terms)


def contact_rule(gaps: AnalysisGaps) -> list[Recommendation]:
    section = gaps.ats.sections.get("contact")
    if section is None or section.score >= COMPLETE_THRESHOLD:
        return []

    missing = []
    if not section.metrics.get("has_email"):
        missing.append("email address")
    if not section.metrics.get("has_phone"):
        missing.append("phone number")
    critical = section.score < 50

    return [Recommendation(
        priority="critical" if critical else "high",
        category="contact",
        title="Complete Contact Information",
        message=(
            f"Missing {' and '.join(missing)} - ATS systems require complete contact information"
            if missing else "Contact information is incomplete"
        ),
        description=(
            "ATS systems need your email and phone number to contact you. Without complete "
            "contact information, your resume may be automatically rejected."
        ),
        action="Add your email, phone number and name to the top of your resume in a clear Contact section.",
        impact="Critical - Resume may be rejected" if critical else "High - Reduces chances of being contacted",
        examples=[
            "Email: john.doe@email.com",
            "Phone: (555) 123-4567",
            "Location: San Francisco, CA (optional but recommended)",
        ],
    )]


def summary_rule(gaps: AnalysisGaps) -> list[Recommendation]:
    section = gaps.ats.sections.get("summary")
    if section is None or section.score >= COMPLETE_THRESHOLD:
        return []

    if not section.present:
        return [Recommendation(
            priority="high",
            category="summary",
            title="Add Professional Summary",
            message="Missing professional summary or objective - this is a critical section for ATS parsing",
            description=(
                "A 2-4 sentence professional summary helps ATS systems understand your background. "
                "It should include your years of experience, key skills, and career focus."
            ),
            action="Add a 2-4 sentence professional summary right after your contact information.",
            impact="High - Improves ATS parsing and recruiter understanding",
            examples=[
                "Experienced Software Engineer with 5+ years developing scalable web applications "
                "using React, Node.js, and AWS.",
            ],
        )]

    if section.metrics.get("quality", 0) < COMPLETE_THRESHOLD:
        return [Recommendation(
            priority="medium",
            category="summary",
            title="Improve Professional Summary",
            message=_first_issue(section.issues, "Professional summary needs improvement"),
            description=(
                "A strong summary includes action verbs, quantifiable achievements, and "
                "relevant keywords from the job description."
            ),
            action="Expand your summary to 2-4 sentences with specific achievements and strong action verbs.",
            impact="Medium - Better keyword matching and stronger first impression",
            examples=[
                'Instead of: "Experienced developer"',
                'Use: "Senior Full-Stack Developer with 7+ years building enterprise applications"',
            ],
        )]
    return []


def experience_rule(gaps: AnalysisGaps) -> list[Recommendation]:
    section = gaps.ats.sections.get("experience")
    if section is None or section.score >= COMPLETE_THRESHOLD:
        return []

    if not section.present:
        return [Recommendation(
            priority="critical",
            category="experience",
            title="Add Work Experience Section",
            message="Missing work experience section - this is essential for most job applications",
            description=(
                "Work experience is the most important section of your resume. ATS systems and "
                "recruiters use it to evaluate your qualifications and career progression."
            ),
            action="Add a Work Experience section with company, job title, employment dates and 3-5 bullet points.",
            impact="Critical - Resume will likely be rejected without work experience",
            examples=[
                "Software Engineer | Tech Company Inc. | Jan 2020 - Present",
                "- Developed and maintained React applications serving 50K+ daily users",
            ],
        )]

    recommendations = []
    metrics = section.metrics
    if metrics.get("missing_dates"):
        recommendations.append(Recommendation(
            priority="high",
            category="experience",
            title="Add Dates to Work Experience",
            message=f"{metrics['missing_dates']} experience entries missing dates",
            description="Employment dates help ATS systems understand your career timeline.",
            action='Add employment dates for each position, e.g. "Jan 2018 - Dec 2019".',
            impact="High - Missing dates can cause ATS parsing errors",
            examples=['Correct: "Software Engineer | ABC Corp | Jan 2020 - Present"'],
        ))
    if metrics.get("missing_descriptions"):
        recommendations.append(Recommendation(
            priority="high",
            category="experience",
            title="Add Descriptions to Work Experience",
            message=f"{metrics['missing_descriptions']} experience entries missing descriptions",
            description="Bullet points under each position let ATS systems extract your skills and achievements.",
            action="Add 3-5 bullet points under each position covering responsibilities, metrics and technologies.",
            impact="High - Descriptions are essential for keyword matching",
            examples=["- Reduced application load time by 40% through database optimization"],
        ))
    if metrics.get("entries", 0) < 2:
        recommendations.append(Recommendation(
            priority="medium",
            category="experience",
            title="Add More Work Experience Entries",
            message="Consider adding more work experience entries",
            description="Multiple entries show career progression. Internships and significant projects count too.",
            action="Add previous positions, internships, freelance work or relevant volunteer roles.",
            impact="Medium - Shows career progression and experience depth",
        ))
    return recommendations


def education_rule(gaps: AnalysisGaps) -> list[Recommendation]:
    section = gaps.ats.sections.get("education")
    if section is None or section.score >= COMPLETE_THRESHOLD:
        return []

    if not section.present:
        return [Recommendation(
            priority="high",
            category="education",
            title="Add Education Section",
            message="Missing education section - required for most professional positions",
            description="Education information helps ATS systems verify qualifications against job requirements.",
            action="Add an Education section with degree name, institution and graduation date.",
            impact="High - Many jobs filter by education level",
            examples=["Bachelor of Science in Computer Science | University Name | May 2020"],
        )]

    return [
        Recommendation(
            priority="medium",
            category="education",
            title="Complete Education Information",
            message=issue,
            description="Complete education entries help ATS systems categorize your qualifications.",
            action="Make sure each entry has the full degree name, the institution and a graduation date.",
            impact="Medium - Incomplete information may cause parsing errors",
        )
        for issue in section.issues
    ]


def skills_rule(gaps: AnalysisGaps) -> list[Recommendation]:
    section = gaps.ats.sections.get("skills")
    if section is None or section.score >= COMPLETE_THRESHOLD:
        return []

    if not section.present:
        return [Recommendation(
            priority="high",
            category="skills",
            title="Add Skills Section",
            message="Missing skills section - critical for ATS keyword matching",
            description="A dedicated Skills section lets ATS systems quickly identify your technical and soft skills.",
            action="Add a Skills section listing 10-15 relevant technical skills, tools and soft skills.",
            impact="High - Skills section is heavily weighted by ATS systems",
            examples=["Technical Skills: JavaScript, Python, React, Node.js, AWS, Docker, Git"],
        )]

    return [
        Recommendation(
            priority="medium",
            category="skills",
            title="Expand Skills Section",
            message=issue,
            description="A comprehensive skills section (10+ skills) improves keyword matching.",
            action="Add technologies from the job descriptions you target, plus both hard and soft skills.",
            impact="Medium - More skills means better keyword matching",
        )
        for issue in section.issues
    ]


def location_rule(gaps: AnalysisGaps) -> list[Recommendation]:
    section = gaps.ats.sections.get("location")
    if section is None or section.score >= COMPLETE_THRESHOLD:
        return []
    return [Recommendation(
        priority="medium",
        category="location",
        title="Add Location Information",
        message=_first_issue(section.issues, "Location not found"),
        description="Many ATS systems filter candidates by location.",
        action='Add your city and state to your contact information, e.g. "San Francisco, CA".',
        impact="Medium - Helps with location-based job matching",
        examples=["Location: San Francisco, CA | Open to Remote"],
    )]


def length_rule(gaps: AnalysisGaps) -> list[Recommendation]:
    section = gaps.ats.sections.get("length")
    if section is None:
        return []

    too_long = section.metrics.get("page_estimate", 0) > 2
    recommendations = []
    for issue in section.issues:
        recommendations.append(Recommendation(
            priority="medium" if "too long" in issue or too_long else "low",
            category="length",
            title="Optimize Resume Length",
            message=issue,
            description=(
                "Resumes longer than 2 pages are often truncated by ATS systems."
                if too_long else
                "Resumes shorter than 1 page may appear incomplete."
            ),
            action=(
                "Condense your resume to 1-2 pages by removing older or less relevant positions."
                if too_long else
                "Add more bullet points, skills, projects or certifications."
            ),
            impact="Medium - Long resumes may be cut off" if too_long else "Low - Short resumes may seem incomplete",
        ))
    return recommendations


def keyword_density_rule(gaps: AnalysisGaps) -> list[Recommendation]:
    section = gaps.ats.sections.get("keywords")
    if section is None or section.score >= COMPLETE_THRESHOLD:
        return []
    return [Recommendation(
        priority="medium",
        category="keywords",
        title="Optimize Keyword Usage",
        message=_first_issue(section.issues, "Keyword optimization needed"),
        description="A keyword density of 1-3% helps ATS systems match your resume to job descriptions.",
        action="Work the important keywords of your target roles into your summary, skills and experience.",
        impact="Medium - Improves ATS matching scores",
        examples=['Use variations: "JavaScript" and "JS", "Machine Learning" and "ML"'],
    )]


def missing_keywords_rule(gaps: AnalysisGaps) -> list[Recommendation]:
    optimization = gaps.keyword_optimization
    if (
        optimization is None
        or optimization.missing_count == 0
        or optimization.optimization_score >= KEYWORD_OPTIMIZATION_THRESHOLD
    ):
        return []

    missing = [s.keyword for s in optimization.suggestions if s.priority == "high"]
    return [Recommendation(
        priority="medium",
        category="keywords",
        title="Add Missing Job Keywords",
        message=f"{optimization.missing_count} keywords from the job description do not appear in your resume",
        description="ATS systems rank resumes by how many of the job's own keywords they contain.",
        action=f"Work these keywords into your resume where they apply: {', '.join(missing[:MAX_LISTED_KEYWORDS])}",
        impact="Medium - Improves keyword match with the job description",
    )]


def achievements_rule(gaps: AnalysisGaps) -> list[Recommendation]:
    section = gaps.ats.sections.get("achievements")
    if section is None or section.score >= ACHIEVEMENT_THRESHOLD:
        return []
    return [Recommendation(
        priority="medium",
        category="achievements",
        title="Add Quantifiable Achievements",
        message=_first_issue(section.issues, "Add more quantifiable achievements"),
        description="Specific numbers, percentages and metrics show concrete impact.",
        action="Add metrics to your bullet points: percentages, amounts, team sizes and timeframes.",
        impact="Medium - Quantifiable achievements significantly improve resume impact",
        examples=[
            'Instead of: "Improved application performance"',
            'Use: "Improved application performance by 40%, reducing load time from 5s to 3s"',
        ],
    )]


def action_verbs_rule(gaps: AnalysisGaps) -> list[Recommendation]:
    section = gaps.ats.sections.get("action_verbs")
    if section is None or section.score >= COMPLETE_THRESHOLD:
        return []
    return [Recommendation(
        priority="low",
        category="action_verbs",
        title="Use Stronger Action Verbs",
        message=_first_issue(section.issues, "Replace weak verbs with strong action verbs"),
        description="Strong action verbs (developed, achieved, delivered) read better than weak ones (worked, helped).",
        action='Start each bullet point with a strong action verb, e.g. "worked on" becomes "developed".',
        impact="Low - Improves resume readability and impact",
    )]


def technical_rule(gaps: AnalysisGaps) -> list[Recommendation]:
    technical = gaps.technical
    if technical is None:
        return []

    recommendations = []
    missing = technical.missing_requirements
    if missing.critical:
        recommendations.append(Recommendation(
            priority="critical",
            category="technical",
            title="Missing Critical Programming Languages",
            message=f"The job requires these programming languages that are not in your resume: {_terms(missing.critical)}",
            description="Programming languages named in the job description are usually screened as hard requirements.",
            action=f"Consider learning or highlighting experience with: {_terms(missing.critical, 3)}",
            impact="Critical - Required languages are usually hard filters",
        ))
    if missing.important:
        recommendations.append(Recommendation(
            priority="high",
            category="technical",
            title="Missing Important Frameworks",
            message=f"The job mentions these frameworks: {_terms(missing.important)}",
            description="Frameworks from the job description help ATS systems and recruiters gauge hands-on experience.",
            action=f"Consider adding experience with: {_terms(missing.important, 3)}",
            impact="High - Frameworks weigh heavily in technical screening",
        ))

    for category, match in technical.per_category.items():
        if match.match_rate < LOW_MATCH_RATE and match.missing:
            label = category.replace("_", " ")
            recommendations.append(Recommendation(
                priority="medium",
                category="technical",
                title=f"Low {label} Match",
                message=f"Only {match.match_rate:.1f}% of required {label} are found",
                description=f"Fewer than half of the {label} in the job description appear in your resume.",
                action=f"Add these {label}: {', '.join(match.missing[:3])}",
                impact="Medium - Improves technical match with the job description",
            ))
    return recommendations


def skills_gap_rule(gaps: AnalysisGaps) -> list[Recommendation]:
    full_text = gaps.full_text
    if full_text is None:
        return []

    recommendations = []
    critical = full_text.missing_by_priority("critical")
    if critical:
        recommendations.append(Recommendation(
            priority="critical",
            category="skills_match",
            title="Missing Critical Skills",
            message=f"You're missing {len(critical)} critical skill(s) required for this position",
            description="Critical skills are the core requirements of the role and are commonly used to filter candidates.",
            action=f"Focus on learning or highlighting: {', '.join(critical[:3])}",
            impact="Critical - Missing core skills often leads to automatic rejection",
            examples=critical,
        ))
    high = full_text.missing_by_priority("high")
    if high:
        recommendations.append(Recommendation(
            priority="high",
            category="skills_match",
            title="Missing Important Skills",
            message=f"Add {len(high)} important skill(s) to improve your match",
            description="Important skills strengthen your match once the core requirements are met.",
            action=f"Consider adding: {', '.join(high[:5])}",
            impact="High - Closes the most visible skill gaps",
            examples=high,
        ))
    return recommendations


def formatting_rule(gaps: AnalysisGaps) -> list[Recommendation]:
    formatting = gaps.formatting
    if formatting is None:
        return []

    recommendations = []
    if formatting.has_tables:
        recommendations.append(Recommendation(
            priority="high",
            category="formatting",
            title="Remove Tables",
            message="Tab-aligned tables detected - ATS systems often scramble table content",
            action="Replace tables and tab-aligned columns with plain lines and bullet points.",
            impact="High - Table content may be lost during parsing",
        ))
    if formatting.has_images:
        recommendations.append(Recommendation(
            priority="high",
            category="formatting",
            title="Remove Images and Graphics",
            message="Images or graphics detected - ATS cannot read image content",
            action="Move any information shown in images into plain text.",
            impact="High - Image content is invisible to ATS systems",
        ))
    return recommendations


def overall_rule(gaps: AnalysisGaps) -> list[Recommendation]:
    score = gaps.ats.overall_score
    if score >= COMPLETE_THRESHOLD:
        return []
    return [Recommendation(
        priority="high",
        category="overall",
        title="Improve Overall ATS Score",
        message=f"Your ATS score is {score}% - focus on completing missing sections and improving structure",
        description=(
            f"Your resume has an ATS compatibility score of {score}%. Complete the required "
            "sections and add the missing information first."
        ),
        action="Fix critical issues first (contact info, experience, education), then improve the other sections.",
        impact="High - Higher ATS scores increase chances of passing initial screening",
    )]


RULES: tuple[Callable[[AnalysisGaps], list[Recommendation]], ...] = (
    contact_rule,
    summary_rule,
    experience_rule,
    education_rule,
    skills_rule,
    location_rule,
    length_rule,
    keyword_density_rule,
    missing_keywords_rule,
    achievements_rule,
    action_verbs_rule,
    technical_rule,
    skills_gap_rule,
    formatting_rule,
    overall_rule,
)


def generate(gaps: AnalysisGaps) -> list[Recommendation]:
    """Run every rule and sort the results by priority, most urgent first."""
    recommendations = []
    for rule in RULES:
        recommendations.extend(rule(gaps))

    logger.debug("Generated %d recommendations", len(recommendations))
    return sorted(recommendations, key=lambda r: -PRIORITY_RANK.get(r.priority, 0))
