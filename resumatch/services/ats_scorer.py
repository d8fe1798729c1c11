"""
ATS (Applicant Tracking System) best-practices analysis.

Scores a parsed resume section by section the way an ATS reads it:
- Contact information completeness
- Professional summary quality
- Work experience structure (entries, dates, descriptions, metrics)
- Education and skills completeness
- Location, length, keyword density
- Quantified achievements and action verbs
- Overall structure and character hygiene

The overall score is a weighted average over the core sections only. The
remaining sections feed strengths and recommendations.
"""

import re
import logging
from dataclasses import dataclass, field
from typing import Mapping, Optional

from resumatch.services.resume_parser import StructuredResume

logger = logging.getLogger(__name__)


# Weights of the sections that make up the overall score
SECTION_WEIGHTS = {
    "contact": 0.15,
    "summary": 0.15,
    "experience": 0.25,
    "education": 0.15,
    "skills": 0.15,
    "location": 0.05,
    "length": 0.05,
}

STRENGTH_THRESHOLD = 80
COMPLETE_THRESHOLD = 70

# section: (factor name, deduction, impact, status when below threshold, status otherwise)
COMPATIBILITY_FACTORS = (
    ("contact", "Contact Information", 20, "High", "Missing or Incomplete", "Complete"),
    ("experience", "Work Experience", 25, "Critical", "Missing or Incomplete", "Complete"),
    ("education", "Education", 15, "High", "Missing or Incomplete", "Complete"),
    ("skills", "Skills", 15, "High", "Missing or Incomplete", "Complete"),
    ("summary", "Professional Summary", 10, "Medium", "Missing or Incomplete", "Complete"),
    ("location", "Location", 5, "Low", "Missing", "Present"),
)

SUMMARY_ACTION_VERBS = ("developed", "managed", "led", "created", "improved", "achieved", "delivered", "designed")
SUMMARY_SKILL_WORDS = ("experience", "skills", "expertise", "proficient", "knowledge")

DENSITY_KEYWORDS = (
    "javascript", "python", "java", "react", "angular", "vue", "node", "sql",
    "aws", "docker", "kubernetes", "git", "html", "css", "typescript", "api",
)

STRONG_VERBS = (
    "achieved", "delivered", "developed", "implemented", "improved", "increased",
    "led", "managed", "optimized", "reduced", "created", "designed", "executed",
    "launched", "established", "transformed", "built", "enhanced", "streamlined",
)
WEAK_VERBS = ("worked", "did", "helped", "assisted", "participated", "involved")

FORMAT_SECTION_HEADERS = ("experience", "education", "skills", "summary", "objective", "contact")

WORDS_PER_PAGE = 275


@dataclass
class SectionAnalysis:
    """Analysis result for a specific resume section."""
    name: str
    score: int  # 0-100
    present: bool = False
    issues: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)
    metrics: dict = field(default_factory=dict)


@dataclass
class Strength:
    section: str
    score: int
    message: str


@dataclass
class ATSCompatibility:
    score: int
    factors: list[dict] = field(default_factory=list)


@dataclass
class ATSBestPracticesResult:
    """Complete ATS best-practices analysis."""
    overall_score: int  # 0-100
    grade: str  # A+ ... F
    sections: dict[str, SectionAnalysis]
    strengths: list[Strength]
    ats_compatibility: ATSCompatibility


def weighted_section_score(sections: Mapping[str, SectionAnalysis], weights: Mapping[str, float]) -> int:
    """
    Weighted average of section scores, renormalized over the sections present.

    A section missing from ``sections`` drops out of both the numerator and
    the denominator. Returns 0 when no weighted section is present.
    """
    weighted = 0.0
    total_weight = 0.0
    for name, weight in weights.items():
        section = sections.get(name)
        if section is None:
            continue
        weighted += section.score * weight
        total_weight += weight

    if total_weight <= 0:
        return 0
    return max(0, min(100, round(weighted / total_weight)))


class ATSScorer:
    """
    ATS best-practices scoring engine.

    Works on the raw resume text plus its heuristic ``StructuredResume``.
    Stateless: one instance can serve concurrent requests.
    """

    def __init__(self):
        self.experience_metric_pattern = re.compile(
            r"\d+%|\$\d+|\d+\s+(?:years?|people|projects?|users?)",
            re.IGNORECASE,
        )
        self.achievement_patterns = (
            re.compile(r"\d+%"),
            re.compile(r"\$\d+"),
            re.compile(r"\d+\s+(?:years?|people|projects?|users?|customers?|team\s+members?)", re.IGNORECASE),
        )
        self.location_patterns = (
            re.compile(r"\b[A-Z][a-z]+,[ \t]*[A-Z]{2}\b"),
            re.compile(r"\b(?:[Ll]ocated|[Bb]ased)[ \t]+in[ \t]+[A-Z][a-z]+"),
        )
        self.bullet_pattern = re.compile(r"[•·▪▫◦‣⁃\-*]")
        self.non_ascii_pattern = re.compile(r"[^\x00-\x7F]")
        self.density_patterns = [re.compile(rf"\b{re.escape(k)}\b", re.IGNORECASE) for k in DENSITY_KEYWORDS]
        self.strong_verb_patterns = [re.compile(rf"\b{v}\w*\b", re.IGNORECASE) for v in STRONG_VERBS]
        self.weak_verb_patterns = [re.compile(rf"\b{v}\w*\b", re.IGNORECASE) for v in WEAK_VERBS]

    def analyze(self, text: str, structured: Optional[StructuredResume] = None) -> ATSBestPracticesResult:
        """
        Perform ATS best-practices analysis.

        Args:
            text: Raw resume text
            structured: Parsed resume; an empty one is used when omitted

        Returns:
            ATSBestPracticesResult with per-section scores and the overall score
        """
        text = text or ""
        structured = structured or StructuredResume()

        sections = {
            "contact": self._analyze_contact(structured),
            "summary": self._analyze_summary(structured),
            "experience": self._analyze_experience(structured, text),
            "education": self._analyze_education(structured),
            "skills": self._analyze_skills(structured),
            "location": self._analyze_location(structured, text),
            "length": self._analyze_length(text),
            "keywords": self._analyze_keywords(text),
            "achievements": self._analyze_achievements(text),
            "action_verbs": self._analyze_action_verbs(text),
            "format": self._analyze_format(text),
        }

        overall = weighted_section_score(sections, SECTION_WEIGHTS)
        logger.debug(
            "ATS best practices: overall %d (%s)",
            overall,
            ", ".join(f"{name}={section.score}" for name, section in sections.items()),
        )

        return ATSBestPracticesResult(
            overall_score=overall,
            grade=self._score_to_grade(overall),
            sections=sections,
            strengths=self._identify_strengths(sections),
            ats_compatibility=self._calculate_compatibility(sections),
        )

    def _analyze_contact(self, resume: StructuredResume) -> SectionAnalysis:
        """Analyze contact information completeness."""
        info = resume.contact_info
        completeness = 0.0
        issues = []
        recommendations = []

        if info.email:
            completeness += 33.3
        else:
            issues.append("Missing email address")

        if info.phone:
            completeness += 33.3
        else:
            issues.append("Missing phone number")

        if info.name:
            completeness += 33.3
        else:
            issues.append("Name not clearly identified")

        if info.linkedin:
            completeness += 10
        else:
            recommendations.append("Consider adding LinkedIn profile")

        if info.address:
            completeness += 10
        else:
            recommendations.append("Consider adding location/address")

        score = min(100, round(completeness))
        reachable = bool(info.email or info.phone)
        if not reachable:
            # A recruiter has no way to reach the candidate
            score = min(score, 30)

        return SectionAnalysis(
            name="contact",
            score=score,
            present=reachable,
            issues=issues,
            recommendations=recommendations,
            metrics={"has_email": bool(info.email), "has_phone": bool(info.phone), "completeness": score},
        )

    def _analyze_summary(self, resume: StructuredResume) -> SectionAnalysis:
        """Analyze professional summary."""
        summary = resume.summary or ""

        if len(summary) < 50:
            return SectionAnalysis(
                name="summary",
                score=0,
                issues=["Missing or too short professional summary"],
                metrics={"quality": 0, "length": len(summary)},
            )

        quality = 0
        issues = []
        recommendations = []

        # Optimal: 100-300 characters
        if 100 <= len(summary) <= 300:
            quality += 40
        elif len(summary) < 100:
            quality += 20
            issues.append("Professional summary is too brief - aim for 2-4 sentences")
        else:
            quality += 30
            issues.append("Professional summary is too long - keep it concise")

        lowered = summary.lower()
        if any(verb in lowered for verb in SUMMARY_ACTION_VERBS):
            quality += 30
        else:
            quality += 10
            recommendations.append("Add action verbs to make summary more impactful")

        if any(word in lowered for word in SUMMARY_SKILL_WORDS):
            quality += 30
        else:
            quality += 20
            recommendations.append("Include relevant skills or expertise in summary")

        quality = min(100, quality)
        return SectionAnalysis(
            name="summary",
            score=quality,
            present=True,
            issues=issues,
            recommendations=recommendations,
            metrics={"quality": quality, "length": len(summary)},
        )

    def _analyze_experience(self, resume: StructuredResume, text: str) -> SectionAnalysis:
        """Analyze work experience structure."""
        entries = resume.work_experience
        if not entries:
            return SectionAnalysis(
                name="experience",
                score=0,
                issues=["Missing work experience section"],
                metrics={"entries": 0, "missing_dates": 0, "missing_descriptions": 0},
            )

        score = 0
        issues = []
        recommendations = []

        if len(entries) >= 2:
            score += 30
        else:
            score += 15
            issues.append("Consider adding more work experience entries")

        missing_dates = sum(1 for e in entries if not e.dates)
        if missing_dates == 0:
            score += 25
        else:
            score += 10
            issues.append(f"{missing_dates} experience entries missing dates")

        missing_descriptions = sum(1 for e in entries if not e.description)
        if missing_descriptions == 0:
            score += 25
        else:
            score += 10
            issues.append(f"{missing_descriptions} experience entries missing descriptions")

        if self.experience_metric_pattern.search(text):
            score += 20
        else:
            score += 5
            recommendations.append(
                "Add quantifiable achievements to work experience (numbers, percentages, metrics)"
            )

        return SectionAnalysis(
            name="experience",
            score=min(100, score),
            present=True,
            issues=issues,
            recommendations=recommendations,
            metrics={
                "entries": len(entries),
                "missing_dates": missing_dates,
                "missing_descriptions": missing_descriptions,
            },
        )

    def _analyze_education(self, resume: StructuredResume) -> SectionAnalysis:
        """Analyze education section."""
        entries = resume.education
        if not entries:
            return SectionAnalysis(
                name="education",
                score=0,
                issues=["Missing education section"],
                metrics={"entries": 0},
            )

        score = 0
        issues = []
        recommendations = []

        if all(e.degree for e in entries):
            score += 40
        else:
            score += 20
            issues.append("Some education entries missing degree information")

        if all(e.institution for e in entries):
            score += 40
        else:
            score += 20
            issues.append("Some education entries missing institution name")

        if any(e.dates for e in entries):
            score += 20
        else:
            recommendations.append("Consider adding dates to education entries")

        return SectionAnalysis(
            name="education",
            score=min(100, score),
            present=True,
            issues=issues,
            recommendations=recommendations,
            metrics={"entries": len(entries)},
        )

    def _analyze_skills(self, resume: StructuredResume) -> SectionAnalysis:
        """Analyze skills coverage."""
        skills = resume.skills
        total = skills.total
        if total == 0:
            return SectionAnalysis(
                name="skills",
                score=0,
                issues=["Missing skills section"],
                metrics={"total": 0},
            )

        score = 0
        issues = []
        recommendations = []

        if total >= 10:
            score += 40
        elif total >= 5:
            score += 30
        else:
            score += 15
            issues.append("Skills section is too brief - add more relevant skills")

        if skills.technical:
            score += 30
        else:
            issues.append("Missing technical skills")

        if skills.soft:
            score += 20
        else:
            score += 10
            recommendations.append("Consider adding soft skills")

        if skills.tools:
            score += 10

        return SectionAnalysis(
            name="skills",
            score=min(100, score),
            present=True,
            issues=issues,
            recommendations=recommendations,
            metrics={"total": total},
        )

    def _analyze_location(self, resume: StructuredResume, text: str) -> SectionAnalysis:
        if resume.contact_info.address:
            return SectionAnalysis(name="location", score=100, present=True)

        if any(pattern.search(text) for pattern in self.location_patterns):
            return SectionAnalysis(
                name="location",
                score=80,
                present=True,
                recommendations=["Consider adding location to contact section for better ATS parsing"],
            )

        return SectionAnalysis(
            name="location",
            score=50,
            issues=["Location/address not found - ATS systems often filter by location"],
            recommendations=["Add your location (city, state) to improve ATS compatibility"],
        )

    def _analyze_length(self, text: str) -> SectionAnalysis:
        word_count = len(text.split())
        page_estimate = -(-word_count // WORDS_PER_PAGE)
        issues = []
        recommendations = []

        if 275 <= word_count <= 1100:
            score = 100
        elif word_count < 275:
            score = 60
            issues.append("Resume is too short - aim for at least 1 page")
            recommendations.append("Add more details to work experience and skills")
        elif word_count <= 1650:
            score = 80
            issues.append("Resume is longer than optimal (2+ pages)")
            recommendations.append("Consider condensing to 1-2 pages for better ATS compatibility")
        else:
            score = 50
            issues.append("Resume is too long (3+ pages) - ATS systems prefer 1-2 pages")
            recommendations.append("Condense resume to 1-2 pages by removing less relevant information")

        return SectionAnalysis(
            name="length",
            score=score,
            present=word_count > 0,
            issues=issues,
            recommendations=recommendations,
            metrics={"word_count": word_count, "page_estimate": page_estimate},
        )

    def _analyze_keywords(self, text: str) -> SectionAnalysis:
        """Density of common technical keywords; 1-3% reads naturally to an ATS."""
        words = [w for w in text.lower().split() if len(w) > 2]
        if not words:
            return SectionAnalysis(name="keywords", score=0, metrics={"density": 0.0})

        keyword_count = sum(len(pattern.findall(text)) for pattern in self.density_patterns)
        density = keyword_count / len(words) * 100

        if 1 <= density <= 3:
            return SectionAnalysis(name="keywords", score=100, present=True, metrics={"density": density})
        if density < 1:
            return SectionAnalysis(
                name="keywords",
                score=60,
                present=keyword_count > 0,
                issues=["Low keyword density - add more relevant technical keywords"],
                recommendations=["Include more technical terms and skills throughout your resume"],
                metrics={"density": density},
            )
        return SectionAnalysis(
            name="keywords",
            score=70,
            present=True,
            issues=["High keyword density - may appear over-optimized"],
            recommendations=["Reduce keyword repetition - aim for natural language"],
            metrics={"density": density},
        )

    def _analyze_achievements(self, text: str) -> SectionAnalysis:
        count = sum(len(pattern.findall(text)) for pattern in self.achievement_patterns)

        if count >= 3:
            return SectionAnalysis(name="achievements", score=100, present=True, metrics={"count": count})
        if count >= 1:
            return SectionAnalysis(
                name="achievements",
                score=70,
                present=True,
                issues=["Add more quantifiable achievements"],
                recommendations=["Include more metrics, percentages, and numbers in your achievements"],
                metrics={"count": count},
            )
        return SectionAnalysis(
            name="achievements",
            score=30,
            issues=["No quantifiable achievements found"],
            recommendations=["Add specific numbers, percentages, and metrics to your work experience"],
            metrics={"count": 0},
        )

    def _analyze_action_verbs(self, text: str) -> SectionAnalysis:
        strong = sum(len(p.findall(text)) for p in self.strong_verb_patterns)
        weak = sum(len(p.findall(text)) for p in self.weak_verb_patterns)
        metrics = {"strong": strong, "weak": weak}

        total = strong + weak
        if total == 0:
            return SectionAnalysis(
                name="action_verbs",
                score=50,
                issues=["No action verbs found"],
                recommendations=["Use action verbs to start your bullet points"],
                metrics=metrics,
            )

        ratio = strong / total
        if ratio >= 0.7:
            return SectionAnalysis(name="action_verbs", score=100, present=True, metrics=metrics)
        if ratio >= 0.5:
            return SectionAnalysis(
                name="action_verbs",
                score=80,
                present=True,
                recommendations=["Replace some weak verbs with stronger action verbs"],
                metrics=metrics,
            )
        return SectionAnalysis(
            name="action_verbs",
            score=60,
            present=True,
            issues=["Too many weak verbs (worked, helped, assisted)"],
            recommendations=["Replace weak verbs with strong action verbs (developed, achieved, delivered)"],
            metrics=metrics,
        )

    def _analyze_format(self, text: str) -> SectionAnalysis:
        """Analyze bullets, character hygiene and section headers."""
        score = 100
        issues = []
        recommendations = []

        if not self.bullet_pattern.search(text):
            score -= 10
            issues.append("No bullet points detected - use bullets for better readability")
            recommendations.append("Use bullet points to list achievements and responsibilities")

        if len(self.non_ascii_pattern.findall(text)) > 50:
            score -= 15
            issues.append("Many special characters detected - may cause ATS parsing issues")
            recommendations.append("Use standard characters and fonts for better ATS compatibility")

        headers = [h for h in FORMAT_SECTION_HEADERS if re.search(rf"\b{h}\b", text, re.IGNORECASE)]
        if len(headers) < 3:
            score -= 20
            issues.append("Missing clear section headers")
            recommendations.append("Use clear section headers (Experience, Education, Skills)")

        return SectionAnalysis(
            name="format",
            score=max(0, score),
            present=bool(text.strip()),
            issues=issues,
            recommendations=recommendations,
            metrics={"section_headers": len(headers)},
        )

    def _identify_strengths(self, sections: Mapping[str, SectionAnalysis]) -> list[Strength]:
        strengths = []
        for name, section in sections.items():
            if section.score >= STRENGTH_THRESHOLD:
                label = name.replace("_", " ").capitalize()
                strengths.append(Strength(
                    section=name,
                    score=section.score,
                    message=f"{label} section is well-structured",
                ))
        return strengths

    def _calculate_compatibility(self, sections: Mapping[str, SectionAnalysis]) -> ATSCompatibility:
        score = 100
        factors = []
        for name, factor, deduction, impact, weak_status, ok_status in COMPATIBILITY_FACTORS:
            section = sections.get(name)
            if section is None or section.score < COMPLETE_THRESHOLD:
                score -= deduction
                factors.append({"factor": factor, "status": weak_status, "impact": impact})
            else:
                factors.append({"factor": factor, "status": ok_status, "impact": impact})
        return ATSCompatibility(score=max(0, score), factors=factors)

    def _score_to_grade(self, score: int) -> str:
        """Convert numeric score to letter grade."""
        if score >= 95:
            return "A+"
        elif score >= 90:
            return "A"
        elif score >= 85:
            return "A-"
        elif score >= 80:
            return "B+"
        elif score >= 75:
            return "B"
        elif score >= 70:
            return "B-"
        elif score >= 65:
            return "C+"
        elif score >= 60:
            return "C"
        elif score >= 55:
            return "C-"
        elif score >= 50:
            return "D"
        else:
            return "F"


# Singleton instance
_ats_scorer: Optional[ATSScorer] = None


def get_ats_scorer() -> ATSScorer:
    """Get or create the ATS scorer singleton."""
    global _ats_scorer
    if _ats_scorer is None:
        _ats_scorer = ATSScorer()
    return _ats_scorer
