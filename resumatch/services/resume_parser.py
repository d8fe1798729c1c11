"""Heuristic structured resume parsing.

Turns raw resume text into a best-effort ``StructuredResume`` using regular
expressions and line-position rules. Nothing here raises on odd input: a
field that cannot be found is simply left empty.
"""
import logging
import re
from dataclasses import dataclass, field
from typing import Optional

from resumatch.services.vocabulary import RESUME_SKILL_GROUPS, SECTION_HEADINGS

logger = logging.getLogger(__name__)


EMAIL_PATTERN = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")

# Tried in order, first match wins
PHONE_PATTERNS = (
    re.compile(r"(?:\+?\d{1,3}[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}"),
    re.compile(r"(?:\+?\d{1,3}[-.\s]?)?\d{3}[-.\s]?\d{3}[-.\s]?\d{4}"),
    re.compile(r"\(\d{3}\)\s?\d{3}[-.\s]?\d{4}"),
)

LINKEDIN_PATTERN = re.compile(r"linkedin\.com/(?:in|pub)/([A-Za-z0-9-]+)", re.IGNORECASE)
GITHUB_PATTERN = re.compile(r"github\.com/([A-Za-z0-9-]+)", re.IGNORECASE)
WEBSITE_PATTERN = re.compile(
    r"(?:https?://|www\.)[A-Za-z0-9.-]+\.[A-Za-z]{2,}[^\s,;)]*"
    r"|\b[A-Za-z0-9-]+\.(?:com|org|io|dev|me|co|app|tech|info|site|xyz)\b(?:/[^\s,;)]*)?",
    re.IGNORECASE,
)
NAME_PATTERN = re.compile(r"^([A-Z][a-z]+(?:[ \t]+[A-Z][a-z]+){0,2})\b")
ADDRESS_PATTERN = re.compile(r"[A-Z][a-z]+(?:[ \t]+[A-Z][a-z]+)*,?[ \t]+[A-Z]{2}[ \t]+\d{5}")

EXPERIENCE_KEYWORDS = ("experience", "employment", "work history", "professional experience", "career")
JOB_TITLE_LINE = re.compile(
    r"^(?:Senior|Junior|Lead|Principal|Staff|Associate|Manager|Director|VP|President|Engineer|"
    r"Developer|Designer|Analyst|Consultant|Specialist|Coordinator|Assistant|Executive|Intern)\b[\w \t]*",
    re.IGNORECASE,
)
DATE_RANGE = re.compile(
    r"((?:[A-Za-z]{3,9}\.?\s+)?\d{4})\s*(?:-|–|—|to)\s*((?:[A-Za-z]{3,9}\.?\s+)?\d{4}|present|current|now)\b",
    re.IGNORECASE,
)
COMPANY_SEPARATORS = " \t|,-–—@·•:()"

DEGREE_PATTERN = re.compile(
    r"(?<!scrum )\b(?:Bachelor(?:'?s)?|Master(?:'?s)?|Ph\.?D\.?|B\.S\.|B\.A\.|M\.S\.|M\.A\.|MBA|B\.Tech|M\.Tech)"
    r"(?![A-Za-z])[\w .'&]*",
    re.IGNORECASE,
)
INSTITUTION_PATTERN = re.compile(
    r"((?:[A-Z][\w&.'-]*\s+)*(?:University|College|Institute|School|Academy)"
    r"(?:\s+of(?:\s+[A-Z][\w&.'-]*)+)?)"
)
YEAR_RANGE = re.compile(r"\b((?:19|20)\d{2})(?:\s*[-–—]\s*((?:19|20)\d{2}|present|current))?", re.IGNORECASE)
GPA_PATTERN = re.compile(r"(?:GPA|G\.P\.A\.?)\s*:?\s*(\d\.\d+)", re.IGNORECASE)

CERTIFICATION_LINE = re.compile(
    r"\b[A-Z][\w+#.-]*(?:[ \t]+[\w+#.-]+)*?[ \t]+(?i:certified|certification|certificate|license|licensed)\b"
)

PROJECT_KEYWORDS = ("project", "projects", "portfolio")
SUMMARY_KEYWORDS = ("summary", "objective", "profile", "about")
NUMBERED_ITEM = re.compile(r"^\d+\.")

# Line offsets searched around a degree for its institution, dates and GPA
PAIRING_WINDOW = 2
WINDOW_OFFSETS = (0, 1, 2, -1, -2)

MAX_EXPERIENCE_ENTRIES = 10
MAX_EXPERIENCE_BLOCK = 50
MAX_EDUCATION_ENTRIES = 5
MAX_CERTIFICATIONS = 10
MAX_PROJECTS = 5


@dataclass
class ContactInfo:
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None
    website: Optional[str] = None


@dataclass
class WorkExperience:
    title: Optional[str] = None
    company: Optional[str] = None
    dates: Optional[str] = None
    description: list[str] = field(default_factory=list)


@dataclass
class Education:
    degree: Optional[str] = None
    institution: Optional[str] = None
    dates: Optional[str] = None
    gpa: Optional[str] = None


@dataclass
class SkillGroups:
    technical: list[str] = field(default_factory=list)
    soft: list[str] = field(default_factory=list)
    tools: list[str] = field(default_factory=list)
    languages: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.technical) + len(self.soft) + len(self.tools)


@dataclass
class Project:
    name: str
    description: Optional[str] = None


@dataclass
class StructuredResume:
    """Best-effort structured view of a resume. Lists keep their textual order."""

    contact_info: ContactInfo = field(default_factory=ContactInfo)
    work_experience: list[WorkExperience] = field(default_factory=list)
    education: list[Education] = field(default_factory=list)
    skills: SkillGroups = field(default_factory=SkillGroups)
    certifications: list[str] = field(default_factory=list)
    projects: list[Project] = field(default_factory=list)
    summary: Optional[str] = None


def _is_section_heading(line: str) -> bool:
    return line.lower().strip(" \t:") in SECTION_HEADINGS


def extract_contact_info(text: str, lines: list[str]) -> ContactInfo:
    contact = ContactInfo()

    email = EMAIL_PATTERN.search(text)
    if email:
        contact.email = email.group(0)

    for pattern in PHONE_PATTERNS:
        phone = pattern.search(text)
        if phone:
            contact.phone = phone.group(0).strip()
            break

    linkedin = LINKEDIN_PATTERN.search(text)
    if linkedin:
        contact.linkedin = f"linkedin.com/in/{linkedin.group(1)}"

    github = GITHUB_PATTERN.search(text)
    if github:
        contact.github = f"github.com/{github.group(1)}"

    email_domain = contact.email.split("@", 1)[1].lower() if contact.email else None
    for match in WEBSITE_PATTERN.finditer(text):
        candidate = match.group(0)
        lowered = candidate.lower()
        if "linkedin" in lowered or "github" in lowered:
            continue
        if match.start() > 0 and text[match.start() - 1] in "@.":
            continue
        if email_domain and lowered.endswith(email_domain):
            continue
        contact.website = candidate
        break

    for line in lines[:5]:
        name = NAME_PATTERN.match(line)
        if not name:
            continue
        candidate = name.group(1).strip()
        if "@" in candidate or "http" in candidate.lower() or _is_section_heading(candidate):
            continue
        contact.name = candidate
        break

    address = ADDRESS_PATTERN.search(text)
    if address:
        contact.address = address.group(0)

    return contact


def _find_experience_heading(lines: list[str]) -> int:
    for index, line in enumerate(lines):
        lowered = line.lower()
        if len(line) < 40 and any(keyword in lowered for keyword in EXPERIENCE_KEYWORDS):
            return index
    return -1


def _company_from_date_line(line: str) -> Optional[str]:
    company = DATE_RANGE.sub(" ", line).strip(COMPANY_SEPARATORS)
    company = re.sub(r"\s{2,}", " ", company)
    return company or None


def extract_work_experience(lines: list[str]) -> list[WorkExperience]:
    heading = _find_experience_heading(lines)

    if heading == -1:
        entries = []
        for line in lines:
            title = JOB_TITLE_LINE.match(line)
            if title:
                entries.append(WorkExperience(title=title.group(0).strip()))
        return entries[:MAX_EXPERIENCE_ENTRIES]

    entries: list[WorkExperience] = []
    current: Optional[WorkExperience] = None
    needs_title = False

    for index in range(heading + 1, min(heading + 1 + MAX_EXPERIENCE_BLOCK, len(lines))):
        line = lines[index]
        if _is_section_heading(line):
            break

        dates = DATE_RANGE.search(line)
        if dates:
            title = None
            previous = lines[index - 1] if index - 1 > heading else None
            if (
                previous
                and len(previous) < 100
                and not DATE_RANGE.search(previous)
                and (current is None or previous != current.title)
            ):
                title = previous
                if current and current.description and current.description[-1] == previous:
                    current.description.pop()

            if current:
                entries.append(current)
            current = WorkExperience(
                title=title,
                company=_company_from_date_line(line),
                dates=f"{dates.group(1)} - {dates.group(2)}",
            )
            needs_title = title is None
            continue

        if current is None:
            continue
        if needs_title and len(line) < 100:
            current.title = line
            needs_title = False
        elif len(line) > 10:
            current.description.append(line)

    if current:
        entries.append(current)
    return entries[:MAX_EXPERIENCE_ENTRIES]


def _search_window(lines: list[str], center: int, pattern: re.Pattern) -> Optional[re.Match]:
    for offset in WINDOW_OFFSETS:
        index = center + offset
        if 0 <= index < len(lines):
            match = pattern.search(lines[index])
            if match:
                return match
    return None


def _dates_near(lines: list[str], center: int) -> Optional[str]:
    match = _search_window(lines, center, YEAR_RANGE)
    if not match:
        return None
    if match.group(2):
        return f"{match.group(1)} - {match.group(2)}"
    return match.group(1)


def _gpa_near(lines: list[str], center: int) -> Optional[str]:
    match = _search_window(lines, center, GPA_PATTERN)
    return match.group(1) if match else None


def extract_education(lines: list[str]) -> list[Education]:
    """
    Collect degrees and institutions line by line, then pair each degree with
    the nearest unused institution at most two lines away. Institutions left
    over become institution-only entries.
    """
    degrees = []
    institutions = []
    for index, line in enumerate(lines):
        for match in DEGREE_PATTERN.finditer(line):
            degrees.append((index, match.group(0).strip()))
        for match in INSTITUTION_PATTERN.finditer(line):
            institutions.append((index, match.group(1).strip()))

    used: set[int] = set()
    anchored: list[tuple[int, Education]] = []

    for line_index, degree in degrees:
        candidates = [
            (abs(inst_line - line_index), position)
            for position, (inst_line, _) in enumerate(institutions)
            if position not in used and abs(inst_line - line_index) <= PAIRING_WINDOW
        ]
        institution = None
        if candidates:
            _, position = min(candidates)
            used.add(position)
            institution = institutions[position][1]
        anchored.append((line_index, Education(
            degree=degree,
            institution=institution,
            dates=_dates_near(lines, line_index),
            gpa=_gpa_near(lines, line_index),
        )))

    for position, (line_index, institution) in enumerate(institutions):
        if position in used:
            continue
        anchored.append((line_index, Education(
            institution=institution,
            dates=_dates_near(lines, line_index),
            gpa=_gpa_near(lines, line_index),
        )))

    anchored.sort(key=lambda item: item[0])
    return [entry for _, entry in anchored][:MAX_EDUCATION_ENTRIES]


def extract_skills(text: str) -> SkillGroups:
    lowered = text.lower()
    found = {
        group: [skill for skill in skills if skill in lowered]
        for group, skills in RESUME_SKILL_GROUPS.items()
    }
    return SkillGroups(**found)


def extract_certifications(lines: list[str]) -> list[str]:
    found = []
    for line in lines:
        for match in CERTIFICATION_LINE.finditer(line):
            phrase = match.group(0).strip()
            if len(phrase) < 100:
                found.append(phrase)
    return list(dict.fromkeys(found))[:MAX_CERTIFICATIONS]


def extract_projects(lines: list[str]) -> list[Project]:
    start = -1
    for index, line in enumerate(lines):
        lowered = line.lower()
        if len(lowered) < 30 and any(keyword in lowered for keyword in PROJECT_KEYWORDS):
            start = index
            break
    if start == -1:
        return []

    projects = []
    for line in lines[start + 1:]:
        if _is_section_heading(line):
            break
        if 10 < len(line) < 100 and not NUMBERED_ITEM.match(line):
            projects.append(Project(name=line))
            if len(projects) >= MAX_PROJECTS:
                break
    return projects


def extract_summary(lines: list[str]) -> Optional[str]:
    for index, line in enumerate(lines[:10]):
        lowered = line.lower()
        if len(lowered) < 30 and any(keyword in lowered for keyword in SUMMARY_KEYWORDS):
            following = [candidate for candidate in lines[index + 1:index + 4] if len(candidate) > 20]
            if following:
                return " ".join(following)

    first_paragraph = " ".join(lines[:5])
    if 50 < len(first_paragraph) < 500:
        return first_paragraph
    return None


def parse(text: str) -> StructuredResume:
    """Parse resume text into a ``StructuredResume``. Never raises."""
    text = (text or "").strip()
    if not text:
        return StructuredResume()

    lines = [line.strip() for line in text.splitlines() if line.strip()]

    resume = StructuredResume(
        contact_info=extract_contact_info(text, lines),
        work_experience=extract_work_experience(lines),
        education=extract_education(lines),
        skills=extract_skills(text),
        certifications=extract_certifications(lines),
        projects=extract_projects(lines),
        summary=extract_summary(lines),
    )
    logger.debug(
        "Parsed resume: %d experience, %d education entries",
        len(resume.work_experience),
        len(resume.education),
    )
    return resume
