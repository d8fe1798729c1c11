"""Detection of quantified achievements (percentages, amounts, team sizes...)."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


# (type, pattern); the metric is the first non-empty numeric group
ACHIEVEMENT_PATTERNS = (
    ("percentage_change", re.compile(
        r"(?:increased|decreased|improved|reduced|boosted|enhanced|grew|expanded)\s+(?:by\s+)?(\d+(?:\.\d+)?)\s*%",
        re.IGNORECASE,
    )),
    ("percentage", re.compile(
        r"(\d+(?:\.\d+)?)\s*%\s+(?:increase|decrease|improvement|reduction|growth|boost)",
        re.IGNORECASE,
    )),
    ("monetary_value", re.compile(
        r"(\$?\d+(?:,\d{3})*(?:\.\d+)?[KMB]?)\s+(?:dollars?|users?|customers?|revenue|sales|projects?|team\s+members?)",
        re.IGNORECASE,
    )),
    ("cost_savings", re.compile(
        r"(?:saved|reduced|cut|decreased)\s+(\$?\d+(?:,\d{3})*(?:\.\d+)?[KMB]?)",
        re.IGNORECASE,
    )),
    ("team_size", re.compile(
        r"(?:managed|led|supervised|oversaw)\s+(?:a\s+)?(?:team\s+of\s+)?(\d+)\s+"
        r"(?:people|employees|team\s+members?|developers?)",
        re.IGNORECASE,
    )),
    ("project_count", re.compile(
        r"(?:completed|delivered|executed|implemented)\s+(\d+)\s+(?:projects?|tasks?|features?|applications?)",
        re.IGNORECASE,
    )),
    ("experience_years", re.compile(
        r"(\d+)\+?\s*(?:years?|yrs?)\s+(?:of\s+)?(?:experience|exp)",
        re.IGNORECASE,
    )),
)

IMPACT_VERBS = (
    "increased", "decreased", "improved", "reduced", "boosted",
    "enhanced", "grew", "expanded", "saved", "cut", "delivered",
    "achieved", "accomplished", "exceeded", "surpassed",
)

MAX_LISTED = 20
MIN_LINE_LENGTH = 10


@dataclass
class Achievement:
    statement: str
    metric: str
    type: str
    line_number: int


@dataclass
class AchievementAnalysis:
    total_achievements: int
    impact_statements: int
    metrics: int
    achievement_score: int
    achievements: list[Achievement] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)

    @property
    def has_quantifiable_results(self) -> bool:
        return self.total_achievements > 0


def achievement_score(count: int, total_lines: int) -> int:
    """Score the achievement density; one per 5-10 lines is ideal."""
    if total_lines == 0:
        return 0
    per_line = count / total_lines
    if 0.1 <= per_line <= 0.2:
        return 100
    if 0.05 <= per_line < 0.1:
        return 80
    if 0.2 < per_line <= 0.3:
        return 90
    if per_line > 0.3:
        return 70
    if per_line > 0:
        return 50
    return 20


def _recommendations(count: int, impact_count: int) -> list[str]:
    if count == 0:
        return ["Add quantifiable achievements to your resume, e.g. 'Increased sales by 30%'"]
    if count < 3:
        return ["Add more quantifiable achievements - aim for 3-5 per role"]
    if impact_count < count * 0.5:
        return ["Convert more achievements to impact statements with action verbs"]
    return []


def analyze_achievements(resume_text: str) -> AchievementAnalysis:
    lines = [line.strip() for line in (resume_text or "").splitlines() if len(line.strip()) > MIN_LINE_LENGTH]

    achievements: list[Achievement] = []
    impact_count = 0
    metrics: list[str] = []

    for number, line in enumerate(lines, start=1):
        is_impact = any(verb in line.lower() for verb in IMPACT_VERBS)
        for kind, pattern in ACHIEVEMENT_PATTERNS:
            for match in pattern.finditer(line):
                metric = match.group(1)
                achievements.append(Achievement(statement=line, metric=metric, type=kind, line_number=number))
                if is_impact:
                    impact_count += 1
                if metric not in metrics:
                    metrics.append(metric)

    return AchievementAnalysis(
        total_achievements=len(achievements),
        impact_statements=impact_count,
        metrics=len(metrics),
        achievement_score=achievement_score(len(achievements), len(lines)),
        achievements=achievements[:MAX_LISTED],
        recommendations=_recommendations(len(achievements), impact_count),
    )
