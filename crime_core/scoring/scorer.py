"""
Complaint Priority Scoring Module

Rule-based urgency score in [0, 100] for a single incident, with an
optional per-component breakdown for telemetry and debugging.

    score = clamp(base + description + geographic + recency, 0, 100)

- base: category severity scaled to at most 70 points
- description: keyword groups, each counted once, capped at 15 points
- geographic: 5 points when both coordinates are present
- recency: flat 5 points for every newly scored incident
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence
from dataclasses import dataclass, asdict, field
import logging
import json

from ..models import CrimeCategory, IncidentRecord
from .tables import (
    DEFAULT_KEYWORD_GROUPS,
    SEVERITY_TABLE,
    KeywordGroup,
    get_severity,
)


logger = logging.getLogger(__name__)

BASE_WEIGHT_PERCENT = 70
DESCRIPTION_CAP = 15
GEOGRAPHIC_BONUS = 5
RECENCY_BONUS = 5
MIN_SCORE = 0
MAX_SCORE = 100


@dataclass
class ScoreBreakdown:
    """
    Detailed breakdown of score components for telemetry.

    Attributes:
        incident_id: Identifier of the scored incident
        category: Category name used for the severity lookup
        base_score: Contribution from category severity (0-70)
        description_score: Contribution from keyword groups (0-15)
        geographic_score: Contribution from coordinate presence (0 or 5)
        recency_score: Flat recency bonus
        matched_groups: Names of the keyword groups that matched
        final_score: Clamped total
    """
    incident_id: Any
    category: Optional[str]
    base_score: int
    description_score: int
    geographic_score: int
    recency_score: int
    matched_groups: List[str] = field(default_factory=list)
    final_score: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)

    def to_json(self) -> str:
        """Convert to JSON string for logging."""
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)


def base_points(severity: int) -> int:
    """Severity scaled by 0.7 and rounded half up, so 30 -> 21 and 100 -> 70."""
    return (severity * BASE_WEIGHT_PERCENT + 50) // 100


class PriorityScorer:
    """
    Stateless priority scorer.

    Holds only immutable tables, so one instance can be shared freely
    between callers and threads.
    """

    def __init__(
        self,
        severity_table: Optional[Mapping[CrimeCategory, int]] = None,
        keyword_groups: Optional[Sequence[KeywordGroup]] = None,
    ):
        """
        Initialize the scorer.

        Args:
            severity_table: Category -> severity mapping. If None, uses SEVERITY_TABLE
            keyword_groups: Description keyword groups. If None, uses the defaults
        """
        self.severity_table = SEVERITY_TABLE if severity_table is None else severity_table
        self.keyword_groups = tuple(DEFAULT_KEYWORD_GROUPS if keyword_groups is None else keyword_groups)

    def description_points(self, description: Optional[str]) -> int:
        return self._analyze_description(description)[0]

    def _analyze_description(self, description: Optional[str]):
        if not description:
            return 0, []

        text = description.lower()
        matched = [group for group in self.keyword_groups if group.matches(text)]
        points = sum(group.points for group in matched)
        return min(DESCRIPTION_CAP, points), [group.name for group in matched]

    def breakdown(self, incident: IncidentRecord) -> ScoreBreakdown:
        """Score an incident and return every component."""
        category = incident.crime_category
        base = base_points(get_severity(category, self.severity_table))
        description, matched = self._analyze_description(incident.description)
        geographic = GEOGRAPHIC_BONUS if incident.has_coordinates else 0

        total = base + description + geographic + RECENCY_BONUS
        result = ScoreBreakdown(
            incident_id=incident.id,
            category=category.value if category is not None else None,
            base_score=base,
            description_score=description,
            geographic_score=geographic,
            recency_score=RECENCY_BONUS,
            matched_groups=matched,
            final_score=max(MIN_SCORE, min(MAX_SCORE, total)),
        )

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Scoring telemetry: {result.to_json()}")

        return result

    def score(self, incident: IncidentRecord) -> int:
        """Urgency score in [0, 100] for ``incident``."""
        return self.breakdown(incident).final_score


DEFAULT_SCORER = PriorityScorer()


def score_incident(incident: IncidentRecord) -> int:
    """
    Score an incident using the default tables.

    Convenience function for the common case; the caller persists the
    returned value onto the record.
    """
    return DEFAULT_SCORER.score(incident)
