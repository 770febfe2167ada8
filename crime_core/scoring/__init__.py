"""
Scoring Module for complaint prioritisation

Provides rule-based urgency scoring with:
- Immutable severity table keyed by crime category
- Table-driven description keyword groups
- Per-incident score breakdowns for telemetry
- YAML overrides for localised keyword tables

Usage:
    from crime_core.scoring import PriorityScorer, score_incident

    # Simple scoring
    incident.urgency_score = score_incident(incident)

    # Custom tables
    severity, groups = load_scoring_tables_from_yaml("my_scoring.yaml")
    scorer = PriorityScorer(severity_table=severity, keyword_groups=groups)
    breakdown = scorer.breakdown(incident)
"""

from .tables import (
    LOWEST_SEVERITY,
    SEVERITY_TABLE,
    DEFAULT_KEYWORD_GROUPS,
    KeywordGroup,
    get_severity,
    load_scoring_tables_from_yaml,
)

from .scorer import (
    DESCRIPTION_CAP,
    GEOGRAPHIC_BONUS,
    RECENCY_BONUS,
    PriorityScorer,
    ScoreBreakdown,
    base_points,
    score_incident,
)

__all__ = [
    # Tables
    "LOWEST_SEVERITY",
    "SEVERITY_TABLE",
    "DEFAULT_KEYWORD_GROUPS",
    "KeywordGroup",
    "get_severity",
    "load_scoring_tables_from_yaml",

    # Scoring
    "DESCRIPTION_CAP",
    "GEOGRAPHIC_BONUS",
    "RECENCY_BONUS",
    "PriorityScorer",
    "ScoreBreakdown",
    "base_points",
    "score_incident",
]
