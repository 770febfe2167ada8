"""
crime_core: Crime hotspot clustering and complaint priority scoring.

Usage:
    from crime_core import IncidentRecord, identify_hotspots, score_incident

    incident.urgency_score = score_incident(incident)
    hotspots = identify_hotspots(incidents, min_cluster_size=3)
"""

from .models import CrimeCategory, IncidentRecord
from .spatial import (
    ClusteringConfig,
    HotspotDescriptor,
    InvalidInput,
    build_clusters,
    haversine_km,
    identify_hotspots,
)
from .scoring import PriorityScorer, ScoreBreakdown, score_incident
from .analysis import (
    analyze_hotspots,
    analyze_hotspots_default,
    assign_priority,
    filter_by_date_range,
)

__all__ = [
    "CrimeCategory",
    "IncidentRecord",
    "ClusteringConfig",
    "HotspotDescriptor",
    "InvalidInput",
    "build_clusters",
    "haversine_km",
    "identify_hotspots",
    "PriorityScorer",
    "ScoreBreakdown",
    "score_incident",
    "analyze_hotspots",
    "analyze_hotspots_default",
    "assign_priority",
    "filter_by_date_range",
]
