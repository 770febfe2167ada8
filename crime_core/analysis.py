"""
Caller-side entry points around the clustering and scoring engines.

The engines assume validated input and never touch storage. These helpers do
the small amount of work a caller owes them: date pre-filtering, request
validation, and a safe default when scoring fails.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, List, Optional, Sequence

from .models import IncidentRecord
from .schemas import HotspotAnalysisRequest
from .scoring.scorer import PriorityScorer, DEFAULT_SCORER
from .spatial.clustering import ClusteringConfig
from .spatial.hotspots import HotspotDescriptor, identify_hotspots
from .tools.config_loader import (
    clustering_config_from_profile,
    default_min_cluster_size,
    get_config,
)


logger = logging.getLogger(__name__)

DEFAULT_MIN_CLUSTER_SIZE = 3
FALLBACK_SCORE = 0


def filter_by_date_range(
    incidents: Iterable[IncidentRecord],
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> List[IncidentRecord]:
    """
    Keep incidents filed within ``[start, end]``, preserving input order.

    A None bound is open-ended. When either bound is set, incidents without
    a filing timestamp are dropped.
    """
    if start is None and end is None:
        return list(incidents)

    kept = []
    for incident in incidents:
        filed = incident.filed_at
        if filed is None:
            continue
        if start is not None and filed < start:
            continue
        if end is not None and filed > end:
            continue
        kept.append(incident)
    return kept


def analyze_hotspots(
    incidents: Sequence[IncidentRecord],
    request: HotspotAnalysisRequest,
    config: Optional[ClusteringConfig] = None,
) -> List[HotspotDescriptor]:
    """
    Run a hotspot analysis for a validated request.

    Args:
        incidents: Snapshot loaded by the persistence layer
        request: Analysis period and minimum cluster size
        config: Clustering configuration. If None, uses the active profile
            (HOTSPOT_PROFILE, or the default profile)
    """
    if config is None:
        config = clustering_config_from_profile(get_config())

    snapshot = filter_by_date_range(incidents, request.start_date, request.end_date)
    logger.debug(
        "Analysing %d of %d incidents filed between %s and %s",
        len(snapshot), len(incidents), request.start_date, request.end_date,
    )
    return identify_hotspots(snapshot, request.min_cluster_size, config)


def analyze_hotspots_default(
    incidents: Sequence[IncidentRecord],
    start: datetime,
    end: datetime,
    config: Optional[ClusteringConfig] = None,
) -> List[HotspotDescriptor]:
    """
    Hotspots for a period using the active profile.

    The minimum cluster size comes from the profile's
    ``analysis.default_min_cluster_size`` (3 when unset); the clustering
    configuration too, unless ``config`` is given.
    """
    profile = get_config()
    if config is None:
        config = clustering_config_from_profile(profile)

    request = HotspotAnalysisRequest(
        start_date=start,
        end_date=end,
        min_cluster_size=default_min_cluster_size(profile, DEFAULT_MIN_CLUSTER_SIZE),
    )
    return analyze_hotspots(incidents, request, config)


def assign_priority(
    incident: IncidentRecord,
    scorer: Optional[PriorityScorer] = None,
) -> int:
    """
    Score a newly filed incident and store the score on it.

    If scoring fails unexpectedly the incident gets FALLBACK_SCORE, so no
    incident is left without a score. The failure is logged with traceback.
    """
    scorer = scorer or DEFAULT_SCORER
    try:
        score = scorer.score(incident)
    except Exception:
        logger.exception("Priority scoring failed for incident %r; using %d", incident.id, FALLBACK_SCORE)
        score = FALLBACK_SCORE
    incident.urgency_score = score
    return score
