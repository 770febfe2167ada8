"""
Hotspot summarisation: reduce qualifying clusters to descriptive records.

A hotspot is a cluster with at least ``min_cluster_size`` members, described
by its centroid, per-category counts, dominant category and average
severity. Output order is deterministic: member count descending, then
centroid latitude ascending, then longitude ascending.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

import pandas as pd

from ..models import CrimeCategory, IncidentRecord
from .clustering import Cluster, ClusteringConfig, build_clusters


logger = logging.getLogger(__name__)

UNKNOWN_CATEGORY = "UNKNOWN"


@dataclass(frozen=True)
class HotspotDescriptor:
    """Aggregate description of one hotspot."""

    latitude: float
    """Centroid latitude (planar mean of member latitudes)."""

    longitude: float
    """Centroid longitude (planar mean of member longitudes)."""

    crime_count: int
    """Number of incidents in the hotspot."""

    dominant_crime_type: str
    """Most frequent category; ties go to the earlier canonical category."""

    crime_type_counts: Mapping[str, int] = field(default_factory=dict, hash=False)
    """Category name -> count, in canonical category order (read-only)."""

    average_severity: float = 0.0
    """Mean urgency score of members that have one (0.0 if none do)."""

    radius_km: float = 1.0
    """Clustering radius used to build the hotspot."""

    def __post_init__(self):
        object.__setattr__(self, "crime_type_counts", MappingProxyType(dict(self.crime_type_counts)))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "crimeCount": self.crime_count,
            "dominantCrimeType": self.dominant_crime_type,
            "crimeTypeCounts": dict(self.crime_type_counts),
            "averageSeverity": self.average_severity,
            "radiusKm": self.radius_km,
        }


def _category_name(incident: IncidentRecord) -> str:
    category = incident.crime_category
    if category is not None:
        return category.value
    if incident.category is None or not str(incident.category).strip():
        return UNKNOWN_CATEGORY
    return str(incident.category).strip().upper()


def _canonical_key(name: str):
    # Known categories in declaration order, anything else after them by name
    if name in CrimeCategory.__members__:
        return (CrimeCategory.rank(CrimeCategory[name]), name)
    return (len(CrimeCategory), name)


def _members_frame(members: Iterable[IncidentRecord]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "lat": m.latitude,
                "lon": m.longitude,
                "category": _category_name(m),
                "score": m.urgency_score,
            }
            for m in members
        ],
        columns=["lat", "lon", "category", "score"],
    )


def summarize_cluster(cluster: Cluster, radius_km: float) -> HotspotDescriptor:
    """Describe a single cluster as a hotspot, regardless of its size."""
    df = _members_frame(cluster.members)

    counts = df["category"].value_counts()
    ordered = sorted(counts.index, key=_canonical_key)
    type_counts = {name: int(counts[name]) for name in ordered}

    # max() keeps the first maximum, and ``ordered`` is canonical
    dominant = max(ordered, key=lambda name: type_counts[name])

    scores = pd.to_numeric(df["score"], errors="coerce").dropna()
    average = float(scores.mean()) if len(scores) else 0.0

    return HotspotDescriptor(
        latitude=float(df["lat"].mean()),
        longitude=float(df["lon"].mean()),
        crime_count=len(df),
        dominant_crime_type=dominant,
        crime_type_counts=type_counts,
        average_severity=average,
        radius_km=radius_km,
    )


def summarize_clusters(
    clusters: Sequence[Cluster],
    min_cluster_size: int,
    radius_km: float,
) -> List[HotspotDescriptor]:
    """
    Turn qualifying clusters into ranked hotspots.

    Args:
        clusters: Clusters from :func:`build_clusters`
        min_cluster_size: Smallest cluster reported (caller guarantees >= 2)
        radius_km: Radius recorded on every descriptor

    Returns:
        Hotspots sorted by count descending, then centroid lat/lon ascending
    """
    qualifying = [c for c in clusters if c.size >= min_cluster_size]
    hotspots = [summarize_cluster(c, radius_km) for c in qualifying]
    hotspots.sort(key=lambda h: (-h.crime_count, h.latitude, h.longitude))
    return hotspots


def identify_hotspots(
    incidents: Sequence[IncidentRecord],
    min_cluster_size: int,
    config: Optional[ClusteringConfig] = None,
) -> List[HotspotDescriptor]:
    """
    Cluster a snapshot of incidents and report the hotspots.

    Incidents without coordinates are ignored. ``min_cluster_size`` is
    assumed to be validated (>= 2) by the caller.

    Example:
        >>> hotspots = identify_hotspots(incidents, min_cluster_size=3)
        >>> [h.crime_count for h in hotspots]
    """
    if config is None:
        config = ClusteringConfig()

    clusters, diagnostics = build_clusters(incidents, config)
    hotspots = summarize_clusters(clusters, min_cluster_size, config.radius_km)

    logger.info(
        "Hotspot analysis: %d incidents, %d without coordinates, %d clusters, %d hotspots (min size %d)",
        diagnostics.num_points,
        diagnostics.num_excluded,
        diagnostics.num_clusters,
        len(hotspots),
        min_cluster_size,
    )
    return hotspots


def count_by_location(incidents: Iterable[IncidentRecord]) -> Dict[str, int]:
    """
    Count incidents per free-text location.

    Coarse, coordinate-free view of where complaints come from. Incidents
    without a location are skipped; result is sorted by count descending,
    then location name.
    """
    locations = pd.Series(
        [inc.location.strip() for inc in incidents if inc.location and inc.location.strip()],
        dtype=object,
    )
    if locations.empty:
        return {}
    counts = locations.value_counts()
    ordered = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return {name: int(count) for name, count in ordered}
