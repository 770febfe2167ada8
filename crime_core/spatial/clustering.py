"""
Anchor-radius proximity clustering of geotagged incidents.

This module provides:
1. Exclusion of incidents without coordinates
2. Anchor-radius clustering (default): membership is decided by distance to
   the cluster's seed only
3. Transitive clustering (alternate mode): the cluster grows from every newly
   added member, giving graph-connected clusters
4. Diagnostics describing what the clustering pass did

Seeds are chosen in input order, so the same snapshot in the same order always
yields the same partition. Cost is O(n^2) in the number of located incidents.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import numpy as np

from ..models import IncidentRecord
from .distance import haversine_km_many


logger = logging.getLogger(__name__)

DEFAULT_RADIUS_KM = 1.0
CLUSTERING_MODES = ("anchor", "transitive")


@dataclass
class ClusteringConfig:
    """Configuration for the proximity clustering pass."""

    radius_km: float = DEFAULT_RADIUS_KM
    """Membership threshold in kilometres (inclusive)."""

    mode: str = "anchor"
    """'anchor' compares candidates to the seed only; 'transitive' to every member."""

    def __post_init__(self):
        if self.mode not in CLUSTERING_MODES:
            raise ValueError(
                f"Unknown clustering mode '{self.mode}'. Expected one of: {', '.join(CLUSTERING_MODES)}"
            )
        if self.radius_km < 0:
            raise ValueError(f"radius_km must be non-negative, got {self.radius_km}")


@dataclass(frozen=True)
class Cluster:
    """A group of incidents produced by one clustering pass."""

    seed_id: object
    """Identifier of the incident that started the cluster."""

    members: Tuple[IncidentRecord, ...]
    """Member incidents in input order; the seed is always first."""

    @property
    def size(self) -> int:
        return len(self.members)

    @property
    def incident_ids(self) -> List[object]:
        return [m.id for m in self.members]


@dataclass
class ClusteringDiagnostics:
    """Summary of a clustering pass."""

    num_points: int
    """Total number of incidents provided."""

    num_excluded: int
    """Incidents skipped because they have no coordinates."""

    num_clusters: int
    """Number of clusters formed (singletons included)."""

    cluster_sizes: List[int] = field(default_factory=list)
    """Size of each cluster, in formation order."""

    mode: str = "anchor"

    radius_km: float = DEFAULT_RADIUS_KM


def _grow_anchor(
    seed: int,
    lats: np.ndarray,
    lons: np.ndarray,
    assigned: np.ndarray,
    radius_km: float,
) -> List[int]:
    candidates = np.flatnonzero(~assigned)
    if candidates.size == 0:
        return []
    dist = haversine_km_many(lats[seed], lons[seed], lats[candidates], lons[candidates])
    hits = candidates[dist <= radius_km]
    assigned[hits] = True
    return hits.tolist()


def _grow_transitive(
    seed: int,
    lats: np.ndarray,
    lons: np.ndarray,
    assigned: np.ndarray,
    radius_km: float,
) -> List[int]:
    added: List[int] = []
    frontier = deque([seed])
    while frontier:
        center = frontier.popleft()
        hits = _grow_anchor(center, lats, lons, assigned, radius_km)
        added.extend(hits)
        frontier.extend(hits)
    return sorted(added)


def build_clusters(
    incidents: Sequence[IncidentRecord],
    config: Optional[ClusteringConfig] = None,
) -> Tuple[List[Cluster], ClusteringDiagnostics]:
    """
    Partition the located incidents into proximity clusters.

    Every incident with both coordinates ends up in exactly one cluster;
    incidents without coordinates are left out entirely.

    Args:
        incidents: Snapshot of incidents, in the order the caller loaded them
        config: Clustering configuration (uses defaults if None)

    Returns:
        (clusters, diagnostics). Clusters are returned in formation order,
        singletons included; size filtering is the summarizer's job.
    """
    if config is None:
        config = ClusteringConfig()

    located = [inc for inc in incidents if inc.has_coordinates]
    num_excluded = len(incidents) - len(located)
    if num_excluded:
        logger.debug("Excluded %d incident(s) without coordinates from clustering", num_excluded)

    lats = np.array([inc.latitude for inc in located], dtype=float)
    lons = np.array([inc.longitude for inc in located], dtype=float)
    assigned = np.zeros(len(located), dtype=bool)

    grow = _grow_anchor if config.mode == "anchor" else _grow_transitive

    clusters: List[Cluster] = []
    for seed in range(len(located)):
        if assigned[seed]:
            continue
        assigned[seed] = True
        members = [seed] + grow(seed, lats, lons, assigned, config.radius_km)
        clusters.append(Cluster(
            seed_id=located[seed].id,
            members=tuple(located[i] for i in members),
        ))

    diagnostics = ClusteringDiagnostics(
        num_points=len(incidents),
        num_excluded=num_excluded,
        num_clusters=len(clusters),
        cluster_sizes=[c.size for c in clusters],
        mode=config.mode,
        radius_km=config.radius_km,
    )
    return clusters, diagnostics
