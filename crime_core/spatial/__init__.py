"""
crime_core/spatial: Distances, proximity clustering, and hotspot summaries.

This module provides anchor-radius clustering of geotagged incidents and the
reduction of qualifying clusters into ranked hotspot descriptors.
"""

from .distance import (
    EARTH_RADIUS_KM,
    InvalidInput,
    haversine_km,
    haversine_km_many,
)
from .clustering import (
    DEFAULT_RADIUS_KM,
    Cluster,
    ClusteringConfig,
    ClusteringDiagnostics,
    build_clusters,
)
from .hotspots import (
    HotspotDescriptor,
    count_by_location,
    identify_hotspots,
    summarize_cluster,
    summarize_clusters,
)

__all__ = [
    "EARTH_RADIUS_KM",
    "InvalidInput",
    "haversine_km",
    "haversine_km_many",
    "DEFAULT_RADIUS_KM",
    "Cluster",
    "ClusteringConfig",
    "ClusteringDiagnostics",
    "build_clusters",
    "HotspotDescriptor",
    "count_by_location",
    "identify_hotspots",
    "summarize_cluster",
    "summarize_clusters",
]
