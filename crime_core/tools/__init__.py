"""Configuration tools and utilities."""

from .config_loader import (
    ConfigLoader,
    clustering_config_from_profile,
    default_min_cluster_size,
    get_config,
)

__all__ = [
    "ConfigLoader",
    "clustering_config_from_profile",
    "default_min_cluster_size",
    "get_config",
]
