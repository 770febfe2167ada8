"""
Configuration loader for analysis profiles and environment variables.
"""

import os
from pathlib import Path
from typing import Dict, Any, Optional
import yaml

from ..spatial.clustering import ClusteringConfig


DEFAULT_PROFILE = "default"
PROFILE_ENV_VAR = "HOTSPOT_PROFILE"


class ConfigLoader:
    """Load and manage configuration from YAML files and environment."""

    CONFIG_DIR = Path(__file__).parent.parent / "configs"

    @classmethod
    def load_profile(cls, profile_name: str = DEFAULT_PROFILE) -> Dict[str, Any]:
        """
        Load an analysis profile configuration.

        Args:
            profile_name: Name of the profile (default, transitive, ...)

        Returns:
            Dictionary with configuration values

        Raises:
            FileNotFoundError: If profile doesn't exist
        """
        profile_path = cls.CONFIG_DIR / f"{profile_name}.yaml"

        if not profile_path.exists():
            available = sorted(f.stem for f in cls.CONFIG_DIR.glob("*.yaml"))
            raise FileNotFoundError(
                f"Profile '{profile_name}' not found. Available profiles: {', '.join(available)}"
            )

        with open(profile_path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    @classmethod
    def get_profile_from_env(cls) -> Optional[str]:
        """Get profile name from the HOTSPOT_PROFILE environment variable."""
        return os.getenv(PROFILE_ENV_VAR)

    @classmethod
    def load_default_or_env_profile(cls) -> Dict[str, Any]:
        """
        Load the profile named by the environment, or the default profile.

        Returns:
            Configuration dictionary
        """
        profile = cls.get_profile_from_env() or DEFAULT_PROFILE
        return cls.load_profile(profile)


def get_config() -> Dict[str, Any]:
    """Convenience function to get current configuration."""
    return ConfigLoader.load_default_or_env_profile()


def clustering_config_from_profile(profile: Dict[str, Any]) -> ClusteringConfig:
    """Build a ClusteringConfig from the ``clustering`` section of a profile."""
    section = profile.get("clustering") or {}
    defaults = ClusteringConfig()
    return ClusteringConfig(
        radius_km=float(section.get("radius_km", defaults.radius_km)),
        mode=str(section.get("mode", defaults.mode)),
    )


def default_min_cluster_size(profile: Dict[str, Any], fallback: int = 3) -> int:
    """``analysis.default_min_cluster_size`` from a profile."""
    section = profile.get("analysis") or {}
    return int(section.get("default_min_cluster_size", fallback))
