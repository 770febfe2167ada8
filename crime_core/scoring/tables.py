"""
Scoring Tables Module

Static lookup tables for the priority scorer: base severity per crime
category and the description keyword groups. Both are immutable and built
once at import; alternative tables (e.g. localised keywords) can be loaded
from YAML and passed to the scorer explicitly.
"""

from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

import yaml

from ..models import CrimeCategory


LOWEST_SEVERITY = 30

# Base severity per category (0-100)
SEVERITY_TABLE: Mapping[CrimeCategory, int] = MappingProxyType({
    CrimeCategory.HOMICIDE: 100,
    CrimeCategory.KIDNAPPING: 95,
    CrimeCategory.SEXUAL_ASSAULT: 90,
    CrimeCategory.DOMESTIC_VIOLENCE: 85,
    CrimeCategory.ROBBERY: 80,
    CrimeCategory.ASSAULT: 75,
    CrimeCategory.ARSON: 70,
    CrimeCategory.BURGLARY: 65,
    CrimeCategory.DRUG_RELATED: 60,
    CrimeCategory.THEFT: 55,
    CrimeCategory.FRAUD: 50,
    CrimeCategory.CYBER_CRIME: 45,
    CrimeCategory.VANDALISM: 40,
    CrimeCategory.HARASSMENT: 35,
    CrimeCategory.OTHER: LOWEST_SEVERITY,
})


@dataclass(frozen=True)
class KeywordGroup:
    """
    A set of description keywords worth a fixed number of points.

    Attributes:
        name: Group name (used in score breakdowns)
        keywords: Substrings, stored lower-cased; any one match triggers the group
        points: Points awarded once if the group matches
    """
    name: str
    keywords: Tuple[str, ...]
    points: int

    def __post_init__(self):
        object.__setattr__(self, "keywords", tuple(str(k).lower() for k in self.keywords))

    def matches(self, text: str) -> bool:
        """True if any keyword occurs in ``text`` (expected lower-cased)."""
        return any(keyword in text for keyword in self.keywords)


DEFAULT_KEYWORD_GROUPS: Tuple[KeywordGroup, ...] = (
    KeywordGroup(
        name="weapon_injury",
        keywords=("weapon", "gun", "knife", "armed", "blood", "bleeding", "injured", "hurt badly"),
        points=7,
    ),
    KeywordGroup(
        name="threat_fear",
        keywords=("threat", "threatening", "threatened", "danger", "dangerous", "scared", "afraid", "fear"),
        points=5,
    ),
    KeywordGroup(
        name="vulnerable_victim",
        keywords=("child", "children", "kid", "baby", "elderly", "disabled", "pregnant"),
        points=5,
    ),
    KeywordGroup(
        name="in_progress",
        keywords=("happening now", "in progress", "right now", "currently", "ongoing"),
        points=10,
    ),
)


def get_severity(category, table: Optional[Mapping[CrimeCategory, int]] = None) -> int:
    """
    Base severity for a category; unknown categories get the lowest bucket.

    Args:
        category: CrimeCategory member, category name, or None
        table: Severity table to use. If None, uses SEVERITY_TABLE
    """
    table = SEVERITY_TABLE if table is None else table
    parsed = CrimeCategory.parse(category)
    if parsed is None:
        return LOWEST_SEVERITY
    return table.get(parsed, LOWEST_SEVERITY)


def load_scoring_tables_from_yaml(
    yaml_path: Optional[str] = None,
) -> Tuple[Mapping[CrimeCategory, int], Tuple[KeywordGroup, ...]]:
    """
    Load severity and keyword tables from a YAML file.

    Args:
        yaml_path: Path to scoring.yaml. If None, uses the packaged configs/scoring.yaml

    Returns:
        (severity_table, keyword_groups). Sections missing from the file fall
        back to the built-in defaults; so does a missing file.

    YAML Format:
        ```yaml
        severity:
          HOMICIDE: 100
          OTHER: 30
        keyword_groups:
          - name: in_progress
            points: 10
            keywords: ["in progress", "right now"]
        ```

    Raises:
        ValueError: If a severity entry names an unknown category
    """
    if yaml_path is None:
        yaml_path = Path(__file__).parent.parent / "configs" / "scoring.yaml"

    yaml_path = Path(yaml_path)

    if not yaml_path.exists():
        return SEVERITY_TABLE, DEFAULT_KEYWORD_GROUPS

    with open(yaml_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    severity: Mapping[CrimeCategory, int] = SEVERITY_TABLE
    if data.get("severity"):
        merged: Dict[CrimeCategory, int] = dict(SEVERITY_TABLE)
        for name, value in data["severity"].items():
            category = CrimeCategory.parse(name)
            if category is None:
                raise ValueError(f"Unknown crime category '{name}' in {yaml_path}")
            merged[category] = int(value)
        severity = MappingProxyType(merged)

    groups = DEFAULT_KEYWORD_GROUPS
    if data.get("keyword_groups"):
        groups = tuple(
            KeywordGroup(
                name=str(entry["name"]),
                keywords=tuple(str(k) for k in entry.get("keywords", [])),
                points=int(entry.get("points", 0)),
            )
            for entry in data["keyword_groups"]
        )

    return severity, groups
