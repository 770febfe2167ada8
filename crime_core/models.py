"""
Incident data model shared by the clustering and scoring engines.

Records are owned by the caller (the persistence layer loads them); the
engines only read them, except for ``urgency_score`` which the caller writes
back after scoring.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Union


class CrimeCategory(str, Enum):
    """
    Closed enumeration of crime types.

    Declaration order is the canonical order used for every tie-break
    (dominant category of a hotspot, ordering of per-category counts).
    """

    THEFT = "THEFT"
    ASSAULT = "ASSAULT"
    BURGLARY = "BURGLARY"
    FRAUD = "FRAUD"
    VANDALISM = "VANDALISM"
    HARASSMENT = "HARASSMENT"
    DRUG_RELATED = "DRUG_RELATED"
    HOMICIDE = "HOMICIDE"
    KIDNAPPING = "KIDNAPPING"
    ROBBERY = "ROBBERY"
    CYBER_CRIME = "CYBER_CRIME"
    DOMESTIC_VIOLENCE = "DOMESTIC_VIOLENCE"
    SEXUAL_ASSAULT = "SEXUAL_ASSAULT"
    ARSON = "ARSON"
    OTHER = "OTHER"

    @classmethod
    def parse(cls, value: Union["CrimeCategory", str, None]) -> Optional["CrimeCategory"]:
        """
        Resolve a category from an enum member or a case-insensitive name.

        Returns None for unknown or empty values instead of raising, so that
        callers can fall back to the lowest severity bucket.
        """
        if value is None:
            return None
        if isinstance(value, cls):
            return value
        key = str(value).strip().upper().replace("-", "_").replace(" ", "_")
        return cls.__members__.get(key)

    @classmethod
    def rank(cls, category: "CrimeCategory") -> int:
        """Position of ``category`` in the canonical order."""
        return list(cls).index(category)


def _absent_if_nan(value: Optional[float]) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


@dataclass
class IncidentRecord:
    """
    Snapshot of one filed complaint.

    Attributes:
        id: Stable identifier assigned by the persistence layer
        category: Crime type (a CrimeCategory, or a raw name kept as-is)
        description: Free-text description, may be empty
        latitude: Latitude in decimal degrees, or None
        longitude: Longitude in decimal degrees, or None
        filed_at: When the complaint was filed
        urgency_score: Priority score 0-100, None until scored
        location: Free-text address as typed by the reporter
    """
    id: Union[int, str]
    category: Union[CrimeCategory, str, None]
    description: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    filed_at: Optional[datetime] = None
    urgency_score: Optional[int] = None
    location: Optional[str] = None

    def __post_init__(self):
        # NaN (e.g. from a pandas snapshot) means the coordinate is absent
        self.latitude = _absent_if_nan(self.latitude)
        self.longitude = _absent_if_nan(self.longitude)
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError(
                f"Incident {self.id!r}: latitude and longitude must be both present or both absent"
            )
        parsed = CrimeCategory.parse(self.category)
        if parsed is not None:
            self.category = parsed

    @property
    def has_coordinates(self) -> bool:
        return _absent_if_nan(self.latitude) is not None and _absent_if_nan(self.longitude) is not None

    @property
    def crime_category(self) -> Optional[CrimeCategory]:
        """Category as an enum member, or None when it is not recognised."""
        return CrimeCategory.parse(self.category)
