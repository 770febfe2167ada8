"""Pydantic models for the hotspot analysis boundary."""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List

from pydantic import BaseModel, Field, model_validator

from .spatial.hotspots import HotspotDescriptor


class HotspotAnalysisRequest(BaseModel):
    """Parameters of one hotspot analysis, validated before the core runs."""

    start_date: datetime = Field(..., alias="startDate", description="Start of the analysis period")
    end_date: datetime = Field(..., alias="endDate", description="End of the analysis period")
    min_cluster_size: int = Field(
        3,
        alias="minClusterSize",
        ge=2,
        description="Minimum number of complaints for a cluster to count as a hotspot",
    )

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def _check_period(self) -> "HotspotAnalysisRequest":
        if self.end_date < self.start_date:
            raise ValueError("endDate must not be before startDate")
        return self


class HotspotResponse(BaseModel):
    """Serialisable form of a hotspot descriptor."""

    latitude: float
    longitude: float
    crime_count: int = Field(..., alias="crimeCount")
    dominant_crime_type: str = Field(..., alias="dominantCrimeType")
    crime_type_counts: Dict[str, int] = Field(default_factory=dict, alias="crimeTypeCounts")
    average_severity: float = Field(..., alias="averageSeverity")
    radius_km: float = Field(..., alias="radiusKm")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_descriptor(cls, hotspot: HotspotDescriptor) -> "HotspotResponse":
        return cls(**hotspot.to_dict())


class HotspotAnalysisResponse(BaseModel):
    hotspots: List[HotspotResponse]
