"""
Pytest configuration and shared fixtures for crime-hotspot-core tests.

This file provides:
- An incident factory
- Sample incident snapshots with known clustering outcomes
"""

from datetime import datetime, timedelta
from itertools import count
from typing import Callable, List

import pytest
import numpy as np

from crime_core.models import CrimeCategory, IncidentRecord


# ==============================================================================
# Environment
# ==============================================================================

@pytest.fixture(autouse=True)
def default_profile(monkeypatch):
    """Run every test against the packaged default analysis profile."""
    monkeypatch.delenv("HOTSPOT_PROFILE", raising=False)


# ==============================================================================
# Incident Factory
# ==============================================================================

@pytest.fixture
def make_incident() -> Callable[..., IncidentRecord]:
    """Factory building incidents with sequential ids."""
    ids = count(1)

    def _make(
        lat=None,
        lon=None,
        category=CrimeCategory.THEFT,
        description="",
        score=None,
        filed_at=None,
        location=None,
        id=None,
    ) -> IncidentRecord:
        return IncidentRecord(
            id=next(ids) if id is None else id,
            category=category,
            description=description,
            latitude=lat,
            longitude=lon,
            filed_at=filed_at,
            urgency_score=score,
            location=location,
        )

    return _make


# ==============================================================================
# Sample Snapshots
# ==============================================================================

@pytest.fixture
def tight_group_and_outlier(make_incident) -> List[IncidentRecord]:
    """Three incidents within ~0.1 km of each other near (0, 0) and one far away."""
    return [
        make_incident(0.0000, 0.0000, CrimeCategory.THEFT, score=60),
        make_incident(0.0005, 0.0005, CrimeCategory.ASSAULT, score=80),
        make_incident(0.0006, 0.0004, CrimeCategory.THEFT, score=70),
        make_incident(10.0, 10.0, CrimeCategory.ROBBERY, score=90),
    ]


@pytest.fixture
def equator_chain(make_incident) -> List[IncidentRecord]:
    """
    Three incidents on the equator ~0.89 km apart (A-B, B-C); A-C is ~1.78 km.

    With a 1 km radius, anchor clustering seeded at A yields [A, B] and [C];
    transitive clustering yields [A, B, C].
    """
    return [
        make_incident(0.0, 0.000, id="A"),
        make_incident(0.0, 0.008, id="B"),
        make_incident(0.0, 0.016, id="C"),
    ]


@pytest.fixture
def scattered_snapshot(make_incident) -> List[IncidentRecord]:
    """Deterministic pseudo-random snapshot, some incidents without coordinates."""
    rng = np.random.default_rng(42)
    categories = list(CrimeCategory)
    base = datetime(2024, 1, 1)
    incidents = []
    for i in range(60):
        category = categories[int(rng.integers(len(categories)))]
        filed = base + timedelta(hours=int(rng.integers(24 * 30)))
        if i % 7 == 0:
            incidents.append(make_incident(category=category, filed_at=filed))
        else:
            lat = float(-1.25 + rng.uniform(0, 0.05))
            lon = float(36.85 + rng.uniform(0, 0.05))
            incidents.append(make_incident(lat, lon, category, score=int(rng.integers(101)), filed_at=filed))
    return incidents
