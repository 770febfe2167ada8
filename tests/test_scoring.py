"""
Unit Tests for Scoring Module (crime_core/scoring)

Tests the severity table, keyword groups, score components, clamping and
the score breakdown telemetry.
"""

import logging
from types import MappingProxyType

import pytest

from crime_core.models import CrimeCategory, IncidentRecord
from crime_core.scoring.tables import (
    DEFAULT_KEYWORD_GROUPS,
    LOWEST_SEVERITY,
    SEVERITY_TABLE,
    KeywordGroup,
    get_severity,
)
from crime_core.scoring.scorer import (
    DESCRIPTION_CAP,
    PriorityScorer,
    ScoreBreakdown,
    base_points,
    score_incident,
)


def _incident(category, description="", located=False):
    lat, lon = (-1.2345, 36.8765) if located else (None, None)
    return IncidentRecord(
        id="c-1",
        category=category,
        description=description,
        latitude=lat,
        longitude=lon,
    )


# ==============================================================================
# Table Tests
# ==============================================================================

class TestSeverityTable:
    """Test the static category severity lookup."""

    def test_covers_every_category(self):
        assert set(SEVERITY_TABLE) == set(CrimeCategory)

    def test_values_in_range(self):
        assert all(0 <= v <= 100 for v in SEVERITY_TABLE.values())

    def test_extremes(self):
        assert SEVERITY_TABLE[CrimeCategory.HOMICIDE] == 100
        assert SEVERITY_TABLE[CrimeCategory.OTHER] == LOWEST_SEVERITY == 30
        assert max(SEVERITY_TABLE.values()) == 100
        assert min(SEVERITY_TABLE.values()) == 30

    def test_immutable(self):
        assert isinstance(SEVERITY_TABLE, MappingProxyType)
        with pytest.raises(TypeError):
            SEVERITY_TABLE[CrimeCategory.OTHER] = 99

    def test_unknown_category_gets_lowest_bucket(self):
        assert get_severity("JAYWALKING") == LOWEST_SEVERITY
        assert get_severity(None) == LOWEST_SEVERITY

    def test_lookup_by_name(self):
        assert get_severity("robbery") == 80
        assert get_severity(CrimeCategory.ROBBERY) == 80


class TestKeywordGroups:
    """Test description keyword groups."""

    def test_default_points(self):
        points = {g.name: g.points for g in DEFAULT_KEYWORD_GROUPS}
        assert points == {
            "weapon_injury": 7,
            "threat_fear": 5,
            "vulnerable_victim": 5,
            "in_progress": 10,
        }

    def test_substring_match(self):
        group = KeywordGroup(name="test", keywords=("knife",), points=1)
        assert group.matches("he had a knifelike object")
        assert not group.matches("nothing here")

    def test_keywords_stored_lower_case(self):
        group = KeywordGroup(name="arma", keywords=["Pistola", "ARMA blanca"], points=7)
        assert group.keywords == ("pistola", "arma blanca")

    def test_mixed_case_keywords_match_case_insensitively(self):
        groups = (KeywordGroup(name="arma", keywords=("Pistola",), points=7),)
        scorer = PriorityScorer(keyword_groups=groups)

        assert scorer.description_points("una pistola") == 7
        assert scorer.description_points("UNA PISTOLA") == 7


# ==============================================================================
# Score Component Tests
# ==============================================================================

class TestBasePoints:
    """Test severity scaling."""

    @pytest.mark.parametrize("severity,expected", [
        (100, 70), (95, 67), (55, 39), (35, 25), (30, 21), (0, 0),
    ])
    def test_scaled_and_rounded(self, severity, expected):
        assert base_points(severity) == expected

    def test_caps_at_seventy(self):
        assert max(base_points(v) for v in SEVERITY_TABLE.values()) == 70


class TestDescriptionPoints:
    """Test keyword-based description analysis."""

    @pytest.fixture
    def scorer(self):
        return PriorityScorer()

    @pytest.mark.parametrize("description,expected", [
        ("the suspect had a gun", 7),
        ("I am scared to go home", 5),
        ("an elderly neighbour was targeted", 5),
        ("break-in in progress", 10),
    ])
    def test_single_group(self, scorer, description, expected):
        assert scorer.description_points(description) == expected

    def test_case_insensitive(self, scorer):
        assert scorer.description_points("HAPPENING NOW at the corner") == 10
        assert scorer.description_points("Armed Man") == 7

    def test_group_counted_once(self, scorer):
        assert scorer.description_points("gun, knife and a weapon, blood everywhere") == 7

    def test_two_groups(self, scorer):
        assert scorer.description_points("threatened with a knife") == 12

    def test_capped(self, scorer):
        text = "armed man threatening a child, happening now"
        assert scorer.description_points(text) == DESCRIPTION_CAP == 15

    @pytest.mark.parametrize("description", ["", None])
    def test_empty(self, scorer, description):
        assert scorer.description_points(description) == 0

    def test_no_keywords(self, scorer):
        assert scorer.description_points("my bicycle was taken from the rack") == 0


# ==============================================================================
# PriorityScorer Tests
# ==============================================================================

class TestPriorityScorer:
    """Test the complete scoring formula."""

    def test_highest_severity_empty_description(self):
        assert score_incident(_incident(CrimeCategory.HOMICIDE)) == 75

    def test_lowest_severity_in_progress_located(self):
        incident = _incident(CrimeCategory.OTHER, "robbery in progress near the bank", located=True)
        assert score_incident(incident) == 41

    def test_geographic_bonus(self):
        unlocated = score_incident(_incident(CrimeCategory.THEFT))
        located = score_incident(_incident(CrimeCategory.THEFT, located=True))
        assert located - unlocated == 5

    def test_maximum_reachable(self):
        incident = _incident(
            CrimeCategory.HOMICIDE,
            "armed attacker threatening a child right now",
            located=True,
        )
        assert score_incident(incident) == 95

    def test_unknown_category(self):
        assert score_incident(_incident("LOITERING")) == 26
        assert score_incident(_incident(None)) == 26

    @pytest.mark.parametrize("category", list(CrimeCategory))
    @pytest.mark.parametrize("description", [
        "",
        "nothing unusual",
        "armed man threatening a child, happening now",
        "blood, fear, disabled, ongoing",
    ])
    @pytest.mark.parametrize("located", [True, False])
    def test_score_in_range(self, category, description, located):
        score = score_incident(_incident(category, description, located))
        assert isinstance(score, int)
        assert 0 <= score <= 100

    def test_deterministic(self):
        incident = _incident(CrimeCategory.ROBBERY, "he had a knife", located=True)
        assert len({score_incident(incident) for _ in range(5)}) == 1

    def test_does_not_mutate_incident(self):
        incident = _incident(CrimeCategory.ROBBERY, "he had a knife")
        score_incident(incident)
        assert incident.urgency_score is None

    def test_clamped_to_upper_bound(self):
        scorer = PriorityScorer(severity_table={CrimeCategory.HOMICIDE: 200})
        assert scorer.score(_incident(CrimeCategory.HOMICIDE, located=True)) == 100

    def test_clamped_to_lower_bound(self):
        groups = (KeywordGroup(name="retracted", keywords=("false alarm",), points=-50),)
        scorer = PriorityScorer(keyword_groups=groups)
        assert scorer.score(_incident(CrimeCategory.OTHER, "false alarm")) == 0

    def test_custom_keyword_groups(self):
        groups = (KeywordGroup(name="arma", keywords=("pistola",), points=7),)
        scorer = PriorityScorer(keyword_groups=groups)
        assert scorer.score(_incident(CrimeCategory.OTHER, "Tenía una PISTOLA")) == 21 + 7 + 5


class TestScoreBreakdown:
    """Test per-incident telemetry."""

    def test_components(self):
        incident = _incident(CrimeCategory.ROBBERY, "threatened with a knife", located=True)
        breakdown = PriorityScorer().breakdown(incident)

        assert isinstance(breakdown, ScoreBreakdown)
        assert breakdown.incident_id == "c-1"
        assert breakdown.category == "ROBBERY"
        assert breakdown.base_score == 56
        assert breakdown.description_score == 12
        assert breakdown.geographic_score == 5
        assert breakdown.recency_score == 5
        assert breakdown.matched_groups == ["weapon_injury", "threat_fear"]
        assert breakdown.final_score == 78

    def test_unknown_category_reported_as_none(self):
        breakdown = PriorityScorer().breakdown(_incident("LOITERING"))
        assert breakdown.category is None
        assert breakdown.base_score == 21

    def test_to_dict_and_json(self):
        breakdown = PriorityScorer().breakdown(_incident(CrimeCategory.FRAUD))
        data = breakdown.to_dict()

        assert data["final_score"] == breakdown.final_score
        assert '"final_score"' in breakdown.to_json()

    def test_debug_telemetry_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="crime_core.scoring.scorer"):
            PriorityScorer().score(_incident(CrimeCategory.ARSON))

        assert any("Scoring telemetry" in r.getMessage() for r in caplog.records)
