"""
Tests for vulnerability scoring and risk classification.
"""

import math

import pytest
from pydantic import ValidationError

from vaccine_aqi.models.schemas import AirQualityRecord, VaccinationRecord
from vaccine_aqi.services.vulnerability_service import (
    build_vulnerability_scores,
    calculate_vulnerability_score,
    get_risk_category,
)


def _aqi(city, value, country="IN", location_id=1):
    return AirQualityRecord(
        location_id=location_id,
        location=f"{city} station",
        parameter="pm25",
        value=value,
        unit="µg/m³",
        country=country,
        city=city,
    )


class TestCalculateVulnerabilityScore:
    """Tests for the weighted vulnerability index."""

    def test_best_case_is_zero(self):
        assert calculate_vulnerability_score(100, 0, 0) == 0

    def test_worst_case_is_hundred(self):
        assert calculate_vulnerability_score(0, 500, 10000) == 100

    def test_midpoint(self):
        """Half of every range gives half the maximum risk."""
        assert calculate_vulnerability_score(50, 250, 5000) == 50

    def test_out_of_range_inputs_saturate(self):
        # vaccination above 100 counts as 100, AQI and density cap at 1.0
        assert calculate_vulnerability_score(150, 1000, 20000) == 60
        # negatives clamp to 0
        assert calculate_vulnerability_score(-10, -5, -1) == 40

    def test_returns_int_within_bounds(self):
        for rate in (0, 12.5, 33, 70, 100):
            for aqi in (0, 42, 180, 499):
                for density in (0, 2500, 9999):
                    score = calculate_vulnerability_score(rate, aqi, density)
                    assert isinstance(score, int)
                    assert 0 <= score <= 100

    def test_nan_rejected(self):
        with pytest.raises(ValueError, match="aqi_level"):
            calculate_vulnerability_score(70, math.nan, 100)


class TestGetRiskCategory:
    """Threshold boundaries are inclusive on the lower end of each band."""

    @pytest.mark.parametrize("index,expected", [
        (0, "low"),
        (24, "low"),
        (25, "moderate"),
        (49, "moderate"),
        (50, "high"),
        (74, "high"),
        (75, "severe"),
        (100, "severe"),
    ])
    def test_boundaries(self, index, expected):
        assert get_risk_category(index) == expected


class TestBuildVulnerabilityScores:
    """Tests for per-city vulnerability tables."""

    def test_scores_cities_and_sorts_descending(self):
        vaccinations = [
            VaccinationRecord(location="India", iso_code="IND", date="2024-01-01", people_vaccinated_per_hundred=60),
            VaccinationRecord(location="India", iso_code="IND", date="2024-02-01", people_vaccinated_per_hundred=72),
        ]
        measurements = [
            _aqi("Pune", 100),
            _aqi("Delhi", 200),
            _aqi("Delhi", 300),
            _aqi("Paris", 50, country="FR"),
            _aqi(None, 400),
        ]

        scores = build_vulnerability_scores(
            vaccinations,
            measurements,
            population_density={"Delhi": 10000},
            default_density=0,
        )

        assert [s.location for s in scores] == ["Delhi", "Pune", "Paris"]

        delhi, pune, paris = scores
        assert delhi.aqi_level == 250
        assert delhi.vaccination_rate == 72
        assert delhi.population_density == 10000
        assert delhi.vulnerability_index == 51
        assert delhi.risk_category == "high"

        assert pune.vulnerability_index == 19
        assert pune.risk_category == "low"

        # no French vaccination data -> baseline rate
        assert paris.vaccination_rate == 70
        assert paris.vulnerability_index == 16

    def test_empty_inputs(self):
        assert build_vulnerability_scores([], []) == []

    def test_scores_are_immutable(self):
        scores = build_vulnerability_scores([], [_aqi("Delhi", 100)])
        with pytest.raises(ValidationError):
            scores[0].vulnerability_index = 0
