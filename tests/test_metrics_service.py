"""
Tests for dashboard summary metrics, AQI bands and country lookups.
"""

from datetime import datetime, timezone

import pytest

from vaccine_aqi.models.schemas import AirQualityRecord, VaccinationRecord
from vaccine_aqi.services.aqi_service import get_aqi_category, get_aqi_color
from vaccine_aqi.services.country_mapping import (
    get_all_cities_for_country,
    get_cities_for_state,
    get_country_code,
    get_country_iso3,
    get_country_list,
    get_states_for_country,
    resolve_country,
)
from vaccine_aqi.services.metrics_service import compute_dashboard_metrics, latest_by_location

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def _aqi(city, value):
    return AirQualityRecord(location_id=1, location=f"{city} station", parameter="pm25", value=value, city=city)


class TestComputeDashboardMetrics:

    def test_no_vaccination_data_gives_zeros(self):
        metrics = compute_dashboard_metrics([], [_aqi("Delhi", 300)], now=NOW)

        assert metrics.total_vaccinations == 0
        assert metrics.vaccination_rate == 0
        assert metrics.average_aqi == 0
        assert metrics.vulnerable_locations == 0
        assert metrics.last_updated == NOW

    def test_latest_record_per_location(self):
        vaccinations = [
            VaccinationRecord(location="India", iso_code="IND", date="2024-01-01",
                              people_vaccinated_per_hundred=50, total_vaccinations=100),
            VaccinationRecord(location="India", iso_code="IND", date="2024-02-01",
                              people_vaccinated_per_hundred=60, total_vaccinations=200),
            VaccinationRecord(location="Brazil", iso_code="BRA", date="2024-01-15",
                              people_vaccinated_per_hundred=80, total_vaccinations=300),
        ]
        measurements = [_aqi("Delhi", 200), _aqi("Delhi", 180), _aqi("Pune", 100)]

        metrics = compute_dashboard_metrics(vaccinations, measurements, now=NOW)

        assert metrics.total_vaccinations == 500
        assert metrics.vaccination_rate == 70
        assert metrics.average_aqi == pytest.approx(160)
        # Delhi averages 190, above the 150 threshold
        assert metrics.vulnerable_locations == 1

    def test_latest_by_location(self):
        records = [
            VaccinationRecord(location="India", iso_code="IND", date="2024-02-01"),
            VaccinationRecord(location="India", iso_code="IND", date="2024-03-01"),
            VaccinationRecord(location="India", iso_code="IND", date="2024-01-01"),
        ]
        assert latest_by_location(records)["India"].date == "2024-03-01"


class TestAqiBands:

    @pytest.mark.parametrize("value,category,color", [
        (0, "Good", "#00e400"),
        (50, "Good", "#00e400"),
        (51, "Moderate", "#ffff00"),
        (100, "Moderate", "#ffff00"),
        (150, "Unhealthy for Sensitive Groups", "#ff7e00"),
        (200, "Unhealthy", "#ff0000"),
        (300, "Very Unhealthy", "#8f3f97"),
        (301, "Hazardous", "#7e0023"),
    ])
    def test_bands(self, value, category, color):
        assert get_aqi_category(value) == category
        assert get_aqi_color(value) == color


class TestCountryMapping:

    def test_codes(self):
        assert get_country_code("India") == "IN"
        assert get_country_iso3("United Kingdom") == "GBR"

    def test_unknown_country_passes_through(self):
        assert get_country_code("Atlantis") == "Atlantis"
        assert get_country_iso3("Atlantis") == "Atlantis"
        assert get_states_for_country("Atlantis") == []

    def test_states_and_cities(self):
        assert "Maharashtra" in [s["name"] for s in get_states_for_country("India")]
        assert get_cities_for_state("India", "Maharashtra") == ["Mumbai", "Pune", "Nagpur", "Thane", "Nashik"]
        assert get_cities_for_state("India", "Nowhere") == []
        assert "Sydney" in get_all_cities_for_country("Australia")

    def test_country_list(self):
        assert len(get_country_list()) == 8
        assert "Japan" in get_country_list()

    def test_resolve_by_any_identifier(self):
        assert resolve_country("in")["name"] == "India"
        assert resolve_country("GBR")["name"] == "United Kingdom"
        assert resolve_country(" France ")["iso2"] == "FR"
        assert resolve_country("ZZ") is None
        assert resolve_country(None) is None
