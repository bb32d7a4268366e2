import logging
import math
from typing import Optional, List, Dict, Mapping

import numpy as np

from vaccine_aqi.config import BASELINE_VACCINATION_RATE, DEFAULT_POPULATION_DENSITY
from vaccine_aqi.models.schemas import (
    AirQualityRecord,
    RiskCategory,
    VaccinationRecord,
    VulnerabilityScore,
)
from vaccine_aqi.services.country_mapping import resolve_country

logger = logging.getLogger(__name__)

MAX_VACCINATION_RATE = 100.0
MAX_AQI = 500.0
MAX_POPULATION_DENSITY = 10000.0

VACCINATION_WEIGHT = 0.4
AQI_WEIGHT = 0.4
DENSITY_WEIGHT = 0.2

def _normalize(value: float, upper: float) -> float:
    return float(np.clip(value / upper, 0.0, 1.0))

def calculate_vulnerability_score(
    vaccination_rate: float,
    aqi_level: float,
    population_density: float
) -> int:
    """
    Composite 0-100 vulnerability index (higher is worse).

    Each input is scaled by its expected maximum (100 %, AQI 500,
    10000 people per unit area) and saturated into [0, 1] before weighting.
    """
    inputs = {
        "vaccination_rate": vaccination_rate,
        "aqi_level": aqi_level,
        "population_density": population_density,
    }
    for name, value in inputs.items():
        if value is None or math.isnan(value):
            raise ValueError(f"{name} must be a number, got {value!r}")

    vulnerability = (
        (1 - _normalize(vaccination_rate, MAX_VACCINATION_RATE)) * VACCINATION_WEIGHT
        + _normalize(aqi_level, MAX_AQI) * AQI_WEIGHT
        + _normalize(population_density, MAX_POPULATION_DENSITY) * DENSITY_WEIGHT
    )

    # half rounds up
    return int(math.floor(vulnerability * 100 + 0.5))

def get_risk_category(vulnerability_index: float) -> RiskCategory:
    if vulnerability_index < 25:
        return "low"
    if vulnerability_index < 50:
        return "moderate"
    if vulnerability_index < 75:
        return "high"
    return "severe"

def _country_vaccination_rates(vaccination_records: List[VaccinationRecord]) -> Dict[str, float]:
    rates: Dict[str, float] = {}
    for record in vaccination_records:
        rate = record.people_vaccinated_per_hundred
        if rate is None:
            continue
        info = resolve_country(record.iso_code) or resolve_country(record.location)
        key = info["code"] if info else record.iso_code or record.location
        rates[key] = max(rates.get(key, rate), rate)
    return rates

def build_vulnerability_scores(
    vaccination_records: List[VaccinationRecord],
    air_quality_records: List[AirQualityRecord],
    population_density: Optional[Mapping[str, float]] = None,
    default_density: float = DEFAULT_POPULATION_DENSITY,
    baseline_rate: float = BASELINE_VACCINATION_RATE
) -> List[VulnerabilityScore]:
    """
    Score every city that has air-quality measurements.

    A city's vaccination rate is the highest ``people_vaccinated_per_hundred``
    reported for its country; AQI records carry ISO2 country codes, which are
    joined to vaccination ISO3 codes through the country mapping.
    """
    country_rates = _country_vaccination_rates(vaccination_records)
    densities = population_density or {}

    cities: Dict[str, Dict[str, float]] = {}
    city_country: Dict[str, Optional[str]] = {}
    for record in air_quality_records:
        if not record.city or record.value is None:
            continue
        stats = cities.setdefault(record.city, {"aqi": 0.0, "count": 0})
        stats["aqi"] += record.value
        stats["count"] += 1
        city_country.setdefault(record.city, record.country)

    scores = []
    for city, stats in cities.items():
        info = resolve_country(city_country.get(city))
        key = info["code"] if info else city_country.get(city)
        vaccination_rate = country_rates.get(key, baseline_rate)
        avg_aqi = stats["aqi"] / stats["count"]
        density = densities.get(city, default_density)

        index = calculate_vulnerability_score(vaccination_rate, avg_aqi, density)
        scores.append(VulnerabilityScore(
            location=city,
            vaccination_rate=vaccination_rate,
            aqi_level=avg_aqi,
            population_density=density,
            vulnerability_index=index,
            risk_category=get_risk_category(index),
        ))

    scores.sort(key=lambda s: s.vulnerability_index, reverse=True)
    logger.debug(f"Scored {len(scores)} locations for vulnerability")
    return scores
