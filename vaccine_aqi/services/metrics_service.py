import logging
from datetime import datetime, timezone
from typing import Optional, Dict, Sequence

import pandas as pd

from vaccine_aqi.config import VULNERABLE_AQI_THRESHOLD
from vaccine_aqi.models.schemas import AirQualityRecord, DashboardMetrics, VaccinationRecord
from vaccine_aqi.services.correlation_service import average_aqi_by_city

logger = logging.getLogger(__name__)

def latest_by_location(records: Sequence[VaccinationRecord]) -> Dict[str, VaccinationRecord]:
    latest: Dict[str, VaccinationRecord] = {}
    for record in records:
        existing = latest.get(record.location)
        if existing is None or record.date > existing.date:
            latest[record.location] = record
    return latest

def compute_dashboard_metrics(
    vaccination_records: Sequence[VaccinationRecord],
    air_quality_records: Sequence[AirQualityRecord],
    now: Optional[datetime] = None,
    vulnerable_threshold: float = VULNERABLE_AQI_THRESHOLD
) -> DashboardMetrics:
    now = now or datetime.now(timezone.utc)

    if not vaccination_records:
        return DashboardMetrics(
            total_vaccinations=0,
            vaccination_rate=0,
            average_aqi=0,
            vulnerable_locations=0,
            last_updated=now,
        )

    latest = pd.DataFrame([
        {
            "rate": r.people_vaccinated_per_hundred or 0,
            "total": r.total_vaccinations or 0,
        }
        for r in latest_by_location(vaccination_records).values()
    ])

    values = [r.value for r in air_quality_records if r.value is not None]
    average_aqi = sum(values) / len(values) if values else 0.0

    vulnerable = sum(
        1 for avg in average_aqi_by_city(air_quality_records).values()
        if avg > vulnerable_threshold
    )

    metrics = DashboardMetrics(
        total_vaccinations=float(latest["total"].sum()),
        vaccination_rate=float(latest["rate"].mean()),
        average_aqi=average_aqi,
        vulnerable_locations=vulnerable,
        last_updated=now,
    )
    logger.debug(f"Dashboard metrics: {metrics}")
    return metrics
