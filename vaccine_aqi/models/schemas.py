from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Dict, Any, Literal
from datetime import datetime

RiskCategory = Literal["low", "moderate", "high", "severe"]
Significance = Literal["significant", "not_significant"]
CorrelationStatus = Literal["real", "insufficient_data", "synthetic"]
Timeframe = Literal["daily", "weekly", "monthly"]

class VaccinationRecord(BaseModel):
    location: str
    iso_code: str
    date: str
    total_vaccinations: Optional[float] = None
    people_vaccinated: Optional[float] = None
    people_fully_vaccinated: Optional[float] = None
    total_boosters: Optional[float] = None
    daily_vaccinations: Optional[float] = None
    total_vaccinations_per_hundred: Optional[float] = None
    people_vaccinated_per_hundred: Optional[float] = None
    people_fully_vaccinated_per_hundred: Optional[float] = None

class MeasurementDate(BaseModel):
    utc: str
    local: str

class Coordinates(BaseModel):
    latitude: float
    longitude: float

class AirQualityRecord(BaseModel):
    location_id: int
    location: str
    parameter: str
    value: Optional[float] = None
    unit: str = ""
    country: str = ""
    city: Optional[str] = None
    date: Optional[MeasurementDate] = None
    coordinates: Optional[Coordinates] = None

class VulnerabilityScore(BaseModel):
    model_config = ConfigDict(frozen=True)

    location: str
    vaccination_rate: float
    aqi_level: float
    population_density: float
    vulnerability_index: int = Field(ge=0, le=100)
    risk_category: RiskCategory

class CorrelationPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: str
    vaccination: float
    aqi: float

class CorrelationAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    correlation: float
    p_value: float
    significance: Significance
    data_points: List[CorrelationPoint]
    status: CorrelationStatus = "real"

class DashboardMetrics(BaseModel):
    total_vaccinations: float
    vaccination_rate: float
    average_aqi: float
    vulnerable_locations: int
    last_updated: datetime

class VulnerabilityScoreRequest(BaseModel):
    vaccination_rate: float
    aqi_level: float
    population_density: float

class VulnerabilityRequest(BaseModel):
    vaccination_records: List[VaccinationRecord] = Field(default_factory=list)
    air_quality_records: List[AirQualityRecord] = Field(default_factory=list)
    population_density: Optional[Dict[str, float]] = None

class CorrelationRequest(BaseModel):
    vaccination_records: List[VaccinationRecord] = Field(default_factory=list)
    air_quality_records: List[AirQualityRecord] = Field(default_factory=list)
    city_offsets: Optional[Dict[str, float]] = None
    seed: Optional[int] = None
    include_synthetic: Optional[bool] = None

class AggregationRequest(BaseModel):
    records: List[Dict[str, Any]]
    timeframe: Timeframe = "daily"
    date_field: str = "date"

class MetricsRequest(BaseModel):
    vaccination_records: List[VaccinationRecord] = Field(default_factory=list)
    air_quality_records: List[AirQualityRecord] = Field(default_factory=list)
