from fastapi import APIRouter, Query, HTTPException
import logging

from vaccine_aqi.models.schemas import (
    AggregationRequest,
    CorrelationRequest,
    MetricsRequest,
    VulnerabilityRequest,
    VulnerabilityScoreRequest,
)
from vaccine_aqi.services.aggregation_service import aggregate_data_by_timeframe
from vaccine_aqi.services.aqi_service import get_aqi_category, get_aqi_color
from vaccine_aqi.services.correlation_service import calculate_correlation
from vaccine_aqi.services.metrics_service import compute_dashboard_metrics
from vaccine_aqi.services.vulnerability_service import (
    build_vulnerability_scores,
    calculate_vulnerability_score,
    get_risk_category,
)
from vaccine_aqi.utils.serialization import clean_for_json

logger = logging.getLogger(__name__)

analytics_router = APIRouter(prefix="/analytics", tags=["Analytics"])

@analytics_router.post("/vulnerability-score")
def vulnerability_score_endpoint(item: VulnerabilityScoreRequest):
    try:
        index = calculate_vulnerability_score(item.vaccination_rate, item.aqi_level, item.population_density)
        return clean_for_json({
            "vulnerability_index": index,
            "risk_category": get_risk_category(index),
        })
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@analytics_router.post("/vulnerability")
def vulnerability_endpoint(item: VulnerabilityRequest):
    try:
        scores = build_vulnerability_scores(
            item.vaccination_records,
            item.air_quality_records,
            population_density=item.population_density,
        )
        return clean_for_json({"items": scores, "count": len(scores)})
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error in vulnerability_endpoint: {e}")
        raise HTTPException(status_code=500, detail=f"Error in vulnerability analysis: {e}")

@analytics_router.post("/correlation")
def correlation_endpoint(item: CorrelationRequest):
    try:
        result = calculate_correlation(
            item.vaccination_records,
            item.air_quality_records,
            city_offsets=item.city_offsets,
            seed=item.seed,
            include_synthetic=item.include_synthetic,
        )
        return clean_for_json(result)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error in correlation_endpoint: {e}")
        raise HTTPException(status_code=500, detail=f"Error in correlation analysis: {e}")

@analytics_router.post("/aggregate")
def aggregate_endpoint(item: AggregationRequest):
    try:
        buckets = aggregate_data_by_timeframe(item.records, item.timeframe, item.date_field)
        return clean_for_json({"timeframe": item.timeframe, "items": buckets})
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error in aggregate_endpoint: {e}")
        raise HTTPException(status_code=500, detail=f"Error in aggregation: {e}")

@analytics_router.post("/metrics")
def metrics_endpoint(item: MetricsRequest):
    try:
        metrics = compute_dashboard_metrics(item.vaccination_records, item.air_quality_records)
        return clean_for_json(metrics)
    except Exception as e:
        logger.error(f"Error in metrics_endpoint: {e}")
        raise HTTPException(status_code=500, detail=f"Error computing dashboard metrics: {e}")

@analytics_router.get("/aqi-category")
def aqi_category_endpoint(value: float = Query(..., ge=0, allow_inf_nan=False)):
    return clean_for_json({
        "value": value,
        "category": get_aqi_category(value),
        "color": get_aqi_color(value),
    })
