from typing import List, Tuple

# (upper bound, category, colour) on the US EPA scale
AQI_BANDS: List[Tuple[float, str, str]] = [
    (50, "Good", "#00e400"),
    (100, "Moderate", "#ffff00"),
    (150, "Unhealthy for Sensitive Groups", "#ff7e00"),
    (200, "Unhealthy", "#ff0000"),
    (300, "Very Unhealthy", "#8f3f97"),
]
HAZARDOUS = ("Hazardous", "#7e0023")

def _band(value: float) -> Tuple[str, str]:
    for upper, category, color in AQI_BANDS:
        if value <= upper:
            return category, color
    return HAZARDOUS

def get_aqi_category(value: float) -> str:
    return _band(value)[0]

def get_aqi_color(value: float) -> str:
    return _band(value)[1]
