import copy
import logging
import re
from datetime import date
from typing import Optional, List, Dict, Any, Mapping, Sequence, Union

import numpy as np
import pandas as pd
from pydantic import BaseModel

logger = logging.getLogger(__name__)

TIMEFRAMES = ("daily", "weekly", "monthly")
NUMERIC_FIELDS = ("value", "total_vaccinations", "people_vaccinated", "daily_vaccinations")
ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}")

class InvalidInputError(ValueError):
    """Raised when records cannot be bucketed."""
    pass

def _as_dict(record: Union[Mapping[str, Any], BaseModel]) -> Dict[str, Any]:
    if isinstance(record, BaseModel):
        return record.model_dump()
    if isinstance(record, Mapping):
        return dict(record)
    raise InvalidInputError(f"Unsupported record type: {type(record).__name__}")

def _lookup(record: Mapping[str, Any], path: str) -> Any:
    value: Any = record
    for part in path.split("."):
        if not isinstance(value, Mapping) or part not in value:
            return None
        value = value[part]
    return value

def _is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float, np.integer, np.floating)):
        return not np.isnan(value)
    return False

def parse_record_date(value: Any) -> Optional[pd.Timestamp]:
    if isinstance(value, str):
        # ISO dates only; pandas would otherwise accept "today" and "now"
        if not ISO_DATE_PATTERN.match(value.strip()):
            return None
        ts = pd.to_datetime(value.strip(), errors="coerce")
    elif isinstance(value, date):
        ts = pd.Timestamp(value)
    else:
        return None
    if pd.isna(ts):
        return None
    if ts.tzinfo is not None:
        ts = ts.tz_convert("UTC").tz_localize(None)
    return ts

def bucket_key(ts: pd.Timestamp, timeframe: str) -> str:
    if timeframe == "weekly":
        # weeks start on Sunday; pandas numbers Monday as 0
        week_start = ts.normalize() - pd.Timedelta(days=(ts.dayofweek + 1) % 7)
        return week_start.strftime("%Y-%m-%d")
    if timeframe == "monthly":
        return f"{ts.year:04d}-{ts.month:02d}"
    return ts.strftime("%Y-%m-%d")

def aggregate_data_by_timeframe(
    records: Sequence[Union[Mapping[str, Any], BaseModel]],
    timeframe: str = "daily",
    date_field: str = "date",
    numeric_fields: Sequence[str] = NUMERIC_FIELDS
) -> List[Dict[str, Any]]:
    """
    Group records into daily, weekly (Sunday-aligned) or monthly buckets.

    Numeric fields are averaged over the records that carry a number for
    them; every other field of the bucket's first record takes the first
    non-null value found in the bucket. Buckets come back sorted by key,
    and the key itself is stored under ``date``.

    ``date_field`` may be a dotted path such as ``"date.utc"``.
    """
    if timeframe not in TIMEFRAMES:
        raise InvalidInputError(f"Unknown timeframe {timeframe!r}; expected one of {', '.join(TIMEFRAMES)}")

    if not records:
        return []

    rows = [_as_dict(r) for r in records]

    keys: List[str] = []
    invalid: List[int] = []
    for i, row in enumerate(rows):
        ts = parse_record_date(_lookup(row, date_field))
        if ts is None:
            invalid.append(i)
            continue
        keys.append(bucket_key(ts, timeframe))

    if invalid:
        logger.error(f"{len(invalid)} of {len(rows)} records have no parseable '{date_field}'")
        raise InvalidInputError(
            f"Missing or unparseable '{date_field}' in records at positions {invalid[:10]}"
        )

    numeric_fields = list(numeric_fields)
    df = pd.DataFrame({"bucket": keys})
    for field in numeric_fields:
        df[field] = [float(row[field]) if _is_number(row.get(field)) else np.nan for row in rows]
    means = df.groupby("bucket", sort=True).mean() if numeric_fields else None

    members: Dict[str, List[Dict[str, Any]]] = {}
    for key, row in zip(keys, rows):
        members.setdefault(key, []).append(row)

    buckets = []
    for key in sorted(members):
        items = members[key]
        bucket: Dict[str, Any] = {}
        for field in numeric_fields:
            mean = means.at[key, field]
            if not pd.isna(mean):
                bucket[field] = float(mean)
        for field in items[0]:
            if field in bucket or field in numeric_fields:
                continue
            first = next((item[field] for item in items if item.get(field) is not None), None)
            bucket[field] = copy.deepcopy(first)
        bucket["date"] = key
        buckets.append(bucket)

    logger.debug(f"Aggregated {len(rows)} records into {len(buckets)} {timeframe} buckets")
    return buckets
