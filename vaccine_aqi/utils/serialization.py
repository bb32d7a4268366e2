import pandas as pd
import numpy as np
from pydantic import BaseModel

def clean_for_json(obj):
    if isinstance(obj, BaseModel):
        return clean_for_json(obj.model_dump())
    elif isinstance(obj, dict):
        return {k: clean_for_json(v) for k, v in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [clean_for_json(item) for item in obj]
    elif obj is None:
        return None
    elif isinstance(obj, (bool, np.bool_)):
        return bool(obj)
    elif isinstance(obj, (int, np.integer)):
        return int(obj)
    elif isinstance(obj, (float, np.floating)):
        if np.isnan(obj) or np.isinf(obj):
            return None
        return float(obj)
    elif hasattr(obj, 'isoformat'):
        if pd.isna(obj):
            return None
        return obj.isoformat()
    else:
        return obj
