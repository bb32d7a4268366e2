from fastapi import FastAPI
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from datetime import datetime, timezone
import logging
import uvicorn

from vaccine_aqi.config import APP_NAME, APP_VERSION, LOG_LEVEL, CORS_ORIGINS, HOST, PORT
from vaccine_aqi.routers.analytics import analytics_router
from vaccine_aqi.utils.serialization import clean_for_json

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title=APP_NAME, version=APP_VERSION)

@app.middleware("http")
async def catch_json_errors(request, call_next):
    try:
        response = await call_next(request)
        return response
    except ValueError as e:
        if "Out of range float values are not JSON compliant" in str(e):
            logger.error(f"JSON serialization error: {e}")
            return JSONResponse(
                status_code=500,
                content={"detail": "Data processing error - invalid numeric values detected"}
            )
        raise e
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        raise e

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(analytics_router)

@app.get("/")
def root():
    return clean_for_json({
        "message": APP_NAME,
        "version": APP_VERSION,
        "features": [
            "Vulnerability index and risk classification",
            "Vaccination vs air quality correlation",
            "Daily, weekly and monthly aggregation",
            "Dashboard summary metrics",
        ],
        "available_endpoints": {
            "/health": "Service health check",
            "/analytics/*": "Analytics endpoints",
        }
    })

@app.get("/health")
def health():
    return clean_for_json({
        "app": APP_NAME,
        "version": APP_VERSION,
        "timestamp": datetime.now(timezone.utc),
        "overall_status": "healthy",
    })

def run():
    uvicorn.run(app, host=HOST, port=PORT, log_level=LOG_LEVEL.lower())

if __name__ == "__main__":
    run()
