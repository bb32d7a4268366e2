import os
from dotenv import load_dotenv

load_dotenv()

APP_NAME = os.getenv("APP_NAME", "Vaccination & Air Quality Analytics")
APP_VERSION = "1.0.0"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

BASELINE_VACCINATION_RATE = float(os.getenv("BASELINE_VACCINATION_RATE", "70"))
CORRELATION_SEED = int(os.getenv("CORRELATION_SEED", "42"))
INCLUDE_SYNTHETIC_POINTS = os.getenv("INCLUDE_SYNTHETIC_POINTS", "false").lower() in ("1", "true", "yes")

DEFAULT_POPULATION_DENSITY = float(os.getenv("DEFAULT_POPULATION_DENSITY", "5000"))
VULNERABLE_AQI_THRESHOLD = float(os.getenv("VULNERABLE_AQI_THRESHOLD", "150"))

HOST = os.getenv("HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", "8000"))
