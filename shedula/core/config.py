import os

from dotenv import load_dotenv


load_dotenv()


def _get_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}

APP_ENV = os.getenv("APP_ENV", "development")

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite://")
SEED_DEMO_DATA = _get_bool(os.getenv("SEED_DEMO_DATA"), default=True)

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3001"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

CORS_ORIGIN = os.getenv("CORS_ORIGIN", "")
CORS_ALLOWED_ORIGINS = [
    origin
    for origin in (
        "http://localhost:5173",
        "https://shedula-frontend.onrender.com",
        "https://shedula-demo.onrender.com",
        CORS_ORIGIN,
    )
    if origin
]

PATIENT_TOKEN_PREFIX = "demo-token-"
DOCTOR_TOKEN_PREFIX = "doctor-token-"
DEFAULT_PHONE = "+1-555-0000"
DEFAULT_DOCTOR_IMAGE = "https://images.unsplash.com/photo-1612349317150-e413f6a5b16d?w=150&h=150&fit=crop&crop=face"


def validate_runtime_config() -> None:
    if LOG_LEVEL not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
        raise RuntimeError(f"Unsupported LOG_LEVEL: {LOG_LEVEL}")
