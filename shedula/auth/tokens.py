from shedula.core import config
from shedula.core.clock import epoch_millis


def create_demo_token(prefix: str = config.PATIENT_TOKEN_PREFIX) -> str:
    """Placeholder session token; it only gates client-side routes and is never verified."""
    return f"{prefix}{epoch_millis()}"


def create_doctor_token() -> str:
    return create_demo_token(config.DOCTOR_TOKEN_PREFIX)
