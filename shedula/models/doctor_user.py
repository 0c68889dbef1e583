"""Doctor account model definitions."""

from sqlalchemy import Boolean, Column, Float, Integer, JSON, String
from shedula.database import Base


class DoctorUser(Base):
    """Represents a doctor account using the doctor portal."""
    __tablename__ = "doctor_users"

    id = Column(String, primary_key=True)
    name = Column(String)
    email = Column(String, unique=True, index=True)
    phone = Column(String)
    specialty = Column(String)
    experience = Column(String)
    rating = Column(Float)
    image = Column(String)
    bio = Column(String, default="")
    qualifications = Column(JSON, default=list)
    clinic_address = Column(String, default="")
    consultation_fee = Column(Float, default=0)
    availability = Column(JSON, default=list)  # [{day, isAvailable, timeSlots}]
    is_verified = Column(Boolean, default=False)
    created_at = Column(String)
    total_patients = Column(Integer, default=0)
    total_appointments = Column(Integer, default=0)
