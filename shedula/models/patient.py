"""Patient record model definitions."""

from sqlalchemy import Column, Integer, JSON, String
from shedula.database import Base


class Patient(Base):
    """A patient as listed in the doctor portal."""
    __tablename__ = "patients"

    id = Column(String, primary_key=True)
    name = Column(String)
    email = Column(String)
    phone = Column(String)
    age = Column(Integer, nullable=True)
    gender = Column(String, nullable=True)
    address = Column(String, nullable=True)
    medical_history = Column(JSON, default=list)
    last_visit = Column(String, nullable=True)
    total_appointments = Column(Integer, default=0)
