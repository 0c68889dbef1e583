"""Appointment model definitions."""

from sqlalchemy import Column, String
from shedula.database import Base


class Appointment(Base):
    """A booking as the patient sees it."""
    __tablename__ = "appointments"

    id = Column(String, primary_key=True)
    doctor_id = Column(String, nullable=True)
    doctor_name = Column(String)
    specialty = Column(String)
    date = Column(String)
    time = Column(String)
    status = Column(String)  # upcoming/completed/cancelled
    type = Column(String)
    patient_id = Column(String, index=True)
