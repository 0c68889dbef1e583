"""Doctor-side appointment model definitions."""

from sqlalchemy import Column, String
from shedula.database import Base


class DoctorAppointment(Base):
    """A booking as the doctor sees it."""
    __tablename__ = "doctor_appointments"

    id = Column(String, primary_key=True)
    doctor_id = Column(String, nullable=True)
    patient_id = Column(String, index=True)
    patient_name = Column(String)
    patient_phone = Column(String)
    patient_email = Column(String)
    date = Column(String)
    time = Column(String)
    status = Column(String)  # pending/confirmed/completed/cancelled/rescheduled
    type = Column(String)
    notes = Column(String, default="")
    symptoms = Column(String, default="")
    prescription = Column(String, default="")
    created_at = Column(String)
    updated_at = Column(String)
