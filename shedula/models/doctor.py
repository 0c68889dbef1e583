"""Doctor catalogue model definitions."""

from sqlalchemy import Boolean, Column, Float, ForeignKey, Integer, JSON, String
from sqlalchemy.orm import relationship

from shedula.database import Base


class Doctor(Base):
    """A doctor patients can book with."""
    __tablename__ = "doctors"

    id = Column(String, primary_key=True)
    name = Column(String, index=True)
    specialty = Column(String, index=True)
    experience = Column(String)
    rating = Column(Float)
    image = Column(String)
    availability = Column(JSON, default=list)  # weekday names

    available_slots = relationship(
        "DoctorSlot",
        back_populates="doctor",
        order_by="DoctorSlot.id",
        cascade="all, delete-orphan",
    )


class DoctorSlot(Base):
    """One bookable date/time of a doctor."""
    __tablename__ = "doctor_slots"

    id = Column(Integer, primary_key=True)
    doctor_id = Column(String, ForeignKey("doctors.id"), index=True)
    date = Column(String)
    time = Column(String)
    available = Column(Boolean, default=True)

    doctor = relationship("Doctor", back_populates="available_slots")
