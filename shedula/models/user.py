"""User model definitions."""

from sqlalchemy import Column, String
from shedula.database import Base


class User(Base):
    """Represents a patient account."""
    __tablename__ = "users"

    id = Column(String, primary_key=True)
    name = Column(String)
    email = Column(String, unique=True, index=True)
    phone = Column(String)
