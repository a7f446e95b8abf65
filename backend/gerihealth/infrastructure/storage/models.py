"""
SQLAlchemy ORM models.

Two record types and nothing else: the user's profile and the drugs on
their weekly schedule. No relationships, no indexes.
"""

from datetime import datetime

from sqlalchemy import Column, Integer, String, Date, DateTime, LargeBinary, JSON
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class UserProfile(Base):
    __tablename__ = "user_profiles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(120), nullable=False)
    surname = Column(String(120), nullable=False)
    date_of_birth = Column(Date, nullable=False)
    age = Column(Integer, nullable=False)
    location = Column(String(255), nullable=False)
    photo = Column(LargeBinary, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "surname": self.surname,
            "date_of_birth": self.date_of_birth.isoformat() if self.date_of_birth else None,
            "age": self.age,
            "location": self.location,
            "has_photo": self.photo is not None,
        }


class Drug(Base):
    __tablename__ = "drugs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    dose = Column(String(120), nullable=False, default="")
    # {"Monday": ["8:00 AM", "8:00 PM"], ...}
    administered = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "dose": self.dose,
            "administered": dict(self.administered or {}),
        }
