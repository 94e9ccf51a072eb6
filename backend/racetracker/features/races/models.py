"""
Race record model.

One row per race a user registered for, intends to attend, or completed.
"""

from datetime import datetime
from sqlalchemy import Column, String, DateTime, Float, ForeignKey, Index
from sqlalchemy.orm import validates
import uuid

from racetracker.db.base import Base


class Race(Base):
    """
    Race in a user's personal catalog.

    `date` is kept as an ISO "YYYY-MM-DD" string: range and prefix filters
    compare strings, which is safe because the format is fixed-width.
    """

    __tablename__ = "races"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)

    name = Column(String(200), nullable=False)
    name_folded = Column(String(200), nullable=False)  # name.casefold(), for search and matching
    date = Column(String(10), nullable=False)  # "2025-10-15"
    time = Column(String(5), nullable=False)  # "14:30"
    price = Column(Float, nullable=False, default=0.0)
    distance = Column(Float, nullable=False)  # km, 2 decimals max
    registration_url = Column(String(500), nullable=False, default="")
    status = Column(String(20), nullable=False)  # RaceStatus value
    completion_time = Column(String(8), nullable=True)  # "HH:MM:SS"

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        Index("ix_races_user_date", "user_id", "date"),
        Index("ix_races_user_status", "user_id", "status"),
        Index("ix_races_user_name_folded", "user_id", "name_folded"),
    )

    @validates("name")
    def _fold_name(self, key, value):
        self.name_folded = value.casefold() if value is not None else None
        return value

    def __repr__(self):
        return f"<Race {self.id} {self.date} {self.name!r} ({self.status})>"

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "id": self.id,
            "userId": self.user_id,
            "name": self.name,
            "date": self.date,
            "time": self.time,
            "price": self.price,
            "distance": self.distance,
            "registrationUrl": self.registration_url or "",
            "status": self.status,
            "completionTime": self.completion_time,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
