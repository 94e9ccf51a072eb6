"""
User model.

Users authenticate with email and password (or an external identity)
and own race records.
"""

from datetime import datetime
from sqlalchemy import Column, String, DateTime
import uuid

from racetracker.db.base import Base

ROLE_USER = "user"
ROLE_ADMIN = "admin"


class User(Base):
    """Application user."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(100), nullable=False)
    role = Column(String(10), nullable=False, default=ROLE_USER)  # "user" | "admin"
    avatar = Column(String(500), nullable=True)

    # Credentials: password hash, or a linked external identity
    password_hash = Column(String(255), nullable=True)
    google_id = Column(String(64), nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    def __repr__(self):
        return f"<User {self.id} ({self.email})>"

    def to_dict(self) -> dict:
        """Public profile for API responses (never the password hash)."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
            "avatar": self.avatar,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
