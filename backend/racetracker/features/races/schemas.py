"""
Race schemas.

Pydantic models for race input. Wire names are camelCase
(`registrationUrl`, `completionTime`); snake_case is accepted too.
Unknown fields are rejected.
"""

from datetime import date as date_type
from decimal import Decimal
import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .status import RaceStatus

DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
TIME_RE = re.compile(r"^([01]?[0-9]|2[0-3]):[0-5][0-9]$")
COMPLETION_TIME_RE = re.compile(r"^([01]?[0-9]|2[0-3]):[0-5][0-9]:[0-5][0-9]$")
URL_RE = re.compile(r"^https?://.+")

MAX_NAME_LENGTH = 200


def validate_iso_date(value: str) -> str:
    """Check "YYYY-MM-DD" shape and that the day exists."""
    if not isinstance(value, str) or not DATE_RE.match(value):
        raise ValueError("Date must be in YYYY-MM-DD format")
    try:
        date_type.fromisoformat(value)
    except ValueError:
        raise ValueError("Invalid date") from None
    return value


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


class RaceFields(CamelModel):
    """Field rules shared by create and update."""

    @field_validator("name", check_fields=False)
    @classmethod
    def check_name(cls, v):
        if v is None:
            raise ValueError("Race name is required")
        v = v.strip()
        if not 1 <= len(v) <= MAX_NAME_LENGTH:
            raise ValueError(f"Race name must be between 1 and {MAX_NAME_LENGTH} characters")
        return v

    @field_validator("date", check_fields=False)
    @classmethod
    def check_date(cls, v):
        if v is None:
            raise ValueError("Date is required")
        return validate_iso_date(v)

    @field_validator("time", check_fields=False)
    @classmethod
    def check_time(cls, v):
        if v is None or not TIME_RE.match(v):
            raise ValueError("Time must be in HH:MM format")
        return v

    @field_validator("price", check_fields=False)
    @classmethod
    def check_price(cls, v):
        if v is None:
            raise ValueError("Price is required")
        if v < 0:
            raise ValueError("Price must be greater than or equal to 0")
        return v

    @field_validator("distance", check_fields=False)
    @classmethod
    def check_distance(cls, v):
        if v is None:
            raise ValueError("Distance is required")
        if v <= 0:
            raise ValueError("Distance must be greater than 0")
        if Decimal(repr(v)).as_tuple().exponent < -2:
            raise ValueError("Distance must have at most 2 decimal places")
        return v

    @field_validator("registration_url", check_fields=False)
    @classmethod
    def check_registration_url(cls, v):
        if v is None or not v.strip():
            return ""
        v = v.strip()
        if not URL_RE.match(v):
            raise ValueError("Registration URL must start with http:// or https://")
        return v

    @field_validator("completion_time", check_fields=False)
    @classmethod
    def check_completion_time(cls, v):
        if v is None or not v.strip():
            return None
        v = v.strip()
        if not COMPLETION_TIME_RE.match(v):
            raise ValueError("Completion time must be in HH:MM:SS format")
        return v

    @field_validator("status", mode="before", check_fields=False)
    @classmethod
    def check_status(cls, v):
        if v is None:
            raise ValueError("Status is required")
        return v


class RaceCreate(RaceFields):
    """Create race request."""

    name: str
    date: str
    time: str
    price: float = Field(allow_inf_nan=False)
    distance: float = Field(allow_inf_nan=False)
    registration_url: Optional[str] = ""
    status: RaceStatus
    completion_time: Optional[str] = None

    def to_fields(self) -> dict:
        """Column values for the ORM model."""
        data = self.model_dump()
        data["status"] = self.status.value
        return data


class RaceUpdate(RaceFields):
    """
    Partial update request.

    Only fields present in the body are validated and applied.
    """

    name: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    price: Optional[float] = Field(default=None, allow_inf_nan=False)
    distance: Optional[float] = Field(default=None, allow_inf_nan=False)
    registration_url: Optional[str] = None
    status: Optional[RaceStatus] = None
    completion_time: Optional[str] = None

    def to_fields(self) -> dict:
        """Column values for fields the client actually sent."""
        data = self.model_dump(exclude_unset=True)
        if "status" in data:
            data["status"] = self.status.value
        return data
