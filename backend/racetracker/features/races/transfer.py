"""
JSON import and export of a user's races.

Accepted import payloads:
- a list of race objects
- {"items": [race, ...]}
- a single race object with a "name"

Items are matched to existing races by name (case-insensitive): a match is
updated, anything else is created. Bad items are counted, never fatal.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any

from racetracker.shared.exceptions import ValidationError
from .models import Race
from .status import normalize_status

DEFAULT_IMPORT_TIME = "09:00"


@dataclass
class ImportSummary:
    created: int = 0
    updated: int = 0
    errors: int = 0

    def to_dict(self) -> dict:
        return {"created": self.created, "updated": self.updated, "errors": self.errors}


def export_race(race: Race) -> dict:
    """Portable representation (no ids, no owner, no timestamps)."""
    return {
        "name": race.name,
        "date": race.date,
        "time": race.time,
        "price": race.price,
        "distance": race.distance,
        "registrationUrl": race.registration_url or "",
        "status": race.status,
        "completionTime": race.completion_time or "",
    }


def parse_import_payload(payload: Any) -> list:
    """Extract the list of items from any accepted payload shape."""
    if isinstance(payload, list):
        items = payload
    elif isinstance(payload, dict) and isinstance(payload.get("items"), list):
        items = payload["items"]
    elif isinstance(payload, dict) and payload.get("name"):
        items = [payload]
    else:
        raise ValidationError.for_field(
            "items", "Expected a list of races, {\"items\": [...]} or a single race"
        )
    if not items:
        raise ValidationError.for_field("items", "No races found in the payload")
    return items


def has_usable_name(item: Any) -> bool:
    return (
        isinstance(item, dict)
        and isinstance(item.get("name"), str)
        and bool(item["name"].strip())
    )


def import_fields(item: dict, today: date) -> dict:
    """
    Fill defaults for an imported item, ready for RaceCreate validation.

    Missing date falls back to `eventDate`, then today. Unknown statuses
    become "intend_to_go". A missing distance stays 0 and fails validation.
    """
    return {
        "name": item["name"].strip(),
        "date": item.get("date") or item.get("eventDate") or today.isoformat(),
        "time": item.get("time") or DEFAULT_IMPORT_TIME,
        "price": item.get("price") or 0,
        "distance": item.get("distance") or 0,
        "registrationUrl": item.get("registrationUrl") or "",
        "status": normalize_status(item.get("status")).value,
        "completionTime": item.get("completionTime") or None,
    }
