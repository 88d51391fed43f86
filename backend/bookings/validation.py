"""
Checks a booking must pass before it is priced and stored.

Each check returns a ``StepError`` naming the booking-form step and field it
belongs to, or ``None`` when the input is acceptable.
"""
from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional

from catalog.normalization import filter_locations

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

PARTY_SIZE_MIN = 1
PARTY_SIZE_MAX = 20

STEP_TRIP_DETAILS = 0
STEP_LOCATION = 1
STEP_ADDONS = 2
STEP_CONTACT = 3
SUBMIT_STEPS = (STEP_TRIP_DETAILS, STEP_LOCATION, STEP_CONTACT)


@dataclass(frozen=True)
class StepError:
    step: int
    field: str
    message: str


def is_valid_email(value: Any) -> bool:
    return isinstance(value, str) and EMAIL_PATTERN.fullmatch(value) is not None


def is_valid_party_size(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and PARTY_SIZE_MIN <= value <= PARTY_SIZE_MAX


def clamp_party_size(value: int) -> int:
    return min(PARTY_SIZE_MAX, max(PARTY_SIZE_MIN, value))


def validate_trip_details(*, date, time, party_size, tour_type) -> Optional[StepError]:
    if not date:
        return StepError(STEP_TRIP_DETAILS, "date", "Date is required.")
    if not time:
        return StepError(STEP_TRIP_DETAILS, "time", "Time is required.")
    if not is_valid_party_size(party_size):
        return StepError(
            STEP_TRIP_DETAILS,
            "party_size",
            f"Party size must be between {PARTY_SIZE_MIN} and {PARTY_SIZE_MAX}.",
        )
    if not tour_type:
        return StepError(STEP_TRIP_DETAILS, "tour_type", "Tour type is required.")
    return None


def validate_location(
    *,
    location_id: str,
    tour_type: str,
    duration: str,
    locations: Iterable[Mapping[str, Any]],
) -> Optional[StepError]:
    available = filter_locations(locations, tour_type, duration)
    if not available:
        return StepError(
            STEP_LOCATION,
            "location_id",
            "No locations match this tour type and duration yet.",
        )
    if not location_id:
        return StepError(STEP_LOCATION, "location_id", "Please select a location.")
    if location_id not in {location["id"] for location in available}:
        return StepError(
            STEP_LOCATION,
            "location_id",
            "Selected location is not available for this tour type and duration.",
        )
    return None


def validate_contact(*, contact_name: str, contact_email: str) -> Optional[StepError]:
    if not (contact_name or "").strip():
        return StepError(STEP_CONTACT, "contact_name", "Contact name is required.")
    if not is_valid_email(contact_email):
        return StepError(STEP_CONTACT, "contact_email", "Invalid email address.")
    return None


def validate_step(
    step: int,
    data: Mapping[str, Any],
    locations: Iterable[Mapping[str, Any]],
) -> Optional[StepError]:
    if step == STEP_TRIP_DETAILS:
        return validate_trip_details(
            date=data.get("date"),
            time=data.get("time"),
            party_size=data.get("party_size"),
            tour_type=data.get("tour_type"),
        )
    if step == STEP_LOCATION:
        return validate_location(
            location_id=data.get("location_id"),
            tour_type=data.get("tour_type"),
            duration=data.get("duration"),
            locations=locations,
        )
    if step == STEP_CONTACT:
        return validate_contact(
            contact_name=data.get("contact_name"),
            contact_email=data.get("contact_email"),
        )
    # Add-ons are optional toggles.
    return None


def validate_booking(
    data: Mapping[str, Any],
    locations: Iterable[Mapping[str, Any]],
) -> Optional[StepError]:
    """First failure across the steps checked on submission, in step order."""
    locations = list(locations)
    for step in SUBMIT_STEPS:
        error = validate_step(step, data, locations)
        if error is not None:
            return error
    return None
