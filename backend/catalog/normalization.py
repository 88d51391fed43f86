"""
Fill in the gaps of partially authored location records.

Admin-entered and seeded locations may omit their tour type associations,
durations or prices. Everything downstream (filtering, pricing, display) works
on the normalized shape produced here and never special-cases missing data.
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping

from .pricing import DURATIONS, coerce_price

LOCATION_TEXT_FIELDS = (
    "id",
    "name_th",
    "name_en",
    "area_th",
    "area_en",
    "description_th",
    "description_en",
    "image_path",
)


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def _unique_strings(values: Any) -> List[str]:
    if not isinstance(values, (list, tuple)):
        return []
    seen: Dict[str, None] = {}
    for value in values:
        if isinstance(value, str) and value and value not in seen:
            seen[value] = None
    return list(seen)


def _highlights(values: Any) -> List[str]:
    if not isinstance(values, (list, tuple)):
        return []
    return [value for value in values if isinstance(value, str) and value.strip()]


def normalize_prices(raw_prices: Any) -> Dict[str, int]:
    if not isinstance(raw_prices, Mapping):
        return {}
    prices = {}
    for duration in DURATIONS:
        price = coerce_price(raw_prices.get(duration))
        if price is not None:
            prices[duration] = price
    return prices


def normalize_location(raw_location: Any, all_tour_type_ids: Iterable[str]) -> Dict[str, Any]:
    """
    Return a fully populated copy of ``raw_location``.

    An empty ``tour_type_ids`` means the location suits every known tour type and an
    empty ``available_durations`` means both durations. Invalid prices are left out so
    the fixed fallback rate applies. Never raises; normalizing twice is a no-op.
    """
    raw = raw_location if isinstance(raw_location, Mapping) else {}

    location: Dict[str, Any] = {field: _text(raw.get(field)) for field in LOCATION_TEXT_FIELDS}
    location["highlights"] = _highlights(raw.get("highlights"))

    tour_type_ids = _unique_strings(raw.get("tour_type_ids"))
    if not tour_type_ids:
        tour_type_ids = _unique_strings(list(all_tour_type_ids or []))
    location["tour_type_ids"] = tour_type_ids

    durations = [
        duration for duration in _unique_strings(raw.get("available_durations"))
        if duration in DURATIONS
    ]
    location["available_durations"] = durations or list(DURATIONS)

    location["price_per_person"] = normalize_prices(raw.get("price_per_person"))
    return location


def filter_locations(
    locations: Iterable[Mapping[str, Any]],
    tour_type: str,
    duration: str,
) -> List[Mapping[str, Any]]:
    """Normalized locations offering both ``tour_type`` and ``duration``."""
    return [
        location for location in locations
        if tour_type in location["tour_type_ids"]
        and duration in location["available_durations"]
    ]
