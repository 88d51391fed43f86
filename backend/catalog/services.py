from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from django.db import DatabaseError

from .defaults import DEFAULT_LOCATIONS, DEFAULT_TOUR_TYPES
from .models import Location, TourType
from .normalization import normalize_location

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Catalog:
    tour_types: List[Dict[str, Any]]
    locations: List[Dict[str, Any]]
    from_defaults: bool = False
    _tour_type_index: Dict[str, Dict[str, Any]] = field(init=False, repr=False, compare=False)
    _location_index: Dict[str, Dict[str, Any]] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "_tour_type_index", {item["id"]: item for item in self.tour_types})
        object.__setattr__(self, "_location_index", {item["id"]: item for item in self.locations})

    @property
    def tour_type_ids(self) -> List[str]:
        return [item["id"] for item in self.tour_types if item.get("id")]

    def get_tour_type(self, tour_type_id: str) -> Optional[Dict[str, Any]]:
        return self._tour_type_index.get(tour_type_id)

    def get_location(self, location_id: str) -> Optional[Dict[str, Any]]:
        return self._location_index.get(location_id)


def build_catalog(
    tour_types: Iterable[Mapping[str, Any]],
    raw_locations: Iterable[Mapping[str, Any]],
) -> Catalog:
    """Normalize raw records, substituting the built-in catalog for empty collections."""
    tour_types = [dict(item) for item in tour_types]
    raw_locations = list(raw_locations)
    from_defaults = not tour_types or not raw_locations
    if not tour_types:
        tour_types = [dict(item) for item in DEFAULT_TOUR_TYPES]
    if not raw_locations:
        raw_locations = DEFAULT_LOCATIONS

    tour_type_ids = [item["id"] for item in tour_types if item.get("id")]
    locations = [normalize_location(raw, tour_type_ids) for raw in raw_locations]
    return Catalog(tour_types=tour_types, locations=locations, from_defaults=from_defaults)


def default_catalog() -> Catalog:
    return build_catalog([], [])


def load_catalog() -> Catalog:
    try:
        tour_types = [item.as_record() for item in TourType.objects.all()]
        locations = [item.as_record() for item in Location.objects.all()]
    except DatabaseError as exc:
        logger.exception("Failed to load catalog, using built-in defaults: %s", exc)
        return default_catalog()
    return build_catalog(tour_types, locations)


def known_tour_type_ids() -> List[str]:
    ids = list(TourType.objects.values_list("id", flat=True))
    return ids or [item["id"] for item in DEFAULT_TOUR_TYPES]
