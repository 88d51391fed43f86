from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from catalog.pricing import PriceBreakdown, calculate_price, format_thb, location_base_price
from catalog.services import Catalog


@dataclass(frozen=True)
class Quote:
    breakdown: PriceBreakdown
    base_per_person: int
    base_source: str

    def price_snapshot(self) -> Dict[str, Any]:
        """Totals stored on the booking at submission time."""
        return {
            "base": self.breakdown.base,
            "addons": self.breakdown.addons,
            "total": self.breakdown.total,
            "base_per_person": self.base_per_person,
            "base_source": self.base_source,
        }

    def as_dict(self) -> Dict[str, Any]:
        return {
            **self.breakdown.as_dict(),
            "base_per_person": self.base_per_person,
            "base_source": self.base_source,
            "formatted_total": format_thb(self.breakdown.total),
        }


def build_quote(catalog: Catalog, *, duration, location_id, party_size, addons) -> Quote:
    location = catalog.get_location(location_id) if location_id else None
    base_per_person, source = location_base_price(location, duration)
    breakdown = calculate_price(duration, base_per_person, party_size, addons)
    return Quote(breakdown=breakdown, base_per_person=base_per_person, base_source=source)
