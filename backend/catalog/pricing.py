from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_FLOOR, Decimal
from typing import Any, Dict, Mapping, Optional, Tuple

FULL_DAY = "full"
HALF_DAY = "half"
DURATIONS = (FULL_DAY, HALF_DAY)

DURATION_LABELS = {
    FULL_DAY: {"en": "Full day", "th": "เต็มวัน"},
    HALF_DAY: {"en": "Half day", "th": "ครึ่งวัน"},
}

# Whole THB per person, used when a location has no usable rate of its own.
BASE_PRICE = {
    FULL_DAY: 2500,
    HALF_DAY: 1500,
}

ADDON_KEYS = ("guide", "meals", "pickup")

ADDON_PRICES = {
    "guide": 600,
    "meals": 300,
    "pickup": 800,
}

# Pickup is charged once per booking; the others scale with party size.
PER_PERSON_ADDONS = frozenset({"guide", "meals"})

ADDON_LABELS = {
    "guide": {"th": "ไกด์มืออาชีพ", "en": "Professional guide"},
    "meals": {"th": "อาหารกลางวัน", "en": "Lunch meals"},
    "pickup": {"th": "รับ-ส่งโรงแรม (ต่อกลุ่ม)", "en": "Hotel pickup (per group)"},
}

BASE_SOURCE_LOCATION = "location"
BASE_SOURCE_FALLBACK = "fallback"


@dataclass(frozen=True)
class Addons:
    guide: bool = False
    meals: bool = False
    pickup: bool = False

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "Addons":
        if isinstance(data, Addons):
            return data
        if not isinstance(data, Mapping):
            data = {}
        return cls(**{key: bool(data.get(key)) for key in ADDON_KEYS})

    def as_dict(self) -> Dict[str, bool]:
        return {key: getattr(self, key) for key in ADDON_KEYS}


@dataclass(frozen=True)
class PriceLine:
    key: str
    label_th: str
    label_en: str
    amount: int

    def as_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "label_th": self.label_th,
            "label_en": self.label_en,
            "amount": self.amount,
        }


@dataclass(frozen=True)
class PriceBreakdown:
    base: int
    addons: int
    total: int
    lines: Tuple[PriceLine, ...]

    def line(self, key: str) -> PriceLine:
        return next(line for line in self.lines if line.key == key)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "base": self.base,
            "addons": self.addons,
            "total": self.total,
            "lines": [line.as_dict() for line in self.lines],
        }


def _finite_number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return None
    number = float(value)
    if not math.isfinite(number):
        return None
    return number


def round_half_up(value: float) -> int:
    """Round to the nearest whole unit with halves going up (2.5 -> 3, -2.5 -> -2)."""
    # Float addition would turn 0.49999999999999994 + 0.5 into 1.0.
    shifted = Decimal(str(float(value))) + Decimal("0.5")
    return int(shifted.to_integral_value(rounding=ROUND_FLOOR))


def coerce_price(value: Any) -> Optional[int]:
    """
    Return ``value`` as a whole-unit price, or None when it is not a usable price.

    Only real numbers qualify; strings, booleans, NaN/inf and anything that rounds
    below zero are rejected rather than coerced.
    """
    number = _finite_number(value)
    if number is None:
        return None
    rounded = round_half_up(number)
    if rounded < 0:
        return None
    return rounded


def parse_price(value: Any) -> Optional[int]:
    """Parse an admin-entered price that may arrive as text."""
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            value = float(text)
        except ValueError:
            return None
    return coerce_price(value)


def normalize_duration(duration: Any) -> str:
    return FULL_DAY if duration == FULL_DAY else HALF_DAY


def duration_label(duration: Any, locale: str = "en") -> str:
    labels = DURATION_LABELS[normalize_duration(duration)]
    return labels.get(locale) or labels["en"]


def _party_size(value: Any) -> int:
    number = _finite_number(value)
    if number is None:
        return 1
    return max(1, int(number))


def _rate(base_per_person: Any, duration: str) -> int:
    number = _finite_number(base_per_person)
    if number is None:
        return BASE_PRICE[duration]
    return max(0, round_half_up(number))


def location_base_price(location: Optional[Mapping[str, Any]], duration: Any) -> Tuple[int, str]:
    """Pick the per-person rate for ``duration``: the location's own rate, else the fallback."""
    duration = normalize_duration(duration)
    prices = (location or {}).get("price_per_person")
    if isinstance(prices, Mapping):
        price = coerce_price(prices.get(duration))
        if price is not None:
            return price, BASE_SOURCE_LOCATION
    return BASE_PRICE[duration], BASE_SOURCE_FALLBACK


def calculate_price(
    duration: Any,
    base_per_person: Any,
    party_size: Any,
    addons: Any,
) -> PriceBreakdown:
    duration = normalize_duration(duration)
    party_size = _party_size(party_size)
    selected = Addons.from_mapping(addons)

    base = _rate(base_per_person, duration) * party_size
    amounts = {}
    for key in ADDON_KEYS:
        if not getattr(selected, key):
            amounts[key] = 0
        elif key in PER_PERSON_ADDONS:
            amounts[key] = ADDON_PRICES[key] * party_size
        else:
            amounts[key] = ADDON_PRICES[key]
    addons_total = sum(amounts.values())

    lines = [
        PriceLine(
            key="base",
            label_th=f"ราคาสถานที่ {duration_label(duration, 'th')} x {party_size} ท่าน",
            label_en=f"{duration_label(duration)} location rate x {party_size} pax",
            amount=base,
        )
    ]
    lines.extend(
        PriceLine(
            key=key,
            label_th=ADDON_LABELS[key]["th"],
            label_en=ADDON_LABELS[key]["en"],
            amount=amounts[key],
        )
        for key in ADDON_KEYS
    )

    return PriceBreakdown(
        base=base,
        addons=addons_total,
        total=base + addons_total,
        lines=tuple(lines),
    )


def format_thb(value: Any) -> str:
    amount = _finite_number(value)
    amount = round_half_up(amount) if amount is not None else 0
    sign = "-" if amount < 0 else ""
    return f"{sign}฿{abs(amount):,}"
