from __future__ import annotations

import logging
from smtplib import SMTPException
from typing import Any, Mapping

from django.conf import settings
from django.core.mail import send_mail

from catalog.pricing import ADDON_KEYS, DURATION_LABELS, format_thb, parse_price

logger = logging.getLogger(__name__)

MISSING = "-"

SUMMARY_LABELS = {
    "en": {
        "heading": "Booking details",
        "name": "Name",
        "date": "Date",
        "time": "Time",
        "duration": "Duration",
        "tour_type": "Tour type",
        "location": "Location",
        "party_size": "Party size",
        "addons": "Add-ons",
        "total": "Total",
        "notes": "Notes",
    },
    "th": {
        "heading": "รายละเอียดการจอง",
        "name": "ชื่อ",
        "date": "วันที่",
        "time": "เวลา",
        "duration": "ระยะเวลา",
        "tour_type": "ประเภททัวร์",
        "location": "สถานที่",
        "party_size": "จำนวนผู้เดินทาง",
        "addons": "บริการเสริม",
        "total": "ยอดรวม",
        "notes": "หมายเหตุ",
    },
}

ADDON_SHORT_LABELS = {
    "en": {"guide": "Guide", "meals": "Meals", "pickup": "Pickup"},
    "th": {"guide": "ไกด์", "meals": "อาหาร", "pickup": "รับ-ส่ง"},
}


class BookingEmailError(Exception):
    """The mail provider refused or failed to deliver a booking summary."""


def _locale(locale: Any) -> str:
    return locale if locale in SUMMARY_LABELS else "en"


def _value(value: Any) -> str:
    if value is None or value == "":
        return MISSING
    return str(value)


def _duration(value: Any, locale: str) -> str:
    labels = DURATION_LABELS.get(value)
    if labels:
        return labels[locale]
    return _value(value)


def _addons(addons: Any, locale: str) -> str:
    addons = addons if isinstance(addons, Mapping) else {}
    names = [ADDON_SHORT_LABELS[locale][key] for key in ADDON_KEYS if addons.get(key)]
    return ", ".join(names) or MISSING


def build_booking_summary(booking: Mapping[str, Any], locale: str = "en") -> str:
    """
    Plain-text summary of a booking.

    ``booking`` is the denormalized mapping produced by ``booking_summary_for``
    (or posted by an admin client): contact_name, date, time, duration,
    tour_type_label, location_name, party_size, addons, price_total, notes.
    """
    locale = _locale(locale)
    labels = SUMMARY_LABELS[locale]
    lines = [
        labels["heading"],
        f"{labels['name']}: {_value(booking.get('contact_name'))}",
        f"{labels['date']}: {_value(booking.get('date'))}",
        f"{labels['time']}: {_value(booking.get('time'))}",
        f"{labels['duration']}: {_duration(booking.get('duration'), locale)}",
        f"{labels['tour_type']}: {_value(booking.get('tour_type_label'))}",
        f"{labels['location']}: {_value(booking.get('location_name'))}",
        f"{labels['party_size']}: {_value(booking.get('party_size'))}",
        f"{labels['addons']}: {_addons(booking.get('addons'), locale)}",
        f"{labels['total']}: {format_thb(parse_price(booking.get('price_total')) or 0)}",
        f"{labels['notes']}: {_value(booking.get('notes'))}",
    ]
    return "\n".join(lines)


def booking_summary_for(booking, catalog) -> dict:
    """Denormalize a stored booking with catalog labels for e-mail."""
    locale = _locale(booking.locale)
    tour_type = catalog.get_tour_type(booking.tour_type) or {}
    location = catalog.get_location(booking.location_id) or {}
    return {
        "contact_name": booking.contact_name,
        "date": booking.date.isoformat() if booking.date else None,
        "time": booking.time.strftime("%H:%M") if booking.time else None,
        "duration": booking.duration,
        "tour_type_label": tour_type.get(f"label_{locale}") or tour_type.get("label_en") or booking.tour_type,
        "location_name": location.get(f"name_{locale}") or location.get("name_en") or booking.location_id,
        "party_size": booking.party_size,
        "addons": dict(booking.addons or {}),
        "price_total": booking.price_total,
        "notes": booking.notes,
    }


def send_booking_email(*, to: str, booking: Mapping[str, Any], locale: str = "en", connection=None) -> None:
    body = build_booking_summary(booking, locale)
    try:
        sent = send_mail(
            settings.BOOKING_EMAIL_SUBJECT,
            body,
            settings.DEFAULT_FROM_EMAIL,
            [to],
            fail_silently=False,
            connection=connection,
        )
    except (SMTPException, OSError) as exc:
        raise BookingEmailError(str(exc) or "Failed to send email") from exc
    if not sent:
        raise BookingEmailError("Email not accepted by provider.")
    logger.info("Booking summary e-mailed to %s", to)
