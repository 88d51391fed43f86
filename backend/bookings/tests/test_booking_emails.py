import datetime
from smtplib import SMTPException

import pytest
from django.core import mail

from bookings.models import Booking
from bookings.services import emails
from bookings.services.emails import (
    BookingEmailError,
    booking_summary_for,
    build_booking_summary,
    send_booking_email,
)
from catalog.services import build_catalog

SUMMARY = {
    "contact_name": "Somchai",
    "date": "2026-12-01",
    "time": "09:30",
    "duration": "full",
    "tour_type_label": "Islands",
    "location_name": "Paradise Cove",
    "party_size": 3,
    "addons": {"guide": True, "meals": False, "pickup": True},
    "price_total": 12200,
    "notes": "",
}


@pytest.fixture
def booking(db):
    return Booking.objects.create(
        date=datetime.date(2026, 12, 1),
        time=datetime.time(9, 30),
        party_size=3,
        duration="full",
        tour_type="islands",
        location_id="cove",
        addons={"guide": True, "meals": False, "pickup": True},
        price={"base": 9600, "addons": 2600, "total": 12200},
        contact_name="Somchai",
        contact_email="somchai@example.co.th",
        locale="en",
    )


def test_english_summary_lists_every_field():
    text = build_booking_summary(SUMMARY, "en")

    assert text.splitlines() == [
        "Booking details",
        "Name: Somchai",
        "Date: 2026-12-01",
        "Time: 09:30",
        "Duration: Full day",
        "Tour type: Islands",
        "Location: Paradise Cove",
        "Party size: 3",
        "Add-ons: Guide, Pickup",
        "Total: ฿12,200",
        "Notes: -",
    ]


def test_thai_summary_uses_thai_labels():
    text = build_booking_summary(SUMMARY, "th")

    assert text.startswith("รายละเอียดการจอง\n")
    assert "ระยะเวลา: เต็มวัน" in text
    assert "บริการเสริม: ไกด์, รับ-ส่ง" in text


def test_summary_of_empty_booking_uses_placeholders():
    text = build_booking_summary({}, "fr")

    assert "Name: -" in text
    assert "Duration: -" in text
    assert "Add-ons: -" in text
    assert "Total: ฿0" in text


def test_summary_total_accepts_text_amount():
    text = build_booking_summary({**SUMMARY, "price_total": "5000"}, "en")

    assert "Total: ฿5,000" in text


def test_send_booking_endpoint_formats_text_total(staff_client):
    response = staff_client.post(
        "/api/send-booking/",
        {"to": "guest@example.com", "booking": {**SUMMARY, "price_total": "5000"}},
        format="json",
    )

    assert response.status_code == 200
    assert "Total: ฿5,000" in mail.outbox[0].body


def test_booking_summary_for_uses_catalog_labels(booking):
    catalog = build_catalog(
        [{"id": "islands", "label_en": "Islands", "label_th": "เกาะ"}],
        [{"id": "cove", "name_en": "Paradise Cove", "name_th": "อ่าวสวรรค์"}],
    )

    summary = booking_summary_for(booking, catalog)

    assert summary["tour_type_label"] == "Islands"
    assert summary["location_name"] == "Paradise Cove"
    assert summary["date"] == "2026-12-01"
    assert summary["time"] == "09:30"
    assert summary["price_total"] == 12200

    booking.locale = "th"
    assert booking_summary_for(booking, catalog)["location_name"] == "อ่าวสวรรค์"


def test_booking_summary_for_keeps_dangling_ids(booking):
    catalog = build_catalog([{"id": "heritage"}], [{"id": "elsewhere"}])

    summary = booking_summary_for(booking, catalog)

    assert summary["tour_type_label"] == "islands"
    assert summary["location_name"] == "cove"


def test_send_booking_email_delivers_summary(settings):
    settings.BOOKING_EMAIL_SUBJECT = "Tour booking details"

    send_booking_email(to="guest@example.com", booking=SUMMARY, locale="en")

    assert len(mail.outbox) == 1
    message = mail.outbox[0]
    assert message.subject == "Tour booking details"
    assert message.to == ["guest@example.com"]
    assert "Location: Paradise Cove" in message.body


def test_provider_failure_is_wrapped(monkeypatch):
    def fail(*args, **kwargs):
        raise SMTPException("Mailbox unavailable")

    monkeypatch.setattr(emails, "send_mail", fail)

    with pytest.raises(BookingEmailError, match="Mailbox unavailable"):
        send_booking_email(to="guest@example.com", booking=SUMMARY)


def test_zero_accepted_messages_is_an_error(monkeypatch):
    monkeypatch.setattr(emails, "send_mail", lambda *args, **kwargs: 0)

    with pytest.raises(BookingEmailError, match="Email not accepted by provider."):
        send_booking_email(to="guest@example.com", booking=SUMMARY)


def test_send_booking_endpoint(staff_client):
    response = staff_client.post(
        "/api/send-booking/",
        {"to": "guest@example.com", "booking": SUMMARY, "locale": "th"},
        format="json",
    )

    assert response.status_code == 200
    assert response.json() == {"ok": True}
    assert "สถานที่: Paradise Cove" in mail.outbox[0].body


def test_send_booking_endpoint_rejects_bad_recipient(staff_client):
    response = staff_client.post(
        "/api/send-booking/",
        {"to": "not-an-email", "booking": SUMMARY},
        format="json",
    )

    assert response.status_code == 400
    assert response.json()["to"] == ["Invalid recipient email"]
    assert mail.outbox == []


def test_send_booking_endpoint_requires_booking(staff_client):
    response = staff_client.post("/api/send-booking/", {"to": "guest@example.com"}, format="json")

    assert response.status_code == 400
    assert response.json()["booking"] == ["Missing booking data"]


def test_send_booking_endpoint_reports_provider_error(staff_client, monkeypatch):
    def fail(*args, **kwargs):
        raise SMTPException("Daily sending quota exceeded")

    monkeypatch.setattr(emails, "send_mail", fail)

    response = staff_client.post(
        "/api/send-booking/",
        {"to": "guest@example.com", "booking": SUMMARY},
        format="json",
    )

    assert response.status_code == 500
    assert response.json() == {"detail": "Daily sending quota exceeded"}


@pytest.mark.django_db
def test_send_booking_endpoint_requires_staff(api_client):
    response = api_client.post(
        "/api/send-booking/",
        {"to": "guest@example.com", "booking": SUMMARY},
        format="json",
    )

    assert response.status_code == 401


def test_send_stored_booking_to_its_contact(staff_client, booking):
    response = staff_client.post(f"/api/bookings/{booking.pk}/send-email/", {}, format="json")

    assert response.status_code == 200
    assert response.json() == {"ok": True, "to": "somchai@example.co.th"}
    body = mail.outbox[0].body
    assert "Name: Somchai" in body
    assert "Total: ฿12,200" in body
    assert "Tour type: Islands & Sea" in body
    assert "Location: cove" in body


def test_send_stored_booking_reports_provider_error(staff_client, booking, monkeypatch):
    monkeypatch.setattr(emails, "send_mail", lambda *args, **kwargs: 0)

    response = staff_client.post(f"/api/bookings/{booking.pk}/send-email/", {}, format="json")

    assert response.status_code == 500
    assert response.json() == {"detail": "Email not accepted by provider."}
