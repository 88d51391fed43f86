from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from catalog.pricing import FULL_DAY, HALF_DAY

from .validation import PARTY_SIZE_MAX, PARTY_SIZE_MIN


class Booking(models.Model):
    """
    Tour request submitted from the public booking form.

    ``tour_type`` and ``location_id`` hold catalog ids without foreign keys, so
    bookings survive catalog deletions. ``price`` is the breakdown computed at
    submission time and is never re-derived.
    """

    DURATIONS = [
        (FULL_DAY, "Full day"),
        (HALF_DAY, "Half day"),
    ]

    LOCALE_TH = "th"
    LOCALE_EN = "en"
    LOCALES = [
        (LOCALE_TH, "Thai"),
        (LOCALE_EN, "English"),
    ]

    date = models.DateField()
    time = models.TimeField()
    party_size = models.PositiveIntegerField(
        default=2,
        validators=[MinValueValidator(PARTY_SIZE_MIN), MaxValueValidator(PARTY_SIZE_MAX)],
    )
    duration = models.CharField(max_length=8, choices=DURATIONS, default=FULL_DAY)
    tour_type = models.CharField(max_length=64)
    location_id = models.CharField(max_length=64)
    addons = models.JSONField(default=dict, blank=True)
    price = models.JSONField(default=dict, blank=True)
    contact_name = models.CharField(max_length=200)
    contact_email = models.EmailField()
    notes = models.TextField(blank=True)
    locale = models.CharField(max_length=2, choices=LOCALES, default=LOCALE_EN)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.contact_name} on {self.date} ({self.party_size})"

    @property
    def price_total(self) -> int:
        return int((self.price or {}).get("total") or 0)
