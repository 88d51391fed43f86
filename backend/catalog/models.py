from uuid import uuid4

from django.db import models


def generate_document_id() -> str:
    return uuid4().hex


class TourType(models.Model):
    """Bookable tour category; referenced by id from locations and bookings without a FK."""

    id = models.CharField(primary_key=True, max_length=64, default=generate_document_id)
    label_th = models.CharField(max_length=200, blank=True)
    label_en = models.CharField(max_length=200, blank=True)
    description_th = models.TextField(blank=True)
    description_en = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["label_en", "id"]

    def __str__(self):
        return self.label_en or self.label_th or self.id

    def as_record(self) -> dict:
        return {
            "id": self.id,
            "label_th": self.label_th,
            "label_en": self.label_en,
            "description_th": self.description_th,
            "description_en": self.description_en,
        }


class Location(models.Model):
    """
    Tour destination stored exactly as entered.

    ``tour_type_ids``, ``available_durations`` and ``price_per_person`` may be
    empty or partial; read paths pass records through ``normalize_location``.
    """

    id = models.CharField(primary_key=True, max_length=64, default=generate_document_id)
    name_th = models.CharField(max_length=200, blank=True)
    name_en = models.CharField(max_length=200, blank=True)
    area_th = models.CharField(max_length=200, blank=True)
    area_en = models.CharField(max_length=200, blank=True)
    description_th = models.TextField(blank=True)
    description_en = models.TextField(blank=True)
    image_path = models.CharField(max_length=500, blank=True)
    highlights = models.JSONField(default=list, blank=True)
    tour_type_ids = models.JSONField(default=list, blank=True)
    available_durations = models.JSONField(default=list, blank=True)
    price_per_person = models.JSONField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name_en", "id"]

    def __str__(self):
        return self.name_en or self.name_th or self.id

    def as_record(self) -> dict:
        return {
            "id": self.id,
            "name_th": self.name_th,
            "name_en": self.name_en,
            "area_th": self.area_th,
            "area_en": self.area_en,
            "description_th": self.description_th,
            "description_en": self.description_en,
            "image_path": self.image_path,
            "highlights": self.highlights,
            "tour_type_ids": self.tour_type_ids,
            "available_durations": self.available_durations,
            "price_per_person": self.price_per_person,
        }
