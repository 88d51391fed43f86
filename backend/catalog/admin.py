from django.contrib import admin

from .models import Location, TourType


@admin.register(TourType)
class TourTypeAdmin(admin.ModelAdmin):
    list_display = ("id", "label_en", "label_th", "updated_at")
    search_fields = ("id", "label_en", "label_th")
    ordering = ("label_en",)


@admin.register(Location)
class LocationAdmin(admin.ModelAdmin):
    list_display = ("id", "name_en", "area_en", "available_durations", "price_per_person", "updated_at")
    search_fields = ("id", "name_en", "name_th", "area_en")
    ordering = ("name_en",)
