from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = ("contact_name", "contact_email", "date", "time", "duration", "party_size", "location_id", "created_at")
    list_filter = ("duration", "tour_type", "locale")
    search_fields = ("contact_name", "contact_email")
    date_hierarchy = "date"
    readonly_fields = ("price", "created_at")
