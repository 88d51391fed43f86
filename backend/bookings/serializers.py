from rest_framework import serializers
from rest_framework.utils import html

from catalog.pricing import DURATIONS, FULL_DAY, Addons, format_thb

from .models import Booking
from .services.quotes import build_quote
from .validation import clamp_party_size, is_valid_email, validate_booking


class AddonsSerializer(serializers.Serializer):
    guide = serializers.BooleanField(default=False)
    meals = serializers.BooleanField(default=False)
    pickup = serializers.BooleanField(default=False)


class QuoteRequestSerializer(serializers.Serializer):
    """Selections for a live quote. Out-of-range party sizes are clamped, not rejected."""

    duration = serializers.ChoiceField(choices=DURATIONS, default=FULL_DAY)
    location_id = serializers.CharField(allow_blank=True, default="")
    party_size = serializers.IntegerField(default=1)
    addons = AddonsSerializer(default=dict)

    def validate_party_size(self, value):
        return clamp_party_size(value)

    def get_quote(self):
        data = self.validated_data
        return build_quote(
            self.context["catalog"],
            duration=data["duration"],
            location_id=data["location_id"],
            party_size=data["party_size"],
            addons=data["addons"],
        )


class BookingCreateSerializer(serializers.Serializer):
    """
    Public booking submission.

    Every field is optional at the field level so missing values surface the
    booking-form messages from ``bookings.validation``. Pass the loaded catalog
    as ``context["catalog"]``. The price is always recomputed here; any price
    sent by the client is ignored.
    """

    # Empty form inputs arrive as "" and count as missing.
    BLANK_AS_MISSING = ("date", "time", "party_size")
    TEXT_FIELDS = ("tour_type", "location_id", "contact_name", "contact_email", "notes")

    date = serializers.DateField(allow_null=True, default=None)
    time = serializers.TimeField(allow_null=True, default=None)
    party_size = serializers.IntegerField(allow_null=True, default=None)
    duration = serializers.ChoiceField(choices=DURATIONS, default=FULL_DAY)
    tour_type = serializers.CharField(allow_blank=True, allow_null=True, default="")
    location_id = serializers.CharField(allow_blank=True, allow_null=True, default="")
    addons = AddonsSerializer(default=dict)
    contact_name = serializers.CharField(allow_blank=True, allow_null=True, default="")
    contact_email = serializers.CharField(allow_blank=True, allow_null=True, default="")
    notes = serializers.CharField(allow_blank=True, allow_null=True, default="")
    locale = serializers.ChoiceField(choices=Booking.LOCALES, default=Booking.LOCALE_EN)

    def to_internal_value(self, data):
        if isinstance(data, dict) and not html.is_html_input(data):
            data = dict(data)
            for key in self.BLANK_AS_MISSING:
                value = data.get(key)
                if isinstance(value, str) and not value.strip():
                    data[key] = None
        return super().to_internal_value(data)

    def validate(self, attrs):
        catalog = self.context["catalog"]
        error = validate_booking(attrs, catalog.locations)
        if error is not None:
            raise serializers.ValidationError({error.field: error.message})
        for key in self.TEXT_FIELDS:
            attrs[key] = attrs.get(key) or ""

        self.quote = build_quote(
            catalog,
            duration=attrs["duration"],
            location_id=attrs["location_id"],
            party_size=attrs["party_size"],
            addons=attrs["addons"],
        )
        attrs["addons"] = Addons.from_mapping(attrs["addons"]).as_dict()
        attrs["price"] = self.quote.price_snapshot()
        return attrs

    def create(self, validated_data):
        return Booking.objects.create(**validated_data)


class BookingSerializer(serializers.ModelSerializer):
    """Stored booking with catalog labels; dangling ids fall back to the raw id."""

    tour_type_label = serializers.SerializerMethodField()
    location_name = serializers.SerializerMethodField()
    price_total = serializers.IntegerField(read_only=True)
    price_total_display = serializers.SerializerMethodField()

    class Meta:
        model = Booking
        fields = [
            "id",
            "date",
            "time",
            "party_size",
            "duration",
            "tour_type",
            "tour_type_label",
            "location_id",
            "location_name",
            "addons",
            "price",
            "price_total",
            "price_total_display",
            "contact_name",
            "contact_email",
            "notes",
            "locale",
            "created_at",
        ]

    def _catalog(self):
        return self.context.get("catalog")

    def get_tour_type_label(self, obj):
        catalog = self._catalog()
        tour_type = catalog.get_tour_type(obj.tour_type) if catalog else None
        return (tour_type or {}).get("label_en") or obj.tour_type

    def get_location_name(self, obj):
        catalog = self._catalog()
        location = catalog.get_location(obj.location_id) if catalog else None
        return (location or {}).get("name_en") or obj.location_id

    def get_price_total_display(self, obj):
        return format_thb(obj.price_total)


class BookingEmailRequestSerializer(serializers.Serializer):
    """Payload for e-mailing an arbitrary booking summary."""

    to = serializers.CharField(allow_blank=True, default="")
    booking = serializers.DictField(allow_null=True, default=None)
    locale = serializers.ChoiceField(choices=Booking.LOCALES, default=Booking.LOCALE_EN)

    def validate_to(self, value):
        if not is_valid_email(value):
            raise serializers.ValidationError("Invalid recipient email")
        return value

    def validate_booking(self, value):
        if value is None:
            raise serializers.ValidationError("Missing booking data")
        return value


class BookingSendEmailSerializer(serializers.Serializer):
    """Optional overrides when e-mailing a stored booking."""

    to = serializers.CharField(required=False)
    locale = serializers.ChoiceField(choices=Booking.LOCALES, required=False)

    def validate_to(self, value):
        if not is_valid_email(value):
            raise serializers.ValidationError("Invalid recipient email")
        return value
